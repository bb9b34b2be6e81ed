import pytest

from circuitnet.core.config import parse_config, parse_line, read_config
from circuitnet.core.errors import ConfigError
from circuitnet.core.types import Activation, LayerSpec

EXAMPLE = """\
|input|*|*|*|*|
|sigmoid|*|*|*|
|softmax|*|
"""


def test_parse_example_config():
    specs = parse_config(EXAMPLE)
    assert specs == [
        LayerSpec(5, None),
        LayerSpec(4, Activation.SIGMOID),
        LayerSpec(2, Activation.SOFTMAX),
    ]


def test_activation_token_counts_as_a_neuron():
    assert parse_line("|softmax|").neurons == 1
    assert parse_line("|softmax|*|*|").neurons == 3
    assert [s.neurons for s in parse_config("|input|*|*|\n|sigmoid|\n|softmax|*|*|")] == [3, 1, 3]


def test_lines_without_separator_are_skipped():
    text = "# a comment\n\n|input|*|\nhidden layer next\n|ReLU|*|*|*|\n"
    specs = parse_config(text)
    assert [s.neurons for s in specs] == [2, 4]
    assert specs[1].activation is Activation.RELU


def test_empty_tokens_do_not_count():
    assert parse_line("||sigmoid||*|||*").neurons == 3


def test_first_layer_token_has_no_effect():
    specs = parse_config("|sigmoid|*|*|\n|softmax|*|*|\n")
    assert specs[0].neurons == 3


def test_empty_layer_line_is_rejected():
    with pytest.raises(ConfigError, match="Empty layer line"):
        parse_config("|input|*|\n|||\n|softmax|*|\n")


@pytest.mark.parametrize("token", ["tanh", "Sigmoid", "relu", "SOFTMAX"])
def test_unknown_activation_is_rejected(token):
    with pytest.raises(ConfigError, match="Unknown activation"):
        parse_config(f"|input|*|\n|{token}|*|\n")


def test_input_token_only_valid_first():
    with pytest.raises(ConfigError, match="Unknown activation"):
        parse_config("|input|*|\n|input|*|\n")


@pytest.mark.parametrize("text", ["", "no layers here\n", "|input|*|*|\n"])
def test_insufficient_layers(text):
    with pytest.raises(ConfigError, match="insufficient layers"):
        parse_config(text)


def test_read_config_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Cannot open config file"):
        read_config(tmp_path / "missing.cfg")
    path = tmp_path / "net.cfg"
    path.write_text(EXAMPLE)
    assert read_config(path) == EXAMPLE
