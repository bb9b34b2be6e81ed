import math

import numpy as np
import pytest

from circuitnet.core.errors import ConfigError, EmptyNetworkError, ShapeMismatch
from circuitnet.core.matrix import Matrix
from circuitnet.core.network import Network, xavier_limit
from circuitnet.core.types import Activation

SMALL = "|input|*|\n|sigmoid|\n|softmax|*|"
EXAMPLE = "|input|*|*|*|*|\n|sigmoid|*|*|*|\n|softmax|*|\n"


def test_end_to_end_forward_sums_to_one():
    network = Network.from_config(SMALL)
    assert network.neuron_counts() == [2, 1, 2]
    out = network.forward(Matrix.column([1.0, 1.0]))
    assert out.shape == (2, 1)
    assert abs(out.sum() - 1.0) < 1e-5


def test_build_shapes_and_initialisation():
    network = Network.from_config(EXAMPLE, rng=np.random.default_rng(0))
    layers = network.layers
    assert [layer.shape for layer in layers] == [(4, 5), (2, 4)]
    assert [layer.activation for layer in layers] == [Activation.SIGMOID, Activation.SOFTMAX]
    assert network.neuron_counts() == [5, 4, 2]
    assert (network.input_size, network.output_size) == (5, 2)
    for layer in layers:
        limit = xavier_limit(layer.fan_in, layer.fan_out)
        assert np.all(np.abs(layer.weights.to_numpy()) <= limit)
        assert layer.biases == Matrix(layer.fan_out, 1)
    assert limit == pytest.approx(math.sqrt(6.0 / 6.0))


def test_seeded_builds_are_reproducible():
    a = Network.from_config(EXAMPLE, rng=np.random.default_rng(7))
    b = Network.from_config(EXAMPLE, rng=np.random.default_rng(7))
    assert all(la.weights == lb.weights for la, lb in zip(a.layers, b.layers))


def test_describe_lists_layers():
    network = Network.from_config(EXAMPLE)
    assert network.describe() == "4x5(Sigmoid)\n2x4(Softmax)"
    assert str(network) == network.describe()


def test_unbuilt_network_fails():
    network = Network()
    assert not network.is_built
    assert network.layers == ()
    with pytest.raises(EmptyNetworkError):
        network.forward(Matrix.column([1.0]))
    with pytest.raises(EmptyNetworkError):
        network.forward_all(Matrix.column([1.0]))
    with pytest.raises(EmptyNetworkError):
        network.train_step(Matrix.column([1.0]), Matrix.column([1.0]), 0.1)


def test_forward_rejects_wrong_input_shape():
    network = Network.from_config(SMALL)
    with pytest.raises(ShapeMismatch, match=r"expected \(2x1\), got \(3x1\)"):
        network.forward(Matrix.column([1.0, 2.0, 3.0]))
    with pytest.raises(ShapeMismatch):
        network.forward(Matrix(1, 2))


def test_forward_all_includes_input_and_matches_forward():
    network = Network.from_config(EXAMPLE, rng=np.random.default_rng(1))
    x = Matrix.column([0.1, -0.2, 0.3, 0.0, 1.0])
    outputs = network.forward_all(x)
    assert len(outputs) == 3
    assert outputs[0] is x
    assert [o.shape for o in outputs] == [(5, 1), (4, 1), (2, 1)]
    assert outputs[-1] == network.forward(x)


def test_rebuild_replaces_layers_and_failed_rebuild_keeps_them():
    network = Network.from_config(SMALL)
    network.build_from_config(EXAMPLE)
    assert network.neuron_counts() == [5, 4, 2]
    with pytest.raises(ConfigError):
        network.build_from_config("|input|*|\n|tanh|*|\n")
    with pytest.raises(ConfigError):
        network.build_from_config("|input|*|\n")
    assert network.neuron_counts() == [5, 4, 2]


def test_build_from_file(tmp_path):
    path = tmp_path / "net.cfg"
    path.write_text(EXAMPLE)
    assert Network.from_file(path).neuron_counts() == [5, 4, 2]
    with pytest.raises(ConfigError, match="Cannot open config file"):
        Network.from_file(tmp_path / "missing.cfg")


def test_relu_output_layer_is_flagged():
    with pytest.warns(RuntimeWarning, match="approximation"):
        Network.from_config("|input|*|*|\n|ReLU|*|*|\n")
