"""Parsing of the pipe-delimited layer configuration format.

Each line containing ``|`` declares one layer.  The number of non-empty
tokens, the activation name included, is the neuron count, and the first
token names the activation.  This declares 5 inputs, 4 sigmoid neurons and
2 softmax outputs::

    |input|*|*|*|*|
    |sigmoid|*|*|*|
    |softmax|*|

Lines without ``|`` are treated as comments.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from .errors import ConfigError
from .types import Activation, LayerSpec

SEPARATOR = "|"
INPUT_TOKEN = "input"

_ACTIVATIONS = {kind.value: kind for kind in Activation}


def parse_activation(token: str) -> Activation | None:
    if token == INPUT_TOKEN:
        return None
    try:
        return _ACTIVATIONS[token]
    except KeyError:
        raise ConfigError(f'Unknown activation: "{token}"') from None


def parse_line(line: str) -> LayerSpec:
    tokens = [token for token in line.split(SEPARATOR) if token]
    if not tokens:
        raise ConfigError("Empty layer line in config")
    return LayerSpec(neurons=len(tokens), activation=parse_activation(tokens[0]))


def parse_config(text: str) -> List[LayerSpec]:
    """Parse configuration text into an ordered list of layer specs.

    The first spec only declares the input size; its activation token is
    accepted but carries no meaning.  Every later spec must name a real
    activation.
    """

    specs = [parse_line(line) for line in text.splitlines() if SEPARATOR in line]
    if len(specs) < 2:
        raise ConfigError(
            f"Config has insufficient layers: needs at least 2 (input + one more), "
            f"got {len(specs)}"
        )
    for idx, spec in enumerate(specs[1:], start=1):
        if spec.activation is None:
            raise ConfigError(
                f'Unknown activation: "{INPUT_TOKEN}" is only valid on the first layer '
                f"(layer {idx})"
            )
    return specs


def read_config(path: str | Path) -> str:
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot open config file: {path}") from exc


__all__ = [
    "INPUT_TOKEN",
    "SEPARATOR",
    "parse_activation",
    "parse_config",
    "parse_line",
    "read_config",
]
