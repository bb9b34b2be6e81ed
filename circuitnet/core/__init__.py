"""Core numerical primitives for circuitnet."""

from . import activations, config, errors, types
from .errors import (
    CircuitNetError,
    ConfigError,
    EmptyNetworkError,
    ShapeError,
    ShapeMismatch,
)
from .layer import Layer
from .matrix import Matrix
from .network import Network
from .types import Activation, LayerSpec, TrainSnapshot

__all__ = [
    "Activation",
    "CircuitNetError",
    "ConfigError",
    "EmptyNetworkError",
    "Layer",
    "LayerSpec",
    "Matrix",
    "Network",
    "ShapeError",
    "ShapeMismatch",
    "TrainSnapshot",
    "activations",
    "config",
    "errors",
    "types",
]
