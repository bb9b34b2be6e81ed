"""circuitnet public API."""

from .core import activations, types  # noqa: F401
from .core.errors import (
    CircuitNetError,
    ConfigError,
    EmptyNetworkError,
    ShapeError,
    ShapeMismatch,
)
from .core.layer import Layer
from .core.matrix import Matrix
from .core.network import Network
from .core.types import Activation, TrainSnapshot
from .data.synthetic import SyntheticClassification
from .training.settings import TrainSettings
from .training.trainer import Trainer

__all__ = [
    "Activation",
    "CircuitNetError",
    "ConfigError",
    "EmptyNetworkError",
    "Layer",
    "Matrix",
    "Network",
    "ShapeError",
    "ShapeMismatch",
    "SyntheticClassification",
    "TrainSettings",
    "TrainSnapshot",
    "Trainer",
    "activations",
    "types",
]
