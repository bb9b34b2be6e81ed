"""Core typing contracts for circuitnet."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional

from .matrix import Array, Matrix


class Activation(enum.Enum):
    """Closed set of activation kinds a layer can carry.

    The enum values are the exact configuration tokens.
    """

    SIGMOID = "sigmoid"
    RELU = "ReLU"
    SOFTMAX = "softmax"

    @property
    def label(self) -> str:
        return {"sigmoid": "Sigmoid", "ReLU": "ReLU", "softmax": "Softmax"}[self.value]


@dataclass(frozen=True)
class LayerSpec:
    """One parsed configuration line.

    ``activation`` is ``None`` for the input pseudo-layer, which only
    declares the input size.
    """

    neurons: int
    activation: Optional[Activation]


@dataclass(frozen=True)
class TrainSnapshot:
    """Everything computed by one training step, for immediate display.

    ``loss`` includes ``l1_penalty``.
    """

    activations: List[Matrix]
    deltas: List[Matrix]
    weight_gradients: List[Matrix]
    loss: float
    l1_penalty: float = 0.0


@dataclass(frozen=True)
class Sample:
    """A single training example: an input column and a one-hot target."""

    inputs: Matrix
    target: Matrix


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :meth:`circuitnet.training.trainer.Trainer.run`."""

    steps: int
    first_loss: float
    final_loss: float
    losses: List[float] = field(default_factory=list)
    metrics_path: str = ""
    manifest_path: str = ""


__all__ = [
    "Activation",
    "Array",
    "LayerSpec",
    "RunResult",
    "Sample",
    "TrainSnapshot",
]
