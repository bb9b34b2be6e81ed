"""A single affine layer plus its activation."""

from __future__ import annotations

from dataclasses import dataclass

from .activations import activate
from .errors import Shape, ShapeError, ShapeMismatch
from .matrix import Matrix
from .types import Activation


@dataclass
class Layer:
    """Weights ``[out x in]``, bias ``[out x 1]`` and an activation kind."""

    weights: Matrix
    biases: Matrix
    activation: Activation

    def __post_init__(self) -> None:
        if self.biases.shape != (self.weights.rows, 1):
            raise ShapeError(
                f"Layer bias must be ({self.weights.rows}x1), got "
                f"({self.biases.rows}x{self.biases.cols})"
            )

    @property
    def fan_in(self) -> int:
        return self.weights.cols

    @property
    def fan_out(self) -> int:
        return self.weights.rows

    @property
    def shape(self) -> Shape:
        return self.weights.shape

    def pre_activation(self, inputs: Matrix) -> Matrix:
        """Return ``z = W @ inputs + b`` for a column vector input."""

        if inputs.shape != (self.fan_in, 1):
            raise ShapeMismatch("Layer forward", self.weights.shape, inputs.shape, "*")
        return self.weights @ inputs + self.biases

    def forward(self, inputs: Matrix) -> Matrix:
        return activate(self.activation, self.pre_activation(inputs))

    def describe(self) -> str:
        return f"{self.fan_out}x{self.fan_in}({self.activation.label})"


__all__ = ["Layer"]
