"""Pure in-memory synthetic samples for driving a network step by step."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from ..core.errors import ConfigError
from ..core.matrix import Array, Matrix
from ..core.types import Sample


def one_hot(index: int, num_classes: int) -> Matrix:
    target = Matrix(num_classes, 1)
    target[index, 0] = 1.0
    return target


@dataclass
class SyntheticClassification:
    """Deterministic per-step classification samples.

    Every class owns a fixed prototype input.  Step ``k`` yields the
    prototype of class ``k % n_classes`` plus Gaussian noise seeded by
    ``(seed, k)``, so repeated calls with the same step are identical.
    """

    n_inputs: int
    n_classes: int
    seed: int = 0
    noise: float = 0.05
    prototypes: Array = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.n_inputs < 1 or self.n_classes < 1:
            raise ConfigError(
                f"Synthetic samples need at least one input and one class, "
                f"got n_inputs={self.n_inputs}, n_classes={self.n_classes}"
            )
        rng = np.random.default_rng(self.seed)
        self.prototypes = rng.uniform(-1.0, 1.0, size=(self.n_classes, self.n_inputs))

    def label(self, step: int) -> int:
        return int(step) % self.n_classes

    def __call__(self, step: int) -> Sample:
        label = self.label(step)
        rng = np.random.default_rng([self.seed, int(step)])
        x = self.prototypes[label] + self.noise * rng.standard_normal(self.n_inputs)
        return Sample(inputs=Matrix.column(x), target=one_hot(label, self.n_classes))


__all__ = ["SyntheticClassification", "one_hot"]
