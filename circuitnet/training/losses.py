"""Loss terms used by the single-example training step."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from ..core.errors import ShapeMismatch
from ..core.matrix import Matrix

LOG_EPS = 1e-7


def cross_entropy(prediction: Matrix, target: Matrix) -> float:
    """Categorical cross-entropy ``-sum(y * log(max(a, eps)))``."""

    if prediction.shape != target.shape:
        raise ShapeMismatch("Cross-entropy", prediction.shape, target.shape)
    a = np.maximum(prediction.to_numpy(), LOG_EPS)
    return float(-np.sum(target.to_numpy() * np.log(a)))


def l1_penalty(weights: Matrix, coefficient: float) -> Tuple[float, Matrix]:
    """Return ``coefficient * sum|W|`` and its subgradient ``coefficient * sign(W)``."""

    w = weights.to_numpy()
    loss = float(coefficient * np.abs(w).sum())
    return loss, Matrix.from_array(coefficient * np.sign(w))


__all__ = ["LOG_EPS", "cross_entropy", "l1_penalty"]
