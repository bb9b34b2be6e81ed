"""Activation utilities for circuitnet."""

from __future__ import annotations

import numpy as np

from .matrix import Array, Matrix
from .types import Activation


def sigmoid(x: Array) -> Array:
    """Return the logistic sigmoid ``1 / (1 + e^-x)``."""

    # tanh form avoids exp overflow for large negative inputs
    return 0.5 * (1.0 + np.tanh(0.5 * np.asarray(x, dtype=np.float64)))


def relu(x: Array) -> Array:
    """Return the ReLU activation."""

    return np.maximum(x, 0.0)


def softmax(z: Array) -> Array:
    """Numerically stable softmax over a column vector."""

    z = np.asarray(z, dtype=np.float64)
    shifted = z - z.max(axis=0, keepdims=True)
    e = np.exp(shifted)
    return e / e.sum(axis=0, keepdims=True)


def sigmoid_prime(a: Array) -> Array:
    """Sigmoid derivative expressed in the post-activation value ``a``."""

    return a * (1.0 - a)


def relu_prime(z: Array) -> Array:
    """ReLU derivative expressed in the pre-activation value ``z``."""

    return (np.asarray(z) > 0.0).astype(np.float64)


def activate(kind: Activation, z: Matrix) -> Matrix:
    """Apply ``kind`` to the pre-activation column ``z``."""

    if kind is Activation.SOFTMAX:
        return Matrix.from_array(softmax(z.to_numpy()))
    fn = sigmoid if kind is Activation.SIGMOID else relu
    return z.apply(fn)


def backprop_delta(kind: Activation, error: Matrix, z: Matrix, a: Matrix) -> Matrix:
    """Turn the propagated ``error`` into a layer delta for ``kind``."""

    if kind is Activation.SIGMOID:
        return error.hadamard(a.apply(sigmoid_prime))
    if kind is Activation.RELU:
        return error.hadamard(z.apply(relu_prime))
    # softmax Jacobian-vector product: a * (e - <a, e>)
    dot = (a.transpose() @ error)[0, 0]
    return a.hadamard(error.apply(lambda v: v - dot))


__all__ = [
    "activate",
    "backprop_delta",
    "relu",
    "relu_prime",
    "sigmoid",
    "sigmoid_prime",
    "softmax",
]
