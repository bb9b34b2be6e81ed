"""Configurable feed-forward network with a hand-derived training step."""

from __future__ import annotations

import logging
import math
import warnings
from pathlib import Path
from typing import List, Sequence, Tuple

import numpy as np

from ..training.losses import cross_entropy, l1_penalty
from .activations import activate, backprop_delta
from .config import parse_config, read_config
from .errors import EmptyNetworkError, ShapeMismatch
from .layer import Layer
from .matrix import Matrix
from .types import Activation, LayerSpec, TrainSnapshot

logger = logging.getLogger(__name__)


def xavier_limit(fan_in: int, fan_out: int) -> float:
    return math.sqrt(6.0 / float(fan_in + fan_out))


def build_layers(specs: Sequence[LayerSpec], rng: np.random.Generator) -> List[Layer]:
    """Allocate one layer per consecutive pair of specs.

    Weights are Xavier/Glorot uniform, biases start at zero.
    """

    layers: List[Layer] = []
    for prev, spec in zip(specs[:-1], specs[1:]):
        limit = xavier_limit(prev.neurons, spec.neurons)
        W = rng.uniform(-limit, limit, size=(spec.neurons, prev.neurons))
        layers.append(
            Layer(
                weights=Matrix.from_array(W),
                biases=Matrix(spec.neurons, 1),
                activation=spec.activation,
            )
        )
    return layers


class Network:
    """Ordered stack of :class:`Layer` objects.

    A fresh network is unbuilt.  ``build_from_config`` freezes the topology;
    afterwards only weight and bias values change, through ``train_step``.
    Instances are not thread-safe: callers must not run ``forward`` and
    ``train_step`` concurrently.
    """

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self._rng = rng if rng is not None else np.random.default_rng()
        self._layers: List[Layer] = []

    @classmethod
    def from_config(cls, text: str, rng: np.random.Generator | None = None) -> "Network":
        network = cls(rng=rng)
        network.build_from_config(text)
        return network

    @classmethod
    def from_file(cls, path: str | Path, rng: np.random.Generator | None = None) -> "Network":
        network = cls(rng=rng)
        network.build_from_file(path)
        return network

    # ------------------------------------------------------------------
    # Construction

    def build_from_config(self, text: str) -> None:
        specs = parse_config(text)
        layers = build_layers(specs, self._rng)
        if specs[-1].activation is Activation.RELU:
            warnings.warn(
                "ReLU output layer: the a - target output delta is an approximation "
                "for this activation",
                RuntimeWarning,
                stacklevel=2,
            )
        self._layers = layers
        logger.debug("Built network %s", " -> ".join(layer.describe() for layer in layers))

    def build_from_file(self, path: str | Path) -> None:
        self.build_from_config(read_config(path))

    # ------------------------------------------------------------------
    # Read access for display

    @property
    def layers(self) -> Tuple[Layer, ...]:
        return tuple(self._layers)

    @property
    def is_built(self) -> bool:
        return bool(self._layers)

    @property
    def input_size(self) -> int:
        return self._require_layers()[0].fan_in

    @property
    def output_size(self) -> int:
        return self._require_layers()[-1].fan_out

    def neuron_counts(self) -> List[int]:
        """Neurons per display column, input column first."""

        layers = self._require_layers()
        return [layers[0].fan_in] + [layer.fan_out for layer in layers]

    def describe(self) -> str:
        return "\n".join(layer.describe() for layer in self._layers)

    __str__ = describe

    # ------------------------------------------------------------------
    # Evaluation

    def forward(self, inputs: Matrix) -> Matrix:
        return self.forward_all(inputs)[-1]

    def forward_all(self, inputs: Matrix) -> List[Matrix]:
        """Return ``[inputs, a_1, ..., a_L]``."""

        self._check_input(inputs)
        activations = [inputs]
        for layer in self._layers:
            activations.append(layer.forward(activations[-1]))
        return activations

    def train_step(
        self,
        inputs: Matrix,
        target: Matrix,
        learning_rate: float,
        l1: float = 0.0,
    ) -> TrainSnapshot:
        """Run one forward/backward pass and update weights in place."""

        self._check_input(inputs)
        layers = self._layers
        if target.shape != (layers[-1].fan_out, 1):
            raise ShapeMismatch(
                "Train target", (layers[-1].fan_out, 1), target.shape, expected=True
            )

        # forward, keeping pre- and post-activation values
        Z: List[Matrix] = []
        A: List[Matrix] = [inputs]
        for layer in layers:
            z = layer.pre_activation(A[-1])
            Z.append(z)
            A.append(activate(layer.activation, z))

        loss = cross_entropy(A[-1], target)

        last = len(layers) - 1
        deltas: List[Matrix] = [Matrix(0, 0)] * len(layers)
        # softmax/sigmoid + cross-entropy: the activation derivative cancels
        deltas[last] = A[-1] - target
        for idx in reversed(range(last)):
            error = layers[idx + 1].weights.transpose() @ deltas[idx + 1]
            deltas[idx] = backprop_delta(layers[idx].activation, error, Z[idx], A[idx + 1])

        grads = [delta @ A[idx].transpose() for idx, delta in enumerate(deltas)]

        penalty_total = 0.0
        if l1 > 0.0:
            for idx, layer in enumerate(layers):
                penalty, sign = l1_penalty(layer.weights, l1)
                penalty_total += penalty
                grads[idx] = grads[idx] + sign

        loss += penalty_total

        for layer, grad, delta in zip(layers, grads, deltas):
            layer.weights = layer.weights - grad * learning_rate
            layer.biases = layer.biases - delta * learning_rate

        logger.debug("train_step loss=%.6f lr=%g l1=%g", loss, learning_rate, l1)
        return TrainSnapshot(
            activations=A,
            deltas=deltas,
            weight_gradients=grads,
            loss=float(loss),
            l1_penalty=float(penalty_total),
        )

    # ------------------------------------------------------------------

    def _require_layers(self) -> List[Layer]:
        if not self._layers:
            raise EmptyNetworkError("Network has no layers; build it from a config first")
        return self._layers

    def _check_input(self, inputs: Matrix) -> None:
        layers = self._require_layers()
        expected = (layers[0].fan_in, 1)
        if inputs.shape != expected:
            raise ShapeMismatch("Network input", expected, inputs.shape, expected=True)


__all__ = ["Network", "build_layers", "xavier_limit"]
