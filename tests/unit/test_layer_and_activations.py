import numpy as np
import pytest

from circuitnet.core.activations import relu, relu_prime, sigmoid, sigmoid_prime, softmax
from circuitnet.core.errors import ShapeError, ShapeMismatch
from circuitnet.core.layer import Layer
from circuitnet.core.matrix import Matrix
from circuitnet.core.types import Activation


def test_relu_and_sigmoid_values():
    x = np.array([-1.0, 0.0, 2.5])
    assert np.allclose(relu(x), [0.0, 0.0, 2.5])
    assert np.allclose(sigmoid(np.array([0.0])), [0.5])
    assert np.allclose(sigmoid(np.array([2.0])), 1.0 / (1.0 + np.exp(-2.0)))
    big = sigmoid(np.array([-1000.0, 1000.0]))
    assert np.all(np.isfinite(big))
    assert np.allclose(big, [0.0, 1.0])


def test_derivatives():
    a = np.array([0.25, 0.5])
    assert np.allclose(sigmoid_prime(a), [0.1875, 0.25])
    assert np.array_equal(relu_prime(np.array([-1.0, 0.0, 3.0])), [0.0, 0.0, 1.0])


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_softmax_sums_to_one_and_is_shift_invariant(seed):
    z = np.random.default_rng(seed).normal(0, 10, size=(6, 1))
    p = softmax(z)
    assert abs(p.sum() - 1.0) < 1e-5
    assert np.allclose(softmax(z + 123.0), p)
    huge = softmax(np.array([[1000.0], [1001.0]]))
    assert np.all(np.isfinite(huge))
    assert abs(huge.sum() - 1.0) < 1e-5


def _layer(activation):
    weights = Matrix.from_rows([[1.0, -1.0], [0.5, 0.5], [0.0, 2.0]])
    biases = Matrix.column([0.0, -1.0, 0.5])
    return Layer(weights=weights, biases=biases, activation=activation)


def test_layer_forward_per_activation():
    x = Matrix.column([1.0, 1.0])
    z = np.array([[0.0], [0.0], [2.5]])
    assert _layer(Activation.RELU).forward(x).allclose(Matrix.from_array(z))
    assert _layer(Activation.SIGMOID).forward(x).allclose(Matrix.from_array(sigmoid(z)))
    out = _layer(Activation.SOFTMAX).forward(x)
    assert out.shape == (3, 1)
    assert out.allclose(Matrix.from_array(softmax(z)))


def test_layer_forward_is_pure():
    layer = _layer(Activation.SIGMOID)
    x = Matrix.column([0.3, -0.7])
    assert layer.forward(x) == layer.forward(x)
    assert layer.weights[0, 0] == 1.0


def test_layer_rejects_non_column_input():
    layer = _layer(Activation.RELU)
    with pytest.raises(ShapeMismatch):
        layer.forward(Matrix(1, 2))
    with pytest.raises(ShapeMismatch):
        layer.forward(Matrix.column([1.0, 2.0, 3.0]))


def test_layer_checks_bias_shape_and_describes_itself():
    with pytest.raises(ShapeError):
        Layer(weights=Matrix(3, 2), biases=Matrix(2, 1), activation=Activation.RELU)
    layer = _layer(Activation.SOFTMAX)
    assert (layer.fan_in, layer.fan_out) == (2, 3)
    assert layer.describe() == "3x2(Softmax)"
