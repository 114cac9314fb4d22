import numpy as np
import pytest

from nnplayground.core import activations
from nnplayground.core.errors import InvalidArgument


def test_relu_and_derivative():
    z = np.array([-2.0, 0.0, 3.0])
    np.testing.assert_array_equal(activations.relu(z), [0.0, 0.0, 3.0])
    np.testing.assert_array_equal(activations.relu_deriv(z), [0.0, 0.0, 1.0])


def test_tanh_derivative_uses_preactivation():
    z = np.array([-1.5, 0.0, 0.7])
    np.testing.assert_allclose(activations.tanh_deriv(z), 1.0 - np.tanh(z) ** 2)


def test_sigmoid_is_clipped():
    z = np.array([-1000.0, 0.0, 1000.0])
    s = activations.sigmoid(z)
    assert np.all(np.isfinite(s))
    assert s[0] > 0.0
    assert s[1] == 0.5
    assert s[2] == 1.0
    assert s[0] == activations.sigmoid(np.array([-500.0]))[0]


@pytest.mark.parametrize("name", ["relu", "tanh", "sigmoid"])
def test_derivatives_match_finite_differences(name):
    act = activations.get_activation(name)
    z = np.array([-2.1, -0.4, 0.3, 1.7])
    eps = 1e-6
    numeric = (act(z + eps) - act(z - eps)) / (2 * eps)
    np.testing.assert_allclose(act.deriv(z), numeric, rtol=1e-5, atol=1e-9)


def test_registry():
    assert list(activations.available_activations()) == ["relu", "sigmoid", "tanh"]
    assert activations.get_activation("tanh").name == "tanh"
    with pytest.raises(InvalidArgument):
        activations.get_activation("gelu")
