"""Activation functions and their derivatives.

Every derivative is evaluated on the raw pre-activation ``z``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable

import numpy as np

from .errors import InvalidArgument
from .types import Array

SIGMOID_CLIP = 500.0

ActivationFn = Callable[[Array], Array]


def relu(z: Array) -> Array:
    """Return the ReLU activation."""

    return np.maximum(z, 0.0)


def relu_deriv(z: Array) -> Array:
    return (z > 0).astype(np.float64)


def tanh(z: Array) -> Array:
    return np.tanh(z)


def tanh_deriv(z: Array) -> Array:
    t = np.tanh(z)
    return 1.0 - t * t


def sigmoid(z: Array) -> Array:
    """Logistic sigmoid with ``z`` clipped to ``[-500, 500]`` before ``exp``."""

    return 1.0 / (1.0 + np.exp(-np.clip(z, -SIGMOID_CLIP, SIGMOID_CLIP)))


def sigmoid_deriv(z: Array) -> Array:
    s = sigmoid(z)
    return s * (1.0 - s)


@dataclass(frozen=True)
class Activation:
    """Pairs an activation with its derivative."""

    name: str
    fn: ActivationFn
    deriv: ActivationFn

    def __call__(self, z: Array) -> Array:
        return self.fn(z)


_REGISTRY: Dict[str, Activation] = {
    "relu": Activation("relu", relu, relu_deriv),
    "tanh": Activation("tanh", tanh, tanh_deriv),
    "sigmoid": Activation("sigmoid", sigmoid, sigmoid_deriv),
}


def get_activation(name: str) -> Activation:
    try:
        return _REGISTRY[name]
    except KeyError:
        available = ", ".join(sorted(_REGISTRY))
        raise InvalidArgument(
            f"Unknown activation {name!r}. Available activations: {available}"
        ) from None


def available_activations() -> Iterable[str]:
    return sorted(_REGISTRY)


__all__ = [
    "Activation",
    "available_activations",
    "get_activation",
    "relu",
    "relu_deriv",
    "sigmoid",
    "sigmoid_deriv",
    "tanh",
    "tanh_deriv",
]
