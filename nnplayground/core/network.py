"""Fully-connected binary classifier trained with per-sample SGD."""

from __future__ import annotations

import math
from numbers import Integral, Real
from typing import List, Sequence

import numpy as np

from .activations import Activation, get_activation, sigmoid
from .errors import DimensionMismatch, InvalidArgument, NumericOverflow
from .types import Array, Dataset, ForwardRecord, TrainResult

PROB_EPS = 1e-7


def _make_rng(rng: np.random.Generator | None, seed: int | None) -> np.random.Generator:
    if rng is not None:
        return rng
    return np.random.default_rng(seed)


def _validate_sizes(layer_sizes: Sequence[int]) -> tuple[int, ...]:
    sizes = tuple(layer_sizes)
    if len(sizes) < 2:
        raise InvalidArgument(f"Need at least two layer sizes, got {list(sizes)}")
    for size in sizes:
        if isinstance(size, bool) or not isinstance(size, Integral) or size <= 0:
            raise InvalidArgument(f"Layer sizes must be positive integers, got {list(sizes)}")
    return tuple(int(size) for size in sizes)


def _validate_lr(learning_rate: float) -> float:
    if isinstance(learning_rate, bool) or not isinstance(learning_rate, Real):
        raise InvalidArgument(f"Learning rate must be a real number, got {learning_rate!r}")
    lr = float(learning_rate)
    if not math.isfinite(lr) or lr <= 0:
        raise InvalidArgument(f"Learning rate must be positive, got {learning_rate!r}")
    return lr


def _as_matrix(inputs: Sequence[Sequence[float]] | Array) -> Array:
    try:
        return np.asarray(inputs, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        # ragged rows mean some sample has the wrong input length
        raise DimensionMismatch(f"Inputs must form a rectangular numeric array: {exc}") from None


def bce_loss(prediction: float, target: float) -> float:
    """Binary cross-entropy with the probability clamped to ``[1e-7, 1 - 1e-7]``."""

    p = min(max(prediction, PROB_EPS), 1.0 - PROB_EPS)
    return -(target * math.log(p) + (1.0 - target) * math.log(1.0 - p))


def is_correct(prediction: float, target: float) -> bool:
    return (prediction >= 0.5 and target == 1) or (prediction < 0.5 and target == 0)


class NeuralNetwork:
    """Linear stack of dense layers with a sigmoid output unit.

    The layer shape and hidden activation are fixed for the lifetime of an
    instance; build a new network to change either.  The learning rate may be
    adjusted between epochs.
    """

    def __init__(
        self,
        layer_sizes: Sequence[int],
        activation: str = "relu",
        learning_rate: float = 0.01,
        rng: np.random.Generator | None = None,
        *,
        seed: int | None = None,
    ) -> None:
        self._layer_sizes = _validate_sizes(layer_sizes)
        self._activation: Activation = get_activation(activation)
        self.learning_rate = learning_rate
        self._weights: List[Array] = []
        self._biases: List[Array] = []
        self.reset(rng, seed=seed)

    # ------------------------------------------------------------------
    # Configuration

    @property
    def layer_sizes(self) -> tuple[int, ...]:
        return self._layer_sizes

    @property
    def activation(self) -> str:
        return self._activation.name

    @property
    def learning_rate(self) -> float:
        return self._learning_rate

    @learning_rate.setter
    def learning_rate(self, value: float) -> None:
        self._learning_rate = _validate_lr(value)

    @property
    def input_size(self) -> int:
        return self._layer_sizes[0]

    def reset(self, rng: np.random.Generator | None = None, *, seed: int | None = None) -> None:
        """Draw fresh Xavier-uniform weights and zero the biases."""

        rng = _make_rng(rng, seed)
        weights: list[Array] = []
        biases: list[Array] = []
        for fan_in, fan_out in zip(self._layer_sizes[:-1], self._layer_sizes[1:]):
            scale = math.sqrt(2.0 / (fan_in + fan_out))
            weights.append(rng.uniform(-scale, scale, size=(fan_in, fan_out)))
            biases.append(np.zeros(fan_out, dtype=np.float64))
        self._weights = weights
        self._biases = biases

    def weights(self) -> List[Array]:
        """Current weight matrices, shared with the network; do not modify."""

        return list(self._weights)

    def biases(self) -> List[Array]:
        """Current bias vectors, shared with the network; do not modify."""

        return list(self._biases)

    def parameter_count(self) -> int:
        return int(sum(w.size + b.size for w, b in zip(self._weights, self._biases)))

    # ------------------------------------------------------------------
    # Forward

    def _as_point(self, point: Sequence[float] | Array) -> Array:
        x = np.asarray(point, dtype=np.float64)
        if x.ndim != 1 or x.shape[0] != self.input_size:
            raise DimensionMismatch(
                f"Expected an input of length {self.input_size}, got shape {x.shape}"
            )
        return x

    def forward(self, point: Sequence[float] | Array) -> ForwardRecord:
        """Run one sample through the network, keeping every layer's values."""

        x = self._as_point(point)
        preactivations: list[Array] = []
        activations: list[Array] = [x]
        last = len(self._weights) - 1
        for idx, (W, b) in enumerate(zip(self._weights, self._biases)):
            z = x @ W + b
            x = sigmoid(z) if idx == last else self._activation(z)
            preactivations.append(z)
            activations.append(x)
        return ForwardRecord(preactivations=preactivations, activations=activations)

    def predict(self, point: Sequence[float] | Array) -> float:
        """Return the probability of class 1 for ``point``."""

        return self.forward(point).output

    def predict_batch(self, points: Sequence[Sequence[float]] | Array) -> Array:
        """Vectorised :meth:`predict` over an ``(M, d)`` array of points."""

        X = np.asarray(points, dtype=np.float64)
        if X.ndim != 2 or X.shape[1] != self.input_size:
            raise DimensionMismatch(
                f"Expected points of shape (M, {self.input_size}), got {X.shape}"
            )
        last = len(self._weights) - 1
        for idx, (W, b) in enumerate(zip(self._weights, self._biases)):
            z = X @ W + b
            X = sigmoid(z) if idx == last else self._activation(z)
        return X[:, 0]

    # ------------------------------------------------------------------
    # Training

    def _check_dataset(self, dataset: Dataset) -> tuple[Array, Array]:
        inputs = _as_matrix(dataset.inputs)
        try:
            targets = np.asarray(dataset.targets, dtype=np.float64).reshape(-1)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"Targets must be a flat sequence of numbers: {exc}") from None
        if inputs.size == 0:
            raise InvalidArgument("Cannot train on an empty dataset")
        if inputs.ndim != 2 or inputs.shape[1] != self.input_size:
            raise DimensionMismatch(
                f"Dataset inputs have shape {inputs.shape}, network expects width {self.input_size}"
            )
        if targets.shape[0] != inputs.shape[0]:
            raise InvalidArgument(
                f"Got {inputs.shape[0]} inputs but {targets.shape[0]} targets"
            )
        if not (np.isfinite(inputs).all() and np.isfinite(targets).all()):
            raise InvalidArgument("Dataset contains non-finite inputs or targets")
        return inputs, targets

    def _backward(self, record: ForwardRecord, output_delta: float) -> List[Array]:
        # sigmoid + cross-entropy: dL/dz at the output is exactly p - t
        deltas: list[Array] = [np.empty(0)] * len(self._weights)
        deltas[-1] = np.array([output_delta], dtype=np.float64)
        for idx in reversed(range(len(self._weights) - 1)):
            deltas[idx] = (self._weights[idx + 1] @ deltas[idx + 1]) * self._activation.deriv(
                record.preactivations[idx]
            )
        return deltas

    def _apply(self, record: ForwardRecord, deltas: Sequence[Array]) -> None:
        lr = self._learning_rate
        for idx, delta in enumerate(deltas):
            self._weights[idx] -= lr * np.outer(record.activations[idx], delta)
            self._biases[idx] -= lr * delta

    def train_epoch(self, dataset: Dataset) -> TrainResult:
        """One pass of online gradient descent over ``dataset`` in order."""

        inputs, targets = self._check_dataset(dataset)
        total_loss = 0.0
        correct = 0
        for x, target in zip(inputs, targets):
            record = self.forward(x)
            prediction = record.output
            total_loss += bce_loss(prediction, target)
            if is_correct(prediction, target):
                correct += 1
            self._apply(record, self._backward(record, prediction - target))

        n = inputs.shape[0]
        loss = total_loss / n
        if not math.isfinite(loss):
            raise NumericOverflow(f"Non-finite loss {loss} after clamping")
        return TrainResult(loss=float(loss), accuracy=correct / n)

    def train(self, inputs: Sequence[Sequence[float]] | Array, targets: Sequence[float] | Array) -> TrainResult:
        return self.train_epoch(Dataset(inputs=_as_matrix(inputs), targets=targets))

    def __repr__(self) -> str:
        return (
            f"NeuralNetwork(layer_sizes={list(self._layer_sizes)}, "
            f"activation={self.activation!r}, learning_rate={self._learning_rate})"
        )


def create_engine(
    layer_sizes: Sequence[int],
    activation: str = "relu",
    learning_rate: float = 0.01,
    rng: np.random.Generator | None = None,
    *,
    seed: int | None = None,
) -> NeuralNetwork:
    """Validate the configuration and build a freshly initialised network."""

    return NeuralNetwork(layer_sizes, activation, learning_rate, rng, seed=seed)


def decision_grid(network: NeuralNetwork, resolution: int = 50) -> Array:
    """Predictions on a ``resolution x resolution`` grid over ``[-1, 1)^2``.

    Cell ``[i, j]`` holds the prediction at ``(i / resolution * 2 - 1,
    j / resolution * 2 - 1)``.
    """

    coords = np.arange(resolution, dtype=np.float64) / resolution * 2.0 - 1.0
    xs, ys = np.meshgrid(coords, coords, indexing="ij")
    points = np.column_stack([xs.ravel(), ys.ravel()])
    return network.predict_batch(points).reshape(resolution, resolution)


__all__ = ["NeuralNetwork", "bce_loss", "create_engine", "decision_grid", "is_correct"]
