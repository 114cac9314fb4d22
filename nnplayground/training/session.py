"""Headless playground session: settings, dataset, network and loss history."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, replace
from numbers import Integral
from typing import List

import numpy as np

from ..core.errors import InvalidArgument
from ..core.network import NeuralNetwork, create_engine, decision_grid
from ..core.types import Array, Dataset, TrainResult
from ..data import generate

INPUT_SIZE = 2
OUTPUT_SIZE = 1
MIN_HIDDEN_LAYERS, MAX_HIDDEN_LAYERS = 1, 6
MIN_NEURONS, MAX_NEURONS = 1, 8
_SETTING_MINIMUMS = {"sample_count": 2, "epochs_per_tick": 1, "history_every": 1, "history_limit": 1}


@dataclass(frozen=True)
class PlaygroundSettings:
    """User-facing knobs of the playground."""

    dataset: str = "circle"
    learning_rate: float = 0.01
    activation: str = "relu"
    hidden_layers: int = 2
    neurons_per_layer: int = 4
    sample_count: int = 300
    epochs_per_tick: int = 10
    history_every: int = 10
    history_limit: int = 100
    seed: int | None = None

    def __post_init__(self) -> None:
        for name, minimum in _SETTING_MINIMUMS.items():
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Integral) or value < minimum:
                raise InvalidArgument(f"{name} must be an integer >= {minimum}, got {value!r}")

    def layer_sizes(self) -> List[int]:
        return [INPUT_SIZE] + [self.neurons_per_layer] * self.hidden_layers + [OUTPUT_SIZE]


class PlaygroundSession:
    """Owns the current dataset and network and advances training in ticks.

    Any change to the dataset, activation or architecture rebuilds both the
    dataset and the network; the learning rate is applied to the live network.
    """

    def __init__(self, settings: PlaygroundSettings | None = None) -> None:
        self.settings = settings or PlaygroundSettings()
        self._rng = np.random.default_rng(self.settings.seed)
        self.network: NeuralNetwork
        self.dataset: Dataset
        self.epoch = 0
        self.loss_history: list[float] = []
        self.last_result: TrainResult | None = None
        self.reset()

    def _build(
        self, settings: PlaygroundSettings, rng: np.random.Generator
    ) -> tuple[Dataset, NeuralNetwork]:
        dataset = generate(settings.dataset, settings.sample_count, rng)
        network = create_engine(
            settings.layer_sizes(),
            settings.activation,
            settings.learning_rate,
            rng,
        )
        return dataset, network

    def _commit(self, settings: PlaygroundSettings) -> None:
        # the random stream only advances once the build succeeds
        rng = deepcopy(self._rng)
        self.dataset, self.network = self._build(settings, rng)
        self._rng = rng
        self.settings = settings
        self.epoch = 0
        self.loss_history = []
        self.last_result = None

    def reset(self) -> None:
        """Regenerate the dataset and start over with a fresh network."""

        self._commit(self.settings)

    def _update(self, **changes: object) -> None:
        self._commit(replace(self.settings, **changes))

    # ------------------------------------------------------------------
    # Controls

    def set_dataset(self, kind: str) -> None:
        self._update(dataset=kind)

    def set_activation(self, activation: str) -> None:
        self._update(activation=activation)

    def set_learning_rate(self, learning_rate: float) -> None:
        self.network.learning_rate = learning_rate
        self.settings = replace(self.settings, learning_rate=self.network.learning_rate)

    def add_layer(self) -> None:
        if self.settings.hidden_layers < MAX_HIDDEN_LAYERS:
            self._update(hidden_layers=self.settings.hidden_layers + 1)

    def remove_layer(self) -> None:
        if self.settings.hidden_layers > MIN_HIDDEN_LAYERS:
            self._update(hidden_layers=self.settings.hidden_layers - 1)

    def add_neuron(self) -> None:
        if self.settings.neurons_per_layer < MAX_NEURONS:
            self._update(neurons_per_layer=self.settings.neurons_per_layer + 1)

    def remove_neuron(self) -> None:
        if self.settings.neurons_per_layer > MIN_NEURONS:
            self._update(neurons_per_layer=self.settings.neurons_per_layer - 1)

    # ------------------------------------------------------------------
    # Training

    def train_epoch(self) -> TrainResult:
        result = self.network.train_epoch(self.dataset)
        self.epoch += 1
        if self.epoch % self.settings.history_every == 0:
            self.loss_history.append(result.loss)
            if len(self.loss_history) > self.settings.history_limit:
                self.loss_history.pop(0)
            self.last_result = result
        return result

    def tick(self) -> TrainResult:
        """Run ``epochs_per_tick`` epochs and return the last epoch's metrics."""

        result = self.train_epoch()
        for _ in range(self.settings.epochs_per_tick - 1):
            result = self.train_epoch()
        return result

    def decision_grid(self, resolution: int = 50) -> Array:
        return decision_grid(self.network, resolution)


__all__ = ["PlaygroundSession", "PlaygroundSettings"]
