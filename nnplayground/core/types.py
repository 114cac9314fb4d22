"""Core typing contracts for nnplayground."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

Array = np.ndarray


@dataclass(frozen=True)
class Dataset:
    """An ordered set of labelled 2-D samples.

    ``inputs`` has shape ``(N, d)`` and ``targets`` holds the matching ``N``
    binary labels, both in dataset order.
    """

    inputs: Array
    targets: Array
    kind: str = "custom"

    def __len__(self) -> int:
        return int(self.inputs.shape[0])

    def class_counts(self) -> tuple[int, int]:
        ones = int(np.count_nonzero(self.targets == 1))
        return len(self) - ones, ones


@dataclass(frozen=True)
class TrainResult:
    """Aggregate metrics for one training epoch."""

    loss: float
    accuracy: float

    def as_dict(self) -> dict[str, float]:
        return {"loss": self.loss, "accuracy": self.accuracy}


@dataclass
class ForwardRecord:
    """Intermediate values captured during the forward pass.

    ``activations[0]`` is the raw input; ``activations[l + 1]`` and
    ``preactivations[l]`` belong to layer transition ``l``.
    """

    preactivations: List[Array]
    activations: List[Array]

    @property
    def output(self) -> float:
        return float(self.activations[-1][0])


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :func:`nnplayground.training.pipelines.run_pipeline`."""

    epochs: int
    loss: float
    accuracy: float
    metrics_path: str
    plots: tuple[str, ...] = ()


__all__ = ["Array", "Dataset", "TrainResult", "ForwardRecord", "RunResult"]
