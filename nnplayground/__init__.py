"""nnplayground public API."""

from .core import activations  # noqa: F401
from .core import types  # noqa: F401
from .core.errors import DimensionMismatch, InvalidArgument, NumericOverflow
from .core.network import NeuralNetwork, create_engine, decision_grid
from .core.types import Dataset, TrainResult
from .data import available_datasets, generate
from .training.pipelines import load_preset, presets, run_pipeline
from .training.session import PlaygroundSession, PlaygroundSettings

__all__ = [
    "Dataset",
    "DimensionMismatch",
    "InvalidArgument",
    "NeuralNetwork",
    "NumericOverflow",
    "PlaygroundSession",
    "PlaygroundSettings",
    "TrainResult",
    "activations",
    "available_datasets",
    "create_engine",
    "decision_grid",
    "generate",
    "load_preset",
    "presets",
    "run_pipeline",
    "types",
]
