"""Training drivers: the interactive session and the preset pipeline."""

from .pipelines import load_preset, presets, run_pipeline
from .session import PlaygroundSession, PlaygroundSettings

__all__ = ["PlaygroundSession", "PlaygroundSettings", "load_preset", "presets", "run_pipeline"]
