"""Dataset registry and synthetic generators."""

# Importing the generators registers them.
from .registry import available_datasets, get_generator, register_dataset
from .synthetic import generate

__all__ = ["available_datasets", "generate", "get_generator", "register_dataset"]
