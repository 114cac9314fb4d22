"""Core numerical primitives for nnplayground."""

from . import activations, errors, network, types

__all__ = ["activations", "errors", "network", "types"]
