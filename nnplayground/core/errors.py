"""Exception types raised by the playground core."""

from __future__ import annotations


class PlaygroundError(Exception):
    """Base class for errors raised by nnplayground."""


class InvalidArgument(PlaygroundError, ValueError):
    """Bad construction or generation parameters."""


class DimensionMismatch(PlaygroundError, ValueError):
    """Input width does not match the network's input layer."""


class NumericOverflow(PlaygroundError, ArithmeticError):
    """A loss or activation came out non-finite despite clamping."""


__all__ = ["PlaygroundError", "InvalidArgument", "DimensionMismatch", "NumericOverflow"]
