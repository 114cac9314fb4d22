"""Dataset generator registry."""

from __future__ import annotations

from typing import Callable, Iterable, MutableMapping

import numpy as np

from ..core.errors import InvalidArgument
from ..core.types import Dataset

GeneratorFn = Callable[[int, np.random.Generator], Dataset]


_REGISTRY: MutableMapping[str, GeneratorFn] = {}


def register_dataset(
    name: str | None = None,
    factory: GeneratorFn | None = None,
) -> Callable[[GeneratorFn], GeneratorFn] | GeneratorFn:
    """Register a dataset generator.

    ``register_dataset`` can be used both as a decorator::

        @register_dataset("circle")
        def make_circle(count, rng):
            ...

    or directly::

        register_dataset("circle", make_circle)

    A generator receives the requested sample count and a
    :class:`numpy.random.Generator` and returns a :class:`Dataset`.
    """

    def _decorator(func: GeneratorFn) -> GeneratorFn:
        _REGISTRY[str(name or func.__name__)] = func
        return func

    if factory is not None:
        return _decorator(factory)
    if name is None:
        raise TypeError("register_dataset requires a name when used without a decorator")
    return _decorator


def get_generator(kind: str) -> GeneratorFn:
    try:
        return _REGISTRY[kind]
    except KeyError:
        available = ", ".join(available_datasets())
        raise InvalidArgument(f"Unknown dataset {kind!r}. Available datasets: {available}") from None


def available_datasets() -> Iterable[str]:
    """Return the sorted list of available dataset identifiers."""

    return sorted(_REGISTRY)


__all__ = ["GeneratorFn", "available_datasets", "get_generator", "register_dataset"]
