"""Synthetic two-class datasets on the ``[-1, 1]`` square."""

from __future__ import annotations

from numbers import Integral

import numpy as np

from ..core.errors import InvalidArgument
from ..core.types import Array, Dataset
from .registry import get_generator, register_dataset

CIRCLE_RADIUS = 0.5
SPIRAL_TURNS = 1.75
SPIRAL_JITTER = 0.2
GAUSSIAN_STD = 0.3
GAUSSIAN_CENTER = 0.4


def _uniform_square(count: int, rng: np.random.Generator) -> Array:
    return rng.random((count, 2)) * 2.0 - 1.0


def _box_muller(rng: np.random.Generator, size: int) -> Array:
    # 1 - U(0, 1) lies in (0, 1], keeping log finite
    u = 1.0 - rng.random(size)
    v = 1.0 - rng.random(size)
    return np.sqrt(-2.0 * np.log(u)) * np.cos(2.0 * np.pi * v)


def _two_class(class0: Array, class1: Array, kind: str) -> Dataset:
    inputs = np.vstack([class0, class1]).astype(np.float64)
    targets = np.concatenate(
        [
            np.zeros(class0.shape[0], dtype=np.int64),
            np.ones(class1.shape[0], dtype=np.int64),
        ]
    )
    return Dataset(inputs=inputs, targets=targets, kind=kind)


@register_dataset("circle")
def make_circle(count: int, rng: np.random.Generator) -> Dataset:
    """Label 1 inside the circle of radius 0.5 around the origin."""

    inputs = _uniform_square(count, rng)
    x, y = inputs[:, 0], inputs[:, 1]
    targets = (np.sqrt(x * x + y * y) < CIRCLE_RADIUS).astype(np.int64)
    return Dataset(inputs=inputs, targets=targets, kind="circle")


@register_dataset("xor")
def make_xor(count: int, rng: np.random.Generator) -> Dataset:
    """Label 1 where the coordinates have different signs."""

    inputs = _uniform_square(count, rng)
    targets = ((inputs[:, 0] > 0) != (inputs[:, 1] > 0)).astype(np.int64)
    return Dataset(inputs=inputs, targets=targets, kind="xor")


@register_dataset("spiral")
def make_spiral(count: int, rng: np.random.Generator) -> Dataset:
    """Two interleaved Archimedean spirals, half a turn apart."""

    per_class = count // 2
    i = np.arange(per_class, dtype=np.float64)
    r = i / per_class
    arms = []
    for label in (0, 1):
        t = (
            SPIRAL_TURNS * i / per_class * 2.0 * np.pi
            + label * np.pi
            + rng.random(per_class) * SPIRAL_JITTER
        )
        arms.append(np.column_stack([r * np.cos(t), r * np.sin(t)]))
    return _two_class(arms[0], arms[1], "spiral")


@register_dataset("gaussian")
def make_gaussian(count: int, rng: np.random.Generator) -> Dataset:
    per_class = count // 2
    blobs = []
    for center in (-GAUSSIAN_CENTER, GAUSSIAN_CENTER):
        noise = _box_muller(rng, 2 * per_class).reshape(per_class, 2)
        blobs.append(noise * GAUSSIAN_STD + center)
    return _two_class(blobs[0], blobs[1], "gaussian")


def generate(
    kind: str,
    count: int,
    rng: np.random.Generator | None = None,
    *,
    seed: int | None = None,
) -> Dataset:
    """Generate ``count`` samples of dataset ``kind``.

    Two-class generators (``spiral``, ``gaussian``) split the samples evenly,
    so an odd ``count`` yields ``count - 1`` samples.
    """

    if isinstance(count, bool) or not isinstance(count, Integral) or count < 2:
        raise InvalidArgument(f"count must be an integer >= 2, got {count!r}")
    generator = get_generator(kind)
    if rng is None:
        rng = np.random.default_rng(seed)
    return generator(int(count), rng)


__all__ = ["generate", "make_circle", "make_gaussian", "make_spiral", "make_xor"]
