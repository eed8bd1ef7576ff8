from __future__ import annotations

from itertools import product as iter_product
from typing import Any

import numpy as np

from stairsearch.core.common import get_strides, parse_shapelike
from stairsearch.core.region import Region

__all__ = ["assert_staircase", "brute_force_coords"]


def assert_staircase(buffer: np.ndarray[Any, np.dtype[Any]], shape: tuple[int, ...]) -> None:
    """Check the staircase property pair by pair, independently of
    :func:`stairsearch.core.sorting.is_staircase`.

    Warnings
    --------
    Visits every element once per axis, only use for testing and debugging
    """
    shape = parse_shapelike(shape)
    strides = get_strides(shape)
    for coords in iter_product(*(range(s) for s in shape)):
        index = sum(c * s for c, s in zip(coords, strides, strict=True))
        for axis, size in enumerate(shape):
            if coords[axis] + 1 < size:
                assert buffer[index] <= buffer[index + strides[axis]], (coords, axis)


def brute_force_coords(
    buffer: np.ndarray[Any, np.dtype[Any]], shape: tuple[int, ...], region: Region, key: Any
) -> list[tuple[int, ...]]:
    """All coordinates inside ``region`` holding ``key``, by scanning the
    whole array."""
    shape = parse_shapelike(shape)
    strides = get_strides(shape)
    return [
        coords
        for coords in iter_product(*(range(s) for s in shape))
        if coords in region
        and buffer[sum(c * s for c, s in zip(coords, strides, strict=True))] == key
    ]
