from __future__ import annotations

import functools
import numbers
import operator
from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np
import numpy.typing as npt

from stairsearch.errors import AxisError, ShapeMismatchError

ShapeLike = Iterable[int] | int
Coords = tuple[int, ...]
BufferLike = npt.ArrayLike

DEFAULT_DTYPE = np.dtype(np.int64)


def product(tup: tuple[int, ...]) -> int:
    return functools.reduce(operator.mul, tup, 1)


def parse_shapelike(data: ShapeLike) -> tuple[int, ...]:
    if isinstance(data, numbers.Integral):
        if data < 0:
            raise ValueError(f"Expected a non-negative integer. Got {data} instead")
        return (int(data),)
    try:
        data_tuple = tuple(data)
    except TypeError as e:
        msg = f"Expected an integer or an iterable of integers. Got {data} instead."
        raise TypeError(msg) from e

    if not all(isinstance(v, numbers.Integral) for v in data_tuple):
        msg = f"Expected an iterable of integers. Got {data} instead."
        raise TypeError(msg)
    if not all(v > -1 for v in data_tuple):
        msg = f"Expected all values to be non-negative. Got {data} instead."
        raise ValueError(msg)
    if len(data_tuple) == 0:
        msg = "Expected at least one axis. Got an empty shape instead."
        raise ValueError(msg)
    return tuple(int(v) for v in data_tuple)


def get_strides(shape: tuple[int, ...]) -> Coords:
    """Element strides of a flat buffer with the given shape. Axis 0 varies
    fastest, so ``stride_0 == 1`` and ``stride_k`` is the product of the
    lengths of all lower axes."""
    strides = []
    stride = 1
    for size in shape:
        strides.append(stride)
        stride *= size
    return tuple(strides)


def flat_index(coords: Sequence[int], strides: Sequence[int]) -> int:
    return sum(c * s for c, s in zip(coords, strides, strict=True))


def normalize_axis(axis: int, ndim: int) -> int:
    """Resolve a possibly negative axis against an array of rank ``ndim``."""
    if not isinstance(axis, numbers.Integral):
        raise TypeError(f"Expected an integer axis. Got {axis!r} instead.")
    if axis < -ndim or axis >= ndim:
        raise AxisError(axis, ndim)
    return int(axis) % ndim


def numpy_axis(axis: int, ndim: int) -> int:
    """Position of ``axis`` in the numpy view returned by :func:`nd_view`."""
    return ndim - 1 - axis


def as_buffer(array: BufferLike, shape: tuple[int, ...]) -> np.ndarray[Any, np.dtype[Any]]:
    """Coerce ``array`` to a one-dimensional numpy buffer holding exactly
    ``prod(shape)`` elements. Plain sequences of integers become ``int64``
    buffers; buffers of any non-integer dtype are rejected, never cast."""
    if not isinstance(array, np.ndarray):
        array = np.asarray(array)
        if array.size == 0 or np.issubdtype(array.dtype, np.integer):
            array = array.astype(DEFAULT_DTYPE, copy=False)
    if array.ndim != 1:
        raise ShapeMismatchError(f"Expected a one-dimensional buffer. Got {array.ndim} dimensions.")
    if not np.issubdtype(array.dtype, np.integer):
        raise TypeError(f"Expected a buffer of integers. Got dtype {array.dtype} instead.")
    expected = product(shape)
    if array.shape[0] != expected:
        raise ShapeMismatchError(array.shape[0], shape, expected)
    return array


def nd_view(
    buffer: np.ndarray[Any, np.dtype[Any]], shape: tuple[int, ...]
) -> np.ndarray[Any, np.dtype[Any]]:
    """View a flat buffer as a numpy array. numpy varies its last axis fastest,
    so the view has the axes of ``shape`` in reverse order."""
    return buffer.reshape(shape[::-1])
