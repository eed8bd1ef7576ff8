from __future__ import annotations

import logging
from typing import Any

import numpy as np

from stairsearch.core.common import (
    BufferLike,
    ShapeLike,
    as_buffer,
    nd_view,
    normalize_axis,
    numpy_axis,
    parse_shapelike,
    product,
)
from stairsearch.core.config import config
from stairsearch.core.transpose import transpose

logger = logging.getLogger(__name__)


def sort_rows(buffer: np.ndarray[Any, np.dtype[Any]], row_length: int) -> None:
    """Sort every contiguous run of ``row_length`` elements of ``buffer`` in place."""
    if buffer.size == 0 or row_length <= 1:
        return
    rows = buffer.reshape(-1, row_length)
    rows.sort(axis=-1, kind=config.get("sort.kind"))


def axis_sort(array: BufferLike, shape: ShapeLike, axis: int) -> np.ndarray[Any, np.dtype[Any]]:
    """Sort a flat array along one axis.

    Every line of the array running parallel to ``axis`` is sorted
    independently, so that values are non-decreasing along ``axis`` when all
    other coordinates are held fixed. Lines are sorted with an unstable sort;
    the order along other axes is not preserved.

    The input is left untouched and a new buffer with the same shape is
    returned.

    Parameters
    ----------
    array : array-like
        Flat buffer of ``prod(shape)`` elements, axis 0 varying fastest.
    shape : tuple of int
        Length of each axis.
    axis : int
        The axis to sort along. Negative values count from the last axis.
    """
    shape_parsed = parse_shapelike(shape)
    buffer = as_buffer(array, shape_parsed)
    axis = normalize_axis(axis, len(shape_parsed))

    if axis == 0:
        # axis 0 is already contiguous
        result = buffer.copy()
        sort_rows(result, shape_parsed[0])
        return result

    swapped, swapped_shape = transpose(buffer, shape_parsed, 0, axis)
    sort_rows(swapped, swapped_shape[0])
    result, _ = transpose(swapped, swapped_shape, 0, axis)
    return result


def sort_all_axes(array: BufferLike, shape: ShapeLike) -> np.ndarray[Any, np.dtype[Any]]:
    """Sort a flat array along every axis in ascending axis order.

    The result satisfies the staircase property checked by :func:`is_staircase`:
    sorting along a later axis never breaks the order along an earlier one.
    """
    shape_parsed = parse_shapelike(shape)
    buffer = as_buffer(array, shape_parsed)
    logger.debug("sorting array of shape %s along %d axes", shape_parsed, len(shape_parsed))
    for axis in range(len(shape_parsed)):
        buffer = axis_sort(buffer, shape_parsed, axis)
    return buffer


def first_unsorted_axis(array: BufferLike, shape: ShapeLike) -> int | None:
    """Return the lowest axis along which ``array`` decreases somewhere, or None."""
    shape_parsed = parse_shapelike(shape)
    buffer = as_buffer(array, shape_parsed)
    if product(shape_parsed) == 0:
        return None
    view = nd_view(buffer, shape_parsed)
    ndim = len(shape_parsed)
    for axis in range(ndim):
        lines = np.moveaxis(view, numpy_axis(axis, ndim), 0)
        if not np.all(lines[1:] >= lines[:-1]):
            return axis
    return None


def is_staircase(array: BufferLike, shape: ShapeLike) -> bool:
    """Whether values never decrease along any axis of ``array``."""
    return first_unsorted_axis(array, shape) is None
