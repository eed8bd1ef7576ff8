from __future__ import annotations

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
)


def swap_axes(shape: tuple[int, ...], axis_a: int, axis_b: int) -> tuple[int, ...]:
    new_shape = list(shape)
    new_shape[axis_a], new_shape[axis_b] = new_shape[axis_b], new_shape[axis_a]
    return tuple(new_shape)


def transpose(
    array: BufferLike, shape: ShapeLike, axis_a: int, axis_b: int
) -> tuple[np.ndarray[Any, np.dtype[Any]], tuple[int, ...]]:
    """Swap two axes of a flat array.

    Parameters
    ----------
    array : array-like
        Flat buffer of ``prod(shape)`` elements, axis 0 varying fastest.
    shape : tuple of int
        Length of each axis.
    axis_a, axis_b : int
        The axes to exchange. Negative values count from the last axis.

    Returns
    -------
    buffer : numpy.ndarray
        A new flat buffer with ``buffer[perm(coord)] == array[coord]`` for every
        coordinate, where ``perm`` exchanges coordinates ``axis_a`` and ``axis_b``.
        The buffer never shares memory with ``array``.
    shape : tuple of int
        The shape with the lengths of ``axis_a`` and ``axis_b`` exchanged.

    Notes
    -----
    Swapping the same pair of axes twice restores the original buffer and shape.
    """
    shape_parsed = parse_shapelike(shape)
    buffer = as_buffer(array, shape_parsed)
    ndim = len(shape_parsed)
    axis_a = normalize_axis(axis_a, ndim)
    axis_b = normalize_axis(axis_b, ndim)

    swapped = np.swapaxes(
        nd_view(buffer, shape_parsed), numpy_axis(axis_a, ndim), numpy_axis(axis_b, ndim)
    )
    # flatten always copies, in C order
    return swapped.flatten(), swap_axes(shape_parsed, axis_a, axis_b)
