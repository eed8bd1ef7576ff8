import numpy as np
import pytest
from numpy.testing import assert_array_equal

from stairsearch import config
from stairsearch.core.common import nd_view
from stairsearch.core.sorting import (
    axis_sort,
    first_unsorted_axis,
    is_staircase,
    sort_all_axes,
    sort_rows,
)
from stairsearch.errors import AxisError, ShapeMismatchError
from stairsearch.testing import assert_staircase


def test_sort_rows_in_place() -> None:
    buffer = np.array([3, 1, 2, 9, 7, 8])
    sort_rows(buffer, 3)
    assert_array_equal(buffer, [1, 2, 3, 7, 8, 9])


def test_axis_sort_1d() -> None:
    assert_array_equal(axis_sort([9, 3, 7, 1, 3], (5,), 0), [1, 3, 3, 7, 9])


def test_axis_sort_2d_rows_and_columns() -> None:
    # [[3, 1, 2], [0, 5, 4]]
    source = np.array([3, 1, 2, 0, 5, 4])
    shape = (3, 2)

    rows = axis_sort(source, shape, 0)
    assert_array_equal(rows, [1, 2, 3, 0, 4, 5])

    columns = axis_sort(source, shape, 1)
    assert_array_equal(columns, [0, 1, 2, 3, 5, 4])


def test_axis_sort_negative_axis() -> None:
    source = np.array([3, 1, 2, 0, 5, 4])
    assert_array_equal(axis_sort(source, (3, 2), -1), axis_sort(source, (3, 2), 1))


def test_axis_sort_leaves_input_untouched() -> None:
    source = np.array([3, 1, 2, 0, 5, 4])
    for axis in (0, 1):
        axis_sort(source, (3, 2), axis)
        assert_array_equal(source, [3, 1, 2, 0, 5, 4])


@pytest.mark.parametrize("shape", [(4, 5, 6), (1, 7, 3), (5, 1, 1)])
@pytest.mark.parametrize("axis", [0, 1, 2])
def test_axis_sort_3d_sorts_only_along_axis(
    shape: tuple[int, ...], axis: int, rng: np.random.Generator
) -> None:
    source = rng.integers(0, 50, size=int(np.prod(shape)))
    result = axis_sort(source, shape, axis)
    # numpy view has the axes reversed
    np_axis = len(shape) - 1 - axis
    expected = np.sort(nd_view(source, shape), axis=np_axis)
    assert_array_equal(nd_view(result, shape), expected)


@pytest.mark.parametrize("shape", [(0,), (1,), (0, 4), (4, 0), (1, 1), (3, 1), (1, 3, 0)])
def test_axis_sort_degenerate_shapes(shape: tuple[int, ...], rng: np.random.Generator) -> None:
    source = rng.integers(0, 50, size=int(np.prod(shape)))
    for axis in range(len(shape)):
        result = axis_sort(source, shape, axis)
        assert result.shape == source.shape
        if shape[axis] <= 1:
            assert_array_equal(result, source)


def test_axis_sort_kind_from_config() -> None:
    source = np.array([5, 4, 3, 2, 1, 0])
    with config.set({"sort.kind": "stable"}):
        assert_array_equal(axis_sort(source, (6,), 0), [0, 1, 2, 3, 4, 5])


def test_axis_sort_errors() -> None:
    with pytest.raises(AxisError):
        axis_sort([1, 2, 3], (3,), 1)
    with pytest.raises(ShapeMismatchError):
        axis_sort([1, 2, 3], (2, 2), 0)


@pytest.mark.parametrize("shape", [(50,), (7, 9), (4, 5, 6), (2, 3, 2, 3)])
def test_sort_all_axes_gives_staircase(shape: tuple[int, ...], rng: np.random.Generator) -> None:
    source = rng.integers(0, 20, size=int(np.prod(shape)))
    result = sort_all_axes(source, shape)
    assert is_staircase(result, shape)
    assert_staircase(result, shape)
    # sorting only reorders
    assert_array_equal(np.sort(result), np.sort(source))


def test_sort_all_axes_2d_example(grid_2d: tuple[np.ndarray, tuple[int, int]]) -> None:
    buffer, _ = grid_2d
    assert_array_equal(buffer, [1, 2, 4, 3, 5, 6])


def test_first_unsorted_axis() -> None:
    shape = (2, 2)
    assert first_unsorted_axis([1, 2, 3, 4], shape) is None
    # rows sorted, first column decreases
    assert first_unsorted_axis([3, 4, 1, 2], shape) == 1
    assert first_unsorted_axis([2, 1, 3, 4], shape) == 0
    assert first_unsorted_axis([], (0, 3)) is None


def test_is_staircase_unsigned() -> None:
    # a decrease must not wrap around for unsigned buffers
    assert not is_staircase(np.array([2, 1], dtype=np.uint8), (2,))
    assert is_staircase(np.array([1, 2], dtype=np.uint8), (2,))
