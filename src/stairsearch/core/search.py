"""
Membership search over arrays that are sorted along every axis.

Sorting an array along each of its axes in turn (see
:func:`stairsearch.core.sorting.sort_all_axes`) leaves it in *staircase*
order: walking forward along any single axis never meets a smaller value.
That is weaker than a total order, so a single comparison cannot pick one
half of the array the way binary search does. It can still rule out a whole
corner of the region being searched:

- if the element at the midpoint ``m`` is smaller than the key, every point
  that is ``<= m`` on all axes is smaller too;
- if it is larger, every point that is ``>= m`` on all axes is larger too.

The rest of the region is split into one sub-region per axis (see
:meth:`Region.split_above` and :meth:`Region.split_below`) and each is
searched in turn, depth first, until the key is found or every remaining
region is empty. In one dimension this is exactly binary search.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

import numpy as np

from stairsearch.core.common import (
    BufferLike,
    Coords,
    ShapeLike,
    as_buffer,
    flat_index,
    get_strides,
    parse_shapelike,
)
from stairsearch.core.config import SearchMethod, config, parse_search_method
from stairsearch.core.region import Region
from stairsearch.core.sorting import first_unsorted_axis
from stairsearch.errors import NotStaircaseError

logger = logging.getLogger(__name__)


@dataclass
class SearchStats:
    """Counters filled in by :func:`search`.

    ``probes`` is the number of array elements compared against the key.
    ``regions`` is the number of regions visited, including the empty ones
    that were discarded without reading anything, so ``regions - probes`` is
    the number of empty sub-regions the decomposition produced.
    """

    probes: int = 0
    regions: int = 0

    def reset(self) -> None:
        self.probes = 0
        self.regions = 0


class _Probe:
    """Read-only access to the elements of one flat buffer."""

    def __init__(
        self,
        buffer: np.ndarray[Any, np.dtype[Any]],
        shape: tuple[int, ...],
        key: Any,
        stats: SearchStats,
    ) -> None:
        self.buffer = buffer
        self.strides = get_strides(shape)
        self.key = key
        self.stats = stats

    def __call__(self, region: Region) -> tuple[int, Coords]:
        """Compare the element at the midpoint of ``region`` with the key.

        Returns -1, 0 or 1 as the element is smaller than, equal to or larger
        than the key, together with the midpoint itself.
        """
        mid = region.midpoint()
        self.stats.probes += 1
        element = self.buffer[flat_index(mid, self.strides)]
        if element == self.key:
            return 0, mid
        return (-1 if element < self.key else 1), mid


def _subregions(region: Region, order: int, mid: Coords) -> Iterator[Region]:
    if order < 0:
        return region.split_above(mid)
    return region.split_below(mid)


def _search_recursive(probe: _Probe, region: Region) -> bool:
    probe.stats.regions += 1
    if region.is_empty():
        return False
    order, mid = probe(region)
    if order == 0:
        return True
    return any(_search_recursive(probe, sub) for sub in _subregions(region, order, mid))


def _search_worklist(probe: _Probe, region: Region) -> bool:
    pending = [region]
    while pending:
        current = pending.pop()
        probe.stats.regions += 1
        if current.is_empty():
            continue
        order, mid = probe(current)
        if order == 0:
            return True
        # pushed in reverse so they pop in the same order the recursion visits them
        pending.extend(reversed(list(_subregions(current, order, mid))))
    return False


_SEARCH_IMPLEMENTATIONS: dict[SearchMethod, Callable[[_Probe, Region], bool]] = {
    "recursive": _search_recursive,
    "worklist": _search_worklist,
}


def search(
    array: BufferLike,
    shape: ShapeLike,
    region: Region | None,
    key: Any,
    *,
    method: SearchMethod | None = None,
    stats: SearchStats | None = None,
) -> bool:
    """Determine whether ``key`` occurs inside ``region`` of a staircase array.

    Parameters
    ----------
    array : array-like
        Flat buffer of ``prod(shape)`` elements, axis 0 varying fastest. The
        whole array, not only ``region``, must be sorted along every axis.
        The buffer is never modified.
    shape : tuple of int
        Length of each axis.
    region : Region or None
        The part of the array to search. None searches the whole array.
    key : int
        The value to look for.
    method : {'worklist', 'recursive'}, optional
        Whether pending regions are kept on an explicit stack or on the call
        stack. Both visit the same regions in the same order. Defaults to the
        ``search.method`` config value.
    stats : SearchStats, optional
        If given, its counters are incremented by the work done.

    Returns
    -------
    bool

    Raises
    ------
    ShapeMismatchError
        If the buffer length does not match ``shape``.
    RegionError
        If ``search.validate`` is set and the region does not fit the array.
    NotStaircaseError
        If ``search.check_invariant`` is set and the array is not sorted along
        every axis.
    """
    shape_parsed = parse_shapelike(shape)
    buffer = as_buffer(array, shape_parsed)
    if region is None:
        region = Region.from_shape(shape_parsed)
    if config.get("search.validate"):
        region.validate(shape_parsed)
    if config.get("search.check_invariant"):
        axis = first_unsorted_axis(buffer, shape_parsed)
        if axis is not None:
            raise NotStaircaseError(shape_parsed, axis)

    if method is None:
        method = config.get("search.method")
    method_parsed = parse_search_method(method)
    if stats is None:
        stats = SearchStats()
    probe = _Probe(buffer, shape_parsed, key, stats)
    found = _SEARCH_IMPLEMENTATIONS[method_parsed](probe, region)
    logger.debug(
        "%s search for %r in %s of shape %s: %s", method_parsed, key, region, shape_parsed, found
    )
    return found
