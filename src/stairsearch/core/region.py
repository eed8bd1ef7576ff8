from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from stairsearch.core.common import Coords, ShapeLike, parse_shapelike, product
from stairsearch.errors import RegionError


@dataclass(frozen=True)
class Region:
    """
    A half-open hyper-rectangle ``[start, end)`` of array coordinates.

    A region is empty as soon as one axis has ``start == end``. Regions are
    ordinary values: splitting one never modifies it.
    """

    start: Coords
    end: Coords

    def __init__(self, start: Sequence[int], end: Sequence[int]) -> None:
        start_parsed = tuple(int(s) for s in start)
        end_parsed = tuple(int(e) for e in end)
        if len(start_parsed) != len(end_parsed):
            raise RegionError(
                f"start {start_parsed!r} and end {end_parsed!r} have different lengths"
            )
        object.__setattr__(self, "start", start_parsed)
        object.__setattr__(self, "end", end_parsed)

    @classmethod
    def from_shape(cls, shape: ShapeLike) -> Region:
        """The region covering a whole array of the given shape."""
        shape_parsed = parse_shapelike(shape)
        return cls((0,) * len(shape_parsed), shape_parsed)

    @property
    def ndim(self) -> int:
        return len(self.start)

    @property
    def shape(self) -> Coords:
        return tuple(e - s for s, e in zip(self.start, self.end, strict=True))

    @property
    def size(self) -> int:
        return product(self.shape)

    def is_empty(self) -> bool:
        return any(s == e for s, e in zip(self.start, self.end, strict=True))

    def midpoint(self) -> Coords:
        return tuple((s + e) // 2 for s, e in zip(self.start, self.end, strict=True))

    def __contains__(self, coords: object) -> bool:
        if not isinstance(coords, tuple) or len(coords) != self.ndim:
            return False
        return all(s <= c < e for s, c, e in zip(self.start, coords, self.end, strict=True))

    def split_above(self, mid: Sequence[int]) -> Iterator[Region]:
        """Yield the disjoint sub-regions that together cover every point of
        this region that is not ``<= mid`` on all axes.

        Sub-region ``i`` takes the points past ``mid`` on axis ``i`` and not
        past it on any lower axis. In two dimensions this is the right side
        followed by the bottom of the remaining left part.
        """
        for i in range(self.ndim):
            start = list(self.start)
            end = list(self.end)
            for j in range(i):
                end[j] = mid[j] + 1
            start[i] = mid[i] + 1
            yield Region(start, end)

    def split_below(self, mid: Sequence[int]) -> Iterator[Region]:
        """Yield the disjoint sub-regions that together cover every point of
        this region that is not ``>= mid`` on all axes.

        Sub-region ``i`` takes the points before ``mid`` on axis ``i`` and not
        before it on any lower axis. In two dimensions this is the left side
        followed by the top of the remaining right part.
        """
        for i in range(self.ndim):
            start = list(self.start)
            end = list(self.end)
            for j in range(i):
                start[j] = mid[j]
            end[i] = mid[i]
            yield Region(start, end)

    def validate(self, shape: tuple[int, ...]) -> None:
        """Raise :class:`RegionError` unless this region lies inside an array
        of the given shape."""
        if self.ndim != len(shape):
            raise RegionError(self, shape, f"expected {len(shape)} axes, got {self.ndim}")
        for axis, (s, e, size) in enumerate(zip(self.start, self.end, shape, strict=True)):
            if s < 0:
                raise RegionError(self, shape, f"negative start on axis {axis}")
            if s > e:
                raise RegionError(self, shape, f"start is past end on axis {axis}")
            if e > size:
                raise RegionError(self, shape, f"end is past the array extent on axis {axis}")
