"""
The config module is responsible for managing the configuration of stairsearch and is based on the
Donfig python library.

Example:
    The search can be switched from the explicit work-list form to plain recursion, and the
    harness can be made reproducible, programmatically:

    ```python
    from stairsearch.core.config import config

    with config.set({"search.method": "recursive", "harness.seed": 42}):
        ...
    ```

    The same values can be set with environment variables. The double underscore ``__`` is used
    to indicate nested access.

    ```bash
    export STAIRSEARCH_SEARCH__METHOD="recursive"
    export STAIRSEARCH_HARNESS__SIZE_RANGE__2="[5, 50]"
    ```

For more information, see the Donfig documentation at https://github.com/pytroll/donfig.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Literal, cast

from donfig import Config as DConfig

from stairsearch.errors import BaseStairsearchError

SearchMethod = Literal["recursive", "worklist"]
SEARCH_METHODS: tuple[SearchMethod, ...] = ("recursive", "worklist")


class BadConfigError(BaseStairsearchError):
    _msg = "Bad config value {!r}: expected {}."


class Config(DConfig):  # type: ignore[misc]
    """The Config will collect configuration from config files and environment variables

    Example environment variables:
    Grabs environment variables of the form "STAIRSEARCH_FOO__BAR_BAZ=123" and
    turns these into config variables of the form ``{"foo": {"bar_baz": 123}}``
    It transforms the key and value in the following way:

    -  Lower-cases the key text
    -  Treats ``__`` (double-underscore) as nested access
    -  Calls ``ast.literal_eval`` on the value

    """

    def reset(self) -> None:
        self.clear()
        self.refresh()


# The default configuration for stairsearch
config = Config(
    "stairsearch",
    defaults=[
        {
            "search": {
                "method": "worklist",
                "validate": True,
                "check_invariant": False,
            },
            "sort": {"kind": "quicksort"},
            "harness": {
                "trials": 10000,
                "seed": None,
                "value_range": [0, 2000],
                "size_range": {
                    "1": [10, 1000],
                    "2": [5, 100],
                    "3": [2, 20],
                    "default": [1, 6],
                },
            },
        }
    ],
)


def parse_search_method(data: Any) -> SearchMethod:
    if data in SEARCH_METHODS:
        return cast("SearchMethod", data)
    raise BadConfigError(data, f"one of {SEARCH_METHODS}")


def parse_inclusive_range(data: Any) -> tuple[int, int]:
    """Parse a ``[low, high]`` pair with ``low <= high``, both ends included."""
    if (
        not isinstance(data, Sequence)
        or isinstance(data, str)
        or len(data) != 2
        or not all(isinstance(v, int) for v in data)
    ):
        raise BadConfigError(data, "a pair of integers [low, high]")
    low, high = data
    if low > high:
        raise BadConfigError(data, "low <= high")
    return low, high


def size_range_for(ndim: int) -> tuple[int, int]:
    """Inclusive range from which the harness draws the length of each axis
    of an ``ndim``-dimensional array."""
    ranges = config.get("harness.size_range")
    data = ranges.get(str(ndim), ranges["default"])
    low, high = parse_inclusive_range(data)
    if low < 0:
        raise BadConfigError(data, f"non-negative axis lengths for {ndim} dimensions")
    return low, high
