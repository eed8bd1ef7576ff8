from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import numpy as np
import pytest
from hypothesis import HealthCheck, settings

from stairsearch import config
from stairsearch.core.sorting import sort_all_axes

if TYPE_CHECKING:
    from collections.abc import Generator
    from typing import Any


@pytest.fixture(autouse=True)
def reset_config() -> Generator[None, None, None]:
    config.reset()
    yield
    config.reset()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    yield
    logger = logging.getLogger("stairsearch")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(seed=1234)


@pytest.fixture
def grid_2d() -> tuple[np.ndarray[Any, np.dtype[Any]], tuple[int, int]]:
    """The 2-D array [[1, 2, 4], [3, 5, 6]] with three columns and two rows."""
    shape = (3, 2)
    return sort_all_axes([4, 1, 2, 6, 3, 5], shape), shape


@pytest.fixture
def cube_3d() -> tuple[np.ndarray[Any, np.dtype[Any]], tuple[int, int, int]]:
    """A sorted 2x2x2 cube holding 0 at (0, 0, 0) and 10 at (1, 1, 1)."""
    shape = (2, 2, 2)
    return sort_all_axes([10, 3, 7, 0, 5, 2, 8, 4], shape), shape


settings.register_profile(
    "default",
    parent=settings.get_profile("default"),
    max_examples=300,
    suppress_health_check=[HealthCheck.filter_too_much, HealthCheck.too_slow],
    deadline=None,
)
settings.register_profile(
    "ci",
    parent=settings.get_profile("default"),
    max_examples=300,
    derandomize=True,  # more like regression testing
    deadline=None,
    suppress_health_check=[HealthCheck.filter_too_much, HealthCheck.too_slow],
)
settings.register_profile(
    "nightly",
    max_examples=2000,
    parent=settings.get_profile("ci"),
    derandomize=False,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))
