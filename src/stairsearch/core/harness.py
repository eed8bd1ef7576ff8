"""
Differential testing of :func:`~stairsearch.core.search.search` against a
linear scan.

Each trial draws a random shape and random values, sorts the array along
every axis, draws a random key and asks both the region search and a brute
force scan whether the key is present. The first trial on which they
disagree stops the run; the outcome is returned as a :class:`TrialReport`.
"""

from __future__ import annotations

import dataclasses
import logging
import textwrap
from typing import Any

import numpy as np

from stairsearch.core.common import BufferLike, product
from stairsearch.core.config import (
    SearchMethod,
    config,
    parse_inclusive_range,
    parse_search_method,
    size_range_for,
)
from stairsearch.core.search import SearchStats, search
from stairsearch.core.sorting import sort_all_axes
from stairsearch.errors import DisagreementError

logger = logging.getLogger(__name__)


def linear_scan(array: BufferLike, key: Any) -> bool:
    """Whether any element of ``array`` equals ``key``, checking every element."""
    return bool(np.any(np.asarray(array) == key))


@dataclasses.dataclass(kw_only=True)
class Disagreement:
    """The inputs of a trial on which the search and the linear scan differ."""

    trial: int
    shape: tuple[int, ...]
    key: int
    expected: bool
    actual: bool
    buffer: np.ndarray[Any, np.dtype[Any]] = dataclasses.field(repr=False, compare=False)


@dataclasses.dataclass(kw_only=True)
class TrialReport:
    """
    Summary of one differential testing run.

    ``probes_total`` and ``probes_max`` count the array elements the search
    compared against the key, over all trials and in the costliest trial.
    """

    ndim: int
    method: SearchMethod
    seed: int | None
    trials_requested: int
    trials_run: int = 0
    found: int = 0
    probes_total: int = 0
    probes_max: int = 0
    disagreement: Disagreement | None = None

    @property
    def ok(self) -> bool:
        return self.disagreement is None

    @property
    def probes_mean(self) -> float:
        if self.trials_run == 0:
            return 0.0
        return self.probes_total / self.trials_run

    def raise_for_disagreement(self) -> None:
        if self.disagreement is not None:
            d = self.disagreement
            raise DisagreementError(d.actual, d.expected, d.key, d.shape)

    def __repr__(self) -> str:
        template = textwrap.dedent("""\
        Dimensions   : {ndim}
        Method       : {method}
        Seed         : {seed}
        Trials       : {trials_run}/{trials_requested}
        Keys found   : {found}
        Mean probes  : {probes_mean:.1f}
        Max probes   : {probes_max}""")
        kwargs = {field.name: getattr(self, field.name) for field in dataclasses.fields(self)}
        kwargs["probes_mean"] = self.probes_mean

        if self.disagreement is None:
            template += "\nResult       : ok"
        else:
            template += (
                "\nResult       : DISAGREEMENT on trial {_trial}, shape {_shape}, "
                "key {_key} (search {_actual}, scan {_expected})"
            )
            kwargs.update(
                {f"_{k}": v for k, v in dataclasses.asdict(self.disagreement).items()}
            )
        return template.format(**kwargs)


def _draw_shape(rng: np.random.Generator, ndim: int) -> tuple[int, ...]:
    low, high = size_range_for(ndim)
    return tuple(int(s) for s in rng.integers(low, high, size=ndim, endpoint=True))


def run_trials(
    ndim: int,
    trials: int | None = None,
    *,
    seed: int | None = None,
    method: SearchMethod | None = None,
    rng: np.random.Generator | None = None,
) -> TrialReport:
    """Compare the region search with a linear scan on random arrays.

    Parameters
    ----------
    ndim : int
        Number of axes of the generated arrays.
    trials : int, optional
        Number of trials. Defaults to the ``harness.trials`` config value.
    seed : int, optional
        Seed for ``numpy.random.default_rng``. Defaults to the ``harness.seed``
        config value; None draws fresh entropy. Ignored if ``rng`` is given.
    method : {'worklist', 'recursive'}, optional
        Search method, see :func:`~stairsearch.core.search.search`.
    rng : numpy.random.Generator, optional
        Source of randomness to use instead of a freshly seeded one.

    Returns
    -------
    TrialReport
        The run stops at the first disagreement, which is recorded in the
        report rather than raised.
    """
    if ndim < 1:
        raise ValueError(f"Expected at least one dimension. Got {ndim} instead.")
    if trials is None:
        trials = config.get("harness.trials")
    if seed is None:
        seed = config.get("harness.seed")
    if method is None:
        method = config.get("search.method")
    method_parsed = parse_search_method(method)
    value_low, value_high = parse_inclusive_range(config.get("harness.value_range"))
    if rng is None:
        rng = np.random.default_rng(seed)

    report = TrialReport(ndim=ndim, method=method_parsed, seed=seed, trials_requested=trials)
    stats = SearchStats()
    logger.info("running %d trials in %d dimensions (%s search)", trials, ndim, method_parsed)

    last_percent = -1
    for trial in range(trials):
        percent = int(100 * trial / max(trials - 1, 1))
        if percent != last_percent:
            last_percent = percent
            logger.debug("%d dimensions: %d%%", ndim, percent)

        shape = _draw_shape(rng, ndim)
        values = rng.integers(value_low, value_high, size=product(shape), endpoint=True)
        buffer = sort_all_axes(values, shape)
        key = int(rng.integers(value_low, value_high, endpoint=True))

        stats.reset()
        found = search(buffer, shape, None, key, method=method_parsed, stats=stats)
        expected = linear_scan(buffer, key)

        report.trials_run += 1
        report.found += int(expected)
        report.probes_total += stats.probes
        report.probes_max = max(report.probes_max, stats.probes)

        if found != expected:
            report.disagreement = Disagreement(
                trial=trial, shape=shape, key=key, expected=expected, actual=found, buffer=buffer
            )
            logger.error(
                "search and linear scan disagree on trial %d: shape %s, key %d, search %s, scan %s",
                trial,
                shape,
                key,
                found,
                expected,
            )
            break

    logger.info(
        "%d dimensions: %d/%d trials run, mean probes %.1f",
        ndim,
        report.trials_run,
        trials,
        report.probes_mean,
    )
    return report
