import logging
from typing import Literal

from stairsearch._version import version as __version__
from stairsearch.core.config import config
from stairsearch.core.harness import Disagreement, TrialReport, linear_scan, run_trials
from stairsearch.core.region import Region
from stairsearch.core.search import SearchStats, search
from stairsearch.core.sorting import axis_sort, is_staircase, sort_all_axes
from stairsearch.core.transpose import transpose

_logger = logging.getLogger(__name__)
_handler: logging.Handler | None = None


def set_log_level(
    level: Literal["NOTSET", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
) -> None:
    """Set the logging level for stairsearch.

    Parameters
    ----------
    level : str
        The logging level to set.
    """
    _logger.setLevel(level)


def set_format(log_format: str) -> None:
    """Set the format of logging messages from stairsearch.

    Installs a stream handler writing to the current ``sys.stderr`` on the
    ``stairsearch`` logger, replacing the one installed by a previous call.

    Parameters
    ----------
    log_format : str
        A format string for ``logging.Formatter``.
    """
    global _handler
    if _handler is not None:
        _logger.removeHandler(_handler)
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(fmt=log_format))
    _logger.addHandler(_handler)


__all__ = [
    "Disagreement",
    "Region",
    "SearchStats",
    "TrialReport",
    "__version__",
    "axis_sort",
    "config",
    "is_staircase",
    "linear_scan",
    "run_trials",
    "search",
    "set_format",
    "set_log_level",
    "sort_all_axes",
    "transpose",
]
