import logging
from enum import Enum
from typing import Annotated

import typer

import stairsearch
from stairsearch.core.harness import run_trials
from stairsearch.core.search import SearchStats, search
from stairsearch.core.sorting import sort_all_axes
from stairsearch.errors import ShapeMismatchError

app = typer.Typer()

logger = logging.getLogger(__name__)


def _set_logging_level(*, verbose: bool) -> None:
    if verbose:
        lvl = "INFO"
    else:
        lvl = "WARNING"
    stairsearch.set_log_level(lvl)
    stairsearch.set_format("%(message)s")


class SearchMethod(str, Enum):
    worklist = "worklist"
    recursive = "recursive"


@app.command()  # type: ignore[misc]
def run(
    ndim: Annotated[
        list[int] | None,
        typer.Option(
            min=1,
            help="Number of dimensions of the generated arrays. Repeat to test several; defaults to 1, 2 and 3.",
        ),
    ] = None,
    trials: Annotated[
        int | None,
        typer.Option(
            min=0,
            help="Trials per dimension count. Defaults to the harness.trials config value.",
        ),
    ] = None,
    seed: Annotated[
        int | None,
        typer.Option(help="Seed for the random generator, for reproducible runs."),
    ] = None,
    method: Annotated[
        SearchMethod | None,
        typer.Option(help="Keep pending regions on an explicit work-list or on the call stack."),
    ] = None,
) -> None:
    """Compare the region search against a linear scan on random arrays sorted along every axis.
    Stops at the first disagreement and exits with status 1.
    """
    for n in ndim or [1, 2, 3]:
        report = run_trials(
            n,
            trials,
            seed=seed,
            method=method.value if method is not None else None,
        )
        typer.echo(repr(report))
        typer.echo("")
        if not report.ok:
            raise typer.Exit(code=1)


@app.command("search")  # type: ignore[misc]
def search_values(
    values: Annotated[
        list[int],
        typer.Argument(help="Array values, axis 0 varying fastest."),
    ],
    shape: Annotated[
        list[int],
        typer.Option(help="Length of each axis, axis 0 first. Repeat once per axis."),
    ],
    key: Annotated[int, typer.Option(help="The value to look for.")],
) -> None:
    """Sort VALUES along every axis of an array of the given shape and report whether KEY is present."""
    try:
        buffer = sort_all_axes(values, shape)
    except ShapeMismatchError as e:
        raise typer.BadParameter(str(e), param_hint="'--shape'") from e
    stats = SearchStats()
    found = search(buffer, shape, None, key, stats=stats)
    logger.info("%d elements probed", stats.probes)
    typer.echo(found)


@app.callback()  # type: ignore[misc]
def main(
    verbose: Annotated[
        bool,
        typer.Option(help="enable verbose logging - will print progress and probe counts."),
    ] = False,
) -> None:
    """
    See available commands below - access help for individual commands with stairsearch COMMAND --help.
    """
    _set_logging_level(verbose=verbose)


if __name__ == "__main__":
    app()
