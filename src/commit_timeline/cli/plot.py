"""Plot command: fetch commits, bin them, render the chart."""

from pathlib import Path
from typing import List, Optional

import click
import typer
from rich.markup import escape
from typer.core import TyperCommand

from ..exceptions import CommitTimelineError
from ..formatters import GnuplotRenderer
from ..logging_config import setup_logging, verbosity_from_flags
from ..temporal import Binner, GitCommitSource
from . import app
from ._common import build_renderer, console, err_console, resolve_config, resolve_policy

PATHSPEC_KEY = "commit_timeline.pathspec"


class PassthroughCommand(TyperCommand):
    """Command that keeps everything after ``--`` for git.

    click drops the separator itself, which would let git read a deleted
    path as an ambiguous revision.
    """

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        if "--" in args:
            split = args.index("--")
            ctx.meta[PATHSPEC_KEY] = args[split + 1 :]
            args = args[:split]
        return super().parse_args(ctx, args)


@app.command(
    cls=PassthroughCommand,
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def plot(
    ctx: typer.Context,
    log_args: Optional[List[str]] = typer.Argument(
        None,
        help="Extra arguments passed verbatim to git log (revisions, --since, --author, paths)",
        show_default=False,
    ),
    hourly: bool = typer.Option(False, "--hourly", help="One bucket per hour"),
    daily: bool = typer.Option(False, "--daily", help="One bucket per day"),
    weekly: bool = typer.Option(False, "--weekly", help="One bucket per week (starting Sunday)"),
    monthly: bool = typer.Option(False, "--monthly", help="One bucket per calendar month"),
    yearly: bool = typer.Option(False, "--yearly", help="One bucket per calendar year"),
    step: Optional[str] = typer.Option(
        None,
        "--step",
        help="Bucket size: seconds (e.g. 3600) or hourly/daily/weekly/monthly/yearly",
    ),
    renderer: Optional[str] = typer.Option(
        None,
        "--renderer",
        "-r",
        help="Output: glyph | gnuplot | url | json",
        click_type=click.Choice(["glyph", "gnuplot", "url", "json"], case_sensitive=False),
    ),
    gnuplot: bool = typer.Option(False, "--gnuplot", help="Shortcut for --renderer gnuplot"),
    url: bool = typer.Option(False, "--url", help="Shortcut for --renderer url"),
    json_output: bool = typer.Option(False, "--json", help="Shortcut for --renderer json"),
    print_script: bool = typer.Option(
        False,
        "--print-script",
        help="Print the gnuplot script instead of running gnuplot",
    ),
    chart_height: Optional[int] = typer.Option(
        None, "--chart-height", help="Chart height (glyph rows)", min=1, max=100
    ),
    chart_width: Optional[int] = typer.Option(
        None, "--chart-width", help="Chart width for URL charts (x10 pixels)", min=1
    ),
    time_format: Optional[str] = typer.Option(
        None, "--time-format", help="strftime pattern for bucket labels"
    ),
    timezone: Optional[str] = typer.Option(
        None, "--timezone", "--tz", help="IANA timezone for calendar buckets (default: local)"
    ),
    authors: Optional[int] = typer.Option(
        None, "--authors", help="Number of authors shown in legends", min=0
    ),
    title: Optional[str] = typer.Option(None, "--title", help="Chart title"),
    path: Path = typer.Option(
        Path("."),
        "-C",
        "--path",
        help="Repository to read (default: current directory)",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Also append log records to this file", dir_okay=False
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
):
    """
    Plot the distribution of commits over time.

    The bucket size is picked from the span of history unless one is given.

    [bold cyan]Examples:[/bold cyan]

      commit-timeline

      commit-timeline --weekly --chart-height 6

      commit-timeline --step 3600 --json

      commit-timeline --gnuplot --since=2024-01-01 -- src/
    """
    from .. import __version__

    if version:
        console.print(f"[bold cyan]commit-timeline[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    log_path = str(log_file) if log_file else None
    logger = setup_logging(verbosity_from_flags(verbose, quiet), log_path)

    if gnuplot:
        renderer = "gnuplot"
    elif url:
        renderer = "url"
    elif json_output:
        renderer = "json"

    try:
        # Validate the policy before touching the repository
        policy = resolve_policy(
            step, hourly=hourly, daily=daily, weekly=weekly, monthly=monthly, yearly=yearly
        )
        settings = resolve_config(
            config=config,
            renderer=renderer.lower() if renderer else None,
            chart_height=chart_height,
            chart_width=chart_width,
            time_format=time_format,
            timezone=timezone,
            max_authors=authors,
            verbose=verbose,
            quiet=quiet,
        )
        if settings.verbosity != verbosity_from_flags(verbose, quiet):
            logger = setup_logging(settings.verbosity, log_path)

        source = GitCommitSource(
            str(path),
            timeout_seconds=settings.git_timeout_seconds,
            max_commits=settings.git_max_commits,
        )
        git_args = list(log_args or [])
        if PATHSPEC_KEY in ctx.meta:
            git_args += ["--", *ctx.meta[PATHSPEC_KEY]]
        records = source.fetch(git_args)
        series = Binner(settings.tzinfo).bin(records, policy)
        logger.info(
            "%d commits in %d %s buckets", series.total_commits, len(series), series.policy.label
        )

        chart = build_renderer(settings)
        output = chart.render(series, settings.render_options(title=title))
        _emit(chart, output, print_script)

    except typer.Exit:
        raise

    except CommitTimelineError as e:
        logger.debug("%s: %s", e.__class__.__name__, e)
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error")
        err_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _emit(chart, output: str, print_script: bool) -> None:
    """Spawn gnuplot for scripts, otherwise print the artifact to stdout."""
    if isinstance(chart, GnuplotRenderer) and not print_script:
        chart.spawn(output)
        return
    print(output)
