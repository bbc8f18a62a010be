"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import TimelineConfig, load_config
from ..exceptions import InvalidStepError
from ..formatters import BaseRenderer, ChartUrlRenderer, GnuplotRenderer, get_renderer
from ..temporal import BucketPolicy, parse_policy

console = Console()
err_console = Console(stderr=True)


def resolve_policy(step: Optional[str] = None, **granularity_flags: bool) -> Optional[BucketPolicy]:
    """Build the bucket policy from ``--step`` and the granularity flags.

    Returns None when nothing was requested, so the binner auto-selects.
    """
    chosen = [name for name, enabled in granularity_flags.items() if enabled]
    if step is not None:
        chosen.append(step)
    if len(chosen) > 1:
        raise InvalidStepError(
            " ".join(chosen), "only one of --step/--hourly/--daily/--weekly/--monthly/--yearly"
        )
    if not chosen:
        return None
    return parse_policy(chosen[0])


def resolve_config(
    config: Optional[Path] = None,
    renderer: Optional[str] = None,
    chart_height: Optional[int] = None,
    chart_width: Optional[int] = None,
    time_format: Optional[str] = None,
    timezone: Optional[str] = None,
    max_authors: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> TimelineConfig:
    """Build config from CLI options; unset options fall back to files/env."""
    return load_config(
        config_file=config,
        renderer=renderer,
        chart_height=chart_height,
        chart_width=chart_width,
        time_format=time_format,
        timezone=timezone,
        max_authors=max_authors,
        verbose=verbose,
        quiet=quiet,
    )


def build_renderer(config: TimelineConfig) -> BaseRenderer:
    if config.renderer == GnuplotRenderer.name:
        return GnuplotRenderer(command=config.gnuplot_command)
    if config.renderer == ChartUrlRenderer.name:
        return ChartUrlRenderer(base_url=config.chart_url_base)
    return get_renderer(config.renderer)
