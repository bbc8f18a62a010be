"""Gnuplot renderer: build a script with inline data and optionally spawn gnuplot."""

import subprocess
from datetime import datetime, timezone, tzinfo
from typing import List, Optional

from ..exceptions import RendererError
from ..logging_config import get_logger
from ..temporal.models import TimeSeries
from .base import BaseRenderer, RenderOptions, time_format_for, top_authors

logger = get_logger(__name__)

OTHERS_LABEL = "others"


def _quote(text: str) -> str:
    """Single-quoted gnuplot string; quotes are escaped by doubling."""
    return "'" + text.replace("'", "''") + "'"


def _wall_clock(timestamp: int, tz: Optional[tzinfo]) -> int:
    """Shift ``timestamp`` by its UTC offset in ``tz``; gnuplot reads %s as UTC."""
    local = datetime.fromtimestamp(timestamp, timezone.utc).astimezone(tz)
    return timestamp + int(local.utcoffset().total_seconds())


class GnuplotRenderer(BaseRenderer):
    """Stacked per-author boxes over a time x-axis."""

    name = "gnuplot"

    def __init__(self, command: str = "gnuplot"):
        self.command = command

    def render(self, series: TimeSeries, options: RenderOptions) -> str:
        authors = top_authors(series, options.max_authors)
        has_others = bool(authors) and len(series.author_ranking) > len(authors)
        if authors:
            columns = authors + ([OTHERS_LABEL] if has_others else [])
        else:
            columns = ["commits"]

        lines: List[str] = []
        if options.title:
            lines.append(f"set title {_quote(options.title)}")
        lines.extend(
            [
                "set xdata time",
                'set timefmt "%s"',
                f"set format x {_quote(time_format_for(series.policy, options.time_format))}",
                "set xtics rotate by -45",
                f"set yrange [0:{max(series.max, 1)}]",
                f"set boxwidth {series.policy.width * 0.9:g}",
                "set style fill solid 0.8 border -1",
                "set key top left",
                "$data << EOD",
            ]
        )

        for bucket in series.buckets:
            if authors:
                shown = [bucket.per_author.get(a, 0) for a in authors]
                row = shown + ([bucket.total - sum(shown)] if has_others else [])
            else:
                row = [bucket.total]
            x = _wall_clock(bucket.start, options.tz)
            lines.append(" ".join(str(v) for v in [x] + row))
        lines.append("EOD")

        # Draw the tallest cumulative layer first so narrower layers sit on top
        plots = []
        for i, label in enumerate(columns):
            stacked = "+".join(f"${col + 2}" for col in range(i, len(columns)))
            plots.append(f"$data using 1:({stacked}) with boxes title {_quote(label)}")
        lines.append("plot " + ", \\\n     ".join(plots))

        return "\n".join(lines) + "\n"

    def spawn(self, script: str) -> None:
        """Pipe ``script`` into a persistent gnuplot process.

        Raises:
            RendererError: if gnuplot is missing or rejects the script.
        """
        cmd = [self.command, "-persist"]
        logger.debug("Spawning %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, input=script, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise RendererError(self.name, f"{self.command} not found: {e}") from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise RendererError(self.name, stderr or f"exit status {result.returncode}")
