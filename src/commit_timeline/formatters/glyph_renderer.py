"""Glyph renderer: sparklines and small block charts for the terminal."""

from typing import List

from ..temporal.models import TimeSeries
from .base import BaseRenderer, RenderOptions, format_bucket, top_authors

BLOCKS = " ▁▂▃▄▅▆▇█"
_STEPS = len(BLOCKS) - 1


def sparkline(values: List[int], peak: int) -> str:
    """One glyph per value, scaled against ``peak``.

    Zero renders as a blank; any non-zero value gets at least the lowest bar.
    """
    if peak <= 0:
        return BLOCKS[0] * len(values)
    return "".join(BLOCKS[-(-v * _STEPS // peak)] if v > 0 else BLOCKS[0] for v in values)


def block_chart(values: List[int], peak: int, height: int) -> List[str]:
    """Rows of a ``height``-row bar chart, top row first."""
    if height <= 1:
        return [sparkline(values, peak)]
    if peak <= 0:
        return [BLOCKS[0] * len(values) for _ in range(height)]

    # Each column's height in eighths of a row
    levels = [-(-v * height * _STEPS // peak) if v > 0 else 0 for v in values]
    rows = []
    for row in range(height - 1, -1, -1):
        base = row * _STEPS
        rows.append("".join(BLOCKS[min(_STEPS, max(0, level - base))] for level in levels))
    return rows


class GlyphRenderer(BaseRenderer):
    """Render the series as text using block glyphs."""

    name = "glyph"

    def render(self, series: TimeSeries, options: RenderOptions) -> str:
        lines = []
        if options.title:
            lines.append(options.title)

        start = format_bucket(series.start, series.policy, options)
        end = format_bucket(series.end, series.policy, options)
        lines.append(
            f"{start} .. {end}  "
            f"{series.total_commits} commits, {len(series)} {series.policy.label} buckets, "
            f"peak {series.max}"
        )

        lines.extend(block_chart(series.totals, series.max, options.chart_height))

        authors = top_authors(series, options.max_authors)
        if authors:
            legend = ", ".join(f"{a} ({series.author_totals[a]})" for a in authors)
            hidden = len(series.author_ranking) - len(authors)
            if hidden > 0:
                legend += f", +{hidden} more"
            lines.append(legend)

        return "\n".join(lines)
