"""Compose an image-chart URL (Google Image Charts parameter set)."""

import math
from typing import List
from urllib.parse import urlencode

from ..temporal.models import TimeSeries
from .base import BaseRenderer, RenderOptions, format_bucket, top_authors

MAX_PIXELS = 999
MIN_PIXELS = 100


def downsample(values: List[int], max_bars: int) -> List[int]:
    """Sum runs of adjacent values so at most ``max_bars`` remain."""
    if max_bars <= 0 or len(values) <= max_bars:
        return list(values)
    factor = math.ceil(len(values) / max_bars)
    return [sum(values[i : i + factor]) for i in range(0, len(values), factor)]


class ChartUrlRenderer(BaseRenderer):
    """Stacked vertical bar chart URL, one data series per top author."""

    name = "url"

    def __init__(self, base_url: str = "https://image-charts.com/chart", max_bars: int = 250):
        self.base_url = base_url
        self.max_bars = max_bars

    def render(self, series: TimeSeries, options: RenderOptions) -> str:
        authors = top_authors(series, options.max_authors)
        layers: List[List[int]] = []
        labels: List[str] = []
        for author in authors:
            layers.append([b.per_author.get(author, 0) for b in series.buckets])
            labels.append(author.replace("|", "/"))  # | separates legend entries
        shown = [sum(col) for col in zip(*layers)] if layers else [0] * len(series)
        rest = [b.total - s for b, s in zip(series.buckets, shown)]
        if any(rest):
            layers.append(rest)
            labels.append("others" if authors else "commits")

        layers = [downsample(layer, self.max_bars) for layer in layers]
        peak = max(sum(col) for col in zip(*layers))

        width = min(MAX_PIXELS, max(MIN_PIXELS, options.chart_width * 10))
        height = min(MAX_PIXELS, max(MIN_PIXELS, options.chart_height * 10))
        bar_width = max(1, (width - 40) // max(1, len(layers[0])) - 1)

        params = {
            "cht": "bvs",
            "chs": f"{width}x{height}",
            "chd": "t:" + "|".join(",".join(str(v) for v in layer) for layer in layers),
            "chds": f"0,{peak}",
            "chbh": f"{bar_width},1",
            "chxt": "x,y",
            "chxl": "0:|{}|{}".format(
                format_bucket(series.start, series.policy, options),
                format_bucket(series.end, series.policy, options),
            ),
            "chxr": f"1,0,{peak}",
        }
        if authors:
            params["chdl"] = "|".join(labels)
        if options.title:
            params["chtt"] = options.title

        return f"{self.base_url}?{urlencode(params, safe=',:|')}"
