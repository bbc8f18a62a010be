"""JSON renderer for machine consumption."""

import json

from ..temporal.models import TimeSeries
from .base import BaseRenderer, RenderOptions, format_bucket


class JsonRenderer(BaseRenderer):
    name = "json"

    def render(self, series: TimeSeries, options: RenderOptions) -> str:
        data = {
            "policy": series.policy.label,
            "width_seconds": series.policy.width,
            "start": series.start,
            "end": series.end,
            "max": series.max,
            "total_commits": series.total_commits,
            "authors": [
                {"name": a, "commits": series.author_totals[a]} for a in series.author_ranking
            ],
            "buckets": [
                {
                    "start": b.start,
                    "label": format_bucket(b.start, series.policy, options),
                    "total": b.total,
                    "per_author": dict(b.per_author),
                }
                for b in series.buckets
            ],
        }
        return json.dumps(data, indent=2)
