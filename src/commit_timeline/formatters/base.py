"""Base renderer interface for commit-timeline output."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import List, Optional

from ..temporal.models import BucketPolicy, Granularity, TimeSeries

_DEFAULT_TIME_FORMATS = {
    Granularity.HOURLY: "%Y-%m-%d %H:%M",
    Granularity.DAILY: "%Y-%m-%d",
    Granularity.WEEKLY: "%Y-%m-%d",
    Granularity.MONTHLY: "%Y-%m",
    Granularity.YEARLY: "%Y",
}


@dataclass(frozen=True)
class RenderOptions:
    chart_height: int = 1
    chart_width: int = 80
    time_format: Optional[str] = None  # overrides the per-granularity default
    max_authors: int = 5
    title: Optional[str] = None
    tz: Optional[tzinfo] = None  # for labels; None = system local


def time_format_for(policy: BucketPolicy, override: Optional[str] = None) -> str:
    """strftime pattern used to label buckets of ``policy``."""
    if override:
        return override
    if policy.granularity is not None:
        return _DEFAULT_TIME_FORMATS[policy.granularity]
    return _DEFAULT_TIME_FORMATS[Granularity.HOURLY]


def format_bucket(start: int, policy: BucketPolicy, options: RenderOptions) -> str:
    return datetime.fromtimestamp(start, options.tz).strftime(
        time_format_for(policy, options.time_format)
    )


def top_authors(series: TimeSeries, limit: int) -> List[str]:
    return list(series.author_ranking[:limit]) if limit > 0 else []


class BaseRenderer(ABC):
    """Abstract base class for chart renderers."""

    name = "base"

    @abstractmethod
    def render(self, series: TimeSeries, options: RenderOptions) -> str:
        """Return the rendered artifact (text, script, URL or JSON)."""
