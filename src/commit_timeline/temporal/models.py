"""Data models for commit binning."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

HOUR = 3600
DAY = 24 * HOUR


@dataclass(frozen=True)
class CommitRecord:
    timestamp: int  # unix seconds
    author: str


class Granularity(Enum):
    """Named calendar bucket sizes.

    ``nominal_seconds`` is the fixed-width approximation used when filling
    gaps: months count as 30 days and years as 360.
    """

    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @property
    def nominal_seconds(self) -> int:
        return _NOMINAL_SECONDS[self]


_NOMINAL_SECONDS = {
    Granularity.HOURLY: HOUR,
    Granularity.DAILY: DAY,
    Granularity.WEEKLY: 7 * DAY,
    Granularity.MONTHLY: 30 * DAY,
    Granularity.YEARLY: 360 * DAY,
}


@dataclass(frozen=True)
class BucketPolicy:
    """Either a calendar granularity or a fixed step in seconds, never both."""

    granularity: Optional[Granularity] = None
    step: Optional[int] = None

    def __post_init__(self) -> None:
        if (self.granularity is None) == (self.step is None):
            raise ValueError("BucketPolicy needs exactly one of granularity or step")
        if self.step is not None and self.step <= 0:
            raise ValueError("step must be positive")

    @classmethod
    def calendar(cls, granularity: Granularity) -> BucketPolicy:
        return cls(granularity=granularity)

    @classmethod
    def fixed(cls, step: int) -> BucketPolicy:
        return cls(step=step)

    @property
    def is_calendar(self) -> bool:
        return self.granularity is not None

    @property
    def width(self) -> int:
        """Nominal bucket width in seconds."""
        if self.granularity is not None:
            return self.granularity.nominal_seconds
        assert self.step is not None
        return self.step

    @property
    def tolerance(self) -> int:
        """Slack accepted between a synthesized key and the next real key."""
        if self.granularity is not None:
            return self.width // 2
        return 0

    @property
    def label(self) -> str:
        if self.granularity is not None:
            return self.granularity.value
        return f"{self.step}s"


@dataclass(frozen=True)
class Bucket:
    start: int
    total: int = 0
    per_author: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the mapping so a returned series cannot be mutated in place.
        object.__setattr__(self, "per_author", MappingProxyType(dict(self.per_author)))

    @property
    def is_empty(self) -> bool:
        return self.total == 0


@dataclass(frozen=True)
class TimeSeries:
    buckets: tuple[Bucket, ...]  # ascending by start
    policy: BucketPolicy
    author_totals: Mapping[str, int]
    author_ranking: tuple[str, ...]  # most commits first

    def __post_init__(self) -> None:
        object.__setattr__(self, "buckets", tuple(self.buckets))
        object.__setattr__(self, "author_ranking", tuple(self.author_ranking))
        object.__setattr__(self, "author_totals", MappingProxyType(dict(self.author_totals)))

    @property
    def max(self) -> int:
        return max((b.total for b in self.buckets), default=0)

    @property
    def start(self) -> int:
        return self.buckets[0].start

    @property
    def end(self) -> int:
        return self.buckets[-1].start

    @property
    def total_commits(self) -> int:
        return sum(b.total for b in self.buckets)

    @property
    def totals(self) -> list[int]:
        return [b.total for b in self.buckets]

    def __len__(self) -> int:
        return len(self.buckets)
