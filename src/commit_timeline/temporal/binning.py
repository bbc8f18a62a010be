"""Bin commit timestamps into a gap-free, per-author time series."""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import datetime, time, timedelta, tzinfo
from operator import attrgetter
from typing import Iterable, Optional, Union

from ..exceptions import EmptyInputError, InvalidStepError
from ..logging_config import get_logger
from .models import DAY, Bucket, BucketPolicy, CommitRecord, Granularity, TimeSeries

logger = get_logger(__name__)

# Auto-selection break-points: a year is ~360 days, a month ~30.
MONTHLY_THRESHOLD = 360 * DAY
WEEKLY_THRESHOLD = 30 * DAY
DAILY_THRESHOLD = int(3.5 * DAY)

_ALIASES = {
    "hour": Granularity.HOURLY,
    "day": Granularity.DAILY,
    "week": Granularity.WEEKLY,
    "month": Granularity.MONTHLY,
    "year": Granularity.YEARLY,
}

PolicyLike = Union[BucketPolicy, Granularity, int, str]


def parse_policy(value: PolicyLike) -> BucketPolicy:
    """Turn a granularity name or a positive number of seconds into a policy.

    Raises:
        InvalidStepError: for anything that is neither.
    """
    if isinstance(value, BucketPolicy):
        return value
    if isinstance(value, Granularity):
        return BucketPolicy.calendar(value)
    if isinstance(value, bool):
        raise InvalidStepError(value)
    if isinstance(value, int):
        if value <= 0:
            raise InvalidStepError(value, "step must be a positive number of seconds")
        return BucketPolicy.fixed(value)
    if isinstance(value, str):
        name = value.strip().lower()
        try:
            return BucketPolicy.calendar(Granularity(name))
        except ValueError:
            pass
        if name in _ALIASES:
            return BucketPolicy.calendar(_ALIASES[name])
        if name.isascii() and name.isdigit():
            return parse_policy(int(name))
    raise InvalidStepError(value)


def select_granularity(first: int, last: int) -> Granularity:
    """Pick a calendar granularity from the span covered by the commits."""
    gap = last - first
    if gap > MONTHLY_THRESHOLD:
        return Granularity.MONTHLY
    elif gap > WEEKLY_THRESHOLD:
        return Granularity.WEEKLY
    elif gap > DAILY_THRESHOLD:
        return Granularity.DAILY
    else:
        return Granularity.HOURLY


def truncate(timestamp: int, policy: BucketPolicy, tz: Optional[tzinfo] = None) -> int:
    """Map a timestamp to the start of its bucket.

    Calendar granularities truncate in ``tz`` (system local when None).
    Fixed steps are epoch-aligned and ignore ``tz`` entirely.
    """
    if policy.step is not None:
        return timestamp - timestamp % policy.step

    moment = datetime.fromtimestamp(timestamp, tz)
    granularity = policy.granularity

    if granularity is Granularity.HOURLY:
        # replace() keeps ``fold`` so the repeated DST hour stays distinct
        return int(moment.replace(minute=0, second=0, microsecond=0).timestamp())

    day = moment.date()
    if granularity is Granularity.WEEKLY:
        # Sunday = 0
        day -= timedelta(days=(day.weekday() + 1) % 7)
    elif granularity is Granularity.MONTHLY:
        day = day.replace(day=1)
    elif granularity is Granularity.YEARLY:
        day = day.replace(month=1, day=1)

    return int(datetime.combine(day, time.min, tzinfo=tz).timestamp())


def fill_gaps(keys: Iterable[int], policy: BucketPolicy) -> list[int]:
    """Return ``keys`` sorted with empty bucket keys inserted between them.

    Between each pair of existing keys, keys are synthesized at one nominal
    width apart until the next existing key is within the policy tolerance.
    Applying this to its own output adds nothing.
    """
    ordered = sorted(set(keys))
    if not ordered:
        return []

    width = policy.width
    tolerance = policy.tolerance
    filled = [ordered[0]]
    for prev_key, next_key in zip(ordered, ordered[1:]):
        t = prev_key + width
        while next_key - t > tolerance:
            filled.append(t)
            t += width
        filled.append(next_key)
    return filled


def rank_authors(author_totals: dict[str, int]) -> tuple[str, ...]:
    """Authors by descending commit count; ties keep first-encounter order."""
    return tuple(sorted(author_totals, key=lambda author: -author_totals[author]))


class Binner:
    """Build a :class:`TimeSeries` from commit records.

    The timezone used for calendar truncation is fixed at construction;
    ``None`` means the system-local zone.
    """

    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz

    def bin(
        self,
        records: Iterable[CommitRecord],
        policy: Optional[PolicyLike] = None,
    ) -> TimeSeries:
        """Bin ``records`` under ``policy``, auto-selecting one when omitted.

        Raises:
            EmptyInputError: if ``records`` yields nothing.
            InvalidStepError: if ``policy`` cannot be parsed.
        """
        resolved = parse_policy(policy) if policy is not None else None

        # Stable sort: equal timestamps keep the order the source gave them.
        ordered = sorted(records, key=attrgetter("timestamp"))
        if not ordered:
            raise EmptyInputError()

        if resolved is None:
            resolved = BucketPolicy.calendar(
                select_granularity(ordered[0].timestamp, ordered[-1].timestamp)
            )
            logger.debug("Auto-selected %s buckets", resolved.label)

        per_bucket: dict[int, Counter[str]] = defaultdict(Counter)
        author_totals: Counter[str] = Counter()
        for record in ordered:
            key = truncate(record.timestamp, resolved, self.tz)
            per_bucket[key][record.author] += 1
            author_totals[record.author] += 1

        buckets = []
        for key in fill_gaps(per_bucket, resolved):
            counts = per_bucket.get(key)
            if counts:
                buckets.append(Bucket(start=key, total=sum(counts.values()), per_author=counts))
            else:
                buckets.append(Bucket(start=key))

        logger.debug(
            "Binned %d commits into %d %s buckets (%d synthesized)",
            len(ordered),
            len(buckets),
            resolved.label,
            len(buckets) - len(per_bucket),
        )

        return TimeSeries(
            buckets=tuple(buckets),
            policy=resolved,
            author_totals=dict(author_totals),
            author_ranking=rank_authors(author_totals),
        )


def bin_commits(
    records: Iterable[CommitRecord],
    policy: Optional[PolicyLike] = None,
    tz: Optional[tzinfo] = None,
) -> TimeSeries:
    """Convenience wrapper around ``Binner(tz).bin(records, policy)``."""
    return Binner(tz).bin(records, policy)
