"""Tests for temporal data models."""

import dataclasses

import pytest

from commit_timeline.temporal.models import (
    DAY,
    HOUR,
    Bucket,
    BucketPolicy,
    CommitRecord,
    Granularity,
    TimeSeries,
)


class TestBucketPolicy:
    """Test BucketPolicy construction and derived values."""

    @pytest.mark.parametrize(
        "granularity,width",
        [
            (Granularity.HOURLY, HOUR),
            (Granularity.DAILY, DAY),
            (Granularity.WEEKLY, 7 * DAY),
            (Granularity.MONTHLY, 30 * DAY),
            (Granularity.YEARLY, 360 * DAY),
        ],
    )
    def test_calendar_width_and_tolerance(self, granularity, width):
        policy = BucketPolicy.calendar(granularity)
        assert policy.is_calendar
        assert policy.width == width
        assert policy.tolerance == width // 2
        assert policy.label == granularity.value

    def test_fixed_step(self):
        policy = BucketPolicy.fixed(900)
        assert not policy.is_calendar
        assert policy.width == 900
        assert policy.tolerance == 0
        assert policy.label == "900s"

    def test_needs_exactly_one_kind(self):
        with pytest.raises(ValueError):
            BucketPolicy()
        with pytest.raises(ValueError):
            BucketPolicy(granularity=Granularity.DAILY, step=60)

    def test_step_must_be_positive(self):
        with pytest.raises(ValueError):
            BucketPolicy.fixed(0)


class TestBucket:
    """Test Bucket immutability."""

    def test_defaults_to_empty(self):
        bucket = Bucket(start=100)
        assert bucket.total == 0
        assert bucket.is_empty
        assert dict(bucket.per_author) == {}

    def test_frozen(self):
        bucket = Bucket(start=0, total=1, per_author={"a": 1})
        with pytest.raises(dataclasses.FrozenInstanceError):
            bucket.total = 2
        with pytest.raises(TypeError):
            bucket.per_author["a"] = 5

    def test_copies_input_mapping(self):
        counts = {"a": 1}
        bucket = Bucket(start=0, total=1, per_author=counts)
        counts["a"] = 99
        assert bucket.per_author["a"] == 1


class TestTimeSeries:
    """Test TimeSeries properties."""

    def make_series(self):
        return TimeSeries(
            buckets=[
                Bucket(start=0, total=2, per_author={"a": 2}),
                Bucket(start=10),
                Bucket(start=20, total=3, per_author={"a": 1, "b": 2}),
            ],
            policy=BucketPolicy.fixed(10),
            author_totals={"a": 3, "b": 2},
            author_ranking=["a", "b"],
        )

    def test_summary_properties(self):
        series = self.make_series()
        assert series.max == 3
        assert series.start == 0
        assert series.end == 20
        assert series.total_commits == 5
        assert series.totals == [2, 0, 3]
        assert len(series) == 3

    def test_containers_are_immutable(self):
        series = self.make_series()
        assert isinstance(series.buckets, tuple)
        assert series.author_ranking == ("a", "b")
        with pytest.raises(TypeError):
            series.author_totals["c"] = 1


def test_commit_record_is_frozen():
    record = CommitRecord(timestamp=1, author="a")
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.timestamp = 2
