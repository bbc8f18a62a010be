"""Temporal analysis: commit source and time-bucketing."""

from .binning import (
    Binner,
    bin_commits,
    fill_gaps,
    parse_policy,
    rank_authors,
    select_granularity,
    truncate,
)
from .git_extractor import GitCommitSource
from .models import Bucket, BucketPolicy, CommitRecord, Granularity, TimeSeries

__all__ = [
    "Binner",
    "Bucket",
    "BucketPolicy",
    "CommitRecord",
    "GitCommitSource",
    "Granularity",
    "TimeSeries",
    "bin_commits",
    "fill_gaps",
    "parse_policy",
    "rank_authors",
    "select_granularity",
    "truncate",
]
