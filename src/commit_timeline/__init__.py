"""
commit-timeline - how commits are distributed over time

Reads commit timestamps from git, bins them into calendar or fixed-width
buckets with per-author counts, and renders the series as a terminal
sparkline, a gnuplot chart or an image-chart URL.
"""

__version__ = "0.1.0"

from .config import TimelineConfig, load_config
from .temporal import (
    Binner,
    Bucket,
    BucketPolicy,
    CommitRecord,
    GitCommitSource,
    Granularity,
    TimeSeries,
    bin_commits,
    parse_policy,
)

__all__ = [
    "bin_commits",  # Main entry point
    "Binner",
    "Bucket",
    "BucketPolicy",
    "CommitRecord",
    "GitCommitSource",
    "Granularity",
    "TimeSeries",
    "TimelineConfig",
    "load_config",
    "parse_policy",
]
