"""Exception hierarchy for commit-timeline."""

from .analysis import (
    AnalysisError,
    CommitSourceError,
    EmptyInputError,
    NoCommitsError,
    RendererError,
)
from .base import CommitTimelineError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidStepError,
)

__all__ = [
    "CommitTimelineError",
    "AnalysisError",
    "EmptyInputError",
    "NoCommitsError",
    "CommitSourceError",
    "RendererError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidStepError",
]
