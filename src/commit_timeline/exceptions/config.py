"""Configuration exceptions: settings and bucket policies."""

from typing import Any, Optional

from .base import CommitTimelineError


class ConfigurationError(CommitTimelineError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class InvalidStepError(ConfigurationError):
    """Raised when a bucket step is neither a positive integer nor a granularity name."""

    def __init__(self, value: Any, reason: Optional[str] = None):
        reason = reason or "expected a positive number of seconds or one of hourly/daily/weekly/monthly/yearly"
        super().__init__(
            f"Invalid step: {value!r}",
            details={"reason": reason},
        )
        self.value = value
        self.reason = reason
