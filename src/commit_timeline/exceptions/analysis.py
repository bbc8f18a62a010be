"""Analysis-related exceptions: missing input, commit source and renderer failures."""

from typing import List, Optional

from .base import CommitTimelineError


class AnalysisError(CommitTimelineError):
    """Base class for errors raised while gathering or binning commits."""
    pass


class EmptyInputError(AnalysisError):
    """Raised when there are no commit records to bin."""

    def __init__(self, reason: str = "no commit records to bin"):
        super().__init__(f"Nothing to plot: {reason}", details={"reason": reason})
        self.reason = reason


class NoCommitsError(EmptyInputError):
    """Raised by a commit source that ran successfully but matched no commits."""

    def __init__(self, log_args: Optional[List[str]] = None):
        args = " ".join(log_args or [])
        reason = f"git log {args}".rstrip() + " returned no commits"
        super().__init__(reason)
        self.log_args = list(log_args or [])


class CommitSourceError(AnalysisError):
    """Raised when the commit source process fails to start or exits abnormally."""

    def __init__(self, command: List[str], reason: str):
        super().__init__(
            f"Commit source failed: {' '.join(command)}",
            details={"reason": reason},
        )
        self.command = command
        self.reason = reason


class RendererError(CommitTimelineError):
    """Raised when an external renderer cannot be run."""

    def __init__(self, renderer: str, reason: str):
        super().__init__(
            f"Renderer '{renderer}' failed",
            details={"renderer": renderer, "reason": reason},
        )
        self.renderer = renderer
        self.reason = reason
