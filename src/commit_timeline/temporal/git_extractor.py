"""Extract commit timestamps and authors via ``git log``."""

import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from ..exceptions import CommitSourceError, NoCommitsError
from ..logging_config import get_logger
from .models import CommitRecord

logger = get_logger(__name__)


class GitCommitSource:
    """Run ``git log`` and turn its output into CommitRecords, oldest first."""

    LOG_FORMAT = "%at|%an"

    def __init__(self, repo_path: str = ".", timeout_seconds: int = 60, max_commits: int = 0):
        self.repo_path = str(Path(repo_path).resolve())
        self.timeout_seconds = timeout_seconds
        self.max_commits = max_commits

    def build_command(self, log_args: Optional[Sequence[str]] = None) -> List[str]:
        cmd = ["git", "-C", self.repo_path, "log", f"--format={self.LOG_FORMAT}"]
        if self.max_commits > 0:
            cmd.append(f"-n{self.max_commits}")
        # Filter arguments (revisions, --since, -- paths) go through untouched
        cmd.extend(log_args or [])
        return cmd

    def fetch(self, log_args: Optional[Sequence[str]] = None) -> List[CommitRecord]:
        """Return the matching commits sorted by timestamp.

        Raises:
            CommitSourceError: git is missing, timed out or exited non-zero.
            NoCommitsError: git succeeded but matched nothing.
        """
        cmd = self.build_command(log_args)
        logger.debug("Running %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError as e:
            raise CommitSourceError(cmd, f"git executable not found: {e}") from e
        except subprocess.TimeoutExpired as e:
            raise CommitSourceError(
                cmd, f"timed out after {self.timeout_seconds}s"
            ) from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise CommitSourceError(cmd, stderr or f"exit status {result.returncode}")

        records = self.parse_log(result.stdout)
        if not records:
            raise NoCommitsError(list(log_args or []))

        logger.debug("git log returned %d commits", len(records))
        return records

    @staticmethod
    def parse_log(raw: str) -> List[CommitRecord]:
        """Parse ``%at|%an`` lines into records sorted oldest first.

        Author names may contain ``|``; only the first separator splits.
        Lines that do not parse are skipped.
        """
        records = []
        for line in raw.splitlines():
            line = line.strip()
            if not line:
                continue
            ts_str, sep, author = line.partition("|")
            if not sep:
                logger.debug("Skipping malformed git log line: %r", line)
                continue
            try:
                timestamp = int(ts_str)
            except ValueError:
                logger.debug("Skipping line with bad timestamp: %r", line)
                continue
            records.append(CommitRecord(timestamp=timestamp, author=author.strip()))

        # git log lists newest first; reversing keeps equal timestamps in commit order
        records.reverse()
        records.sort(key=lambda r: r.timestamp)
        return records
