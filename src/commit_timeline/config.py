"""Configuration loading and management for commit-timeline.

Configuration sources are merged in priority order:
    1. Defaults (defined in TimelineConfig)
    2. Global config (~/.commit-timeline.toml)
    3. Project config (./commit-timeline.toml)
    4. Explicit config file
    5. Environment variables (COMMIT_TIMELINE_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(renderer="gnuplot", chart_height=20)
    >>> config.renderer
    'gnuplot'
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from datetime import tzinfo
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .exceptions import CommitTimelineError, InvalidConfigError
from .formatters import RENDERERS, RenderOptions

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "COMMIT_TIMELINE_"


@dataclass(frozen=True)
class TimelineConfig:
    """Settings for one run, built once and passed explicitly.

    Attributes:
        Rendering:
            renderer: glyph, gnuplot, url or json
            chart_height: rows for glyph charts, pixels/10 for url
            chart_width: pixels/10 for url
            time_format: strftime override for axis/bucket labels
            max_authors: authors listed in legends (0 hides them)
            gnuplot_command: executable used to spawn gnuplot
            chart_url_base: base URL of the image-chart service

        Binning:
            timezone: IANA zone for calendar buckets (None = system local)

        Git integration:
            git_timeout_seconds: timeout for the git log process
            git_max_commits: maximum commits to read (0 = unlimited)

        Output control:
            verbosity: logging verbosity level
    """

    renderer: str = "glyph"
    chart_height: int = 1
    chart_width: int = 80
    time_format: Optional[str] = None
    max_authors: int = 5
    gnuplot_command: str = "gnuplot"
    chart_url_base: str = "https://image-charts.com/chart"

    timezone: Optional[str] = None

    git_timeout_seconds: int = 60
    git_max_commits: int = 0

    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        # TOML values arrive untyped
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidConfigError(name, value, "expected an integer")
        for name in _STR_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str) and not (value is None and name in _OPTIONAL_FIELDS):
                raise InvalidConfigError(name, value, "expected a string")

        if self.renderer not in RENDERERS:
            raise InvalidConfigError(
                "renderer", self.renderer, f"expected one of {', '.join(RENDERERS)}"
            )
        if self.chart_height < 1:
            raise InvalidConfigError("chart_height", self.chart_height, "must be at least 1")
        if self.chart_width < 1:
            raise InvalidConfigError("chart_width", self.chart_width, "must be at least 1")
        if self.max_authors < 0:
            raise InvalidConfigError("max_authors", self.max_authors, "must be non-negative")
        if self.git_timeout_seconds < 1:
            raise InvalidConfigError(
                "git_timeout_seconds", self.git_timeout_seconds, "must be at least 1"
            )
        if self.git_max_commits < 0:
            raise InvalidConfigError("git_max_commits", self.git_max_commits, "must be non-negative")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "expected quiet/normal/verbose")
        _resolve_timezone(self.timezone)

    @property
    def tzinfo(self) -> Optional[tzinfo]:
        """Resolved timezone, or None for the system-local zone."""
        return _resolve_timezone(self.timezone)

    def render_options(self, title: Optional[str] = None) -> RenderOptions:
        return RenderOptions(
            chart_height=self.chart_height,
            chart_width=self.chart_width,
            time_format=self.time_format,
            max_authors=self.max_authors,
            title=title,
            tz=self.tzinfo,
        )


_INT_FIELDS = (
    "chart_height",
    "chart_width",
    "max_authors",
    "git_timeout_seconds",
    "git_max_commits",
)
_STR_FIELDS = (
    "renderer",
    "time_format",
    "gnuplot_command",
    "chart_url_base",
    "timezone",
    "verbosity",
)
_OPTIONAL_FIELDS = ("time_format", "timezone")


def _resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidConfigError("timezone", name, f"unknown timezone: {e}")


def load_config(config_file: Optional[Path] = None, **overrides) -> TimelineConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); None values
            are ignored so unset flags do not mask file settings

    Returns:
        Validated TimelineConfig instance

    Raises:
        CommitTimelineError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".commit-timeline.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise CommitTimelineError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "commit-timeline.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise CommitTimelineError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise CommitTimelineError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise CommitTimelineError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    # Verbosity arrives from the CLI as two booleans
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(TimelineConfig)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise CommitTimelineError(f"Invalid configuration: unknown option(s) {', '.join(unknown)}")

    return TimelineConfig(**merged)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from COMMIT_TIMELINE_* environment variables.

    Every TimelineConfig field has a matching variable, e.g.
    COMMIT_TIMELINE_RENDERER=gnuplot or COMMIT_TIMELINE_CHART_HEIGHT=8.
    """
    type_hints = get_type_hints(TimelineConfig)
    result: dict[str, Any] = {}

    for f in fields(TimelineConfig):
        env_key = f"{ENV_PREFIX}{f.name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hints[f.name])
        except ValueError as e:
            raise CommitTimelineError(f"Invalid {env_key}: {e}")
        if parsed is not None:
            result[f.name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise CommitTimelineError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
