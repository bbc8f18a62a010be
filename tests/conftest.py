"""Shared test fixtures for commit-timeline tests."""

from datetime import timezone

import pytest

from commit_timeline.temporal.models import CommitRecord


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def utc():
    return timezone.utc


@pytest.fixture
def make_records():
    """Build CommitRecords from (timestamp, author) pairs."""

    def _make(pairs):
        return [CommitRecord(timestamp=ts, author=author) for ts, author in pairs]

    return _make


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run with no user/project config files and no COMMIT_TIMELINE_* vars."""
    import os

    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("COMMIT_TIMELINE_"):
            monkeypatch.delenv(key)
    return tmp_path
