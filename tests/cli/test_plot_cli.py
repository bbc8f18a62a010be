"""Tests for the commit-timeline command."""

import json
import logging

import pytest
from typer.testing import CliRunner

from commit_timeline import __version__
from commit_timeline.cli import app
from commit_timeline.cli import plot as plot_module
from commit_timeline.exceptions import CommitSourceError, NoCommitsError
from commit_timeline.formatters import GnuplotRenderer
from commit_timeline.temporal.models import CommitRecord

runner = CliRunner()


@pytest.fixture
def source(isolated_config, monkeypatch):
    """Replace GitCommitSource with a fake returning canned records."""

    class FakeSource:
        records = [
            CommitRecord(0, "alice"),
            CommitRecord(3600, "bob"),
            CommitRecord(7200, "carol"),
        ]
        error = None
        instances = []
        calls = []

        def __init__(self, repo_path, timeout_seconds=60, max_commits=0):
            FakeSource.instances.append((repo_path, timeout_seconds, max_commits))

        def fetch(self, log_args=None):
            FakeSource.calls.append(list(log_args or []))
            if FakeSource.error is not None:
                raise FakeSource.error
            return list(FakeSource.records)

    monkeypatch.setattr(plot_module, "GitCommitSource", FakeSource)
    return FakeSource


class TestPlotOutput:
    """Happy paths for each renderer."""

    def test_json_with_fixed_step(self, source):
        result = runner.invoke(app, ["--json", "--step", "3600"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["policy"] == "3600s"
        assert data["max"] == 1
        assert [b["total"] for b in data["buckets"]] == [1, 1, 1]

    def test_glyph_default(self, source):
        result = runner.invoke(app, ["--step", "3600", "--tz", "UTC"])

        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        assert lines[0].startswith("1970-01-01 00:00 .. 1970-01-01 02:00")
        assert lines[1] == "███"

    def test_granularity_flag(self, source):
        result = runner.invoke(app, ["--weekly", "--renderer", "json", "--tz", "UTC"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["policy"] == "weekly"

    def test_auto_selected_granularity(self, source):
        result = runner.invoke(app, ["--json", "--tz", "UTC"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["policy"] == "hourly"

    def test_gnuplot_print_script(self, source):
        result = runner.invoke(app, ["--gnuplot", "--print-script", "--step", "3600"])

        assert result.exit_code == 0, result.output
        assert "$data << EOD" in result.stdout

    def test_gnuplot_spawns(self, source, monkeypatch):
        scripts = []
        monkeypatch.setattr(GnuplotRenderer, "spawn", lambda self, script: scripts.append(script))

        result = runner.invoke(app, ["--gnuplot", "--title", "History"])

        assert result.exit_code == 0, result.output
        assert len(scripts) == 1
        assert scripts[0].startswith("set title 'History'")

    def test_url(self, source):
        result = runner.invoke(app, ["--url", "--step", "3600"])

        assert result.exit_code == 0, result.output
        assert result.stdout.startswith("https://image-charts.com/chart?cht=bvs")

    def test_log_args_passed_through(self, source):
        result = runner.invoke(
            app, ["--json", "--since=2024-01-01", "--author", "bob", "HEAD"]
        )

        assert result.exit_code == 0, result.output
        assert source.calls == [["--since=2024-01-01", "--author", "bob", "HEAD"]]

    def test_path_separator_kept_for_git(self, source):
        result = runner.invoke(app, ["--json", "--since=2024-01-01", "--", "src/", "old dir"])

        assert result.exit_code == 0, result.output
        assert source.calls == [["--since=2024-01-01", "--", "src/", "old dir"]]

    def test_options_after_separator_go_to_git(self, source):
        result = runner.invoke(app, ["--json", "--", "--weird-name"])

        assert result.exit_code == 0, result.output
        assert source.calls == [["--", "--weird-name"]]

    def test_config_file_settings_used(self, source, isolated_config):
        (isolated_config / "commit-timeline.toml").write_text(
            'renderer = "json"\ngit_max_commits = 25\n'
        )
        result = runner.invoke(app, [])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["total_commits"] == 3
        assert source.instances[0][2] == 25

    def test_version(self, source):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout
        assert source.calls == []


class TestPlotErrors:
    """Fatal errors exit non-zero with a readable message."""

    def test_invalid_step_fails_before_reading_commits(self, source):
        result = runner.invoke(app, ["--step=banana"])

        assert result.exit_code == 1
        assert "Invalid step" in result.output
        assert source.instances == []
        assert source.calls == []

    def test_conflicting_granularities(self, source):
        result = runner.invoke(app, ["--hourly", "--daily"])

        assert result.exit_code == 1
        assert "Invalid step" in result.output
        assert source.calls == []

    def test_no_commits(self, source):
        source.error = NoCommitsError(["--author=nobody"])

        result = runner.invoke(app, ["--author=nobody"])

        assert result.exit_code == 1
        assert "Nothing to plot" in result.output

    def test_commit_source_failure(self, source):
        source.error = CommitSourceError(["git", "log"], "fatal: not a git repository")

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "not a git repository" in result.output

    def test_unknown_timezone(self, source):
        result = runner.invoke(app, ["--tz", "Nowhere/Special"])

        assert result.exit_code == 1
        assert "timezone" in result.output
        assert source.calls == []

    def test_wrongly_typed_config_value(self, source, isolated_config):
        (isolated_config / "commit-timeline.toml").write_text('chart_height = "5"\n')

        result = runner.invoke(app, ["--json"])

        assert result.exit_code == 1
        assert "chart_height" in result.output
        assert "Unexpected error" not in result.output
        assert source.calls == []


class TestPlotLogging:
    """Verbosity and log file handling."""

    def test_config_file_verbosity_applied(self, source, isolated_config):
        (isolated_config / "commit-timeline.toml").write_text('verbosity = "verbose"\n')

        result = runner.invoke(app, ["--json"])

        assert result.exit_code == 0, result.output
        assert logging.getLogger("commit_timeline").level == logging.DEBUG

    def test_env_verbosity_applied(self, source, monkeypatch):
        monkeypatch.setenv("COMMIT_TIMELINE_VERBOSITY", "quiet")

        result = runner.invoke(app, ["--json"])

        assert result.exit_code == 0, result.output
        assert logging.getLogger("commit_timeline").level == logging.ERROR

    def test_flag_beats_config_file(self, source, isolated_config):
        (isolated_config / "commit-timeline.toml").write_text('verbosity = "verbose"\n')

        result = runner.invoke(app, ["--json", "-q"])

        assert result.exit_code == 0, result.output
        assert logging.getLogger("commit_timeline").level == logging.ERROR

    def test_log_file(self, source, isolated_config):
        log_file = isolated_config / "run.log"

        result = runner.invoke(app, ["--json", "-v", "--log-file", str(log_file)])

        assert result.exit_code == 0, result.output
        assert "3 commits in 3 hourly buckets" in log_file.read_text()
