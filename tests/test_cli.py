"""Tests for CLI commands using Click's testing utilities."""

import sys

import pytest
from click.testing import CliRunner

from cmdkit.app import cli
from cmdkit.core import (
    FRAMEWORK_ERROR,
    context,
    get_error_log,
    get_option,
    log,
    start_log_recording,
    stop_log_recording,
)


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


# =============================================================================
# Group options
# =============================================================================


class TestGlobalOptions:
    def test_version_option(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "cmdkit" in result.output
        assert "0.1.0" in result.output

    def test_help_lists_table_options(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for flag in ("--verbose", "--simulate", "--nocolor", "--log-dir"):
            assert flag in result.output

    def test_flags_reach_context(self, runner):
        result = runner.invoke(cli, ["-v", "-s", "--columns", "100", "size", "1"])

        assert result.exit_code == 0
        assert context.get("VERBOSE") is True
        assert context.get("SIMULATE") is True
        assert context.get("COLUMNS") == 100
        assert get_option("simulate", context_name="cli") is True

    def test_yes_sets_affirmative(self, runner):
        runner.invoke(cli, ["-y", "size", "1"])
        assert context.get("AFFIRMATIVE") is True

    def test_debug_implies_verbose(self, runner):
        runner.invoke(cli, ["--debug", "size", "1"])
        assert context.get("VERBOSE") is True

    def test_environment_flag(self, runner, monkeypatch):
        monkeypatch.setenv("CMDKIT_SIMULATE", "1")
        runner.invoke(cli, ["size", "1"])
        assert context.get("SIMULATE") is True


# =============================================================================
# Commands
# =============================================================================


class TestOptionsCommand:
    def test_brief(self, runner):
        result = runner.invoke(cli, ["options"])

        assert result.exit_code == 0
        assert "--simulate" in result.output
        assert "--alias-path" not in result.output

    def test_all(self, runner):
        result = runner.invoke(cli, ["options", "--all"])

        assert result.exit_code == 0
        assert "--alias-path" in result.output
        assert "--backend" not in result.output


class TestSizeCommand:
    def test_formats_each_value(self, runner):
        result = runner.invoke(cli, ["size", "512", "1536", "1048576"])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["512 bytes", "1.5 KB", "1 MB"]

    def test_requires_argument(self, runner):
        result = runner.invoke(cli, ["size"])
        assert result.exit_code != 0


class TestMimeCommand:
    def test_gzip(self, runner, gzip_file):
        result = runner.invoke(cli, ["mime", str(gzip_file)])

        assert result.exit_code == 0
        assert "application/x-gzip" in result.output

    def test_verbose_details(self, runner, zip_file):
        result = runner.invoke(cli, ["-v", "--nocolor", "mime", str(zip_file)])

        assert result.exit_code == 0
        assert "Archive:   yes" in result.output
        assert "Extension: .zip" in result.output

    def test_unknown_type(self, runner, text_file):
        result = runner.invoke(cli, ["--nocolor", "mime", str(text_file)])

        assert result.exit_code == FRAMEWORK_ERROR
        assert "FILE_UNKNOWN_TYPE" in get_error_log()

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["--nocolor", "mime", str(tmp_path / "nope.bin")])

        assert result.exit_code == FRAMEWORK_ERROR
        assert get_error_log()["FILE_NOT_FOUND"][0].startswith("File not found")


class TestExecCommand:
    def test_runs_command(self, runner):
        result = runner.invoke(cli, ["exec", f'"{sys.executable}" -c "pass"'])
        assert result.exit_code == 0

    def test_failure_sets_status(self, runner):
        result = runner.invoke(cli, ["--nocolor", "exec", f'"{sys.executable}" -c "raise SystemExit(2)"'])

        assert result.exit_code == FRAMEWORK_ERROR
        assert "COMMAND_FAILED" in get_error_log()

    def test_simulate_skips_command(self, runner, tmp_path):
        marker = tmp_path / "marker"
        result = runner.invoke(cli, ["--simulate", "exec", f"touch {marker}"])

        assert result.exit_code == 0
        assert not marker.exists()


class TestLogHistoryCommand:
    def test_empty(self, runner):
        result = runner.invoke(cli, ["log-history"])

        assert result.exit_code == 0
        assert "No log entries." in result.output

    def test_records_run(self, runner, tmp_path):
        result = runner.invoke(cli, ["--debug", "--nocolor", "--record", "--log-dir", str(tmp_path), "log-history"])

        assert result.exit_code == 0
        assert "[debug] Recording log to" in result.output
        assert list(tmp_path.glob("cmdkit_log_*.txt"))

    def test_reads_recorded_file(self, runner, tmp_path, captured_entries):
        path = start_log_recording("earlier.txt", log_dir=tmp_path)
        log("Unpacked release.tar.gz", "ok")
        log("Checksum mismatch", "error", "BAD_CHECKSUM")
        stop_log_recording()

        result = runner.invoke(cli, ["log-history", "--file", str(path)])

        assert result.exit_code == 0
        assert "[OK] Unpacked release.tar.gz" in result.output
        assert "[ERROR] Checksum mismatch" in result.output
        assert "CMDKIT LOG" not in result.output

    def test_recorded_file_errors_only(self, runner, tmp_path, captured_entries):
        path = start_log_recording("earlier.txt", log_dir=tmp_path)
        log("Unpacked release.tar.gz", "ok")
        log("Disk almost full", "warning")
        stop_log_recording()

        result = runner.invoke(cli, ["log-history", "--errors", "--file", str(path)])

        assert "[WARNING] Disk almost full" in result.output
        assert "Unpacked" not in result.output

    def test_missing_recorded_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["log-history", "--file", str(tmp_path / "absent.txt")])

        assert result.exit_code != 0
