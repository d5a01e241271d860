"""Tests for the stepsched command line."""

import pytest
from click.testing import CliRunner

from stepsched.cli import cli
from stepsched.config import BASE_DURATION_ENV, WORKERS_ENV


@pytest.fixture
def runner(monkeypatch):
    monkeypatch.delenv(WORKERS_ENV, raising=False)
    monkeypatch.delenv(BASE_DURATION_ENV, raising=False)
    return CliRunner()


class TestOrderCommand:

    def test_prints_order(self, runner, sample_file):
        result = runner.invoke(cli, ["order", str(sample_file)])
        assert result.exit_code == 0
        assert "Step order: CABDFE" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["order", str(tmp_path / "nope.txt")])
        assert result.exit_code == 1
        assert "Input file not found" in result.output

    def test_malformed_line(self, runner, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("Step AB must be finished before step C can begin.\n")

        result = runner.invoke(cli, ["order", str(path)])
        assert result.exit_code == 1
        assert "Malformed input" in result.output

    def test_cycle(self, runner, tmp_path):
        path = tmp_path / "cycle.txt"
        path.write_text(
            "Step A must be finished before step B can begin.\n"
            "Step B must be finished before step A can begin.\n"
        )

        result = runner.invoke(cli, ["order", str(path)])
        assert result.exit_code == 1
        assert "Deadlock" in result.output


class TestTimeCommand:

    def test_two_workers(self, runner, sample_file):
        result = runner.invoke(cli, ["time", str(sample_file), "--workers", "2", "--base-duration", "0"])
        assert result.exit_code == 0
        assert result.output.strip().endswith(": 15")

    def test_env_defaults(self, runner, sample_file, monkeypatch):
        """Test STEPSCHED_* variables fill in missing options."""
        monkeypatch.setenv(WORKERS_ENV, "2")
        monkeypatch.setenv(BASE_DURATION_ENV, "0")

        result = runner.invoke(cli, ["time", str(sample_file)])
        assert result.exit_code == 0
        assert "2 worker(s), base duration 0: 15" in result.output

    def test_timeline(self, runner, sample_file):
        result = runner.invoke(
            cli, ["time", str(sample_file), "--workers", "2", "--base-duration", "0", "--timeline"]
        )
        assert result.exit_code == 0
        assert "TIMELINE" in result.output
        assert "worker 1  F" in result.output

    def test_invalid_workers(self, runner, sample_file):
        result = runner.invoke(cli, ["time", str(sample_file), "--workers", "0"])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestRunCommand:

    def test_both_reports(self, runner, sample_file):
        result = runner.invoke(cli, ["run", str(sample_file), "--workers", "2", "--base-duration", "0"])
        assert result.exit_code == 0
        assert "RUN STARTED" in result.output
        assert "Tasks: 6" in result.output
        assert "Step order: CABDFE" in result.output
        assert "2 worker(s), base duration 0: 15" in result.output

    def test_debug_flag(self, runner, sample_file):
        result = runner.invoke(cli, ["--debug", "run", str(sample_file)])
        assert result.exit_code == 0
        assert "[DEBUG] Loaded 7 edge(s)" in result.output


class TestGenericSteps:

    def test_order_digit_steps(self, runner, tmp_path):
        """Test single-character steps outside A-Z can still be ordered."""
        path = tmp_path / "digits.txt"
        path.write_text(
            "Step 1 must be finished before step 2 can begin.\n"
            "Step 0 must be finished before step 2 can begin.\n"
        )

        result = runner.invoke(cli, ["order", str(path)])
        assert result.exit_code == 0
        assert "Step order: 012" in result.output


class TestDebugOutput:

    @pytest.fixture
    def cycle_file(self, tmp_path):
        path = tmp_path / "cycle.txt"
        path.write_text(
            "Step A must be finished before step B can begin.\n"
            "Step B must be finished before step A can begin.\n"
        )
        return path

    def test_debug_shows_traceback(self, runner, cycle_file):
        """Test --debug adds a stack trace to the structured error."""
        result = runner.invoke(cli, ["--debug", "order", str(cycle_file)])
        assert result.exit_code == 1
        assert "Deadlock" in result.output
        assert "Traceback" in result.output

    def test_no_traceback_without_debug(self, runner, cycle_file):
        result = runner.invoke(cli, ["order", str(cycle_file)])
        assert result.exit_code == 1
        assert "Traceback" not in result.output

    def test_unexpected_error_reported(self, runner, tmp_path):
        """Test failures outside the known error kinds exit 1 with one line."""
        path = tmp_path / "binary.txt"
        path.write_bytes(b"\xff\xfe\x00Step")

        result = runner.invoke(cli, ["order", str(path)])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Traceback" not in result.output

    def test_unexpected_error_traceback_in_debug(self, runner, tmp_path):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"\xff\xfe\x00Step")

        result = runner.invoke(cli, ["--debug", "order", str(path)])
        assert result.exit_code == 1
        assert "Traceback" in result.output
        assert "UnicodeDecodeError" in result.output
