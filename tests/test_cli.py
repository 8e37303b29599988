"""
Tests for the command line interface.
"""

from pathlib import Path

import pytest

from metronome.cli import main


class TestCli:
    """Tests for CLI commands."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test running without a command."""
        assert main([]) == 0
        assert "usage: metronome" in capsys.readouterr().out

    def test_schedule_show(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test showing a resolved schedule."""
        assert main(["schedule", "show", "S:3|UserRun"]) == 0

        out = capsys.readouterr().out
        assert "Initial delay: 0:00:03" in out
        assert "Interval:      0:00:03" in out
        assert "Resume run:    yes" in out

    def test_schedule_show_invalid(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that malformed parameters fail with a message."""
        assert main(["schedule", "show", "X:5|S:3"]) == 1
        assert "No valid unit" in capsys.readouterr().err

    def test_trigger_list(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test listing trigger types."""
        assert main(["trigger", "list"]) == 0

        names = capsys.readouterr().out.split()
        assert {"file_event", "manual", "timer"} <= set(names)

    def test_config_validate(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test validating a good configuration."""
        config_file.write_text("""
jobs:
  - name: "snapshot"
    trigger:
      parameters: "S:5|S:3"
""")

        assert main(["-c", str(config_file), "config", "validate"]) == 0
        assert "1 job(s) configured" in capsys.readouterr().out

    def test_config_validate_missing_file(self, tmp_path: Path) -> None:
        """Test validating a missing configuration."""
        assert main(["-c", str(tmp_path / "missing.yaml"), "config", "validate"]) == 1

    def test_config_validate_invalid(self, config_file: Path) -> None:
        """Test validating a broken configuration."""
        config_file.write_text("jobs: []\n")

        assert main(["-c", str(config_file), "config", "validate"]) == 1

    def test_config_validate_bad_schedule(
        self, config_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that validation catches a schedule the daemon could not start."""
        config_file.write_text("""
jobs:
  - name: "snapshot"
    trigger:
      parameters: "X:5"
""")

        assert main(["-c", str(config_file), "config", "validate"]) == 1
        assert "No valid unit" in capsys.readouterr().err

    def test_job_list(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test listing configured jobs."""
        config_file.write_text("""
jobs:
  - name: "snapshot"
    trigger:
      parameters: "S:5|S:3"
    touch: "/tmp/snapshot.stamp"
    run_on_start: true
""")

        assert main(["-c", str(config_file), "job", "list"]) == 0

        out = capsys.readouterr().out
        assert "1. snapshot" in out
        assert "Parameters: S:5|S:3" in out
        assert "Runs on start" in out
