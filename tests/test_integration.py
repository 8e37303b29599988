"""
Integration tests for job coordination and the daemon.
"""

import os
import threading
import time
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

from metronome.config import JobConfig, TriggerConfig
from metronome.coordinator import JobCoordinator, create_job_coordinator
from metronome.core import TriggerEvent
from metronome.daemon import MetronomeDaemon
from metronome.triggers import ManualTrigger, TimerTrigger


def wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


class TestJobCoordinator:
    """Tests for JobCoordinator."""

    def test_create_from_config(self) -> None:
        """Test building a coordinator from a job configuration."""
        coordinator = create_job_coordinator(JobConfig(
            name="heartbeat",
            trigger=TriggerConfig(type="timer", parameters="S:10|M:1"),
        ))

        assert coordinator.name == "heartbeat"
        assert isinstance(coordinator.trigger, TimerTrigger)
        assert coordinator.parameters == "S:10|M:1"
        assert coordinator.touch_path is None

    def test_run_touches_file(self, tmp_path: Path) -> None:
        """Test that a run bumps the touch file's modification time."""
        stamp = tmp_path / "nested" / "job.stamp"
        coordinator = JobCoordinator(
            name="touch",
            trigger=ManualTrigger(),
            trigger_type="manual",
            parameters="",
            touch=str(stamp),
        )

        coordinator.run(TriggerEvent(source_id="Test", sender_id="Test", info=None))
        assert stamp.exists()

        os.utime(stamp, (0, 0))
        coordinator.run(TriggerEvent(source_id="Test", sender_id="Test", info=None))

        assert stamp.stat().st_mtime > 0
        assert coordinator.run_count == 2

    def test_touch_failure_is_logged_not_raised(self, tmp_path: Path) -> None:
        """Test that a failing touch does not break the trigger."""
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        coordinator = JobCoordinator(
            name="broken",
            trigger=ManualTrigger(),
            trigger_type="manual",
            parameters="",
            touch=str(blocker / "job.stamp"),
        )

        with patch("metronome.coordinator.logger") as mock_logger:
            coordinator.run(TriggerEvent(source_id="Test", sender_id="Test", info=None))

        assert coordinator.run_count == 1
        mock_logger.warning.assert_called_once()

    def test_timer_job_runs_repeatedly(self, tmp_path: Path) -> None:
        """Test a timer job end to end."""
        stamp = tmp_path / "job.stamp"
        coordinator = create_job_coordinator(JobConfig(
            name="fast",
            trigger=TriggerConfig(parameters="MS:50"),
            touch=str(stamp),
        ))

        coordinator.start()
        try:
            assert wait_until(lambda: coordinator.run_count >= 3)
        finally:
            coordinator.stop()

        assert stamp.exists()
        assert coordinator.last_event is not None
        assert coordinator.last_event.sender_id == "TimerTrigger"

    def test_run_on_start_resumes_timer(self) -> None:
        """Test that a job run on start waits a full interval afterwards."""
        coordinator = create_job_coordinator(JobConfig(
            name="resume",
            trigger=TriggerConfig(parameters="S:10"),
            run_on_start=True,
        ))

        coordinator.start()
        try:
            assert coordinator.run_count == 1
            assert coordinator.last_event is not None
            assert coordinator.last_event.source_id == "ManualTrigger"

            schedule = coordinator.trigger.schedule  # type: ignore[attr-defined]
            assert schedule.is_resume_run is True
            assert schedule.initial_delay.total_seconds() == 10

            time.sleep(0.2)
            assert coordinator.run_count == 1
        finally:
            coordinator.stop()

    def test_run_on_start_keeps_existing_suffix(self) -> None:
        """Test that the resume suffix is not appended twice."""
        coordinator = create_job_coordinator(JobConfig(
            name="resume",
            trigger=TriggerConfig(parameters="S:10|UserRun"),
            run_on_start=True,
        ))

        coordinator.start()
        try:
            schedule = coordinator.trigger.schedule  # type: ignore[attr-defined]
            assert schedule.is_resume_run is True
        finally:
            coordinator.stop()


class TestMetronomeDaemon:
    """End-to-end tests for the daemon."""

    def test_daemon_init_and_setup(self, config_file: Path) -> None:
        """Test daemon initialization with config."""
        config_file.write_text("""
jobs:
  - name: "one"
    trigger:
      parameters: "S:10|S:10"
  - name: "two"
    trigger:
      type: "manual"
""")

        daemon = MetronomeDaemon(str(config_file))
        daemon.setup_jobs()

        assert [c.name for c in daemon.coordinators] == ["one", "two"]
        assert isinstance(daemon.coordinators[0].trigger, TimerTrigger)
        assert isinstance(daemon.coordinators[1].trigger, ManualTrigger)

    def test_start_jobs_and_stop(self, config_file: Path, tmp_path: Path) -> None:
        """Test that the daemon runs timer jobs until stopped."""
        stamp = tmp_path / "snapshot.stamp"
        config_file.write_text(f"""
jobs:
  - name: "snapshot"
    trigger:
      parameters: "MS:50"
    touch: "{stamp}"
""")

        daemon = MetronomeDaemon(str(config_file))
        daemon.start_jobs()
        coordinator = daemon.coordinators[0]

        try:
            assert daemon.running
            assert wait_until(stamp.exists)
        finally:
            daemon.stop()

        runs_at_stop = coordinator.run_count
        time.sleep(0.2)
        assert coordinator.run_count == runs_at_stop
        assert not daemon.running
        assert coordinator.trigger.info.next_run_at is None

    def test_start_blocks_until_stop(self, config_file: Path) -> None:
        """Test that start() returns once stop() is called from another thread."""
        config_file.write_text("""
jobs:
  - name: "idle"
    trigger:
      parameters: "H:1|H:1"
""")

        daemon = MetronomeDaemon(str(config_file))
        runner = threading.Thread(target=daemon.start, daemon=True)
        runner.start()

        assert wait_until(lambda: daemon.running)
        daemon.stop()
        runner.join(timeout=3)

        assert not runner.is_alive()
