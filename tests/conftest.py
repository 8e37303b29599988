"""
Pytest configuration and fixtures for Metronome tests.
"""

import threading
import time
from pathlib import Path

import pytest

from metronome.core import TriggerEvent


class EventRecorder:
    """Callback that records trigger events and when they arrived."""

    def __init__(self) -> None:
        self.events: list[TriggerEvent] = []
        self.times: list[float] = []
        self.fired = threading.Event()
        self._lock = threading.Lock()

    def __call__(self, event: TriggerEvent) -> None:
        with self._lock:
            self.events.append(event)
            self.times.append(time.monotonic())
        self.fired.set()

    @property
    def count(self) -> int:
        with self._lock:
            return len(self.events)

    def wait_for(self, count: int, timeout: float = 2.0) -> bool:
        """Wait until at least count events have been recorded."""
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if self.count >= count:
                return True
            time.sleep(0.01)
        return self.count >= count


@pytest.fixture
def recorder() -> EventRecorder:
    """Provide a fresh event recorder."""
    return EventRecorder()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Path for a YAML configuration file inside the test directory."""
    return tmp_path / "config.yaml"
