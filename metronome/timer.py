"""
Cancellable repeating timer running on a background thread.
"""

import threading
import time
from collections.abc import Callable
from datetime import timedelta

from metronome.logging_config import get_logger

logger = get_logger(__name__)


class RepeatingTimer:
    """
    Fires a tick once after an initial delay and then every interval.

    Ticks are numbered from 0 and delivered one at a time on a daemon
    thread, in order. Deadlines are laid out on the monotonic clock from the
    moment the timer starts; when a tick runs late the next deadline is
    re-anchored to the current time instead of firing a burst of missed
    ticks.

    cancel() stops the thread. A tick already being delivered when cancel()
    is called is allowed to finish, but no further tick is started.
    """

    def __init__(
        self,
        initial_delay: timedelta,
        interval: timedelta,
        on_tick: Callable[[int], None],
        name: str = "metronome-timer"
    ) -> None:
        self.initial_delay = initial_delay
        self.interval = interval
        self.on_tick = on_tick
        self.name = name
        self.thread: threading.Thread | None = None
        self.stop_event: threading.Event = threading.Event()

    @property
    def cancelled(self) -> bool:
        """Whether cancel() has been called."""
        return self.stop_event.is_set()

    @property
    def running(self) -> bool:
        """Whether the timer thread is alive."""
        return self.thread is not None and self.thread.is_alive()

    def start(self) -> None:
        """Start the timer thread."""
        if self.thread is not None:
            raise RuntimeError("Timer already started")

        self.thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self.thread.start()

    def cancel(self, timeout: float = 5.0) -> None:
        """
        Cancel the timer and wait for its thread to finish.

        Args:
            timeout: Seconds to wait for a tick in flight to complete
        """
        self.stop_event.set()

        thread = self.thread
        if thread is None or thread is threading.current_thread():
            # Cancelled from inside a tick; the loop exits once it returns
            return

        thread.join(timeout=timeout)
        if thread.is_alive():
            logger.warning(
                "Timer thread '%s' still busy %.1fs after cancel",
                self.name,
                timeout
            )

    def _run(self) -> None:
        interval = self.interval.total_seconds()
        deadline = time.monotonic() + self.initial_delay.total_seconds()
        sequence = 0

        while not self._wait_until(deadline):
            try:
                self.on_tick(sequence)
            except Exception:
                logger.error("Tick %d of timer '%s' failed", sequence, self.name, exc_info=True)

            sequence += 1
            deadline = max(deadline + interval, time.monotonic())

        logger.debug("Timer '%s' stopped after %d tick(s)", self.name, sequence)

    def _wait_until(self, deadline: float) -> bool:
        """Sleep until the monotonic deadline; True if cancelled first."""
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return self.stop_event.is_set()
            # Event.wait rejects timeouts above TIMEOUT_MAX
            if self.stop_event.wait(min(remaining, threading.TIMEOUT_MAX)):
                return True
