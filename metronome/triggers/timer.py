"""
Timer trigger: fires after an initial delay and then at a fixed interval.
"""

import functools
import threading
from datetime import datetime, timedelta
from typing import Any

from metronome.core import Trigger as BaseTrigger
from metronome.core import TriggerEvent, TriggerInfo, TriggerState, describe_timestamp
from metronome.emitter import FireCallback
from metronome.logging_config import get_logger
from metronome.registry import register_trigger
from metronome.schedule import Schedule, parse_schedule
from metronome.timer import RepeatingTimer

logger = get_logger(__name__)

SOURCE_LABEL = "TimerTrigger"


def _project(moment: datetime, delta: timedelta) -> datetime:
    """moment + delta, saturating at datetime.max."""
    try:
        return moment + delta
    except OverflowError:
        return datetime.max


@register_trigger("timer")
class Trigger(BaseTrigger):
    """
    Triggers repeatedly on a fixed interval.

    Parameters:
        "[DELAY|]INTERVAL[|UserRun]" where DELAY and INTERVAL are UNIT:VALUE
        tokens (units MS, S, M, H, D). Without DELAY the first run happens
        immediately. With the "|UserRun" suffix the first run waits one
        full interval, for jobs that were just run by hand.

    start() may be called again while active: the running timer is
    cancelled and replaced, and no tick of the old schedule is delivered
    after start() returns.
    """

    def __init__(self) -> None:
        super().__init__()
        self.state = TriggerState.IDLE
        self.schedule: Schedule | None = None
        self.last_run_at: datetime | None = None
        self.next_run_at: datetime | None = None
        self._timer: RepeatingTimer | None = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def info(self) -> TriggerInfo:
        """Next run while active, nothing while idle."""
        with self._lock:
            if self.state is not TriggerState.ACTIVE:
                return TriggerInfo()
            return TriggerInfo(
                next_run_at=self.next_run_at,
                next_run_description=describe_timestamp(self.next_run_at)
            )

    def start(self, controller: Any, parameters: str, on_fire: FireCallback) -> bool:
        """Parse the parameters and start (or restart) the timer."""
        schedule = parse_schedule(str(parameters))
        next_run_at = _project(datetime.now(), schedule.initial_delay)

        with self._lock:
            previous = self._timer
            self._timer = None

        if previous is not None:
            logger.debug("Restarting timer trigger, cancelling previous schedule")
            previous.cancel()

        self.emitter.subscribe(on_fire)

        with self._lock:
            self._generation += 1
            timer = RepeatingTimer(
                schedule.initial_delay,
                schedule.interval,
                functools.partial(self._on_tick, self._generation),
                name=f"metronome-timer-{id(self):x}-{self._generation}"
            )
            self.schedule = schedule
            self.last_run_at = None
            self.next_run_at = next_run_at
            self._timer = timer
            self.state = TriggerState.ACTIVE

        timer.start()
        logger.info(
            "Timer trigger started: first run in %s, then every %s%s",
            schedule.initial_delay,
            schedule.interval,
            " (resuming after user run)" if schedule.is_resume_run else ""
        )
        return True

    def stop(self, controller: Any, on_fire: FireCallback) -> None:
        """Cancel the timer and unregister the callback."""
        with self._lock:
            timer = self._timer
            if timer is None or self.schedule is None:
                return
            self._timer = None
            self.state = TriggerState.IDLE
            self.last_run_at = datetime.now()
            self.next_run_at = _project(self.last_run_at, self.schedule.interval)

        timer.cancel()
        self.emitter.unsubscribe(on_fire)
        logger.info("Timer trigger stopped")

    def _on_tick(self, generation: int, sequence: int) -> None:
        """Record the run and notify subscribers."""
        with self._lock:
            schedule = self.schedule
            if (
                generation != self._generation
                or self.state is not TriggerState.ACTIVE
                or schedule is None
            ):
                # Tick of a superseded or stopped schedule
                return
            self.last_run_at = datetime.now()
            self.next_run_at = _project(self.last_run_at, schedule.interval)
            description = describe_timestamp(self.next_run_at)

        logger.debug("Timer tick %d, next run at %s", sequence, description)
        self.emitter.emit(TriggerEvent(
            source_id=SOURCE_LABEL,
            sender_id=SOURCE_LABEL,
            info=description
        ))


# Export with descriptive name for imports
TimerTrigger = Trigger
__all__ = ["TimerTrigger"]
