"""
Manual trigger for host- or user-initiated runs.
"""

from typing import Any

from metronome.core import Trigger as BaseTrigger
from metronome.core import TriggerEvent, TriggerInfo, TriggerState
from metronome.emitter import FireCallback
from metronome.registry import register_trigger

SOURCE_LABEL = "ManualTrigger"


@register_trigger("manual")
class Trigger(BaseTrigger):
    """
    Trigger that fires only when fire() is called.

    Parameters are ignored. Hosts use it to run a job once by hand before
    handing it to a timer trigger started with the "|UserRun" suffix.
    """

    def __init__(self) -> None:
        super().__init__()
        self.state = TriggerState.IDLE

    @property
    def info(self) -> TriggerInfo:
        return TriggerInfo()

    def start(self, controller: Any, parameters: str, on_fire: FireCallback) -> bool:
        self.emitter.subscribe(on_fire)
        self.state = TriggerState.ACTIVE
        return True

    def stop(self, controller: Any, on_fire: FireCallback) -> None:
        if self.state is TriggerState.IDLE:
            return
        self.state = TriggerState.IDLE
        self.emitter.unsubscribe(on_fire)

    def fire(self, info: str | None = None) -> bool:
        """
        Notify subscribers on the calling thread.

        Returns:
            False if the trigger is not started, True otherwise
        """
        if self.state is not TriggerState.ACTIVE:
            return False
        self.emitter.emit(TriggerEvent(
            source_id=SOURCE_LABEL,
            sender_id=SOURCE_LABEL,
            info=info
        ))
        return True


# Export with descriptive name for imports
ManualTrigger = Trigger
__all__ = ["ManualTrigger"]
