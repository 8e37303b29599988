"""
Core interfaces and data structures for Metronome triggers.

A trigger decides when an associated job should run. The host starts it with
a parameter string and a callback, the trigger calls back with a
TriggerEvent every time it fires, and the host stops it again when done.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from metronome.emitter import EventEmitter, FireCallback


class TriggerState(Enum):
    """Lifecycle state of a trigger."""
    IDLE = "idle"
    ACTIVE = "active"


@dataclass(frozen=True)
class TriggerInfo:
    """Snapshot of a trigger's upcoming run, as shown to the host."""
    next_run_at: datetime | None = None
    next_run_description: str | None = None


@dataclass(frozen=True)
class TriggerEvent:
    """
    Notification delivered to subscribers when a trigger fires.

    Only the source, sender and info fields are filled in by the built-in
    triggers; the remaining fields are placeholders for hosts that route
    events through a larger job tree.
    """
    source_id: str
    sender_id: str
    info: str | None
    node_name: str = ""
    node_path: str = ""
    state: str | None = None
    progress: int = 0
    result: Any = None
    environment: dict[str, Any] | None = None
    timestamp: datetime = field(default_factory=datetime.now)


def describe_timestamp(moment: datetime | None) -> str | None:
    """Human readable form of a next-run timestamp."""
    if moment is None:
        return None
    return moment.isoformat(sep=" ", timespec="seconds")


class Trigger(ABC):
    """
    Base class for all triggers.

    Subclasses keep their subscribers in self.emitter and decide when to
    call self.emitter.emit().
    """

    def __init__(self) -> None:
        self.emitter = EventEmitter()

    @abstractmethod
    def start(self, controller: Any, parameters: str, on_fire: FireCallback) -> bool:
        """
        Start the trigger.

        Args:
            controller: Opaque object of the host starting the trigger
            parameters: Trigger specific parameter string
            on_fire: Callback invoked with a TriggerEvent whenever the trigger fires

        Returns:
            True if the trigger was (re)started by this call
        """
        raise NotImplementedError

    @abstractmethod
    def stop(self, controller: Any, on_fire: FireCallback) -> None:
        """
        Stop the trigger and unregister the callback.

        Args:
            controller: Opaque object of the host stopping the trigger
            on_fire: Callback passed to start()
        """
        raise NotImplementedError

    @property
    @abstractmethod
    def info(self) -> TriggerInfo:
        """Information about the next scheduled run."""
        raise NotImplementedError
