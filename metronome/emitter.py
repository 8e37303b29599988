"""
Ordered callback registry used by triggers to notify their subscribers.
"""

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from metronome.core import TriggerEvent

FireCallback = Callable[["TriggerEvent"], None]


class EventEmitter:
    """
    Ordered list of callbacks invoked for every trigger event.

    Subscribing the same callback twice keeps a single registration, so a
    restarted trigger does not deliver each event twice.
    """

    def __init__(self) -> None:
        self._callbacks: list[FireCallback] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: FireCallback) -> None:
        """Register a callback; it is invoked after those already registered."""
        with self._lock:
            if callback not in self._callbacks:
                self._callbacks.append(callback)

    def unsubscribe(self, callback: FireCallback) -> None:
        """Remove a callback. Unknown callbacks are ignored."""
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    @property
    def subscribers(self) -> list[FireCallback]:
        """Snapshot of the registered callbacks in invocation order."""
        with self._lock:
            return list(self._callbacks)

    def emit(self, event: "TriggerEvent") -> None:
        """
        Invoke every registered callback with the event.

        Callbacks run synchronously in registration order over a snapshot of
        the registry, so they may subscribe or unsubscribe while being
        called. Exceptions raised by a callback propagate to the caller.
        """
        for callback in self.subscribers:
            callback(event)

    def __len__(self) -> int:
        with self._lock:
            return len(self._callbacks)
