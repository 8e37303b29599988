"""
File system event trigger using watchdog.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Any

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer as WatchdogObserver

from metronome.core import Trigger as BaseTrigger
from metronome.core import TriggerEvent, TriggerInfo, TriggerState
from metronome.emitter import EventEmitter, FireCallback
from metronome.errors import TriggerParameterError
from metronome.logging_config import get_logger
from metronome.registry import register_trigger

if TYPE_CHECKING:
    from watchdog.observers.api import BaseObserver

logger = get_logger(__name__)

SOURCE_LABEL = "FileEventTrigger"
EVENT_TYPES = ("modified", "created", "deleted", "moved")


def parse_watch_parameters(parameters: str) -> tuple[Path, list[str], bool]:
    """
    Parse "PATH[|EVENTS][|recursive]".

    EVENTS is a comma separated subset of modified, created, deleted and
    moved; it defaults to modified.
    """
    parts = [part.strip() for part in parameters.split("|")]
    if not parts[0]:
        raise TriggerParameterError("A path to watch is required: PATH[|EVENTS][|recursive]")

    events = ["modified"]
    if len(parts) > 1 and parts[1]:
        events = [name.strip().lower() for name in parts[1].split(",") if name.strip()]
        unknown = [name for name in events if name not in EVENT_TYPES]
        if unknown:
            raise TriggerParameterError(
                f"Unknown file event(s) {', '.join(unknown)}; "
                f"expected any of {', '.join(EVENT_TYPES)}"
            )

    recursive = len(parts) > 2 and parts[2].lower() == "recursive"
    return Path(parts[0]), events, recursive


class _Handler(FileSystemEventHandler):
    """Forwards matching watchdog events to the trigger's subscribers."""

    def __init__(self, watch_path: Path, events: list[str], emitter: EventEmitter) -> None:
        super().__init__()
        self.watch_path = watch_path
        self.events = events
        self.emitter = emitter

    def _fire(self, kind: str, event: FileSystemEvent) -> None:
        if kind not in self.events:
            return

        event_path = event.src_path
        if not isinstance(event_path, str):
            event_path = event_path.decode()

        # If watching a specific file, only fire for that file
        if self.watch_path.is_file() and Path(event_path) != self.watch_path:
            return

        self.emitter.emit(TriggerEvent(
            source_id=SOURCE_LABEL,
            sender_id=SOURCE_LABEL,
            info=event_path
        ))

    def on_modified(self, event: FileSystemEvent) -> None:
        self._fire("modified", event)

    def on_created(self, event: FileSystemEvent) -> None:
        self._fire("created", event)

    def on_deleted(self, event: FileSystemEvent) -> None:
        self._fire("deleted", event)

    def on_moved(self, event: FileSystemEvent) -> None:
        self._fire("moved", event)


@register_trigger("file_event")
class Trigger(BaseTrigger):
    """
    Triggers on file system events using watchdog.

    Parameters:
        "PATH[|EVENTS][|recursive]", e.g. "/var/log/app.log|modified,deleted"
        or "/srv/inbox|created|recursive"
    """

    def __init__(self) -> None:
        super().__init__()
        self.state = TriggerState.IDLE
        self.path: Path | None = None
        self.observer: BaseObserver | None = None

    @property
    def info(self) -> TriggerInfo:
        if self.state is not TriggerState.ACTIVE:
            return TriggerInfo()
        return TriggerInfo(next_run_description=f"watching {self.path}")

    def start(self, controller: Any, parameters: str, on_fire: FireCallback) -> bool:
        """Start watching for file events."""
        path, events, recursive = parse_watch_parameters(str(parameters))

        # A watch that fails to start leaves the current one in place
        observer = WatchdogObserver()
        observer.schedule(
            _Handler(path, events, self.emitter),
            str(path.parent if path.is_file() else path),
            recursive=recursive
        )
        observer.start()

        self._stop_observer()
        self.emitter.subscribe(on_fire)
        self.path = path
        self.observer = observer
        self.state = TriggerState.ACTIVE
        logger.info("Watching %s for %s", path, ", ".join(events))
        return True

    def stop(self, controller: Any, on_fire: FireCallback) -> None:
        """Stop watching for file events."""
        if self.observer is None:
            return
        self._stop_observer()
        self.state = TriggerState.IDLE
        self.emitter.unsubscribe(on_fire)
        logger.info("Stopped watching %s", self.path)

    def _stop_observer(self) -> None:
        if self.observer is not None:
            self.observer.stop()
            self.observer.join()
            self.observer = None


# Export with descriptive name for imports
FileEventTrigger = Trigger
__all__ = ["FileEventTrigger"]
