"""
Job coordinator that wires a configured job to its trigger.
"""

from pathlib import Path

from metronome.config import JobConfig
from metronome.core import Trigger, TriggerEvent
from metronome.logging_config import get_logger
from metronome.plugins import create_trigger
from metronome.schedule import RESUME_SUFFIX
from metronome.triggers.manual import ManualTrigger

logger = get_logger(__name__)


class JobCoordinator:
    """
    Runs a single job whenever its trigger fires.

    Running a job means logging the firing and, if configured, bumping the
    modification time of the job's touch file so that file watchers
    downstream pick it up.
    """

    def __init__(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        name: str,
        trigger: Trigger,
        trigger_type: str,
        parameters: str,
        touch: str | None = None,
        run_on_start: bool = False
    ):
        """
        Initialize the coordinator.

        Args:
            name: Job name
            trigger: Idle trigger instance
            trigger_type: Registered type name of the trigger
            parameters: Parameter string passed to trigger.start()
            touch: Optional file to touch on every run
            run_on_start: Run once by hand before starting the trigger
        """
        self.name = name
        self.trigger = trigger
        self.trigger_type = trigger_type
        self.parameters = parameters
        self.touch_path = Path(touch) if touch else None
        self.run_on_start = run_on_start
        self.run_count = 0
        self.last_event: TriggerEvent | None = None

    def run(self, event: TriggerEvent) -> None:
        """Callback handed to the trigger."""
        self.run_count += 1
        self.last_event = event
        logger.info(
            "Job '%s' fired by %s (next run: %s)",
            self.name,
            event.sender_id,
            event.info or "n/a"
        )

        if self.touch_path is not None:
            self._touch(self.touch_path)

    def _touch(self, path: Path) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch(exist_ok=True)
        except OSError:
            logger.warning(
                "Failed to touch %s for job '%s'",
                path,
                self.name,
                exc_info=True
            )

    def run_once(self) -> None:
        """Run the job immediately through a manual trigger."""
        manual = ManualTrigger()
        manual.start(self, "", self.run)
        try:
            manual.fire("run on start")
        finally:
            manual.stop(self, self.run)

    def start(self) -> None:
        """Start the trigger, running the job first if configured."""
        parameters = self.parameters
        if self.run_on_start:
            self.run_once()
            if self.trigger_type == "timer" and not parameters.endswith(RESUME_SUFFIX):
                parameters += RESUME_SUFFIX

        self.trigger.start(self, parameters, self.run)

    def stop(self) -> None:
        """Stop the trigger."""
        self.trigger.stop(self, self.run)


def create_job_coordinator(job_config: JobConfig) -> JobCoordinator:
    """
    Factory function to create a job coordinator from configuration.

    Args:
        job_config: The configuration object for the job.

    Returns:
        JobCoordinator instance with an idle trigger
    """
    trigger = create_trigger(job_config.trigger.type)

    return JobCoordinator(
        name=job_config.name,
        trigger=trigger,
        trigger_type=job_config.trigger.type,
        parameters=job_config.trigger.parameters,
        touch=job_config.touch,
        run_on_start=job_config.run_on_start,
    )
