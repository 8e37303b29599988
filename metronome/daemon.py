"""
Main daemon entry point for Metronome.
"""

import argparse
import signal
import sys
import time
from typing import Any

from metronome.config import load_config
from metronome.coordinator import JobCoordinator, create_job_coordinator
from metronome.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


class MetronomeDaemon:
    """Main daemon class that runs the configured jobs."""

    def __init__(self, config_path: str) -> None:
        """
        Initialize the daemon.

        Args:
            config_path: Path to configuration file
        """
        self.config = load_config(config_path)
        self.coordinators: list[JobCoordinator] = []
        self.running = False

    def setup_jobs(self) -> None:
        """Set up all job coordinators from configuration."""
        for job_config in self.config.jobs:
            self.coordinators.append(create_job_coordinator(job_config))

        logger.info("Configured %s job(s)", len(self.coordinators))

    def start_jobs(self) -> None:
        """Start the trigger of every job."""
        if not self.coordinators:
            self.setup_jobs()

        for coordinator in self.coordinators:
            coordinator.start()
            logger.info(
                "Started job '%s' (%s trigger, next run: %s)",
                coordinator.name,
                coordinator.trigger_type,
                coordinator.trigger.info.next_run_description or "on event"
            )

        self.running = True

    def start(self) -> None:
        """Start the daemon and block until stopped."""
        logger.info("Starting Metronome daemon")
        self.start_jobs()
        logger.info("Metronome daemon running")

        # Keep the main thread alive
        try:
            while self.running:
                time.sleep(1)
        except KeyboardInterrupt:
            logger.info("Shutdown signal received")
            self.stop()

    def stop(self) -> None:
        """Stop the daemon."""
        logger.info("Stopping Metronome daemon")
        self.running = False

        for coordinator in self.coordinators:
            coordinator.stop()
            logger.info("Stopped job '%s'", coordinator.name)

        logger.info("Metronome daemon stopped")


def main() -> None:
    """Entry point for the daemon."""
    parser = argparse.ArgumentParser(description="Metronome job daemon")
    parser.add_argument(
        '--config',
        default='/etc/metronome/config.yaml',
        help='Path to configuration file (default: /etc/metronome/config.yaml)'
    )
    parser.add_argument(
        '--log-level',
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Log level (default: log_level from the configuration, else INFO)'
    )
    parser.add_argument(
        '--log-file',
        help='Optional log file path (logs to console if not specified)'
    )
    args = parser.parse_args()

    daemon = MetronomeDaemon(args.config)
    setup_logging(level=args.log_level or daemon.config.log_level, log_file=args.log_file)

    def signal_handler(_sig: int, _frame: Any) -> None:
        logger.info("Shutdown signal received")
        daemon.stop()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        daemon.start()
    except Exception:
        logger.critical("Fatal error", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
