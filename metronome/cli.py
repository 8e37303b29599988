"""
Metronome CLI - Command line interface for the Metronome daemon.

Provides commands for:
- Configuration validation
- Inspecting how a timer parameter string is resolved
- Listing trigger types and configured jobs
- Running the daemon in the foreground
"""

import argparse
import sys
from pathlib import Path

from metronome.config import load_config
from metronome.daemon import MetronomeDaemon
from metronome.errors import TriggerParameterError
from metronome.logging_config import get_logger, setup_logging
from metronome.plugins import get_registry
from metronome.schedule import parse_schedule

logger = get_logger(__name__)


def cmd_config_validate(args: argparse.Namespace) -> int:
    """Validate configuration file."""
    config_path = Path(args.config)

    if not config_path.exists():
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)
        return 1

    try:
        config = load_config(str(config_path))
        print(f"✓ Configuration valid: {config_path}")
        print(f"  - {len(config.jobs)} job(s) configured")
        print(f"  - Log level: {config.log_level}")
        return 0
    except Exception as e:
        print(f"✗ Configuration invalid: {e}", file=sys.stderr)
        return 1


def cmd_schedule_show(args: argparse.Namespace) -> int:
    """Show how a timer parameter string is resolved."""
    try:
        schedule = parse_schedule(args.parameters)
    except TriggerParameterError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    print(f"Parameters:    {args.parameters}")
    print(f"Initial delay: {schedule.initial_delay}")
    print(f"Interval:      {schedule.interval}")
    print(f"Resume run:    {'yes' if schedule.is_resume_run else 'no'}")
    return 0


def cmd_trigger_list(_args: argparse.Namespace) -> int:
    """List registered trigger types."""
    for type_name in sorted(get_registry().list_triggers()):
        print(type_name)
    return 0


def cmd_job_list(args: argparse.Namespace) -> int:
    """List all configured jobs."""
    config_path = Path(args.config)

    if not config_path.exists():
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)
        return 1

    try:
        config = load_config(str(config_path))
        print(f"Configured jobs ({len(config.jobs)}):\n")

        for i, job in enumerate(config.jobs, 1):
            print(f"{i}. {job.name}")
            print(f"   Trigger:    {job.trigger.type}")
            if job.trigger.parameters:
                print(f"   Parameters: {job.trigger.parameters}")
            if job.touch:
                print(f"   Touch:      {job.touch}")
            if job.run_on_start:
                print("   Runs on start")
            print()

        return 0
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1


def cmd_daemon_start(args: argparse.Namespace) -> int:
    """Start the Metronome daemon."""
    config_path = Path(args.config)

    if not config_path.exists():
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)
        return 1

    try:
        print(f"Starting Metronome daemon with config: {config_path}")
        daemon = MetronomeDaemon(str(config_path))
        setup_logging(level=daemon.config.log_level)
        daemon.start()
        return 0
    except KeyboardInterrupt:
        print("\nShutting down...")
        return 0
    except Exception as e:
        print(f"Error starting daemon: {e}", file=sys.stderr)
        logger.exception("Error in daemon start")
        return 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="metronome",
        description="Metronome - Repeating timer triggers for scheduled jobs"
    )
    parser.add_argument(
        "-c", "--config",
        default="config.yaml",
        help="Path to configuration file (default: config.yaml)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_subparsers = config_parser.add_subparsers(dest="subcommand")
    config_subparsers.add_parser("validate", help="Validate configuration file")

    schedule_parser = subparsers.add_parser("schedule", help="Timer schedule tools")
    schedule_subparsers = schedule_parser.add_subparsers(dest="subcommand")
    show_parser = schedule_subparsers.add_parser(
        "show",
        help="Show how timer parameters are resolved"
    )
    show_parser.add_argument("parameters", help="Timer parameters, e.g. 'S:5|M:10'")

    trigger_parser = subparsers.add_parser("trigger", help="Trigger types")
    trigger_subparsers = trigger_parser.add_subparsers(dest="subcommand")
    trigger_subparsers.add_parser("list", help="List registered trigger types")

    job_parser = subparsers.add_parser("job", help="Job management")
    job_subparsers = job_parser.add_subparsers(dest="subcommand")
    job_subparsers.add_parser("list", help="List all configured jobs")

    daemon_parser = subparsers.add_parser("daemon", help="Daemon management")
    daemon_subparsers = daemon_parser.add_subparsers(dest="subcommand")
    daemon_subparsers.add_parser("start", help="Start daemon (foreground)")

    return parser


COMMANDS = {
    ("config", "validate"): cmd_config_validate,
    ("schedule", "show"): cmd_schedule_show,
    ("trigger", "list"): cmd_trigger_list,
    ("job", "list"): cmd_job_list,
    ("daemon", "start"): cmd_daemon_start,
}


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    handler = COMMANDS.get((args.command, getattr(args, "subcommand", None)))
    if handler is None:
        parser.print_help()
        return 0

    return handler(args)


if __name__ == '__main__':
    sys.exit(main())
