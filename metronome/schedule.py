"""
Parsing of timer trigger parameters.

A parameter string holds an optional initial delay and an interval, each
written as UNIT:VALUE and joined by a pipe, optionally followed by the
literal "|UserRun" suffix:

    S:5|M:10            wait 5 seconds, then fire every 10 minutes
    M:10                fire right away, then every 10 minutes
    M:10|UserRun        the job already ran once; wait 10 minutes first
"""

import math
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

from metronome.errors import InvalidUnitError, InvalidValueError, MissingScheduleError

RESUME_SUFFIX = "|UserRun"
NO_DELAY = "S:0"


class DurationUnit(Enum):
    """Unit codes accepted in a UNIT:VALUE token."""
    MILLISECONDS = "MS"
    SECONDS = "S"
    MINUTES = "M"
    HOURS = "H"
    DAYS = "D"

    def to_timedelta(self, value: float) -> timedelta:
        """Convert a value in this unit to a timedelta."""
        return timedelta(**{self.name.lower(): value})


@dataclass(frozen=True)
class Schedule:
    """Resolved timer schedule."""
    initial_delay: timedelta
    interval: timedelta
    is_resume_run: bool = False


def parse_duration(token: str) -> timedelta:
    """
    Parse a single UNIT:VALUE token.

    The unit is matched case-insensitively; the value is a decimal number
    using '.' as separator regardless of locale.

    Args:
        token: Duration token such as "S:5" or "ms:250"

    Returns:
        The duration as a timedelta

    Raises:
        InvalidUnitError: If the unit is not MS, S, M, H or D
        InvalidValueError: If the value is not a finite, non-negative number
    """
    code, _, raw_value = token.partition(":")

    try:
        unit = DurationUnit(code.strip().upper())
    except ValueError:
        raise InvalidUnitError(token) from None

    try:
        value = float(raw_value)
    except ValueError:
        raise InvalidValueError(token) from None

    if not math.isfinite(value):
        raise InvalidValueError(token, "must be finite")
    if value < 0:
        raise InvalidValueError(token, "must not be negative")

    try:
        return unit.to_timedelta(value)
    except OverflowError:
        raise InvalidValueError(token, "out of range") from None


def parse_schedule(raw: str) -> Schedule:
    """
    Parse a full timer parameter string into a Schedule.

    Resolution order matters: the "|UserRun" suffix is detected and
    stripped first, then a lone token is promoted to the interval with no
    initial delay, and only then does a resume run replace the initial
    delay with the interval.

    Args:
        raw: Parameter string, e.g. "S:5|S:3" or "S:3|UserRun"

    Returns:
        The resolved Schedule

    Raises:
        MissingScheduleError: If no time specification is present
        InvalidUnitError: If a token carries an unknown unit
        InvalidValueError: If a token carries an unusable value
    """
    is_resume_run = raw.endswith(RESUME_SUFFIX)
    if is_resume_run:
        raw = raw[:-len(RESUME_SUFFIX)]

    # Anything past the second token is ignored
    first_arg, second_arg = (raw + "|").split("|")[:2]

    if not first_arg:
        raise MissingScheduleError()

    if not second_arg:
        first_arg, second_arg = NO_DELAY, first_arg

    if is_resume_run:
        # The job was just run externally, so wait one full interval first
        first_arg = second_arg

    return Schedule(
        initial_delay=parse_duration(first_arg),
        interval=parse_duration(second_arg),
        is_resume_run=is_resume_run,
    )
