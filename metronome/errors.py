"""
Exceptions raised for malformed trigger parameters.

All of them derive from ValueError: a bad parameter string is a
configuration defect, reported synchronously from Trigger.start().
"""

USAGE = (
    "Usage: [DELAY|]INTERVAL[|UserRun]; DELAY and INTERVAL are UNIT:VALUE "
    "with UNIT one of MS (milliseconds), S (seconds), M (minutes), "
    "H (hours), D (days). Example: S:5|M:10 fires after 5 seconds, "
    "then every 10 minutes."
)


class TriggerParameterError(ValueError):
    """Base class for unusable trigger parameters."""


class MissingScheduleError(TriggerParameterError):
    """No time specification was given at all."""

    def __init__(self, message: str = "At least one time specification is required") -> None:
        super().__init__(f"{message}. {USAGE}")


class InvalidUnitError(TriggerParameterError):
    """The unit code is not one of MS, S, M, H, D."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"No valid unit (MS, S, M, H, D) in '{token}'. {USAGE}")


class InvalidValueError(TriggerParameterError):
    """The numeric part of a duration token is unusable."""

    def __init__(self, token: str, reason: str = "not a number") -> None:
        self.token = token
        super().__init__(f"Invalid duration value in '{token}': {reason}. {USAGE}")
