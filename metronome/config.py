"""
Configuration loading and validation for the Metronome daemon.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from metronome.plugins import get_registry
from metronome.schedule import parse_schedule
from metronome.triggers.file_event import parse_watch_parameters


class TriggerConfig(BaseModel):
    """Configuration for when a job runs."""
    type: str = "timer"  # "timer", "manual", "file_event"
    parameters: str = ""  # Type-specific parameter string, e.g. "S:5|M:10"

    @model_validator(mode="after")
    def check_trigger(self) -> "TriggerConfig":
        """Reject unknown trigger types and malformed parameter strings."""
        known = get_registry().list_triggers()
        if self.type not in known:
            raise ValueError(
                f"Unknown trigger type: {self.type} (expected one of {', '.join(sorted(known))})"
            )

        if self.type == "timer":
            parse_schedule(self.parameters)
        elif self.type == "file_event":
            parse_watch_parameters(self.parameters)
        return self


class JobConfig(BaseModel):
    """Configuration for a single job."""
    name: str = Field(..., min_length=1)
    trigger: TriggerConfig
    touch: str | None = None  # File whose modification time is bumped on every run
    run_on_start: bool = False  # Run once immediately, then resume the trigger


class Config(BaseModel):
    """Main configuration for Metronome."""
    jobs: list[JobConfig] = Field(..., min_length=1)
    log_level: str = "INFO"

    @field_validator("jobs")
    @classmethod
    def unique_job_names(cls, jobs: list[JobConfig]) -> list[JobConfig]:
        """Reject duplicate job names."""
        seen: set[str] = set()
        for job in jobs:
            if job.name in seen:
                raise ValueError(f"Duplicate job name: {job.name}")
            seen.add(job.name)
        return jobs


def load_config(config_path: str | Path) -> Config:
    """
    Load and validate configuration from YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Validated Config object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is empty or invalid
        yaml.YAMLError: If YAML parsing fails
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with path.open('r', encoding='utf-8') as f:
        raw_config: dict[str, Any] | None = yaml.safe_load(f)

    if raw_config is None:
        raise ValueError(f"Configuration file is empty: {config_path}")

    try:
        return Config.model_validate(raw_config)
    except ValidationError as e:
        raise ValueError(f"Configuration validation error: {e}") from e
