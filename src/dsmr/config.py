"""Settings loaded from a YAML file and the environment.

Example ``dsmr.yaml``:

    standard_utc_offset: 1
    daylight_utc_offset: 2
    parse_failure_exit_code: 42

Environment variables (also read from a ``.env`` file) override the file:
DSMR_STANDARD_UTC_OFFSET, DSMR_DAYLIGHT_UTC_OFFSET, DSMR_PARSE_FAILURE_EXIT_CODE.
The CLI also reads DSMR_CONFIG, the path of the YAML file.
"""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml
from dotenv import find_dotenv, load_dotenv

from .timestamps import (
    DAYLIGHT_UTC_OFFSET_HOURS,
    STANDARD_UTC_OFFSET_HOURS,
    TimestampConverter,
    make_converter,
)

PARSE_FAILURE_EXIT_CODE = 42

# setting name -> (YAML key, environment variable)
SETTING_SOURCES = {
    "standard_utc_offset_hours": ("standard_utc_offset", "DSMR_STANDARD_UTC_OFFSET"),
    "daylight_utc_offset_hours": ("daylight_utc_offset", "DSMR_DAYLIGHT_UTC_OFFSET"),
    "parse_failure_exit_code": ("parse_failure_exit_code", "DSMR_PARSE_FAILURE_EXIT_CODE"),
}


@dataclass
class Settings:
    """Runtime settings for the telegram reader."""

    standard_utc_offset_hours: int = STANDARD_UTC_OFFSET_HOURS
    daylight_utc_offset_hours: int = DAYLIGHT_UTC_OFFSET_HOURS
    parse_failure_exit_code: int = PARSE_FAILURE_EXIT_CODE

    def timestamp_converter(self) -> TimestampConverter:
        return make_converter(self.standard_utc_offset_hours, self.daylight_utc_offset_hours)


def _to_int(name: str, value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Setting {name} must be an integer, got {value!r}") from None


def load_environment() -> None:
    """Load a `.env` file from the working directory (or a parent) into os.environ."""
    load_dotenv(find_dotenv(usecwd=True))


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from an optional YAML file, then environment overrides."""
    load_environment()

    data = {}
    if config_path is not None:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{config_path} must contain a mapping of settings")

    values = {}
    for name, (key, env_var) in SETTING_SOURCES.items():
        if env_var in os.environ:
            values[name] = _to_int(env_var, os.environ[env_var])
        elif key in data:
            values[name] = _to_int(key, data[key])

    for name in ("standard_utc_offset_hours", "daylight_utc_offset_hours"):
        if name in values and not -23 <= values[name] <= 23:
            raise ValueError(f"Setting {name} must be between -23 and 23 hours")

    return Settings(**values)
