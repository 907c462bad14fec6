"""Data models for parsed DSMR telegrams."""

from dataclasses import dataclass, field
from enum import Enum


class Severity(Enum):
    """Severity of an event log entry."""

    LOW = "low"
    HIGH = "high"


@dataclass(frozen=True)
class EventLogEntry:
    """A single correlated event from a telegram's event log."""

    id: int
    severity: Severity
    timestamp: int  # seconds since epoch
    message: str


@dataclass(frozen=True)
class Electricity:
    """Per-phase electricity readings and cumulative totals.

    Sequences are indexed 0..2 for phase 1..3.
    """

    voltage: tuple[float, float, float] = (0.0, 0.0, 0.0)
    current: tuple[float, float, float] = (0.0, 0.0, 0.0)
    power: tuple[float, float, float] = (0.0, 0.0, 0.0)
    total_consumed: float = 0.0
    total_produced: float = 0.0


@dataclass(frozen=True)
class Telegram:
    """One completed meter reading record."""

    timestamp: int  # seconds since epoch
    electricity: Electricity
    event_log: tuple[EventLogEntry, ...] = field(default_factory=tuple)
