"""Projections of parsed telegrams for plotting and display."""

from dataclasses import dataclass, field

from ..models import Severity, Telegram


@dataclass
class PhaseSample:
    """One three-phase sample at a point in time."""

    phase_1: float
    phase_2: float
    phase_3: float
    timestamp: int


@dataclass
class EventMessages:
    """Event log messages split by severity."""

    low: list[str] = field(default_factory=list)
    high: list[str] = field(default_factory=list)


def _phase_samples(telegrams: list[Telegram], quantity: str) -> list[PhaseSample]:
    samples = []
    for telegram in telegrams:
        phase_1, phase_2, phase_3 = getattr(telegram.electricity, quantity)
        samples.append(
            PhaseSample(
                phase_1=phase_1,
                phase_2=phase_2,
                phase_3=phase_3,
                timestamp=telegram.timestamp,
            )
        )
    return samples


def get_voltage_data(telegrams: list[Telegram]) -> list[PhaseSample]:
    """Voltage per phase for each telegram, in input order."""
    return _phase_samples(telegrams, "voltage")


def get_current_data(telegrams: list[Telegram]) -> list[PhaseSample]:
    """Current per phase for each telegram, in input order."""
    return _phase_samples(telegrams, "current")


def get_event_log_messages(telegrams: list[Telegram]) -> EventMessages:
    """Collect event messages from all telegrams, split by severity.

    Messages keep telegram order, then event id order within a telegram.
    """
    messages = EventMessages()
    for telegram in telegrams:
        for entry in telegram.event_log:
            if entry.severity == Severity.HIGH:
                messages.high.append(entry.message)
            else:
                messages.low.append(entry.message)
    return messages
