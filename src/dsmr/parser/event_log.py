"""Event log correlation.

Each event in a telegram arrives as three separate lines, one per sub-field,
in any order and interleaved with other events:

    3.1.<id>#(H)                          severity
    3.2.<id>#(4142)                       hex-encoded message
    3.3.<id>#(23-Jan-05 10:20:30 (S))     date

The correlator collects them per event id and assembles complete entries
when the telegram ends.
"""

import re
from dataclasses import dataclass

from ..models import EventLogEntry, Severity
from .errors import DuplicateFieldId, IncompleteEventLog, MalformedLine

HEX_PAIR = re.compile(r"[0-9A-Fa-f]{2}")
SUB_FIELDS = ("severity", "message", "timestamp")


def decode_severity(flag: str) -> Severity:
    """``H`` is high severity, anything else is low."""
    return Severity.HIGH if flag[:1] == "H" else Severity.LOW


def decode_message(encoded: str, line_number: int | None = None) -> str:
    """Decode a hex-pair message, one character per pair.

    >>> decode_message("4142")
    'AB'
    """
    if len(encoded) % 2:
        raise MalformedLine(f"odd-length hex message {encoded!r}", line_number)

    chars = []
    for i in range(0, len(encoded), 2):
        pair = encoded[i : i + 2]
        if not HEX_PAIR.fullmatch(pair):
            raise MalformedLine(f"bad hex pair {pair!r} in message", line_number)
        chars.append(chr(int(pair, 16)))
    return "".join(chars)


@dataclass
class PartialEntry:
    """Sub-fields received so far for one event id."""

    id: int
    severity: Severity | None = None
    message: str | None = None
    timestamp: int | None = None

    def missing(self) -> list[str]:
        return [name for name in SUB_FIELDS if getattr(self, name) is None]


class EventLogCorrelator:
    """Collects event sub-fields for one telegram."""

    def __init__(self):
        self._partials: dict[int, PartialEntry] = {}

    def clear(self) -> None:
        self._partials.clear()

    def _set(self, event_id: int, name: str, value, line_number: int | None) -> None:
        partial = self._partials.setdefault(event_id, PartialEntry(id=event_id))
        if getattr(partial, name) is not None:
            raise DuplicateFieldId(f"event {event_id} has more than one {name}", line_number)
        setattr(partial, name, value)

    def add_severity(self, event_id: int, severity: Severity, line_number: int | None = None) -> None:
        self._set(event_id, "severity", severity, line_number)

    def add_message(self, event_id: int, message: str, line_number: int | None = None) -> None:
        self._set(event_id, "message", message, line_number)

    def add_timestamp(self, event_id: int, timestamp: int, line_number: int | None = None) -> None:
        self._set(event_id, "timestamp", timestamp, line_number)

    def finish(self, line_number: int | None = None) -> tuple[EventLogEntry, ...]:
        """Assemble complete entries in ascending id order."""
        entries = []
        for event_id in sorted(self._partials):
            partial = self._partials[event_id]
            assert partial.id == event_id
            missing = partial.missing()
            if missing:
                raise IncompleteEventLog(
                    f"event {event_id} is missing {', '.join(missing)}", line_number
                )
            entries.append(
                EventLogEntry(
                    id=partial.id,
                    severity=partial.severity,
                    timestamp=partial.timestamp,
                    message=partial.message,
                )
            )

        return tuple(entries)
