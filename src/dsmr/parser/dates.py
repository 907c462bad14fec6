"""Fixed-width date token decoding.

A date token is ``YY-Mon-DD HH:MM:SS`` followed by a one-character daylight
indicator, e.g. ``23-Jan-05 10:20:30S``. ``S`` marks daylight (summer) time,
anything else standard time. Inside telegram lines the indicator is
parenthesised: ``23-Jan-05 10:20:30 (S)``.
"""

from dataclasses import dataclass
from typing import NamedTuple

from .errors import MalformedLine

TOKEN_WIDTH = 19
WIRE_WIDTH = 22  # "YY-Mon-DD HH:MM:SS (X)"

# Two-letter prefixes; None means the third letter decides
MONTH_PREFIXES: dict[str, int | None] = {
    "Ja": 1,
    "Fe": 2,
    "Ma": None,
    "Ap": 4,
    "Au": 8,
    "Se": 9,
    "Oc": 10,
    "No": 11,
    "De": 12,
    "Ju": None,
}

MONTH_THIRD_LETTER = {
    ("Ma", "r"): 3,
    ("Ma", "y"): 5,
    ("Ju", "n"): 6,
    ("Ju", "l"): 7,
}


@dataclass(frozen=True)
class TokenField:
    """One fixed-width slice of a date token."""

    name: str
    offset: int
    length: int
    numeric: bool = True


DATE_FIELDS = (
    TokenField("year", 0, 2),
    TokenField("month", 3, 3, numeric=False),
    TokenField("day", 7, 2),
    TokenField("hour", 10, 2),
    TokenField("minute", 13, 2),
    TokenField("second", 16, 2),
    TokenField("indicator", 18, 1, numeric=False),
)

# Separator characters expected between the fields
DATE_SEPARATORS = {2: "-", 6: "-", 9: " ", 12: ":", 15: ":"}


class CalendarDate(NamedTuple):
    """A decoded date token, before conversion to an epoch timestamp."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    is_dst: bool


def month_number(name: str, line_number: int | None = None) -> int:
    """Map a three-letter month name (``Jan``..``Dec``) to 1..12."""
    prefix, third = name[:2], name[2:3]
    if prefix not in MONTH_PREFIXES:
        raise MalformedLine(f"unknown month {name!r}", line_number)

    month = MONTH_PREFIXES[prefix]
    if month is None:
        month = MONTH_THIRD_LETTER.get((prefix, third))
        if month is None:
            raise MalformedLine(f"unknown month {name!r}", line_number)
    return month


def scan_token(token: str, line_number: int | None = None) -> dict[str, str | int]:
    """Slice a date token into its fields, validating width and separators."""
    if len(token) != TOKEN_WIDTH:
        raise MalformedLine(
            f"date token {token!r} is {len(token)} characters, expected {TOKEN_WIDTH}",
            line_number,
        )

    for offset, separator in DATE_SEPARATORS.items():
        if token[offset] != separator:
            raise MalformedLine(
                f"date token {token!r}: expected {separator!r} at position {offset}",
                line_number,
            )

    values: dict[str, str | int] = {}
    for slot in DATE_FIELDS:
        text = token[slot.offset : slot.offset + slot.length]
        if slot.numeric:
            if not (text.isascii() and text.isdigit()):
                raise MalformedLine(f"date token {token!r}: bad {slot.name} {text!r}", line_number)
            values[slot.name] = int(text)
        else:
            values[slot.name] = text
    return values


def decode_date_token(token: str, line_number: int | None = None) -> CalendarDate:
    """Decode a ``YY-Mon-DD HH:MM:SSX`` token into calendar fields.

    >>> decode_date_token("23-Jan-05 10:20:30S")
    CalendarDate(year=2023, month=1, day=5, hour=10, minute=20, second=30, is_dst=True)
    """
    values = scan_token(token, line_number)
    return CalendarDate(
        year=2000 + values["year"],
        month=month_number(values["month"], line_number),
        day=values["day"],
        hour=values["hour"],
        minute=values["minute"],
        second=values["second"],
        is_dst=values["indicator"] == "S",
    )


def token_from_wire(value: str, line_number: int | None = None) -> str:
    """Convert ``YY-Mon-DD HH:MM:SS (X)`` to the compact ``...SSX`` token."""
    if len(value) == TOKEN_WIDTH:
        return value
    if len(value) != WIRE_WIDTH or value[18:20] != " (" or value[-1] != ")":
        raise MalformedLine(f"malformed date {value!r}", line_number)
    return value[:18] + value[20]
