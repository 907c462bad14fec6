"""DSMR v10 telegram parser.

Input is the full telegram stream as one string. The first line is a
version header (``/v10``); every following non-empty line is a field whose
leading number (the tag) selects how it is handled:

    1  telegram boundary (1.1.0 start, 1.2.0 end)
    2  telegram date
    3  event log sub-field
    4  information type
    7  electricity reading

Lines with any other tag are ignored.
"""

import logging

from ..models import Electricity, Telegram
from ..timestamps import InvalidCalendarDate, TimestampConverter, date_to_timestamp
from .dates import decode_date_token, token_from_wire
from .errors import (
    ChildTelegramNotSupported,
    DuplicateFieldId,
    InvalidDate,
    MalformedLine,
    MissingElectricity,
    NoDate,
    UnknownTelegramVersion,
)
from .event_log import EventLogCorrelator, decode_message, decode_severity
from .lines import Field, parse_number, read_tag, split_field

logger = logging.getLogger(__name__)

SUPPORTED_VERSION = "v10"

BOUNDARY_START = 1
BOUNDARY_END = 2

EVENT_SEVERITY = 1
EVENT_MESSAGE = 2
EVENT_DATE = 3

QUANTITY_NAMES = {1: "voltage", 2: "current", 3: "power"}
QUANTITY_TOTAL = 4
TOTAL_CONSUMED = 1
TOTAL_PRODUCED = 2


class TelegramState:
    """Fields collected for the telegram currently being read."""

    def __init__(self):
        self.events = EventLogCorrelator()
        self.reset()

    def reset(self) -> None:
        self.seen_info_type = False
        self.has_electricity = False
        self.has_telegram_date = False
        self.timestamp = 0
        self.readings = {name: [0.0, 0.0, 0.0] for name in QUANTITY_NAMES.values()}
        self.total_consumed = 0.0
        self.total_produced = 0.0
        self.events.clear()

    @property
    def in_progress(self) -> bool:
        return self.seen_info_type or self.has_electricity or self.has_telegram_date

    def to_telegram(self, line_number: int) -> Telegram:
        if not self.has_electricity:
            raise MissingElectricity("telegram has no electricity readings", line_number)
        if not self.has_telegram_date:
            raise NoDate("telegram has no date", line_number)

        electricity = Electricity(
            voltage=tuple(self.readings["voltage"]),
            current=tuple(self.readings["current"]),
            power=tuple(self.readings["power"]),
            total_consumed=self.total_consumed,
            total_produced=self.total_produced,
        )
        return Telegram(
            timestamp=self.timestamp,
            electricity=electricity,
            event_log=self.events.finish(line_number),
        )


def read_timestamp(value: str, line_number: int, to_timestamp: TimestampConverter) -> int:
    """Decode a wire date value and convert it to epoch seconds."""
    date = decode_date_token(token_from_wire(value, line_number), line_number)
    try:
        return to_timestamp(*date)
    except InvalidCalendarDate as e:
        raise InvalidDate(str(e), line_number) from e


def handle_boundary(field: Field, state: TelegramState, telegrams: list[Telegram]) -> None:
    kind = field.discriminant(1, default=0)
    child = field.discriminant(2, default=0)
    if child != 0:
        raise ChildTelegramNotSupported(
            f"child telegram {field.code_text} is not supported", field.line_number
        )

    if kind == BOUNDARY_END:
        telegram = state.to_telegram(field.line_number)
        telegrams.append(telegram)
        logger.debug(
            "Telegram %d complete: timestamp=%d, %d event(s)",
            len(telegrams),
            telegram.timestamp,
            len(telegram.event_log),
        )

    state.reset()


def handle_date(field: Field, state: TelegramState, to_timestamp: TimestampConverter) -> None:
    state.timestamp = read_timestamp(field.value, field.line_number, to_timestamp)
    state.has_telegram_date = True


def handle_event(field: Field, state: TelegramState, to_timestamp: TimestampConverter) -> None:
    kind = field.discriminant(1)
    event_id = field.discriminant(2)

    if kind == EVENT_SEVERITY:
        state.events.add_severity(event_id, decode_severity(field.value), field.line_number)
    elif kind == EVENT_MESSAGE:
        message = decode_message(field.value, field.line_number)
        state.events.add_message(event_id, message, field.line_number)
    elif kind == EVENT_DATE:
        timestamp = read_timestamp(field.value, field.line_number, to_timestamp)
        state.events.add_timestamp(event_id, timestamp, field.line_number)
    else:
        raise MalformedLine(f"unknown event log field {field.code_text}", field.line_number)


def handle_info_type(field: Field, state: TelegramState) -> None:
    if state.seen_info_type:
        raise DuplicateFieldId("information type appears twice", field.line_number)
    state.seen_info_type = True


def handle_electricity(field: Field, state: TelegramState) -> None:
    if not state.seen_info_type:
        raise MissingElectricity(
            "electricity reading before information type", field.line_number
        )

    quantity = field.discriminant(1)
    phase = field.discriminant(2)
    value = parse_number(field.value.split("*", 1)[0], field.line_number)

    if quantity == QUANTITY_TOTAL:
        if phase == TOTAL_CONSUMED:
            state.total_consumed = value
        elif phase == TOTAL_PRODUCED:
            state.total_produced = value
        else:
            raise MalformedLine(f"unknown total {field.code_text}", field.line_number)
    elif quantity in QUANTITY_NAMES:
        if not 1 <= phase <= 3:
            raise MalformedLine(f"phase {phase} out of range", field.line_number)
        state.readings[QUANTITY_NAMES[quantity]][phase - 1] = value
    else:
        raise MalformedLine(f"unknown electricity field {field.code_text}", field.line_number)

    state.has_electricity = True


def parse_v10(lines: list[str], to_timestamp: TimestampConverter) -> list[Telegram]:
    """Parse the field lines of a v10 stream (header already removed)."""
    telegrams: list[Telegram] = []
    state = TelegramState()

    # Line numbers are 1-based and count the header
    for line_number, line in enumerate(lines, start=2):
        line = line.strip()
        if not line:
            continue

        tag = read_tag(line)
        if tag == 1:
            handle_boundary(split_field(line, line_number), state, telegrams)
        elif tag == 2:
            handle_date(split_field(line, line_number), state, to_timestamp)
        elif tag == 3:
            handle_event(split_field(line, line_number), state, to_timestamp)
        elif tag == 4:
            handle_info_type(split_field(line, line_number), state)
        elif tag == 7:
            handle_electricity(split_field(line, line_number), state)
        else:
            logger.debug("Ignoring line %d with unknown tag %s", line_number, tag)

    if state.in_progress:
        logger.warning("Discarding unterminated telegram at end of input")

    return telegrams


def parse(text: str, to_timestamp: TimestampConverter = date_to_timestamp) -> list[Telegram]:
    """Parse a complete telegram stream.

    Args:
        text: The whole stream, newline-delimited, starting with a version header
        to_timestamp: Converts (year, month, day, hour, minute, second, is_dst)
            to epoch seconds; raises InvalidCalendarDate for impossible dates

    Returns:
        Telegrams in input order

    Raises:
        ParseError: if the stream is malformed in any way
    """
    lines = text.splitlines()
    header = lines[0] if lines else ""
    version = header[1:4]
    if version != SUPPORTED_VERSION:
        raise UnknownTelegramVersion(f"unsupported telegram version {header!r}", 1)

    return parse_v10(lines[1:], to_timestamp)
