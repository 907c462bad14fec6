"""Conversion of meter-local calendar dates to epoch timestamps."""

from datetime import datetime, timedelta, timezone
from typing import Protocol

STANDARD_UTC_OFFSET_HOURS = 1  # CET
DAYLIGHT_UTC_OFFSET_HOURS = 2  # CEST


class InvalidCalendarDate(ValueError):
    """The date does not exist on the calendar."""
    pass


class TimestampConverter(Protocol):
    def __call__(
        self,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
        is_dst: bool,
    ) -> int: ...


def date_to_timestamp(
    year: int,
    month: int,
    day: int,
    hour: int,
    minute: int,
    second: int,
    is_dst: bool,
    standard_offset_hours: int = STANDARD_UTC_OFFSET_HOURS,
    daylight_offset_hours: int = DAYLIGHT_UTC_OFFSET_HOURS,
) -> int:
    """Convert a meter-local time to seconds since the Unix epoch.

    The meter reports local wall-clock time plus a daylight flag, so the UTC
    offset is fixed by the flag rather than looked up in a time zone database.

    Raises:
        InvalidCalendarDate: if the fields do not form a real date and time
    """
    offset = daylight_offset_hours if is_dst else standard_offset_hours
    try:
        local = datetime(
            year, month, day, hour, minute, second, tzinfo=timezone(timedelta(hours=offset))
        )
    except ValueError as e:
        raise InvalidCalendarDate(
            f"{year:04d}-{month:02d}-{day:02d} {hour:02d}:{minute:02d}:{second:02d}: {e}"
        ) from e
    return int(local.timestamp())


def make_converter(standard_offset_hours: int, daylight_offset_hours: int) -> TimestampConverter:
    """Build a converter with custom standard/daylight UTC offsets."""

    def convert(year, month, day, hour, minute, second, is_dst):
        return date_to_timestamp(
            year,
            month,
            day,
            hour,
            minute,
            second,
            is_dst,
            standard_offset_hours=standard_offset_hours,
            daylight_offset_hours=daylight_offset_hours,
        )

    return convert
