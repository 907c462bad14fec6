"""Tests for date token decoding."""

import pytest

from dsmr.parser.dates import CalendarDate, decode_date_token, month_number, token_from_wire
from dsmr.parser.errors import MalformedLine


def test_decode_daylight_token():
    assert decode_date_token("23-Jan-05 10:20:30S") == CalendarDate(2023, 1, 5, 10, 20, 30, True)


def test_decode_standard_token():
    date = decode_date_token("99-Dec-31 23:59:59W")
    assert date == (2099, 12, 31, 23, 59, 59, False)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Jan", 1), ("Feb", 2), ("Mar", 3), ("Apr", 4), ("May", 5), ("Jun", 6),
        ("Jul", 7), ("Aug", 8), ("Sep", 9), ("Oct", 10), ("Nov", 11), ("Dec", 12),
    ],
)
def test_month_names(name, expected):
    assert month_number(name) == expected


@pytest.mark.parametrize("name", ["Xyz", "Mab", "Jux", "ja"])
def test_unknown_month(name):
    with pytest.raises(MalformedLine, match="unknown month"):
        month_number(name)


@pytest.mark.parametrize(
    "token",
    [
        "23-Jan-05 10:20:30",  # no indicator
        "23-Jan-05 10:20:30SS",
        "2x-Jan-05 10:20:30S",
        "23-Jan-05 10-20-30S",
        "23/Jan/05 10:20:30S",
        "23-Jan- 5 10:20:30S",
    ],
)
def test_malformed_tokens(token):
    with pytest.raises(MalformedLine):
        decode_date_token(token)


def test_error_carries_line_number():
    with pytest.raises(MalformedLine, match="line 12") as excinfo:
        decode_date_token("bad", line_number=12)
    assert excinfo.value.line_number == 12


def test_token_from_wire():
    assert token_from_wire("23-Jan-05 10:20:30 (S)") == "23-Jan-05 10:20:30S"
    assert token_from_wire("23-Jan-05 10:20:30W") == "23-Jan-05 10:20:30W"


@pytest.mark.parametrize("value", ["23-Jan-05 10:20:30 S)", "23-Jan-05 10:20:30 (S", ""])
def test_token_from_wire_rejects_bad_suffix(value):
    with pytest.raises(MalformedLine):
        token_from_wire(value)
