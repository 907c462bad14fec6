"""Line syntax for DSMR telegram fields.

Every field line looks like ``<code>#(<value>)``, where the code is a
dot-separated list of numbers. The first number is the tag that selects the
field category, the rest are discriminants:

    7.1.2#(229.8*V)   ->  code (7, 1, 2), value "229.8*V"
"""

import re
from dataclasses import dataclass

from .errors import MalformedLine

FIELD_PATTERN = re.compile(r"^(?P<code>\d+(?:\.\d+)*)#\((?P<value>.*)\)$")
TAG_PATTERN = re.compile(r"^\d+")
NUMBER_PATTERN = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")


@dataclass
class Field:
    """A decoded ``<code>#(<value>)`` line."""

    code: tuple[int, ...]
    value: str
    line_number: int

    def discriminant(self, position: int, default: int | None = None) -> int:
        """Return the code element at ``position``.

        Fails if it is absent and no default is given.
        """
        if position >= len(self.code):
            if default is not None:
                return default
            raise MalformedLine(
                f"field code {self.code_text} has no element {position}", self.line_number
            )
        return self.code[position]

    @property
    def code_text(self) -> str:
        return ".".join(str(part) for part in self.code)


def read_tag(line: str) -> int | None:
    """Return the leading number of a line, or None if it has none.

    Only the tag is read, so lines of unknown categories are never validated.
    """
    match = TAG_PATTERN.match(line)
    if not match:
        return None
    return int(match.group())


def split_field(line: str, line_number: int) -> Field:
    """Split one field line into its code and value."""
    match = FIELD_PATTERN.match(line.strip())
    if not match:
        raise MalformedLine(f"expected '<code>#(<value>)', got {line!r}", line_number)

    code = tuple(int(part) for part in match.group("code").split("."))
    return Field(code=code, value=match.group("value"), line_number=line_number)


def parse_number(text: str, line_number: int) -> float:
    """Parse a plain decimal reading such as ``229.8``."""
    if not NUMBER_PATTERN.fullmatch(text):
        raise MalformedLine(f"not a number: {text!r}", line_number)
    return float(text)
