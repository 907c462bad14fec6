"""Errors raised while parsing a telegram stream."""


class ParseError(Exception):
    """Base exception for telegram parse failures."""

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class UnknownTelegramVersion(ParseError):
    """The header line does not name a supported format version."""
    pass


class NoDate(ParseError):
    """A telegram ended without a date field."""
    pass


class DuplicateFieldId(ParseError):
    """A field that may appear once per telegram appeared again."""
    pass


class MissingElectricity(ParseError):
    """Electricity data is missing or arrived before the information type."""
    pass


class ChildTelegramNotSupported(ParseError):
    """A nested telegram marker was found."""
    pass


class MalformedLine(ParseError):
    """A line with a known tag could not be decoded."""
    pass


class InvalidDate(ParseError):
    """A date field named a day that does not exist."""
    pass


class IncompleteEventLog(ParseError):
    """An event id is missing its severity, message or date."""
    pass
