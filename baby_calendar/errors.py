"""Exceptions raised while turning log rows into calendar events."""

from typing import Optional


class BabyCalendarError(Exception):
    """Base class for every error raised by the pipeline."""


class ParseError(BabyCalendarError):
    """A timestamp string matched none of the recognized date-time formats."""

    def __init__(self, timestamp: str, row_index: Optional[int] = None):
        self.timestamp = timestamp
        self.row_index = row_index
        where = f" (row {row_index})" if row_index is not None else ""
        super().__init__(f"Unrecognized timestamp{where}: {timestamp!r}")


class AmountParseError(BabyCalendarError):
    """A feeding entry carried no digits to read an amount from."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"No amount found in feeding entry: {text!r}")


class OrderingViolation(BabyCalendarError):
    """A row is timestamped earlier than the row before it."""

    def __init__(self, row_index: int, previous, current):
        self.row_index = row_index
        self.previous = previous
        self.current = current
        super().__init__(
            f"Row {row_index} at {current:%Y-%m-%d %H:%M} precedes previous row at {previous:%Y-%m-%d %H:%M}"
        )


class SourceError(BabyCalendarError):
    """The raw log could not be fetched or decoded."""
