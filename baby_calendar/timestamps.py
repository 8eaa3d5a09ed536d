"""
Timestamp parsing for log rows.

Rows are stamped the way phone shortcuts and spreadsheet forms write them:
    "June 6, 2019 at 05:19AM"
    "Mar 11, 2025 at 5:48 pm"
"""

import re
from datetime import datetime
from typing import Optional

from baby_calendar.errors import ParseError

# Tried in order after normalization.
TIMESTAMP_FORMATS = (
    "%B %d, %Y %I:%M %p",
    "%b %d, %Y %I:%M %p",
    "%B %d, %Y %H:%M",
    "%b %d, %Y %H:%M",
)

_MERIDIEM_RE = re.compile(r"\s*([AaPp][Mm])$")


def normalize_timestamp(timestamp: str) -> str:
    """Drop the " at " joiner and put exactly one space before AM/PM."""
    text = timestamp.strip().replace(" at ", " ")
    return _MERIDIEM_RE.sub(lambda m: " " + m.group(1).upper(), text)


def parse_time(timestamp: str, row_index: Optional[int] = None) -> datetime:
    """
    Parse a loosely formatted timestamp into a naive local datetime.

    Raises:
        ParseError: if no known format matches. Nothing is guessed.
    """
    if not isinstance(timestamp, str):
        raise ParseError(repr(timestamp), row_index)
    text = normalize_timestamp(timestamp)
    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ParseError(timestamp, row_index)
