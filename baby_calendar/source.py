"""
Where raw log rows come from.

The log is usually published as a JSON array of {"timestamp", "activity"}
objects (a spreadsheet export). Plain-text exports in the standard row format
    "Mar 11, 2025 - 5:48 AM: Breastfeeding"
are also accepted.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, List, Union

import requests
from pydantic import ValidationError

from baby_calendar.errors import SourceError
from baby_calendar.events import RawLogRow

log = logging.getLogger(__name__)

STANDARD_ROW_RE = re.compile(
    r"^(?P<date>[A-Za-z]{3,9}\s+\d{1,2},\s+\d{4})\s*-\s*"
    r"(?P<time>\d{1,2}:\d{2}\s*(?:AM|PM|am|pm)):\s*(?P<event>.+)$"
)


def rows_from_json(payload: Any) -> List[RawLogRow]:
    if not isinstance(payload, list):
        raise SourceError(f"Expected a JSON array of rows, got {type(payload).__name__}.")
    try:
        return [RawLogRow.model_validate(item) for item in payload]
    except ValidationError as e:
        raise SourceError(f"Malformed log row: {e}") from e


def fetch_rows(url: str, timeout: float = 10.0) -> List[RawLogRow]:
    log.info(f"Fetching log rows from {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except requests.exceptions.RequestException as e:
        raise SourceError(f"Could not fetch log from {url}: {e}") from e
    except ValueError as e:
        raise SourceError(f"Log at {url} is not valid JSON: {e}") from e
    rows = rows_from_json(payload)
    log.info(f"Fetched {len(rows)} rows.")
    return rows


def load_rows(path: Union[str, Path]) -> List[RawLogRow]:
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SourceError(f"Could not read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SourceError(f"{path} is not valid JSON: {e}") from e
    return rows_from_json(payload)


def parse_standard_rows(data: str) -> List[RawLogRow]:
    """
    Parse only lines matching:
        "Mar 11, 2025 - 5:48 AM: Breastfeeding"
    Everything else (headings, free notes) is ignored.
    """
    rows: List[RawLogRow] = []
    skipped = 0
    for line in data.splitlines():
        line = line.strip()
        if not line:
            continue
        match = STANDARD_ROW_RE.match(line)
        if match:
            rows.append(
                RawLogRow(
                    timestamp=f"{match.group('date')} at {match.group('time')}",
                    activity=match.group("event").strip(),
                )
            )
        else:
            skipped += 1
    if skipped:
        log.info(f"Ignored {skipped} lines not in the standard row format.")
    return rows
