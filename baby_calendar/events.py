"""
Event model, classification and construction.

Every log row becomes one ActivityEvent tagged with an EventKind. What differs
between kinds (color, emoji, how the title reads) lives in KIND_BEHAVIOR so the
rules for each kind sit together in one table.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict

from baby_calendar.errors import AmountParseError
from baby_calendar.timestamps import parse_time


class EventKind(str, Enum):
    POOP = "POOP"
    ASLEEP = "ASLEEP"
    AWAKE = "AWAKE"
    EAT = "EAT"
    MISC = "MISC"


class RawLogRow(BaseModel):
    """One row of the external log, as fetched."""

    model_config = ConfigDict(frozen=True)

    timestamp: str
    activity: Union[str, int, float]

    @property
    def text(self) -> str:
        return str(self.activity)


# --- Classification ---
# Order matters: first match wins.
POOP_RE = re.compile(r"poo", re.IGNORECASE)
ASLEEP_RE = re.compile(r"sleep|\bnap|\bdown\b", re.IGNORECASE)
AWAKE_RE = re.compile(r"wake|woke|\bup\b", re.IGNORECASE)
EAT_RE = re.compile(r"\b(?:took|ate|drank)\s+\d+", re.IGNORECASE)
NUMBER_RE = re.compile(r"^\s*\d+(?:\.\d+)?\s*$")
AMOUNT_RE = re.compile(r"\d+")


def classify(text: str) -> EventKind:
    if POOP_RE.search(text):
        return EventKind.POOP
    if ASLEEP_RE.search(text):
        return EventKind.ASLEEP
    if AWAKE_RE.search(text):
        return EventKind.AWAKE
    if EAT_RE.search(text) or NUMBER_RE.match(text):
        return EventKind.EAT
    return EventKind.MISC


def parse_amount(text: str) -> int:
    match = AMOUNT_RE.search(text)
    if not match:
        raise AmountParseError(text)
    return int(match.group(0))


# --- Display helpers ---
def format_minutes(minutes: int) -> str:
    """125 -> '2:05'"""
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}:{mins:02d}"


def asleep_title(minutes_asleep: int) -> str:
    return f"asleep for {format_minutes(minutes_asleep)}"


def awake_title(minutes_awake: int) -> str:
    return f"awake for {format_minutes(minutes_awake)}"


def minutes_between(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 60)


@dataclass
class ActivityEvent:
    kind: EventKind
    start: datetime
    raw_text: str = ""
    end: Optional[datetime] = None
    amount: Optional[int] = None
    occurrence_count: int = 1

    @property
    def behavior(self) -> "KindBehavior":
        return KIND_BEHAVIOR[self.kind]

    @property
    def color(self) -> Optional[str]:
        return self.behavior.color

    @property
    def emoji(self) -> str:
        return self.behavior.emoji * self.occurrence_count

    @property
    def text(self) -> str:
        return self.behavior.describe(self)

    @property
    def title(self) -> str:
        return f"{self.emoji}{self.text}"

    @property
    def duration_minutes(self) -> Optional[int]:
        if self.end is None:
            return None
        return minutes_between(self.start, self.end)

    def to_record(self) -> Dict[str, Any]:
        """Shape expected by the calendar renderer."""
        record: Dict[str, Any] = {
            "start": self.start,
            "end": self.end,
            "title": self.title,
            "color": self.color,
            "kind": self.kind.value,
        }
        if self.kind is EventKind.EAT:
            record["amount"] = self.amount
        return record


def _describe_asleep(event: ActivityEvent) -> str:
    if event.end is not None:
        return asleep_title(event.duration_minutes)
    return event.raw_text


@dataclass(frozen=True)
class KindBehavior:
    color: Optional[str]
    emoji: str
    describe: Callable[[ActivityEvent], str]


KIND_BEHAVIOR: Dict[EventKind, KindBehavior] = {
    EventKind.POOP: KindBehavior("brown", "💩", lambda e: ""),
    EventKind.ASLEEP: KindBehavior("green", "😴", _describe_asleep),
    EventKind.AWAKE: KindBehavior("green", "😊", lambda e: e.raw_text),
    EventKind.EAT: KindBehavior("purple", "🍼", lambda e: f"took {e.amount}"),
    EventKind.MISC: KindBehavior(None, "", lambda e: e.raw_text),
}


def build_event(row: RawLogRow, kind: Optional[EventKind] = None, row_index: Optional[int] = None) -> ActivityEvent:
    """
    Build the event for a single row.

    Raises:
        ParseError: if the row's timestamp cannot be parsed.
        AmountParseError: if a feeding row has no digits.
    """
    text = row.text
    if kind is None:
        kind = classify(text)
    start = parse_time(row.timestamp, row_index)
    amount = parse_amount(text) if kind is EventKind.EAT else None
    return ActivityEvent(kind=kind, start=start, raw_text=text, amount=amount)
