"""
Baby Calendar

Turns a timestamped free-text baby log ("is asleep", "took 120", "has pooped")
into coalesced calendar events, per-day summaries and a next-sleep prediction.
"""

from baby_calendar.config import Settings
from baby_calendar.errors import (
    AmountParseError,
    BabyCalendarError,
    OrderingViolation,
    ParseError,
    SourceError,
)
from baby_calendar.events import ActivityEvent, EventKind, RawLogRow
from baby_calendar.pipeline import PipelineResult, run_pipeline

__all__ = [
    "ActivityEvent",
    "AmountParseError",
    "BabyCalendarError",
    "EventKind",
    "OrderingViolation",
    "ParseError",
    "PipelineResult",
    "RawLogRow",
    "Settings",
    "SourceError",
    "run_pipeline",
]
