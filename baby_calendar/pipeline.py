"""
End-to-end run: rows -> coalesced events -> daily summaries + next sleep.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from baby_calendar.coalesce import Recent, process_events
from baby_calendar.config import Settings
from baby_calendar.daily import (
    AllDayEvent,
    DailySummary,
    all_day_events,
    daily_summaries,
    summaries_to_frame,
)
from baby_calendar.events import ActivityEvent, RawLogRow
from baby_calendar.predict import PredictedRestEvent, predict_next_rest

log = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    events: List[ActivityEvent]
    recent: Recent
    prediction: Optional[PredictedRestEvent] = None
    summaries: List[DailySummary] = field(default_factory=list)
    all_day: List[AllDayEvent] = field(default_factory=list)

    def to_records(self) -> List[Dict[str, Any]]:
        """Coalesced events, then the next-sleep prediction, then all-day summaries."""
        records = [event.to_record() for event in self.events]
        if self.prediction is not None:
            records.append(self.prediction.to_record())
        records.extend(event.to_record() for event in self.all_day)
        return records

    def events_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.to_records(), columns=["start", "end", "title", "color", "kind", "allDay"])

    def summary_frame(self) -> pd.DataFrame:
        return summaries_to_frame(self.summaries)


def run_pipeline(
    rows: Iterable[RawLogRow],
    settings: Optional[Settings] = None,
    now: Optional[datetime] = None,
) -> PipelineResult:
    settings = settings or Settings()
    events, recent = process_events(rows, settings)
    prediction = predict_next_rest(recent, settings, now)
    if prediction is not None:
        log.info(f"Next sleep predicted at {prediction.start:%Y-%m-%d %H:%M}.")
    summaries = daily_summaries(events)
    return PipelineResult(
        events=events,
        recent=recent,
        prediction=prediction,
        summaries=summaries,
        all_day=all_day_events(summaries),
    )
