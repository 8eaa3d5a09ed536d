"""
Per-day aggregation of coalesced events.

An event counts toward the day it starts on and, if it ends on a different
day, toward that day too, so a night's sleep shows up on both sides of
midnight with the minutes split at midnight.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Iterable, List

import pandas as pd

from baby_calendar.events import (
    KIND_BEHAVIOR,
    ActivityEvent,
    EventKind,
    asleep_title,
    format_minutes,
    minutes_between,
)

log = logging.getLogger(__name__)


@dataclass
class DailySummary:
    date: date
    poop_count: int = 0
    total_sleep_minutes: int = 0
    total_feed_amount: int = 0
    sleep_count: int = 0
    feed_count: int = 0


@dataclass
class AllDayEvent:
    date: date
    kind: EventKind
    title: str

    @property
    def color(self):
        return KIND_BEHAVIOR[self.kind].color

    def to_record(self) -> Dict[str, Any]:
        return {
            "start": self.date.isoformat(),
            "end": None,
            "title": self.title,
            "color": self.color,
            "kind": self.kind.value,
            "allDay": True,
        }


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def group_events_by_date(events: Iterable[ActivityEvent]) -> Dict[date, List[ActivityEvent]]:
    grouped: Dict[date, List[ActivityEvent]] = {}
    for event in events:
        start_date = event.start.date()
        grouped.setdefault(start_date, []).append(event)
        if event.end is not None:
            end_date = event.end.date()
            if end_date != start_date:
                grouped.setdefault(end_date, []).append(event)
    return grouped


def total_sleep_minutes(asleep_events: Iterable[ActivityEvent], day: date) -> int:
    """
    Minutes slept on `day`. Sessions without an end count as zero; sessions
    crossing midnight only count the part that falls on `day`.
    """
    total = 0
    for event in asleep_events:
        if event.end is None:
            continue
        if event.start.date() != day:
            # sleep from the night before
            start, end = _start_of_day(day), event.end
        elif event.end.date() != day:
            # tonight's sleep
            start, end = event.start, _start_of_day(day + timedelta(days=1))
        else:
            # nap
            start, end = event.start, event.end
        total += minutes_between(start, end)
    return total


def summarize_day(day: date, events: Iterable[ActivityEvent]) -> DailySummary:
    by_kind: Dict[EventKind, List[ActivityEvent]] = defaultdict(list)
    for event in events:
        by_kind[event.kind].append(event)

    return DailySummary(
        date=day,
        poop_count=len(by_kind[EventKind.POOP]),
        total_sleep_minutes=total_sleep_minutes(by_kind[EventKind.ASLEEP], day),
        total_feed_amount=sum(e.amount or 0 for e in by_kind[EventKind.EAT]),
        sleep_count=len(by_kind[EventKind.ASLEEP]),
        feed_count=len(by_kind[EventKind.EAT]),
    )


def daily_summaries(events: Iterable[ActivityEvent]) -> List[DailySummary]:
    summaries = [summarize_day(day, day_events) for day, day_events in group_events_by_date(events).items()]
    log.info(f"Summarized {len(summaries)} days.")
    return summaries


def all_day_events(summaries: Iterable[DailySummary]) -> List[AllDayEvent]:
    """One all-day entry per category per day, skipping categories that total zero."""
    results: List[AllDayEvent] = []
    for summary in summaries:
        if summary.poop_count:
            emoji = KIND_BEHAVIOR[EventKind.POOP].emoji * summary.poop_count
            results.append(AllDayEvent(summary.date, EventKind.POOP, emoji))
        if summary.total_sleep_minutes:
            emoji = KIND_BEHAVIOR[EventKind.ASLEEP].emoji * summary.sleep_count
            results.append(
                AllDayEvent(summary.date, EventKind.ASLEEP, f"{emoji}{asleep_title(summary.total_sleep_minutes)}")
            )
        if summary.total_feed_amount:
            emoji = KIND_BEHAVIOR[EventKind.EAT].emoji * summary.feed_count
            results.append(AllDayEvent(summary.date, EventKind.EAT, f"{emoji}took {summary.total_feed_amount}"))
    return results


def summaries_to_frame(summaries: Iterable[DailySummary]) -> pd.DataFrame:
    """Daily summaries as a table sorted by date, one row per day."""
    rows = [
        {
            "Date": s.date,
            "Poops": s.poop_count,
            "Sleeps": s.sleep_count,
            "Sleep (h:mm)": format_minutes(s.total_sleep_minutes),
            "Sleep Minutes": s.total_sleep_minutes,
            "Feeds": s.feed_count,
            "Fed": s.total_feed_amount,
        }
        for s in summaries
    ]
    if not rows:
        return pd.DataFrame()
    df = pd.DataFrame(rows)
    return df.sort_values(by="Date").reset_index(drop=True)
