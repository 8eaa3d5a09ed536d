"""
Coalescing of adjacent same-kind events.

A wake-up closes the open sleep session it follows, and feeds logged close
together fold into a single feed. Windows are measured from the start of the
representative event, not from the last occurrence merged into it.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from baby_calendar.config import Settings
from baby_calendar.errors import OrderingViolation, ParseError
from baby_calendar.events import ActivityEvent, EventKind, RawLogRow, build_event

log = logging.getLogger(__name__)

Recent = Dict[EventKind, ActivityEvent]


def _close_sleep(prior: ActivityEvent, event: ActivityEvent) -> None:
    prior.end = event.start


def _add_feed(prior: ActivityEvent, event: ActivityEvent) -> None:
    prior.amount += event.amount
    prior.occurrence_count += 1
    prior.end = event.start


def _can_close_sleep(prior: ActivityEvent, event: ActivityEvent, settings: Settings) -> bool:
    return prior.end is None and event.start - prior.start < settings.sleep_window


def _can_add_feed(prior: ActivityEvent, event: ActivityEvent, settings: Settings) -> bool:
    return event.start - prior.start < settings.eat_window


# kind -> (kind of the representative it may merge into, merge predicate, merge action)
MERGE_RULES: Dict[
    EventKind,
    Tuple[
        EventKind,
        Callable[[ActivityEvent, ActivityEvent, Settings], bool],
        Callable[[ActivityEvent, ActivityEvent], None],
    ],
] = {
    EventKind.AWAKE: (EventKind.ASLEEP, _can_close_sleep, _close_sleep),
    EventKind.EAT: (EventKind.EAT, _can_add_feed, _add_feed),
}


def coalesce_event(event: ActivityEvent, events: List[ActivityEvent], recent: Recent, settings: Settings) -> bool:
    """
    Fold one built event into the output list and the recent map.

    Returns True if the event was merged into an earlier one.
    """
    rule = MERGE_RULES.get(event.kind)
    merged = False
    if rule is not None:
        anchor_kind, can_merge, merge = rule
        prior = recent.get(anchor_kind)
        if prior is not None and can_merge(prior, event, settings):
            merge(prior, event)
            merged = True
            log.debug(f"Merged {event.kind.value} at {event.start:%Y-%m-%d %H:%M} into {prior.kind.value} from {prior.start:%H:%M}")

    if not merged:
        events.append(event)

    # A merged feed stays represented by the feed it joined; a wake-up is
    # remembered even when it only closed a sleep session.
    if not (merged and event.kind is EventKind.EAT):
        recent[event.kind] = event
    return merged


def process_events(
    rows: Iterable[RawLogRow],
    settings: Optional[Settings] = None,
) -> Tuple[List[ActivityEvent], Recent]:
    """
    Build and coalesce events from rows in the order given.

    Rows are expected in non-decreasing time order. With strict_ordering
    enabled a row going back in time raises OrderingViolation; otherwise it is
    logged and processed as is. Rows with unparseable timestamps raise
    ParseError unless skip_invalid_rows is enabled.
    """
    settings = settings or Settings()
    events: List[ActivityEvent] = []
    recent: Recent = {}
    previous_start: Optional[datetime] = None
    merged_count = 0

    for index, row in enumerate(rows):
        try:
            event = build_event(row, row_index=index)
        except ParseError as e:
            if not settings.skip_invalid_rows:
                raise
            log.warning(f"Skipping row {index}: {e}")
            continue

        if previous_start is not None and event.start < previous_start:
            if settings.strict_ordering:
                raise OrderingViolation(index, previous_start, event.start)
            log.warning(
                f"Row {index} ({event.start:%Y-%m-%d %H:%M}) is earlier than the row before it; coalescing may be off."
            )
        previous_start = event.start

        if coalesce_event(event, events, recent, settings):
            merged_count += 1

    log.info(f"Coalesced {len(events) + merged_count} rows into {len(events)} events.")
    return events, recent
