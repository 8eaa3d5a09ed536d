import logging
from datetime import datetime

import pytest

from baby_calendar.coalesce import process_events
from baby_calendar.errors import AmountParseError, OrderingViolation, ParseError
from baby_calendar.events import EventKind


def test_coalesces_sleep_events(make_rows, settings):
    rows = make_rows(
        ("June 5, 2019 at 10:19PM", "is asleep"),
        ("June 6, 2019 at 05:19AM", "is awake"),
    )
    events, recent = process_events(rows, settings)
    assert len(events) == 1
    assert events[0].kind is EventKind.ASLEEP
    assert events[0].end == datetime(2019, 6, 6, 5, 19)
    assert events[0].title == "😴asleep for 7:00"
    # The wake-up is remembered even though it was folded into the sleep.
    assert recent[EventKind.AWAKE].start == datetime(2019, 6, 6, 5, 19)


def test_does_not_coalesce_sleep_events_outside_24_hours(make_rows, settings):
    rows = make_rows(
        ("June 3, 2019 at 10:19PM", "is asleep"),
        ("June 4, 2019 at 11:19PM", "is awake"),
    )
    events, _ = process_events(rows, settings)
    assert len(events) == 2
    assert events[0].end is None
    assert events[1].kind is EventKind.AWAKE


def test_wake_up_does_not_reopen_closed_sleep(make_rows, settings):
    rows = make_rows(
        ("June 5, 2019 at 10:00AM", "is asleep"),
        ("June 5, 2019 at 11:00AM", "is awake"),
        ("June 5, 2019 at 12:00PM", "is up"),
    )
    events, recent = process_events(rows, settings)
    assert [e.kind for e in events] == [EventKind.ASLEEP, EventKind.AWAKE]
    assert events[0].end == datetime(2019, 6, 5, 11, 0)
    assert recent[EventKind.AWAKE] is events[1]


def test_wake_up_without_sleep_stands_alone(make_rows, settings):
    rows = make_rows(("June 5, 2019 at 07:00AM", "is up"))
    events, recent = process_events(rows, settings)
    assert len(events) == 1
    assert recent[EventKind.AWAKE] is events[0]
    assert EventKind.ASLEEP not in recent


def test_coalesces_eat_events(make_rows, settings):
    rows = make_rows(
        ("June 5, 2019 at 10:19AM", "took 100"),
        ("June 5, 2019 at 10:59AM", "took 100"),
    )
    events, _ = process_events(rows, settings)
    assert len(events) == 1
    assert events[0].amount == 200
    assert events[0].occurrence_count == 2
    assert events[0].end == datetime(2019, 6, 5, 10, 59)


def test_coalesces_2_of_3_eat_events(make_rows, settings):
    rows = make_rows(
        ("June 5, 2019 at 10:19AM", "took 100"),
        ("June 5, 2019 at 10:49AM", "took 100"),
        ("June 5, 2019 at 11:39AM", "took 100"),
    )
    events, recent = process_events(rows, settings)
    assert len(events) == 2
    assert events[0].amount == 200
    assert events[0].occurrence_count == 2
    assert events[1].amount == 100
    assert events[1].occurrence_count == 1
    assert recent[EventKind.EAT] is events[1]


def test_eat_window_is_anchored_on_first_feed(make_rows, settings):
    # 25 minutes apart each: the third is 75 minutes after the first.
    rows = make_rows(
        ("June 5, 2019 at 10:00AM", "took 50"),
        ("June 5, 2019 at 10:25AM", "took 50"),
        ("June 5, 2019 at 10:50AM", "took 50"),
        ("June 5, 2019 at 11:15AM", "took 50"),
    )
    events, _ = process_events(rows, settings)
    assert [e.occurrence_count for e in events] == [3, 1]


def test_does_not_coalesce_eat_events_outside_1_hour(make_rows, settings):
    rows = make_rows(
        ("June 5, 2019 at 10:19AM", "took 100"),
        ("June 5, 2019 at 11:19AM", "took 100"),
    )
    events, _ = process_events(rows, settings)
    assert len(events) == 2


def test_eat_title_for_multiple_feeds(make_rows, settings):
    rows = make_rows(
        ("June 5, 2019 at 10:00AM", "took 100"),
        ("June 5, 2019 at 10:10AM", "took 200"),
        ("June 5, 2019 at 10:20AM", 300),
    )
    events, _ = process_events(rows, settings)
    assert events[0].title == "🍼🍼🍼took 600"


def test_does_not_coalesce_events_if_it_cannot(make_rows, settings):
    rows = make_rows(("June 6, 2019 at 05:19AM", "is asleep"))
    events, recent = process_events(rows, settings)
    assert len(events) == 1
    assert recent[EventKind.ASLEEP] is events[0]


def test_poop_and_misc_always_append(make_rows, settings):
    rows = make_rows(
        ("June 6, 2019 at 05:19AM", "has pooped"),
        ("June 6, 2019 at 05:20AM", "has pooped"),
        ("June 6, 2019 at 05:21AM", "smiled"),
    )
    events, recent = process_events(rows, settings)
    assert len(events) == 3
    assert recent[EventKind.POOP] is events[1]
    assert recent[EventKind.MISC] is events[2]


def test_custom_eat_window(make_rows):
    from baby_calendar.config import Settings

    rows = make_rows(
        ("June 5, 2019 at 10:00AM", "took 100"),
        ("June 5, 2019 at 11:15AM", "took 100"),
    )
    events, _ = process_events(rows, Settings(_env_file=None, eat_coalesce_window_minutes=90))
    assert len(events) == 1


def test_bad_timestamp_raises_by_default(make_rows, settings):
    rows = make_rows(("whenever", "is asleep"))
    with pytest.raises(ParseError):
        process_events(rows, settings)


def test_bad_timestamp_skipped_when_configured(make_rows, settings, caplog):
    settings.skip_invalid_rows = True
    rows = make_rows(
        ("whenever", "is asleep"),
        ("June 6, 2019 at 05:19AM", "has pooped"),
    )
    with caplog.at_level(logging.WARNING):
        events, _ = process_events(rows, settings)
    assert len(events) == 1
    assert "Skipping row 0" in caplog.text


def test_amount_errors_are_never_skipped(make_rows, settings, monkeypatch):
    settings.skip_invalid_rows = True
    monkeypatch.setattr("baby_calendar.events.classify", lambda text: EventKind.EAT)
    rows = make_rows(("June 6, 2019 at 05:19AM", "bottle"))
    with pytest.raises(AmountParseError):
        process_events(rows, settings)


def test_out_of_order_rows_are_logged(make_rows, settings, caplog):
    rows = make_rows(
        ("June 6, 2019 at 05:19AM", "has pooped"),
        ("June 6, 2019 at 04:19AM", "has pooped"),
    )
    with caplog.at_level(logging.WARNING):
        events, _ = process_events(rows, settings)
    assert len(events) == 2
    assert "earlier than the row before it" in caplog.text


def test_out_of_order_rows_rejected_when_strict(make_rows, settings):
    settings.strict_ordering = True
    rows = make_rows(
        ("June 6, 2019 at 05:19AM", "has pooped"),
        ("June 6, 2019 at 04:19AM", "has pooped"),
    )
    with pytest.raises(OrderingViolation) as exc_info:
        process_events(rows, settings)
    assert exc_info.value.row_index == 1
