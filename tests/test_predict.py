from datetime import datetime

from baby_calendar.events import ActivityEvent, EventKind
from baby_calendar.predict import next_sleep_event, predict_next_rest


def test_start_time_offset_by_awake_duration(settings):
    event = next_sleep_event(datetime(2019, 6, 6, 5, 19), settings, now=datetime(2019, 6, 6, 6, 19))
    assert event.start == datetime(2019, 6, 6, 7, 49)


def test_start_time_is_now_when_overdue(settings):
    event = next_sleep_event(datetime(2019, 6, 6, 5, 19), settings, now=datetime(2019, 6, 6, 9, 19))
    assert event.start == datetime(2019, 6, 6, 9, 19)
    assert event.advisory_text == "Time to sleep! (awake for 4:00)"


def test_daytime_title(settings):
    event = next_sleep_event(datetime(2019, 6, 6, 19, 19), settings, now=datetime(2019, 6, 6, 19, 19))
    assert event.title == "💤Time for a nap! (awake for 2:30)"


def test_nighttime_title(settings):
    event = next_sleep_event(datetime(2019, 6, 6, 20, 19), settings, now=datetime(2019, 6, 6, 20, 19))
    assert event.title == "💤Time to sleep! (awake for 2:30)"
    assert event.color == "green"


def test_custom_bedtime(settings):
    settings.bedtime_hour = 21
    event = next_sleep_event(datetime(2019, 6, 6, 19, 0), settings, now=datetime(2019, 6, 6, 19, 0))
    assert event.advisory_text.startswith("Time to sleep!")


def _event(kind, hour):
    return ActivityEvent(kind=kind, start=datetime(2019, 6, 6, hour, 0))


def test_predicts_when_awake(settings):
    recent = {EventKind.ASLEEP: _event(EventKind.ASLEEP, 9), EventKind.AWAKE: _event(EventKind.AWAKE, 11)}
    event = predict_next_rest(recent, settings, now=datetime(2019, 6, 6, 11, 30))
    assert event is not None
    assert event.start == datetime(2019, 6, 6, 13, 30)
    assert event.last_awake == datetime(2019, 6, 6, 11, 0)


def test_no_prediction_when_asleep(settings):
    recent = {EventKind.AWAKE: _event(EventKind.AWAKE, 9), EventKind.ASLEEP: _event(EventKind.ASLEEP, 11)}
    assert predict_next_rest(recent, settings, now=datetime(2019, 6, 6, 11, 30)) is None


def test_no_prediction_without_both_states(settings):
    assert predict_next_rest({EventKind.AWAKE: _event(EventKind.AWAKE, 9)}, settings) is None
    assert predict_next_rest({}, settings) is None
