from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from baby_calendar.config import Settings
from baby_calendar.events import KIND_BEHAVIOR, EventKind, awake_title, minutes_between

NEXT_SLEEP_EMOJI = "💤"


@dataclass
class PredictedRestEvent:
    start: datetime
    last_awake: datetime
    advisory_text: str

    @property
    def color(self) -> Optional[str]:
        return KIND_BEHAVIOR[EventKind.ASLEEP].color

    @property
    def title(self) -> str:
        return f"{NEXT_SLEEP_EMOJI}{self.advisory_text}"

    def to_record(self) -> Dict[str, Any]:
        return {
            "start": self.start,
            "end": None,
            "title": self.title,
            "color": self.color,
            "kind": "NEXT_SLEEP",
        }


def is_bedtime(moment: datetime, settings: Settings) -> bool:
    hour = moment.hour
    return hour >= settings.bedtime_hour or hour < settings.waketime_hour


def next_sleep_event(
    last_awake: datetime,
    settings: Optional[Settings] = None,
    now: Optional[datetime] = None,
) -> PredictedRestEvent:
    settings = settings or Settings()
    now = now or datetime.now()
    start = max(last_awake + settings.awake_duration, now)
    awake_text = awake_title(minutes_between(last_awake, start))
    if is_bedtime(start, settings):
        advisory = f"Time to sleep! ({awake_text})"
    else:
        advisory = f"Time for a nap! ({awake_text})"
    return PredictedRestEvent(start=start, last_awake=last_awake, advisory_text=advisory)


def predict_next_rest(
    recent: Dict[EventKind, Any],
    settings: Optional[Settings] = None,
    now: Optional[datetime] = None,
) -> Optional[PredictedRestEvent]:
    """Predict the next sleep if the last thing logged was a wake-up, else None."""
    awake = recent.get(EventKind.AWAKE)
    asleep = recent.get(EventKind.ASLEEP)
    if awake is None or asleep is None or not awake.start > asleep.start:
        return None
    return next_sleep_event(awake.start, settings, now)
