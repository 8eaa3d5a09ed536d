import pytest

from baby_calendar.config import Settings
from baby_calendar.events import RawLogRow


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def make_rows():
    def _make(*pairs):
        return [RawLogRow(timestamp=ts, activity=activity) for ts, activity in pairs]

    return _make
