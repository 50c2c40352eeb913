from __future__ import annotations

import pytest

from klcal.engines.factory import make_engine
from klcal.lunar_calendar import KoreanLunarCalendar
from klcal.tables.store import default_store


@pytest.fixture(scope="session")
def store():
    return default_store()


@pytest.fixture(scope="session")
def engine(store):
    return make_engine(store)


@pytest.fixture(scope="session")
def memo_engine(store):
    from klcal.core.config import CalendarConfig
    return make_engine(store, CalendarConfig(memoize=True))


@pytest.fixture
def cal(store):
    return KoreanLunarCalendar(store)
