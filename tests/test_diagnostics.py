from __future__ import annotations

import json

import pytest

from klcal import api
from klcal.diagnostics.leap_months import build_points
from klcal.tables.store import LunarTableStore


@pytest.fixture(autouse=True)
def _fresh_engine():
    api.reset()
    yield
    api.reset()


def test_leap_points_from_packaged_table():
    years, leaps = build_points(2015, 2025)
    assert dict(zip(years.tolist(), leaps.tolist())) == {2017: 5, 2020: 4, 2023: 2, 2025: 6}


def test_leap_points_follow_installed_store(tmp_path):
    path = tmp_path / "t.json"
    path.write_text(json.dumps({
        "metadata": {
            "version": "test",
            "source": "unit test",
            "year_range": {"start": 2000, "end": 2002},
            "lunar_range": {"start": "2000-01-01", "end": "2002-12-29"},
            "gregorian_range": {"start": "2000-02-01", "end": "2002-12-31"},
        },
        "constants": {
            "lunar_big_month_days": 30,
            "lunar_small_month_days": 29,
            "solar_year_days": 365,
            "lunar_year_days": 354,
        },
        "data": [0, 3 << 12, 0],
    }), encoding="utf-8")
    api.set_store(LunarTableStore(path))
    years, leaps = build_points(2000, 2002)
    assert years.tolist() == [2001]
    assert leaps.tolist() == [3]
