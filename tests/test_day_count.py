from __future__ import annotations

import random
import threading

import pytest

from klcal.engines.day_count import DayCounter, KOREAN_LUNAR_BASE_YEAR, SOLAR_LUNAR_DAY_DIFF
from klcal.engines.year_record import YearRecordDecoder


@pytest.fixture(scope="module")
def plain(store):
    return DayCounter(YearRecordDecoder(store))


@pytest.fixture
def memo(store):
    return DayCounter(YearRecordDecoder(store), memoize=True)


def test_epoch_alignment(plain):
    """Lunar 1000-01-01 and solar 1000-02-13 share absolute day 1."""
    assert plain.lunar_abs_days(1000, 1, 1, False) == 1
    assert plain.solar_abs_days(1000, 2, 13) == 1
    assert SOLAR_LUNAR_DAY_DIFF == 43


def test_before_base_year_is_zero(plain):
    assert plain.lunar_days_before_year(KOREAN_LUNAR_BASE_YEAR - 1) == 0
    assert plain.solar_days_before_year(KOREAN_LUNAR_BASE_YEAR - 1) == 0
    assert plain.lunar_days_before_month(2020, 0, True) == 0
    assert plain.solar_days_before_month(2020, 0) == 0


def test_year_sums_include_their_argument(plain):
    assert plain.lunar_days_before_year(1000) == plain.decoder.total_lunar_days(1000)
    assert plain.solar_days_before_year(1000) == 365
    assert plain.lunar_days_before_year(1999) == 365234
    assert plain.solar_days_before_year(1999) == 365242


def test_month_sums(plain):
    # 2017: 29+30+29+30+29, leap 5th month of 29 days
    assert plain.lunar_days_before_month(2017, 5, False) == 147
    assert plain.lunar_days_before_month(2017, 5, True) == 176
    assert plain.lunar_days_before_month(2017, 4, True) == 118
    assert plain.solar_days_before_month(2024, 2) == 60
    assert plain.solar_days_before_month(2023, 12) == 365


def test_leap_month_follows_its_ordinary_month(plain):
    ordinary = plain.lunar_abs_days(2017, 5, 1, False)
    leap = plain.lunar_abs_days(2017, 5, 1, True)
    nxt = plain.lunar_abs_days(2017, 6, 1, False)
    assert leap - ordinary == 29
    assert nxt - leap == 29


def test_leap_flag_without_leap_month_is_ignored(plain):
    assert plain.lunar_abs_days(2019, 12, 6, True) == plain.lunar_abs_days(2019, 12, 6, False)


def test_year_lengths_on_the_line(plain):
    for year in (1000, 1582, 1900, 2017, 2020, 2049):
        span = plain.lunar_abs_days(year + 1, 1, 1, False) - plain.lunar_abs_days(year, 1, 1, False)
        assert span == plain.decoder.total_lunar_days(year)
        span = plain.solar_abs_days(year + 1, 1, 1) - plain.solar_abs_days(year, 1, 1)
        assert span == plain.decoder.solar_year_length(year)


@pytest.mark.parametrize("y, m, d, expected", [(2000, 1, 1, 365200), (2024, 1, 1, 373966), (2050, 12, 31, 383827)])
def test_known_solar_abs_days(plain, y, m, d, expected):
    assert plain.solar_abs_days(y, m, d) == expected


def test_memo_matches_plain(plain, memo):
    random.seed(42)
    for _ in range(300):
        y = random.randint(1001, 2050)
        m = random.randint(1, 12)
        leap = random.random() < 0.5
        assert memo.lunar_days_before_year(y) == plain.lunar_days_before_year(y)
        assert memo.solar_days_before_year(y) == plain.solar_days_before_year(y)
        assert memo.lunar_days_before_month(y, m, leap) == plain.lunar_days_before_month(y, m, leap)
        assert memo.lunar_abs_days(y, m, 1, leap) == plain.lunar_abs_days(y, m, 1, leap)


def test_memo_extends_previous_year(plain, memo):
    memo.lunar_days_before_year(1500)
    assert memo.lunar_days_before_year(1501) == plain.lunar_days_before_year(1501)
    assert len(memo._lunar_years) == 2
    memo.clear_cache()
    assert len(memo._lunar_years) == 0


def test_memo_under_threads(plain, memo):
    years = list(range(1000, 2051, 7))
    errors = []

    def worker():
        for y in years:
            if memo.lunar_days_before_year(y) != plain.lunar_days_before_year(y):
                errors.append(y)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []
