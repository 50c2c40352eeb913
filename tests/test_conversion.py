from __future__ import annotations

import random
from datetime import date, timedelta

import pytest

from klcal.core.errors import (
    InvalidDate,
    InvalidDay,
    InvalidIntercalation,
    InvalidMonth,
    YearOutOfRange,
)
from klcal.core.types import LunarDate, SolarDate


@pytest.mark.parametrize(
    "solar, lunar",
    [
        ((2017, 6, 24), (2017, 5, 1, True)),
        ((2020, 1, 1), (2019, 12, 7, False)),
        ((2023, 1, 22), (2023, 1, 1, False)),
        ((2024, 2, 10), (2024, 1, 1, False)),
        ((2024, 1, 1), (2023, 11, 20, False)),
        ((2020, 6, 6), (2020, 4, 15, True)),
        ((2023, 3, 22), (2023, 2, 1, True)),
        ((1000, 2, 13), (1000, 1, 1, False)),
        ((2050, 12, 31), (2050, 11, 18, False)),
    ],
)
def test_known_fixed_points(engine, solar, lunar):
    assert engine.solar_to_lunar(SolarDate(*solar)) == LunarDate(*lunar)
    assert engine.lunar_to_solar(LunarDate(*lunar)) == SolarDate(*solar)


@pytest.mark.parametrize("ymd", [(2024, 6, 15), (2023, 12, 25), (2022, 8, 15), (2021, 10, 3)])
def test_round_trip_examples(engine, ymd):
    s = SolarDate(*ymd)
    assert engine.lunar_to_solar(engine.solar_to_lunar(s)) == s


def test_ordinary_month_before_leap_month(engine):
    # ordinary 5th month of 2017 starts 29 days before its leap month
    assert engine.lunar_to_solar(LunarDate(2017, 5, 1)) == SolarDate(2017, 5, 26)
    assert engine.solar_to_lunar(SolarDate(2017, 6, 23)) == LunarDate(2017, 5, 29, False)


def test_round_trip_random(memo_engine):
    random.seed(42)
    start = date(1000, 2, 13)
    span = (date(2050, 12, 31) - start).days
    for _ in range(400):
        d0 = start + timedelta(days=random.randint(0, span))
        s = SolarDate.from_date(d0)
        back = memo_engine.lunar_to_solar(memo_engine.solar_to_lunar(s))
        assert back == s, d0


def test_consecutive_days_advance_by_one(memo_engine):
    d = date(2023, 1, 1)
    prev = memo_engine.lunar_abs_days(memo_engine.solar_to_lunar(SolarDate.from_date(d)))
    for _ in range(400):
        d += timedelta(days=1)
        cur = memo_engine.lunar_abs_days(memo_engine.solar_to_lunar(SolarDate.from_date(d)))
        assert cur == prev + 1
        prev = cur


def test_memo_engine_agrees(engine, memo_engine):
    for ymd in [(1000, 2, 13), (1582, 10, 10), (1900, 3, 1), (2017, 6, 24), (2050, 12, 31)]:
        s = SolarDate(*ymd)
        assert engine.solar_to_lunar(s) == memo_engine.solar_to_lunar(s)


@pytest.mark.parametrize(
    "ymd, exc",
    [
        ((999, 1, 1), YearOutOfRange),
        ((2051, 1, 1), YearOutOfRange),
        ((1000, 1, 1), YearOutOfRange),
        ((1000, 2, 12), YearOutOfRange),
        ((2024, 13, 1), InvalidMonth),
        ((2024, 0, 1), InvalidMonth),
        ((2024, 1, 0), InvalidDay),
        ((2024, 1, 32), InvalidDay),
        ((2023, 2, 29), InvalidDay),
        ((2023, 4, 31), InvalidDay),
    ],
)
def test_invalid_solar(engine, ymd, exc):
    with pytest.raises(exc):
        engine.solar_to_lunar(SolarDate(*ymd))


def test_solar_leap_day_is_valid(engine):
    assert engine.validate_solar(2024, 2, 29) == SolarDate(2024, 2, 29)


@pytest.mark.parametrize(
    "args, exc",
    [
        ((2019, 12, 6, True), InvalidIntercalation),
        ((2020, 5, 15, True), InvalidIntercalation),
        ((2020, 4, 30, True), InvalidDay),
        ((2017, 5, 30, False), InvalidDay),
        ((2050, 11, 19, False), YearOutOfRange),
        ((2051, 1, 1, False), YearOutOfRange),
        ((2020, 13, 1, False), InvalidMonth),
    ],
)
def test_invalid_lunar(engine, args, exc):
    with pytest.raises(exc):
        engine.lunar_to_solar(LunarDate(*args))


@pytest.mark.parametrize("bad", [2024.0, "2024", None, True])
def test_non_integer_fields(engine, bad):
    with pytest.raises(InvalidDate):
        engine.validate_solar(bad, 1, 1)


def test_errors_are_value_errors():
    assert issubclass(InvalidDay, ValueError)
    assert issubclass(YearOutOfRange, InvalidDate)


def test_months_in_year(engine):
    months = engine.months_in_year(2023)
    assert len(months) == 13
    assert months[1] == (2, False, 30)
    assert months[2] == (2, True, 29)
    assert sum(n for _, _, n in months) == 384
    assert len(engine.months_in_year(2024)) == 12


@pytest.mark.parametrize(
    "year, ymd",
    [(2015, (2015, 2, 19)), (2020, (2020, 1, 25)), (2025, (2025, 1, 29)), (2026, (2026, 2, 17))],
)
def test_new_year_day(engine, year, ymd):
    assert engine.new_year_day(year) == SolarDate(*ymd)


def test_month_days_rejects_missing_leap(engine):
    assert engine.month_days(2020, 4, True) == 29
    with pytest.raises(InvalidIntercalation):
        engine.month_days(2020, 5, True)


def test_info(engine):
    info = engine.info()
    assert info["year_range"] == (1000, 2050)
    assert info["memoize"] is False


@pytest.mark.parametrize("flag", ["no", 1, 0, None])
def test_intercalation_flag_must_be_bool(engine, flag):
    with pytest.raises(InvalidDate):
        engine.validate_lunar(2020, 4, 15, flag)
