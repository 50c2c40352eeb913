"""
klcal.engines.calendar
----------------------
The Orchestrator. Validates caller dates against the table and converts between
the solar (Gregorian) and Korean lunar calendars over the shared absolute-day line.

Both directions use the same shape: place the date on the absolute-day line,
guess the counterpart year, then walk months 12..1 backwards until a month start
is not after the date. The walk is kept linear; leap-month insertion rules out a
closed-form month index.
"""

from __future__ import annotations

import logging
import numbers
from typing import Any, Dict, List, Tuple

from klcal.core.errors import InvalidDate, InvalidDay, InvalidIntercalation, InvalidMonth, YearOutOfRange
from klcal.core.types import LunarDate, SolarDate
from klcal.engines.day_count import DayCounter
from klcal.engines.interfaces import TableStoreProtocol
from klcal.engines.year_record import YearRecordDecoder

log = logging.getLogger(__name__)

MAX_MONTH_DAY = 31


class CalendarEngine:
    """
    Stateless solar <-> lunar converter bound to one table store.

    All public conversions validate first and raise InvalidDate subclasses for
    bad caller input; ResourceError from the store passes through untouched.
    """

    def __init__(self, table: TableStoreProtocol, *, memoize: bool = False):
        self.table = table
        self.decoder = YearRecordDecoder(table)
        self.counter = DayCounter(self.decoder, memoize=memoize)

    def info(self) -> Dict[str, Any]:
        md = self.table.metadata
        return {
            "version": md.version,
            "source": md.source,
            "year_range": (md.start_year, md.end_year),
            "lunar_range": (md.lunar_start.isoformat(), md.lunar_end.isoformat()),
            "gregorian_range": (md.solar_start.isoformat(), md.solar_end.isoformat()),
            "memoize": self.counter.memoize,
        }

    # ---------------------------------------------------------
    # Validation
    # ---------------------------------------------------------

    def _check_fields(self, year: Any, month: Any, day: Any) -> None:
        for name, value in (("year", year), ("month", month), ("day", day)):
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise InvalidDate(f"{name} must be an integer, got {value!r}")

        md = self.table.metadata
        if not (md.start_year <= year <= md.end_year):
            raise YearOutOfRange(f"Year {year} outside {md.start_year}..{md.end_year}")
        if not (1 <= month <= 12):
            raise InvalidMonth(f"Month {month} outside 1..12")
        if not (1 <= day <= MAX_MONTH_DAY):
            raise InvalidDay(f"Day {day} outside 1..{MAX_MONTH_DAY}")

    def validate_solar(self, year: int, month: int, day: int) -> SolarDate:
        self._check_fields(year, month, day)
        limit = self.decoder.solar_month_length(year, month)
        if day > limit:
            raise InvalidDay(f"Solar {year}-{month:02d} has {limit} days, not {day}")

        md = self.table.metadata
        ymd = (year, month, day)
        lo, hi = md.solar_start, md.solar_end
        if not ((lo.year, lo.month, lo.day) <= ymd <= (hi.year, hi.month, hi.day)):
            raise YearOutOfRange(f"Solar date {year:04d}-{month:02d}-{day:02d} outside {lo}..{hi}")
        return SolarDate(int(year), int(month), int(day))

    def validate_lunar(self, year: int, month: int, day: int, is_intercalation: bool = False) -> LunarDate:
        self._check_fields(year, month, day)
        if not isinstance(is_intercalation, bool):
            raise InvalidDate(f"is_intercalation must be a bool, got {is_intercalation!r}")

        if is_intercalation:
            leap = self.decoder.intercalation_month(year)
            if leap == 0:
                raise InvalidIntercalation(f"Lunar year {year} has no intercalation month")
            if leap != month:
                raise InvalidIntercalation(
                    f"Lunar year {year} has its intercalation in month {leap}, not {month}"
                )

        limit = self.decoder.month_length(year, month, is_intercalation)
        if day > limit:
            tag = " (intercalation)" if is_intercalation else ""
            raise InvalidDay(f"Lunar {year}-{month:02d}{tag} has {limit} days, not {day}")

        md = self.table.metadata
        ymd = (year, month, day)
        lo, hi = md.lunar_start, md.lunar_end
        if not ((lo.year, lo.month, lo.day) <= ymd <= (hi.year, hi.month, hi.day)):
            raise YearOutOfRange(f"Lunar date {year:04d}-{month:02d}-{day:02d} outside {lo}..{hi}")
        return LunarDate(int(year), int(month), int(day), is_intercalation)

    # ---------------------------------------------------------
    # Absolute days
    # ---------------------------------------------------------

    def solar_abs_days(self, s: SolarDate) -> int:
        return self.counter.solar_abs_days(s.year, s.month, s.day)

    def lunar_abs_days(self, l: LunarDate) -> int:
        return self.counter.lunar_abs_days(l.year, l.month, l.day, l.is_intercalation)

    # ---------------------------------------------------------
    # Forward: Solar -> Lunar
    # ---------------------------------------------------------

    def _lunar_from_solar(self, s: SolarDate) -> LunarDate:
        cnt = self.counter
        abs_days = cnt.solar_abs_days(s.year, s.month, s.day)

        # Lunar new year may still be ahead, i.e. we are in the previous lunar year.
        first_day = cnt.lunar_abs_days(s.year, 1, 1, False)
        lunar_year = s.year if abs_days >= first_day else s.year - 1
        leap = self.decoder.intercalation_month(lunar_year)

        for month in range(12, 0, -1):
            month_start = cnt.lunar_abs_days(lunar_year, month, 1, False)
            if abs_days < month_start:
                continue
            is_intercalation = False
            if leap == month:
                is_intercalation = abs_days >= cnt.lunar_abs_days(lunar_year, month, 1, True)
            start = cnt.lunar_abs_days(lunar_year, month, 1, is_intercalation)
            return LunarDate(lunar_year, month, abs_days - start + 1, is_intercalation)

        raise RuntimeError(f"no lunar month found for absolute day {abs_days}")

    def solar_to_lunar(self, s: SolarDate) -> LunarDate:
        s = self.validate_solar(s.year, s.month, s.day)
        out = self._lunar_from_solar(s)
        log.debug("solar %s -> lunar %s", s.isoformat(), out.isoformat())
        return out

    # ---------------------------------------------------------
    # Inverse: Lunar -> Solar
    # ---------------------------------------------------------

    def _solar_from_lunar(self, l: LunarDate) -> SolarDate:
        cnt = self.counter
        abs_days = cnt.lunar_abs_days(l.year, l.month, l.day, l.is_intercalation)

        next_new_year = cnt.solar_abs_days(l.year + 1, 1, 1)
        solar_year = l.year if abs_days < next_new_year else l.year + 1

        for month in range(12, 0, -1):
            month_start = cnt.solar_abs_days(solar_year, month, 1)
            if abs_days >= month_start:
                return SolarDate(solar_year, month, abs_days - month_start + 1)

        raise RuntimeError(f"no solar month found for absolute day {abs_days}")

    def lunar_to_solar(self, l: LunarDate) -> SolarDate:
        l = self.validate_lunar(l.year, l.month, l.day, l.is_intercalation)
        out = self._solar_from_lunar(l)
        log.debug("lunar %s -> solar %s", l.isoformat(), out.isoformat())
        return out

    # ---------------------------------------------------------
    # Month/year helpers
    # ---------------------------------------------------------

    def month_days(self, year: int, month: int, is_intercalation: bool = False) -> int:
        if is_intercalation and self.decoder.intercalation_month(year) != month:
            raise InvalidIntercalation(f"Lunar year {year} has no intercalation month {month}")
        return self.decoder.month_length(year, month, is_intercalation)

    def months_in_year(self, year: int) -> List[Tuple[int, bool, int]]:
        """
        Lunar months of ``year`` in calendar order as (month, is_intercalation, days);
        a leap month follows its ordinary month.
        """
        dec = self.decoder
        leap = dec.intercalation_month(year)
        out: List[Tuple[int, bool, int]] = []
        for m in range(1, 13):
            out.append((m, False, dec.month_length(year, m, False)))
            if m == leap:
                out.append((m, True, dec.month_length(year, m, True)))
        return out

    def new_year_day(self, year: int) -> SolarDate:
        """Solar date of lunar ``year``-01-01."""
        return self.lunar_to_solar(LunarDate(year, 1, 1, False))
