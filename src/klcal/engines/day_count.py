"""
klcal.engines.day_count
-----------------------
Cumulative day arithmetic on the shared absolute-day line.

Both calendars count days from base year 1000. The lunar count starts at lunar
1000-01-01 (absolute day 1); the solar count is shifted back by
SOLAR_LUNAR_DAY_DIFF so that the same integer names the same day in both.

The ``*_before_year`` / ``*_before_month`` helpers include their argument:
``lunar_days_before_year(y)`` covers years base..y and the absolute-day
formulas pass ``year - 1`` (likewise ``month - 1``). Keep that convention; any
reshuffling moves conversions by a day.
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, Hashable, Optional

from klcal.engines.year_record import YearRecordDecoder

KOREAN_LUNAR_BASE_YEAR = 1000

# Days between the solar and lunar epochs at the base year (table calibration).
SOLAR_LUNAR_DAY_DIFF = 43


class DayCountCache:
    """
    Key -> value cache for cumulative sums.

    Lookups never take the lock; only inserts do. Values are pure functions of
    the key, so a racing duplicate insert stores the same number.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._values: Dict[Hashable, int] = {}

    def __len__(self) -> int:
        return len(self._values)

    def get(self, key: Hashable) -> Optional[int]:
        return self._values.get(key)

    def put(self, key: Hashable, value: int) -> int:
        with self._lock:
            return self._values.setdefault(key, value)

    def clear(self) -> None:
        with self._lock:
            self._values.clear()


class DayCounter:
    def __init__(self, decoder: YearRecordDecoder, *, memoize: bool = False):
        self.decoder = decoder
        self.memoize = memoize
        self._lunar_years = DayCountCache()
        self._lunar_months = DayCountCache()
        self._solar_years = DayCountCache()

    def clear_cache(self) -> None:
        self._lunar_years.clear()
        self._lunar_months.clear()
        self._solar_years.clear()

    # ---------------------------------------------------------
    # Per-year accumulation
    # ---------------------------------------------------------

    def _accumulate_years(self, year: int, cache: DayCountCache, per_year: Callable[[int], int]) -> int:
        if year < KOREAN_LUNAR_BASE_YEAR:
            return 0
        if not self.memoize:
            return sum(per_year(y) for y in range(KOREAN_LUNAR_BASE_YEAR, year + 1))

        hit = cache.get(year)
        if hit is not None:
            return hit
        prev = cache.get(year - 1) if year > KOREAN_LUNAR_BASE_YEAR else None
        if prev is not None:
            days = prev + per_year(year)
        else:
            days = sum(per_year(y) for y in range(KOREAN_LUNAR_BASE_YEAR, year + 1))
        return cache.put(year, days)

    def lunar_days_before_year(self, year: int) -> int:
        """Total lunar days of years base..``year`` inclusive (0 before the base)."""
        return self._accumulate_years(year, self._lunar_years, self.decoder.total_lunar_days)

    def solar_days_before_year(self, year: int) -> int:
        """Total solar days of years base..``year`` inclusive (0 before the base)."""
        return self._accumulate_years(year, self._solar_years, self.decoder.solar_year_length)

    # ---------------------------------------------------------
    # Per-month accumulation
    # ---------------------------------------------------------

    def _lunar_month_sum(self, year: int, month: int, include_intercalation: bool) -> int:
        dec = self.decoder
        days = sum(dec.month_length(year, m, False) for m in range(1, month + 1))
        if include_intercalation:
            leap = dec.intercalation_month(year)
            if 0 < leap <= month:
                days += dec.month_length(year, leap, True)
        return days

    def lunar_days_before_month(self, year: int, month: int, include_intercalation: bool) -> int:
        """
        Days of lunar months 1..``month`` of ``year``. With ``include_intercalation``
        the leap month is added once it has been reached (leap month <= ``month``).
        """
        if year < KOREAN_LUNAR_BASE_YEAR or month < 1:
            return 0
        if not self.memoize:
            return self._lunar_month_sum(year, month, include_intercalation)

        key = (year, month, include_intercalation)
        hit = self._lunar_months.get(key)
        if hit is not None:
            return hit
        return self._lunar_months.put(key, self._lunar_month_sum(year, month, include_intercalation))

    def solar_days_before_month(self, year: int, month: int) -> int:
        """Days of solar months 1..``month`` of ``year``."""
        if month < 1:
            return 0
        return sum(self.decoder.solar_month_length(year, m) for m in range(1, month + 1))

    # ---------------------------------------------------------
    # Absolute days
    # ---------------------------------------------------------

    def solar_abs_days(self, year: int, month: int, day: int) -> int:
        days = self.solar_days_before_year(year - 1)
        days += self.solar_days_before_month(year, month - 1)
        days += day
        return days - SOLAR_LUNAR_DAY_DIFF

    def lunar_abs_days(self, year: int, month: int, day: int, is_intercalation: bool) -> int:
        days = self.lunar_days_before_year(year - 1)
        days += self.lunar_days_before_month(year, month - 1, True)
        days += day
        # The leap month sits right after its ordinary month.
        if is_intercalation and self.decoder.intercalation_month(year) == month:
            days += self.decoder.month_length(year, month, False)
        return days
