"""
klcal.engines.year_record
-------------------------
Decoders over one packed year record.

Layout of a record:
  bits 0..11   month m is big (30 days) iff bit (12 - m) is set
  bits 12..15  intercalation (leap) month number, 0 = none
  bit  16      leap month is big
  bits 17..25  total days in the lunar year
  bit  30      the solar year of the same number is a leap year
"""

from __future__ import annotations

from typing import Tuple

from klcal.core.errors import InvalidMonth
from klcal.engines.interfaces import TableStoreProtocol

# Gregorian month lengths, February handled separately.
SOLAR_MONTH_DAYS: Tuple[int, ...] = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
SOLAR_LEAP_FEBRUARY_DAYS = 29


def _check_month(month: int) -> None:
    if not (1 <= month <= 12):
        raise InvalidMonth(f"Month {month} outside 1..12")


class YearRecordDecoder:
    def __init__(self, table: TableStoreProtocol):
        self.table = table

    @property
    def big_month_days(self) -> int:
        return self.table.constants.lunar_big_month_days

    @property
    def small_month_days(self) -> int:
        return self.table.constants.lunar_small_month_days

    def intercalation_month(self, year: int) -> int:
        return (self.table.record_for(year) >> 12) & 0xF

    def total_lunar_days(self, year: int) -> int:
        return (self.table.record_for(year) >> 17) & 0x1FF

    def is_solar_leap_year(self, year: int) -> bool:
        return (self.table.record_for(year) >> 30) & 0x1 == 1

    def month_length(self, year: int, month: int, is_intercalation: bool = False) -> int:
        """
        Length (29|30) of a lunar month. The leap flag is only honoured when the
        year's leap month is ``month``; otherwise the ordinary month is read.
        """
        _check_month(month)
        data = self.table.record_for(year)
        if is_intercalation and ((data >> 12) & 0xF) == month:
            big = (data >> 16) & 0x1
        else:
            big = (data >> (12 - month)) & 0x1
        return self.big_month_days if big else self.small_month_days

    def intercalation_month_length(self, year: int) -> int:
        """Length of the leap month, 0 if the year has none."""
        leap = self.intercalation_month(year)
        if leap == 0:
            return 0
        return self.month_length(year, leap, True)

    def solar_year_length(self, year: int) -> int:
        c = self.table.constants
        return c.solar_leap_year_days if self.is_solar_leap_year(year) else c.solar_year_days

    def solar_month_length(self, year: int, month: int) -> int:
        _check_month(month)
        if month == 2 and self.is_solar_leap_year(year):
            return SOLAR_LEAP_FEBRUARY_DAYS
        return SOLAR_MONTH_DAYS[month - 1]
