"""klcal public API.

Korean lunar <-> Gregorian conversion for 1000..2050 plus Gap-Ja (sexagenary) names.
Keep this surface small: users should mostly interact with names re-exported here.
"""

__version__ = "1.0.0"

from .api import (
    to_lunar,
    to_solar,
    day_info,
    gapja,
    gapja_string,
    engine_info,
    intercalation_month,
    months_in_year,
    days_in_month,
    new_year_day,
    month_bounds,
    set_store,
    list_attributes,
)
from .core.config import CalendarConfig
from .core.errors import (
    KlcalError,
    ResourceError,
    InvalidDate,
    YearOutOfRange,
    InvalidMonth,
    InvalidIntercalation,
    InvalidDay,
)
from .core.types import SolarDate, LunarDate, GapJaDate, DayInfo
from .lunar_calendar import KoreanLunarCalendar
from .tables.store import LunarTableStore, default_store

__all__ = [
    "to_lunar",
    "to_solar",
    "day_info",
    "gapja",
    "gapja_string",
    "engine_info",
    "intercalation_month",
    "months_in_year",
    "days_in_month",
    "new_year_day",
    "month_bounds",
    "set_store",
    "list_attributes",
    "CalendarConfig",
    "KlcalError",
    "ResourceError",
    "InvalidDate",
    "YearOutOfRange",
    "InvalidMonth",
    "InvalidIntercalation",
    "InvalidDay",
    "SolarDate",
    "LunarDate",
    "GapJaDate",
    "DayInfo",
    "KoreanLunarCalendar",
    "LunarTableStore",
    "default_store",
]
