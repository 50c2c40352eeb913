from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .attributes import gapja as gj
from .attributes import standard as _standard  # noqa: F401  (registers attributes)
from .attributes.registry import compute_attributes, list_attributes
from .core.config import CalendarConfig
from .core.types import Basis, DayInfo, GapJaDate, LunarDate, Script, SolarDate
from .engines.calendar import CalendarEngine
from .engines.factory import make_engine
from .engines.interfaces import TableStoreProtocol

_engine: Optional[CalendarEngine] = None

def set_store(store: TableStoreProtocol, *, config: Optional[CalendarConfig] = None) -> None:
    """Point the module-level API at another table store."""
    global _engine
    _engine = make_engine(store, config)

def reset() -> None:
    global _engine
    _engine = None

def get_engine() -> CalendarEngine:
    global _engine
    if _engine is None:
        _engine = make_engine(config=CalendarConfig.from_env())
    return _engine

def engine_info() -> Dict[str, Any]:
    return get_engine().info()

# ============================================================
# Conversions
# ============================================================

def to_lunar(d: date) -> LunarDate:
    """Gregorian date -> Korean lunar date. Raises InvalidDate subclasses."""
    return get_engine().solar_to_lunar(SolarDate.from_date(d))

def to_solar(year: int, month: int, day: int, is_intercalation: bool = False) -> date:
    """Korean lunar date -> Gregorian date. Raises InvalidDate subclasses."""
    s = get_engine().lunar_to_solar(LunarDate(year, month, day, is_intercalation))
    return s.to_date()

def day_info(d: date, *, attributes: Sequence[str] = ()) -> DayInfo:
    eng = get_engine()
    solar = SolarDate.from_date(d)
    info = DayInfo(solar=solar, lunar=eng.solar_to_lunar(solar))
    if attributes:
        info = DayInfo(solar=info.solar, lunar=info.lunar,
                       attributes=compute_attributes(info, attributes, eng))
    return info

# ============================================================
# Gap-Ja
# ============================================================

def gapja(d: date, *, basis: Basis = "lunar") -> Optional[GapJaDate]:
    eng = get_engine()
    solar = SolarDate.from_date(d)
    if basis == "solar":
        eng.validate_solar(solar.year, solar.month, solar.day)
        return gj.from_solar(eng, solar)
    if basis == "lunar":
        return gj.from_lunar(eng, eng.solar_to_lunar(solar))
    raise ValueError(f"basis must be 'solar' or 'lunar', got {basis!r}")

def gapja_string(d: date, *, basis: Basis = "lunar", script: Script = "korean") -> Optional[str]:
    g = gapja(d, basis=basis)
    return gj.render(g, script) if g is not None else None

# ============================================================
# Year/month helpers
# ============================================================

def intercalation_month(year: int) -> int:
    """Leap month number of lunar ``year``, 0 if none."""
    return get_engine().decoder.intercalation_month(year)

def months_in_year(year: int) -> List[Tuple[int, bool, int]]:
    return get_engine().months_in_year(year)

def days_in_month(year: int, month: int, *, is_intercalation: bool = False) -> int:
    return get_engine().month_days(year, month, is_intercalation)

def new_year_day(year: int) -> date:
    """Gregorian date of lunar new year (1/1) of ``year``."""
    return get_engine().new_year_day(year).to_date()

def month_bounds(year: int, month: int, *, is_intercalation: bool = False) -> Tuple[date, date]:
    """First and last Gregorian dates of a lunar month."""
    eng = get_engine()
    n = eng.month_days(year, month, is_intercalation)
    first = eng.lunar_to_solar(LunarDate(year, month, 1, is_intercalation))
    last = eng.lunar_to_solar(LunarDate(year, month, n, is_intercalation))
    return first.to_date(), last.to_date()

__all__ = [
    "set_store",
    "reset",
    "get_engine",
    "engine_info",
    "to_lunar",
    "to_solar",
    "day_info",
    "gapja",
    "gapja_string",
    "intercalation_month",
    "months_in_year",
    "days_in_month",
    "new_year_day",
    "month_bounds",
    "list_attributes",
]
