"""
klcal.lunar_calendar
--------------------
Session-style converter: set a solar or a lunar date, then read both sides back
as ISO strings or as Gap-Ja text.

The calendar keeps the last successfully converted (solar, lunar) pair. A failed
``set_*`` call reports False and leaves that pair as it was; only an unusable
table (ResourceError) escapes as an exception.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .attributes import gapja as gj
from .core.config import CalendarConfig
from .core.errors import InvalidDate
from .core.types import Basis, GapJaDate, LunarDate, Script, SolarDate
from .engines.calendar import CalendarEngine
from .engines.factory import make_engine
from .engines.interfaces import TableStoreProtocol

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarState:
    """Last successfully converted pair; replaced as a whole, never field by field."""
    solar: Optional[SolarDate] = None
    lunar: Optional[LunarDate] = None


class KoreanLunarCalendar:
    def __init__(
        self,
        table: Optional[TableStoreProtocol] = None,
        *,
        config: Optional[CalendarConfig] = None,
        engine: Optional[CalendarEngine] = None,
    ):
        if engine is None:
            engine = make_engine(table, config if config is not None else CalendarConfig.from_env())
        self.engine = engine
        self.state = CalendarState()

    def __repr__(self) -> str:
        return f"KoreanLunarCalendar(solar={self.solar_iso()!r}, lunar={self.lunar_iso()!r})"

    @property
    def solar_date(self) -> Optional[SolarDate]:
        return self.state.solar

    @property
    def lunar_date(self) -> Optional[LunarDate]:
        return self.state.lunar

    # ---------------------------------------------------------
    # Conversions
    # ---------------------------------------------------------

    def set_solar_date(self, year: int, month: int, day: int) -> bool:
        """Solar -> lunar. Stores the pair and returns True on success."""
        try:
            solar = self.engine.validate_solar(year, month, day)
            lunar = self.engine.solar_to_lunar(solar)
        except InvalidDate as e:
            log.debug("rejected solar date %r-%r-%r: %s", year, month, day, e)
            return False
        self.state = CalendarState(solar, lunar)
        return True

    def set_lunar_date(self, year: int, month: int, day: int, is_intercalation: bool = False) -> bool:
        """Lunar -> solar. Stores the pair and returns True on success."""
        try:
            requested = self.engine.validate_lunar(year, month, day, is_intercalation)
            solar = self.engine.lunar_to_solar(requested)
        except InvalidDate as e:
            log.debug(
                "rejected lunar date %r-%r-%r (intercalation=%r): %s",
                year, month, day, is_intercalation, e,
            )
            return False
        self.state = CalendarState(solar, requested)
        return True

    # ---------------------------------------------------------
    # Formatting
    # ---------------------------------------------------------

    def solar_iso(self) -> Optional[str]:
        """'YYYY-MM-DD', or None before the first successful conversion."""
        s = self.state.solar
        return s.isoformat() if s is not None else None

    def lunar_iso(self) -> Optional[str]:
        """'YYYY-MM-DD', suffixed ' Intercalation' inside a leap month."""
        l = self.state.lunar
        return l.isoformat() if l is not None else None

    # ---------------------------------------------------------
    # Gap-Ja
    # ---------------------------------------------------------

    def gapja(self, basis: Basis = "lunar") -> Optional[GapJaDate]:
        state = self.state
        if basis == "lunar":
            return gj.from_lunar(self.engine, state.lunar) if state.lunar is not None else None
        if basis == "solar":
            return gj.from_solar(self.engine, state.solar) if state.solar is not None else None
        raise ValueError(f"basis must be 'solar' or 'lunar', got {basis!r}")

    def gapja_string(self, basis: Basis = "lunar", script: Script = "korean") -> Optional[str]:
        g = self.gapja(basis)
        if g is None:
            return None
        return gj.render(g, script)

    def korean_gapja_string(self, basis: Basis = "lunar") -> Optional[str]:
        return self.gapja_string(basis, "korean")

    def chinese_gapja_string(self, basis: Basis = "lunar") -> Optional[str]:
        return self.gapja_string(basis, "chinese")
