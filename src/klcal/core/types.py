from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Literal, Optional, Tuple

Basis = Literal["solar", "lunar"]
Script = Literal["korean", "chinese"]

# (stem index 0..9, branch index 0..11)
StemBranch = Tuple[int, int]

@dataclass(frozen=True)
class SolarDate:
    year: int
    month: int
    day: int

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    @classmethod
    def from_date(cls, d: date) -> "SolarDate":
        return cls(d.year, d.month, d.day)

@dataclass(frozen=True)
class LunarDate:
    year: int
    month: int
    day: int
    is_intercalation: bool = False

    def isoformat(self) -> str:
        suffix = " Intercalation" if self.is_intercalation else ""
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}{suffix}"

@dataclass(frozen=True)
class GapJaDate:
    """Sexagenary stem/branch indices for one date."""
    year: StemBranch
    month: StemBranch
    day: StemBranch
    is_intercalation: bool
    basis: Basis

@dataclass(frozen=True)
class DayInfo:
    solar: SolarDate
    lunar: LunarDate
    attributes: Optional[Dict[str, Any]] = None
