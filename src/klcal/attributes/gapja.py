"""
klcal.attributes.gapja
----------------------
Sexagenary (Gap-Ja, 갑자) cycle for years, months and days.

Each component is a (stem, branch) pair: 10 heavenly stems (천간) and 12 earthly
branches (지지). The offsets below anchor the cycles to the table epoch (lunar
year 1000, month 1, absolute day 1); they are calibration constants and must not
be re-derived.

Two bases are supported:
  lunar  - lunar year/month counters, lunar absolute day
  solar  - solar year/month substituted directly, solar absolute day
The absolute-day line is shared, so the day pillar agrees between bases.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from klcal.core.types import Basis, GapJaDate, LunarDate, Script, SolarDate, StemBranch
from klcal.engines.calendar import CalendarEngine
from klcal.engines.day_count import KOREAN_LUNAR_BASE_YEAR

KOREAN_STEMS: Tuple[str, ...] = ("갑", "을", "병", "정", "무", "기", "경", "신", "임", "계")
KOREAN_BRANCHES: Tuple[str, ...] = ("자", "축", "인", "묘", "진", "사", "오", "미", "신", "유", "술", "해")

CHINESE_STEMS: Tuple[str, ...] = ("甲", "乙", "丙", "丁", "戊", "己", "庚", "辛", "壬", "癸")
CHINESE_BRANCHES: Tuple[str, ...] = ("子", "丑", "寅", "卯", "辰", "巳", "午", "未", "申", "酉", "戌", "亥")

GLYPHS: Dict[str, Tuple[Tuple[str, ...], Tuple[str, ...]]] = {
    "korean": (KOREAN_STEMS, KOREAN_BRANCHES),
    "chinese": (CHINESE_STEMS, CHINESE_BRANCHES),
}

# year / month / day
UNITS: Dict[str, Tuple[str, str, str]] = {
    "korean": ("년", "월", "일"),
    "chinese": ("年", "月", "日"),
}

INTERCALATION_MARK: Dict[str, str] = {
    "korean": "(윤)",
    "chinese": "(閏)",
}

N_STEMS = 10
N_BRANCHES = 12

YEAR_STEM_OFFSET = 6
YEAR_BRANCH_OFFSET = 0
MONTH_STEM_OFFSET = 3
MONTH_BRANCH_OFFSET = 1
DAY_STEM_OFFSET = 4
DAY_BRANCH_OFFSET = 2


def year_pillar(year: int) -> StemBranch:
    return (
        (year + YEAR_STEM_OFFSET - KOREAN_LUNAR_BASE_YEAR) % N_STEMS,
        (year + YEAR_BRANCH_OFFSET - KOREAN_LUNAR_BASE_YEAR) % N_BRANCHES,
    )


def month_pillar(year: int, month: int) -> StemBranch:
    count = month + 12 * (year - KOREAN_LUNAR_BASE_YEAR)
    return (
        (count + MONTH_STEM_OFFSET) % N_STEMS,
        (count + MONTH_BRANCH_OFFSET) % N_BRANCHES,
    )


def day_pillar(abs_days: int) -> StemBranch:
    return (
        (abs_days + DAY_STEM_OFFSET) % N_STEMS,
        (abs_days + DAY_BRANCH_OFFSET) % N_BRANCHES,
    )


def cycle_index(pair: StemBranch) -> int:
    """Position 0..59 of a (stem, branch) pair in the sexagenary cycle (갑자 = 0)."""
    stem, branch = pair
    if (stem - branch) % 2:
        raise ValueError(f"stem {stem} and branch {branch} never pair up")
    return (6 * stem - 5 * branch) % 60


def derive(
    abs_days: int,
    year: int,
    month: int,
    *,
    is_intercalation: bool = False,
    basis: Basis = "lunar",
) -> Optional[GapJaDate]:
    """
    Pure Gap-Ja derivation. Returns None for non-positive absolute days
    (before the table epoch).
    """
    if abs_days <= 0:
        return None
    return GapJaDate(
        year=year_pillar(year),
        month=month_pillar(year, month),
        day=day_pillar(abs_days),
        is_intercalation=bool(is_intercalation) and basis == "lunar",
        basis=basis,
    )


def from_lunar(engine: CalendarEngine, l: LunarDate) -> Optional[GapJaDate]:
    return derive(
        engine.lunar_abs_days(l), l.year, l.month,
        is_intercalation=l.is_intercalation, basis="lunar",
    )


def from_solar(engine: CalendarEngine, s: SolarDate) -> Optional[GapJaDate]:
    return derive(engine.solar_abs_days(s), s.year, s.month, basis="solar")


def _check_script(script: str) -> None:
    if script not in GLYPHS:
        raise ValueError(f"Unknown script '{script}'. Available: {sorted(GLYPHS)}")


def pair_text(pair: StemBranch, script: Script = "korean") -> str:
    _check_script(script)
    stems, branches = GLYPHS[script]
    return stems[pair[0]] + branches[pair[1]]


def render(g: GapJaDate, script: Script = "korean") -> str:
    """'계묘년 갑자월 갑자일' / '癸卯年 甲子月 甲子日', plus the leap mark on lunar leap months."""
    _check_script(script)
    y_unit, m_unit, d_unit = UNITS[script]
    out = (
        f"{pair_text(g.year, script)}{y_unit} "
        f"{pair_text(g.month, script)}{m_unit} "
        f"{pair_text(g.day, script)}{d_unit}"
    )
    if g.basis == "lunar" and g.is_intercalation:
        out += INTERCALATION_MARK[script]
    return out
