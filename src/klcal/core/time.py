from __future__ import annotations
from datetime import date

from .types import SolarDate


def to_jdn(d: date | SolarDate) -> int:
    """Convert a Gregorian date to its Julian Day Number (JDN)."""
    y, m, day = d.year, d.month, d.day
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    jdn = day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045
    return jdn

def weekday(d: date | SolarDate) -> int:
    """ISO-like weekday, 0=Mon..6=Sun."""
    return to_jdn(d) % 7

def parse_ymd(s: str) -> tuple[int, int, int]:
    """Split 'YYYY-MM-DD' into integers without range checks."""
    parts = s.strip().split("-")
    if len(parts) != 3:
        raise ValueError(f"expected YYYY-MM-DD, got {s!r}")
    y, m, d = map(int, parts)
    return y, m, d
