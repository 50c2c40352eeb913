from __future__ import annotations
from typing import Any, Dict, Optional

from ..core.time import weekday as _weekday
from ..core.types import GapJaDate
from . import gapja as gj
from .registry import register_attribute

def _gapja_fields(prefix: str, g: Optional[GapJaDate]) -> Dict[str, Any]:
    if g is None:
        return {prefix: None}
    return {
        prefix: {"year": g.year, "month": g.month, "day": g.day},
        f"{prefix}_korean": gj.render(g, "korean"),
        f"{prefix}_chinese": gj.render(g, "chinese"),
    }

def weekday(info, engine) -> Dict[str, Any]:
    # 0=Mon..6=Sun
    return {"weekday": _weekday(info.solar)}

def gapja(info, engine) -> Dict[str, Any]:
    return _gapja_fields("gapja", gj.from_lunar(engine, info.lunar))

def solar_gapja(info, engine) -> Dict[str, Any]:
    return _gapja_fields("solar_gapja", gj.from_solar(engine, info.solar))

register_attribute("weekday", weekday)
register_attribute("gapja", gapja)
register_attribute("solar_gapja", solar_gapja)
