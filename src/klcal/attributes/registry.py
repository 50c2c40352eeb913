from __future__ import annotations
from typing import Any, Callable, Dict, List, Sequence

from ..core.types import DayInfo
from ..engines.calendar import CalendarEngine

AttrFunc = Callable[[DayInfo, CalendarEngine], Dict[str, Any]]
_REGISTRY: Dict[str, AttrFunc] = {}

def register_attribute(name: str, fn: AttrFunc) -> None:
    _REGISTRY[name] = fn

def list_attributes() -> List[str]:
    return sorted(_REGISTRY)

def compute_attributes(info: DayInfo, names: Sequence[str], engine: CalendarEngine) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for name in names:
        if name not in _REGISTRY:
            raise KeyError(f"Unknown attribute '{name}'. Available: {sorted(_REGISTRY)}")
        out.update(_REGISTRY[name](info, engine))
    return out
