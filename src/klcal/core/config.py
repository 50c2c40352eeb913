from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEV_ENV_VAR = "KLC_DEV"
MEMOIZE_ENV_VAR = "KLC_MEMOIZE"
TABLE_ENV_VAR = "KLC_LUNAR_TABLE"

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


def dev_mode() -> bool:
    """True when the developer debug switch is set in the environment."""
    return _env_flag(DEV_ENV_VAR)


@dataclass(frozen=True)
class CalendarConfig:
    """
    Engine configuration.

    memoize:
        Cache cumulative day sums per year and per (year, month, intercalation).
        Results are identical either way; this only avoids rescans.
    table_path:
        Lunar table JSON to load instead of the packaged resource.
    """
    memoize: bool = False
    table_path: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "CalendarConfig":
        p = os.environ.get(TABLE_ENV_VAR, "").strip()
        return cls(
            memoize=_env_flag(MEMOIZE_ENV_VAR),
            table_path=Path(p).expanduser() if p else None,
        )
