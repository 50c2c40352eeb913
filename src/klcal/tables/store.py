"""
klcal.tables.store
------------------
Read-only access to the packed Korean lunar table.

One unsigned 32-bit word per lunar year, indexed by ``year - year_range.start``.
The store knows nothing about conversions; it only loads the resource once and
hands out records. Bit decoding lives in :mod:`klcal.engines.year_record`.

Search order for the resource:
  1) explicit ``path`` given to the store
  2) KLC_LUNAR_TABLE environment variable (path to JSON)
  3) packaged data (klcal.data/lunar_table.json)
"""

from __future__ import annotations

import importlib.resources
import json
import logging
import os
import threading
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np

from ..core.config import TABLE_ENV_VAR
from ..core.errors import ResourceError, YearOutOfRange

log = logging.getLogger(__name__)

RESOURCE_NAME = "lunar_table.json"
UINT32_LIMIT = 1 << 32


@dataclass(frozen=True)
class LunarConstants:
    lunar_big_month_days: int = 30
    lunar_small_month_days: int = 29
    solar_year_days: int = 365
    solar_leap_year_days: int = 366
    lunar_year_days: int = 354


@dataclass(frozen=True)
class LunarTableMetadata:
    version: str
    source: str
    start_year: int
    end_year: int
    lunar_start: date
    lunar_end: date
    solar_start: date
    solar_end: date
    description: str = ""

    @property
    def n_years(self) -> int:
        return self.end_year - self.start_year + 1


def _iso(s: str) -> date:
    return date.fromisoformat(s)


def _parse_metadata(raw: Dict[str, Any]) -> LunarTableMetadata:
    yr = raw["year_range"]
    lr = raw["lunar_range"]
    gr = raw["gregorian_range"]
    return LunarTableMetadata(
        version=str(raw["version"]),
        source=str(raw["source"]),
        start_year=int(yr["start"]),
        end_year=int(yr["end"]),
        lunar_start=_iso(lr["start"]),
        lunar_end=_iso(lr["end"]),
        solar_start=_iso(gr["start"]),
        solar_end=_iso(gr["end"]),
        description=str(raw.get("description", "")),
    )


def _parse_constants(raw: Dict[str, Any]) -> LunarConstants:
    return LunarConstants(
        lunar_big_month_days=int(raw["lunar_big_month_days"]),
        lunar_small_month_days=int(raw["lunar_small_month_days"]),
        solar_year_days=int(raw["solar_year_days"]),
        solar_leap_year_days=int(raw.get("solar_leap_year_days", int(raw["solar_year_days"]) + 1)),
        lunar_year_days=int(raw["lunar_year_days"]),
    )


class LunarTableStore:
    """
    Lazily loaded, shared, read-only lunar table.

    ``load()`` is idempotent; any accessor triggers it. Failures to read or parse
    the resource raise ResourceError, out-of-range years raise YearOutOfRange.
    """

    def __init__(self, path: Optional[Path] = None):
        self._path = Path(path) if path is not None else None
        self._lock = threading.Lock()
        self._data: Optional[np.ndarray] = None
        self._metadata: Optional[LunarTableMetadata] = None
        self._constants: Optional[LunarConstants] = None

    def __repr__(self) -> str:
        state = "loaded" if self.is_loaded else "unloaded"
        return f"LunarTableStore(path={self._path!r}, {state})"

    # ---------------------------------------------------------
    # Loading
    # ---------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self._data is not None

    def _read_text(self) -> str:
        if self._path is not None:
            path = self._path
        else:
            p = os.environ.get(TABLE_ENV_VAR, "").strip()
            path = Path(p).expanduser() if p else None

        try:
            if path is not None:
                log.debug("reading lunar table from %s", path)
                return path.read_text(encoding="utf-8")
            log.debug("reading packaged lunar table %s", RESOURCE_NAME)
            res = importlib.resources.files("klcal.data").joinpath(RESOURCE_NAME)
            return res.read_text(encoding="utf-8")
        except (OSError, ModuleNotFoundError) as e:
            raise ResourceError(f"Lunar table resource not available: {e}") from e

    def _parse(self, text: str) -> None:
        try:
            raw = json.loads(text)
            metadata = _parse_metadata(raw["metadata"])
            constants = _parse_constants(raw["constants"])
            values = [int(v) for v in raw["data"]]
        except (ValueError, KeyError, TypeError) as e:
            raise ResourceError(f"Malformed lunar table: {e}") from e

        if len(values) != metadata.n_years:
            raise ResourceError(
                f"Lunar table has {len(values)} records, expected {metadata.n_years} "
                f"for {metadata.start_year}..{metadata.end_year}"
            )
        if any(v < 0 or v >= UINT32_LIMIT for v in values):
            raise ResourceError("Lunar table contains values outside the unsigned 32-bit range")

        data = np.asarray(values, dtype=np.uint32)
        data.setflags(write=False)

        self._metadata = metadata
        self._constants = constants
        self._data = data

    def load(self) -> "LunarTableStore":
        if self._data is not None:
            return self
        with self._lock:
            if self._data is None:
                self._parse(self._read_text())
                log.debug(
                    "lunar table loaded: %d records (%d..%d)",
                    len(self._data), self._metadata.start_year, self._metadata.end_year,
                )
        return self

    # ---------------------------------------------------------
    # Accessors
    # ---------------------------------------------------------

    @property
    def metadata(self) -> LunarTableMetadata:
        self.load()
        return self._metadata

    @property
    def constants(self) -> LunarConstants:
        self.load()
        return self._constants

    @property
    def data(self) -> np.ndarray:
        """The whole table as a read-only uint32 array."""
        self.load()
        return self._data

    @property
    def start_year(self) -> int:
        return self.metadata.start_year

    @property
    def end_year(self) -> int:
        return self.metadata.end_year

    def contains(self, year: int) -> bool:
        md = self.metadata
        return md.start_year <= year <= md.end_year

    def record_for(self, year: int) -> int:
        """The packed 32-bit record of ``year``."""
        md = self.metadata
        if not (md.start_year <= year <= md.end_year):
            raise YearOutOfRange(f"Year {year} outside table range {md.start_year}..{md.end_year}")
        return int(self._data[year - md.start_year])

    # ---------------------------------------------------------
    # Bulk decoders (whole table, vectorised)
    # ---------------------------------------------------------

    def years(self) -> np.ndarray:
        md = self.metadata
        return np.arange(md.start_year, md.end_year + 1, dtype=int)

    def intercalation_months(self) -> np.ndarray:
        """Leap month number per year (0 = none)."""
        return ((self.data >> 12) & 0xF).astype(int)

    def total_lunar_days(self) -> np.ndarray:
        return ((self.data >> 17) & 0x1FF).astype(int)


@lru_cache(maxsize=1)
def default_store() -> LunarTableStore:
    """The process-wide store over the packaged (or KLC_LUNAR_TABLE) resource."""
    return LunarTableStore()
