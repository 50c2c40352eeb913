"""
klcal.engines.interfaces
------------------------
The boundary between table storage and the conversion engine.

The engine only needs a store that can hand out one packed record per year and
report its declared ranges; anything satisfying this protocol (e.g. an in-memory
table in tests) can be injected.
"""

from __future__ import annotations

from typing import Protocol

from klcal.tables.store import LunarConstants, LunarTableMetadata


class TableStoreProtocol(Protocol):
    @property
    def metadata(self) -> LunarTableMetadata:
        """Declared year and date ranges of the table."""
        ...

    @property
    def constants(self) -> LunarConstants:
        """Day-count constants (big/small month, solar year lengths)."""
        ...

    def record_for(self, year: int) -> int:
        """
        Returns the packed 32-bit record of a lunar year.
        Raises YearOutOfRange outside the declared range.
        """
        ...
