"""
klcal.engines.factory
---------------------
Wires a table store and a configuration into a live CalendarEngine.
"""

from __future__ import annotations

from typing import Optional

from klcal.core.config import CalendarConfig
from klcal.engines.calendar import CalendarEngine
from klcal.engines.interfaces import TableStoreProtocol
from klcal.tables.store import LunarTableStore, default_store


def resolve_store(config: CalendarConfig) -> LunarTableStore:
    """A store for ``config.table_path``, or the shared default store."""
    if config.table_path is not None:
        return LunarTableStore(config.table_path)
    return default_store()


def make_engine(
    table: Optional[TableStoreProtocol] = None,
    config: Optional[CalendarConfig] = None,
) -> CalendarEngine:
    """The universal entry point."""
    config = config if config is not None else CalendarConfig()
    if table is None:
        table = resolve_store(config)
    return CalendarEngine(table, memoize=config.memoize)
