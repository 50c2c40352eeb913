"""Diagnostics package.

- new_years_table, pretty_month, round_trip: text output, core dependencies only
- leap_months: plot, requires the diagnostics extras (matplotlib)
"""

__all__ = ["pretty_month", "new_years_table", "round_trip", "leap_months"]
