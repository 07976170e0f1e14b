"""
Forecast configuration.
Engine-wide knobs that are not part of a product's assumptions.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ForecastConfig:
    # trailing window for the reporting trend line
    trend_window: int = 3

    # index-based quarter mapping when no launch date is known
    weeks_per_quarter: int = 13
    months_per_quarter: int = 3

    # attendance is a head count; fractional visitors are rounded away
    round_attendance: bool = True

    # how many leading periods get debug-level calculation detail
    log_periods: int = 3
