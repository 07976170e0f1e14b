"""
Reporting — actuals reconciliation, derived metrics, variance and summaries.
"""

from .reconcile import BlendedPeriod, reconcile
from .metrics import (
    BlendedTotals,
    blended_totals,
    rolling_average,
    break_even_period,
    describe_break_even,
)
from .variance import variance_table, channel_kpis
from .summary import ForecastReport, generate_forecast_report

__all__ = [
    "BlendedPeriod",
    "reconcile",
    "BlendedTotals",
    "blended_totals",
    "rolling_average",
    "break_even_period",
    "describe_break_even",
    "variance_table",
    "channel_kpis",
    "ForecastReport",
    "generate_forecast_report",
]
