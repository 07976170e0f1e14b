"""
Derived metrics over blended (or plain projected) periods.

Everything here works on any sequence of records exposing the per-period
fields (BlendedPeriod or WeeklyProjection) and is computed on the blended
values: totals over a period range, a trailing trend average, and the first
period in which cumulative profit turns positive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import pandas as pd

from core.errors import ForecastError, UnknownFieldError
from core.schema import COST_FIELDS, NUMERIC_FIELDS, REVENUE_FIELDS
from core.utils import safe_divide

BEYOND_HORIZON = "Beyond horizon"


@dataclass(frozen=True)
class BlendedTotals:
    """Sums over an inclusive period range."""
    periods: int
    actual_periods: int

    ticket_revenue: float
    fb_revenue: float
    merchandise_revenue: float
    digital_revenue: float
    total_revenue: float

    marketing_costs: float
    staffing_costs: float
    event_costs: float
    setup_costs: float
    fb_cogs: float
    merchandise_cogs: float
    other_costs: float
    total_costs: float

    total_profit: float
    foot_traffic: float

    @property
    def profit_margin(self) -> float:
        """Profit as a fraction of revenue (0 when there is no revenue)."""
        return safe_divide(self.total_profit, self.total_revenue)

    @property
    def actuals_coverage(self) -> float:
        """Share of periods in range backed by recorded actuals."""
        return safe_divide(self.actual_periods, self.periods)


def _value(record: Any, field: str) -> float:
    return float(getattr(record, field, 0.0))


def _in_range(records: Sequence[Any], start: Optional[int], end: Optional[int]) -> List[Any]:
    return [
        r for r in records
        if (start is None or r.period >= start) and (end is None or r.period <= end)
    ]


def blended_totals(
    blended: Sequence[Any],
    start: Optional[int] = None,
    end: Optional[int] = None,
) -> BlendedTotals:
    """
    Sum blended values over periods start..end (inclusive; None = open end).

    Parameters
    ----------
    blended : sequence of BlendedPeriod or WeeklyProjection
    start, end : int, optional
        Period numbers bounding the range
    """
    rows = _in_range(blended, start, end)
    sums = {f: sum((_value(r, f) for r in rows), 0.0) for f in REVENUE_FIELDS + COST_FIELDS}
    return BlendedTotals(
        periods=len(rows),
        actual_periods=sum(1 for r in rows if getattr(r, "is_actual", False)),
        total_revenue=sum((r.total_revenue for r in rows), 0.0),
        other_costs=sum((_value(r, "other_costs") for r in rows), 0.0),
        total_costs=sum((r.total_costs for r in rows), 0.0),
        total_profit=sum((r.weekly_profit for r in rows), 0.0),
        foot_traffic=sum((r.foot_traffic for r in rows), 0.0),
        **sums,
    )


def rolling_average(
    blended: Sequence[Any],
    field: str = "total_revenue",
    window: int = 3,
) -> List[Optional[float]]:
    """
    Trailing mean of ``field`` over ``window`` periods, aligned with the input.

    Entries before the window fills are None.
    """
    if field not in NUMERIC_FIELDS:
        raise UnknownFieldError(f"Unknown record field {field!r}; expected one of {list(NUMERIC_FIELDS)}")
    if window < 1:
        raise ForecastError(f"window must be >= 1, got {window!r}.")

    values = pd.Series([_value(r, field) for r in blended], dtype=float)
    means = values.rolling(window=window, min_periods=window).mean()
    return [None if pd.isna(m) else float(m) for m in means]


def break_even_period(blended: Sequence[Any]) -> Optional[int]:
    """First period with cumulative profit above zero, or None if beyond the horizon."""
    for record in blended:
        if record.cumulative_profit > 0:
            return record.period
    return None


def describe_break_even(period: Optional[int], label: str = "Week") -> str:
    if period is None:
        return BEYOND_HORIZON
    return f"{label} {period}"
