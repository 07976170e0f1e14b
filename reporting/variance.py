"""
Projected vs actual comparisons.

variance_table  per period: projected, actual, variance and variance % for
                revenue, costs, profit and attendance
channel_kpis    marketing-channel performance from the actuals' channel
                records: CTR, conversion rate, CPC, CPA, ROI
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

import pandas as pd

from core.utils import safe_divide
from engine.records import WeeklyProjection

from .reconcile import index_actuals

CHANNEL_COUNT_COLUMNS = ("spend", "revenue", "impressions", "clicks", "conversions")


def _pct(actual: float, projected: float, *, signed_base: bool = False) -> float:
    """Variance as a percentage of the projection; 0 when the base is not usable."""
    if signed_base:
        return safe_divide(actual - projected, abs(projected)) * 100
    if projected <= 0:
        return 0.0
    return (actual - projected) / projected * 100


def variance_table(
    series: Sequence[WeeklyProjection],
    actuals: Optional[Iterable[Any]] = None,
) -> pd.DataFrame:
    """
    One row per forecast period comparing projection and recorded actuals.

    Periods without an actual report 0 as the actual value. Percentages are
    relative to the projected value; revenue, cost and attendance percentages
    are 0 when the projection is not positive, profit percentages use the
    magnitude of the projected profit and are 0 when it is 0.
    """
    by_period = index_actuals(actuals)
    rows = []
    for week in series:
        actual = by_period.get(week.period)
        if actual is None:
            a_revenue = a_costs = a_profit = a_attendance = 0.0
        else:
            a_revenue = actual.resolved_total_revenue()
            a_costs = actual.resolved_total_costs()
            a_profit = actual.resolved_weekly_profit()
            a_attendance = actual.foot_traffic or 0.0

        rows.append({
            "period": week.period,
            "has_actual": actual is not None,
            "projected_revenue": week.total_revenue,
            "actual_revenue": a_revenue,
            "revenue_variance": a_revenue - week.total_revenue,
            "revenue_variance_pct": _pct(a_revenue, week.total_revenue),
            "projected_costs": week.total_costs,
            "actual_costs": a_costs,
            "costs_variance": a_costs - week.total_costs,
            "costs_variance_pct": _pct(a_costs, week.total_costs),
            "projected_profit": week.weekly_profit,
            "actual_profit": a_profit,
            "profit_variance": a_profit - week.weekly_profit,
            "profit_variance_pct": _pct(a_profit, week.weekly_profit, signed_base=True),
            "projected_attendance": week.foot_traffic,
            "actual_attendance": a_attendance,
            "attendance_variance": a_attendance - week.foot_traffic,
            "attendance_variance_pct": _pct(a_attendance, week.foot_traffic),
        })
    return pd.DataFrame(rows)


def _with_kpis(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df["ctr"] = [safe_divide(c, i) * 100 for c, i in zip(df["clicks"], df["impressions"])]
    df["conversion_rate"] = [safe_divide(v, c) * 100 for v, c in zip(df["conversions"], df["clicks"])]
    df["cpc"] = [safe_divide(s, c) for s, c in zip(df["spend"], df["clicks"])]
    df["cpa"] = [safe_divide(s, v) for s, v in zip(df["spend"], df["conversions"])]
    df["roi"] = [safe_divide(r - s, s) * 100 for r, s in zip(df["revenue"], df["spend"])]
    return df


def channel_kpis(
    actuals: Optional[Iterable[Any]],
    *,
    by_period: bool = False,
) -> pd.DataFrame:
    """
    Marketing-channel KPIs from recorded channel performance.

    Parameters
    ----------
    actuals : iterable of ActualRecord or mappings
    by_period : bool
        If True, one row per (period, channel); otherwise channel counts are
        summed across periods first and KPIs computed on the sums.

    Returns
    -------
    DataFrame with the raw counts plus ctr, conversion_rate (percent), cpc,
    cpa (currency) and roi (percent). Every ratio is 0 on a zero denominator.
    """
    records = []
    for period, actual in sorted(index_actuals(actuals).items()):
        for channel in actual.channel_performance:
            row = {"period": period, "channel_id": channel.channel_id}
            row.update({c: getattr(channel, c) for c in CHANNEL_COUNT_COLUMNS})
            records.append(row)

    columns = ["period", "channel_id", *CHANNEL_COUNT_COLUMNS]
    df = pd.DataFrame(records, columns=columns)
    if not by_period:
        df = (
            df.groupby("channel_id", as_index=False, sort=True)[list(CHANNEL_COUNT_COLUMNS)]
            .sum()
        )
    return _with_kpis(df)
