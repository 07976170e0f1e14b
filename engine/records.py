"""
Per-period projection records.

make_projection() is the only place totals, profit and the running
cumulative profit are derived from the per-field values. The assembler and
the scenario modifier both build records through it, so a record rebuilt from
unchanged fields is identical to the original.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import asdict, dataclass
from typing import List, Optional, Sequence

import pandas as pd

from core.schema import PROJECTION_COLUMNS
from core.utils import require_columns

from .growth import average_event_attendance


@dataclass(frozen=True)
class WeeklyProjection:
    """One forecast period."""
    period: int
    period_start: Optional[dt.date]

    number_of_events: float
    foot_traffic: float
    average_event_attendance: float

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
    total_costs: float

    weekly_profit: float
    cumulative_profit: float


def make_projection(
    *,
    period: int,
    period_start: Optional[dt.date],
    number_of_events: float,
    foot_traffic: float,
    ticket_revenue: float,
    fb_revenue: float,
    merchandise_revenue: float,
    digital_revenue: float,
    marketing_costs: float,
    staffing_costs: float,
    event_costs: float,
    setup_costs: float,
    fb_cogs: float,
    merchandise_cogs: float,
    prior_cumulative_profit: float = 0.0,
) -> WeeklyProjection:
    total_revenue = ticket_revenue + fb_revenue + merchandise_revenue + digital_revenue
    total_costs = (
        marketing_costs + staffing_costs + event_costs + setup_costs + fb_cogs + merchandise_cogs
    )
    weekly_profit = total_revenue - total_costs
    return WeeklyProjection(
        period=period,
        period_start=period_start,
        number_of_events=number_of_events,
        foot_traffic=foot_traffic,
        average_event_attendance=average_event_attendance(foot_traffic, number_of_events),
        ticket_revenue=ticket_revenue,
        fb_revenue=fb_revenue,
        merchandise_revenue=merchandise_revenue,
        digital_revenue=digital_revenue,
        total_revenue=total_revenue,
        marketing_costs=marketing_costs,
        staffing_costs=staffing_costs,
        event_costs=event_costs,
        setup_costs=setup_costs,
        fb_cogs=fb_cogs,
        merchandise_cogs=merchandise_cogs,
        total_costs=total_costs,
        weekly_profit=weekly_profit,
        cumulative_profit=prior_cumulative_profit + weekly_profit,
    )


def projections_to_frame(records: Sequence[WeeklyProjection]) -> pd.DataFrame:
    """One row per period, columns in PROJECTION_COLUMNS order."""
    return pd.DataFrame([asdict(r) for r in records], columns=list(PROJECTION_COLUMNS))


def projections_from_frame(df: pd.DataFrame) -> List[WeeklyProjection]:
    """Rebuild records from a frame produced by projections_to_frame (values kept as-is)."""
    require_columns(df, [c for c in PROJECTION_COLUMNS if c != "period_start"])
    records = []
    for row in df.sort_values("period").to_dict(orient="records"):
        start = row.get("period_start")
        if start is None or pd.isna(start):
            start = None
        elif isinstance(start, pd.Timestamp):
            start = start.date()
        values = {c: float(row[c]) for c in PROJECTION_COLUMNS if c not in ("period", "period_start")}
        records.append(WeeklyProjection(period=int(row["period"]), period_start=start, **values))
    return records
