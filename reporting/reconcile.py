"""
Actuals reconciliation — overlay recorded actuals onto a forecast.

For each forecast period:
  - with a recorded actual, every reported figure (revenue streams and
    total, cost categories, other costs and total, profit, foot traffic)
    comes from the actual; figures the author left blank count as 0
  - without one, the projected record is carried over as-is
Cumulative profit is then recomputed over the blended weekly profit.

Totals on an actual resolve as: entered total -> legacy total -> sum of
entered parts (see inputs.actuals.ActualRecord).
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from engine.growth import average_event_attendance
from engine.records import WeeklyProjection
from inputs.actuals import ActualRecord, as_actual

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlendedPeriod:
    """A forecast period after actuals have been overlaid."""
    period: int
    period_start: Optional[dt.date]
    is_actual: bool

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
    other_costs: float
    total_costs: float

    weekly_profit: float
    cumulative_profit: float


def index_actuals(actuals: Optional[Iterable[Any]]) -> Dict[int, ActualRecord]:
    """Actual records keyed by period. The first record for a period wins."""
    by_period: Dict[int, ActualRecord] = {}
    for raw in actuals or ():
        record = as_actual(raw)
        if record.period in by_period:
            logger.warning(
                "Duplicate actuals for period %d; keeping the first record.", record.period
            )
            continue
        by_period[record.period] = record
    return by_period


def _or_zero(value: Optional[float]) -> float:
    return 0.0 if value is None else float(value)


def _from_projection(week: WeeklyProjection, cumulative: float) -> BlendedPeriod:
    return BlendedPeriod(
        period=week.period,
        period_start=week.period_start,
        is_actual=False,
        number_of_events=week.number_of_events,
        foot_traffic=week.foot_traffic,
        average_event_attendance=week.average_event_attendance,
        ticket_revenue=week.ticket_revenue,
        fb_revenue=week.fb_revenue,
        merchandise_revenue=week.merchandise_revenue,
        digital_revenue=week.digital_revenue,
        total_revenue=week.total_revenue,
        marketing_costs=week.marketing_costs,
        staffing_costs=week.staffing_costs,
        event_costs=week.event_costs,
        setup_costs=week.setup_costs,
        fb_cogs=week.fb_cogs,
        merchandise_cogs=week.merchandise_cogs,
        other_costs=0.0,
        total_costs=week.total_costs,
        weekly_profit=week.weekly_profit,
        cumulative_profit=cumulative + week.weekly_profit,
    )


def _from_actual(week: WeeklyProjection, actual: ActualRecord, cumulative: float) -> BlendedPeriod:
    # the event schedule is planned, so it stays projected unless the author overrode it
    events = week.number_of_events if actual.number_of_events is None else actual.number_of_events
    foot_traffic = _or_zero(actual.foot_traffic)
    avg_attendance = actual.average_event_attendance
    if avg_attendance is None:
        avg_attendance = average_event_attendance(foot_traffic, events)
    profit = actual.resolved_weekly_profit()
    return BlendedPeriod(
        period=week.period,
        period_start=week.period_start,
        is_actual=True,
        number_of_events=events,
        foot_traffic=foot_traffic,
        average_event_attendance=avg_attendance,
        ticket_revenue=_or_zero(actual.ticket_revenue),
        fb_revenue=_or_zero(actual.fb_revenue),
        merchandise_revenue=_or_zero(actual.merchandise_revenue),
        digital_revenue=_or_zero(actual.digital_revenue),
        total_revenue=actual.resolved_total_revenue(),
        marketing_costs=_or_zero(actual.marketing_costs),
        staffing_costs=_or_zero(actual.staffing_costs),
        event_costs=_or_zero(actual.event_costs),
        setup_costs=_or_zero(actual.setup_costs),
        fb_cogs=_or_zero(actual.fb_cogs),
        merchandise_cogs=_or_zero(actual.merchandise_cogs),
        other_costs=actual.resolved_other_costs(),
        total_costs=actual.resolved_total_costs(),
        weekly_profit=profit,
        cumulative_profit=cumulative + profit,
    )


def reconcile(
    series: Sequence[WeeklyProjection],
    actuals: Optional[Iterable[Any]] = None,
) -> List[BlendedPeriod]:
    """
    Blend recorded actuals over a baseline or scenario forecast.

    Parameters
    ----------
    series : sequence of WeeklyProjection
        engine.project() or scenarios.apply_scenario() output
    actuals : iterable of ActualRecord or mappings, optional
        Sparse, keyed by period. Periods outside the series are ignored.

    Returns
    -------
    List of BlendedPeriod, one per period of ``series``.
    """
    by_period = index_actuals(actuals)
    known = {week.period for week in series}
    outside = sorted(p for p in by_period if p not in known)
    if outside:
        logger.debug("Ignoring actuals outside the forecast horizon: periods %s", outside)

    blended: List[BlendedPeriod] = []
    cumulative = 0.0
    for week in series:
        actual = by_period.get(week.period)
        if actual is None:
            row = _from_projection(week, cumulative)
        else:
            row = _from_actual(week, actual, cumulative)
        cumulative = row.cumulative_profit
        blended.append(row)

    logger.debug(
        "Reconciled %d periods, %d with actuals.",
        len(blended), sum(1 for b in blended if b.is_actual),
    )
    return blended
