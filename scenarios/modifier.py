"""
Scenario application — rebuild a baseline forecast under percentage deltas.

Per period, each modified field becomes baseline × (1 + pct/100). COGS are not
modifier keys and carry over unchanged. Totals, profit and the running
cumulative profit are re-derived through engine.records.make_projection(), the
same builder the assembler uses, so all-zero modifiers reproduce the baseline.
"""

from __future__ import annotations

import logging
from typing import Any, List, Sequence

from engine.records import WeeklyProjection, make_projection

from .models import ScenarioModel, ScenarioModifiers

logger = logging.getLogger(__name__)


def as_modifiers(value: Any) -> ScenarioModifiers:
    """ScenarioModel, ScenarioModifiers, a mapping of either, or None (no change)."""
    if value is None:
        return ScenarioModifiers()
    if isinstance(value, ScenarioModifiers):
        return value
    if isinstance(value, ScenarioModel):
        return value.modifiers
    if isinstance(value, dict) and "modifiers" in value:
        return ScenarioModel.model_validate(value).modifiers
    return ScenarioModifiers.model_validate(value)


def apply_scenario(
    baseline: Sequence[WeeklyProjection],
    modifiers: Any,
) -> List[WeeklyProjection]:
    """
    Return a new forecast with the scenario's deltas applied.

    Parameters
    ----------
    baseline : sequence of WeeklyProjection
        Output of engine.project(); never modified
    modifiers : ScenarioModel, ScenarioModifiers or mapping

    Returns
    -------
    List of WeeklyProjection, one per baseline period, in the same order.
    """
    f = as_modifiers(modifiers).factors()
    logger.debug("Applying scenario factors %s to %d periods.", f, len(baseline))

    out: List[WeeklyProjection] = []
    cumulative = 0.0
    for week in baseline:
        record = make_projection(
            period=week.period,
            period_start=week.period_start,
            number_of_events=week.number_of_events,
            foot_traffic=week.foot_traffic * f["foot_traffic"],
            ticket_revenue=week.ticket_revenue * f["ticket_revenue"],
            fb_revenue=week.fb_revenue * f["fb_revenue"],
            merchandise_revenue=week.merchandise_revenue * f["merchandise_revenue"],
            digital_revenue=week.digital_revenue * f["digital_revenue"],
            marketing_costs=week.marketing_costs * f["marketing_costs"],
            staffing_costs=week.staffing_costs * f["staffing_costs"],
            event_costs=week.event_costs * f["event_costs"],
            setup_costs=week.setup_costs * f["setup_costs"],
            fb_cogs=week.fb_cogs,
            merchandise_cogs=week.merchandise_cogs,
            prior_cumulative_profit=cumulative,
        )
        cumulative = record.cumulative_profit
        out.append(record)
    return out
