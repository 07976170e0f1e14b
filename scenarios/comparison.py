"""
Baseline vs scenario comparison tables.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from core.utils import safe_divide
from engine.records import WeeklyProjection


def _pct_change(base: float, new: float) -> float:
    return safe_divide(new - base, abs(base)) * 100


def compare_scenario(
    baseline: Sequence[WeeklyProjection],
    scenario: Sequence[WeeklyProjection],
) -> pd.DataFrame:
    """
    One row per period: baseline and scenario revenue, cost, profit and
    attendance, with absolute and percentage differences.

    Percentage changes are relative to the magnitude of the baseline value and
    are 0 where the baseline is 0.
    """
    if len(baseline) != len(scenario):
        raise ValueError(
            f"baseline has {len(baseline)} periods but scenario has {len(scenario)}"
        )

    rows = []
    for base, scen in zip(baseline, scenario):
        rows.append({
            "period": base.period,
            "baseline_revenue": base.total_revenue,
            "scenario_revenue": scen.total_revenue,
            "revenue_difference": scen.total_revenue - base.total_revenue,
            "revenue_pct_change": _pct_change(base.total_revenue, scen.total_revenue),
            "baseline_cost": base.total_costs,
            "scenario_cost": scen.total_costs,
            "cost_difference": scen.total_costs - base.total_costs,
            "cost_pct_change": _pct_change(base.total_costs, scen.total_costs),
            "baseline_profit": base.weekly_profit,
            "scenario_profit": scen.weekly_profit,
            "profit_difference": scen.weekly_profit - base.weekly_profit,
            "profit_pct_change": _pct_change(base.weekly_profit, scen.weekly_profit),
            "baseline_attendance": base.foot_traffic,
            "scenario_attendance": scen.foot_traffic,
            "attendance_pct_change": _pct_change(base.foot_traffic, scen.foot_traffic),
        })
    return pd.DataFrame(rows)
