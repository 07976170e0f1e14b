"""
Forecast report — the headline numbers for one product's forecast.

Answers the questions a product owner asks of the dashboard:
  "What will this make?"           -> blended revenue, costs, profit, margin
  "When do we break even?"         -> first period with positive cumulative profit
  "How much of this is real?"      -> share of periods backed by actuals
  "Are we ahead of plan?"          -> revenue/profit impact of actuals vs projection
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence

import pandas as pd

from core.config import ForecastConfig
from engine.records import WeeklyProjection

from .metrics import blended_totals, break_even_period, describe_break_even, rolling_average
from .reconcile import reconcile

logger = logging.getLogger(__name__)


@dataclass
class ForecastReport:
    """Structured forecast summary."""
    product_name: str
    periods: int
    actual_periods: int

    # Blended (actuals where recorded, projection elsewhere)
    total_revenue: float
    total_costs: float
    total_profit: float
    profit_margin: float

    # Projection alone
    original_revenue: float
    original_costs: float
    original_profit: float

    # Split of the blended totals
    actual_revenue: float
    actual_costs: float
    projected_revenue: float
    projected_costs: float

    break_even_period: Optional[int]
    revenue_trend: Optional[float]  # trailing average of the last periods

    flags: List[str] = field(default_factory=list)

    @property
    def actuals_coverage(self) -> float:
        return self.actual_periods / self.periods if self.periods else 0.0

    @property
    def revenue_impact(self) -> float:
        """Blended minus projected-only revenue."""
        return self.total_revenue - self.original_revenue

    @property
    def profit_impact(self) -> float:
        return self.total_profit - self.original_profit

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table."""
        rows = [
            {"Metric": "Product", "Value": self.product_name, "Unit": ""},
            {"Metric": "Forecast Periods", "Value": f"{self.periods}", "Unit": "periods"},
            {"Metric": "Periods With Actuals", "Value": f"{self.actual_periods}", "Unit": "periods"},
            {"Metric": "Actuals Coverage", "Value": f"{self.actuals_coverage:.1%}", "Unit": ""},
            {"Metric": "Total Revenue", "Value": f"{self.total_revenue:,.2f}", "Unit": "currency"},
            {"Metric": "Total Costs", "Value": f"{self.total_costs:,.2f}", "Unit": "currency"},
            {"Metric": "Total Profit", "Value": f"{self.total_profit:,.2f}", "Unit": "currency"},
            {"Metric": "Profit Margin", "Value": f"{self.profit_margin:.1%}", "Unit": ""},
            {"Metric": "Projected Revenue (no actuals)", "Value": f"{self.original_revenue:,.2f}", "Unit": "currency"},
            {"Metric": "Projected Profit (no actuals)", "Value": f"{self.original_profit:,.2f}", "Unit": "currency"},
            {"Metric": "Revenue Impact of Actuals", "Value": f"{self.revenue_impact:,.2f}", "Unit": "currency"},
            {"Metric": "Profit Impact of Actuals", "Value": f"{self.profit_impact:,.2f}", "Unit": "currency"},
            {"Metric": "Break-even", "Value": describe_break_even(self.break_even_period), "Unit": ""},
            {
                "Metric": "Revenue Trend",
                "Value": f"{self.revenue_trend:,.2f}" if self.revenue_trend is not None else "N/A",
                "Unit": "currency/period",
            },
        ]
        if self.flags:
            rows.append({"Metric": "FLAGS", "Value": " | ".join(self.flags), "Unit": ""})
        return pd.DataFrame(rows)


def generate_forecast_report(
    series: Sequence[WeeklyProjection],
    actuals: Optional[Iterable[Any]] = None,
    *,
    product_name: str = "Unnamed Product",
    config: Optional[ForecastConfig] = None,
) -> ForecastReport:
    """
    Build the forecast summary for a baseline or scenario series.

    Parameters
    ----------
    series : sequence of WeeklyProjection
    actuals : iterable of ActualRecord or mappings, optional
    product_name : str
        Label carried into the report
    config : ForecastConfig, optional
        trend_window sets the trailing-average window
    """
    cfg = config or ForecastConfig()
    if not series:
        raise ValueError("No forecast periods to report on.")

    blended = reconcile(series, actuals)
    totals = blended_totals(blended)
    original = blended_totals(series)

    actual_rows = [b for b in blended if b.is_actual]
    projected_rows = [b for b in blended if not b.is_actual]
    actual_revenue = sum((b.total_revenue for b in actual_rows), 0.0)
    actual_costs = sum((b.total_costs for b in actual_rows), 0.0)

    trend = rolling_average(blended, "total_revenue", window=cfg.trend_window)[-1]
    break_even = break_even_period(blended)

    flags = []
    if break_even is None:
        flags.append("NO_BREAK_EVEN: cumulative profit stays at or below zero over the horizon")
    if actual_rows:
        planned = sum((s.total_revenue for s, b in zip(series, blended) if b.is_actual), 0.0)
        if planned > 0 and actual_revenue < planned * 0.9:
            flags.append(
                f"BEHIND_PLAN: actual revenue {actual_revenue / planned - 1:.0%} vs projection"
            )
    if totals.total_revenue > 0 and totals.total_profit < 0:
        flags.append("LOSS_MAKING: blended costs exceed blended revenue")

    logger.debug("Forecast report for %r: %d flags.", product_name, len(flags))

    return ForecastReport(
        product_name=product_name,
        periods=totals.periods,
        actual_periods=totals.actual_periods,
        total_revenue=totals.total_revenue,
        total_costs=totals.total_costs,
        total_profit=totals.total_profit,
        profit_margin=totals.profit_margin,
        original_revenue=original.total_revenue,
        original_costs=original.total_costs,
        original_profit=original.total_profit,
        actual_revenue=actual_revenue,
        actual_costs=actual_costs,
        projected_revenue=sum((b.total_revenue for b in projected_rows), 0.0),
        projected_costs=sum((b.total_costs for b in projected_rows), 0.0),
        break_even_period=break_even,
        revenue_trend=trend,
        flags=flags,
    )
