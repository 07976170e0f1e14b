"""
Projection runner — assembles the baseline forecast for one product.

For each period t = 1..N:
  attendance (growth) -> revenue streams -> cost categories -> record
with weekly profit and the running cumulative profit derived in
engine.records.make_projection().

Pure function of its inputs: no I/O, no randomness, nothing retained between
calls. Re-running with the same inputs yields identical records.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from core.config import ForecastConfig
from core.utils import period_start_dates
from inputs.models import CostMetrics, GrowthMetrics, ProductInfo, RevenueMetrics, as_model
from inputs.validators import check_forecast_period

from .costs import project_costs
from .growth import project_attendance
from .records import WeeklyProjection, make_projection
from .revenue import project_revenue

logger = logging.getLogger(__name__)


def project(
    product_info: Any,
    growth_metrics: Any = None,
    revenue_metrics: Any = None,
    cost_metrics: Any = None,
    *,
    config: Optional[ForecastConfig] = None,
) -> List[WeeklyProjection]:
    """
    Build the baseline sequence of per-period records.

    Parameters
    ----------
    product_info : ProductInfo or mapping
        Horizon, cadence, events per period and optional launch date
    growth_metrics, revenue_metrics, cost_metrics : model, mapping or None
        None means "not entered yet" and uses the model defaults
    config : ForecastConfig, optional

    Raises
    ------
    InvalidForecastPeriod
        If the product's forecast_period is below 1.
    """
    cfg = config or ForecastConfig()
    product = as_model(ProductInfo, product_info)
    growth = as_model(GrowthMetrics, growth_metrics)
    revenue_m = as_model(RevenueMetrics, revenue_metrics)
    costs_m = as_model(CostMetrics, cost_metrics)

    n_periods = check_forecast_period(product)
    events = product.events_per_period
    starts = period_start_dates(product.launch_date, n_periods, product.forecast_type)

    attendance = project_attendance(
        growth, product, n_periods, period_starts=starts, config=cfg
    )

    records: List[WeeklyProjection] = []
    cumulative = 0.0
    for i in range(n_periods):
        period = i + 1
        foot_traffic = float(attendance[i])
        revenue = project_revenue(foot_traffic, revenue_m)
        costs = project_costs(
            costs_m,
            revenue_m,
            revenue,
            period=period,
            n_periods=n_periods,
            events_per_period=events,
        )
        record = make_projection(
            period=period,
            period_start=starts[i],
            number_of_events=events,
            foot_traffic=foot_traffic,
            ticket_revenue=revenue.ticket_revenue,
            fb_revenue=revenue.fb_revenue,
            merchandise_revenue=revenue.merchandise_revenue,
            digital_revenue=revenue.digital_revenue,
            marketing_costs=costs.marketing_costs,
            staffing_costs=costs.staffing_costs,
            event_costs=costs.event_costs,
            setup_costs=costs.setup_costs,
            fb_cogs=costs.fb_cogs,
            merchandise_cogs=costs.merchandise_cogs,
            prior_cumulative_profit=cumulative,
        )
        cumulative = record.cumulative_profit
        records.append(record)

        if period <= cfg.log_periods:
            logger.debug(
                "Period %d: revenue=%.2f costs=%.2f profit=%.2f cumulative=%.2f",
                period, record.total_revenue, record.total_costs,
                record.weekly_profit, record.cumulative_profit,
            )

    logger.debug(
        "Projected %d %s periods for %r (cumulative profit %.2f).",
        n_periods, product.forecast_type, product.name, cumulative,
    )
    return records
