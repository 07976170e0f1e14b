"""
Cost projection — cost assumptions to per-period cost categories.

Categories:
  marketing  aggregate budget (weekly, or a campaign spread over its weeks)
             or the sum of channel budgets; optional budget depreciation
  staffing   flat rate per event, or itemized roles (full-time roles are a
             fixed weekly cost, event roles scale with events per period)
  event      recurring line items, charged every period
  setup      one-time line items: amortized items spread evenly over the
             horizon, the rest charged in full in period 1
  COGS       F&B as a share of F&B revenue; merchandise per unit sold
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from core.utils import safe_divide
from inputs.models import (
    AggregateMarketing,
    BudgetDepreciation,
    ChannelMarketing,
    CostMetrics,
    EventCostItem,
    FlatRateStaffing,
    RevenueMetrics,
    RoleStaffing,
    SetupCostItem,
)

from .revenue import RevenueBreakdown


@dataclass(frozen=True)
class CostBreakdown:
    marketing_costs: float
    staffing_costs: float
    event_costs: float
    setup_costs: float
    fb_cogs: float
    merchandise_cogs: float

    @property
    def total(self) -> float:
        return (
            self.marketing_costs
            + self.staffing_costs
            + self.event_costs
            + self.setup_costs
            + self.fb_cogs
            + self.merchandise_cogs
        )


def depreciate(cost: float, depreciation: BudgetDepreciation, period: int) -> float:
    """Shrink a budget geometrically from start_week on, never below minimum_amount."""
    if not depreciation.enabled or period < depreciation.start_week:
        return cost
    periods_after_start = period - depreciation.start_week
    factor = (1.0 - depreciation.weekly_depreciation_rate / 100.0) ** periods_after_start
    return max(cost * factor, depreciation.minimum_amount)


def marketing_cost(marketing, period: int) -> float:
    if isinstance(marketing, ChannelMarketing):
        base = sum((channel.budget for channel in marketing.channels), 0.0)
    elif isinstance(marketing, AggregateMarketing):
        if marketing.budget_type == "weekly":
            base = marketing.weekly_budget
        elif period <= marketing.campaign_duration_weeks:
            base = safe_divide(marketing.campaign_budget, marketing.campaign_duration_weeks)
        else:
            base = 0.0
    else:
        raise TypeError(f"Unsupported marketing allocation: {type(marketing).__name__}")
    return depreciate(base, marketing.depreciation, period)


def staffing_cost(staffing, events_per_period: float) -> float:
    if isinstance(staffing, RoleStaffing):
        total = 0.0
        for role in staffing.roles:
            if role.is_full_time:
                total += role.count * role.cost_per_person
            else:
                total += role.count * role.cost_per_person * events_per_period
        return total
    if isinstance(staffing, FlatRateStaffing):
        return (
            staffing.additional_staffing_per_event
            * staffing.staffing_cost_per_person
            * events_per_period
        )
    raise TypeError(f"Unsupported staffing allocation: {type(staffing).__name__}")


def event_cost(items: Sequence[EventCostItem]) -> float:
    return sum((item.amount for item in items), 0.0)


def setup_cost(items: Sequence[SetupCostItem], period: int, n_periods: int) -> float:
    total = 0.0
    for item in items:
        if item.amortize:
            total += safe_divide(item.amount, n_periods)
        elif period == 1:
            total += item.amount
    return total


def cost_of_goods(
    revenue: RevenueBreakdown,
    revenue_metrics: RevenueMetrics,
    cost_metrics: CostMetrics,
) -> Tuple[float, float]:
    """(fb_cogs, merchandise_cogs) for one period."""
    fb_cogs = revenue.fb_revenue * cost_metrics.fb_cog_percentage / 100.0
    units_sold = 0.0
    if revenue_metrics.merchandise_spend > 0:
        units_sold = revenue.merchandise_revenue / revenue_metrics.merchandise_spend
    merchandise_cogs = units_sold * cost_metrics.merchandise_cog_per_unit
    return fb_cogs, merchandise_cogs


def project_costs(
    cost_metrics: CostMetrics,
    revenue_metrics: RevenueMetrics,
    revenue: RevenueBreakdown,
    *,
    period: int,
    n_periods: int,
    events_per_period: float,
) -> CostBreakdown:
    fb_cogs, merchandise_cogs = cost_of_goods(revenue, revenue_metrics, cost_metrics)
    return CostBreakdown(
        marketing_costs=marketing_cost(cost_metrics.marketing, period),
        staffing_costs=staffing_cost(cost_metrics.staffing, events_per_period),
        event_costs=event_cost(cost_metrics.event_costs),
        setup_costs=setup_cost(cost_metrics.setup_costs, period, n_periods),
        fb_cogs=fb_cogs,
        merchandise_cogs=merchandise_cogs,
    )
