"""
Input checks for assumption sets before they enter the engine.

Catches problems early:
- Forecast horizons below one period (hard failure)
- Negative prices, budgets and cost amounts
- Rates that look like percentages where fractions are expected
- Campaign budgets without a campaign duration
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from core.errors import InvalidForecastPeriod

from .models import (
    AggregateMarketing,
    ChannelMarketing,
    CostMetrics,
    GrowthMetrics,
    ProductInfo,
    RevenueMetrics,
    RoleStaffing,
    as_model,
)

# Horizons past two years of weekly periods are allowed but unusual.
LONG_HORIZON_PERIODS = 104


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for an assumption set."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def check_forecast_period(product_info: ProductInfo) -> int:
    """Return the forecast period, raising InvalidForecastPeriod below one."""
    n = product_info.forecast_period
    if n is None or n < 1:
        raise InvalidForecastPeriod(n)
    return int(n)


def _negatives(result: ValidationResult, label: str, values: dict) -> None:
    for name, value in values.items():
        if value < 0:
            result.errors.append(f"{label}: {name} is negative ({value}).")


def validate_assumptions(
    product_info: Any,
    growth_metrics: Any = None,
    revenue_metrics: Any = None,
    cost_metrics: Any = None,
) -> ValidationResult:
    """
    Run all checks on one product's assumptions (models or mappings).
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    product_info = as_model(ProductInfo, product_info)
    growth_metrics = as_model(GrowthMetrics, growth_metrics)
    revenue_metrics = as_model(RevenueMetrics, revenue_metrics)
    cost_metrics = as_model(CostMetrics, cost_metrics)
    result = ValidationResult()

    # --- Horizon ---
    if product_info.forecast_period < 1:
        result.errors.append(
            f"Forecast period must be at least 1 (got {product_info.forecast_period})."
        )
        return result  # nothing else is meaningful without a horizon
    if product_info.forecast_period > LONG_HORIZON_PERIODS:
        result.warnings.append(
            f"Forecast period of {product_info.forecast_period} exceeds "
            f"{LONG_HORIZON_PERIODS} periods."
        )
    if product_info.events_per_period < 0:
        result.errors.append("Events per period is negative.")

    # --- Growth ---
    _negatives(result, "Growth", {
        "weekly_visitors": growth_metrics.weekly_visitors,
        "visitors_per_event": growth_metrics.visitors_per_event,
        "total_visitors": growth_metrics.total_visitors,
    })
    if growth_metrics.growth_model == "Decay" and growth_metrics.weekly_growth_rate > 100:
        result.warnings.append("Decay rate above 100% empties the audience after one period.")
    if growth_metrics.growth_model == "Exponential" and growth_metrics.weekly_growth_rate < -100:
        result.errors.append(
            f"Growth rate of {growth_metrics.weekly_growth_rate}% is below -100%; "
            f"attendance would be wiped out after one period."
        )
    for name in ("return_visit_rate", "word_of_mouth_rate"):
        rate = getattr(growth_metrics, name)
        if rate > 1.0:
            result.warnings.append(
                f"Growth: {name} = {rate} is above 1.0; check if it is in "
                f"percent vs decimal form."
            )

    # --- Revenue ---
    _negatives(result, "Revenue", revenue_metrics.model_dump())
    for name in (
        "ticket_sales_rate",
        "fb_conversion_rate",
        "merchandise_conversion_rate",
        "digital_conversion_rate",
    ):
        rate = getattr(revenue_metrics, name)
        if rate > 1.0:
            result.warnings.append(
                f"Revenue: {name} = {rate} is above 1.0; check if it is in "
                f"percent vs decimal form."
            )

    # --- Costs ---
    marketing = cost_metrics.marketing
    if isinstance(marketing, ChannelMarketing):
        for channel in marketing.channels:
            if channel.budget < 0:
                result.errors.append(f"Marketing channel {channel.name or channel.id!r} has a negative budget.")
    elif isinstance(marketing, AggregateMarketing):
        _negatives(result, "Marketing", {
            "weekly_budget": marketing.weekly_budget,
            "campaign_budget": marketing.campaign_budget,
        })
        if (
            marketing.budget_type == "campaign"
            and marketing.campaign_budget > 0
            and marketing.campaign_duration_weeks <= 0
        ):
            result.warnings.append("Campaign budget has no duration; no marketing cost will be charged.")

    staffing = cost_metrics.staffing
    if isinstance(staffing, RoleStaffing):
        for role in staffing.roles:
            if role.count < 0 or role.cost_per_person < 0:
                result.errors.append(f"Staff role {role.role or role.id!r} has a negative count or cost.")
    else:
        _negatives(result, "Staffing", staffing.model_dump(exclude={"allocation_mode"}))

    for item in cost_metrics.event_costs:
        if item.amount < 0:
            result.errors.append(f"Event cost {item.name or item.id!r} is negative.")
    for item in cost_metrics.setup_costs:
        if item.amount < 0:
            result.errors.append(f"Setup cost {item.name or item.id!r} is negative.")
    if cost_metrics.merchandise_cog_per_unit < 0:
        result.errors.append("Merchandise COGS per unit is negative.")

    return result
