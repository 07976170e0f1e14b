"""
Input boundary — validated, immutable assumption structs and recorded actuals.
"""

from .models import (
    ProductInfo,
    GrowthMetrics,
    RevenueMetrics,
    CostMetrics,
    AggregateMarketing,
    ChannelMarketing,
    MarketingChannel,
    BudgetDepreciation,
    FlatRateStaffing,
    RoleStaffing,
    StaffRole,
    EventCostItem,
    SetupCostItem,
    as_model,
)
from .actuals import ActualRecord, ChannelPerformance, as_actual
from .validators import ValidationResult, check_forecast_period, validate_assumptions

__all__ = [
    "ProductInfo",
    "GrowthMetrics",
    "RevenueMetrics",
    "CostMetrics",
    "AggregateMarketing",
    "ChannelMarketing",
    "MarketingChannel",
    "BudgetDepreciation",
    "FlatRateStaffing",
    "RoleStaffing",
    "StaffRole",
    "EventCostItem",
    "SetupCostItem",
    "as_model",
    "ActualRecord",
    "ChannelPerformance",
    "as_actual",
    "ValidationResult",
    "check_forecast_period",
    "validate_assumptions",
]
