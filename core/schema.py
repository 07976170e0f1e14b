from __future__ import annotations

from typing import Tuple

# Per-period record layout shared by projections, scenarios and blended periods.
REVENUE_FIELDS: Tuple[str, ...] = (
    "ticket_revenue",
    "fb_revenue",
    "merchandise_revenue",
    "digital_revenue",
)

COST_FIELDS: Tuple[str, ...] = (
    "marketing_costs",
    "staffing_costs",
    "event_costs",
    "setup_costs",
    "fb_cogs",
    "merchandise_cogs",
)

ATTENDANCE_FIELDS: Tuple[str, ...] = (
    "number_of_events",
    "foot_traffic",
    "average_event_attendance",
)

PROJECTION_COLUMNS: Tuple[str, ...] = (
    ("period", "period_start")
    + ATTENDANCE_FIELDS
    + REVENUE_FIELDS
    + ("total_revenue",)
    + COST_FIELDS
    + ("total_costs", "weekly_profit", "cumulative_profit")
)

# Numeric fields the reporting helpers may aggregate or average.
NUMERIC_FIELDS: Tuple[str, ...] = tuple(
    c for c in PROJECTION_COLUMNS if c not in ("period", "period_start")
) + ("other_costs",)

QUARTERS: Tuple[str, ...] = ("Q1", "Q2", "Q3", "Q4")
