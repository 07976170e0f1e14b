"""
Recorded actuals — sparse, author-entered ground truth keyed by period.

Two historical payload shapes exist (the weekly tracker and the metrics
editor); both map onto ActualRecord through field aliases. Every financial
field is optional so the reconciler can tell "not entered" from "entered 0"
when it resolves totals.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from pydantic import AliasChoices, Field

from .models import AssumptionModel, as_model


class ChannelPerformance(AssumptionModel):
    channel_id: str = ""
    spend: float = 0.0
    revenue: float = 0.0
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0


class ActualRecord(AssumptionModel):
    period: int = Field(validation_alias=AliasChoices("period", "week"))
    id: str = ""
    year: Optional[int] = None
    notes: str = ""

    number_of_events: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("number_of_events", "numberOfEvents", "eventCount")
    )
    foot_traffic: Optional[float] = None
    average_event_attendance: Optional[float] = None

    ticket_revenue: Optional[float] = None
    fb_revenue: Optional[float] = None
    merchandise_revenue: Optional[float] = None
    digital_revenue: Optional[float] = None
    total_revenue: Optional[float] = None
    revenue: Optional[float] = None  # legacy total

    marketing_costs: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("marketing_costs", "marketingCosts", "marketingCost")
    )
    staffing_costs: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("staffing_costs", "staffingCosts", "staffCost")
    )
    event_costs: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("event_costs", "eventCosts", "eventsCosts")
    )
    setup_costs: Optional[float] = None
    fb_cogs: Optional[float] = None
    merchandise_cogs: Optional[float] = None
    other_costs: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("other_costs", "otherCosts", "additionalCosts")
    )
    technology_cost: Optional[float] = None  # legacy tracker category, folded into other costs
    office_cost: Optional[float] = None
    total_costs: Optional[float] = None
    expenses: Optional[float] = None  # legacy total

    weekly_profit: Optional[float] = None

    channel_performance: Tuple[ChannelPerformance, ...] = ()

    def resolved_total_revenue(self) -> float:
        """Entered total, else the legacy total, else the sum of entered streams."""
        if self.total_revenue is not None:
            return self.total_revenue
        if self.revenue is not None:
            return self.revenue
        return sum(
            v or 0.0
            for v in (self.ticket_revenue, self.fb_revenue, self.merchandise_revenue, self.digital_revenue)
        )

    def resolved_total_costs(self) -> float:
        if self.total_costs is not None:
            return self.total_costs
        if self.expenses is not None:
            return self.expenses
        return sum(
            v or 0.0
            for v in (
                self.marketing_costs,
                self.staffing_costs,
                self.event_costs,
                self.setup_costs,
                self.fb_cogs,
                self.merchandise_cogs,
            )
        ) + self.resolved_other_costs()

    def resolved_other_costs(self) -> float:
        """Other costs plus the legacy technology and office categories."""
        return sum(v or 0.0 for v in (self.other_costs, self.technology_cost, self.office_cost))

    def resolved_weekly_profit(self) -> float:
        if self.weekly_profit is not None:
            return self.weekly_profit
        return self.resolved_total_revenue() - self.resolved_total_costs()


def as_actual(value: Any) -> ActualRecord:
    return as_model(ActualRecord, value)
