"""
Revenue projection — attendance to four revenue streams per period.

Each stream is attendance × unit price (or spend per head) × conversion rate.
Inputs are taken as given; negative prices are reported by
inputs.validators, not rejected here.
"""

from __future__ import annotations

from dataclasses import dataclass

from inputs.models import RevenueMetrics


@dataclass(frozen=True)
class RevenueBreakdown:
    ticket_revenue: float
    fb_revenue: float
    merchandise_revenue: float
    digital_revenue: float

    @property
    def total(self) -> float:
        return self.ticket_revenue + self.fb_revenue + self.merchandise_revenue + self.digital_revenue


def project_revenue(attendance: float, revenue_metrics: RevenueMetrics) -> RevenueBreakdown:
    m = revenue_metrics
    return RevenueBreakdown(
        ticket_revenue=attendance * m.ticket_price * m.ticket_sales_rate,
        fb_revenue=attendance * m.fb_spend * m.fb_conversion_rate,
        merchandise_revenue=attendance * m.merchandise_spend * m.merchandise_conversion_rate,
        digital_revenue=attendance * m.digital_price * m.digital_conversion_rate,
    )
