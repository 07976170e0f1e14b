"""
Scenario definitions — named percentage deltas over a baseline forecast.

Modifiers are percentages: +10 lifts a field by 10%, -25 cuts it by a
quarter. A scenario only ever reads the baseline; see scenarios.modifier.
"""

from __future__ import annotations

from typing import Any, Dict, Literal

from pydantic import Field, field_validator, model_validator

from inputs.models import AssumptionModel, _fail_closed, _is_blank

ScenarioVariant = Literal["optimistic", "pessimistic", "neutral", "custom"]

_VARIANTS = {v: v for v in ("optimistic", "pessimistic", "neutral", "custom")}


class ScenarioModifiers(AssumptionModel):
    """
    Percentage deltas keyed by revenue stream, cost category and attendance.

    Accepts the flat snake_case form or the editor's nested form:
        {"revenue": {"ticketRevenue": 10, ...},
         "costs": {"marketingCost": -5, ...},
         "attendance": 15}
    """

    ticket_revenue: float = 0.0
    fb_revenue: float = 0.0
    merchandise_revenue: float = 0.0
    digital_revenue: float = 0.0

    marketing_cost: float = 0.0
    staffing_cost: float = 0.0
    event_cost: float = 0.0
    setup_cost: float = 0.0

    attendance: float = 0.0  # applied to foot traffic

    @model_validator(mode="before")
    @classmethod
    def _flatten_groups(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        out = {k: v for k, v in data.items() if k not in ("revenue", "costs")}
        for group in ("revenue", "costs"):
            nested = data.get(group)
            if isinstance(nested, dict):
                out.update(nested)
        attendance = data.get("attendance")
        if isinstance(attendance, dict):
            out["attendance"] = attendance.get("foot_traffic", attendance.get("footTraffic"))
        return {k: v for k, v in out.items() if not _is_blank(v)}

    def factors(self) -> Dict[str, float]:
        """Multiplier per record field, e.g. {"ticket_revenue": 1.1, ...}."""
        return {
            "ticket_revenue": 1 + self.ticket_revenue / 100,
            "fb_revenue": 1 + self.fb_revenue / 100,
            "merchandise_revenue": 1 + self.merchandise_revenue / 100,
            "digital_revenue": 1 + self.digital_revenue / 100,
            "marketing_costs": 1 + self.marketing_cost / 100,
            "staffing_costs": 1 + self.staffing_cost / 100,
            "event_costs": 1 + self.event_cost / 100,
            "setup_costs": 1 + self.setup_cost / 100,
            "foot_traffic": 1 + self.attendance / 100,
        }


class ScenarioModel(AssumptionModel):
    id: str = ""
    name: str = ""
    product_id: str = ""
    description: str = ""
    variant: ScenarioVariant = "custom"
    modifiers: ScenarioModifiers = Field(default_factory=ScenarioModifiers)

    @field_validator("variant", mode="before")
    @classmethod
    def _known_variant(cls, v: Any) -> str:
        return _fail_closed(v, _VARIANTS, "custom", "scenario variant")
