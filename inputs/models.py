"""
Assumption models — the engine's input boundary.

Every struct the editor hands to the engine is validated here, once:
  - blank values (None, "", NaN) fall back to the field default
  - camelCase keys from the editor and snake_case keys are both accepted
  - unknown growth-model / cadence / allocation tags fail closed to a default

Cost categories with two costing styles are explicit tagged unions:
  marketing: AggregateMarketing ("simple")  | ChannelMarketing ("channels")
  staffing:  FlatRateStaffing   ("simple")  | RoleStaffing     ("detailed")
"""

from __future__ import annotations

import datetime as dt
import logging
import math
from typing import Any, Dict, Iterable, Literal, Optional, Tuple, Type, TypeVar, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from core.schema import QUARTERS

logger = logging.getLogger(__name__)

GrowthModel = Literal["Exponential", "Decay", "Seasonal"]
ForecastCadence = Literal["per-event", "weekly", "monthly", "quarterly"]

DEFAULT_GROWTH_MODEL = "Exponential"
DEFAULT_CADENCE = "weekly"
DEFAULT_FB_COG_PERCENTAGE = 30.0


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def _field_keys(name: str, field) -> Iterable[str]:
    keys = {name}
    if field.alias:
        keys.add(field.alias)
    va = field.validation_alias
    if isinstance(va, str):
        keys.add(va)
    elif isinstance(va, AliasChoices):
        keys.update(c for c in va.choices if isinstance(c, str))
    return keys


def _first_present(data: Dict[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if key in data and not _is_blank(data[key]):
            return data[key]
    return None


def _fail_closed(value: Any, allowed: Dict[str, str], default: str, what: str) -> str:
    """Map a free-form tag onto a known one, or the default with a warning."""
    if _is_blank(value):
        return default
    tag = allowed.get(str(value).strip().lower())
    if tag is None:
        logger.warning("Unknown %s %r; falling back to %r.", what, value, default)
        return default
    return tag


class AssumptionModel(BaseModel):
    """Immutable input struct with centralized blank-value normalization."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @model_validator(mode="before")
    @classmethod
    def _blank_to_default(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned = dict(data)
        for name, field in cls.model_fields.items():
            for key in _field_keys(name, field):
                if key in cleaned and _is_blank(cleaned[key]):
                    del cleaned[key]
        return cleaned


M = TypeVar("M", bound=AssumptionModel)


def as_model(model_cls: Type[M], value: Any) -> M:
    """Accept a model instance, a plain mapping, or None (defaults)."""
    if value is None:
        return model_cls()
    if isinstance(value, model_cls):
        return value
    return model_cls.model_validate(value)


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------

_CADENCES = {
    "per-event": "per-event",
    "per_event": "per-event",
    "event": "per-event",
    "weekly": "weekly",
    "monthly": "monthly",
    "quarterly": "quarterly",
}


class ProductInfo(AssumptionModel):
    id: str = ""
    name: str = ""
    forecast_period: int = 12
    forecast_type: ForecastCadence = DEFAULT_CADENCE
    events_per_period: float = Field(
        default=1.0,
        validation_alias=AliasChoices("events_per_period", "eventsPerPeriod", "eventsPerWeek"),
    )
    launch_date: Optional[dt.date] = None

    @field_validator("forecast_type", mode="before")
    @classmethod
    def _known_cadence(cls, v: Any) -> str:
        return _fail_closed(v, _CADENCES, DEFAULT_CADENCE, "forecast cadence")


# ---------------------------------------------------------------------------
# Growth
# ---------------------------------------------------------------------------

_GROWTH_MODELS = {"exponential": "Exponential", "decay": "Decay", "seasonal": "Seasonal"}


class GrowthMetrics(AssumptionModel):
    total_visitors: float = 0.0  # lifetime audience ceiling; 0 means uncapped
    weekly_visitors: float = 0.0
    visitors_per_event: float = 0.0
    growth_model: GrowthModel = DEFAULT_GROWTH_MODEL
    weekly_growth_rate: float = 0.0  # percent per period
    return_visit_rate: float = 0.0  # fraction
    word_of_mouth_rate: float = 0.0  # fraction
    social_media_conversion: float = 0.0
    seasonal_factors: Tuple[Tuple[str, float], ...] = ()  # (quarter, factor) pairs, Q1..Q4 order

    @field_validator("growth_model", mode="before")
    @classmethod
    def _known_growth_model(cls, v: Any) -> str:
        return _fail_closed(v, _GROWTH_MODELS, DEFAULT_GROWTH_MODEL, "growth model")

    @field_validator("seasonal_factors", mode="before")
    @classmethod
    def _quarter_keys(cls, v: Any) -> Tuple[Tuple[str, float], ...]:
        """
        Accept {"Q1": 1.2}, {1: 1.2}, [("Q1", 1.2)] or the editor's list form
        [{"quarter": "Q1", "seasonalImpactFactor": 1.2}, ...].
        """
        if _is_blank(v):
            return ()
        if isinstance(v, dict):
            items = list(v.items())
        elif not isinstance(v, (list, tuple)):
            raise ValueError(f"seasonal factors must be a mapping or a list, got {type(v).__name__}")
        else:
            items = []
            for row in v:
                if isinstance(row, dict):
                    factor = _first_present(row, ("seasonal_impact_factor", "seasonalImpactFactor", "factor"))
                    items.append((row.get("quarter"), factor))
                elif isinstance(row, (list, tuple)) and len(row) == 2:
                    items.append((row[0], row[1]))
                else:
                    raise ValueError(f"seasonal factor rows must be mappings or (quarter, factor) pairs, got {row!r}")
        factors: Dict[str, float] = {}
        for quarter, factor in items:
            q = str(quarter).strip().upper()
            if not q.startswith("Q"):
                q = f"Q{q}"
            if q not in QUARTERS:
                logger.warning("Ignoring seasonal factor for unknown quarter %r.", quarter)
                continue
            factors[q] = 1.0 if _is_blank(factor) else float(factor)
        return tuple((q, factors[q]) for q in QUARTERS if q in factors)

    def seasonal_factor(self, quarter: int) -> float:
        return float(dict(self.seasonal_factors).get(f"Q{quarter}", 1.0))


# ---------------------------------------------------------------------------
# Revenue
# ---------------------------------------------------------------------------


class RevenueMetrics(AssumptionModel):
    ticket_price: float = 0.0
    ticket_sales_rate: float = 1.0
    fb_spend: float = 0.0
    fb_conversion_rate: float = 1.0
    merchandise_spend: float = 0.0
    merchandise_conversion_rate: float = 1.0
    digital_price: float = 0.0
    digital_conversion_rate: float = 1.0


# ---------------------------------------------------------------------------
# Costs
# ---------------------------------------------------------------------------


class BudgetDepreciation(AssumptionModel):
    enabled: bool = False
    start_week: int = 1
    weekly_depreciation_rate: float = 0.0  # percent per period
    minimum_amount: float = 0.0


class MarketingChannel(AssumptionModel):
    id: str = ""
    name: str = ""
    budget: float = 0.0
    allocation: float = 0.0
    target_audience: str = ""


class AggregateMarketing(AssumptionModel):
    allocation_mode: Literal["simple"] = "simple"
    budget_type: Literal["weekly", "campaign"] = Field(
        default="weekly",
        validation_alias=AliasChoices("budget_type", "budgetType", "type"),
    )
    weekly_budget: float = 0.0
    campaign_budget: float = 0.0
    campaign_duration_weeks: float = 0.0
    depreciation: BudgetDepreciation = Field(default_factory=BudgetDepreciation)

    @field_validator("budget_type", mode="before")
    @classmethod
    def _known_budget_type(cls, v: Any) -> str:
        return _fail_closed(
            v, {"weekly": "weekly", "campaign": "campaign"}, "weekly", "marketing budget type"
        )


class ChannelMarketing(AssumptionModel):
    allocation_mode: Literal["channels"] = "channels"
    channels: Tuple[MarketingChannel, ...] = ()
    depreciation: BudgetDepreciation = Field(default_factory=BudgetDepreciation)


class StaffRole(AssumptionModel):
    id: str = ""
    role: str = ""
    count: float = 0.0
    cost_per_person: float = 0.0
    is_full_time: bool = False
    notes: str = ""


class FlatRateStaffing(AssumptionModel):
    allocation_mode: Literal["simple"] = "simple"
    additional_staffing_per_event: float = 0.0
    staffing_cost_per_person: float = 0.0


class RoleStaffing(AssumptionModel):
    allocation_mode: Literal["detailed"] = "detailed"
    roles: Tuple[StaffRole, ...] = Field(
        default=(),
        validation_alias=AliasChoices("roles", "staff_roles", "staffRoles"),
    )


class EventCostItem(AssumptionModel):
    id: str = ""
    name: str = ""
    amount: float = 0.0


class SetupCostItem(AssumptionModel):
    id: str = ""
    name: str = ""
    amount: float = 0.0
    amortize: bool = False


MarketingCosts = Union[AggregateMarketing, ChannelMarketing]
StaffingCosts = Union[FlatRateStaffing, RoleStaffing]

_MODE_KEYS = ("allocation_mode", "allocationMode")
_MARKETING_MODES = {"simple": "simple", "aggregate": "simple", "channels": "channels"}
_STAFFING_MODES = {"simple": "simple", "flat": "simple", "detailed": "detailed", "roles": "detailed"}
_FLAT_STAFFING_KEYS = (
    "additional_staffing_per_event",
    "additionalStaffingPerEvent",
    "staffing_cost_per_person",
    "staffingCostPerPerson",
)
_ROLE_KEYS = ("roles", "staff_roles", "staffRoles")


def _without_mode(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in _MODE_KEYS}


def resolve_marketing(value: Any) -> MarketingCosts:
    """Pick exactly one marketing allocation from an editor payload."""
    if _is_blank(value):
        return AggregateMarketing()
    if isinstance(value, (AggregateMarketing, ChannelMarketing)):
        return value
    data = dict(value)
    raw_mode = _first_present(data, _MODE_KEYS)
    if raw_mode is None:
        # legacy payloads: a populated channel list selects itemized costing
        mode = "channels" if data.get("channels") else "simple"
    else:
        mode = _fail_closed(raw_mode, _MARKETING_MODES, "simple", "marketing allocation mode")
    data = _without_mode(data)
    if mode == "channels":
        return ChannelMarketing.model_validate(data)
    return AggregateMarketing.model_validate(data)


def resolve_staffing(value: Any) -> StaffingCosts:
    """Pick exactly one staffing allocation from an editor payload."""
    if _is_blank(value):
        return FlatRateStaffing()
    if isinstance(value, (FlatRateStaffing, RoleStaffing)):
        return value
    data = dict(value)
    raw_mode = _first_present(data, _MODE_KEYS)
    if raw_mode is None:
        mode = "detailed" if _first_present(data, _ROLE_KEYS) else "simple"
    else:
        mode = _fail_closed(raw_mode, _STAFFING_MODES, "simple", "staffing allocation mode")
    data = _without_mode(data)
    if mode == "detailed":
        return RoleStaffing.model_validate(data)
    return FlatRateStaffing.model_validate(data)


class CostMetrics(AssumptionModel):
    marketing: MarketingCosts = Field(default_factory=AggregateMarketing)
    staffing: StaffingCosts = Field(default_factory=FlatRateStaffing)
    event_costs: Tuple[EventCostItem, ...] = ()
    setup_costs: Tuple[SetupCostItem, ...] = ()
    fb_cog_percentage: float = DEFAULT_FB_COG_PERCENTAGE
    merchandise_cog_per_unit: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def _gather_staffing(cls, data: Any) -> Any:
        """The editor stores staffing fields flat on the cost struct; fold them in."""
        if not isinstance(data, dict) or not _is_blank(data.get("staffing")):
            return data
        flat_keys = _FLAT_STAFFING_KEYS + _ROLE_KEYS + ("staffingAllocationMode", "staffing_allocation_mode")
        staffing = {k: data[k] for k in flat_keys if k in data}
        if not staffing:
            return data
        mode = staffing.pop("staffingAllocationMode", None)
        mode = staffing.pop("staffing_allocation_mode", mode)
        if not _is_blank(mode):
            staffing["allocation_mode"] = mode
        out = {k: v for k, v in data.items() if k not in flat_keys}
        out["staffing"] = staffing
        return out

    @field_validator("marketing", mode="before")
    @classmethod
    def _one_marketing_mode(cls, v: Any) -> MarketingCosts:
        return resolve_marketing(v)

    @field_validator("staffing", mode="before")
    @classmethod
    def _one_staffing_mode(cls, v: Any) -> StaffingCosts:
        return resolve_staffing(v)

    @field_validator("fb_cog_percentage")
    @classmethod
    def _clamp_percentage(cls, v: float) -> float:
        return min(max(v, 0.0), 100.0)
