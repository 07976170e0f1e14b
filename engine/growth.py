"""
Attendance projection — growth assumptions to a per-period head count.

Three growth curves, each a multiplier on the period-1 audience:
  Exponential: (1 + r)^(t-1)
  Decay:       max(0, (1 - r)^(t-1))
  Seasonal:    seasonal factor of the quarter period t falls in

The grown count is then lifted by return visits and word of mouth as an
independent multiplier (1 + return_visit_rate + word_of_mouth_rate), rounded
to whole visitors, and finally held under the lifetime audience ceiling.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

import numpy as np

from core.config import ForecastConfig
from core.utils import excel_round, period_to_quarter, safe_divide
from inputs.models import GrowthMetrics, ProductInfo

logger = logging.getLogger(__name__)


class GrowthCurve:
    """Interface for per-period audience multipliers."""

    def factors(
        self,
        n_periods: int,
        *,
        period_starts: Sequence[Optional[dt.date]],
        cadence: str,
        config: ForecastConfig,
    ) -> np.ndarray:
        raise NotImplementedError


@dataclass(frozen=True)
class ExponentialCurve(GrowthCurve):
    rate: float = 0.0  # fraction per period

    def factors(self, n_periods, *, period_starts, cadence, config):
        steps = np.arange(n_periods, dtype=float)
        # a rate below -100% would flip sign on odd periods
        base = max(1.0 + self.rate, 0.0)
        return np.power(base, steps)


@dataclass(frozen=True)
class DecayCurve(GrowthCurve):
    rate: float = 0.0

    def factors(self, n_periods, *, period_starts, cadence, config):
        steps = np.arange(n_periods, dtype=float)
        base = max(1.0 - self.rate, 0.0)
        return np.power(base, steps)


@dataclass(frozen=True)
class SeasonalCurve(GrowthCurve):
    quarter_factors: Dict[int, float]

    def factors(self, n_periods, *, period_starts, cadence, config):
        out = np.ones(n_periods, dtype=float)
        for i in range(n_periods):
            quarter = period_to_quarter(
                i + 1,
                cadence,
                period_start=period_starts[i],
                weeks_per_quarter=config.weeks_per_quarter,
                months_per_quarter=config.months_per_quarter,
            )
            out[i] = self.quarter_factors.get(quarter, 1.0)
        return out


def curve_for(growth_metrics: GrowthMetrics) -> GrowthCurve:
    rate = growth_metrics.weekly_growth_rate / 100.0
    model = growth_metrics.growth_model
    if model == "Exponential":
        return ExponentialCurve(rate=rate)
    if model == "Decay":
        return DecayCurve(rate=rate)
    if model == "Seasonal":
        return SeasonalCurve(
            quarter_factors={q: growth_metrics.seasonal_factor(q) for q in range(1, 5)}
        )
    raise ValueError(f"Unsupported growth model: {model!r}")


def baseline_audience(growth_metrics: GrowthMetrics, product_info: ProductInfo) -> float:
    """Period-1 audience: per-event products scale visitors per event by events per period."""
    if product_info.forecast_type == "per-event":
        return growth_metrics.visitors_per_event * product_info.events_per_period
    return growth_metrics.weekly_visitors


def apply_audience_ceiling(attendance: np.ndarray, ceiling: float) -> np.ndarray:
    """Trim attendance so the running total never passes the lifetime ceiling."""
    if ceiling <= 0:
        return attendance
    capped = np.minimum(np.cumsum(attendance), ceiling)
    return np.diff(capped, prepend=0.0)


def project_attendance(
    growth_metrics: GrowthMetrics,
    product_info: ProductInfo,
    n_periods: int,
    *,
    period_starts: Optional[Sequence[Optional[dt.date]]] = None,
    config: Optional[ForecastConfig] = None,
) -> np.ndarray:
    """
    Foot traffic for periods 1..n_periods.

    Returns
    -------
    np.ndarray of shape (n_periods,)
    """
    cfg = config or ForecastConfig()
    starts = list(period_starts) if period_starts is not None else [None] * n_periods

    base = baseline_audience(growth_metrics, product_info)
    curve = curve_for(growth_metrics)
    factors = curve.factors(
        n_periods, period_starts=starts, cadence=product_info.forecast_type, config=cfg
    )
    lift = 1.0 + growth_metrics.return_visit_rate + growth_metrics.word_of_mouth_rate

    attendance = base * factors * lift
    ceiling = growth_metrics.total_visitors
    if cfg.round_attendance:
        # whole visitors only, and never past the stated ceiling
        attendance = excel_round(attendance, 0)
        if ceiling >= 1:
            ceiling = float(np.floor(ceiling))
    attendance = apply_audience_ceiling(attendance, ceiling)

    for i in range(min(cfg.log_periods, n_periods)):
        logger.debug(
            "Period %d attendance: base=%s model=%s factor=%.4f lift=%.4f -> %s",
            i + 1, base, growth_metrics.growth_model, factors[i], lift, attendance[i],
        )
    return attendance


def average_event_attendance(foot_traffic: float, number_of_events: float) -> float:
    return safe_divide(foot_traffic, number_of_events)

