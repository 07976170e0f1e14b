"""Tests for attendance projection."""
import datetime as dt
import logging

import numpy as np
import pytest

from core.config import ForecastConfig
from engine.growth import (
    DecayCurve,
    ExponentialCurve,
    SeasonalCurve,
    apply_audience_ceiling,
    average_event_attendance,
    curve_for,
    project_attendance,
)
from inputs.models import GrowthMetrics, ProductInfo


def _attendance(growth, n=4, **product):
    product.setdefault("forecast_period", n)
    return project_attendance(GrowthMetrics.model_validate(growth), ProductInfo(**product), n)


class TestGrowthCurves:
    """Per-period multipliers for each growth model."""

    def test_exponential_compounds_from_period_one(self):
        result = _attendance({"weeklyVisitors": 100, "weeklyGrowthRate": 10}, n=3)
        assert result.tolist() == [100, 110, 121]

    def test_decay_shrinks_geometrically(self):
        result = _attendance(
            {"weeklyVisitors": 100, "weeklyGrowthRate": 10, "growthModel": "Decay"}, n=3
        )
        assert result.tolist() == [100, 90, 81]

    def test_decay_never_negative(self):
        result = _attendance(
            {"weeklyVisitors": 100, "weeklyGrowthRate": 150, "growthModel": "Decay"}, n=5
        )
        assert result[0] == 100
        assert (result >= 0).all()
        assert result[1:].tolist() == [0, 0, 0, 0]

    def test_seasonal_uses_index_quarters_without_launch_date(self):
        growth = {
            "weeklyVisitors": 100,
            "growthModel": "Seasonal",
            "seasonalFactors": {"Q1": 1.0, "Q2": 2.0},
        }
        result = _attendance(growth, n=14)
        assert result[:13].tolist() == [100] * 13
        assert result[13] == 200

    def test_seasonal_uses_calendar_quarter_with_launch_date(self):
        growth = {
            "weeklyVisitors": 100,
            "growthModel": "Seasonal",
            "seasonalFactors": [
                {"quarter": "Q1", "seasonalImpactFactor": 1.0},
                {"quarter": "Q2", "seasonalImpactFactor": 1.5},
            ],
        }
        metrics = GrowthMetrics.model_validate(growth)
        product = ProductInfo(forecast_period=2, launch_date=dt.date(2024, 3, 25))
        starts = [dt.date(2024, 3, 25), dt.date(2024, 4, 1)]
        result = project_attendance(metrics, product, 2, period_starts=starts)
        assert result.tolist() == [100, 150]

    def test_unset_quarter_defaults_to_one(self):
        curve = SeasonalCurve(quarter_factors={1: 1.2})
        factors = curve.factors(
            30, period_starts=[None] * 30, cadence="weekly", config=ForecastConfig()
        )
        assert factors[0] == pytest.approx(1.2)
        assert factors[13] == pytest.approx(1.0)

    def test_exponential_below_minus_100_never_negative(self):
        result = _attendance({"weeklyVisitors": 100, "weeklyGrowthRate": -150}, n=4)
        assert result.tolist() == [100, 0, 0, 0]

    def test_seasonal_monthly_quarters_are_three_periods(self):
        growth = {"weeklyVisitors": 100, "growthModel": "Seasonal", "seasonalFactors": {"Q2": 2.0}}
        result = _attendance(growth, n=6, forecast_type="monthly")
        assert result.tolist() == [100, 100, 100, 200, 200, 200]

    def test_seasonal_quarterly_periods_wrap_after_q4(self):
        growth = {
            "weeklyVisitors": 100,
            "growthModel": "Seasonal",
            "seasonalFactors": {"Q1": 1.0, "Q2": 2.0, "Q3": 3.0, "Q4": 4.0},
        }
        result = _attendance(growth, n=5, forecast_type="quarterly")
        assert result.tolist() == [100, 200, 300, 400, 100]

    def test_seasonal_weekly_wraps_into_next_year(self):
        growth = {"weeklyVisitors": 100, "growthModel": "Seasonal", "seasonalFactors": {"Q1": 1.5}}
        result = _attendance(growth, n=53)
        assert result[0] == 150
        assert result[39] == 100
        assert result[52] == 150

    def test_curve_for_selects_model(self):
        assert isinstance(curve_for(GrowthMetrics(growth_model="Decay")), DecayCurve)
        assert isinstance(curve_for(GrowthMetrics()), ExponentialCurve)

    def test_unknown_growth_model_fails_closed(self, caplog):
        with caplog.at_level(logging.WARNING):
            metrics = GrowthMetrics.model_validate({"growthModel": "Linear"})
        assert metrics.growth_model == "Exponential"
        assert "Linear" in caplog.text


class TestAudience:
    """Baseline audience, lift and ceiling."""

    def test_return_and_word_of_mouth_lift(self):
        result = _attendance(
            {"weeklyVisitors": 100, "returnVisitRate": 0.1, "wordOfMouthRate": 0.05}, n=2
        )
        assert result.tolist() == [115, 115]

    def test_per_event_baseline(self):
        result = _attendance(
            {"visitorsPerEvent": 50, "weeklyVisitors": 999},
            n=2,
            forecast_type="per-event",
            events_per_period=3,
        )
        assert result.tolist() == [150, 150]

    def test_attendance_rounded_half_away_from_zero(self):
        # 101 * 1.5 = 151.5 -> 152
        result = _attendance({"weeklyVisitors": 101, "weeklyGrowthRate": 50}, n=2)
        assert result[1] == 152

    def test_rounding_can_be_switched_off(self):
        metrics = GrowthMetrics(weekly_visitors=101, weekly_growth_rate=50)
        result = project_attendance(
            metrics, ProductInfo(forecast_period=2), 2,
            config=ForecastConfig(round_attendance=False),
        )
        assert result[1] == pytest.approx(151.5)

    def test_ceiling_caps_cumulative_attendance(self):
        result = _attendance({"weeklyVisitors": 100, "totalVisitors": 250}, n=4)
        assert result.tolist() == [100, 100, 50, 0]
        assert np.cumsum(result).max() == 250

    def test_fractional_ceiling_keeps_whole_visitors(self):
        result = _attendance({"weeklyVisitors": 100, "totalVisitors": 250.5}, n=4)
        assert result.tolist() == [100, 100, 50, 0]

    def test_zero_ceiling_means_uncapped(self):
        attendance = np.array([100.0, 100.0])
        assert apply_audience_ceiling(attendance, 0).tolist() == [100.0, 100.0]


class TestAverageEventAttendance:
    def test_divides_by_events(self):
        assert average_event_attendance(300, 3) == pytest.approx(100)

    def test_zero_events_gives_zero(self):
        assert average_event_attendance(300, 0) == 0.0
