"""Tests for the projection assembler."""
import datetime as dt

import pandas as pd
import pytest

from core.errors import InvalidForecastPeriod
from core.schema import PROJECTION_COLUMNS
from engine import WeeklyProjection, project, projections_from_frame, projections_to_frame
from inputs import CostMetrics, GrowthMetrics, ProductInfo, RevenueMetrics


class TestRecordInvariants:
    """Totals, profit and cumulative profit hold for every period."""

    def test_one_record_per_period(self, baseline):
        assert [w.period for w in baseline] == [1, 2, 3, 4]
        assert all(isinstance(w, WeeklyProjection) for w in baseline)

    def test_totals_are_sums_of_parts(self, baseline):
        for w in baseline:
            assert w.total_revenue == pytest.approx(
                w.ticket_revenue + w.fb_revenue + w.merchandise_revenue + w.digital_revenue
            )
            assert w.total_costs == pytest.approx(
                w.marketing_costs + w.staffing_costs + w.event_costs
                + w.setup_costs + w.fb_cogs + w.merchandise_cogs
            )
            assert w.weekly_profit == pytest.approx(w.total_revenue - w.total_costs)

    def test_cumulative_profit_is_running_sum(self, baseline):
        running = 0.0
        for w in baseline:
            running += w.weekly_profit
            assert w.cumulative_profit == pytest.approx(running)
        assert baseline[0].cumulative_profit == baseline[0].weekly_profit

    def test_known_values(self, baseline):
        assert [w.foot_traffic for w in baseline] == [100, 110, 121, 133]
        first, second = baseline[0], baseline[1]
        assert first.total_revenue == pytest.approx(2000)
        assert first.weekly_profit == pytest.approx(750)
        assert second.total_revenue == pytest.approx(2200)
        assert second.total_costs == pytest.approx(200 + 200 + 100 + 165 + 220)
        assert second.cumulative_profit == pytest.approx(750 + 1315)

    def test_average_event_attendance(self, baseline):
        assert baseline[0].number_of_events == 2
        assert baseline[0].average_event_attendance == pytest.approx(50)


class TestAssembler:

    def test_idempotent(self, product, growth, revenue, costs):
        assert project(product, growth, revenue, costs) == project(product, growth, revenue, costs)

    def test_models_and_mappings_agree(self, product, growth, revenue, costs, baseline):
        result = project(
            ProductInfo.model_validate(product),
            GrowthMetrics.model_validate(growth),
            RevenueMetrics.model_validate(revenue),
            CostMetrics.model_validate(costs),
        )
        assert result == baseline

    def test_missing_metrics_use_defaults(self):
        result = project({"forecastPeriod": 3})
        assert len(result) == 3
        assert all(w.total_revenue == 0 and w.total_costs == 0 for w in result)

    def test_single_period_horizon(self, product, growth, revenue, costs):
        product["forecastPeriod"] = 1
        result = project(product, growth, revenue, costs)
        assert len(result) == 1
        assert result[0].cumulative_profit == result[0].weekly_profit

    @pytest.mark.parametrize("n", [0, -3])
    def test_invalid_forecast_period(self, n):
        with pytest.raises(InvalidForecastPeriod):
            project({"forecastPeriod": n})

    def test_zero_events_per_period(self, product, growth, revenue, costs):
        product["eventsPerWeek"] = 0
        result = project(product, growth, revenue, costs)
        assert all(w.average_event_attendance == 0 for w in result)
        assert all(w.staffing_costs == 0 for w in result)

    def test_period_dates_follow_cadence(self, product):
        product.update({"forecastType": "monthly", "launchDate": "2024-01-31", "forecastPeriod": 3})
        result = project(product)
        assert [w.period_start for w in result] == [
            dt.date(2024, 1, 31), dt.date(2024, 2, 29), dt.date(2024, 3, 31)
        ]

    def test_undated_periods(self, baseline):
        assert all(w.period_start is None for w in baseline)


class TestFrames:

    def test_frame_columns(self, baseline):
        df = projections_to_frame(baseline)
        assert list(df.columns) == list(PROJECTION_COLUMNS)
        assert len(df) == 4

    def test_frame_round_trip(self, baseline):
        assert projections_from_frame(projections_to_frame(baseline)) == baseline

    def test_from_frame_requires_columns(self):
        with pytest.raises(ValueError, match="Missing required columns"):
            projections_from_frame(pd.DataFrame({"period": [1]}))
