"""Tests for the assumption models and input checks."""
import datetime as dt
import logging

import pytest
from pydantic import ValidationError

from core.errors import ForecastError, InvalidForecastPeriod
from inputs import (
    ActualRecord,
    AggregateMarketing,
    ChannelMarketing,
    CostMetrics,
    FlatRateStaffing,
    GrowthMetrics,
    ProductInfo,
    RoleStaffing,
    as_model,
    check_forecast_period,
    validate_assumptions,
)


class TestNormalization:
    """Blank values, aliases and defaults at the input boundary."""

    def test_blank_values_fall_back_to_defaults(self):
        growth = GrowthMetrics.model_validate(
            {"weeklyVisitors": "", "weeklyGrowthRate": None, "returnVisitRate": float("nan")}
        )
        assert growth.weekly_visitors == 0.0
        assert growth.weekly_growth_rate == 0.0
        assert growth.return_visit_rate == 0.0

    def test_camel_and_snake_case_accepted(self):
        a = ProductInfo.model_validate({"forecastPeriod": 8, "eventsPerWeek": 3})
        b = ProductInfo.model_validate({"forecast_period": 8, "events_per_period": 3})
        assert a == b

    def test_launch_date_parsed(self):
        product = ProductInfo.model_validate({"launchDate": "2024-05-01"})
        assert product.launch_date == dt.date(2024, 5, 1)

    def test_unknown_cadence_fails_closed(self, caplog):
        with caplog.at_level(logging.WARNING):
            product = ProductInfo.model_validate({"forecastType": "fortnightly"})
        assert product.forecast_type == "weekly"
        assert "fortnightly" in caplog.text

    def test_as_model_accepts_none_dict_and_instance(self):
        instance = GrowthMetrics(weekly_visitors=5)
        assert as_model(GrowthMetrics, None) == GrowthMetrics()
        assert as_model(GrowthMetrics, instance) is instance
        assert as_model(GrowthMetrics, {"weeklyVisitors": 5}) == instance

    def test_seasonal_factor_pairs_accepted(self):
        growth = GrowthMetrics.model_validate({"seasonalFactors": [["Q1", 1.2]]})
        assert growth.seasonal_factors == (("Q1", 1.2),)
        assert growth.seasonal_factor(1) == pytest.approx(1.2)
        assert growth.seasonal_factor(2) == 1.0

    @pytest.mark.parametrize("bad", [[1.2], 5])
    def test_malformed_seasonal_factors_rejected(self, bad):
        with pytest.raises(ValidationError):
            GrowthMetrics.model_validate({"seasonalFactors": bad})

    def test_growth_metrics_hashable(self):
        a = GrowthMetrics.model_validate({"seasonalFactors": {"Q1": 1.2}})
        b = GrowthMetrics.model_validate({"seasonalFactors": [{"quarter": "Q1", "seasonalImpactFactor": 1.2}]})
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b, GrowthMetrics()}) == 2

    def test_models_are_frozen(self):
        product = ProductInfo()
        with pytest.raises(Exception):
            product.forecast_period = 3


class TestCostModes:
    """Exactly one costing mode per category."""

    def test_default_modes(self):
        costs = CostMetrics()
        assert isinstance(costs.marketing, AggregateMarketing)
        assert isinstance(costs.staffing, FlatRateStaffing)
        assert costs.fb_cog_percentage == 30

    def test_explicit_channel_mode(self):
        costs = CostMetrics.model_validate(
            {"marketing": {"allocationMode": "channels", "channels": [{"budget": 10}]}}
        )
        assert isinstance(costs.marketing, ChannelMarketing)
        assert costs.marketing.channels[0].budget == 10

    def test_legacy_payload_with_channels_selects_channel_mode(self):
        costs = CostMetrics.model_validate(
            {"marketing": {"weeklyBudget": 500, "channels": [{"budget": 10}]}}
        )
        assert isinstance(costs.marketing, ChannelMarketing)

    def test_unknown_marketing_mode_fails_closed(self, caplog):
        with caplog.at_level(logging.WARNING):
            costs = CostMetrics.model_validate(
                {"marketing": {"allocationMode": "programmatic", "weeklyBudget": 75}}
            )
        assert isinstance(costs.marketing, AggregateMarketing)
        assert costs.marketing.weekly_budget == 75
        assert "programmatic" in caplog.text

    def test_unknown_staffing_mode_fails_closed(self, caplog):
        with caplog.at_level(logging.WARNING):
            costs = CostMetrics.model_validate(
                {"staffingAllocationMode": "bogus", "additionalStaffingPerEvent": 2, "staffingCostPerPerson": 50}
            )
        assert isinstance(costs.staffing, FlatRateStaffing)
        assert costs.staffing.additional_staffing_per_event == 2
        assert costs.staffing.staffing_cost_per_person == 50
        assert "bogus" in caplog.text

    def test_flat_staffing_fields_are_gathered(self):
        costs = CostMetrics.model_validate(
            {"additionalStaffingPerEvent": 4, "staffingCostPerPerson": 25}
        )
        assert costs.staffing == FlatRateStaffing(
            additional_staffing_per_event=4, staffing_cost_per_person=25
        )

    def test_staff_roles_select_detailed_mode(self):
        costs = CostMetrics.model_validate(
            {
                "staffingAllocationMode": "detailed",
                "staffRoles": [{"role": "Chef", "count": 1, "costPerPerson": 300, "isFullTime": True}],
            }
        )
        assert isinstance(costs.staffing, RoleStaffing)
        assert costs.staffing.roles[0].role == "Chef"

    def test_fb_cog_percentage_clamped(self):
        assert CostMetrics(fb_cog_percentage=150).fb_cog_percentage == 100
        assert CostMetrics(fb_cog_percentage=-5).fb_cog_percentage == 0
        assert CostMetrics.model_validate({"fbCogPercentage": ""}).fb_cog_percentage == 30


class TestActualRecord:
    """Both historical actuals payloads map onto one record."""

    def test_tracker_payload_aliases(self):
        record = ActualRecord.model_validate(
            {"week": 3, "revenue": 900, "expenses": 400, "marketingCost": 50, "staffCost": 80}
        )
        assert record.period == 3
        assert record.marketing_costs == 50
        assert record.staffing_costs == 80
        assert record.resolved_total_revenue() == 900
        assert record.resolved_total_costs() == 400
        assert record.resolved_weekly_profit() == 500

    def test_totals_fall_back_to_parts(self):
        record = ActualRecord.model_validate(
            {"period": 1, "ticketRevenue": 500, "fbRevenue": 100, "marketingCosts": 50, "otherCosts": 25}
        )
        assert record.resolved_total_revenue() == pytest.approx(600)
        assert record.resolved_total_costs() == pytest.approx(75)

    def test_entered_total_wins_over_legacy(self):
        record = ActualRecord(period=1, total_revenue=1000, revenue=10)
        assert record.resolved_total_revenue() == 1000

    def test_tracker_technology_and_office_fold_into_other(self):
        record = ActualRecord.model_validate(
            {"week": 1, "marketingCost": 50, "technologyCost": 30, "officeCost": 20}
        )
        assert record.resolved_other_costs() == pytest.approx(50)
        assert record.resolved_total_costs() == pytest.approx(100)

    def test_blank_fields_are_not_entered(self):
        record = ActualRecord.model_validate({"week": 2, "footTraffic": ""})
        assert record.foot_traffic is None


class TestValidators:

    def test_forecast_period_below_one_raises(self):
        with pytest.raises(InvalidForecastPeriod) as exc:
            check_forecast_period(ProductInfo(forecast_period=0))
        assert isinstance(exc.value, ForecastError)
        assert isinstance(exc.value, ValueError)
        assert exc.value.forecast_period == 0

    def test_forecast_period_returned(self):
        assert check_forecast_period(ProductInfo(forecast_period=6)) == 6

    def test_clean_assumptions_pass(self, product, growth, revenue, costs):
        result = validate_assumptions(product, growth, revenue, costs)
        assert result.is_valid
        assert result.warnings == []

    def test_negative_inputs_are_errors(self):
        result = validate_assumptions(
            {"forecastPeriod": 4},
            {"weeklyVisitors": -10},
            {"ticketPrice": -5},
            {"eventCosts": [{"name": "Venue", "amount": -1}]},
        )
        assert not result.is_valid
        assert len(result.errors) == 3
        assert "ERRORS (3)" in result.summary()

    def test_percent_looking_rates_warn(self):
        result = validate_assumptions({"forecastPeriod": 4}, {"returnVisitRate": 20})
        assert result.is_valid
        assert any("return_visit_rate" in w for w in result.warnings)

    def test_campaign_without_duration_warns(self):
        result = validate_assumptions(
            {"forecastPeriod": 4},
            cost_metrics={"marketing": {"type": "campaign", "campaignBudget": 1000}},
        )
        assert any("duration" in w for w in result.warnings)

    def test_zero_horizon_is_an_error(self):
        result = validate_assumptions({"forecastPeriod": 0})
        assert not result.is_valid

    def test_growth_rate_below_minus_100_is_an_error(self):
        result = validate_assumptions({"forecastPeriod": 4}, {"weeklyGrowthRate": -150})
        assert not result.is_valid
        assert any("-100%" in e for e in result.errors)
