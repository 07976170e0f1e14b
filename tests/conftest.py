"""Shared assumption sets for the forecast tests."""
import pytest

from engine import project


@pytest.fixture
def product():
    return {
        "id": "prod-1",
        "name": "Night Market",
        "forecastPeriod": 4,
        "forecastType": "weekly",
        "eventsPerWeek": 2,
    }


@pytest.fixture
def growth():
    # attendance: 100, 110, 121, 133
    return {
        "weeklyVisitors": 100,
        "growthModel": "Exponential",
        "weeklyGrowthRate": 10,
    }


@pytest.fixture
def revenue():
    # 10 ticket + 5 F&B + 5 merchandise per head
    return {
        "ticketPrice": 20,
        "ticketSalesRate": 0.5,
        "fbSpend": 10,
        "fbConversionRate": 0.5,
        "merchandiseSpend": 25,
        "merchandiseConversionRate": 0.2,
        "digitalPrice": 0,
    }


@pytest.fixture
def costs():
    return {
        "marketing": {"allocationMode": "simple", "type": "weekly", "weeklyBudget": 200},
        "additionalStaffingPerEvent": 2,
        "staffingCostPerPerson": 50,
        "eventCosts": [{"id": "venue", "name": "Venue", "amount": 100}],
        "setupCosts": [{"id": "stalls", "name": "Stalls", "amount": 400}],
        "fbCogPercentage": 30,
        "merchandiseCogPerUnit": 10,
    }


@pytest.fixture
def baseline(product, growth, revenue, costs):
    return project(product, growth, revenue, costs)
