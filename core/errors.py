"""Exceptions raised by the forecast engine and its input boundary."""

from __future__ import annotations


class ForecastError(ValueError):
    """Base class for forecast input problems."""


class InvalidForecastPeriod(ForecastError):
    """Raised when a product asks for fewer than one forecast period."""

    def __init__(self, forecast_period):
        self.forecast_period = forecast_period
        super().__init__(
            f"forecast_period must be >= 1, got {forecast_period!r}."
        )


class UnknownFieldError(ForecastError):
    """Raised when a reporting helper is asked for a field records do not carry."""
