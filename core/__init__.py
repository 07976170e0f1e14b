"""
Core package — record schema, configuration, errors and shared numeric helpers.
No business logic lives here.
"""

from .schema import PROJECTION_COLUMNS, REVENUE_FIELDS, COST_FIELDS
from .config import ForecastConfig
from .errors import ForecastError, InvalidForecastPeriod, UnknownFieldError
from .utils import (
    require_columns,
    safe_divide,
    excel_round,
    period_start_dates,
    period_to_quarter,
)

__all__ = [
    "PROJECTION_COLUMNS",
    "REVENUE_FIELDS",
    "COST_FIELDS",
    "ForecastConfig",
    "ForecastError",
    "InvalidForecastPeriod",
    "UnknownFieldError",
    "require_columns",
    "safe_divide",
    "excel_round",
    "period_start_dates",
    "period_to_quarter",
]
