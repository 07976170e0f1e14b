from __future__ import annotations

import datetime as dt
import math
from typing import Iterable, List, Optional

import numpy as np
import pandas as pd
from dateutil.relativedelta import relativedelta


def require_columns(df: pd.DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def safe_divide(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is zero or not finite."""
    if not denominator or not math.isfinite(denominator):
        return 0.0
    return float(numerator) / float(denominator)


def excel_round(x, decimals: int = 2):
    """Excel ROUND: half away from zero (vectorized)."""
    m = 10 ** decimals
    x = np.asarray(x, dtype=float)
    return np.sign(x) * (np.floor(np.abs(x) * m + 0.5) / m)


_PERIOD_STEPS = {
    "weekly": relativedelta(weeks=1),
    "per-event": relativedelta(weeks=1),
    "monthly": relativedelta(months=1),
    "quarterly": relativedelta(months=3),
}


def period_start_dates(
    launch_date: Optional[dt.date],
    n_periods: int,
    cadence: str = "weekly",
) -> List[Optional[dt.date]]:
    """
    Start date of each forecast period, period 1 starting on the launch date.
    Without a launch date every entry is None.
    """
    if launch_date is None:
        return [None] * n_periods
    step = _PERIOD_STEPS.get(cadence, _PERIOD_STEPS["weekly"])
    return [launch_date + step * k for k in range(n_periods)]


def period_to_quarter(
    period: int,
    cadence: str = "weekly",
    *,
    period_start: Optional[dt.date] = None,
    weeks_per_quarter: int = 13,
    months_per_quarter: int = 3,
) -> int:
    """
    Quarter (1-4) a forecast period falls in.

    A dated period uses its calendar quarter; otherwise the quarter is counted
    from period 1 using the cadence (13 weeks, 3 months or 1 quarter each).
    """
    if period_start is not None:
        return (period_start.month - 1) // 3 + 1
    if cadence == "quarterly":
        per_quarter = 1
    elif cadence == "monthly":
        per_quarter = max(months_per_quarter, 1)
    else:
        per_quarter = max(weeks_per_quarter, 1)
    return ((period - 1) // per_quarter) % 4 + 1
