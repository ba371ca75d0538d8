"""
Monthly trend series for the executive dashboard.

These are synthetic projections backwards from the current totals, not
historical ledger queries. A real historical source only has to keep the
output shape: ascending-by-month ``TrendPoint`` lists keyed ``YYYY-MM``.
"""

from __future__ import annotations

from datetime import datetime
from typing import List

import numpy as np
import pandas as pd

from bankops.metrics.models import TrendPoint


def month_periods(as_of: datetime, months: int) -> List[str]:
    """``months`` period labels ending at the month of ``as_of``, oldest first."""
    ts = pd.Timestamp(as_of)
    if ts.tzinfo is not None:
        ts = ts.tz_convert(None)
    anchor = ts.to_period("M")
    return [str(anchor - offset) for offset in range(months - 1, -1, -1)]


def aum_trend(total_balance: float, as_of: datetime, months: int, monthly_decay: float) -> List[TrendPoint]:
    periods = month_periods(as_of, months)
    # offsets run oldest -> newest
    offsets = np.arange(months - 1, -1, -1)
    values = total_balance * (1 - offsets * monthly_decay)
    return [TrendPoint(period=p, value=float(v)) for p, v in zip(periods, values)]


def revenue_trend(
    total_revenue: float,
    revenue_target: float,
    as_of: datetime,
    months: int,
    monthly_decay: float,
    jitter: float,
    target_ratio: float,
    rng: np.random.Generator,
) -> List[TrendPoint]:
    periods = month_periods(as_of, months)
    # Jitter drawn newest-first so a longer series keeps its recent points
    noise = rng.uniform(-jitter, jitter, size=months)[::-1]
    offsets = np.arange(months - 1, -1, -1)
    values = total_revenue * (1 - offsets * monthly_decay + noise)
    target = revenue_target * target_ratio
    return [
        TrendPoint(period=p, value=float(v), target=float(target))
        for p, v in zip(periods, values)
    ]
