from __future__ import annotations

import math
from typing import Optional

import numpy as np
import pandas as pd


def safe_sum(series: pd.Series) -> float:
    cleaned = pd.to_numeric(series, errors="coerce").dropna()
    if cleaned.empty:
        return 0.0
    return float(cleaned.sum())


def safe_mean(series: pd.Series) -> float:
    cleaned = pd.to_numeric(series, errors="coerce").dropna()
    if cleaned.empty:
        return 0.0
    return float(cleaned.mean())


def clamp_pct(value: float) -> float:
    return float(np.clip(value, 0.0, 100.0))


def health_score(value: float) -> int:
    """Clamp to [0, 100] and round half-up."""
    return int(math.floor(clamp_pct(value) + 0.5))


def pct_change(current: Optional[float], previous: Optional[float]) -> Optional[float]:
    if current is None or previous in (None, 0):
        return None
    return ((current - previous) / previous) * 100
