"""
Application-wide configuration constants and helper utilities.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

import streamlit as st

from bankops.access.permissions import Role, parse_role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TabConfig:
    key: str
    label: str


# Ordered tab definitions for the dashboard
TABS: List[TabConfig] = [
    TabConfig("executive", "Executive Overview"),
    TabConfig("portfolio", "Customer Portfolio"),
    TabConfig("access_control", "Access Control"),
]

DEFAULT_PRODUCT_SHARES: Tuple[Tuple[str, float], ...] = (
    ("KPR (Mortgage)", 0.35),
    ("KUR (Business Loan)", 0.28),
    ("Kartu Kredit", 0.18),
    ("Tabungan", 0.12),
    ("Deposito", 0.07),
)

# Default anchor for trend periods and alert timestamps
DEFAULT_AS_OF = datetime(2026, 1, 1, tzinfo=timezone.utc)

DEFAULT_BEST_PRACTICES: Tuple[Tuple[str, float], ...] = (
    ("Personalized WhatsApp campaigns increased conversion by", 23.0),
    ("Early churn detection reduced customer loss by", 18.0),
    ("Cross-sell recommendations boosted product penetration by", 15.0),
)


@dataclass(frozen=True)
class MetricsConfig:
    """Rates, thresholds and targets used by the executive metrics engine."""

    revenue_target: float = 2_500_000_000.0
    loan_revenue_rate: float = 0.05
    deposit_revenue_rate: float = 0.02
    revenue_bearing_stages: FrozenSet[str] = frozenset({"disbursement", "active"})
    active_segments: FrozenSet[str] = frozenset({"Champions", "Loyal Customers"})
    at_risk_segment: str = "At Risk"
    vip_segment: str = "Champions"
    new_customer_rate: float = 0.036
    churn_rate: float = 0.012
    churn_alert_threshold: int = 5
    target_miss_threshold: float = 70.0
    trend_months: int = 12
    aum_monthly_decay: float = 0.02
    revenue_monthly_decay: float = 0.03
    revenue_jitter: float = 0.025
    rfm_trend_range: float = 10.0
    historical_target_ratio: float = 0.95
    forecast_growth: float = 1.08
    forecast_window: int = 3
    cross_sell_max_products: int = 2
    cross_sell_balance_multiple: float = 1.5
    cross_sell_rate: float = 0.10
    vip_balance_multiple: float = 2.0
    prospect_multiple: float = 1.5
    loyal_share_of_active: float = 0.4
    penetration_target: float = 3.5
    quarter_months: int = 3
    product_shares: Tuple[Tuple[str, float], ...] = field(default=DEFAULT_PRODUCT_SHARES)
    jitter_seed: int = 42
    as_of: datetime = DEFAULT_AS_OF


@dataclass(frozen=True)
class ServiceIndicators:
    """Figures sourced from collaborators outside the record set (service desk, HR, surveys)."""

    nps: float = 45.0
    csat: float = 82.0
    sla_compliance: float = 94.5
    avg_response_time: float = 12.0  # minutes
    resolution_rate: float = 89.0
    team_productivity: float = 88.0
    target_achievement: float = 92.0
    engagement: float = 78.0
    operations_health: float = 92.0
    team_health: float = 88.0
    penetration_change: float = 0.3
    forecast_confidence: float = 78.0
    best_practices: Tuple[Tuple[str, float], ...] = field(default=DEFAULT_BEST_PRACTICES)  # (description, impact %)


# env var -> (MetricsConfig field, parser)
_METRICS_OVERRIDES: Dict[str, Tuple[str, Callable[[str], object]]] = {
    "BANKOPS_REVENUE_TARGET": ("revenue_target", float),
    "BANKOPS_CHURN_ALERT_THRESHOLD": ("churn_alert_threshold", int),
    "BANKOPS_TARGET_MISS_THRESHOLD": ("target_miss_threshold", float),
    "BANKOPS_JITTER_SEED": ("jitter_seed", int),
}


def _get_secret(name: str, default: Optional[str] = None) -> Optional[str]:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception:
        pass
    return default


def load_metrics_config(base: Optional[MetricsConfig] = None) -> MetricsConfig:
    """Return ``base`` (or the defaults) with any BANKOPS_* overrides applied.

    Raises ``ValueError`` naming the variable when an override cannot be parsed,
    or when the revenue target is not positive.
    """
    config = base or MetricsConfig()
    overrides = {}
    for env_name, (field_name, parser) in _METRICS_OVERRIDES.items():
        raw = _get_secret(env_name)
        if raw is None:
            continue
        try:
            overrides[field_name] = parser(raw.strip())
        except ValueError:
            raise ValueError(f"{env_name} must be a number, got {raw!r}") from None
    if "revenue_target" in overrides and not overrides["revenue_target"] > 0:
        raise ValueError(f"BANKOPS_REVENUE_TARGET must be positive, got {overrides['revenue_target']!r}")
    if overrides:
        logger.info("Applied metrics config overrides: %s", sorted(overrides))
        config = replace(config, **overrides)
    return config


def load_default_role() -> Role:
    raw = _get_secret("BANKOPS_DEFAULT_ROLE")
    if raw is None:
        return Role.ADMIN
    try:
        return parse_role(raw.strip())
    except ValueError:
        raise ValueError(
            f"BANKOPS_DEFAULT_ROLE must be one of {[r.value for r in Role]}, got {raw!r}"
        ) from None
