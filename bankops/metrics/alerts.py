"""
Threshold rules that turn aggregate figures into critical alerts.

Each rule is evaluated independently; evaluation order is emission order.
Metric values are raw numbers tagged with a ``MetricKind``; currency
abbreviation and percentage rounding belong to the display layer.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from bankops.config import MetricsConfig
from bankops.metrics.models import (
    AlertMetric,
    AlertSeverity,
    AlertType,
    CriticalAlert,
    MetricKind,
)


def churn_risk_alert(
    at_risk_count: int,
    avg_balance: float,
    config: MetricsConfig,
    created_at: str,
) -> Optional[CriticalAlert]:
    if at_risk_count <= config.churn_alert_threshold:
        return None
    return CriticalAlert(
        id="alert-churn-1",
        severity=AlertSeverity.HIGH,
        type=AlertType.CHURN_RISK,
        title="High Churn Risk Detected",
        description=f"{at_risk_count} high-value customers showing inactivity patterns",
        metrics=(
            AlertMetric("At-Risk Customers", at_risk_count, MetricKind.COUNT),
            AlertMetric("Potential AUM Loss", at_risk_count * avg_balance, MetricKind.CURRENCY),
        ),
        action_label="View Retention Plan",
        created_at=created_at,
    )


def target_miss_alert(
    revenue_health: float,
    total_revenue: float,
    config: MetricsConfig,
    created_at: str,
) -> Optional[CriticalAlert]:
    if revenue_health >= config.target_miss_threshold:
        return None
    return CriticalAlert(
        id="alert-target-1",
        severity=AlertSeverity.MEDIUM,
        type=AlertType.TARGET_MISS,
        title="Monthly Target at Risk",
        description=(
            f"Current revenue pace below {config.target_miss_threshold:g}% of monthly target"
        ),
        metrics=(
            AlertMetric("Achievement", revenue_health, MetricKind.PERCENT),
            AlertMetric("Gap to Target", config.revenue_target - total_revenue, MetricKind.CURRENCY),
        ),
        action_label="Review Strategy",
        created_at=created_at,
    )


def collect_alerts(
    *,
    at_risk_count: int,
    avg_balance: float,
    revenue_health: float,
    total_revenue: float,
    has_records: bool,
    config: MetricsConfig,
    created_at: str,
    external_alerts: Iterable[CriticalAlert] = (),
) -> List[CriticalAlert]:
    alerts: List[CriticalAlert] = []
    churn = churn_risk_alert(at_risk_count, avg_balance, config, created_at)
    if churn is not None:
        alerts.append(churn)
    # An empty book has no pace to miss
    if has_records:
        target = target_miss_alert(revenue_health, total_revenue, config, created_at)
        if target is not None:
            alerts.append(target)
    alerts.extend(external_alerts)
    return alerts
