"""
Value types produced by the executive metrics engine.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class AlertSeverity(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class AlertType(str, Enum):
    CHURN_RISK = "CHURN_RISK"
    TARGET_MISS = "TARGET_MISS"
    # Reserved for collaborator-sourced alerts
    SLA_BREACH = "SLA_BREACH"
    COMPLIANCE = "COMPLIANCE"
    TEAM_PERFORMANCE = "TEAM_PERFORMANCE"


class MetricKind(str, Enum):
    COUNT = "count"
    CURRENCY = "currency"
    PERCENT = "percent"


@dataclass(frozen=True)
class AlertMetric:
    label: str
    value: float
    kind: MetricKind = MetricKind.COUNT


@dataclass(frozen=True)
class CriticalAlert:
    id: str
    severity: AlertSeverity
    type: AlertType
    title: str
    description: str
    created_at: str
    metrics: Tuple[AlertMetric, ...] = ()
    action_label: Optional[str] = None


@dataclass(frozen=True)
class HealthScores:
    revenue: int
    customer: int
    operations: int
    team: int


@dataclass(frozen=True)
class TrendPoint:
    period: str
    value: float
    target: Optional[float] = None


@dataclass(frozen=True)
class ProductRevenue:
    product: str
    revenue: float
    percentage: float


@dataclass(frozen=True)
class SegmentRevenue:
    segment: str
    revenue: float


@dataclass(frozen=True)
class SegmentStat:
    segment: str
    count: int
    total_value: float
    trend: float


@dataclass(frozen=True)
class LifecycleStage:
    stage: str
    count: int


@dataclass(frozen=True)
class CampaignSummary:
    total: int
    active: int
    total_reach: float
    avg_active_conversion: float


@dataclass(frozen=True)
class BestPractice:
    description: str
    impact: float  # percentage uplift


@dataclass(frozen=True)
class ExecutiveMetrics:
    # Hero KPIs
    total_revenue: float
    revenue_target: float
    revenue_change: float
    revenue_previous_period: float
    total_customers: int
    new_customers: int
    active_customers: int
    churned_customers: int
    customer_growth: float
    total_aum: float
    aum_change: float
    aum_trend: List[TrendPoint]
    avg_products_per_customer: float
    penetration_change: float
    penetration_target: float

    health_scores: HealthScores

    # Health indicators
    revenue_vs_target: float
    revenue_growth: float
    revenue_per_customer: float
    churn_rate: float
    nps: float
    csat: float
    sla_compliance: float
    avg_response_time: float
    resolution_rate: float
    team_productivity: float
    target_achievement: float
    engagement: float

    critical_alerts: List[CriticalAlert]

    # Revenue & portfolio analytics
    revenue_trend: List[TrendPoint]
    revenue_by_product: List[ProductRevenue]
    revenue_by_segment: List[SegmentRevenue]
    rfm_distribution: List[SegmentStat]
    customer_lifecycle: List[LifecycleStage]
    vip_customers: int
    vip_aum: float
    vip_percentage: float
    campaign_summary: CampaignSummary

    # Predictive insights
    forecast_revenue: float
    forecast_confidence: float
    quarter_target: float
    churn_risk_customers: int
    churn_risk_value: float
    cross_sell_opportunities: int
    cross_sell_potential: float

    best_practices: List[BestPractice]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a JSON-serialisable dictionary (enums flattened to their
        string values) for session_state or export.
        """
        return _plain(asdict(self))


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value
