"""
Executive metrics aggregation: a pure mapping from raw customer, campaign and
loan application records to a single ``ExecutiveMetrics`` value.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Iterable, List, Optional

import numpy as np
import pandas as pd

from bankops.config import MetricsConfig, ServiceIndicators
from bankops.data.records import applications_frame, campaigns_frame, customers_frame
from bankops.metrics.alerts import collect_alerts
from bankops.metrics.helpers import clamp_pct, health_score, pct_change, safe_mean, safe_sum
from bankops.metrics.models import (
    BestPractice,
    CampaignSummary,
    CriticalAlert,
    ExecutiveMetrics,
    HealthScores,
    LifecycleStage,
    ProductRevenue,
    SegmentRevenue,
    SegmentStat,
    TrendPoint,
)
from bankops.metrics.trends import aum_trend, revenue_trend

logger = logging.getLogger(__name__)


def _segment_stats(customers: pd.DataFrame, rng: np.random.Generator, trend_range: float) -> pd.DataFrame:
    """Count and summed balance per segment, in first-seen order."""
    labelled = customers.dropna(subset=["segment"])
    if labelled.empty:
        return pd.DataFrame(columns=["segment", "count", "total_value", "trend"])
    grouped = (
        labelled.groupby("segment", sort=False)
        .agg(count=("balance", "size"), total_value=("balance", "sum"))
        .reset_index()
    )
    grouped["trend"] = rng.uniform(-trend_range, trend_range, size=len(grouped))
    return grouped


def _campaign_summary(campaigns: pd.DataFrame) -> CampaignSummary:
    active = campaigns[campaigns["status"].fillna("").str.lower() == "active"]
    return CampaignSummary(
        total=int(len(campaigns)),
        active=int(len(active)),
        total_reach=safe_sum(campaigns["reach"]),
        avg_active_conversion=safe_mean(active["conversion"]),
    )


def _forecast(trend: List[TrendPoint], window: int, growth: float) -> float:
    recent = [point.value for point in trend[-window:]] if window > 0 else []
    if not recent:
        return 0.0
    return float(np.mean(recent)) * growth


def compute_metrics(
    customers: Optional[Iterable[Any]],
    campaigns: Optional[Iterable[Any]],
    applications: Optional[Iterable[Any]],
    *,
    config: Optional[MetricsConfig] = None,
    indicators: Optional[ServiceIndicators] = None,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    as_of: Optional[datetime] = None,
    external_alerts: Iterable[CriticalAlert] = (),
) -> ExecutiveMetrics:
    """
    Aggregate raw records into the executive dashboard figures.

    Absent collections, ``None`` entries and missing fields are defaulted;
    this function does not raise for malformed input. Trend jitter comes from
    ``rng`` if given, else a generator seeded with ``seed`` (falling back to
    ``config.jitter_seed``) and ``as_of`` defaults to ``config.as_of``, so
    identical inputs give identical output. Callers wanting live periods pass
    the current time explicitly.
    """
    config = config or MetricsConfig()
    indicators = indicators or ServiceIndicators()
    if rng is None:
        rng = np.random.default_rng(config.jitter_seed if seed is None else seed)
    as_of = as_of or config.as_of
    created_at = as_of.isoformat()

    customer_df = customers_frame(customers)
    campaign_df = campaigns_frame(campaigns)
    application_df = applications_frame(applications)

    customer_count = len(customer_df)
    total_customers = max(1, customer_count)
    total_balance = safe_sum(customer_df["balance"])
    avg_balance = total_balance / total_customers

    # Revenue: fee on disbursed/active loans plus margin on deposits
    bearing = application_df[application_df["stage"].isin(list(config.revenue_bearing_stages))]
    loan_revenue = safe_sum(bearing["amount"]) * config.loan_revenue_rate
    total_revenue = loan_revenue + total_balance * config.deposit_revenue_rate
    revenue_target = config.revenue_target
    revenue_ratio = total_revenue / revenue_target * 100 if revenue_target > 0 else 0.0
    revenue_health = clamp_pct(revenue_ratio)

    segment = customer_df["segment"]
    active_customers = int(segment.isin(list(config.active_segments)).sum())
    at_risk_mask = segment == config.at_risk_segment
    at_risk_count = int(at_risk_mask.sum())
    new_customers = math.floor(total_customers * config.new_customer_rate)
    churned_customers = math.floor(total_customers * config.churn_rate)
    active_ratio = active_customers / total_customers * 100
    churn_rate = churned_customers / total_customers * 100
    customer_health = clamp_pct((active_ratio + (100 - churn_rate)) / 2)

    avg_products = float(customer_df["product_count"].sum()) / total_customers

    segments = _segment_stats(customer_df, rng, config.rfm_trend_range)
    segment_rows = segments.to_dict("records")
    revenue_by_segment = [
        SegmentRevenue(segment=row["segment"], revenue=float(row["total_value"]) * config.deposit_revenue_rate)
        for row in segment_rows
    ]
    rfm_distribution = [
        SegmentStat(
            segment=row["segment"],
            count=int(row["count"]),
            total_value=float(row["total_value"]),
            trend=float(row["trend"]),
        )
        for row in segment_rows
    ]

    aum_series = aum_trend(total_balance, as_of, config.trend_months, config.aum_monthly_decay)
    revenue_series = revenue_trend(
        total_revenue,
        revenue_target,
        as_of,
        config.trend_months,
        config.revenue_monthly_decay,
        config.revenue_jitter,
        config.historical_target_ratio,
        rng,
    )
    revenue_previous = revenue_series[-2].value if len(revenue_series) > 1 else 0.0
    aum_previous = aum_series[-2].value if len(aum_series) > 1 else 0.0
    revenue_change = pct_change(total_revenue, revenue_previous) or 0.0
    aum_change = pct_change(total_balance, aum_previous) or 0.0

    revenue_by_product = [
        ProductRevenue(product=name, revenue=total_revenue * share, percentage=share * 100)
        for name, share in config.product_shares
    ]

    vip_mask = (segment == config.vip_segment) & (
        customer_df["balance"] > avg_balance * config.vip_balance_multiple
    )
    vip_customers = int(vip_mask.sum())
    vip_aum = safe_sum(customer_df.loc[vip_mask, "balance"])

    customer_lifecycle = [
        LifecycleStage("Prospect", math.floor(total_customers * config.prospect_multiple)),
        LifecycleStage("New Customer", new_customers),
        LifecycleStage("Active", active_customers),
        LifecycleStage("Loyal", math.floor(active_customers * config.loyal_share_of_active)),
        LifecycleStage("At Risk", at_risk_count),
        LifecycleStage("Churned", churned_customers),
    ]

    churn_risk_mask = at_risk_mask & (customer_df["balance"] > avg_balance)
    cross_sell_mask = (customer_df["product_count"] < config.cross_sell_max_products) & (
        customer_df["balance"] > avg_balance * config.cross_sell_balance_multiple
    )
    cross_sell_opportunities = int(cross_sell_mask.sum())

    alerts = collect_alerts(
        at_risk_count=at_risk_count,
        avg_balance=avg_balance,
        revenue_health=revenue_health,
        total_revenue=total_revenue,
        has_records=customer_count > 0 or len(application_df) > 0,
        config=config,
        created_at=created_at,
        external_alerts=external_alerts,
    )

    logger.debug(
        "Computed metrics: customers=%d revenue=%.2f revenue_health=%.1f alerts=%d",
        customer_count,
        total_revenue,
        revenue_health,
        len(alerts),
    )

    return ExecutiveMetrics(
        total_revenue=total_revenue,
        revenue_target=revenue_target,
        revenue_change=revenue_change,
        revenue_previous_period=revenue_previous,
        total_customers=total_customers,
        new_customers=new_customers,
        active_customers=active_customers,
        churned_customers=churned_customers,
        customer_growth=new_customers / total_customers * 100,
        total_aum=total_balance,
        aum_change=aum_change,
        aum_trend=aum_series,
        avg_products_per_customer=avg_products,
        penetration_change=indicators.penetration_change,
        penetration_target=config.penetration_target,
        health_scores=HealthScores(
            revenue=health_score(revenue_health),
            customer=health_score(customer_health),
            operations=health_score(indicators.operations_health),
            team=health_score(indicators.team_health),
        ),
        revenue_vs_target=revenue_ratio,
        revenue_growth=revenue_change,
        revenue_per_customer=total_revenue / total_customers,
        churn_rate=churn_rate,
        nps=indicators.nps,
        csat=indicators.csat,
        sla_compliance=indicators.sla_compliance,
        avg_response_time=indicators.avg_response_time,
        resolution_rate=indicators.resolution_rate,
        team_productivity=indicators.team_productivity,
        target_achievement=indicators.target_achievement,
        engagement=indicators.engagement,
        critical_alerts=alerts,
        revenue_trend=revenue_series,
        revenue_by_product=revenue_by_product,
        revenue_by_segment=revenue_by_segment,
        rfm_distribution=rfm_distribution,
        customer_lifecycle=customer_lifecycle,
        vip_customers=vip_customers,
        vip_aum=vip_aum,
        vip_percentage=vip_customers / total_customers * 100,
        campaign_summary=_campaign_summary(campaign_df),
        forecast_revenue=_forecast(revenue_series, config.forecast_window, config.forecast_growth),
        forecast_confidence=indicators.forecast_confidence,
        quarter_target=revenue_target * config.quarter_months,
        churn_risk_customers=int(churn_risk_mask.sum()),
        churn_risk_value=safe_sum(customer_df.loc[churn_risk_mask, "balance"]),
        cross_sell_opportunities=cross_sell_opportunities,
        cross_sell_potential=cross_sell_opportunities * avg_balance * config.cross_sell_rate,
        best_practices=[
            BestPractice(description=description, impact=float(impact))
            for description, impact in indicators.best_practices
        ],
    )
