from __future__ import annotations

import pandas as pd
import streamlit as st

from bankops.access.permissions import Capability
from bankops.ui.components.alerts import render_alert_cards
from bankops.ui.components.charts import bar_chart, render_plotly, trend_with_target
from bankops.ui.components.formatting import format_currency, format_percent, format_signed_percent
from bankops.ui.components.kpi import KpiCard, render_kpi_cards
from bankops.ui.components.tables import render_table
from bankops.ui.pages.context import PageContext


def _hero_cards(context: PageContext) -> list[KpiCard]:
    m = context.metrics
    return [
        KpiCard(
            "Total Revenue",
            value=m.total_revenue,
            currency="Rp",
            decimals=1,
            delta=m.revenue_change,
            help_text=f"Target {format_currency(m.revenue_target)} · {format_percent(m.revenue_vs_target)} achieved",
        ),
        KpiCard(
            "Customers",
            value=m.total_customers,
            delta=m.customer_growth,
            help_text=f"{m.new_customers:,} new · {m.churned_customers:,} churned",
        ),
        KpiCard("Total AUM", value=m.total_aum, currency="Rp", decimals=1, delta=m.aum_change),
        KpiCard(
            "Products / Customer",
            value=m.avg_products_per_customer,
            decimals=2,
            delta=m.penetration_change,
            delta_format="abs",
            help_text=f"Target {m.penetration_target:g}",
        ),
    ]


def _health_cards(context: PageContext) -> list[KpiCard]:
    scores = context.metrics.health_scores
    return [
        KpiCard("Revenue Health", value=scores.revenue),
        KpiCard("Customer Health", value=scores.customer),
        KpiCard("Operations Health", value=scores.operations),
        KpiCard("Team Health", value=scores.team),
    ]


def render(context: PageContext) -> None:
    m = context.metrics
    st.subheader("Executive Overview")
    render_kpi_cards(_hero_cards(context))

    st.markdown("#### Health Scores")
    render_kpi_cards(_health_cards(context))

    st.markdown("#### Critical Alerts")
    render_alert_cards(m.critical_alerts)

    left, right = st.columns(2)
    with left:
        render_plotly(trend_with_target(m.revenue_trend, title="Revenue Trend", yaxis_title="Rp"))
    with right:
        render_plotly(trend_with_target(m.aum_trend, title="AUM Trend", yaxis_title="Rp"))

    products = pd.DataFrame(
        [{"Product": p.product, "Revenue": p.revenue, "Share": p.percentage} for p in m.revenue_by_product]
    )
    if not products.empty:
        render_plotly(bar_chart(products, x="Product", y="Revenue", title="Revenue by Product"))

    st.markdown("#### Predictive Insights")
    render_kpi_cards(
        [
            KpiCard(
                "Forecast Revenue",
                value=m.forecast_revenue,
                currency="Rp",
                decimals=1,
                help_text=f"Confidence {format_percent(m.forecast_confidence, 0)} · quarter target {format_currency(m.quarter_target)}",
            ),
            KpiCard(
                "Churn Risk",
                value=m.churn_risk_customers,
                help_text=f"{format_currency(m.churn_risk_value)} balance at risk",
            ),
            KpiCard(
                "Cross-sell Opportunities",
                value=m.cross_sell_opportunities,
                help_text=f"{format_currency(m.cross_sell_potential)} potential revenue",
            ),
        ],
        columns=3,
    )

    st.markdown("#### Service Indicators")
    indicators = pd.DataFrame(
        [
            {"Indicator": "Churn Rate", "Value": m.churn_rate},
            {"Indicator": "SLA Compliance", "Value": m.sla_compliance},
            {"Indicator": "Resolution Rate", "Value": m.resolution_rate},
            {"Indicator": "CSAT", "Value": m.csat},
            {"Indicator": "Team Productivity", "Value": m.team_productivity},
            {"Indicator": "Target Achievement", "Value": m.target_achievement},
            {"Indicator": "Engagement", "Value": m.engagement},
        ]
    )
    render_table(
        indicators,
        column_config={"Value": {"type": "percent", "decimals": 1}},
        height=290,
        allow_export=context.session.is_authorized(Capability.EXPORT_DATA),
        export_file_name="service_indicators.csv",
    )
    st.caption(f"NPS {m.nps:g} · average response time {m.avg_response_time:g} min")

    if m.best_practices:
        st.markdown("#### Best Practices")
        for practice in m.best_practices:
            st.success(f"🏆 {practice.description} {format_signed_percent(practice.impact, 0)}")
