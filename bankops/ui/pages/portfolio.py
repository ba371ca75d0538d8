from __future__ import annotations

import pandas as pd
import streamlit as st

from bankops.access.permissions import Capability, denial_message
from bankops.ui.components.charts import bar_chart, funnel_chart, render_plotly
from bankops.ui.components.formatting import format_currency, format_percent
from bankops.ui.components.kpi import KpiCard, render_kpi_cards
from bankops.ui.components.tables import render_table
from bankops.ui.pages.context import PageContext


def _rfm_table(context: PageContext) -> pd.DataFrame:
    rows = [
        {
            "Segment": stat.segment,
            "Customers": stat.count,
            "Total Value": stat.total_value,
            "Trend %": stat.trend,
        }
        for stat in context.metrics.rfm_distribution
    ]
    return pd.DataFrame(rows, columns=["Segment", "Customers", "Total Value", "Trend %"])


def render(context: PageContext) -> None:
    m = context.metrics
    session = context.session
    st.subheader("Customer Portfolio")

    render_kpi_cards(
        [
            KpiCard("Active Customers", value=m.active_customers),
            KpiCard("VIP Customers", value=m.vip_customers, help_text=f"{format_percent(m.vip_percentage)} of base"),
            KpiCard("VIP AUM", value=m.vip_aum, currency="Rp", decimals=1),
            KpiCard("Active Campaigns", value=m.campaign_summary.active,
                    help_text=f"{m.campaign_summary.total} total · {format_percent(m.campaign_summary.avg_active_conversion)} avg conversion"),
        ]
    )

    rfm = _rfm_table(context)
    show_values = session.has_capability(Capability.VIEW_SENSITIVE_DATA)
    if not show_values:
        rfm = rfm.drop(columns=["Total Value"])
        st.caption(denial_message(session.get_current_role(), Capability.VIEW_SENSITIVE_DATA))
    render_table(
        rfm,
        column_config={
            "Total Value": {"type": "currency"},
            "Trend %": {"type": "percent", "decimals": 1},
        },
        highlight_cols=["Trend %"],
        allow_export=session.is_authorized(Capability.EXPORT_DATA),
        export_file_name="rfm_distribution.csv",
    )

    left, right = st.columns(2)
    with left:
        segments = pd.DataFrame(
            [{"Segment": s.segment, "Revenue": s.revenue} for s in m.revenue_by_segment]
        )
        if segments.empty:
            st.info("No segmented customers.")
        else:
            render_plotly(bar_chart(segments, x="Segment", y="Revenue", title="Revenue by Segment"))
    with right:
        lifecycle = pd.DataFrame([{"Stage": s.stage, "Customers": s.count} for s in m.customer_lifecycle])
        render_plotly(funnel_chart(lifecycle, x="Customers", y="Stage", title="Customer Lifecycle"))

    st.caption(
        f"{m.cross_sell_opportunities:,} cross-sell opportunities worth "
        f"{format_currency(m.cross_sell_potential)}."
    )
