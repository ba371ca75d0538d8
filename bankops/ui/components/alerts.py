from __future__ import annotations

from typing import Sequence

import streamlit as st

from bankops.metrics.models import AlertSeverity, CriticalAlert
from bankops.ui.components.formatting import format_alert_metric

SEVERITY_ICONS = {
    AlertSeverity.HIGH: "🔴",
    AlertSeverity.MEDIUM: "🟠",
    AlertSeverity.LOW: "🟡",
}


def render_alert_cards(alerts: Sequence[CriticalAlert]) -> None:
    if not alerts:
        st.success("No critical alerts.")
        return

    for alert in alerts:
        with st.container(border=True):
            icon = SEVERITY_ICONS.get(alert.severity, "")
            st.markdown(f"{icon} **{alert.title}** · `{alert.type.value}`")
            st.caption(alert.description)
            if alert.metrics:
                cols = st.columns(len(alert.metrics))
                for col, metric in zip(cols, alert.metrics):
                    with col:
                        st.metric(label=metric.label, value=format_alert_metric(metric))
            if alert.action_label:
                st.button(alert.action_label, key=f"alert_action_{alert.id}")
