from __future__ import annotations

import streamlit as st

from bankops.access.permissions import (
    CAPABILITY_LABELS,
    ROLE_METADATA,
    Capability,
    available_views,
    denial_message,
    permission_matrix,
)
from bankops.config import TABS
from bankops.ui.pages.context import PageContext


def render(context: PageContext) -> None:
    session = context.session
    role = session.get_current_role()
    st.subheader("Access Control")
    st.markdown(f"Active role: **{ROLE_METADATA[role].label}**")

    granted = [CAPABILITY_LABELS[c] for c in Capability if session.has_capability(c)]
    st.write("Capabilities: " + (", ".join(granted) if granted else "none"))

    labels = {tab.key: tab.label for tab in TABS}
    views = [labels[key] for key in available_views(session.capabilities)]
    st.write("Visible views: " + ", ".join(views))

    if not session.is_authorized(Capability.MANAGE_ROLES):
        if session.has_capability(Capability.MANAGE_ROLES):
            st.warning("Complete step-up verification to view the permission matrix.")
        else:
            st.caption(denial_message(role, Capability.MANAGE_ROLES))
        return

    matrix = permission_matrix(session.table)
    st.dataframe(matrix, use_container_width=True)
