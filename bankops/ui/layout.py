"""
Layout helpers for the Streamlit application (page setup, sidebar role controls).
"""

from __future__ import annotations

import streamlit as st

from bankops.access.permissions import (
    ROLE_METADATA,
    AuthorizationSession,
    PermissionTable,
    Role,
)

SESSION_KEY = "bo_auth_session"


def setup_page() -> None:
    """Set Streamlit page configuration."""
    st.set_page_config(
        page_title="Bank Operations Dashboard",
        layout="wide",
        page_icon=":bank:",
    )


def get_auth_session(table: PermissionTable, default_role: Role) -> AuthorizationSession:
    """One AuthorizationSession per Streamlit user session."""
    session = st.session_state.get(SESSION_KEY)
    if session is None:
        session = AuthorizationSession(table, role=default_role)
        st.session_state[SESSION_KEY] = session
    return session


def sidebar_role_ui(session: AuthorizationSession) -> None:
    st.sidebar.header("Role")
    roles = list(Role)
    current = session.get_current_role()
    selected = st.sidebar.selectbox(
        "Active role",
        options=roles,
        index=roles.index(current),
        format_func=lambda r: ROLE_METADATA[r].label,
        key="bo_role_select",
    )
    if selected != current:
        session.set_role(selected)
    st.sidebar.caption(ROLE_METADATA[selected].description)

    if not session.requires_step_up():
        return

    if session.is_step_up_verified():
        st.sidebar.success("Step-up verification complete")
        if st.sidebar.button("Revoke verification"):
            session.set_step_up_verified(False)
            st.rerun()
        return

    st.sidebar.warning("This role requires step-up verification for elevated actions.")
    # Stand-in for the external MFA flow
    if st.sidebar.button("Verify (MFA)", type="primary"):
        session.set_step_up_verified(True)
        st.rerun()
