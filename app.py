import bankops.bootstrap_env  # must be first to set env/secrets
from datetime import datetime, timezone

import streamlit as st

from bankops.access.permissions import available_views, build_permission_table
from bankops.config import TABS, load_default_role, load_metrics_config
from bankops.data.sample import SampleDataset, generate_sample
from bankops.metrics.engine import compute_metrics
from bankops.ui.layout import get_auth_session, setup_page, sidebar_role_ui
from bankops.ui.pages import access_control, executive, portfolio
from bankops.ui.pages.context import PageContext


PAGE_RENDERERS = {
    "executive": executive.render,
    "portfolio": portfolio.render,
    "access_control": access_control.render,
}


@st.cache_resource
def _permission_table():
    return build_permission_table()


@st.cache_data(show_spinner=False)
def _load_records(seed: int) -> SampleDataset:
    return generate_sample(seed=seed)


def main() -> None:
    setup_page()
    st.title("Bank Operations Dashboard")

    config = load_metrics_config()
    session = get_auth_session(_permission_table(), load_default_role())
    sidebar_role_ui(session)

    if st.sidebar.button("🔄 Refresh Data"):
        _load_records.clear()  # type: ignore[attr-defined]

    records = _load_records(config.jitter_seed)
    metrics = compute_metrics(
        records.customers,
        records.campaigns,
        records.applications,
        config=config,
        as_of=datetime.now(timezone.utc),
    )
    st.session_state["bo_metrics"] = metrics.to_dict()

    context = PageContext(session=session, metrics=metrics)

    visible = set(available_views(session.capabilities))
    tabs = [tab for tab in TABS if tab.key in visible]
    if not tabs:
        st.info("Your role has no dashboard views.")
        return

    streamlit_tabs = st.tabs([tab.label for tab in tabs])
    for streamlit_tab, tab_config in zip(streamlit_tabs, tabs):
        renderer = PAGE_RENDERERS.get(tab_config.key)
        if renderer is None:
            continue
        with streamlit_tab:
            renderer(context)


if __name__ == "__main__":
    main()
