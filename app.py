"""
Portfolio Admin Dashboard

Main entry point for Streamlit app.
"""
import streamlit as st
from pathlib import Path

# Page config must be first Streamlit command
st.set_page_config(
    page_title="Portfolio Dashboard",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Add repo root to path
import sys
sys.path.insert(0, str(Path(__file__).parent))

from portfolio.config import PROJECT_STATUSES, configure_logging
from portfolio.data.filters import ALL, filter_projects, sort_projects
from portfolio.metrics.health import (
    budget_utilisation,
    contractor_share,
    current_quarter_projects,
    department_mix,
    department_spend_pct,
    status_counts,
)
from portfolio.ui.state import get_filters, get_state, get_store, init_state, set_state


def main():
    """Main app entry point."""
    configure_logging()
    init_state()
    store = get_store()

    st.title("Portfolio Dashboard")
    fiscal = store.fiscal_config
    st.caption(f"Fiscal year {fiscal.fiscal_year} · current quarter {fiscal.current_quarter_label}")

    budget = store.budget_rollup()
    workforce = store.workforce_rollup()
    utilisation = budget_utilisation(budget)

    # Budget overview
    st.markdown("### Budget Overview")
    b1, b2, b3, b4 = st.columns(4)
    with b1:
        st.metric("Total Budget", f"${budget.total_budget:,.0f}")
    with b2:
        st.metric("Actual Spend", f"${budget.actual_spend:,.0f}", f"{utilisation['spend_pct']}% used")
    with b3:
        st.metric("CAPEX", f"${budget.capex:,.0f}", f"{utilisation['capex_share_pct']}% of budget")
    with b4:
        st.metric("OPEX", f"${budget.opex:,.0f}", f"{utilisation['opex_share_pct']}% of budget")

    spend_df = department_spend_pct(budget)
    if len(spend_df) > 0:
        st.dataframe(spend_df, use_container_width=True, hide_index=True)
    else:
        st.info("No projects yet.")

    # Project metrics
    st.markdown("### Project Metrics")
    counts = status_counts(store.projects)
    m1, m2, m3, m4 = st.columns(4)
    with m1:
        st.metric("Active Projects", len(store.projects))
    with m2:
        st.metric("Launching This Quarter", len(current_quarter_projects(store.projects, fiscal)))
    with m3:
        st.metric("Workforce", f"{workforce.total:,}", f"{contractor_share(workforce)}% contractors")
    with m4:
        st.metric("Green / Amber / Red", " / ".join(str(counts[s]) for s in PROJECT_STATUSES))

    mix_df = department_mix(workforce)
    if len(mix_df) > 0:
        st.dataframe(mix_df, use_container_width=True, hide_index=True)

    # Project list
    st.markdown("---")
    st.markdown("### Projects")
    f1, f2, f3 = st.columns([2, 1, 1])
    with f1:
        set_state("search_query", st.text_input("Search", value=get_state("search_query")))
    with f2:
        statuses = [ALL] + list(PROJECT_STATUSES)
        set_state("status_filter", st.selectbox("Status", statuses, index=statuses.index(get_state("status_filter"))))
    with f3:
        departments = [ALL] + [d.name for d in store.active_departments()]
        current = get_state("department_filter")
        set_state("department_filter", st.selectbox(
            "Department", departments, index=departments.index(current) if current in departments else 0
        ))

    projects = sort_projects(
        filter_projects(store.projects, **get_filters()),
        field=get_state("sort_field"),
        descending=get_state("sort_descending"),
    )
    columns = [c for c in store.visible_columns() if c.key in projects[0].__dataclass_fields__] if projects else []
    rows = [{c.label: getattr(p, c.key) for c in columns} for p in projects]
    st.caption(f"{len(projects)} of {len(store.projects)} projects")
    if rows:
        st.dataframe(rows, use_container_width=True, hide_index=True)


if __name__ == "__main__":
    main()
