"""
Session state management for Streamlit app.

Each browser session owns exactly one PortfolioStore.
"""
import streamlit as st
from typing import Any, Dict

from portfolio.data.seed import build_store
from portfolio.store.records import PortfolioStore


# =============================================================================
# STATE KEYS
# =============================================================================

STORE_KEY = "portfolio_store"

DEFAULTS = {
    # Navigation
    "current_view": "dashboard",

    # Project list filters
    "search_query": "",
    "status_filter": "All",
    "department_filter": "All",
    "sort_field": "project_name",
    "sort_descending": False,
}


# =============================================================================
# STATE HELPERS
# =============================================================================

def init_state():
    """Initialize the session store and view-state keys with defaults."""
    if STORE_KEY not in st.session_state:
        st.session_state[STORE_KEY] = build_store()
    for key, default in DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = default


def get_store() -> PortfolioStore:
    """The session's store, created on first access."""
    init_state()
    return st.session_state[STORE_KEY]


def get_state(key: str) -> Any:
    """Get state value with default fallback."""
    init_state()
    return st.session_state.get(key, DEFAULTS.get(key))


def set_state(key: str, value: Any):
    """Set state value."""
    st.session_state[key] = value


def reset_state():
    """Reset view state to defaults; the store is kept."""
    for key, default in DEFAULTS.items():
        st.session_state[key] = default


def get_filters() -> Dict[str, Any]:
    """Current project list filter values, keyed like filter_projects arguments."""
    return {
        "search": get_state("search_query"),
        "status": get_state("status_filter"),
        "department": get_state("department_filter"),
    }
