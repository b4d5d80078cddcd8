"""
Tests for the session-scoped store and view state.
"""
import pytest
import sys
from pathlib import Path
from types import SimpleNamespace

sys.path.insert(0, str(Path(__file__).parent.parent))

from portfolio.store.records import PortfolioStore
from portfolio.ui import state


@pytest.fixture
def session(monkeypatch):
    fake_st = SimpleNamespace(session_state={})
    monkeypatch.setattr(state, "st", fake_st)
    return fake_st.session_state


class TestSessionState:
    """Tests for store ownership and view-state defaults."""

    def test_one_store_per_session(self, session):
        store = state.get_store()

        assert isinstance(store, PortfolioStore)
        assert state.get_store() is store
        assert session[state.STORE_KEY] is store

    def test_defaults_and_filters(self, session):
        state.init_state()
        state.set_state("search_query", "cloud")

        assert state.get_state("status_filter") == "All"
        assert state.get_filters() == {"search": "cloud", "status": "All", "department": "All"}

    def test_reset_keeps_store(self, session):
        store = state.get_store()
        state.set_state("status_filter", "Red")

        state.reset_state()

        assert state.get_state("status_filter") == "All"
        assert state.get_store() is store
