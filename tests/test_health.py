"""
Tests for dashboard health metrics derived from the rollups.
"""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from portfolio.data.fiscal import default_fiscal_config
from portfolio.data.models import Project
from portfolio.metrics.budget import budget_rollup
from portfolio.metrics.health import (
    budget_utilisation,
    contractor_share,
    current_quarter_projects,
    department_mix,
    department_spend_pct,
    rollup_frame,
    status_counts,
)
from portfolio.metrics.workforce import workforce_rollup


class TestBudgetUtilisation:
    """Tests for whole-number budget percentages."""

    def test_empty_defaults(self):
        """No budget: spend 0%, CAPEX/OPEX share falls back to 70/30."""
        result = budget_utilisation(budget_rollup([]))

        assert result == {
            "spend_pct": 0,
            "capex_share_pct": 70,
            "opex_share_pct": 30,
            "capex_spend_pct": 0,
            "opex_spend_pct": 0,
        }

    def test_percentages(self):
        projects = [
            Project(id="1", department="Eng", budget_approved=1000, budget_spent_ytd=400,
                    capex_allocated=600, opex_allocated=400, capex_spent=300, opex_spent=100),
        ]

        result = budget_utilisation(budget_rollup(projects))

        assert result["spend_pct"] == 40
        assert result["capex_share_pct"] == 60
        assert result["opex_share_pct"] == 40
        assert result["capex_spend_pct"] == 50
        assert result["opex_spend_pct"] == 25

    def test_half_rounds_up(self):
        projects = [Project(id="1", department="Eng", budget_approved=200, budget_spent_ytd=1)]

        assert budget_utilisation(budget_rollup(projects))["spend_pct"] == 1


class TestProjectMetrics:
    """Tests for status counts, quarter load and contractor share."""

    def test_status_counts_zero_filled(self):
        projects = [Project(id="1", status="Red"), Project(id="2", status="Red")]

        assert status_counts(projects) == {"Green": 0, "Amber": 0, "Red": 2}

    def test_current_quarter_projects(self):
        fiscal = default_fiscal_config(2024, current_quarter=2)
        projects = [
            Project(id="1", target_launch_quarter="Q2 2024"),
            Project(id="2", target_launch_quarter="Q3 2024"),
            Project(id="3", target_launch_quarter="Q2 2025"),
        ]

        assert [p.id for p in current_quarter_projects(projects, fiscal)] == ["1"]

    def test_contractor_share(self):
        projects = [Project(id="1", employees=3, contractors=1)]

        assert contractor_share(workforce_rollup(projects)) == 25
        assert contractor_share(workforce_rollup([])) == 0


class TestTabularViews:
    """Tests for DataFrame views of the breakdowns."""

    def test_rollup_frame(self):
        rollup = budget_rollup([Project(id="1", department="Eng", budget_approved=10)])

        df = rollup_frame(rollup.department_breakdown)

        assert list(df.columns) == ["department", "allocated", "spent", "remaining", "projects"]
        assert df["allocated"].iloc[0] == 10

    def test_department_spend_pct(self):
        projects = [
            Project(id="1", department="Eng", budget_approved=200, budget_spent_ytd=50),
            Project(id="2", department="Ops", budget_approved=0, budget_spent_ytd=10),
        ]

        df = department_spend_pct(budget_rollup(projects))

        assert df["spend_pct"].tolist() == [25.0, 0.0]

    def test_department_spend_pct_empty(self):
        df = department_spend_pct(budget_rollup([]))

        assert len(df) == 0
        assert "spend_pct" in df.columns

    def test_department_mix(self):
        projects = [
            Project(id="1", department="Eng", employees=3, contractors=1),
            Project(id="2", department="Ops"),
        ]

        df = department_mix(workforce_rollup(projects))

        assert df["total"].tolist() == [4, 0]
        assert df["contractor_pct"].tolist() == [25.0, 0.0]
        assert df["employee_pct"].tolist() == [75.0, 0.0]
