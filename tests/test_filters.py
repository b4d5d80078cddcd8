"""
Tests for project list filtering and sorting.
"""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from portfolio.data.filters import filter_projects, sort_projects
from portfolio.data.models import Project


@pytest.fixture
def projects():
    return [
        Project(id="1", project_name="Mobile App", asset_id="AST-001", department="Engineering",
                status="Green", budget_approved=300, target_launch_date="2024-06-30",
                product_manager="Sarah Johnson"),
        Project(id="2", project_name="cloud Migration", asset_id="AST-002", department="Infrastructure",
                status="Amber", budget_approved=1200, target_launch_date="2024-03-15"),
        Project(id="3", project_name="Data Lake", asset_id="AST-003", department="Engineering",
                status="Red", budget_approved=50, target_launch_date=""),
    ]


class TestFilterProjects:
    """Tests for search, status and department filters."""

    def test_no_filters(self, projects):
        assert filter_projects(projects) == projects

    def test_search_is_case_insensitive(self, projects):
        result = filter_projects(projects, search="CLOUD")

        assert [p.id for p in result] == ["2"]

    def test_search_matches_asset_and_leadership(self, projects):
        assert [p.id for p in filter_projects(projects, search="ast-003")] == ["3"]
        assert [p.id for p in filter_projects(projects, search="sarah")] == ["1"]

    def test_status_and_department(self, projects):
        assert [p.id for p in filter_projects(projects, status="Red")] == ["3"]
        assert [p.id for p in filter_projects(projects, department="Engineering")] == ["1", "3"]
        assert filter_projects(projects, status="Green", department="Infrastructure") == []

    def test_department_exact_match(self, projects):
        assert filter_projects(projects, department="engineering") == []


class TestSortProjects:
    """Tests for field-aware sorting."""

    def test_name_case_insensitive(self, projects):
        result = sort_projects(projects, "project_name")

        assert [p.id for p in result] == ["2", "3", "1"]

    def test_budget_descending(self, projects):
        result = sort_projects(projects, "budget_approved", descending=True)

        assert [p.id for p in result] == ["2", "1", "3"]

    def test_dates_chronological_undated_last(self, projects):
        result = sort_projects(projects, "target_launch_date")

        assert [p.id for p in result] == ["2", "1", "3"]

    def test_optional_field_with_missing_values(self):
        """Unset optional values sort after set ones instead of failing."""
        projects = [
            Project(id="1", status_justification=None),
            Project(id="2", status_justification="Late vendor"),
            Project(id="3", status_justification="budget freeze"),
        ]

        result = sort_projects(projects, "status_justification")

        assert [p.id for p in result] == ["3", "2", "1"]
        assert [p.id for p in sort_projects(projects, "status_justification", descending=True)] == ["1", "2", "3"]

    def test_unknown_field(self, projects):
        with pytest.raises(ValueError):
            sort_projects(projects, "colour")
