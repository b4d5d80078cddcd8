"""
Project list filtering and sorting.
"""
from typing import Any, Iterable, List, Optional

import pandas as pd

from portfolio.config import DATE_SORT_FIELDS, SEARCH_FIELDS
from portfolio.data.models import Project
from portfolio.data.parsing import coerce_number

ALL = "All"


def matches_search(project: Project, search: str) -> bool:
    """Case-insensitive substring match on name, asset id, department and leadership."""
    if not search:
        return True
    needle = search.lower()
    return any(needle in str(getattr(project, col, "") or "").lower() for col in SEARCH_FIELDS)


def filter_projects(projects: Iterable[Project],
                    search: str = "",
                    status: Optional[str] = ALL,
                    department: Optional[str] = ALL) -> List[Project]:
    """
    Apply the project list filters. `"All"` or None disables a filter;
    status and department match exactly.
    """
    result = []
    for project in projects:
        if not matches_search(project, search):
            continue
        if status not in (None, ALL) and project.status != status:
            continue
        if department not in (None, ALL) and project.department != department:
            continue
        result.append(project)
    return result


def _sort_key(field: str):
    if field in DATE_SORT_FIELDS:
        def key(project: Project) -> Any:
            ts = pd.to_datetime(getattr(project, field), errors="coerce")
            # Undated projects sort last ascending
            return (pd.isna(ts), ts if not pd.isna(ts) else pd.Timestamp.min)
        return key

    if field == "budget_approved":
        return lambda project: coerce_number(project.budget_approved)

    def key(project: Project) -> Any:
        value = getattr(project, field)
        # Unset optional fields sort last ascending
        if value is None:
            return (True, "")
        return (False, value.lower() if isinstance(value, str) else value)
    return key


def sort_projects(projects: Iterable[Project], field: str = "project_name", descending: bool = False) -> List[Project]:
    """Sort by a project field: dates chronologically, budget numerically, text case-insensitively."""
    if field not in Project.__dataclass_fields__:
        raise ValueError(f"Unknown sort field: {field}")
    return sorted(projects, key=_sort_key(field), reverse=descending)
