"""
Budget rollup: portfolio totals, CAPEX/OPEX split and department breakdown.

Recomputed from scratch on every call; source records are never modified.
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from portfolio.data.models import Project
from portfolio.data.semantic import column_total, department_rollup, frame_records, projects_frame

BUDGET_COLS = [
    "budget_approved",
    "budget_spent_ytd",
    "capex_allocated",
    "opex_allocated",
    "capex_spent",
    "opex_spent",
]


@dataclass
class DepartmentBudget:
    department: Optional[str]
    allocated: float
    spent: float
    remaining: float
    projects: int


@dataclass
class BudgetRollup:
    """Portfolio-wide budget view."""
    total_budget: float = 0
    actual_spend: float = 0
    capex: float = 0
    opex: float = 0
    capex_spent: float = 0
    opex_spent: float = 0
    department_breakdown: List[DepartmentBudget] = field(default_factory=list)

    @property
    def remaining(self) -> float:
        return self.total_budget - self.actual_spend


def budget_rollup(projects: Iterable[Project]) -> BudgetRollup:
    """
    Sum budget fields across projects and break them down by department.

    Departments appear in the order they are first seen. An empty collection
    gives all zeros and no breakdown.
    """
    df = projects_frame(projects, BUDGET_COLS)

    if len(df) == 0:
        return BudgetRollup()

    by_dept = department_rollup(
        df,
        allocated=("budget_approved", "sum"),
        spent=("budget_spent_ytd", "sum"),
        projects=("budget_approved", "count"),
    )
    by_dept["remaining"] = by_dept["allocated"] - by_dept["spent"]

    breakdown = [
        DepartmentBudget(
            department=row["department"],
            allocated=row["allocated"],
            spent=row["spent"],
            remaining=row["remaining"],
            projects=int(row["projects"]),
        )
        for row in frame_records(by_dept)
    ]

    return BudgetRollup(
        total_budget=column_total(df, "budget_approved"),
        actual_spend=column_total(df, "budget_spent_ytd"),
        capex=column_total(df, "capex_allocated"),
        opex=column_total(df, "opex_allocated"),
        capex_spent=column_total(df, "capex_spent"),
        opex_spent=column_total(df, "opex_spent"),
        department_breakdown=breakdown,
    )
