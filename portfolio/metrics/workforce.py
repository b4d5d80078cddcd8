"""
Workforce rollup: employee and contractor headcount by department.
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from portfolio.data.models import Project
from portfolio.data.semantic import column_total, department_rollup, frame_records, projects_frame

HEADCOUNT_COLS = ["employees", "contractors"]


@dataclass
class DepartmentWorkforce:
    department: Optional[str]
    employees: int
    contractors: int

    @property
    def total(self) -> int:
        return self.employees + self.contractors


@dataclass
class WorkforceRollup:
    """Portfolio-wide headcount view."""
    employees: int = 0
    contractors: int = 0
    department_breakdown: List[DepartmentWorkforce] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.employees + self.contractors


def workforce_rollup(projects: Iterable[Project]) -> WorkforceRollup:
    """Sum headcount across projects, grouped like the budget rollup."""
    df = projects_frame(projects, HEADCOUNT_COLS)

    if len(df) == 0:
        return WorkforceRollup()

    for col in HEADCOUNT_COLS:
        df[col] = df[col].astype("int64")

    by_dept = department_rollup(
        df,
        employees=("employees", "sum"),
        contractors=("contractors", "sum"),
    )

    breakdown = [
        DepartmentWorkforce(
            department=row["department"],
            employees=row["employees"],
            contractors=row["contractors"],
        )
        for row in frame_records(by_dept)
    ]

    return WorkforceRollup(
        employees=column_total(df, "employees"),
        contractors=column_total(df, "contractors"),
        department_breakdown=breakdown,
    )
