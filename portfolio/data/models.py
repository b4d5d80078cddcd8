"""
Record types held by the portfolio store.

Department and execution phase on a Project are name references, matched
against Department.name / ProjectPhase.name by the store lookups.
"""
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional


@dataclass
class Risk:
    """Risk entry embedded in a single project."""
    id: str
    description: str = ""
    owner: str = ""
    impact: str = "Medium"  # Low | Medium | High
    resolution_timeline: str = ""  # ISO date
    status: str = "Open"  # Open | In Progress | Resolved


@dataclass
class Project:
    """Portfolio project with budget, staffing, schedule and risk data."""
    id: str
    project_name: str = ""
    asset_id: str = ""
    asset_approval_date: str = ""
    department: str = ""
    execution_phase: str = ""
    status: str = "Green"  # Green | Amber | Red

    # Budget
    budget_approved: float = 0
    budget_spent_ytd: float = 0
    budget_remaining: float = 0
    capex_allocated: float = 0
    opex_allocated: float = 0
    capex_spent: float = 0
    opex_spent: float = 0
    capex_remaining: float = 0
    opex_remaining: float = 0

    # Staffing
    employees: int = 0
    contractors: int = 0

    # Schedule
    target_launch_date: str = ""
    target_launch_quarter: str = ""  # e.g. "Q2 2024"

    # Leadership
    product_manager: str = ""
    engineering_manager: str = ""
    project_manager: str = ""

    # Narrative
    previous_month_progress: str = ""
    upcoming_month_plan: str = ""
    executive_guidance: str = ""
    status_justification: Optional[str] = None

    risks: List[Risk] = field(default_factory=list)

    # Audit
    created_by: str = ""
    created_at: str = ""
    updated_at: str = ""

    @property
    def total_workforce(self) -> int:
        return self.employees + self.contractors

    @property
    def open_risks(self) -> List[Risk]:
        return [r for r in self.risks if r.status != "Resolved"]


@dataclass
class User:
    """Dashboard user account."""
    id: str
    name: str = ""
    email: str = ""
    role: str = "Team Member"  # Admin | Manager | Team Member
    department: str = ""
    is_active: bool = True
    created_at: str = ""
    last_login: Optional[str] = None
    needs_password_reset: bool = False
    is_first_login: bool = False


@dataclass
class Department:
    id: str
    name: str = ""
    description: str = ""
    is_active: bool = True
    created_at: str = ""


@dataclass
class ProjectPhase:
    id: str
    name: str = ""
    order: int = 0
    is_active: bool = True


@dataclass
class ColumnConfig:
    key: str
    label: str = ""
    visible: bool = True
    order: int = 0


@dataclass
class QuarterWindow:
    """Start/end ISO dates of one fiscal quarter."""
    start: str
    end: str


@dataclass
class FiscalConfig:
    fiscal_year: int
    current_quarter: int  # 1-4
    q1: QuarterWindow
    q2: QuarterWindow
    q3: QuarterWindow
    q4: QuarterWindow

    @property
    def quarters(self) -> Dict[str, QuarterWindow]:
        return {"q1": self.q1, "q2": self.q2, "q3": self.q3, "q4": self.q4}

    @property
    def current_quarter_label(self) -> str:
        return f"Q{self.current_quarter} {self.fiscal_year}"


# =============================================================================
# FIELD HELPERS
# =============================================================================

# Set by the store on create; never taken from caller input
SYSTEM_FIELDS = {"id", "created_at", "updated_at"}


def field_names(record_type) -> List[str]:
    """Attribute names of a record dataclass, in declaration order."""
    return [f.name for f in fields(record_type)]


def split_known_fields(record_type, data: Dict[str, Any]) -> tuple:
    """
    Split a mapping into (known, unknown) against a record type.
    Returns (dict of known fields, sorted list of unknown keys).
    """
    names = set(field_names(record_type))
    known = {k: v for k, v in data.items() if k in names}
    unknown = sorted(k for k in data if k not in names)
    return known, unknown
