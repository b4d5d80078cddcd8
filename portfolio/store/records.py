"""
In-memory record store for the portfolio dashboard.

One PortfolioStore is owned by the composition root (one per Streamlit
session) and passed to whatever needs it. Mutators are synchronous and
visible to the next read. Records handed out are never mutated in place;
updates swap in a new record.
"""
import logging
import uuid
from dataclasses import asdict, is_dataclass, replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from portfolio.config import config
from portfolio.data.models import (
    SYSTEM_FIELDS,
    ColumnConfig,
    Department,
    FiscalConfig,
    Project,
    ProjectPhase,
    QuarterWindow,
    Risk,
    User,
    split_known_fields,
)
from portfolio.data.fiscal import default_fiscal_config
from portfolio.exceptions import RecordNotFoundError
from portfolio.metrics.budget import BudgetRollup, budget_rollup
from portfolio.metrics.workforce import WorkforceRollup, workforce_rollup
from portfolio.store.derived import (
    BUDGET_FIELDS,
    HEADCOUNT_FIELDS,
    coerce_project_numbers,
    recompute_project_derived,
    with_default_allocations,
)

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return str(uuid.uuid4())


def _as_dict(value: Any) -> Dict[str, Any]:
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return dict(value)


def _build_records(record_type, items: Iterable[Any]) -> List[Any]:
    """Accept dataclass records or plain mappings for configuration lists."""
    records = []
    for item in items:
        if isinstance(item, record_type):
            records.append(item)
        else:
            known, _ = split_known_fields(record_type, dict(item))
            records.append(record_type(**known))
    return records


def _build_fiscal_config(value: Any) -> FiscalConfig:
    if isinstance(value, FiscalConfig):
        return value
    data = dict(value)
    quarters = data.pop("quarters", None) or {}
    for key, window in quarters.items():
        data[key] = window
    for key in ("q1", "q2", "q3", "q4"):
        if not isinstance(data[key], QuarterWindow):
            data[key] = QuarterWindow(**dict(data[key]))
    return FiscalConfig(
        fiscal_year=int(data["fiscal_year"]),
        current_quarter=int(data["current_quarter"]),
        q1=data["q1"],
        q2=data["q2"],
        q3=data["q3"],
        q4=data["q4"],
    )


class PortfolioStore:
    """
    Authoritative collections plus CRUD that keeps derived fields correct.

    Args:
        projects, users, departments, project_phases, column_config:
            Initial collections (records are taken as-is).
        fiscal_config: Initial fiscal calendar; calendar year by default.
        strict: Raise RecordNotFoundError on unknown identities instead of
            logging and ignoring them. Defaults to config.strict_record_ids.
        clock: Returns the current time as an ISO string.
        id_factory: Returns a fresh identity string.
    """

    def __init__(
        self,
        projects: Optional[Iterable[Project]] = None,
        users: Optional[Iterable[User]] = None,
        departments: Optional[Iterable[Department]] = None,
        project_phases: Optional[Iterable[ProjectPhase]] = None,
        column_config: Optional[Iterable[ColumnConfig]] = None,
        fiscal_config: Optional[FiscalConfig] = None,
        strict: Optional[bool] = None,
        clock: Optional[Callable[[], str]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._projects: List[Project] = [recompute_project_derived(p) for p in (projects or [])]
        self._users: List[User] = list(users or [])
        self._departments: List[Department] = list(departments or [])
        self._project_phases: List[ProjectPhase] = list(project_phases or [])
        self._column_config: List[ColumnConfig] = list(column_config or [])
        self._fiscal_config: FiscalConfig = fiscal_config or default_fiscal_config()
        self._selected_project: Optional[Project] = None

        self.strict = config.strict_record_ids if strict is None else strict
        self._clock = clock or _utc_now_iso
        self._id_factory = id_factory or _new_id

    # =========================================================================
    # READ ACCESS
    # =========================================================================

    @property
    def projects(self) -> Tuple[Project, ...]:
        return tuple(self._projects)

    @property
    def users(self) -> Tuple[User, ...]:
        return tuple(self._users)

    @property
    def departments(self) -> Tuple[Department, ...]:
        return tuple(self._departments)

    @property
    def project_phases(self) -> Tuple[ProjectPhase, ...]:
        return tuple(self._project_phases)

    @property
    def column_config(self) -> Tuple[ColumnConfig, ...]:
        return tuple(self._column_config)

    @property
    def fiscal_config(self) -> FiscalConfig:
        return self._fiscal_config

    @property
    def selected_project(self) -> Optional[Project]:
        return self._selected_project

    def get_project(self, project_id: str) -> Optional[Project]:
        idx = self._index_of(self._projects, project_id)
        return None if idx is None else self._projects[idx]

    def get_user(self, user_id: str) -> Optional[User]:
        idx = self._index_of(self._users, user_id)
        return None if idx is None else self._users[idx]

    def get_department(self, department_id: str) -> Optional[Department]:
        idx = self._index_of(self._departments, department_id)
        return None if idx is None else self._departments[idx]

    def find_department(self, name: str) -> Optional[Department]:
        """Resolve a project's department name reference."""
        return next((d for d in self._departments if d.name == name), None)

    def find_phase(self, name: str) -> Optional[ProjectPhase]:
        """Resolve a project's execution phase name reference."""
        return next((p for p in self._project_phases if p.name == name), None)

    def active_departments(self) -> List[Department]:
        return [d for d in self._departments if d.is_active]

    def active_phases(self) -> List[ProjectPhase]:
        return sorted((p for p in self._project_phases if p.is_active), key=lambda p: p.order)

    def visible_columns(self) -> List[ColumnConfig]:
        return sorted((c for c in self._column_config if c.visible), key=lambda c: c.order)

    def select_project(self, project_id: Optional[str]) -> Optional[Project]:
        """Set (or clear, with None) the currently selected project."""
        if project_id is None:
            self._selected_project = None
            return None
        project = self.get_project(project_id)
        if project is None:
            self._not_found("Project", project_id)
        self._selected_project = project
        return project

    # =========================================================================
    # ROLLUPS
    # =========================================================================

    def budget_rollup(self) -> BudgetRollup:
        return budget_rollup(self._projects)

    def workforce_rollup(self) -> WorkforceRollup:
        return workforce_rollup(self._projects)

    # =========================================================================
    # PROJECTS
    # =========================================================================

    def create_project(self, data: Mapping[str, Any], created_by: Optional[str] = None) -> Project:
        """
        Create a project from caller input.

        Numeric fields are coerced (invalid or absent -> 0), missing CAPEX/OPEX
        allocations take the default split and remaining fields are derived.
        Duplicate names and asset ids are allowed.
        """
        known = self._known_fields(Project, data)
        for col in BUDGET_FIELDS + HEADCOUNT_FIELDS:
            known.setdefault(col, None)
        known = coerce_project_numbers(with_default_allocations(known))
        known["risks"] = self._build_risks(known.get("risks") or [])
        if created_by is not None:
            known["created_by"] = created_by

        now = self._clock()
        project = recompute_project_derived(
            Project(id=self._id_factory(), created_at=now, updated_at=now, **known)
        )
        self._projects.append(project)
        logger.info("Created project %s (%s)", project.id, project.project_name)
        return project

    def update_project(self, project_id: str, changes: Mapping[str, Any]) -> Optional[Project]:
        """
        Merge `changes` into a project and refresh updated_at.

        Unknown ids are ignored (or raise in strict mode). Returns the new
        record, or None when nothing was updated.
        """
        idx = self._index_of(self._projects, project_id)
        if idx is None:
            self._not_found("Project", project_id)
            return None

        known = coerce_project_numbers(self._known_fields(Project, changes))
        if "risks" in known:
            known["risks"] = self._build_risks(known["risks"] or [])

        updated = recompute_project_derived(
            replace(self._projects[idx], **known, updated_at=self._clock())
        )
        self._projects[idx] = updated

        if self._selected_project is not None and self._selected_project.id == project_id:
            self._selected_project = updated

        logger.info("Updated project %s fields=%s", project_id, sorted(known))
        return updated

    def delete_project(self, project_id: str) -> bool:
        idx = self._index_of(self._projects, project_id)
        if idx is None:
            self._not_found("Project", project_id)
            return False
        del self._projects[idx]
        if self._selected_project is not None and self._selected_project.id == project_id:
            self._selected_project = None
        logger.info("Deleted project %s", project_id)
        return True

    # =========================================================================
    # RISKS
    # =========================================================================

    def add_risk(self, project_id: str, data: Mapping[str, Any]) -> Optional[Project]:
        project = self.get_project(project_id)
        if project is None:
            self._not_found("Project", project_id)
            return None
        return self.update_project(project_id, {"risks": list(project.risks) + [data]})

    def update_risk(self, project_id: str, risk_id: str, changes: Mapping[str, Any]) -> Optional[Project]:
        project = self.get_project(project_id)
        if project is None:
            self._not_found("Project", project_id)
            return None
        idx = self._index_of(project.risks, risk_id)
        if idx is None:
            self._not_found("Risk", risk_id)
            return None
        risks = list(project.risks)
        risks[idx] = replace(risks[idx], **self._known_fields(Risk, changes))
        return self.update_project(project_id, {"risks": risks})

    def remove_risk(self, project_id: str, risk_id: str) -> Optional[Project]:
        project = self.get_project(project_id)
        if project is None:
            self._not_found("Project", project_id)
            return None
        if self._index_of(project.risks, risk_id) is None:
            self._not_found("Risk", risk_id)
            return None
        return self.update_project(project_id, {"risks": [r for r in project.risks if r.id != risk_id]})

    # =========================================================================
    # USERS
    # =========================================================================

    def create_user(self, data: Mapping[str, Any]) -> User:
        """New users always start with a first login and a pending password reset."""
        known = self._known_fields(User, data)
        known["is_first_login"] = True
        known["needs_password_reset"] = True
        user = User(id=self._id_factory(), created_at=self._clock(), **known)
        self._users.append(user)
        logger.info("Created user %s (%s)", user.id, user.email)
        return user

    def update_user(self, user_id: str, changes: Mapping[str, Any]) -> Optional[User]:
        idx = self._index_of(self._users, user_id)
        if idx is None:
            self._not_found("User", user_id)
            return None
        self._users[idx] = replace(self._users[idx], **self._known_fields(User, changes))
        logger.info("Updated user %s", user_id)
        return self._users[idx]

    def delete_user(self, user_id: str) -> bool:
        idx = self._index_of(self._users, user_id)
        if idx is None:
            self._not_found("User", user_id)
            return False
        del self._users[idx]
        logger.info("Deleted user %s", user_id)
        return True

    def reset_user_password(self, user_id: str) -> Optional[User]:
        idx = self._index_of(self._users, user_id)
        if idx is None:
            self._not_found("User", user_id)
            return None
        self._users[idx] = replace(self._users[idx], needs_password_reset=True, is_first_login=False)
        logger.info("Password reset requested for user %s", user_id)
        return self._users[idx]

    # =========================================================================
    # DEPARTMENTS
    # =========================================================================

    def create_department(self, data: Mapping[str, Any]) -> Department:
        department = Department(
            id=self._id_factory(),
            created_at=self._clock(),
            **self._known_fields(Department, data),
        )
        self._departments.append(department)
        logger.info("Created department %s (%s)", department.id, department.name)
        return department

    def update_department(self, department_id: str, changes: Mapping[str, Any]) -> Optional[Department]:
        """Renaming a department does not touch projects that reference the old name."""
        idx = self._index_of(self._departments, department_id)
        if idx is None:
            self._not_found("Department", department_id)
            return None
        self._departments[idx] = replace(self._departments[idx], **self._known_fields(Department, changes))
        logger.info("Updated department %s", department_id)
        return self._departments[idx]

    def delete_department(self, department_id: str) -> bool:
        idx = self._index_of(self._departments, department_id)
        if idx is None:
            self._not_found("Department", department_id)
            return False
        del self._departments[idx]
        logger.info("Deleted department %s", department_id)
        return True

    # =========================================================================
    # CONFIGURATION (wholesale replacement)
    # =========================================================================

    def update_project_phases(self, phases: Iterable[Any]):
        self._project_phases = _build_records(ProjectPhase, phases)
        logger.info("Replaced project phases (%d)", len(self._project_phases))

    def update_column_config(self, columns: Iterable[Any]):
        self._column_config = _build_records(ColumnConfig, columns)
        logger.info("Replaced column config (%d)", len(self._column_config))

    def update_fiscal_config(self, fiscal: Any):
        self._fiscal_config = _build_fiscal_config(fiscal)
        logger.info(
            "Replaced fiscal config FY%s Q%s",
            self._fiscal_config.fiscal_year,
            self._fiscal_config.current_quarter,
        )

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _index_of(records: List[Any], record_id: str) -> Optional[int]:
        for idx, record in enumerate(records):
            if record.id == record_id:
                return idx
        return None

    def _not_found(self, resource: str, record_id: str):
        if self.strict:
            raise RecordNotFoundError(resource, record_id)
        logger.warning("%s id=%s not found; ignoring", resource, record_id)

    @staticmethod
    def _known_fields(record_type, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Caller input restricted to the record's own, non-system fields."""
        known, unknown = split_known_fields(record_type, dict(data))
        if unknown:
            logger.debug("Ignoring unknown %s fields: %s", record_type.__name__, unknown)
        for name in SYSTEM_FIELDS:
            known.pop(name, None)
        return known

    def _build_risks(self, risks: Iterable[Any]) -> List[Risk]:
        built = []
        for risk in risks:
            data = _as_dict(risk)
            known, _ = split_known_fields(Risk, data)
            known["id"] = known.get("id") or self._id_factory()
            built.append(Risk(**known))
        return built
