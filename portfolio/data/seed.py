"""
Seed data for a fresh store: default configuration plus optional samples.
"""
import logging
from typing import List, Optional

from portfolio.config import DEFAULT_COLUMNS, DEFAULT_PROJECT_PHASES, config
from portfolio.data.fiscal import default_fiscal_config
from portfolio.data.models import ColumnConfig, Department, Project, ProjectPhase, Risk, User
from portfolio.store.records import PortfolioStore

logger = logging.getLogger(__name__)

SEED_TIMESTAMP = "2024-01-01T00:00:00Z"


def default_phases() -> List[ProjectPhase]:
    return [
        ProjectPhase(id=str(i), name=name, order=i, is_active=True)
        for i, name in enumerate(DEFAULT_PROJECT_PHASES, start=1)
    ]


def default_columns() -> List[ColumnConfig]:
    return [
        ColumnConfig(key=key, label=label, visible=visible, order=i)
        for i, (key, label, visible) in enumerate(DEFAULT_COLUMNS, start=1)
    ]


def sample_departments() -> List[Department]:
    rows = [
        ("Engineering", "Software development and technical implementation"),
        ("Infrastructure", "IT infrastructure and cloud services"),
        ("Product", "Product management and strategy"),
        ("Data Science", "Data analysis and machine learning"),
    ]
    return [
        Department(id=str(i), name=name, description=desc, is_active=True, created_at=SEED_TIMESTAMP)
        for i, (name, desc) in enumerate(rows, start=1)
    ]


def sample_users() -> List[User]:
    return [
        User(id="1", name="John Smith", email="john.smith@company.com", role="Admin",
             department="IT", created_at=SEED_TIMESTAMP, last_login="2024-03-01T10:30:00Z"),
        User(id="2", name="Sarah Johnson", email="sarah.johnson@company.com", role="Manager",
             department="Engineering", created_at="2024-01-15T00:00:00Z", last_login="2024-02-28T14:20:00Z"),
        User(id="3", name="Mike Chen", email="mike.chen@company.com", role="Team Member",
             department="Engineering", created_at="2024-02-01T00:00:00Z", last_login="2024-03-01T09:15:00Z"),
    ]


def sample_projects() -> List[Project]:
    """Remaining fields are filled in by the store on load."""
    return [
        Project(
            id="1",
            asset_id="AST-2024-001",
            project_name="Next-Gen Mobile Platform",
            asset_approval_date="2024-01-15",
            execution_phase="Development",
            budget_approved=2500000,
            budget_spent_ytd=1250000,
            capex_allocated=1750000,
            opex_allocated=750000,
            capex_spent=875000,
            opex_spent=375000,
            target_launch_date="2024-06-30",
            target_launch_quarter="Q2 2024",
            status="Green",
            department="Engineering",
            product_manager="Sarah Johnson",
            engineering_manager="Mike Chen",
            project_manager="Lisa Rodriguez",
            employees=8,
            contractors=4,
            previous_month_progress="Completed API integration and user authentication modules.",
            upcoming_month_plan="Focus on UI/UX implementation and beta testing preparation.",
            executive_guidance="Need additional QA resources for comprehensive testing.",
            risks=[
                Risk(id="1", description="Third-party API rate limiting may impact performance",
                     owner="Mike Chen", impact="Medium", resolution_timeline="2024-03-15",
                     status="In Progress"),
            ],
            created_by="1",
            created_at=SEED_TIMESTAMP,
            updated_at="2024-03-01T00:00:00Z",
        ),
        Project(
            id="2",
            asset_id="AST-2024-002",
            project_name="Cloud Infrastructure Modernization",
            asset_approval_date="2024-02-01",
            execution_phase="Planning",
            budget_approved=3800000,
            budget_spent_ytd=950000,
            capex_allocated=2660000,
            opex_allocated=1140000,
            capex_spent=665000,
            opex_spent=285000,
            target_launch_date="2024-09-15",
            target_launch_quarter="Q3 2024",
            status="Amber",
            status_justification="Vendor contract signature delayed by three weeks.",
            department="Infrastructure",
            product_manager="David Kim",
            engineering_manager="Alex Thompson",
            project_manager="Jennifer Walsh",
            employees=12,
            contractors=6,
            created_by="1",
            created_at="2024-01-20T00:00:00Z",
            updated_at="2024-03-01T00:00:00Z",
        ),
    ]


def build_store(with_samples: Optional[bool] = None, **kwargs) -> PortfolioStore:
    """
    Fresh store with default phases, columns and fiscal calendar.

    Args:
        with_samples: Load sample projects, users and departments.
            Defaults to config.seed_sample_data.
        kwargs: Passed through to PortfolioStore (strict, clock, id_factory)
    """
    if with_samples is None:
        with_samples = config.seed_sample_data

    store = PortfolioStore(
        projects=sample_projects() if with_samples else [],
        users=sample_users() if with_samples else [],
        departments=sample_departments() if with_samples else [],
        project_phases=default_phases(),
        column_config=default_columns(),
        fiscal_config=default_fiscal_config(),
        **kwargs,
    )
    logger.info("Built store (samples=%s, projects=%d)", with_samples, len(store.projects))
    return store
