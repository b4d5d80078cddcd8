"""
Application configuration management.
"""
import logging
import os
from dataclasses import dataclass, field


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AppConfig:
    """Application configuration with environment overrides."""

    # Environment
    app_env: str = field(default_factory=lambda: os.getenv("APP_ENV", "dev"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Store behaviour
    strict_record_ids: bool = field(default_factory=lambda: _env_flag("STRICT_RECORD_IDS"))
    seed_sample_data: bool = field(default_factory=lambda: _env_flag("SEED_SAMPLE_DATA", "true"))

    # Business logic defaults
    default_capex_share: float = field(default_factory=lambda: float(os.getenv("DEFAULT_CAPEX_SHARE", "0.7")))
    default_fiscal_year: int = field(default_factory=lambda: int(os.getenv("DEFAULT_FISCAL_YEAR", "2024")))

    @property
    def default_opex_share(self) -> float:
        return 1 - self.default_capex_share

    @property
    def is_prod(self) -> bool:
        return self.app_env.lower() == "prod"


# Global config instance
config = AppConfig()


def configure_logging(level: str = None):
    """Configure root logging once for the app process."""
    logging.basicConfig(
        level=(level or config.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Allowed values
PROJECT_STATUSES = ("Green", "Amber", "Red")
JUSTIFIED_STATUSES = ("Amber", "Red")
RISK_IMPACTS = ("Low", "Medium", "High")
RISK_STATUSES = ("Open", "In Progress", "Resolved")
USER_ROLES = ("Admin", "Manager", "Team Member")

QUARTER_KEYS = ("q1", "q2", "q3", "q4")

# Project fields coerced to numbers by the store
NUMERIC_PROJECT_FIELDS = [
    "budget_approved",
    "budget_spent_ytd",
    "capex_allocated",
    "opex_allocated",
    "capex_spent",
    "opex_spent",
    "employees",
    "contractors",
]

# Text fields searched by the project list
SEARCH_FIELDS = [
    "project_name",
    "asset_id",
    "department",
    "product_manager",
    "engineering_manager",
    "project_manager",
]

DATE_SORT_FIELDS = ["asset_approval_date", "target_launch_date"]

# Default configuration collections
DEFAULT_PROJECT_PHASES = [
    "Planning",
    "Design",
    "Development",
    "Testing",
    "Implementation",
    "Deployment",
    "Maintenance",
]

DEFAULT_COLUMNS = [
    ("project_name", "Project Name", True),
    ("department", "Department", True),
    ("execution_phase", "Execution Phase", True),
    ("budget_approved", "Budget", True),
    ("target_launch_date", "Target Launch", True),
    ("status", "Status", True),
    ("actions", "Actions", True),
    ("asset_id", "Asset ID", False),
    ("asset_approval_date", "Approval Date", False),
    ("leadership", "Leadership", False),
]
