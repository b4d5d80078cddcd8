"""
Portfolio health metrics pack.

Dashboard figures derived from the rollups and the project list: spend
utilisation, CAPEX/OPEX mix, status counts, launch-quarter load.
"""
import math
from dataclasses import asdict
from typing import Dict, Iterable, List, Sequence

import numpy as np
import pandas as pd

from portfolio.config import PROJECT_STATUSES, config
from portfolio.data.models import FiscalConfig, Project
from portfolio.metrics.budget import BudgetRollup, DepartmentBudget
from portfolio.metrics.workforce import DepartmentWorkforce, WorkforceRollup


def _round_pct(numerator: float, denominator: float, default: int = 0) -> int:
    """Whole-number percentage, halves rounded up; `default` when denominator is 0."""
    if not denominator:
        return default
    return math.floor(numerator / denominator * 100 + 0.5)


def budget_utilisation(rollup: BudgetRollup) -> Dict[str, int]:
    """
    Whole-number percentages for the budget overview.

    With no approved budget the CAPEX/OPEX shares fall back to the default
    split and spend percentages to 0.
    """
    capex_default = math.floor(config.default_capex_share * 100 + 0.5)
    return {
        "spend_pct": _round_pct(rollup.actual_spend, rollup.total_budget),
        "capex_share_pct": _round_pct(rollup.capex, rollup.total_budget, capex_default),
        "opex_share_pct": _round_pct(rollup.opex, rollup.total_budget, 100 - capex_default),
        "capex_spend_pct": _round_pct(rollup.capex_spent, rollup.capex),
        "opex_spend_pct": _round_pct(rollup.opex_spent, rollup.opex),
    }


def contractor_share(rollup: WorkforceRollup) -> int:
    """Contractors as a whole-number % of total workforce."""
    return _round_pct(rollup.contractors, rollup.total)


def status_counts(projects: Iterable[Project]) -> Dict[str, int]:
    """Project count per RAG status, zero-filled."""
    counts = {status: 0 for status in PROJECT_STATUSES}
    for project in projects:
        if project.status in counts:
            counts[project.status] += 1
    return counts


def current_quarter_projects(projects: Iterable[Project], fiscal: FiscalConfig) -> List[Project]:
    """Projects targeting a launch in the configured current quarter."""
    label = fiscal.current_quarter_label
    return [p for p in projects if p.target_launch_quarter == label]


# =============================================================================
# TABULAR VIEWS
# =============================================================================

def rollup_frame(breakdown: Sequence) -> pd.DataFrame:
    """Department breakdown as a DataFrame for tables and charts."""
    return pd.DataFrame([asdict(row) for row in breakdown])


def department_spend_pct(rollup: BudgetRollup) -> pd.DataFrame:
    """Budget breakdown with spent as % of allocated (0 where nothing allocated)."""
    df = rollup_frame(rollup.department_breakdown)
    if len(df) == 0:
        return pd.DataFrame(columns=[f for f in DepartmentBudget.__dataclass_fields__] + ["spend_pct"])

    df["spend_pct"] = np.where(
        df["allocated"] > 0,
        df["spent"] / df["allocated"].where(df["allocated"] > 0, 1) * 100,
        0.0,
    )
    return df


def department_mix(rollup: WorkforceRollup) -> pd.DataFrame:
    """Workforce breakdown with employee / contractor % of each department."""
    df = rollup_frame(rollup.department_breakdown)
    if len(df) == 0:
        return pd.DataFrame(
            columns=[f for f in DepartmentWorkforce.__dataclass_fields__] + ["total", "employee_pct", "contractor_pct"]
        )

    df["total"] = df["employees"] + df["contractors"]
    safe_total = df["total"].where(df["total"] > 0, 1)
    df["employee_pct"] = np.where(df["total"] > 0, df["employees"] / safe_total * 100, 0.0)
    df["contractor_pct"] = np.where(df["total"] > 0, df["contractors"] / safe_total * 100, 0.0)
    return df
