"""
Derived project fields.

Every store mutation that produces a Project passes it through
`recompute_project_derived`, so the remaining-budget invariants hold for
every record the store hands out.
"""
import math
from dataclasses import replace
from typing import Any, Dict, Tuple

from portfolio.config import config
from portfolio.data.models import Project
from portfolio.data.parsing import coerce_count, coerce_number

BUDGET_FIELDS = ["budget_approved", "budget_spent_ytd", "capex_spent", "opex_spent"]
ALLOCATION_FIELDS = ["capex_allocated", "opex_allocated"]
HEADCOUNT_FIELDS = ["employees", "contractors"]


def default_allocations(budget_approved: float) -> Tuple[int, int]:
    """Default (capex, opex) split of an approved budget, rounded half up."""
    capex = math.floor(budget_approved * config.default_capex_share + 0.5)
    opex = math.floor(budget_approved * config.default_opex_share + 0.5)
    return capex, opex


def coerce_project_numbers(data: Dict[str, Any]) -> Dict[str, Any]:
    """Coerce whichever numeric project fields are present in `data`."""
    coerced = dict(data)
    for col in BUDGET_FIELDS + ALLOCATION_FIELDS:
        if col in coerced:
            coerced[col] = coerce_number(coerced[col])
    for col in HEADCOUNT_FIELDS:
        if col in coerced:
            coerced[col] = coerce_count(coerced[col])
    return coerced


def with_default_allocations(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Fill CAPEX/OPEX allocations for a new project.

    An allocation that is absent, non-numeric or zero takes its default share
    of `budget_approved`.
    """
    filled = dict(data)
    capex_default, opex_default = default_allocations(coerce_number(filled.get("budget_approved")))
    if not coerce_number(filled.get("capex_allocated")):
        filled["capex_allocated"] = capex_default
    if not coerce_number(filled.get("opex_allocated")):
        filled["opex_allocated"] = opex_default
    return filled


def recompute_project_derived(project: Project) -> Project:
    """Return `project` with budget/CAPEX/OPEX remaining recomputed."""
    return replace(
        project,
        budget_remaining=project.budget_approved - project.budget_spent_ytd,
        capex_remaining=project.capex_allocated - project.capex_spent,
        opex_remaining=project.opex_allocated - project.opex_spent,
    )
