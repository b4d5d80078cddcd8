"""
Form input validation for projects, users and departments.

The store accepts anything; these checks run at the form boundary before a
create or update is submitted.
"""
import re
from typing import Any, Dict, Mapping

from portfolio.config import JUSTIFIED_STATUSES, PROJECT_STATUSES, RISK_IMPACTS, RISK_STATUSES, USER_ROLES
from portfolio.data.parsing import parse_number
from portfolio.exceptions import InvalidNumberError, ValidationError

EMAIL_PATTERN = re.compile(r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$", re.IGNORECASE)

NON_NEGATIVE_PROJECT_FIELDS = [
    "budget_approved",
    "budget_spent_ytd",
    "capex_allocated",
    "opex_allocated",
    "capex_spent",
    "opex_spent",
    "employees",
    "contractors",
]


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _result(errors: Dict[str, str], entity: str, strict: bool) -> Dict:
    result = {
        "is_valid": len(errors) == 0,
        "errors": errors,
    }
    if strict and errors:
        raise ValidationError(f"Invalid {entity}: {sorted(errors)}", details=errors)
    return result


def validate_project_input(data: Mapping[str, Any], strict: bool = False) -> Dict:
    """
    Validate a project form submission.

    Args:
        data: Project fields as submitted
        strict: If True, raise ValidationError when invalid

    Returns:
        Dict with is_valid and a field -> message errors mapping
    """
    errors = {}

    if _blank(data.get("project_name")):
        errors["project_name"] = "Project name is required"

    for col in NON_NEGATIVE_PROJECT_FIELDS:
        value = data.get(col)
        if _blank(value):
            continue
        try:
            number = parse_number(value)
        except InvalidNumberError:
            errors[col] = "Must be a number"
            continue
        if number < 0:
            errors[col] = "Must be zero or more"

    status = data.get("status", "Green")
    if status not in PROJECT_STATUSES:
        errors["status"] = f"Status must be one of {', '.join(PROJECT_STATUSES)}"
    elif status in JUSTIFIED_STATUSES and _blank(data.get("status_justification")):
        errors["status_justification"] = "Status justification is required for Amber/Red status"

    for i, risk in enumerate(data.get("risks") or []):
        risk = risk if isinstance(risk, Mapping) else vars(risk)
        if risk.get("impact", "Medium") not in RISK_IMPACTS:
            errors[f"risks[{i}].impact"] = f"Impact must be one of {', '.join(RISK_IMPACTS)}"
        if risk.get("status", "Open") not in RISK_STATUSES:
            errors[f"risks[{i}].status"] = f"Risk status must be one of {', '.join(RISK_STATUSES)}"

    return _result(errors, "project", strict)


def validate_user_input(data: Mapping[str, Any], strict: bool = False) -> Dict:
    """Validate a user form submission: name, email format, role."""
    errors = {}

    if _blank(data.get("name")):
        errors["name"] = "Name is required"

    email = data.get("email")
    if _blank(email):
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.match(str(email).strip()):
        errors["email"] = "Invalid email address"

    if data.get("role", "Team Member") not in USER_ROLES:
        errors["role"] = f"Role must be one of {', '.join(USER_ROLES)}"

    return _result(errors, "user", strict)


def validate_department_input(data: Mapping[str, Any], strict: bool = False) -> Dict:
    """Validate a department form submission."""
    errors = {}
    if _blank(data.get("name")):
        errors["name"] = "Department name is required"
    return _result(errors, "department", strict)
