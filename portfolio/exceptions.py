"""
Exception hierarchy for the portfolio package.

Usage:
    from portfolio.exceptions import RecordNotFoundError, ValidationError

    raise RecordNotFoundError(resource="Project", record_id="abc")
    raise ValidationError("Project name is required", details={"project_name": "..."})
"""
from typing import Dict, Optional


class PortfolioError(Exception):
    """Base class for all portfolio errors."""
    pass


class RecordNotFoundError(PortfolioError):
    """Raised by the store in strict mode when an identity does not exist.

    Args:
        resource: Entity name (e.g. "Project", "User").
        record_id: The identity that was looked up.
    """

    def __init__(self, resource: str, record_id: Optional[str] = None):
        self.resource = resource
        self.record_id = record_id
        msg = resource
        if record_id is not None:
            msg += f" id={record_id}"
        msg += " not found"
        super().__init__(msg)


class ValidationError(PortfolioError):
    """Raised when form input breaks a business rule.

    Args:
        message: Human-readable summary.
        details: Field name -> error description.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        self.details = details or {}
        super().__init__(message)


class InvalidNumberError(PortfolioError, ValueError):
    """Raised when a value cannot be parsed as a number."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Not a number: {value!r}")
