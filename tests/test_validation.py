"""
Tests for form validation and numeric parsing.
"""
import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from portfolio.data.parsing import coerce_count, coerce_number, parse_number
from portfolio.data.validation import (
    validate_department_input,
    validate_project_input,
    validate_user_input,
)
from portfolio.exceptions import InvalidNumberError, ValidationError


class TestValidateProjectInput:
    """Tests for project form rules."""

    def test_valid_project(self):
        result = validate_project_input({
            "project_name": "Platform",
            "budget_approved": "1,000,000",
            "employees": 4,
            "status": "Green",
        })

        assert result["is_valid"] is True
        assert result["errors"] == {}

    def test_name_required(self):
        result = validate_project_input({"project_name": "  "})

        assert result["is_valid"] is False
        assert "project_name" in result["errors"]

    def test_justification_required_for_amber_and_red(self):
        for status in ("Amber", "Red"):
            result = validate_project_input({"project_name": "X", "status": status})
            assert "status_justification" in result["errors"]

        ok = validate_project_input({"project_name": "X", "status": "Red", "status_justification": "Late vendor"})
        assert ok["is_valid"] is True

    def test_negative_and_non_numeric(self):
        result = validate_project_input({
            "project_name": "X",
            "budget_approved": -1,
            "contractors": "lots",
        })

        assert result["errors"]["budget_approved"] == "Must be zero or more"
        assert result["errors"]["contractors"] == "Must be a number"

    def test_risk_values(self):
        result = validate_project_input({
            "project_name": "X",
            "risks": [{"impact": "Huge", "status": "Open"}],
        })

        assert "risks[0].impact" in result["errors"]

    def test_strict_raises(self):
        """Strict mode should raise with field details."""
        with pytest.raises(ValidationError) as exc:
            validate_project_input({"status": "Purple"}, strict=True)

        assert "project_name" in exc.value.details
        assert "status" in exc.value.details


class TestValidateUserAndDepartment:
    """Tests for user and department form rules."""

    def test_user_email_format(self):
        assert validate_user_input({"name": "Ana", "email": "ana@company.com"})["is_valid"] is True

        result = validate_user_input({"name": "Ana", "email": "ana-at-company"})
        assert result["errors"]["email"] == "Invalid email address"

    def test_user_role(self):
        result = validate_user_input({"name": "Ana", "email": "ana@company.com", "role": "Owner"})

        assert "role" in result["errors"]

    def test_department_name_required(self):
        assert validate_department_input({"name": ""})["is_valid"] is False
        assert validate_department_input({"name": "Ops"})["is_valid"] is True


class TestParsing:
    """Tests for the explicit number parse step."""

    def test_parse_formatted_strings(self):
        assert parse_number("1,250,000") == 1250000
        assert parse_number("$400") == 400
        assert parse_number("12.5") == 12.5
        assert parse_number(np.int64(7)) == 7

    @pytest.mark.parametrize("value", [None, "", "abc", True, float("nan"), [1]])
    def test_parse_rejects(self, value):
        with pytest.raises(InvalidNumberError):
            parse_number(value)

    def test_coerce_falls_back_to_zero(self):
        assert coerce_number("abc") == 0
        assert coerce_number(None) == 0
        assert coerce_number("3") == 3

    def test_coerce_count(self):
        assert coerce_count("5") == 5
        assert coerce_count(-2) == 0
        assert coerce_count(2.9) == 2
