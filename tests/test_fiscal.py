"""
Tests for fiscal quarter windows and the cascading start-date edit.
"""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from portfolio.data.fiscal import (
    default_fiscal_config,
    quarter_end_for,
    quarter_for_date,
    quarter_label,
    set_quarter_end,
    set_quarter_start,
)
from portfolio.data.models import QuarterWindow


class TestQuarterEnd:
    """Tests for start + 3 months - 1 day."""

    def test_regular(self):
        assert quarter_end_for("2024-01-01") == "2024-03-31"
        assert quarter_end_for("2024-04-15") == "2024-07-14"

    def test_month_end_clamps(self):
        """Nov 30 + 3 months clamps to the end of February."""
        assert quarter_end_for("2023-11-30") == "2024-02-28"
        assert quarter_end_for("2024-11-30") == "2025-02-27"


class TestSetQuarterStart:
    """Tests for the cascade to later quarters."""

    def test_cascade_from_q2(self):
        """Editing Q2 moves Q2-Q4 and leaves Q1."""
        fiscal = default_fiscal_config(2024)

        result = set_quarter_start(fiscal, "q2", "2024-05-01")

        assert result.q1 == fiscal.q1
        assert result.q2 == QuarterWindow(start="2024-05-01", end="2024-07-31")
        assert result.q3 == QuarterWindow(start="2024-08-01", end="2024-10-31")
        assert result.q4 == QuarterWindow(start="2024-11-01", end="2025-01-31")

    def test_cascade_from_q1(self):
        fiscal = default_fiscal_config(2024)

        result = set_quarter_start(fiscal, 1, "2024-02-01")

        assert result.q1 == QuarterWindow(start="2024-02-01", end="2024-04-30")
        assert result.q2.start == "2024-05-01"
        assert result.q4.end == "2025-01-31"

    def test_q4_has_nothing_to_cascade(self):
        fiscal = default_fiscal_config(2024)

        result = set_quarter_start(fiscal, "Q4", "2024-10-15")

        assert result.q3 == fiscal.q3
        assert result.q4 == QuarterWindow(start="2024-10-15", end="2025-01-14")

    def test_quarters_are_contiguous(self):
        """Each quarter starts the day after the previous one ends."""
        result = set_quarter_start(default_fiscal_config(2024), "q1", "2024-07-01")

        assert result.q1.end == "2024-09-30"
        assert result.q2.start == "2024-10-01"
        assert result.q2.end == "2024-12-31"
        assert result.q3.start == "2025-01-01"
        assert result.q4 == QuarterWindow(start="2025-04-01", end="2025-06-30")

    def test_input_not_modified(self):
        fiscal = default_fiscal_config(2024)

        set_quarter_start(fiscal, "q2", "2024-05-01")

        assert fiscal.q2 == QuarterWindow(start="2024-04-01", end="2024-06-30")

    def test_unknown_quarter(self):
        with pytest.raises(ValueError):
            set_quarter_start(default_fiscal_config(2024), "q5", "2024-01-01")


class TestSetQuarterEnd:
    """Manual end edits do not cascade."""

    def test_no_cascade(self):
        fiscal = default_fiscal_config(2024)

        result = set_quarter_end(fiscal, "q1", "2024-04-15")

        assert result.q1 == QuarterWindow(start="2024-01-01", end="2024-04-15")
        assert result.q2 == fiscal.q2


class TestQuarterLabels:
    """Tests for quarter labels and lookup."""

    def test_label(self):
        assert quarter_label(2, 2024) == "Q2 2024"
        assert default_fiscal_config(2024, current_quarter=3).current_quarter_label == "Q3 2024"

    def test_quarter_for_date(self):
        fiscal = default_fiscal_config(2024)

        assert quarter_for_date(fiscal, "2024-05-15") == "Q2 2024"
        assert quarter_for_date(fiscal, "2024-12-31") == "Q4 2024"
        assert quarter_for_date(fiscal, "2025-01-01") is None
        assert quarter_for_date(fiscal, "") is None

    def test_quarter_for_unparseable_date(self):
        """Free-text launch dates that are not dates give no quarter."""
        fiscal = default_fiscal_config(2024)

        assert quarter_for_date(fiscal, "not-a-date") is None
        assert quarter_for_date(fiscal, "TBD Q3") is None
