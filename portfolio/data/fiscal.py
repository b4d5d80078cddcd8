"""
Fiscal calendar: quarter windows, cascading start-date edits, labels.
"""
import logging
from dataclasses import replace
from typing import Optional, Union
from datetime import date

import pandas as pd

from portfolio.config import QUARTER_KEYS, config
from portfolio.data.models import FiscalConfig, QuarterWindow

logger = logging.getLogger(__name__)

DateLike = Union[str, date, pd.Timestamp]

QUARTER_MONTHS = 3


def _to_timestamp(value: DateLike) -> pd.Timestamp:
    return pd.Timestamp(value).normalize()


def _iso(ts: pd.Timestamp) -> str:
    return ts.strftime("%Y-%m-%d")


def quarter_end_for(start: DateLike) -> str:
    """
    Last day of a quarter starting on `start`: start + 3 months - 1 day.
    Month arithmetic clamps to month end (Nov 30 + 3 months = Feb 28/29).
    """
    start_ts = _to_timestamp(start)
    end_ts = start_ts + pd.DateOffset(months=QUARTER_MONTHS) - pd.Timedelta(days=1)
    return _iso(end_ts)


def _quarter_key(quarter: Union[str, int]) -> str:
    if isinstance(quarter, int):
        key = f"q{quarter}"
    else:
        key = quarter.lower()
    if key not in QUARTER_KEYS:
        raise ValueError(f"Unknown fiscal quarter: {quarter!r}")
    return key


def default_fiscal_config(fiscal_year: Optional[int] = None, current_quarter: int = 1) -> FiscalConfig:
    """Calendar-aligned fiscal year (Q1 starts 1 January)."""
    year = fiscal_year or config.default_fiscal_year
    fiscal = FiscalConfig(
        fiscal_year=year,
        current_quarter=current_quarter,
        q1=QuarterWindow(start=f"{year}-01-01", end=f"{year}-03-31"),
        q2=QuarterWindow(start=f"{year}-04-01", end=f"{year}-06-30"),
        q3=QuarterWindow(start=f"{year}-07-01", end=f"{year}-09-30"),
        q4=QuarterWindow(start=f"{year}-10-01", end=f"{year}-12-31"),
    )
    return fiscal


def set_quarter_start(fiscal: FiscalConfig, quarter: Union[str, int], start: DateLike) -> FiscalConfig:
    """
    Move a quarter's start date and cascade to the quarters after it.

    The edited quarter ends 3 months - 1 day after its new start. Each later
    quarter starts the day after the previous one ends and spans the same
    length. Earlier quarters are left as they were.

    Returns a new FiscalConfig; `fiscal` is not modified.
    """
    key = _quarter_key(quarter)
    index = QUARTER_KEYS.index(key)

    windows = dict(fiscal.quarters)
    next_start = _to_timestamp(start)

    for q in QUARTER_KEYS[index:]:
        end = quarter_end_for(next_start)
        windows[q] = QuarterWindow(start=_iso(next_start), end=end)
        next_start = _to_timestamp(end) + pd.Timedelta(days=1)

    logger.debug("Cascaded fiscal quarters from %s starting %s", key, windows[key].start)
    return replace(fiscal, **windows)


def set_quarter_end(fiscal: FiscalConfig, quarter: Union[str, int], end: DateLike) -> FiscalConfig:
    """Manual end-date edit for one quarter. No cascade."""
    key = _quarter_key(quarter)
    window = fiscal.quarters[key]
    return replace(fiscal, **{key: QuarterWindow(start=window.start, end=_iso(_to_timestamp(end)))})


def quarter_label(quarter: int, fiscal_year: int) -> str:
    """Label used on projects' target launch quarter, e.g. 'Q2 2024'."""
    return f"Q{quarter} {fiscal_year}"


def quarter_for_date(fiscal: FiscalConfig, value: DateLike) -> Optional[str]:
    """Label of the configured quarter containing `value`, or None (also for unparseable dates)."""
    if value is None or value == "":
        return None
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return None
    ts = ts.normalize()
    for number, key in enumerate(QUARTER_KEYS, start=1):
        window = fiscal.quarters[key]
        if _to_timestamp(window.start) <= ts <= _to_timestamp(window.end):
            return quarter_label(number, fiscal.fiscal_year)
    return None
