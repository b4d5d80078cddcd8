"""
Semantic layer: project records as frames, and safe department rollups.

All portfolio aggregations go through these helpers so every view groups
and coerces the same way.
"""
from typing import Any, Iterable, List, Sequence

import pandas as pd

from portfolio.data.models import Project


# =============================================================================
# GROUPING
# =============================================================================
# Department is matched exactly: case-sensitive, no trimming.

GROUP_KEY = "department"


def to_python(value: Any) -> Any:
    """Unwrap numpy scalars so rollups compare equal to plain numbers."""
    return value.item() if hasattr(value, "item") else value


# =============================================================================
# PROJECT FRAMES
# =============================================================================

def projects_frame(projects: Iterable[Project], numeric_cols: Sequence[str]) -> pd.DataFrame:
    """
    One row per project with the department key and the requested numeric
    columns. Non-numeric or missing values become 0.

    The department key is kept as given: None and "" stay distinct groups.
    Amounts beyond the int64 range are summed as float64, so very large
    budgets lose precision the same way a double would.
    """
    columns = [GROUP_KEY] + list(numeric_cols)
    rows = [{col: getattr(p, col, None) for col in columns} for p in projects]
    df = pd.DataFrame(rows, columns=columns)

    for col in numeric_cols:
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0)

    return df


def column_total(df: pd.DataFrame, col: str) -> Any:
    """Sum of a numeric column as a plain Python number."""
    if len(df) == 0:
        return 0
    return to_python(df[col].sum())


def department_rollup(df: pd.DataFrame, **agg) -> pd.DataFrame:
    """
    Group by department in first-seen order and aggregate.

    Args:
        df: Frame from projects_frame
        agg: Named aggregations, e.g. allocated=("budget_approved", "sum")

    Returns:
        DataFrame with the department column plus one column per aggregation
    """
    if len(df) == 0:
        return pd.DataFrame(columns=[GROUP_KEY] + list(agg))

    # Codes in first-seen order; plain dict keys keep None apart from ""
    keys = {}
    codes = [keys.setdefault(value, len(keys)) for value in df[GROUP_KEY]]

    result = df.groupby(codes, sort=True).agg(**agg).reset_index(drop=True)
    result.insert(0, GROUP_KEY, pd.Series(list(keys), dtype=object))
    return result


def frame_records(df: pd.DataFrame) -> List[dict]:
    """Frame rows as dicts of plain Python values."""
    return [
        {col: to_python(value) for col, value in row.items()}
        for row in df.to_dict(orient="records")
    ]
