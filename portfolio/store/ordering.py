"""
Reordering helpers for the phase and column configuration lists.

Both return a new list with `order` renumbered from 1; the result is what
gets passed to PortfolioStore.update_project_phases / update_column_config.
"""
from dataclasses import replace
from typing import Callable, List, Sequence, TypeVar

from portfolio.data.models import ColumnConfig, ProjectPhase

T = TypeVar("T")

DIRECTIONS = ("up", "down")


def _move(items: Sequence[T], match: Callable[[T], bool], direction: str) -> List[T]:
    if direction not in DIRECTIONS:
        raise ValueError(f"direction must be one of {DIRECTIONS}, got {direction!r}")

    ordered = list(items)
    current = next((i for i, item in enumerate(ordered) if match(item)), None)
    if current is None:
        return ordered

    target = current - 1 if direction == "up" else current + 1
    if target < 0 or target >= len(ordered):
        return ordered

    ordered[current], ordered[target] = ordered[target], ordered[current]
    return [replace(item, order=i) for i, item in enumerate(ordered, start=1)]


def move_phase(phases: Sequence[ProjectPhase], phase_id: str, direction: str) -> List[ProjectPhase]:
    """Swap a phase with its neighbour. Unknown ids and edge moves are no-ops."""
    return _move(phases, lambda p: p.id == phase_id, direction)


def move_column(columns: Sequence[ColumnConfig], key: str, direction: str) -> List[ColumnConfig]:
    """Swap a column with its neighbour. Unknown keys and edge moves are no-ops."""
    return _move(columns, lambda c: c.key == key, direction)


def toggle_column(columns: Sequence[ColumnConfig], key: str) -> List[ColumnConfig]:
    """Flip one column's visibility."""
    return [replace(c, visible=not c.visible) if c.key == key else c for c in columns]


def new_phase(phases: Sequence[ProjectPhase], phase_id: str, name: str = "New Phase") -> List[ProjectPhase]:
    """Append an active phase at the end of the sequence."""
    return list(phases) + [ProjectPhase(id=phase_id, name=name, order=len(phases) + 1, is_active=True)]
