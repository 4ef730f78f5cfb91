from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np

from table_browser.config.model import ColumnConfig, FormatType
from table_browser.core.compare import collation_key, compare_numbers, date_key
from table_browser.core.dataset import TableDataset


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"
    NONE = "none"


@dataclass(frozen=True)
class SortState:
    """
    At most one active (column, direction) pair.

    Header activation cycles asc -> desc -> none on the same column; a
    different column starts again at asc.
    """
    column: Optional[str] = None
    direction: SortDirection = SortDirection.NONE

    @property
    def is_active(self) -> bool:
        return self.column is not None and self.direction != SortDirection.NONE

    def toggled(self, column_key: str) -> SortState:
        if self.column != column_key or self.direction == SortDirection.NONE:
            return SortState(column_key, SortDirection.ASC)
        if self.direction == SortDirection.ASC:
            return SortState(column_key, SortDirection.DESC)
        return SortState()

    def direction_for(self, column_key: str) -> SortDirection:
        return self.direction if self.column == column_key else SortDirection.NONE

    def to_dict(self) -> Dict[str, Any]:
        return {"column": self.column, "direction": self.direction.value}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> SortState:
        if not data:
            return cls()
        direction = SortDirection(data.get("direction") or SortDirection.NONE.value)
        column = data.get("column")
        if column is None or direction == SortDirection.NONE:
            return cls()
        return cls(column, direction)


def _find_column(columns: Sequence[ColumnConfig], key: str) -> Optional[ColumnConfig]:
    return next((c for c in columns if c.key == key), None)


def _ordered(values: List[Any], format_type: FormatType, descending: bool) -> List[int]:
    """
    Stable ordering of value indices for one column.

    Dates and text have a total order, so they sort on a precomputed key;
    numbers need the comparator because of the text fallback. `reverse=True`
    keeps ties in input order, the same as negating the comparator.
    """
    idx = range(len(values))
    if format_type.is_numeric:
        cmp = compare_numbers if not descending else (lambda a, b: -compare_numbers(a, b))
        keyed = functools.cmp_to_key(lambda i, j: cmp(values[i], values[j]))
        return sorted(idx, key=keyed)

    if format_type == FormatType.DATE:
        keys = [date_key(v) for v in values]
    else:
        keys = [collation_key(v) for v in values]
    return sorted(idx, key=keys.__getitem__, reverse=descending)


def sort_positions(
    dataset: TableDataset,
    positions: np.ndarray,
    sort_state: SortState,
    columns: Sequence[ColumnConfig],
) -> np.ndarray:
    """
    Reorder row positions by the active sort.

    Inactive sort, or a sort on a column that is not configured: positions
    pass through unchanged.
    """
    if not sort_state.is_active or len(positions) == 0:
        return positions
    column = _find_column(columns, sort_state.column)
    if column is None:
        return positions

    values = dataset.values(column.key).iloc[positions].tolist()
    order = _ordered(values, column.format_type, sort_state.direction == SortDirection.DESC)
    return positions[np.asarray(order, dtype=int)]


def sort_rows(
    rows: Sequence[Mapping[str, Any]],
    sort_state: SortState,
    columns: Sequence[ColumnConfig],
) -> List[Mapping[str, Any]]:
    """Sort plain record mappings; same ordering as `sort_positions`."""
    rows = list(rows)
    if not sort_state.is_active:
        return rows
    column = _find_column(columns, sort_state.column)
    if column is None:
        return rows

    values = [r.get(column.key) for r in rows]
    order = _ordered(values, column.format_type, sort_state.direction == SortDirection.DESC)
    return [rows[i] for i in order]
