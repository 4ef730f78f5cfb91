from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from table_browser.core.compare import parse_float, to_text
from table_browser.core.dataset import TableDataset


class Operator(str, Enum):
    CONTAINS = "contains"
    EQUALS = "equals"
    STARTS = "starts"
    ENDS = "ends"
    GT = "gt"
    LT = "lt"

    @property
    def is_relational(self) -> bool:
        return self in (Operator.GT, Operator.LT)

    @classmethod
    def parse(cls, raw: Any) -> Operator:
        """Accept the short names and the long spellings (starts-with, greater-than, ...)."""
        if isinstance(raw, Operator):
            return raw
        text = str(raw).strip().lower().replace("_", "-")
        return cls(_ALIASES.get(text, text))


_ALIASES = {
    "starts-with": "starts",
    "ends-with": "ends",
    "greater-than": "gt",
    "less-than": "lt",
}


@dataclass(frozen=True)
class FilterCondition:
    """One operator + value test attached to a column."""
    op: Operator = Operator.CONTAINS
    value: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"op": self.op.value, "value": self.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FilterCondition:
        return cls(
            op=Operator.parse(data.get("op", Operator.CONTAINS)),
            value=to_text(data.get("value", "")),
        )


# column key -> ordered conditions (OR within a column, AND across columns)
ColumnFilters = Dict[str, List[FilterCondition]]


# -----------------------------------------------------------------------------
# Scalar evaluation
# -----------------------------------------------------------------------------
def matches(value: Any, condition: FilterCondition) -> bool:
    """
    Evaluate one condition against one field value.

    Text operators compare lower-cased strings. gt / lt parse both sides as
    floats; a side that is not numeric makes the condition false.
    """
    left = to_text(value).lower()
    right = to_text(condition.value).lower()

    op = condition.op
    if op == Operator.CONTAINS:
        return right in left
    if op == Operator.EQUALS:
        return left == right
    if op == Operator.STARTS:
        return left.startswith(right)
    if op == Operator.ENDS:
        return left.endswith(right)

    lnum = parse_float(left)
    rnum = parse_float(right)
    if lnum is None or rnum is None:
        return False
    if op == Operator.GT:
        return lnum > rnum
    if op == Operator.LT:
        return lnum < rnum
    return False


def row_passes(row: Mapping[str, Any], filters: Mapping[str, Sequence[FilterCondition]]) -> bool:
    for key, conditions in filters.items():
        if not conditions:
            continue
        if not any(matches(row.get(key), cond) for cond in conditions):
            return False
    return True


# -----------------------------------------------------------------------------
# Vectorised evaluation (used by the view pipeline)
# -----------------------------------------------------------------------------
def condition_mask(text: pd.Series, condition: FilterCondition) -> np.ndarray:
    """
    Boolean mask of rows whose lower-cased text satisfies the condition.

    Agrees with `matches` on every value.
    """
    right = to_text(condition.value).lower()
    op = condition.op

    if op == Operator.CONTAINS:
        return text.str.contains(right, regex=False).to_numpy(dtype=bool)
    if op == Operator.EQUALS:
        return (text == right).to_numpy(dtype=bool)
    if op == Operator.STARTS:
        return text.str.startswith(right).to_numpy(dtype=bool)
    if op == Operator.ENDS:
        return text.str.endswith(right).to_numpy(dtype=bool)

    rnum = parse_float(right)
    if rnum is None:
        return np.zeros(len(text), dtype=bool)

    # NaN (non-numeric cell) compares false both ways
    left = np.array([np.nan if v is None else v for v in map(parse_float, text)], dtype=float)
    with np.errstate(invalid="ignore"):
        if op == Operator.GT:
            return left > rnum
        return left < rnum


def filter_mask(
    dataset: TableDataset,
    filters: Mapping[str, Sequence[FilterCondition]],
    positions: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Mask over `positions` (default: every row) of rows passing all column filters.

    A column with no conditions imposes no constraint.
    """
    if positions is None:
        positions = dataset.all_positions()

    mask = np.ones(len(positions), dtype=bool)
    for key, conditions in filters.items():
        if not conditions:
            continue
        text = dataset.text(key).iloc[positions]
        column_mask = np.logical_or.reduce([condition_mask(text, cond) for cond in conditions])
        mask &= column_mask
    return mask


# -----------------------------------------------------------------------------
# Filter map edits: each returns a new map, the input is left untouched
# -----------------------------------------------------------------------------
def add_condition(
    filters: Mapping[str, Sequence[FilterCondition]],
    column_key: str,
    condition: Optional[FilterCondition] = None,
) -> ColumnFilters:
    updated = {k: list(v) for k, v in filters.items()}
    updated.setdefault(column_key, []).append(condition or FilterCondition())
    return updated


def update_condition(
    filters: Mapping[str, Sequence[FilterCondition]],
    column_key: str,
    index: int,
    *,
    op: Optional[Any] = None,
    value: Optional[str] = None,
) -> ColumnFilters:
    conditions = list(filters.get(column_key, []))
    if not 0 <= index < len(conditions):
        raise IndexError(f"Column '{column_key}' has no filter condition #{index}")

    patch: Dict[str, Any] = {}
    if op is not None:
        patch["op"] = Operator.parse(op)
    if value is not None:
        patch["value"] = to_text(value)
    conditions[index] = replace(conditions[index], **patch)

    updated = {k: list(v) for k, v in filters.items()}
    updated[column_key] = conditions
    return updated


def remove_condition(
    filters: Mapping[str, Sequence[FilterCondition]],
    column_key: str,
    index: int,
) -> ColumnFilters:
    conditions = list(filters.get(column_key, []))
    if not 0 <= index < len(conditions):
        raise IndexError(f"Column '{column_key}' has no filter condition #{index}")
    del conditions[index]

    updated = {k: list(v) for k, v in filters.items()}
    updated[column_key] = conditions
    return updated


def active_filter_count(filters: Mapping[str, Sequence[FilterCondition]]) -> int:
    return sum(len(v) for v in filters.values())


def filters_to_dict(filters: Mapping[str, Sequence[FilterCondition]]) -> Dict[str, List[Dict[str, Any]]]:
    return {key: [c.to_dict() for c in conditions] for key, conditions in filters.items()}


def filters_from_dict(data: Optional[Mapping[str, Any]]) -> ColumnFilters:
    if not data:
        return {}
    return {str(key): [FilterCondition.from_dict(c) for c in (conds or [])] for key, conds in data.items()}
