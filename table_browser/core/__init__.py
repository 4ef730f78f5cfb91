"""
Core domain layer: record dataset, value comparison, search, column filters,
sorting, pagination, selection, the view pipeline and the table session
"""

from .dataset import TableDataset
from .filter_state import FilterCondition, Operator
from .sort import SortDirection, SortState
from .selection import SelectionTracker
from .pipeline import ViewResult, ViewStatus, compute_view
from .session import TableSession

__all__ = [
    "TableDataset",
    "FilterCondition",
    "Operator",
    "SortDirection",
    "SortState",
    "SelectionTracker",
    "ViewResult",
    "ViewStatus",
    "compute_view",
    "TableSession",
]
