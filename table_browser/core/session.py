from __future__ import annotations

import logging
import threading
import uuid
from typing import Any, Dict, FrozenSet, List, Optional

from table_browser.config.model import ColumnConfig, TableConfig
from table_browser.core import filter_state as fs
from table_browser.core.dataset import TableDataset
from table_browser.core.filter_state import ColumnFilters, FilterCondition, Operator
from table_browser.core.pipeline import ViewResult, compute_view, visible_columns_for
from table_browser.core.search import Clock, SearchDebouncer
from table_browser.core.selection import SelectionTracker
from table_browser.core.sort import SortDirection, SortState

logger = logging.getLogger(__name__)


class TableSession:
    """
    All mutable state of one table view, plus the operations that change it.

    The records and column descriptors are fixed for the lifetime of the
    session. Search, filters, sort, pagination, selection and column
    visibility live here; every mutation recomputes the view synchronously,
    so the next operation always sees a settled result.

    One re-entrant lock guards state and recompute: the Dash server can run
    callbacks for the same session on several threads.
    """

    def __init__(
        self,
        config: TableConfig,
        dataset: TableDataset,
        *,
        session_id: Optional[str] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.session_id = session_id or uuid.uuid4().hex
        self.config = config
        self.dataset = dataset

        self._lock = threading.RLock()
        self._search = SearchDebouncer(config.search_debounce_ms, clock=clock)
        self._filters: ColumnFilters = {}
        self._sort = SortState()
        self._page = 1
        self._page_size = int(config.default_page_size)
        self._visibility: Dict[str, bool] = {c.key: c.visible for c in config.columns}
        self.selection = SelectionTracker()

        self._view: ViewResult = self._recompute()

    # ------------------------------------------------------------------
    # Read-only state for renderers
    # ------------------------------------------------------------------
    @property
    def view(self) -> ViewResult:
        return self._view

    @property
    def columns(self) -> List[ColumnConfig]:
        return self.config.columns

    @property
    def search_buffer(self) -> str:
        return self._search.buffer

    @property
    def search_term(self) -> str:
        return self._search.term

    @property
    def search_pending(self) -> bool:
        return self._search.pending is not None

    @property
    def filters(self) -> ColumnFilters:
        return {k: list(v) for k, v in self._filters.items()}

    @property
    def sort_state(self) -> SortState:
        return self._sort

    @property
    def page(self) -> int:
        return self._page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def visibility(self) -> Dict[str, bool]:
        return dict(self._visibility)

    @property
    def visible_columns(self) -> List[ColumnConfig]:
        return list(visible_columns_for(self.config.columns, self._visibility))

    @property
    def selected(self) -> FrozenSet[int]:
        return self.selection.selected

    # ------------------------------------------------------------------
    # Recompute
    # ------------------------------------------------------------------
    def _recompute(self) -> ViewResult:
        with self._lock:
            view = compute_view(
                self.dataset,
                self.config.columns,
                search_term=self._search.term,
                filters=self._filters,
                sort_state=self._sort,
                page=self._page,
                page_size=self._page_size,
                visibility=self._visibility,
            )
            # Filter-driven shrinkage clamps the page instead of resetting it
            self._page = view.page
            self._view = view
            return view

    def _require_column(self, key: str) -> ColumnConfig:
        try:
            return self.config.column(key)
        except KeyError:
            raise KeyError(f"Column '{key}' is not configured for this table") from None

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def type_search(self, raw: Optional[str], now: Optional[float] = None) -> None:
        """Echo the keystroke into the input buffer and re-arm the debounce."""
        with self._lock:
            self._search.push(raw, now)

    def tick(self, now: Optional[float] = None) -> bool:
        """
        Apply a pending search term whose quiet period has elapsed.

        :return: True if the view was recomputed.
        """
        with self._lock:
            if not self._search.poll(now):
                return False
            logger.debug(
                "Search term applied",
                extra={"session_id": self.session_id, "term": self._search.term},
            )
            self._recompute()
            return True

    def set_search(self, raw: Optional[str]) -> ViewResult:
        """Set the search term immediately, bypassing the quiet period."""
        with self._lock:
            self._search.push(raw)
            self._search.flush()
            return self._recompute()

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------
    def add_filter_condition(
        self,
        column_key: str,
        op: Any = Operator.CONTAINS,
        value: str = "",
    ) -> ViewResult:
        with self._lock:
            self._require_column(column_key)
            condition = FilterCondition(op=Operator.parse(op), value=value)
            self._filters = fs.add_condition(self._filters, column_key, condition)
            return self._recompute()

    def update_filter_condition(
        self,
        column_key: str,
        index: int,
        *,
        op: Any = None,
        value: Optional[str] = None,
    ) -> ViewResult:
        with self._lock:
            self._filters = fs.update_condition(self._filters, column_key, index, op=op, value=value)
            return self._recompute()

    def remove_filter_condition(self, column_key: str, index: int) -> ViewResult:
        with self._lock:
            self._filters = fs.remove_condition(self._filters, column_key, index)
            return self._recompute()

    def clear_filters(self) -> ViewResult:
        with self._lock:
            self._filters = {}
            return self._recompute()

    # ------------------------------------------------------------------
    # Sort
    # ------------------------------------------------------------------
    def toggle_sort(self, column_key: str) -> ViewResult:
        """Header activation: asc -> desc -> none. Non-sortable columns are ignored."""
        with self._lock:
            column = self._require_column(column_key)
            if not column.sortable:
                return self._view
            self._sort = self._sort.toggled(column_key)
            return self._recompute()

    def set_sort(self, column_key: Optional[str], direction: Any = SortDirection.ASC) -> ViewResult:
        with self._lock:
            direction = SortDirection(direction)
            if column_key is None or direction == SortDirection.NONE:
                self._sort = SortState()
            else:
                self._require_column(column_key)
                self._sort = SortState(column_key, direction)
            return self._recompute()

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------
    def set_page(self, page: int) -> ViewResult:
        with self._lock:
            self._page = int(page)
            return self._recompute()

    def first_page(self) -> ViewResult:
        return self.set_page(1)

    def last_page(self) -> ViewResult:
        return self.set_page(self._view.total_pages)

    def next_page(self) -> ViewResult:
        return self.set_page(self._page + 1)

    def previous_page(self) -> ViewResult:
        return self.set_page(self._page - 1)

    def set_page_size(self, page_size: int) -> ViewResult:
        """Change the page size; always returns to page 1."""
        with self._lock:
            page_size = int(page_size)
            if page_size not in self.config.page_sizes:
                raise ValueError(
                    f"Page size {page_size} is not one of {self.config.page_sizes}"
                )
            self._page_size = page_size
            self._page = 1
            return self._recompute()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def click_row(self, index_in_page: int, *, shift: bool = False, toggle: bool = False) -> FrozenSet[int]:
        with self._lock:
            return self.selection.click(self._view.global_index(index_in_page), shift=shift, toggle=toggle)

    def select_all_on_page(self, checked: bool = True) -> FrozenSet[int]:
        with self._lock:
            self.selection.set_page_selected(self._view.start, self._view.page_count, checked)
            return self.selection.selected

    def page_fully_selected(self) -> bool:
        return self.selection.page_fully_selected(self._view.start, self._view.page_count)

    def clear_selection(self) -> None:
        with self._lock:
            self.selection.clear()

    def selected_records(self) -> List[Dict[str, Any]]:
        """Records currently at the selected global indices."""
        with self._lock:
            positions = self._view.positions
            picked = [positions[i] for i in self.selection.sorted() if i < len(positions)]
            return self.dataset.records_at(picked)

    # ------------------------------------------------------------------
    # Column visibility
    # ------------------------------------------------------------------
    def set_column_visible(self, column_key: str, visible: bool) -> ViewResult:
        with self._lock:
            self._require_column(column_key)
            self._visibility[column_key] = bool(visible)
            return self._recompute()

    def toggle_column_visibility(self, column_key: str) -> ViewResult:
        with self._lock:
            return self.set_column_visible(column_key, not self._visibility.get(column_key, False))

    def set_visible_columns(self, keys: List[str]) -> ViewResult:
        with self._lock:
            wanted = set(keys)
            self._visibility = {c.key: c.key in wanted for c in self.config.columns}
            return self._recompute()

    def show_all_columns(self) -> ViewResult:
        return self.set_visible_columns(self.config.column_keys)

    def hide_all_columns(self) -> ViewResult:
        return self.set_visible_columns([])

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------
    def state_dict(self) -> Dict[str, Any]:
        """Plain-data snapshot of the live state, for renderers and logging."""
        with self._lock:
            return {
                "session_id": self.session_id,
                "search_buffer": self._search.buffer,
                "search_term": self._search.term,
                "filters": fs.filters_to_dict(self._filters),
                "sort": self._sort.to_dict(),
                "page": self._page,
                "page_size": self._page_size,
                "visibility": dict(self._visibility),
                "selected": self.selection.sorted(),
            }
