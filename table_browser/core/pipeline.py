from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from table_browser.config.model import ColumnConfig
from table_browser.core.dataset import TableDataset
from table_browser.core.filter_state import FilterCondition, filter_mask
from table_browser.core.pagination import page_bounds
from table_browser.core.search import normalise_search_term, search_mask
from table_browser.core.sort import SortState, sort_positions

logger = logging.getLogger(__name__)


class ViewStatus(str, Enum):
    OK = "ok"
    NO_COLUMNS = "no_columns"
    NO_RESULTS = "no_results"


@dataclass(frozen=True, eq=False)
class ViewResult:
    """
    Derived, read-only output of the view pipeline.

    - rows: records on the current page, in display order
    - positions: dataset positions of every filtered row, in sorted order
      (global index i is positions[i])
    - total_rows / total_pages / page / page_size: pagination after clamping
    - start / end: global index range [start, end) of the current page
    - visible_columns: column descriptors currently shown
    - status: empty-state signal for the renderer
    """
    rows: List[Dict[str, Any]]
    positions: np.ndarray
    total_rows: int
    total_pages: int
    page: int
    page_size: int
    start: int
    end: int
    visible_columns: Tuple[ColumnConfig, ...]
    status: ViewStatus
    dataset: TableDataset

    @property
    def is_empty(self) -> bool:
        return self.status != ViewStatus.OK

    @property
    def page_count(self) -> int:
        """Number of rows shown on the current page."""
        return self.end - self.start

    def global_index(self, index_in_page: int) -> int:
        return self.start + index_in_page

    def filtered_records(self) -> List[Dict[str, Any]]:
        """The full filtered and sorted sequence (all pages), e.g. for export."""
        return self.dataset.records_at(self.positions)


def visible_columns_for(
    columns: Sequence[ColumnConfig],
    visibility: Optional[Mapping[str, bool]] = None,
) -> Tuple[ColumnConfig, ...]:
    if visibility is None:
        return tuple(c for c in columns if c.visible)
    return tuple(c for c in columns if visibility.get(c.key, c.visible))


def compute_view(
    dataset: TableDataset,
    columns: Sequence[ColumnConfig],
    *,
    search_term: str = "",
    filters: Optional[Mapping[str, Sequence[FilterCondition]]] = None,
    sort_state: Optional[SortState] = None,
    page: int = 1,
    page_size: int = 10,
    visibility: Optional[Mapping[str, bool]] = None,
) -> ViewResult:
    """
    Run the view pipeline: search -> column filters -> sort -> page clamp -> page slice.

    Every stage works on the full output of the previous one, so counts and
    the page clamp always reflect the whole filtered collection. The result
    depends only on the arguments: the same inputs give the same view.
    """
    term = normalise_search_term(search_term)
    sort_state = sort_state or SortState()

    positions = dataset.all_positions()

    positions = positions[search_mask(dataset, term, columns)]

    if filters:
        positions = positions[filter_mask(dataset, filters, positions)]

    positions = sort_positions(dataset, positions, sort_state, columns)

    n_rows = len(positions)
    page, pages, start, end = page_bounds(n_rows, page_size, page)

    visible = visible_columns_for(columns, visibility)
    if not visible:
        status = ViewStatus.NO_COLUMNS
    elif n_rows == 0:
        status = ViewStatus.NO_RESULTS
    else:
        status = ViewStatus.OK

    logger.debug(
        "View recomputed",
        extra={
            "dataset": dataset.name,
            "search_term": term,
            "n_filtered": n_rows,
            "page": page,
            "total_pages": pages,
            "status": status.value,
        },
    )

    return ViewResult(
        rows=dataset.records_at(positions[start:end]),
        positions=positions,
        total_rows=n_rows,
        total_pages=pages,
        page=page,
        page_size=max(1, page_size),
        start=start,
        end=end,
        visible_columns=visible,
        status=status,
        dataset=dataset,
    )
