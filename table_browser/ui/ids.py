from __future__ import annotations

__all__ = [
    "IDs",
    "sort_header_id",
    "row_id",
    "filter_add_id",
    "filter_op_id",
    "filter_value_id",
    "filter_remove_id",
]


class IDs:
    class Store:
        SESSION_ID = "session-id"
        VIEW_VERSION = "view-version"
        FILTER_VERSION = "filter-version"

    class Control:
        # Toolbar
        SEARCH_INPUT = "search-input"
        SEARCH_INTERVAL = "search-interval"
        PAGE_SIZE_SELECT = "page-size-select"
        SHOW_ALL_COLUMNS_BTN = "show-all-columns-btn"
        HIDE_ALL_COLUMNS_BTN = "hide-all-columns-btn"
        CLEAR_FILTERS_BTN = "clear-filters-btn"
        EXPORT_BTN = "export-btn"
        DOWNLOAD_CSV = "download-csv"
        STATUS_BADGE = "status-badge"

        # Columns / filters
        COLUMN_CHECKLIST = "column-checklist"
        FILTER_PANEL = "filter-panel"

        # Table
        TABLE_CONTAINER = "table-container"
        SELECTION_MODE = "selection-mode"
        SELECT_ALL_PAGE = "select-all-page"
        SELECTION_SUMMARY = "selection-summary"

        # Pagination
        FIRST_PAGE_BTN = "first-page-btn"
        PREV_PAGE_BTN = "prev-page-btn"
        NEXT_PAGE_BTN = "next-page-btn"
        LAST_PAGE_BTN = "last-page-btn"
        PAGE_INPUT = "page-input"
        PAGE_TOTAL = "page-total"
        ROW_RANGE = "row-range"
        PAGINATION_BAR = "pagination-bar"

    class Pattern:
        # pattern-matching "type" strings
        SORT_HEADER = "sort-header"
        ROW = "table-row"
        FILTER_ADD = "filter-add"
        FILTER_OP = "filter-op"
        FILTER_VALUE = "filter-value"
        FILTER_REMOVE = "filter-remove"


def sort_header_id(column_key: str) -> dict:
    return {"type": IDs.Pattern.SORT_HEADER, "index": column_key}


def row_id(index_in_page: int) -> dict:
    return {"type": IDs.Pattern.ROW, "index": index_in_page}


def filter_add_id(column_key: str) -> dict:
    return {"type": IDs.Pattern.FILTER_ADD, "column": column_key}


def filter_op_id(column_key: str, index: int) -> dict:
    return {"type": IDs.Pattern.FILTER_OP, "column": column_key, "index": index}


def filter_value_id(column_key: str, index: int) -> dict:
    return {"type": IDs.Pattern.FILTER_VALUE, "column": column_key, "index": index}


def filter_remove_id(column_key: str, index: int) -> dict:
    return {"type": IDs.Pattern.FILTER_REMOVE, "column": column_key, "index": index}
