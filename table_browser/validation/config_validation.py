from __future__ import annotations

from typing import Any, Dict, List

from table_browser.config.model import FormatType, Transform
from table_browser.validation.errors import ValidationIssue

_FORMAT_TYPES = {t.value for t in FormatType}
_TRANSFORMS = {t.value for t in Transform}


def validate_table_config(raw: Dict[str, Any]) -> List[ValidationIssue]:
    """
    Collect every problem in a raw table config instead of failing on the first one.

    Checked once at load time; the view pipeline does not re-validate these
    invariants on every recompute.
    """
    issues: List[ValidationIssue] = []

    columns = raw.get("columns")
    if not isinstance(columns, list):
        issues.append(ValidationIssue("columns_missing", "'columns' must be a list of column descriptors"))
        columns = []

    seen: set[str] = set()
    for idx, col in enumerate(columns):
        if not isinstance(col, dict) or not col.get("key"):
            issues.append(ValidationIssue("column_key_missing", f"Column #{idx} has no 'key'"))
            continue

        key = str(col["key"])
        if key in seen:
            issues.append(ValidationIssue("column_key_duplicate", f"Column key '{key}' is used more than once"))
        seen.add(key)

        fmt = col.get("format") or {}
        fmt_type = fmt.get("type")
        if fmt_type is not None and fmt_type not in _FORMAT_TYPES:
            issues.append(
                ValidationIssue("format_type_unknown", f"Column '{key}' has unknown format type '{fmt_type}'")
            )
        transform = fmt.get("transform")
        if transform is not None and transform not in _TRANSFORMS:
            issues.append(
                ValidationIssue("transform_unknown", f"Column '{key}' has unknown transform '{transform}'")
            )

    page_sizes = raw.get("pageSizes", raw.get("page_sizes"))
    if page_sizes is not None:
        if not isinstance(page_sizes, list) or not page_sizes:
            issues.append(ValidationIssue("page_sizes_empty", "'pageSizes' must be a non-empty list"))
            page_sizes = None
        elif any(not isinstance(s, int) or isinstance(s, bool) or s < 1 for s in page_sizes):
            issues.append(ValidationIssue("page_size_invalid", "Every page size must be a positive integer"))

    default_size = raw.get("defaultPageSize", raw.get("default_page_size"))
    if default_size is not None and page_sizes and default_size not in page_sizes:
        issues.append(
            ValidationIssue(
                "default_page_size_unknown",
                f"defaultPageSize {default_size} is not one of the offered page sizes {page_sizes}",
            )
        )

    debounce = raw.get("globalSearchDebounceMs", raw.get("search_debounce_ms"))
    if debounce is not None and (not isinstance(debounce, (int, float)) or debounce < 0):
        issues.append(ValidationIssue("debounce_invalid", "globalSearchDebounceMs must be a non-negative number"))

    return issues
