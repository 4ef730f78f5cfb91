from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

DEFAULT_PAGE_SIZES = (10, 25, 50)
DEFAULT_DEBOUNCE_MS = 300


class FormatType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    CURRENCY = "currency"

    @property
    def is_numeric(self) -> bool:
        return self in (FormatType.NUMBER, FormatType.CURRENCY)


class Transform(str, Enum):
    NONE = "none"
    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"
    CAPITALIZE = "capitalize"


def _pick(raw: Dict[str, Any], *names: str, default: Any = None) -> Any:
    """Return the first key present in raw; config files use camelCase or snake_case."""
    for name in names:
        if name in raw:
            return raw[name]
    return default


@dataclass(frozen=True)
class ColumnFormat:
    """
    Display / comparison format of a column.

    The format type is resolved once here so sorting and rendering dispatch
    on a closed set instead of inspecting values.
    """
    type: FormatType = FormatType.TEXT
    transform: Transform = Transform.NONE
    currency: str = ""
    decimals: Optional[int] = None

    @classmethod
    def from_raw(cls, raw: Optional[Dict[str, Any]]) -> ColumnFormat:
        raw = raw or {}
        return cls(
            type=FormatType(raw.get("type") or FormatType.TEXT.value),
            transform=Transform(raw.get("transform") or Transform.NONE.value),
            currency=str(raw.get("currency") or ""),
            decimals=raw.get("decimals"),
        )


@dataclass(frozen=True)
class ColumnConfig:
    """
    Column descriptor: one field's visibility, search/sort/filter eligibility
    and display format.
    """
    key: str
    header: Optional[str] = None
    visible: bool = True
    searchable: bool = False
    sortable: bool = False
    filterable: bool = False
    format: ColumnFormat = field(default_factory=ColumnFormat)
    render: Optional[Callable[[Any, Dict[str, Any]], Any]] = None
    width: Optional[int] = None

    @property
    def label(self) -> str:
        return self.header if self.header is not None else self.key

    @property
    def format_type(self) -> FormatType:
        return self.format.type

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> ColumnConfig:
        return cls(
            key=str(raw["key"]),
            header=raw.get("header"),
            visible=raw.get("visible") is not False,
            searchable=bool(raw.get("searchable", False)),
            sortable=bool(raw.get("sortable", False)),
            filterable=bool(raw.get("filterable", False)),
            format=ColumnFormat.from_raw(raw.get("format")),
            width=raw.get("width"),
        )


@dataclass
class TableConfig:
    """
    Parsed table configuration.

    - columns: ordered column descriptors
    - page_sizes: enumerated page sizes offered to the user
    - default_page_size: initial page size, defaults to the first entry of page_sizes
    - search_debounce_ms: quiet period before a typed search term takes effect
    - title: UI title
    - data_source: path or URL of the records, resolved by the loader
    """
    columns: List[ColumnConfig]
    page_sizes: List[int] = field(default_factory=lambda: list(DEFAULT_PAGE_SIZES))
    default_page_size: Optional[int] = None
    search_debounce_ms: int = DEFAULT_DEBOUNCE_MS
    title: str = "Data Table"
    data_source: Optional[str] = None
    source_path: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.default_page_size is None:
            self.default_page_size = self.page_sizes[0]

    @property
    def column_keys(self) -> List[str]:
        return [c.key for c in self.columns]

    def column(self, key: str) -> ColumnConfig:
        for col in self.columns:
            if col.key == key:
                return col
        raise KeyError(f"Column '{key}' not found")

    @classmethod
    def from_raw(cls, raw: Dict[str, Any], source_path: Optional[Path] = None) -> TableConfig:
        page_sizes = [int(s) for s in _pick(raw, "pageSizes", "page_sizes", default=DEFAULT_PAGE_SIZES)]
        default_size = _pick(raw, "defaultPageSize", "default_page_size")
        return cls(
            columns=[ColumnConfig.from_raw(c) for c in raw.get("columns", [])],
            page_sizes=page_sizes,
            default_page_size=int(default_size) if default_size is not None else None,
            search_debounce_ms=int(
                _pick(raw, "globalSearchDebounceMs", "search_debounce_ms", default=DEFAULT_DEBOUNCE_MS)
            ),
            title=_pick(raw, "title", "ui_title", default="Data Table"),
            data_source=_pick(raw, "dataSource", "data_source"),
            source_path=source_path,
        )
