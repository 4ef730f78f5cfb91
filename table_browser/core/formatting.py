from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Dict, Optional

import pandas as pd

from table_browser.config.model import ColumnConfig, FormatType, Transform
from table_browser.core.compare import parse_numeric, to_text

_WORD_START = re.compile(r"\b\w")


def format_number(number: float, decimals: Optional[int]) -> str:
    """
    Thousands separators, at most `decimals` fraction digits (trailing zeros dropped).

    Halves round away from zero: 2.5 -> "3", 1234.5 -> "1,235".
    """
    decimals = decimals if isinstance(decimals, int) and decimals >= 0 else 0
    with localcontext() as ctx:
        # room for every digit of the largest finite float
        ctx.prec = 330 + decimals
        rounded = Decimal(str(number)).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
    text = f"{rounded:,.{decimals}f}"
    if decimals and "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_date(value: Any) -> Optional[str]:
    ts = pd.to_datetime(to_text(value), errors="coerce")
    if pd.isna(ts):
        return None
    return ts.strftime("%Y-%m-%d")


def apply_transform(text: str, transform: Transform) -> str:
    if transform == Transform.UPPERCASE:
        return text.upper()
    if transform == Transform.LOWERCASE:
        return text.lower()
    if transform == Transform.CAPITALIZE:
        return _WORD_START.sub(lambda m: m.group(0).upper(), text)
    return text


def format_cell_value(value: Any, column: ColumnConfig) -> str:
    """
    Display text of a raw value for a column.

    Values that do not parse as their declared type are shown as-is.
    """
    raw = to_text(value)
    if raw == "":
        return ""

    fmt = column.format
    if fmt.type.is_numeric:
        number = parse_numeric(raw)
        if number is None:
            return raw
        text = format_number(number, fmt.decimals)
        if fmt.type == FormatType.CURRENCY and fmt.currency:
            return f"{fmt.currency} {text}"
        return text

    if fmt.type == FormatType.DATE:
        return format_date(raw) or raw

    return apply_transform(raw, fmt.transform)


def render_cell(row: Dict[str, Any], column: ColumnConfig) -> Any:
    """Use the column's custom renderer when it has one."""
    value = row.get(column.key)
    if column.render is not None:
        return column.render(value, row)
    return format_cell_value(value, column)
