from __future__ import annotations

import math
import re
import unicodedata
from typing import Any, Callable, Optional

import pandas as pd
from pandas.errors import OutOfBoundsDatetime, OutOfBoundsTimedelta

from table_browser.config.model import FormatType

_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_NON_NUMERIC = re.compile(r"[^0-9.\-]")

Comparator = Callable[[Any, Any], float]

_EPOCH = pd.Timestamp(0, tz="UTC").as_unit("us")
_MICROSECOND = pd.Timedelta(microseconds=1)


def to_text(value: Any) -> str:
    """String form of a raw field value; missing values are the empty string."""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value)


def parse_float(text: Any) -> Optional[float]:
    """
    Parse the leading floating-point number of a string.

    "12.5kg" -> 12.5, "abc" -> None, "" -> None. Never raises.
    """
    match = _LEADING_FLOAT.match(to_text(text))
    if match is None:
        return None
    try:
        return float(match.group(1))
    except (OverflowError, ValueError):
        return None


def parse_numeric(value: Any) -> Optional[float]:
    """Numeric value of a number/currency field, ignoring symbols and separators."""
    number = parse_float(_NON_NUMERIC.sub("", to_text(value)))
    if number is None or not math.isfinite(number):
        return None
    return number


def date_key(value: Any) -> int:
    """
    Microseconds since the epoch (UTC); unparseable or empty values are the epoch.

    Microseconds cover years 1 to 9999, so dates outside the nanosecond
    Timestamp range still get an ordered key.
    """
    text = to_text(value).strip()
    if not text:
        return 0
    try:
        ts = pd.to_datetime(text, errors="coerce", utc=True)
        if pd.isna(ts):
            return 0
        return int((ts - _EPOCH) // _MICROSECOND)
    except (OverflowError, OutOfBoundsDatetime, OutOfBoundsTimedelta, ValueError):
        return 0


def collation_key(value: Any) -> tuple:
    """
    Sort key for text, independent of the process locale.

    Primary: case-folded text with accents removed, so "apple" < "Banana" < "cherry".
    Ties: lowercase before uppercase, unaccented before accented.
    """
    text = to_text(value)
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return base, text.swapcase()


def compare_text(a: Any, b: Any) -> int:
    ka, kb = collation_key(a), collation_key(b)
    return (ka > kb) - (ka < kb)


def compare_numbers(a: Any, b: Any) -> float:
    na = parse_numeric(a)
    nb = parse_numeric(b)
    if na is None or nb is None:
        return compare_text(a, b)
    return na - nb


def compare_dates(a: Any, b: Any) -> int:
    return date_key(a) - date_key(b)


def comparator_for(format_type: Optional[FormatType]) -> Comparator:
    if format_type is not None and format_type.is_numeric:
        return compare_numbers
    if format_type == FormatType.DATE:
        return compare_dates
    return compare_text


def compare_values(a: Any, b: Any, format_type: Optional[FormatType] = None) -> float:
    """
    Type-aware comparison of two raw field values.

    Returns a negative number, zero or a positive number.
    - number / currency: numeric difference, falling back to text collation
      when either side is not a finite number
    - date: difference in microseconds, unparseable dates count as the epoch
    - text (default): collation order, see `collation_key`
    """
    return comparator_for(format_type)(a, b)
