from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from table_browser.core.compare import to_text


class TableDataset:
    """
    Immutable record collection backing a table session.

    Includes:
    - The records as an object-dtype DataFrame (raw values untouched)
    - Positional access: a row's position is its index in the input collection
    - Cached lower-cased text form of each column, shared by search and filters
    """

    def __init__(self, frame: pd.DataFrame, name: str = "records") -> None:
        frame = frame.reset_index(drop=True).astype(object)
        self.frame = frame.where(frame.notna(), None)
        self.name = name

        # Lower-cased string Series per column, built on first use
        self._text_cache: Dict[str, pd.Series] = {}

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------
    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        columns: Optional[Sequence[str]] = None,
        name: str = "records",
    ) -> TableDataset:
        rows = [dict(r) for r in records]
        # dtype=object keeps raw values as given (no int -> float upcast around gaps)
        frame = pd.DataFrame(rows, columns=list(columns) if columns is not None else None, dtype=object)
        return cls(frame, name=name)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self.frame)

    @property
    def columns(self) -> List[str]:
        return [str(c) for c in self.frame.columns]

    def has_column(self, key: str) -> bool:
        return key in self.frame.columns

    def all_positions(self) -> np.ndarray:
        return np.arange(len(self.frame))

    def values(self, key: str) -> pd.Series:
        """Raw values of a column; a column absent from the records reads as None."""
        if key in self.frame.columns:
            return self.frame[key]
        return pd.Series([None] * len(self.frame), index=self.frame.index, dtype=object)

    def text(self, key: str) -> pd.Series:
        """
        Lower-cased string form of a column.

        Computing it is a full pass over the column, so it is cached per
        dataset: the records never change during a session.
        """
        cached = self._text_cache.get(key)
        if cached is not None:
            return cached

        series = self.values(key).map(to_text).astype(str).str.lower()
        self._text_cache[key] = series
        return series

    def records_at(self, positions: Sequence[int]) -> List[Dict[str, Any]]:
        if len(positions) == 0:
            return []
        return self.frame.iloc[list(positions)].to_dict("records")

    def to_records(self) -> List[Dict[str, Any]]:
        return self.frame.to_dict("records")
