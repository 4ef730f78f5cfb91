from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence

import numpy as np

from table_browser.config.model import ColumnConfig, DEFAULT_DEBOUNCE_MS
from table_browser.core.compare import to_text
from table_browser.core.dataset import TableDataset

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def normalise_search_term(raw: Optional[str]) -> str:
    return to_text(raw).strip().lower()


def searchable_keys(columns: Sequence[ColumnConfig]) -> list[str]:
    """Keys searched by the global search box; visibility does not matter."""
    return [c.key for c in columns if c.searchable]


def row_matches_search(row: Mapping[str, Any], term: str, columns: Sequence[ColumnConfig]) -> bool:
    if not term:
        return True
    return any(term in to_text(row.get(key)).lower() for key in searchable_keys(columns))


def search_mask(dataset: TableDataset, term: str, columns: Sequence[ColumnConfig]) -> np.ndarray:
    """
    Mask of rows where any searchable column contains the term.

    An empty term matches every row.
    """
    n = len(dataset)
    if not term:
        return np.ones(n, dtype=bool)

    mask = np.zeros(n, dtype=bool)
    for key in searchable_keys(columns):
        mask |= dataset.text(key).str.contains(term, regex=False).to_numpy(dtype=bool)
    return mask


@dataclass(frozen=True)
class PendingSearch:
    term: str
    due_at: float


class SearchDebouncer:
    """
    Debounces the global search input.

    The input buffer follows every keystroke; the effective term only changes
    once `quiet_ms` has passed without further input. Each new keystroke
    replaces the pending update, so only the most recent one can ever apply.

    Times are milliseconds. The clock is injectable so callers (and tests)
    can drive it explicitly with `now=`.
    """

    def __init__(self, quiet_ms: float = DEFAULT_DEBOUNCE_MS, clock: Optional[Clock] = None) -> None:
        self.quiet_ms = quiet_ms
        self._clock = clock or monotonic_ms
        self.buffer = ""
        self.term = ""
        self._pending: Optional[PendingSearch] = None

    @property
    def pending(self) -> Optional[PendingSearch]:
        return self._pending

    def _now(self, now: Optional[float]) -> float:
        return self._clock() if now is None else now

    def push(self, raw: Optional[str], now: Optional[float] = None) -> None:
        """Record a keystroke and re-arm the quiet period."""
        self.buffer = to_text(raw)
        if self._pending is not None:
            logger.debug("Discarding superseded search update", extra={"term": self._pending.term})
        self._pending = PendingSearch(
            term=normalise_search_term(self.buffer),
            due_at=self._now(now) + self.quiet_ms,
        )

    def poll(self, now: Optional[float] = None) -> bool:
        """
        Apply the pending term if its quiet period has elapsed.

        :return: True if a pending update was applied.
        """
        if self._pending is None or self._now(now) < self._pending.due_at:
            return False
        return self.flush()

    def flush(self) -> bool:
        """Apply the pending term immediately, if there is one."""
        if self._pending is None:
            return False
        self.term = self._pending.term
        self._pending = None
        return True

    def cancel(self) -> None:
        self._pending = None

    def reset(self) -> None:
        self.buffer = ""
        self.term = ""
        self._pending = None
