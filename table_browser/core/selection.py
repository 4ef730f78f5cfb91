from __future__ import annotations

from typing import FrozenSet, Iterable, List, Optional, Set


class SelectionTracker:
    """
    Tracks selected rows by global index into the filtered/sorted sequence.

    Indices are positional: after the view is recomputed they refer to
    whatever rows now sit at those positions.

    Interaction modes for a click on index i:
    - plain: i alone becomes the selection; clicking the sole selected row clears it
    - range (shift): adds every index between the anchor and i to the selection
    - toggle (ctrl/meta): flips i only

    The anchor is the last clicked index.
    """

    def __init__(self, selected: Optional[Iterable[int]] = None) -> None:
        self._selected: Set[int] = set(selected or ())
        self.anchor: Optional[int] = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def selected(self) -> FrozenSet[int]:
        return frozenset(self._selected)

    def __contains__(self, index: object) -> bool:
        return index in self._selected

    def __len__(self) -> int:
        return len(self._selected)

    def sorted(self) -> List[int]:
        return sorted(self._selected)

    def page_fully_selected(self, start: int, count: int) -> bool:
        """State of the 'select all on page' checkbox."""
        return count > 0 and all(i in self._selected for i in range(start, start + count))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def click(self, index: int, *, shift: bool = False, toggle: bool = False) -> FrozenSet[int]:
        if shift and self._selected:
            anchor = self.anchor if self.anchor is not None else max(self._selected)
            lo, hi = min(anchor, index), max(anchor, index)
            self._selected.update(range(lo, hi + 1))
        elif toggle:
            if index in self._selected:
                self._selected.discard(index)
            else:
                self._selected.add(index)
        elif self._selected == {index}:
            self._selected.clear()
        else:
            self._selected = {index}

        self.anchor = index
        return self.selected

    def select_page(self, start: int, count: int) -> None:
        self._selected.update(range(start, start + count))

    def deselect_page(self, start: int, count: int) -> None:
        """Remove exactly the page's indices; selections on other pages stay."""
        self._selected.difference_update(range(start, start + count))

    def set_page_selected(self, start: int, count: int, checked: bool) -> None:
        if checked:
            self.select_page(start, count)
        else:
            self.deselect_page(start, count)

    def clear(self) -> None:
        self._selected.clear()
        self.anchor = None
