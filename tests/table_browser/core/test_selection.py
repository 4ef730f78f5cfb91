from __future__ import annotations

from table_browser.core.selection import SelectionTracker


def test_shift_click_extends_range_then_plain_click_replaces():
    sel = SelectionTracker()
    sel.click(2)
    assert sel.click(6, shift=True) == {2, 3, 4, 5, 6}
    assert sel.click(4) == {4}


def test_plain_click_on_sole_selection_clears_it():
    sel = SelectionTracker()
    sel.click(3)
    assert sel.click(3) == frozenset()


def test_plain_click_replaces_multi_selection_even_if_member():
    sel = SelectionTracker([1, 2])
    assert sel.click(2) == {2}


def test_toggle_flips_only_that_row():
    sel = SelectionTracker()
    sel.click(1)
    sel.click(5, toggle=True)
    assert sel.selected == {1, 5}
    sel.click(1, toggle=True)
    assert sel.selected == {5}


def test_range_is_anchored_on_last_clicked_index():
    sel = SelectionTracker()
    sel.click(0)
    sel.click(9, toggle=True)
    assert sel.click(7, shift=True) == {0, 7, 8, 9}


def test_range_is_a_union_with_existing_selection():
    sel = SelectionTracker()
    sel.click(10)
    sel.click(8, shift=True)
    sel.click(2, toggle=True)
    assert sel.click(0, shift=True) == {0, 1, 2, 8, 9, 10}


def test_shift_click_with_empty_selection_acts_as_plain_click():
    sel = SelectionTracker()
    assert sel.click(4, shift=True) == {4}


def test_select_and_deselect_page_leave_other_pages_alone():
    sel = SelectionTracker()
    sel.click(1)
    sel.select_page(start=5, count=5)
    assert sel.selected == {1, 5, 6, 7, 8, 9}
    assert sel.page_fully_selected(5, 5)

    sel.deselect_page(start=5, count=5)
    assert sel.selected == {1}
    assert not sel.page_fully_selected(5, 5)


def test_empty_page_is_never_fully_selected():
    assert not SelectionTracker().page_fully_selected(0, 0)


def test_clear_resets_anchor():
    sel = SelectionTracker()
    sel.click(3)
    sel.clear()
    assert len(sel) == 0
    assert sel.anchor is None
    assert sel.sorted() == []
