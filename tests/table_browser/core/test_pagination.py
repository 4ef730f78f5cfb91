from __future__ import annotations

from table_browser.core.pagination import clamp_page, paginate, row_range_label, total_pages


def test_page_beyond_range_is_clamped_to_last_page():
    rows = list(range(7))
    result = paginate(rows, page_size=5, page=10)

    assert result.page == 2
    assert result.total_pages == 2
    assert list(result.rows) == rows[5:7]
    assert (result.start, result.end) == (5, 7)


def test_page_below_one_is_clamped_to_first_page():
    result = paginate(list(range(7)), page_size=5, page=0)
    assert result.page == 1
    assert list(result.rows) == [0, 1, 2, 3, 4]

    assert clamp_page(-3, 7, 5) == 1


def test_empty_result_set_still_has_one_page():
    result = paginate([], page_size=10, page=4)
    assert result.page == 1
    assert result.total_pages == 1
    assert list(result.rows) == []


def test_total_pages():
    assert total_pages(0, 10) == 1
    assert total_pages(10, 10) == 1
    assert total_pages(11, 10) == 2
    assert total_pages(25, 5) == 5


def test_exact_last_page():
    result = paginate(list(range(10)), page_size=5, page=2)
    assert list(result.rows) == [5, 6, 7, 8, 9]


def test_row_range_label():
    assert row_range_label(7, 5, 7) == "Rows 6-7 of 7"
    assert row_range_label(0, 0, 0) == "Rows 0-0 of 0"
