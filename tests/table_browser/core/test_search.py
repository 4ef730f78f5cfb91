from __future__ import annotations

from table_browser.config.model import ColumnConfig
from table_browser.core.dataset import TableDataset
from table_browser.core.search import (
    SearchDebouncer,
    normalise_search_term,
    row_matches_search,
    search_mask,
)

COLUMNS = [
    ColumnConfig(key="name", searchable=True),
    ColumnConfig(key="secret", searchable=True, visible=False),
    ColumnConfig(key="notes", searchable=False),
]


def _make_dataset() -> TableDataset:
    return TableDataset.from_records(
        [
            {"name": "Alice", "secret": "xyz", "notes": "needle"},
            {"name": "Bob", "secret": "needle", "notes": ""},
            {"name": "Needleman", "secret": "", "notes": ""},
        ]
    )


def test_normalise_search_term():
    assert normalise_search_term("  NeeDle ") == "needle"
    assert normalise_search_term(None) == ""


def test_search_covers_searchable_columns_even_when_hidden():
    ds = _make_dataset()
    mask = search_mask(ds, "needle", COLUMNS)
    # row 0 only matches in a non-searchable column
    assert list(mask) == [False, True, True]


def test_empty_term_matches_every_row():
    ds = _make_dataset()
    assert list(search_mask(ds, "", COLUMNS)) == [True, True, True]
    assert row_matches_search({"name": "x"}, "", COLUMNS)


def test_scalar_and_vectorised_search_agree():
    ds = _make_dataset()
    for term in ("needle", "b", "xyz", "zzz"):
        expected = [row_matches_search(r, term, COLUMNS) for r in ds.to_records()]
        assert list(search_mask(ds, term, COLUMNS)) == expected


def test_buffer_echoes_immediately_but_term_waits_for_quiet_period():
    deb = SearchDebouncer(quiet_ms=300)
    deb.push("Ab", now=0)

    assert deb.buffer == "Ab"
    assert deb.term == ""
    assert deb.poll(now=299) is False
    assert deb.term == ""
    assert deb.poll(now=300) is True
    assert deb.term == "ab"


def test_only_latest_pending_update_survives():
    deb = SearchDebouncer(quiet_ms=300)
    applied = []

    deb.push("a", now=0)
    deb.push("ab", now=100)
    deb.push("abc", now=200)
    for t in range(0, 1000, 50):
        if deb.poll(now=t):
            applied.append(deb.term)

    assert applied == ["abc"]


def test_separate_updates_after_quiet_period_each_apply():
    deb = SearchDebouncer(quiet_ms=300)
    applied = []

    deb.push("a", now=0)
    if deb.poll(now=350):
        applied.append(deb.term)
    deb.push("ab", now=400)
    if deb.poll(now=750):
        applied.append(deb.term)

    assert applied == ["a", "ab"]


def test_cancel_drops_pending_update():
    deb = SearchDebouncer(quiet_ms=300)
    deb.push("abc", now=0)
    deb.cancel()

    assert deb.pending is None
    assert deb.poll(now=1000) is False
    assert deb.term == ""


def test_flush_applies_without_waiting():
    deb = SearchDebouncer(quiet_ms=300)
    deb.push(" ABC ", now=0)

    assert deb.flush() is True
    assert deb.term == "abc"
    assert deb.flush() is False


def test_injected_clock_is_used_when_now_is_omitted():
    clock = {"t": 0.0}
    deb = SearchDebouncer(quiet_ms=300, clock=lambda: clock["t"])

    deb.push("abc")
    clock["t"] = 200
    assert deb.poll() is False
    clock["t"] = 300
    assert deb.poll() is True
    assert deb.term == "abc"
