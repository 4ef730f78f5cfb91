from __future__ import annotations

from table_browser.config.model import ColumnConfig, TableConfig
from table_browser.core.dataset import TableDataset
from table_browser.services.session_service import SessionService


def _make_service(max_sessions: int = 256) -> SessionService:
    config = TableConfig(columns=[ColumnConfig(key="name", searchable=True)], page_sizes=[10])
    dataset = TableDataset.from_records([{"name": "Alice"}, {"name": "Bob"}])
    return SessionService(config, dataset, max_sessions=max_sessions)


def test_ensure_session_creates_once():
    service = _make_service()

    first = service.ensure_session("s1")
    second = service.ensure_session("s1")

    assert first is second
    assert first.session_id == "s1"
    assert len(service) == 1
    assert "s1" in service


def test_sessions_are_independent():
    service = _make_service()
    a = service.ensure_session("a")
    b = service.ensure_session("b")

    a.set_search("alice")

    assert a.view.total_rows == 1
    assert b.view.total_rows == 2


def test_get_unknown_session_returns_none():
    assert _make_service().get("nope") is None


def test_least_recently_used_session_is_evicted():
    service = _make_service(max_sessions=2)
    service.ensure_session("a")
    service.ensure_session("b")
    service.get("a")
    service.ensure_session("c")

    assert "a" in service
    assert "b" not in service
    assert "c" in service


def test_drop_session():
    service = _make_service()
    service.ensure_session("a")

    assert service.drop_session("a") is True
    assert service.drop_session("a") is False
    assert len(service) == 0
