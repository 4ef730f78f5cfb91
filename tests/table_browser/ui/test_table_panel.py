from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash, html

from table_browser.config.model import ColumnConfig, TableConfig
from table_browser.core.dataset import TableDataset
from table_browser.core.session import TableSession
from table_browser.ui.callbacks.callbacks_render import status_badge_text
from table_browser.ui.dash_app import create_dash_app, warn_on_missing_columns
from table_browser.ui.layout.build_filter_panel import build_filter_panel
from table_browser.ui.layout.build_table_panel import build_table


def _make_session() -> TableSession:
    config = TableConfig(
        columns=[
            ColumnConfig(key="name", header="Name", searchable=True, sortable=True, filterable=True),
            ColumnConfig(key="city", header="City", filterable=True),
        ],
        page_sizes=[2],
    )
    dataset = TableDataset.from_records(
        [
            {"name": "Alice", "city": "Paris"},
            {"name": "Bob", "city": "Berlin"},
            {"name": "Carla", "city": "Rome"},
        ]
    )
    return TableSession(config, dataset, session_id="ui")


def _body_rows(table: dbc.Table) -> list:
    thead, tbody = table.children
    return tbody.children


def test_build_table_renders_current_page():
    session = _make_session()
    session.toggle_sort("name")
    session.toggle_sort("name")
    session.click_row(0)

    table = build_table(session)

    assert isinstance(table, dbc.Table)
    thead, _ = table.children
    header_labels = [th.children.children for th in thead.children.children[1:]]
    assert header_labels == ["Name ▼", "City"]

    rows = _body_rows(table)
    assert len(rows) == 2
    assert rows[0].className == "table-active"
    assert rows[0].children[1].children == "Carla"
    assert rows[1].className == ""


def test_build_table_empty_states():
    session = _make_session()

    session.set_search("zzz")
    message = build_table(session)
    assert isinstance(message, html.Div)
    assert message.children == "No results found"

    session.set_search("")
    session.hide_all_columns()
    message = build_table(session)
    assert message.children.startswith("No columns selected")


def test_filter_panel_lists_filterable_columns():
    session = _make_session()
    session.add_filter_condition("city", "equals", "paris")

    panel = build_filter_panel(session)

    assert len(panel) == 2


def test_create_dash_app_from_shipped_config():
    config_dir = Path(__file__).resolve().parents[3] / "config"
    app = create_dash_app(config_dir)

    assert isinstance(app, Dash)
    assert app.title == "Reusable Data Table"


def test_status_badge_counts_rows_and_active_filters():
    session = _make_session()
    assert status_badge_text(session) == "3 rows (showing 2)"

    session.add_filter_condition("city", "equals", "paris")
    assert status_badge_text(session) == "1 rows (showing 1) | 1 active filter"

    session.add_filter_condition("city", "equals", "rome")
    assert status_badge_text(session) == "2 rows (showing 2) | 2 active filters"


def test_missing_configured_columns_are_reported(caplog):
    session = _make_session()
    config = TableConfig(
        columns=[ColumnConfig(key="name"), ColumnConfig(key="country")],
        page_sizes=[10],
    )

    with caplog.at_level(logging.WARNING, logger="table_browser.ui.dash_app"):
        missing = warn_on_missing_columns(config, session.dataset)

    assert missing == ["country"]
    assert "Configured columns missing from records" in caplog.text
    assert warn_on_missing_columns(session.config, session.dataset) == []
