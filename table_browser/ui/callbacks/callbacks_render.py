from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State, html

from table_browser.core.filter_state import active_filter_count
from table_browser.core.pagination import row_range_label
from table_browser.core.session import TableSession
from table_browser.ui.callbacks.callbacks_utils import require_session
from table_browser.ui.ids import IDs
from table_browser.ui.layout.build_table_panel import build_table

if TYPE_CHECKING:
    from table_browser.ui.context import AppContext

logger = logging.getLogger(__name__)


def status_badge_text(session: TableSession) -> str:
    """Row counts for the toolbar badge, plus the number of active filter conditions."""
    view = session.view
    text = f"{view.total_rows} rows (showing {view.page_count})"
    n_filters = active_filter_count(session.filters)
    if n_filters:
        text += f" | {n_filters} active filter" + ("s" if n_filters != 1 else "")
    return text


def register_render_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # View version -> table, counts and pagination
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.TABLE_CONTAINER, "children"),
        Output(IDs.Control.STATUS_BADGE, "children"),
        Output(IDs.Control.PAGE_INPUT, "value"),
        Output(IDs.Control.PAGE_INPUT, "max"),
        Output(IDs.Control.PAGE_TOTAL, "children"),
        Output(IDs.Control.ROW_RANGE, "children"),
        Output(IDs.Control.SELECTION_SUMMARY, "children"),
        Output(IDs.Control.FIRST_PAGE_BTN, "disabled"),
        Output(IDs.Control.PREV_PAGE_BTN, "disabled"),
        Output(IDs.Control.NEXT_PAGE_BTN, "disabled"),
        Output(IDs.Control.LAST_PAGE_BTN, "disabled"),
        Output(IDs.Control.SEARCH_INPUT, "disabled"),
        Output(IDs.Control.PAGINATION_BAR, "style"),
        Input(IDs.Store.VIEW_VERSION, "data"),
        State(IDs.Store.SESSION_ID, "data"),
    )
    def render_view(_version, session_id):
        session = require_session(ctx, session_id)
        view = session.view

        try:
            table = build_table(session)
        except Exception:
            logger.exception("Failed to render table", extra={"session_id": session.session_id})
            table = html.Div("Something went wrong while rendering this table.", className="text-danger")

        no_columns = not view.visible_columns
        on_first = view.page <= 1
        on_last = view.page >= view.total_pages
        n_selected = len(session.selection)

        return (
            table,
            status_badge_text(session),
            view.page,
            view.total_pages,
            f"of {view.total_pages}",
            row_range_label(view.total_rows, view.start, view.end),
            f"{n_selected} selected" if n_selected else "",
            on_first,
            on_first,
            on_last,
            on_last,
            no_columns,
            {"display": "none"} if no_columns else {},
        )
