from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import ALL, Input, Output, State, exceptions

from table_browser.ui.callbacks.callbacks_utils import bump, require_session, triggered_value
from table_browser.ui.ids import IDs
from table_browser.ui.layout.build_table_panel import SELECTION_RANGE, SELECTION_TOGGLE

if TYPE_CHECKING:
    from table_browser.ui.context import AppContext

logger = logging.getLogger(__name__)


def register_table_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # Page navigation + page size
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.VIEW_VERSION, "data", allow_duplicate=True),
        Input(IDs.Control.FIRST_PAGE_BTN, "n_clicks"),
        Input(IDs.Control.PREV_PAGE_BTN, "n_clicks"),
        Input(IDs.Control.NEXT_PAGE_BTN, "n_clicks"),
        Input(IDs.Control.LAST_PAGE_BTN, "n_clicks"),
        Input(IDs.Control.PAGE_INPUT, "value"),
        Input(IDs.Control.PAGE_SIZE_SELECT, "value"),
        State(IDs.Store.SESSION_ID, "data"),
        State(IDs.Store.VIEW_VERSION, "data"),
        prevent_initial_call=True,
    )
    def on_page_change(_first, _prev, _next, _last, page_value, page_size, session_id, version):
        session = require_session(ctx, session_id)
        trigger = dash.callback_context.triggered_id

        if trigger == IDs.Control.FIRST_PAGE_BTN:
            session.first_page()
        elif trigger == IDs.Control.PREV_PAGE_BTN:
            session.previous_page()
        elif trigger == IDs.Control.NEXT_PAGE_BTN:
            session.next_page()
        elif trigger == IDs.Control.LAST_PAGE_BTN:
            session.last_page()
        elif trigger == IDs.Control.PAGE_INPUT:
            # The renderer writes the clamped page back into this input
            if page_value is None or int(page_value) == session.page:
                raise exceptions.PreventUpdate
            session.set_page(int(page_value))
        elif trigger == IDs.Control.PAGE_SIZE_SELECT:
            if page_size is None or int(page_size) == session.page_size:
                raise exceptions.PreventUpdate
            session.set_page_size(int(page_size))
        else:
            raise exceptions.PreventUpdate

        return bump(version)

    # ---------------------------------------------------------
    # Header activation: asc -> desc -> none
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.VIEW_VERSION, "data", allow_duplicate=True),
        Input({"type": IDs.Pattern.SORT_HEADER, "index": ALL}, "n_clicks"),
        State(IDs.Store.SESSION_ID, "data"),
        State(IDs.Store.VIEW_VERSION, "data"),
        prevent_initial_call=True,
    )
    def on_sort_header(_clicks, session_id, version):
        if not triggered_value():
            raise exceptions.PreventUpdate
        session = require_session(ctx, session_id)
        column_key = dash.callback_context.triggered_id["index"]
        session.toggle_sort(column_key)
        return bump(version)

    # ---------------------------------------------------------
    # Row clicks (selection mode stands in for shift / ctrl)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.VIEW_VERSION, "data", allow_duplicate=True),
        Input({"type": IDs.Pattern.ROW, "index": ALL}, "n_clicks"),
        State(IDs.Control.SELECTION_MODE, "value"),
        State(IDs.Store.SESSION_ID, "data"),
        State(IDs.Store.VIEW_VERSION, "data"),
        prevent_initial_call=True,
    )
    def on_row_click(_clicks, mode, session_id, version):
        if not triggered_value():
            raise exceptions.PreventUpdate
        session = require_session(ctx, session_id)
        index_in_page = dash.callback_context.triggered_id["index"]
        session.click_row(
            index_in_page,
            shift=mode == SELECTION_RANGE,
            toggle=mode == SELECTION_TOGGLE,
        )
        return bump(version)

    @app.callback(
        Output(IDs.Store.VIEW_VERSION, "data", allow_duplicate=True),
        Input(IDs.Control.SELECT_ALL_PAGE, "value"),
        State(IDs.Store.SESSION_ID, "data"),
        State(IDs.Store.VIEW_VERSION, "data"),
        prevent_initial_call=True,
    )
    def on_select_all_page(value, session_id, version):
        session = require_session(ctx, session_id)
        checked = bool(value)
        if checked == session.page_fully_selected():
            raise exceptions.PreventUpdate
        session.select_all_on_page(checked)
        return bump(version)

    # ---------------------------------------------------------
    # Column visibility
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.COLUMN_CHECKLIST, "value"),
        Input(IDs.Control.SHOW_ALL_COLUMNS_BTN, "n_clicks"),
        Input(IDs.Control.HIDE_ALL_COLUMNS_BTN, "n_clicks"),
        prevent_initial_call=True,
    )
    def on_show_hide_all(_show, _hide):
        if dash.callback_context.triggered_id == IDs.Control.SHOW_ALL_COLUMNS_BTN:
            return ctx.config.column_keys
        return []

    @app.callback(
        Output(IDs.Store.VIEW_VERSION, "data", allow_duplicate=True),
        Output(IDs.Store.FILTER_VERSION, "data", allow_duplicate=True),
        Input(IDs.Control.COLUMN_CHECKLIST, "value"),
        State(IDs.Store.SESSION_ID, "data"),
        State(IDs.Store.VIEW_VERSION, "data"),
        State(IDs.Store.FILTER_VERSION, "data"),
        prevent_initial_call=True,
    )
    def on_column_visibility(keys, session_id, version, filter_version):
        session = require_session(ctx, session_id)
        session.set_visible_columns(list(keys or []))
        return bump(version), bump(filter_version)
