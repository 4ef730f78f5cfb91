from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import ALL, Input, Output, State, exceptions

from table_browser.ui.callbacks.callbacks_utils import bump, require_session, triggered_value
from table_browser.ui.ids import IDs
from table_browser.ui.layout.build_filter_panel import build_filter_panel

if TYPE_CHECKING:
    from table_browser.ui.context import AppContext

logger = logging.getLogger(__name__)


def register_filter_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # Filter panel: re-rendered only when conditions are added/removed
    # (re-rendering while typing would reset the inputs)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.FILTER_PANEL, "children"),
        Input(IDs.Store.FILTER_VERSION, "data"),
        State(IDs.Store.SESSION_ID, "data"),
    )
    def render_filter_panel(_version, session_id):
        session = require_session(ctx, session_id)
        return build_filter_panel(session)

    # ---------------------------------------------------------
    # Add / remove / clear conditions
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.VIEW_VERSION, "data", allow_duplicate=True),
        Output(IDs.Store.FILTER_VERSION, "data", allow_duplicate=True),
        Input({"type": IDs.Pattern.FILTER_ADD, "column": ALL}, "n_clicks"),
        Input({"type": IDs.Pattern.FILTER_REMOVE, "column": ALL, "index": ALL}, "n_clicks"),
        Input(IDs.Control.CLEAR_FILTERS_BTN, "n_clicks"),
        State(IDs.Store.SESSION_ID, "data"),
        State(IDs.Store.VIEW_VERSION, "data"),
        State(IDs.Store.FILTER_VERSION, "data"),
        prevent_initial_call=True,
    )
    def on_filter_structure(_adds, _removes, _clear, session_id, version, filter_version):
        if not triggered_value():
            raise exceptions.PreventUpdate
        session = require_session(ctx, session_id)
        trigger = dash.callback_context.triggered_id

        if trigger == IDs.Control.CLEAR_FILTERS_BTN:
            session.clear_filters()
        elif trigger["type"] == IDs.Pattern.FILTER_ADD:
            session.add_filter_condition(trigger["column"])
        else:
            try:
                session.remove_filter_condition(trigger["column"], int(trigger["index"]))
            except IndexError:
                logger.warning("Stale filter condition removal ignored", extra={"trigger": trigger})
                raise exceptions.PreventUpdate

        return bump(version), bump(filter_version)

    # ---------------------------------------------------------
    # Edit operator / value of one condition
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.VIEW_VERSION, "data", allow_duplicate=True),
        Input({"type": IDs.Pattern.FILTER_OP, "column": ALL, "index": ALL}, "value"),
        Input({"type": IDs.Pattern.FILTER_VALUE, "column": ALL, "index": ALL}, "value"),
        State(IDs.Store.SESSION_ID, "data"),
        State(IDs.Store.VIEW_VERSION, "data"),
        prevent_initial_call=True,
    )
    def on_filter_edit(_ops, _values, session_id, version):
        trigger = dash.callback_context.triggered_id
        if not isinstance(trigger, dict):
            raise exceptions.PreventUpdate
        session = require_session(ctx, session_id)

        column_key = trigger["column"]
        index = int(trigger["index"])
        conditions = session.filters.get(column_key, [])
        if index >= len(conditions):
            raise exceptions.PreventUpdate

        value = triggered_value()
        current = conditions[index]
        if trigger["type"] == IDs.Pattern.FILTER_OP:
            if value is None or value == current.op.value:
                raise exceptions.PreventUpdate
            session.update_filter_condition(column_key, index, op=value)
        else:
            value = value or ""
            if value == current.value:
                raise exceptions.PreventUpdate
            session.update_filter_condition(column_key, index, value=value)

        return bump(version)
