from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State, exceptions

from table_browser.ui.callbacks.callbacks_utils import bump, require_session
from table_browser.ui.ids import IDs

if TYPE_CHECKING:
    from table_browser.ui.context import AppContext

logger = logging.getLogger(__name__)


def register_search_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # Keystrokes: fill the buffer, arm the debounce poller
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.SEARCH_INTERVAL, "disabled", allow_duplicate=True),
        Input(IDs.Control.SEARCH_INPUT, "value"),
        State(IDs.Store.SESSION_ID, "data"),
        prevent_initial_call=True,
    )
    def on_search_input(value, session_id):
        session = require_session(ctx, session_id)
        session.type_search(value or "")
        return False

    # ---------------------------------------------------------
    # Poller: apply the term once the quiet period has elapsed
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.VIEW_VERSION, "data", allow_duplicate=True),
        Output(IDs.Control.SEARCH_INTERVAL, "disabled", allow_duplicate=True),
        Input(IDs.Control.SEARCH_INTERVAL, "n_intervals"),
        State(IDs.Store.SESSION_ID, "data"),
        State(IDs.Store.VIEW_VERSION, "data"),
        prevent_initial_call=True,
    )
    def on_search_tick(_n, session_id, version):
        session = require_session(ctx, session_id)
        if session.tick():
            return bump(version), not session.search_pending
        if not session.search_pending:
            return dash.no_update, True
        raise exceptions.PreventUpdate
