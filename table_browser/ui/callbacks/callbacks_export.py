from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State, dcc

from table_browser.ui.callbacks.callbacks_utils import require_session
from table_browser.ui.ids import IDs

if TYPE_CHECKING:
    from table_browser.ui.context import AppContext

logger = logging.getLogger(__name__)


def register_export_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    @app.callback(
        Output(IDs.Control.DOWNLOAD_CSV, "data"),
        Input(IDs.Control.EXPORT_BTN, "n_clicks"),
        State(IDs.Store.SESSION_ID, "data"),
        prevent_initial_call=True,
    )
    def export_filtered_csv(_n_clicks, session_id):
        session = require_session(ctx, session_id)
        csv_text = ctx.export_service.export_view(session.view)
        return dcc.send_string(csv_text, ctx.export_service.filename)
