from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc, html

from table_browser.ui.ids import IDs
from table_browser.ui.layout.build_filter_panel import build_column_panel
from table_browser.ui.layout.build_table_panel import build_pagination_bar
from table_browser.ui.layout.build_toolbar import build_toolbar

if TYPE_CHECKING:
    from table_browser.ui.context import AppContext

SEARCH_POLL_MS = 100


def build_layout(ctx: AppContext):
    """
    Page layout. Called on every page load so each browser tab gets its own
    session id (and therefore its own TableSession).
    """
    config = ctx.config

    navbar = dbc.NavbarSimple(
        brand=config.title,
        color="primary",
        dark=True,
        className="mb-3",
    )

    return dbc.Container(
        fluid=True,
        className="tb-root",
        children=[
            navbar,

            # Per-tab stores
            dcc.Store(id=IDs.Store.SESSION_ID, data=uuid.uuid4().hex, storage_type="memory"),
            dcc.Store(id=IDs.Store.VIEW_VERSION, data=0, storage_type="memory"),
            dcc.Store(id=IDs.Store.FILTER_VERSION, data=0, storage_type="memory"),

            # Polls the search debounce only while a term is pending
            dcc.Interval(id=IDs.Control.SEARCH_INTERVAL, interval=SEARCH_POLL_MS, disabled=True),
            dcc.Download(id=IDs.Control.DOWNLOAD_CSV),

            build_toolbar(config),

            dbc.Row(
                [
                    dbc.Col(
                        [
                            build_column_panel(config),
                            dbc.Card(
                                [
                                    dbc.CardHeader("Advanced Filters", className="fw-semibold"),
                                    dbc.CardBody(
                                        [
                                            html.Small(
                                                "Multiple conditions in a column use OR. "
                                                "Filters across columns use AND.",
                                                className="text-muted",
                                            ),
                                            html.Div(id=IDs.Control.FILTER_PANEL, className="mt-2"),
                                        ]
                                    ),
                                ],
                                className="mt-3",
                            ),
                        ],
                        md=3,
                    ),
                    dbc.Col(
                        [
                            html.Div(id=IDs.Control.TABLE_CONTAINER),
                            build_pagination_bar(),
                        ],
                        md=9,
                    ),
                ],
                className="gx-3",
            ),
        ],
    )
