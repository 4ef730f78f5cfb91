from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from table_browser.config.model import TableConfig
from table_browser.ui.ids import IDs


def build_toolbar(config: TableConfig) -> dbc.Card:
    page_size_options = [{"label": str(s), "value": s} for s in config.page_sizes]

    return dbc.Card(
        dbc.CardBody(
            dbc.Row(
                [
                    dbc.Col(
                        dcc.Input(
                            id=IDs.Control.SEARCH_INPUT,
                            type="text",
                            placeholder="Search...",
                            value="",
                            className="form-control",
                        ),
                        md=4,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                html.Label("Page size:", className="me-2 mb-0"),
                                dcc.Dropdown(
                                    id=IDs.Control.PAGE_SIZE_SELECT,
                                    options=page_size_options,
                                    value=config.default_page_size,
                                    clearable=False,
                                    style={"width": "90px"},
                                ),
                            ],
                            className="d-flex align-items-center",
                        ),
                        md="auto",
                    ),
                    dbc.Col(
                        dbc.ButtonGroup(
                            [
                                dbc.Button("Show all cols", id=IDs.Control.SHOW_ALL_COLUMNS_BTN,
                                           color="secondary", outline=True, size="sm"),
                                dbc.Button("Hide all cols", id=IDs.Control.HIDE_ALL_COLUMNS_BTN,
                                           color="secondary", outline=True, size="sm"),
                                dbc.Button("Export filtered CSV", id=IDs.Control.EXPORT_BTN,
                                           color="secondary", outline=True, size="sm"),
                                dbc.Button("Clear all filters", id=IDs.Control.CLEAR_FILTERS_BTN,
                                           color="secondary", outline=True, size="sm"),
                            ]
                        ),
                        md="auto",
                    ),
                    dbc.Col(
                        dbc.Badge(id=IDs.Control.STATUS_BADGE, color="info", className="p-2"),
                        md="auto",
                    ),
                ],
                className="g-2 align-items-center",
            )
        ),
        className="mb-3",
    )
