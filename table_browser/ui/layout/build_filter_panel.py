from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import dcc, html

from table_browser.config.model import TableConfig
from table_browser.core.filter_state import Operator
from table_browser.core.session import TableSession
from table_browser.ui.ids import (
    IDs,
    filter_add_id,
    filter_op_id,
    filter_remove_id,
    filter_value_id,
)

OPERATOR_OPTIONS = [
    {"label": "contains", "value": Operator.CONTAINS.value},
    {"label": "equals", "value": Operator.EQUALS.value},
    {"label": "starts with", "value": Operator.STARTS.value},
    {"label": "ends with", "value": Operator.ENDS.value},
    {"label": "greater than", "value": Operator.GT.value},
    {"label": "less than", "value": Operator.LT.value},
]


def build_column_panel(config: TableConfig) -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader("Columns", className="fw-semibold"),
            dbc.CardBody(
                dcc.Checklist(
                    id=IDs.Control.COLUMN_CHECKLIST,
                    options=[{"label": f" {c.label}", "value": c.key} for c in config.columns],
                    value=[c.key for c in config.columns if c.visible],
                    labelStyle={"display": "block"},
                )
            ),
        ]
    )


def build_filter_panel(session: TableSession) -> List:
    """One block per filterable column with its ordered conditions."""
    filters = session.filters
    visibility = session.visibility
    blocks: List = []

    for col in session.columns:
        if not col.filterable:
            continue
        conditions = filters.get(col.key, [])

        rows = []
        for idx, cond in enumerate(conditions):
            rows.append(
                dbc.Row(
                    [
                        dbc.Col(
                            dcc.Dropdown(
                                id=filter_op_id(col.key, idx),
                                options=OPERATOR_OPTIONS,
                                value=cond.op.value,
                                clearable=False,
                            ),
                            width=5,
                        ),
                        dbc.Col(
                            dcc.Input(
                                id=filter_value_id(col.key, idx),
                                value=cond.value,
                                placeholder="value",
                                debounce=True,
                                className="form-control form-control-sm",
                            ),
                            width=5,
                        ),
                        dbc.Col(
                            dbc.Button("×", id=filter_remove_id(col.key, idx), color="link", size="sm"),
                            width=2,
                        ),
                    ],
                    className="g-1 mt-1",
                )
            )

        if not rows:
            rows.append(
                html.Div("No conditions. Add one to filter this column.", className="text-muted small mt-1")
            )

        blocks.append(
            html.Div(
                [
                    html.Div(
                        [
                            html.Strong(col.label),
                            dbc.Button(
                                "+ condition",
                                id=filter_add_id(col.key),
                                size="sm",
                                color="secondary",
                                outline=True,
                                disabled=not visibility.get(col.key, False),
                            ),
                        ],
                        className="d-flex justify-content-between align-items-center",
                    ),
                    *rows,
                ],
                className="mb-3",
            )
        )

    if not blocks:
        blocks.append(html.Div("No filterable columns.", className="text-muted small"))
    return blocks
