from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from table_browser.core.formatting import render_cell
from table_browser.core.pipeline import ViewStatus
from table_browser.core.session import TableSession
from table_browser.core.sort import SortDirection
from table_browser.ui.ids import IDs, row_id, sort_header_id

SELECTION_PLAIN = "plain"
SELECTION_RANGE = "range"
SELECTION_TOGGLE = "toggle"

_SORT_MARKERS = {SortDirection.ASC: " ▲", SortDirection.DESC: " ▼"}


def _empty_message(text: str) -> html.Div:
    return html.Div(text, className="tb-empty text-muted p-4 text-center border rounded")


def build_table(session: TableSession):
    """
    Render the current page of the session's view.

    Empty states are explicit messages, not an empty table.
    """
    view = session.view

    if view.status == ViewStatus.NO_COLUMNS:
        return _empty_message(
            "No columns selected. Please enable at least one column to view the table."
        )
    if view.status == ViewStatus.NO_RESULTS:
        return _empty_message("No results found")

    sort_state = session.sort_state
    selection = session.selection

    header_cells = [
        html.Th(
            dcc.Checklist(
                id=IDs.Control.SELECT_ALL_PAGE,
                options=[{"label": "", "value": "all"}],
                value=["all"] if session.page_fully_selected() else [],
            ),
            style={"width": "40px"},
        )
    ]
    for col in view.visible_columns:
        label = col.label + _SORT_MARKERS.get(sort_state.direction_for(col.key), "")
        if col.sortable:
            content = html.Span(label, id=sort_header_id(col.key), n_clicks=0, style={"cursor": "pointer"})
        else:
            content = html.Span(label)
        style = {"width": f"{col.width}px"} if col.width else None
        header_cells.append(html.Th(content, style=style))

    body_rows = []
    for i, row in enumerate(view.rows):
        global_index = view.global_index(i)
        is_selected = global_index in selection
        cells = [html.Td("☑" if is_selected else "☐")]
        cells.extend(html.Td(render_cell(row, col)) for col in view.visible_columns)
        body_rows.append(
            html.Tr(
                cells,
                id=row_id(i),
                n_clicks=0,
                className="table-active" if is_selected else "",
                style={"cursor": "pointer"},
            )
        )

    return dbc.Table(
        [html.Thead(html.Tr(header_cells)), html.Tbody(body_rows)],
        bordered=True,
        hover=True,
        size="sm",
        className="tb-table",
    )


def build_pagination_bar() -> html.Div:
    return html.Div(
        id=IDs.Control.PAGINATION_BAR,
        className="d-flex justify-content-between align-items-center mt-2",
        children=[
            html.Div(
                [
                    dbc.Button("First", id=IDs.Control.FIRST_PAGE_BTN, size="sm", className="me-1"),
                    dbc.Button("Prev", id=IDs.Control.PREV_PAGE_BTN, size="sm", className="me-2"),
                    html.Span("Page", className="me-2"),
                    dcc.Input(
                        id=IDs.Control.PAGE_INPUT,
                        type="number",
                        min=1,
                        value=1,
                        debounce=True,
                        style={"width": "60px"},
                    ),
                    html.Span(id=IDs.Control.PAGE_TOTAL, className="ms-2 me-2"),
                    dbc.Button("Next", id=IDs.Control.NEXT_PAGE_BTN, size="sm", className="me-1"),
                    dbc.Button("Last", id=IDs.Control.LAST_PAGE_BTN, size="sm"),
                ],
                className="d-flex align-items-center",
            ),
            dbc.RadioItems(
                id=IDs.Control.SELECTION_MODE,
                options=[
                    {"label": "Single", "value": SELECTION_PLAIN},
                    {"label": "Range (shift)", "value": SELECTION_RANGE},
                    {"label": "Toggle (ctrl)", "value": SELECTION_TOGGLE},
                ],
                value=SELECTION_PLAIN,
                inline=True,
            ),
            html.Div(
                [
                    html.Small(id=IDs.Control.ROW_RANGE),
                    html.Small(id=IDs.Control.SELECTION_SUMMARY, className="ms-3 text-muted"),
                ]
            ),
        ],
    )
