from __future__ import annotations

import logging
from functools import partial
from pathlib import Path
from typing import List

import dash_bootstrap_components as dbc
from dash import Dash

from table_browser.config.loader import load_table_config, resolve_data_source
from table_browser.config.model import TableConfig
from table_browser.core.dataset import TableDataset
from table_browser.core.exceptions import ConfigError
from table_browser.services.export_service import ExportService
from table_browser.services.ingest_service import load_dataset
from table_browser.services.session_service import SessionService
from table_browser.ui.callbacks.callbacks_export import register_export_callbacks
from table_browser.ui.callbacks.callbacks_filters import register_filter_callbacks
from table_browser.ui.callbacks.callbacks_render import register_render_callbacks
from table_browser.ui.callbacks.callbacks_search import register_search_callbacks
from table_browser.ui.callbacks.callbacks_table import register_table_callbacks
from table_browser.ui.context import AppContext
from table_browser.ui.layout.build_layout import build_layout

logger = logging.getLogger(__name__)


def warn_on_missing_columns(config: TableConfig, dataset: TableDataset) -> List[str]:
    """
    Log configured columns the records do not have.

    They still render (as empty cells), so this is a warning, not an error.
    """
    missing = [key for key in config.column_keys if not dataset.has_column(key)]
    if missing:
        logger.warning(
            "Configured columns missing from records",
            extra={"missing": missing, "available": dataset.columns},
        )
    return missing


def create_dash_app(config_path: Path | str = Path("config")) -> Dash:
    # 1) Load Config
    config = load_table_config(Path(config_path))

    source = resolve_data_source(config)
    if source is None:
        raise ConfigError("Table config has no 'dataSource' to load records from")

    # 2) Load records (ingestion errors propagate: the app is useless without data)
    dataset = load_dataset(source, name=config.title)
    warn_on_missing_columns(config, dataset)

    # 3) Services
    ctx = AppContext(
        config=config,
        dataset=dataset,
        session_service=SessionService(config, dataset),
        export_service=ExportService(),
    )

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        # filter rows, sort headers and table rows are created by callbacks
        suppress_callback_exceptions=True,
    )
    app.title = config.title

    # Function layout: evaluated per page load, so every tab gets a fresh session id
    app.layout = partial(build_layout, ctx)

    # Register callbacks
    register_search_callbacks(app, ctx)
    register_table_callbacks(app, ctx)
    register_filter_callbacks(app, ctx)
    register_render_callbacks(app, ctx)
    register_export_callbacks(app, ctx)

    logger.info(
        "Dash app created",
        extra={"title": config.title, "n_records": len(dataset), "source": source},
    )
    return app
