from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from table_browser.config.model import TableConfig
from table_browser.core.exceptions import ConfigError
from table_browser.validation.config_validation import validate_table_config
from table_browser.validation.errors import ValidationError

logger = logging.getLogger(__name__)


def load_table_config(path: Path | str) -> TableConfig:
    """
    Load a table configuration from JSON.

    Accepts either a file path or a directory containing 'table.json':

        root/
            table.json
            data/
                sample.csv

    The raw JSON is validated once here (duplicate column keys, page sizes,
    debounce); later operations trust the parsed TableConfig.

    :param path: Path to table.json or to its directory.
    :return: A TableConfig instance.
    :raises FileNotFoundError: if the config file does not exist.
    :raises ConfigError: if the file is not valid JSON or not a JSON object.
    :raises ValidationError: if the config content is inconsistent.
    """
    path = Path(path)
    config_path = path / "table.json" if path.is_dir() else path

    logger.info(
        "Loading table config",
        extra={"config_path": str(config_path)},
    )

    if not config_path.is_file():
        raise FileNotFoundError(f"File not found at {config_path}")

    try:
        with config_path.open() as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Expected a JSON object in {config_path}")

    issues = validate_table_config(raw)
    if issues:
        logger.error(
            "Table config failed validation",
            extra={"config_path": str(config_path), "issues": [i.code for i in issues]},
        )
        raise ValidationError(issues)

    config = TableConfig.from_raw(raw, source_path=config_path)

    logger.info(
        "Table config loaded",
        extra={
            "config_path": str(config_path),
            "n_columns": len(config.columns),
            "page_sizes": config.page_sizes,
        },
    )
    return config


def resolve_data_source(config: TableConfig) -> Optional[str]:
    """
    Resolve the configured data source.

    - URLs are returned unchanged.
    - Absolute paths are used as-is.
    - Relative paths are resolved relative to the directory of the config file.
    """
    source = config.data_source
    if source is None:
        return None

    if "://" in source:
        return source

    source_path = Path(source)
    if source_path.is_absolute() or config.source_path is None:
        return str(source_path)
    return str((config.source_path.parent / source_path).resolve())
