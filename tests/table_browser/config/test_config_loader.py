from __future__ import annotations

import json
from pathlib import Path

import pytest

from table_browser.config.loader import load_table_config, resolve_data_source
from table_browser.config.model import FormatType, TableConfig, Transform
from table_browser.core.exceptions import ConfigError
from table_browser.validation.errors import ValidationError


def _write_config(root: Path, raw) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    path = root / "table.json"
    path.write_text(json.dumps(raw))
    return path


def test_load_table_config_from_directory(tmp_path):
    # Arrange:
    # root/
    #   table.json
    config_root = tmp_path / "config"
    _write_config(
        config_root,
        {
            "title": "Cards",
            "dataSource": "data/cards.csv",
            "columns": [
                {"key": "bin", "header": "BIN", "searchable": True, "format": {"type": "number"}},
                {"key": "brand", "format": {"transform": "uppercase"}},
                {"key": "issued", "visible": False, "format": {"type": "date"}},
            ],
            "pageSizes": [5, 10],
            "defaultPageSize": 10,
            "globalSearchDebounceMs": 150,
        },
    )

    # Act
    config = load_table_config(config_root)

    # Assert
    assert config.title == "Cards"
    assert config.column_keys == ["bin", "brand", "issued"]
    assert config.column("bin").label == "BIN"
    assert config.column("brand").label == "brand"
    assert config.column("bin").format_type == FormatType.NUMBER
    assert config.column("brand").format.transform == Transform.UPPERCASE
    assert config.column("issued").visible is False
    assert config.column("brand").visible is True
    assert config.page_sizes == [5, 10]
    assert config.default_page_size == 10
    assert config.search_debounce_ms == 150
    assert config.source_path == config_root / "table.json"


def test_defaults_and_snake_case_keys(tmp_path):
    path = _write_config(tmp_path, {"columns": [{"key": "a"}], "page_sizes": [20, 40]})

    config = load_table_config(path)

    assert config.page_sizes == [20, 40]
    assert config.default_page_size == 20
    assert config.search_debounce_ms == 300
    col = config.column("a")
    assert (col.searchable, col.sortable, col.filterable) == (False, False, False)
    assert col.format_type == FormatType.TEXT


def test_default_page_size_falls_back_to_first_size():
    config = TableConfig(columns=[], page_sizes=[7, 14])
    assert config.default_page_size == 7
    with pytest.raises(KeyError):
        config.column("missing")


def test_resolve_data_source(tmp_path):
    path = _write_config(tmp_path / "cfg", {"columns": [{"key": "a"}], "dataSource": "data/x.csv"})
    config = load_table_config(path)
    assert resolve_data_source(config) == str((tmp_path / "cfg" / "data" / "x.csv").resolve())

    config.data_source = "https://example.org/x.csv"
    assert resolve_data_source(config) == "https://example.org/x.csv"

    absolute = str(tmp_path / "abs.csv")
    config.data_source = absolute
    assert resolve_data_source(config) == absolute

    config.data_source = None
    assert resolve_data_source(config) is None


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_table_config(tmp_path / "nope.json")


def test_invalid_json_raises_config_error(tmp_path):
    path = tmp_path / "table.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError):
        load_table_config(path)


def test_non_object_raises_config_error(tmp_path):
    path = _write_config(tmp_path, [1, 2, 3])
    with pytest.raises(ConfigError):
        load_table_config(path)


def test_validation_collects_every_issue(tmp_path):
    path = _write_config(
        tmp_path,
        {
            "columns": [
                {"key": "a", "format": {"type": "percent"}},
                {"key": "a", "format": {"transform": "shout"}},
                {"header": "no key"},
            ],
            "pageSizes": [10, 0],
            "defaultPageSize": 25,
            "globalSearchDebounceMs": -1,
        },
    )

    with pytest.raises(ValidationError) as exc_info:
        load_table_config(path)

    codes = {issue.code for issue in exc_info.value.issues}
    assert codes == {
        "format_type_unknown",
        "column_key_duplicate",
        "transform_unknown",
        "column_key_missing",
        "page_size_invalid",
        "default_page_size_unknown",
        "debounce_invalid",
    }


def test_empty_page_sizes_rejected(tmp_path):
    path = _write_config(tmp_path, {"columns": [{"key": "a"}], "pageSizes": []})
    with pytest.raises(ValidationError) as exc_info:
        load_table_config(path)
    assert exc_info.value.codes == ["page_sizes_empty"]


def test_shipped_sample_config_is_valid():
    root = Path(__file__).resolve().parents[3] / "config"
    config = load_table_config(root)
    assert config.default_page_size in config.page_sizes
    assert Path(resolve_data_source(config)).is_file()
