from __future__ import annotations

import logging

import pytest
from pythonjsonlogger import jsonlogger

from table_browser.logging_config import configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_format_is_the_default(restore_root_logger, monkeypatch):
    monkeypatch.delenv("TABLE_BROWSER_LOG_FORMAT", raising=False)
    configure_logging(level=logging.DEBUG)

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)


def test_plain_format_from_env(restore_root_logger, monkeypatch):
    monkeypatch.setenv("TABLE_BROWSER_LOG_FORMAT", "plain")
    monkeypatch.setenv("TABLE_BROWSER_LOG_LEVEL", "warning")
    configure_logging()

    root = restore_root_logger
    assert root.level == logging.WARNING
    assert not isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)


def test_force_format_wins_over_env(restore_root_logger, monkeypatch):
    monkeypatch.setenv("TABLE_BROWSER_LOG_FORMAT", "plain")
    configure_logging(force_format="json")

    assert isinstance(restore_root_logger.handlers[0].formatter, jsonlogger.JsonFormatter)
