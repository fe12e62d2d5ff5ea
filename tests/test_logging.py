"""Tests for parsed_file_manager.utils.logging module."""

import json
import logging

import pytest

from parsed_file_manager.utils.logging import JsonFormatter, configure_root_logger


@pytest.fixture
def restore_root():
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJsonFormatter:
    """JSON log lines."""

    def test_fields_and_extras(self):
        record = logging.LogRecord(
            "parsed_file_manager.engine", logging.INFO, __file__, 1,
            "Flushed %d records", (3,), None,
        )
        record.target = "/etc/hosts"
        data = json.loads(JsonFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "parsed_file_manager.engine"
        assert data["message"] == "Flushed 3 records"
        assert data["target"] == "/etc/hosts"
        assert "timestamp" in data
        assert "lineno" not in data

    def test_unserializable_extra(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", (), None)
        record.path = object()
        data = json.loads(JsonFormatter().format(record))
        assert data["path"].startswith("<object")


class TestConfigureRootLogger:
    """Root logger setup used by the CLI."""

    def test_text_output(self, restore_root):
        configure_root_logger(level="debug")

        assert restore_root.level == logging.DEBUG
        assert len(restore_root.handlers) == 1
        assert not isinstance(restore_root.handlers[0].formatter, JsonFormatter)

    def test_unknown_level_name(self, restore_root):
        configure_root_logger(level="chatty")
        assert restore_root.level == logging.INFO

    def test_json_to_file(self, restore_root, tmp_path):
        log_file = tmp_path / "logs" / "pfm.log"
        configure_root_logger(level=logging.WARNING, json_output=True, log_file=log_file)

        assert len(restore_root.handlers) == 2
        assert all(isinstance(h.formatter, JsonFormatter) for h in restore_root.handlers)

        logging.getLogger("parsed_file_manager.engine.flusher").warning(
            "Failed to flush", extra={"target": "/etc/hosts"}
        )
        logging.getLogger("parsed_file_manager.engine.flusher").info("not written")

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 1
        entry = json.loads(lines[0])
        assert entry["message"] == "Failed to flush"
        assert entry["target"] == "/etc/hosts"
