"""Logging setup for the Parsed File Manager CLI.

Library modules only create module loggers; handlers are installed once,
by the CLI, on the root logger. Two output formats are available:

    2026-01-01 12:00:00 | INFO     | parsed_file_manager.engine.flusher | Flushed 3 records to /etc/hosts
    {"timestamp": "...", "level": "INFO", "logger": "...", "message": "...", "target": "/etc/hosts"}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union


TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord has; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with ``extra`` fields inlined."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                entry[key] = value

        return json.dumps(entry, default=str)


def _handlers(log_file: Optional[Path]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    return handlers


def configure_root_logger(
    level: Union[int, str] = logging.INFO,
    json_output: bool = False,
    log_file: Optional[Path] = None,
) -> None:
    """Replace the root logger's handlers.

    Args:
        level: Logging level, as a number or a name ("debug", "WARNING")
        json_output: Emit JSON lines instead of text
        log_file: Also log to this file (parent directories are created)
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter = JsonFormatter() if json_output else logging.Formatter(TEXT_FORMAT, DATE_FORMAT)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    for handler in _handlers(log_file):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)
