"""Utility modules for Parsed File Manager.

This package provides:
- hashing: xxhash content digests used by the file bucket
- logging: root logger setup with text or JSON output
"""

from parsed_file_manager.utils.hashing import content_digest
from parsed_file_manager.utils.logging import JsonFormatter, configure_root_logger

__all__ = [
    "content_digest",
    "JsonFormatter",
    "configure_root_logger",
]
