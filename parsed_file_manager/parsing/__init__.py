"""Parsers for target formats.

Available parsers:
    - LineParser: one record per line, built from declared record types
    - HostsParser: hosts file entries
"""

from .base import HEADER_PREFIX, Parser
from .hosts import HOSTS_SCHEMA, HostsParser
from .lines import LineParser, RecordType

__all__ = [
    "HEADER_PREFIX",
    "HOSTS_SCHEMA",
    "HostsParser",
    "LineParser",
    "Parser",
    "RecordType",
]
