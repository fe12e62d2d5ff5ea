"""Parsed File Manager - keep structured records in sync with flat text files.

A generic engine for managing many named records that live in a small set
of line-oriented files (hosts files, crontabs, fstab-like tables). Targets
are read lazily, records are changed in memory, and only targets that
actually changed are rewritten, once, after a backup of their previous
content.

Key Features:
    - Lazy per-target loading into an in-memory record store
    - Dirty tracking at target granularity with batched, ordered flushes
    - At most one backup per target per load, into a content-addressed bucket
    - Matching of on-disk records to desired-state specs, by name or by a
      pluggable positional matcher
    - Pluggable parsers (hosts format included) and accessors (flat files, RAM)

Quick Start:
    from parsed_file_manager import create_engine, ResourceSpec

    engine = create_engine(default_target="/etc/hosts")
    handles = engine.prefetch([
        ResourceSpec("db", {"ip": "10.0.0.5", "host_aliases": ["db.local"]}),
    ])
    handle = handles["db"]
    if not handle.exists():
        handle.create()
    handle.flush()

Classes:
    ParsedFileEngine: Main interface: prefetch, match, flush
    RecordHandle: Per-resource facade over one record
    EngineConfig: Engine configuration
    ResourceSchema / ResourceSpec: Desired-state side
    Parser / LineParser / HostsParser: Target formats
    FileAccessor / FlatFileAccessor / RamAccessor: Target storage
"""

__version__ = "1.0.0"
__license__ = "MIT"

from typing import Optional

# Core configuration classes
from .config import EngineConfig, FileType, Ensure

# Errors
from .errors import (
    ParsedFileError,
    ConfigurationError,
    ParseError,
    AccessorError,
    InternalInvariantError,
    PrefetchError,
    FlushError,
    UnknownAttributeError,
)

# Records and desired state
from .records import ABSENT, Record, clean
from .resource import ResourceSchema, ResourceSpec

# Collaborators
from .accessors import FileAccessor, FlatFileAccessor, RamAccessor, RamFileSystem, FileBucket
from .parsing import Parser, LineParser, RecordType, HostsParser, HOSTS_SCHEMA

# Engine
from .engine import ParsedFileEngine, RecordHandle, first_match

__all__ = [
    "__version__",
    "__license__",
    # Configuration
    "EngineConfig",
    "FileType",
    "Ensure",
    # Errors
    "ParsedFileError",
    "ConfigurationError",
    "ParseError",
    "AccessorError",
    "InternalInvariantError",
    "PrefetchError",
    "FlushError",
    "UnknownAttributeError",
    # Records
    "ABSENT",
    "Record",
    "clean",
    "ResourceSchema",
    "ResourceSpec",
    # Collaborators
    "FileAccessor",
    "FlatFileAccessor",
    "RamAccessor",
    "RamFileSystem",
    "FileBucket",
    "Parser",
    "LineParser",
    "RecordType",
    "HostsParser",
    "HOSTS_SCHEMA",
    # Engine
    "ParsedFileEngine",
    "RecordHandle",
    "first_match",
    "create_engine",
]


def create_engine(
    default_target: str = "/etc/hosts",
    filetype: str = "flat",
    bucket_dir: Optional[str] = None,
) -> ParsedFileEngine:
    """Convenience function to create an engine managing hosts entries.

    Args:
        default_target: Hosts file used when a spec names no target
        filetype: "flat" for real files or "ram" for in-memory targets
        bucket_dir: Where backups go (next to each target if None)

    Returns:
        Configured ParsedFileEngine instance

    Example:
        engine = create_engine(default_target="/tmp/hosts")
    """
    config = EngineConfig(
        default_target=default_target,
        filetype=FileType(filetype.lower()),
        bucket_dir=bucket_dir,
    )
    return ParsedFileEngine(config, HostsParser(), HOSTS_SCHEMA)
