"""Record/target synchronization engine.

This package provides:
- ParsedFileEngine: prefetch, match, flush orchestration
- RecordHandle: per-resource facade over one record
- TargetRegistry, RecordStore, DirtyTracker, BackupLedger, MatchEngine,
  Flusher: the pieces the engine is built from

Records are loaded lazily per target, changes mark their target dirty, and
a flush rewrites every dirty target exactly once, after a backup taken at
most once per generation.
"""

from parsed_file_manager.engine.backup import BackupLedger
from parsed_file_manager.engine.dirty import DirtyTracker
from parsed_file_manager.engine.engine import ParsedFileEngine
from parsed_file_manager.engine.flusher import Flusher
from parsed_file_manager.engine.handle import RecordHandle
from parsed_file_manager.engine.matching import Binding, MatchEngine, first_match
from parsed_file_manager.engine.prefetch import Prefetcher
from parsed_file_manager.engine.registry import TargetRegistry
from parsed_file_manager.engine.store import Generation, RecordStore

__all__ = [
    "BackupLedger",
    "Binding",
    "DirtyTracker",
    "Flusher",
    "Generation",
    "MatchEngine",
    "ParsedFileEngine",
    "Prefetcher",
    "RecordHandle",
    "RecordStore",
    "TargetRegistry",
    "first_match",
]
