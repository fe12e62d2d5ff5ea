"""ParsedFileEngine - keeps records in sync with flat text targets.

One engine owns one record store, dirty set, backup ledger and target
registry. A typical pass:

    engine = ParsedFileEngine(EngineConfig(default_target="/etc/hosts"),
                              HostsParser(), HOSTS_SCHEMA)
    handles = engine.prefetch(specs)      # load targets, bind records
    handle = handles["db"]
    if not handle.exists():
        handle.create()
    handle.flush()                        # write every dirty target once
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Union

from parsed_file_manager.accessors import AccessorFactory, RamFileSystem, get_accessor_factory
from parsed_file_manager.config import EngineConfig
from parsed_file_manager.engine.backup import BackupLedger
from parsed_file_manager.engine.dirty import DirtyTracker
from parsed_file_manager.engine.flusher import Flusher
from parsed_file_manager.engine.handle import RecordHandle
from parsed_file_manager.engine.matching import Matcher, MatchEngine
from parsed_file_manager.engine.prefetch import Prefetcher, PrefetchHook
from parsed_file_manager.engine.registry import TargetRegistry, target_key
from parsed_file_manager.engine.store import Generation, RecordStore
from parsed_file_manager.parsing.base import Parser
from parsed_file_manager.records import Record
from parsed_file_manager.resource import ResourceSchema, ResourceSpec

logger = logging.getLogger(__name__)

Specs = Union[Mapping[str, ResourceSpec], Iterable[ResourceSpec], None]


def _by_name(specs: Specs) -> Dict[str, ResourceSpec]:
    if specs is None:
        return {}
    if isinstance(specs, Mapping):
        return dict(specs)
    return {spec.name: spec for spec in specs}


class ParsedFileEngine:
    """Record/target synchronization engine.

    Attributes:
        config: Engine configuration
        parser: Target format
        schema: Attributes of the managed resource kind
        registry: Target -> accessor cache
        store: Current generation of records
        dirty: Targets awaiting a write
        ledger: Backups taken per generation
    """

    def __init__(
        self,
        config: EngineConfig,
        parser: Parser,
        schema: ResourceSchema,
        accessor_factory: Optional[AccessorFactory] = None,
        matcher: Optional[Matcher] = None,
        prefetch_hook: Optional[PrefetchHook] = None,
        filesystem: Optional[RamFileSystem] = None,
    ):
        """Initialize the engine.

        Args:
            config: Engine configuration
            parser: Parser for the target format
            schema: Schema of the managed resource kind
            accessor_factory: Builds accessors; defaults to config.filetype
            matcher: Optional positional matcher for unnamed records
            prefetch_hook: Optional post-processing of each target's records
            filesystem: Backing store when config.filetype is RAM
        """
        self.config = config
        self.parser = parser
        self.schema = schema

        factory = accessor_factory or get_accessor_factory(config, filesystem)
        self.registry = TargetRegistry(factory, config.default_target)
        self.store = RecordStore()
        self.dirty = DirtyTracker()
        self.ledger = BackupLedger(self.registry)

        self._prefetcher = Prefetcher(self.registry, parser, prefetch_hook)
        self._matcher = MatchEngine(parser.is_non_data, matcher)
        self._flusher = Flusher(
            self.store, self.registry, self.dirty, self.ledger, parser, config.header_tool
        )

    @property
    def default_target(self) -> Optional[str]:
        return self.registry.default_target

    def require_default_target(self) -> str:
        return self.registry.require_default_target()

    # Loading

    def list_targets(self, specs: Specs = None) -> List[str]:
        """Targets a prefetch reads: default, known, then spec overrides."""
        return self.registry.list_targets(_by_name(specs))

    def prefetch_target(self, target: str) -> List[Record]:
        """Load one target without touching the current generation."""
        return self._prefetcher.prefetch_target(target_key(target))

    def prefetch_all(self, specs: Specs = None) -> Generation:
        """Load every target into a new generation.

        The dirty set and backup bookkeeping of the old generation are
        discarded. If any target fails, the old generation stays in place.

        Raises:
            ConfigurationError: If no default target is configured
            PrefetchError: If any target failed to load
        """
        targets = self.list_targets(specs)
        records = self._prefetcher.prefetch_targets(targets)

        generation = self.store.replace(records)
        self.dirty.clear()
        self.ledger.reset()
        logger.info(
            f"Prefetched generation {generation.number}: "
            f"{len(generation)} records from {len(targets)} target(s)"
        )
        return generation

    def prefetch(self, specs: Specs) -> Dict[str, RecordHandle]:
        """Load every target and bind records to ``specs``.

        Returns:
            A handle per spec name; unmatched specs get a handle on a fresh,
            absent record
        """
        specs = _by_name(specs)
        self.prefetch_all(specs)

        handles: Dict[str, RecordHandle] = {}
        for binding in self._matcher.match(self.store.records, specs):
            handles[binding.spec.name] = RecordHandle(self, binding.spec, binding.record)

        for name, spec in specs.items():
            if name not in handles:
                handles[name] = RecordHandle(self, spec)
        return handles

    def instances(self) -> List[RecordHandle]:
        """Load every target and return a handle per data record."""
        self.prefetch_all()
        return [
            RecordHandle(self, record=record)
            for record in self.store.records
            if not self._matcher.skip(record)
        ]

    def handle(self, spec: ResourceSpec) -> RecordHandle:
        """Handle for ``spec`` against the current generation (no reload)."""
        return RecordHandle(self, spec)

    # Lookup

    def records_for(self, target: str) -> List[Record]:
        return self.store.records_for(target_key(target))

    def record(self, name: str) -> Optional[Record]:
        """Existing record named ``name`` in the current generation."""
        return self.store.find_by_name(name)

    # Writing

    def mark_modified(self, target: Optional[str]) -> None:
        if target is not None:
            target = target_key(target)
        self.dirty.mark_modified(target)

    def flush(self, record: Record) -> List[str]:
        """Make sure ``record`` is written, then write every dirty target.

        Returns:
            Targets written by this call

        Raises:
            FlushError: If any target could not be written (it stays dirty)
        """
        if not record.on_disk:
            if record.target is None:
                record.target = self.require_default_target()
            record.on_disk = True
            self.store.append(record)
            self.mark_modified(record.target)

        if not len(self.dirty):
            return []
        return self._flusher.flush_dirty()

    def header(self) -> str:
        return self._flusher.header()

    def to_file(self, records: Iterable[Record]) -> str:
        return self._flusher.to_file(records)

    def clear(self) -> None:
        """Forget all records, pending changes, backups and accessors."""
        self.store.clear()
        self.dirty.clear()
        self.ledger.reset()
        self.registry.clear()
