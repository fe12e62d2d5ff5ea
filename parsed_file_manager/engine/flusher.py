"""Writing dirty targets back out."""

import logging
from typing import Dict, Iterable, List

from parsed_file_manager.engine.backup import BackupLedger
from parsed_file_manager.engine.dirty import DirtyTracker
from parsed_file_manager.engine.registry import TargetRegistry
from parsed_file_manager.engine.store import RecordStore
from parsed_file_manager.errors import AccessorError, FlushError, ParsedFileError
from parsed_file_manager.parsing.base import Parser
from parsed_file_manager.records import Record

logger = logging.getLogger(__name__)


class Flusher:
    """Drains the dirty set, one complete write per target."""

    def __init__(
        self,
        store: RecordStore,
        registry: TargetRegistry,
        dirty: DirtyTracker,
        ledger: BackupLedger,
        parser: Parser,
        header_tool: str = "parsed_file_manager",
    ):
        self._store = store
        self._registry = registry
        self._dirty = dirty
        self._ledger = ledger
        self._parser = parser
        self.header_tool = header_tool

    def header(self) -> str:
        return self._parser.header_text(self.header_tool)

    def to_file(self, records: Iterable[Record]) -> str:
        """Header followed by the serialized records."""
        return self.header() + self._parser.serialize(records)

    def flush_target(self, target: str) -> None:
        """Back up (once per generation) and rewrite ``target``.

        Records whose intent is absent are left out of the written text.
        """
        try:
            self._ledger.backup_once(target, self._store.generation.number)
        except OSError as e:
            raise AccessorError(f"Failed to back up {target}: {e}", target=target, operation="backup") from e

        records = [r for r in self._store.records_for(target) if not r.absent]
        text = self.to_file(records)

        try:
            self._registry.accessor_for(target).write(text)
        except OSError as e:
            raise AccessorError(f"Failed to write {target}: {e}", target=target, operation="write") from e

        for record in records:
            record.on_disk = True
        logger.info(f"Flushed {len(records)} records to {target}")

    def flush_dirty(self) -> List[str]:
        """Write every dirty target in lexical order.

        A target leaves the dirty set only once written. Every dirty target
        is attempted even if an earlier one fails.

        Returns:
            Targets written, in order

        Raises:
            FlushError: If any target failed; those targets stay dirty
        """
        flushed: List[str] = []
        failures: Dict[str, ParsedFileError] = {}

        for target in self._dirty.pending():
            logger.debug(f"Flushing target {target}")
            try:
                self.flush_target(target)
            except ParsedFileError as e:
                logger.error(f"Failed to flush {target}: {e}")
                failures[target] = e
                continue
            self._dirty.discard(target)
            flushed.append(target)

        if failures:
            raise FlushError(failures)
        return flushed
