"""Loading targets into records."""

import logging
from typing import Callable, Dict, Iterable, List, Optional

from parsed_file_manager.config import Ensure
from parsed_file_manager.engine.registry import TargetRegistry
from parsed_file_manager.errors import (
    AccessorError,
    InternalInvariantError,
    ParseError,
    ParsedFileError,
    PrefetchError,
)
from parsed_file_manager.parsing.base import Parser
from parsed_file_manager.records import Record

logger = logging.getLogger(__name__)

PrefetchHook = Callable[[List[Record]], Optional[List[Record]]]


class Prefetcher:
    """Reads targets through their accessors and parses them.

    Attributes:
        prefetch_hook: Optional post-processing of each target's records
    """

    def __init__(
        self,
        registry: TargetRegistry,
        parser: Parser,
        prefetch_hook: Optional[PrefetchHook] = None,
    ):
        self._registry = registry
        self._parser = parser
        self.prefetch_hook = prefetch_hook

    def retrieve(self, target: str) -> List[Record]:
        """Read and parse ``target``; a missing or empty target has no records.

        Raises:
            AccessorError: If the target cannot be read
            ParseError: If the content cannot be parsed (tagged with the target)
        """
        accessor = self._registry.accessor_for(target)
        try:
            text = accessor.read()
        except OSError as e:
            raise AccessorError(f"Failed to read {target}: {e}", target=target, operation="read") from e

        if not text:
            logger.debug(f"Target {target} is empty or missing")
            return []

        try:
            return self._parser.parse(text)
        except ParseError as e:
            e.target = target
            raise

    def prefetch_target(self, target: str) -> List[Record]:
        """Load one target, stamping every record as on disk and present."""
        records = self.retrieve(target)
        for record in records:
            record.on_disk = True
            record.target = target
            record.ensure = Ensure.PRESENT

        if self.prefetch_hook is not None:
            records = self.prefetch_hook(records)
            if records is None:
                raise InternalInvariantError(f"Prefetching {target} returned nothing")

        logger.debug(f"Prefetched {len(records)} records from {target}")
        return list(records)

    def prefetch_targets(self, targets: Iterable[str]) -> List[Record]:
        """Load every target, in order.

        Every target is attempted even if an earlier one fails.

        Raises:
            PrefetchError: If any target failed to read or parse
            InternalInvariantError: Immediately, if a hook broke its contract
        """
        records: List[Record] = []
        failures: Dict[str, ParsedFileError] = {}

        for target in targets:
            try:
                records.extend(self.prefetch_target(target))
            except (ParseError, AccessorError) as e:
                logger.error(f"Failed to prefetch {target}: {e}")
                failures[target] = e

        if failures:
            raise PrefetchError(failures)
        return records
