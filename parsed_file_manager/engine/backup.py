"""Backing up targets once per generation.

The first write of a target in a generation is preceded by a backup of
what was on disk. Later writes in the same generation build on content
that is already backed up, so they are not backed up again.
"""

import logging
from typing import Dict

from parsed_file_manager.engine.registry import TargetRegistry

logger = logging.getLogger(__name__)


class BackupLedger:
    """Remembers which targets were backed up in which generation."""

    def __init__(self, registry: TargetRegistry):
        self._registry = registry
        self._taken: Dict[str, int] = {}

    def backed_up(self, target: str, generation: int) -> bool:
        return self._taken.get(target) == generation

    def backup_once(self, target: str, generation: int) -> bool:
        """Back up ``target`` unless already done for ``generation``.

        Returns:
            True if the accessor's backup was invoked

        Raises:
            AccessorError: If the backup fails (nothing is recorded)
        """
        accessor = self._registry.accessor_for(target)
        if not accessor.supports_backup:
            return False
        if self.backed_up(target, generation):
            return False

        digest = accessor.backup()
        self._taken[target] = generation
        if digest is None:
            logger.debug(f"Nothing to back up for {target}")
        else:
            logger.debug(f"Backed up {target} for generation {generation}: {digest}")
        return True

    def reset(self) -> None:
        self._taken.clear()
