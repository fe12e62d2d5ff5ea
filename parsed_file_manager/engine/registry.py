"""Target registry: one memoized accessor per target."""

import os
import logging
from typing import Dict, List, Mapping, Optional

from parsed_file_manager.accessors import AccessorFactory, FileAccessor
from parsed_file_manager.errors import ConfigurationError
from parsed_file_manager.resource import ResourceSpec

logger = logging.getLogger(__name__)


def target_key(target) -> str:
    """Normalize a target identifier (paths become strings)."""
    if isinstance(target, os.PathLike):
        return os.fspath(target)
    return target


class TargetRegistry:
    """Maps target identifiers to their accessors.

    Attributes:
        default_target: Target used when nothing else names one
    """

    def __init__(self, factory: AccessorFactory, default_target: Optional[str] = None):
        self._factory = factory
        self.default_target = target_key(default_target) if default_target is not None else None
        self._accessors: Dict[str, FileAccessor] = {}

    def accessor_for(self, target: str) -> FileAccessor:
        """Return the accessor for ``target``, creating it on first use."""
        target = target_key(target)
        accessor = self._accessors.get(target)
        if accessor is None:
            accessor = self._factory(target)
            self._accessors[target] = accessor
            logger.debug(f"Created accessor for target {target}: {accessor!r}")
        return accessor

    @property
    def known_targets(self) -> List[str]:
        """Targets that already have an accessor, in creation order."""
        return list(self._accessors)

    def require_default_target(self) -> str:
        """Return the default target.

        Raises:
            ConfigurationError: If no default target is configured
        """
        if not self.default_target:
            raise ConfigurationError("A default target must be configured")
        return self.default_target

    def list_targets(self, specs: Optional[Mapping[str, ResourceSpec]] = None) -> List[str]:
        """All targets a prefetch must read.

        The default target comes first, then known targets, then targets
        requested by specs. Duplicates are dropped; order is stable.

        Raises:
            ConfigurationError: If no default target is configured
        """
        targets = [self.require_default_target()]
        targets.extend(self._accessors)
        if specs:
            for spec in specs.values():
                if spec.target:
                    targets.append(target_key(spec.target))

        return list(dict.fromkeys(targets))

    def clear(self) -> None:
        self._accessors.clear()
