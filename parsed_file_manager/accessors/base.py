"""Abstract base class for file accessors.

An accessor reads, writes and optionally backs up one target. The engine
memoizes one accessor per target; accessors never parse content.
"""

from abc import ABC, abstractmethod
from typing import Optional
import logging


class FileAccessor(ABC):
    """Read/write/backup of a single target.

    Subclasses that can back up set ``supports_backup = True`` and override
    backup(). Failures are raised as AccessorError.

    Example:
        class NullAccessor(FileAccessor):
            def read(self):
                return None
            def write(self, text):
                pass
    """

    supports_backup: bool = False

    def __init__(self, target: str):
        """Initialize the accessor with its target and a logger.

        Args:
            target: Target identifier (path or symbolic name)
        """
        self.target = target
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def read(self) -> Optional[str]:
        """Read the full content of the target.

        Returns:
            str: Current content, or None if the target does not exist yet
        """
        pass

    @abstractmethod
    def write(self, text: str) -> None:
        """Replace the full content of the target.

        Args:
            text: New content
        """
        pass

    def backup(self) -> Optional[str]:
        """Save the current content somewhere safe.

        Returns:
            str: Identifier of the saved copy, or None if there was nothing to save
        """
        raise NotImplementedError(f"{self.__class__.__name__} cannot back up targets")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.target!r})"
