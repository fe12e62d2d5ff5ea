"""In-memory accessor.

Targets live in a RamFileSystem owned by the caller, so content survives
across engine generations (and engines) for as long as the caller keeps it.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .base import FileAccessor
from ..utils.hashing import content_digest


@dataclass
class RamFileSystem:
    """Backing store for RAM targets.

    Attributes:
        files: Target -> current content
        backups: Target -> backed-up contents, oldest first
    """
    files: Dict[str, str] = field(default_factory=dict)
    backups: Dict[str, List[str]] = field(default_factory=dict)


class RamAccessor(FileAccessor):
    """Accessor for a target held in a RamFileSystem."""

    supports_backup = True

    def __init__(self, target: str, filesystem: RamFileSystem):
        super().__init__(target)
        self.filesystem = filesystem

    def read(self) -> Optional[str]:
        return self.filesystem.files.get(self.target)

    def write(self, text: str) -> None:
        self.filesystem.files[self.target] = text

    def backup(self) -> Optional[str]:
        text = self.filesystem.files.get(self.target)
        if text is None:
            return None
        self.filesystem.backups.setdefault(self.target, []).append(text)
        return content_digest(text)
