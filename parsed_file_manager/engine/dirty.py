"""Targets with unwritten changes."""

from typing import Iterator, List, Optional, Set

from parsed_file_manager.records import ABSENT


class DirtyTracker:
    """Deduplicated set of dirty targets, processed in lexical order."""

    def __init__(self):
        self._targets: Set[str] = set()

    def mark_modified(self, target: Optional[str]) -> None:
        """Mark ``target`` dirty. Unset targets are ignored."""
        if target is None or target is ABSENT:
            return
        self._targets.add(target)

    def discard(self, target: str) -> None:
        self._targets.discard(target)

    def pending(self) -> List[str]:
        """Dirty targets in ascending lexical order."""
        return sorted(self._targets, key=str)

    def clear(self) -> None:
        self._targets.clear()

    def __contains__(self, target: object) -> bool:
        return target in self._targets

    def __iter__(self) -> Iterator[str]:
        return iter(self.pending())

    def __len__(self) -> int:
        return len(self._targets)
