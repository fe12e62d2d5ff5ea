"""Content-addressed storage for target backups.

Each backed-up version is stored once under its digest:

    <root>/<d0>/<d1>/<digest>/contents
    <root>/<d0>/<d1>/<digest>/paths     (one source path per line)
"""

from pathlib import Path
from typing import List, Optional
import logging

from parsed_file_manager.utils.hashing import content_digest

logger = logging.getLogger(__name__)


class FileBucket:
    """Directory of backed-up file contents keyed by digest."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def _entry_dir(self, digest: str) -> Path:
        return self.root / digest[0] / digest[1] / digest

    def backup(self, content: str, source: str) -> str:
        """Store ``content`` and remember it came from ``source``.

        Args:
            content: Text to store
            source: Path the content was read from

        Returns:
            Digest under which the content is stored

        Raises:
            OSError: If the bucket cannot be written
        """
        digest = content_digest(content)
        entry = self._entry_dir(digest)
        entry.mkdir(parents=True, exist_ok=True)

        contents_file = entry / "contents"
        if not contents_file.exists():
            contents_file.write_text(content, encoding="utf-8")

        paths_file = entry / "paths"
        known = self.paths(digest)
        if source not in known:
            with open(paths_file, "a", encoding="utf-8") as f:
                f.write(source + "\n")

        logger.debug(f"Stored {source} in bucket as {digest}")
        return digest

    def retrieve(self, digest: str) -> Optional[str]:
        """Return stored content for ``digest``, or None if unknown."""
        contents_file = self._entry_dir(digest) / "contents"
        if not contents_file.exists():
            return None
        return contents_file.read_text(encoding="utf-8")

    def paths(self, digest: str) -> List[str]:
        """Source paths recorded for ``digest``."""
        paths_file = self._entry_dir(digest) / "paths"
        if not paths_file.exists():
            return []
        return [line for line in paths_file.read_text(encoding="utf-8").splitlines() if line]
