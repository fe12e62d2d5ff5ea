"""Flat file accessor: one target is one file on disk.

Writes replace the file atomically (temp file in the same directory, then
rename), so a failed write never leaves a half-written target behind.
Backups go to a FileBucket, by default ``.filebucket`` next to the target.
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from .base import FileAccessor
from .bucket import FileBucket
from ..errors import AccessorError

BUCKET_DIRNAME = ".filebucket"


class FlatFileAccessor(FileAccessor):
    """Accessor for a plain text file.

    Attributes:
        path: Filesystem path of the target
        bucket: Where backups are stored
        encoding: Text encoding of the file
    """

    supports_backup = True

    def __init__(
        self,
        target: str,
        bucket: Optional[FileBucket] = None,
        encoding: str = "utf-8",
    ):
        super().__init__(target)
        self.path = Path(target)
        self.bucket = bucket or FileBucket(self.path.parent / BUCKET_DIRNAME)
        self.encoding = encoding

    def read(self) -> Optional[str]:
        if not self.path.exists():
            self.logger.debug(f"Target does not exist yet: {self.path}")
            return None

        try:
            return self.path.read_text(encoding=self.encoding)
        except OSError as e:
            raise AccessorError(
                f"Failed to read {self.path}: {e}", target=self.target, operation="read"
            ) from e
        except UnicodeDecodeError as e:
            raise AccessorError(
                f"{self.path} is not valid {self.encoding}: {e}", target=self.target, operation="read"
            ) from e

    def write(self, text: str) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding=self.encoding,
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(text)
            if self.path.exists():
                shutil.copymode(self.path, tmp_name)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            raise AccessorError(
                f"Failed to write {self.path}: {e}", target=self.target, operation="write"
            ) from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        self.logger.debug(f"Wrote {len(text)} characters to {self.path}")

    def backup(self) -> Optional[str]:
        text = self.read()
        if text is None:
            return None

        try:
            digest = self.bucket.backup(text, str(self.path))
        except OSError as e:
            raise AccessorError(
                f"Failed to back up {self.path}: {e}", target=self.target, operation="backup"
            ) from e

        self.logger.info(f"Backed up {self.path} as {digest}")
        return digest
