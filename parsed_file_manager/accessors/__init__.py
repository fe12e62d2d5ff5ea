"""File accessors.

Each accessor implements the FileAccessor interface for one target.

Available accessors:
    - FlatFileAccessor: plain files on disk, backed up to a FileBucket
    - RamAccessor: targets held in memory by a RamFileSystem

Usage:
    from parsed_file_manager.accessors import get_accessor_factory

    factory = get_accessor_factory(config)
    accessor = factory("/etc/hosts")
    text = accessor.read()
"""

from typing import Callable, Optional

from .base import FileAccessor
from .bucket import FileBucket
from .flat import FlatFileAccessor
from .ram import RamAccessor, RamFileSystem
from ..config import EngineConfig, FileType

AccessorFactory = Callable[[str], FileAccessor]


def get_accessor_factory(
    config: EngineConfig,
    filesystem: Optional[RamFileSystem] = None,
) -> AccessorFactory:
    """Get a function that builds the configured accessor for a target.

    Args:
        config: Engine configuration (filetype, bucket_dir)
        filesystem: Backing store for RAM targets (a new one if None)

    Returns:
        Callable taking a target and returning a FileAccessor

    Raises:
        NotImplementedError: If the filetype is not supported
    """
    if config.filetype == FileType.FLAT:
        bucket = FileBucket(config.bucket_dir) if config.bucket_dir else None

        def flat_factory(target: str) -> FileAccessor:
            return FlatFileAccessor(target, bucket=bucket)

        return flat_factory
    elif config.filetype == FileType.RAM:
        ram = filesystem if filesystem is not None else RamFileSystem()

        def ram_factory(target: str) -> FileAccessor:
            return RamAccessor(target, ram)

        return ram_factory
    else:
        raise NotImplementedError(
            f"Filetype '{config.filetype}' is not supported. "
            f"Supported filetypes: flat, ram"
        )


__all__ = [
    "AccessorFactory",
    "FileAccessor",
    "FileBucket",
    "FlatFileAccessor",
    "RamAccessor",
    "RamFileSystem",
    "get_accessor_factory",
]
