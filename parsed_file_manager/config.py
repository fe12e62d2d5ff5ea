"""Configuration dataclasses for Parsed File Manager."""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class FileType(Enum):
    """Storage used for targets."""
    FLAT = "flat"   # Plain files on disk
    RAM = "ram"     # In-memory targets (tests, dry runs)


class Ensure(Enum):
    """Intent of a record."""
    PRESENT = "present"
    ABSENT = "absent"


@dataclass
class EngineConfig:
    """Configuration for a ParsedFileEngine.

    Attributes:
        default_target: Target used when neither a record nor its spec names one
        filetype: Which accessor family backs the targets
        bucket_dir: Directory for flat-file backups (next to target if None)
        header_tool: Tool name written into the generated header
        log_file: Path to log file (None for stderr only)
    """
    default_target: Optional[str] = None
    filetype: FileType = FileType.FLAT
    bucket_dir: Optional[Path] = None
    header_tool: str = "parsed_file_manager"
    log_file: Optional[Path] = None

    def __post_init__(self):
        """Normalize targets to strings and paths to Path objects."""
        if isinstance(self.default_target, os.PathLike):
            self.default_target = os.fspath(self.default_target)
        if isinstance(self.filetype, str):
            self.filetype = FileType(self.filetype.lower())
        if isinstance(self.bucket_dir, str):
            self.bucket_dir = Path(self.bucket_dir)
        if isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)
