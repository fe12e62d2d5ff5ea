"""Shared pytest fixtures for Parsed File Manager tests.

Provides hosts content, in-memory file systems, engines and helpers for
testing the engine without touching real system files.
"""

import pytest

from parsed_file_manager.accessors import RamFileSystem
from parsed_file_manager.config import EngineConfig, FileType
from parsed_file_manager.engine import ParsedFileEngine
from parsed_file_manager.parsing import HEADER_PREFIX, HostsParser, HOSTS_SCHEMA

DEFAULT_TARGET = "/etc/hosts"

HOSTS_TEXT = (
    "# static entries\n"
    "127.0.0.1\tlocalhost\tlocalhost.localdomain\n"
    "\n"
    "10.0.0.5\tdb\tdb.internal\t# primary database\n"
    "10.0.0.6\tcache\n"
)


def body(text):
    """Target text without the generated header lines."""
    return "".join(
        line for line in text.splitlines(keepends=True)
        if not line.startswith(HEADER_PREFIX)
    )


@pytest.fixture
def ram_fs():
    """Empty in-memory file system."""
    return RamFileSystem()


@pytest.fixture
def populated_fs(ram_fs):
    """In-memory file system with a hosts file at the default target."""
    ram_fs.files[DEFAULT_TARGET] = HOSTS_TEXT
    return ram_fs


@pytest.fixture
def ram_config():
    """Engine config backed by RAM targets."""
    return EngineConfig(default_target=DEFAULT_TARGET, filetype=FileType.RAM)


@pytest.fixture
def make_engine(ram_config, ram_fs):
    """Factory for hosts engines sharing the ram_fs file system."""
    def factory(**kwargs):
        config = kwargs.pop("config", ram_config)
        return ParsedFileEngine(config, HostsParser(), HOSTS_SCHEMA, filesystem=ram_fs, **kwargs)
    return factory


@pytest.fixture
def engine(make_engine):
    """Hosts engine over the ram_fs file system."""
    return make_engine()


@pytest.fixture
def hosts_file(tmp_path):
    """Real hosts file with sample content."""
    path = tmp_path / "etc" / "hosts"
    path.parent.mkdir()
    path.write_text(HOSTS_TEXT)
    return path
