"""Tests for target registry, record store, dirty tracking and backup ledger."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from parsed_file_manager.accessors import FileAccessor, RamAccessor
from parsed_file_manager.engine import (
    BackupLedger,
    DirtyTracker,
    RecordStore,
    TargetRegistry,
)
from parsed_file_manager.engine.registry import target_key
from parsed_file_manager.errors import ConfigurationError
from parsed_file_manager.records import ABSENT, Record
from parsed_file_manager.resource import ResourceSpec


class TestTargetRegistry:
    """Accessor memoization and target listing."""

    def test_accessor_memoized(self):
        factory = Mock(side_effect=lambda target: Mock(target=target))
        registry = TargetRegistry(factory, "/etc/hosts")

        first = registry.accessor_for("/etc/hosts")
        second = registry.accessor_for("/etc/hosts")

        assert first is second
        factory.assert_called_once_with("/etc/hosts")

    def test_path_targets_normalized(self):
        registry = TargetRegistry(Mock(), Path("/etc/hosts"))
        assert registry.default_target == "/etc/hosts"
        assert target_key(Path("/srv/hosts")) == "/srv/hosts"
        assert target_key("/srv/hosts") == "/srv/hosts"

    def test_list_targets_order(self):
        registry = TargetRegistry(Mock(), "/etc/hosts")
        registry.accessor_for("/srv/b")
        registry.accessor_for("/etc/hosts")
        specs = {
            "x": ResourceSpec("x", {"target": "/srv/c"}),
            "y": ResourceSpec("y", {"target": "/srv/b"}),
            "z": ResourceSpec("z"),
        }
        assert registry.list_targets(specs) == ["/etc/hosts", "/srv/b", "/srv/c"]

    def test_missing_default_target(self):
        registry = TargetRegistry(Mock())
        with pytest.raises(ConfigurationError):
            registry.require_default_target()
        with pytest.raises(ConfigurationError):
            registry.list_targets()

    def test_clear(self):
        registry = TargetRegistry(Mock(), "/etc/hosts")
        registry.accessor_for("/etc/hosts")
        registry.clear()
        assert registry.known_targets == []


class TestRecordStore:
    """Generations and lookup."""

    def test_generation_numbers_increase(self):
        store = RecordStore()
        first = store.replace([])
        second = store.replace([])
        store.clear()
        assert first.number < second.number < store.generation.number

    def test_replace_swaps_records(self):
        store = RecordStore()
        store.replace([Record(name="a", target="t")])
        store.replace([Record(name="b", target="t")])
        assert [r.name for r in store.records] == ["b"]

    def test_records_for_and_find(self):
        store = RecordStore()
        store.replace([Record(name="a", target="t1"), Record(name="b", target="t2")])
        store.append(Record(name="c", target="t1"))

        assert [r.name for r in store.records_for("t1")] == ["a", "c"]
        assert store.find_by_name("b").target == "t2"
        assert store.find_by_name("zz") is None


class TestDirtyTracker:
    """Deduplicated, ordered dirty set."""

    def test_pending_is_lexical_and_deduplicated(self):
        dirty = DirtyTracker()
        for target in ("/srv/b", "/etc/a", "/srv/b"):
            dirty.mark_modified(target)
        assert dirty.pending() == ["/etc/a", "/srv/b"]
        assert len(dirty) == 2
        assert list(dirty) == ["/etc/a", "/srv/b"]

    def test_unset_targets_ignored(self):
        dirty = DirtyTracker()
        dirty.mark_modified(None)
        dirty.mark_modified(ABSENT)
        assert len(dirty) == 0

    def test_discard_and_clear(self):
        dirty = DirtyTracker()
        dirty.mark_modified("a")
        dirty.mark_modified("b")
        dirty.discard("a")
        assert "a" not in dirty
        assert "b" in dirty
        dirty.clear()
        assert dirty.pending() == []


class TestBackupLedger:
    """At most one backup per target per generation."""

    @pytest.fixture
    def registry(self, populated_fs):
        return TargetRegistry(lambda target: RamAccessor(target, populated_fs), "/etc/hosts")

    def test_backup_once_per_generation(self, registry, populated_fs):
        ledger = BackupLedger(registry)

        assert ledger.backup_once("/etc/hosts", 1) is True
        assert ledger.backup_once("/etc/hosts", 1) is False
        assert ledger.backed_up("/etc/hosts", 1)
        assert len(populated_fs.backups["/etc/hosts"]) == 1

        assert ledger.backup_once("/etc/hosts", 2) is True
        assert len(populated_fs.backups["/etc/hosts"]) == 2

    def test_missing_target_recorded(self, registry, populated_fs):
        ledger = BackupLedger(registry)
        assert ledger.backup_once("/srv/new", 1) is True
        assert ledger.backed_up("/srv/new", 1)
        assert "/srv/new" not in populated_fs.backups

    def test_accessor_without_backup(self):
        class NullAccessor(FileAccessor):
            def read(self):
                return None

            def write(self, text):
                pass

        ledger = BackupLedger(TargetRegistry(NullAccessor, "null"))
        assert ledger.backup_once("null", 1) is False
        assert not ledger.backed_up("null", 1)

    def test_reset(self, registry):
        ledger = BackupLedger(registry)
        ledger.backup_once("/etc/hosts", 1)
        ledger.reset()
        assert not ledger.backed_up("/etc/hosts", 1)
