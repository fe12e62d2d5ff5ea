"""Tests for loading targets into record generations."""

import pytest

from parsed_file_manager import create_engine
from parsed_file_manager.accessors import RamAccessor
from parsed_file_manager.config import EngineConfig, Ensure, FileType
from parsed_file_manager.errors import (
    AccessorError,
    ConfigurationError,
    InternalInvariantError,
    ParseError,
    PrefetchError,
)
from parsed_file_manager.resource import ResourceSpec

from conftest import DEFAULT_TARGET, HOSTS_TEXT


class TestPrefetchTarget:
    """Loading a single target."""

    def test_missing_target_has_no_records(self, engine):
        assert engine.prefetch_target(DEFAULT_TARGET) == []

    def test_empty_target_has_no_records(self, engine, ram_fs):
        ram_fs.files[DEFAULT_TARGET] = ""
        assert engine.prefetch_target(DEFAULT_TARGET) == []

    def test_records_are_stamped(self, engine, populated_fs):
        records = engine.prefetch_target(DEFAULT_TARGET)

        assert len(records) == 5
        for record in records:
            assert record.on_disk is True
            assert record.target == DEFAULT_TARGET
            assert record.ensure is Ensure.PRESENT

    def test_does_not_touch_generation(self, engine, populated_fs):
        before = engine.store.generation.number
        engine.prefetch_target(DEFAULT_TARGET)
        assert engine.store.generation.number == before
        assert engine.store.records == []

    def test_parse_error_tagged_with_target(self, engine, ram_fs):
        ram_fs.files[DEFAULT_TARGET] = "10.0.0.1\tweb\ngarbage\n"
        with pytest.raises(ParseError) as exc_info:
            engine.prefetch_target(DEFAULT_TARGET)
        assert exc_info.value.target == DEFAULT_TARGET
        assert exc_info.value.line == 2

    def test_read_oserror_wrapped(self, make_engine):
        class BrokenAccessor(RamAccessor):
            def read(self):
                raise OSError("permission denied")

        engine = make_engine(accessor_factory=lambda target: BrokenAccessor(target, None))
        with pytest.raises(AccessorError) as exc_info:
            engine.prefetch_target(DEFAULT_TARGET)
        assert exc_info.value.operation == "read"


class TestPrefetchHook:
    """Post-processing of loaded records."""

    def test_hook_sees_stamped_records(self, make_engine, populated_fs):
        seen = []

        def hook(records):
            seen.extend(records)
            return [r for r in records if r.record_type == "parsed"]

        engine = make_engine(prefetch_hook=hook)
        records = engine.prefetch_target(DEFAULT_TARGET)

        assert len(seen) == 5
        assert all(r.on_disk for r in seen)
        assert [r.name for r in records] == ["localhost", "db", "cache"]

    def test_hook_returning_none(self, make_engine, populated_fs):
        engine = make_engine(prefetch_hook=lambda records: None)
        with pytest.raises(InternalInvariantError):
            engine.prefetch_target(DEFAULT_TARGET)

    def test_hook_error_not_collected(self, make_engine, populated_fs):
        """A broken hook aborts the whole prefetch right away."""
        engine = make_engine(prefetch_hook=lambda records: None)
        with pytest.raises(InternalInvariantError):
            engine.prefetch_all()


class TestPrefetchAll:
    """Loading every known target into a new generation."""

    def test_new_generation(self, engine, populated_fs):
        first = engine.prefetch_all()
        second = engine.prefetch_all()

        assert second.number > first.number
        assert len(second) == 5
        assert engine.store.generation is second

    def test_spec_targets_loaded(self, engine, populated_fs):
        populated_fs.files["/srv/hosts"] = "10.1.0.1\tapp\n"
        engine.prefetch_all([ResourceSpec("app", {"target": "/srv/hosts"})])

        assert [r.name for r in engine.records_for("/srv/hosts")] == ["app"]
        assert "/srv/hosts" in engine.registry.known_targets

    def test_known_targets_reloaded(self, engine, populated_fs):
        populated_fs.files["/srv/hosts"] = "10.1.0.1\tapp\n"
        engine.prefetch_all([ResourceSpec("app", {"target": "/srv/hosts"})])
        engine.prefetch_all()
        assert engine.record("app") is not None

    def test_resets_dirty_and_backups(self, engine, populated_fs):
        engine.prefetch_all()
        engine.mark_modified(DEFAULT_TARGET)
        engine.ledger.backup_once(DEFAULT_TARGET, engine.store.generation.number)

        generation = engine.prefetch_all()

        assert len(engine.dirty) == 0
        assert not engine.ledger.backed_up(DEFAULT_TARGET, generation.number)

    def test_failure_keeps_old_generation(self, engine, populated_fs):
        old = engine.prefetch_all()
        populated_fs.files[DEFAULT_TARGET] = "garbage\n"
        populated_fs.files["/srv/hosts"] = "junk\n"

        with pytest.raises(PrefetchError) as exc_info:
            engine.prefetch_all([ResourceSpec("app", {"target": "/srv/hosts"})])

        assert sorted(exc_info.value.failures) == [DEFAULT_TARGET, "/srv/hosts"]
        assert "2 target(s)" in str(exc_info.value)
        assert engine.store.generation is old
        assert len(engine.store.records) == 5

    def test_requires_default_target(self, make_engine):
        engine = make_engine(config=EngineConfig(filetype=FileType.RAM))
        with pytest.raises(ConfigurationError):
            engine.prefetch_all()

    def test_header_in_target_ignored(self, engine, populated_fs):
        populated_fs.files[DEFAULT_TARGET] = engine.header() + HOSTS_TEXT
        assert len(engine.prefetch_all()) == 5


class TestUndecodableTarget:
    """A target that is not valid text fails like any other read."""

    def test_collected_with_other_targets(self, tmp_path):
        hosts = tmp_path / "hosts"
        hosts.write_text("10.0.0.1\tweb\n")
        other = tmp_path / "other"
        other.write_bytes(b"10.0.0.2\t\xff\xfe\n")
        broken = tmp_path / "broken"
        broken.write_text("junk\n")

        engine = create_engine(default_target=str(hosts))
        with pytest.raises(PrefetchError) as exc_info:
            engine.prefetch_all([
                ResourceSpec("x", {"target": str(other)}),
                ResourceSpec("y", {"target": str(broken)}),
            ])

        failures = exc_info.value.failures
        assert sorted(failures) == sorted([str(other), str(broken)])
        assert isinstance(failures[str(other)], AccessorError)
        assert failures[str(other)].operation == "read"
        assert isinstance(failures[str(broken)], ParseError)
