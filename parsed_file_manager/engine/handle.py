"""Per-resource facade over one record.

A handle owns the property map of one record. When the record came from
disk, the handle and the record store share the same mapping, so every
change made through the handle is what the next flush writes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from parsed_file_manager.config import Ensure
from parsed_file_manager.errors import UnknownAttributeError
from parsed_file_manager.records import ABSENT, Record
from parsed_file_manager.resource import ResourceSchema, ResourceSpec

if TYPE_CHECKING:
    from parsed_file_manager.engine.engine import ParsedFileEngine


def _coerce(attr: str, value: Any) -> Any:
    if attr == "ensure" and isinstance(value, str):
        return Ensure(value)
    return value


class RecordHandle:
    """Binds one record to a live property map.

    Attributes:
        spec: Desired state this handle provides, if any
        record: The record's property map
    """

    def __init__(
        self,
        engine: "ParsedFileEngine",
        spec: Optional[ResourceSpec] = None,
        record: Optional[Record] = None,
    ):
        self._engine = engine
        self.spec = spec

        if record is None and spec is not None:
            record = engine.record(spec.name)
        if record is None:
            record = Record(record_type=engine.parser.default_record_type, ensure=Ensure.ABSENT)
        self.record = record

    @property
    def schema(self) -> ResourceSchema:
        return self._engine.schema

    @property
    def name(self) -> Optional[str]:
        if self.record.name is not None:
            return self.record.name
        return self.spec.name if self.spec is not None else None

    @property
    def record_type(self) -> Optional[str]:
        return self.record.record_type

    def create(self) -> str:
        """Copy every declared property from the spec and mark the record present."""
        if self.spec is not None:
            for prop in self.schema.properties:
                value = self.spec.declared_value(prop)
                if value is not None:
                    self.record[prop] = _coerce(prop, value)
        self.record.ensure = Ensure.PRESENT
        self._mark_target_modified()
        return f"{self.schema.type_name}_created"

    def destroy(self) -> str:
        """Mark the record absent; the next flush leaves it out of its target."""
        self.set("ensure", Ensure.ABSENT)
        return f"{self.schema.type_name}_deleted"

    def exists(self) -> bool:
        ensure = self.record.get("ensure")
        return not (ensure is None or ensure == Ensure.ABSENT)

    def get(self, attr: str) -> Any:
        """Current value of ``attr``.

        Attributes the record's type has no field for fall back to the
        spec's desired value, so they never show up as a change.
        """
        self._check(attr)
        value = self.record.get(attr)
        if value is not None or self._engine.parser.valid_attr(self.record.record_type, attr):
            return ABSENT if value is None else value
        if self.spec is not None:
            return self.spec.declared_value(attr)
        return None

    def set(self, attr: str, value: Any) -> None:
        """Store ``value`` and mark the affected targets dirty."""
        self._check(attr)
        self._mark_target_modified()
        self.record[attr] = _coerce(attr, value)
        if attr == "target":
            self._engine.mark_modified(self.record.target)

    def flush(self) -> None:
        """Write this record (and every other pending change) out."""
        if self.record.target is None:
            spec_target = self.spec.target if self.spec is not None else None
            self.record.target = spec_target or self._engine.require_default_target()
            self._engine.mark_modified(self.record.target)

        if self.spec is not None:
            for attr in self.schema.key_attributes:
                if self.record.get(attr) is None:
                    self.record[attr] = self.spec[attr]

        self._engine.flush(self.record)

    def prefetch(self) -> "RecordHandle":
        """Reload all targets and return the fresh handle for this spec."""
        if self.spec is None:
            raise ValueError("Cannot prefetch a handle that has no spec")
        return self._engine.prefetch({self.spec.name: self.spec})[self.spec.name]

    def _check(self, attr: str) -> None:
        if not self.schema.declares(attr):
            raise UnknownAttributeError(f"{self.schema.type_name} has no attribute '{attr}'")

    def _mark_target_modified(self) -> None:
        spec_target = self.spec.target if self.spec is not None else None
        if spec_target is not None and spec_target != self.record.target:
            self._engine.mark_modified(spec_target)
        self._engine.mark_modified(self.record.target)

    def __repr__(self) -> str:
        return f"RecordHandle({self.name!r}, target={self.record.target!r})"
