"""Record model shared by parsers, the record store and handles.

A record is a plain mapping of field name to value. A few keys are
reserved for the engine:

    name         unique key within a target (optional for positional kinds)
    target       target the record belongs to
    record_type  parser tag (comment, blank, data variants)
    on_disk      True once loaded from or written to storage
    ensure       intent, an ``Ensure`` member
"""

from typing import Any, Optional

from parsed_file_manager.config import Ensure

# Returned for attributes a record has no value for.
ABSENT = Ensure.ABSENT

RESERVED_FIELDS = ("name", "target", "record_type", "on_disk", "ensure")

# Bookkeeping fields that are not part of a record's data.
INTERNAL_FIELDS = ("record_type", "on_disk")


class Record(dict):
    """Dict with attribute access to the reserved fields."""

    @property
    def name(self) -> Optional[str]:
        return self.get("name")

    @name.setter
    def name(self, value: Optional[str]) -> None:
        self["name"] = value

    @property
    def target(self) -> Optional[str]:
        return self.get("target")

    @target.setter
    def target(self, value: Optional[str]) -> None:
        self["target"] = value

    @property
    def record_type(self) -> Optional[str]:
        return self.get("record_type")

    @record_type.setter
    def record_type(self, value: Optional[str]) -> None:
        self["record_type"] = value

    @property
    def on_disk(self) -> bool:
        return bool(self.get("on_disk", False))

    @on_disk.setter
    def on_disk(self, value: bool) -> None:
        self["on_disk"] = bool(value)

    @property
    def ensure(self) -> Optional[Ensure]:
        return self.get("ensure")

    @ensure.setter
    def ensure(self, value: Optional[Ensure]) -> None:
        self["ensure"] = value

    @property
    def absent(self) -> bool:
        """True if the record is meant to be removed."""
        return self.get("ensure") == Ensure.ABSENT

    def __repr__(self) -> str:
        return f"Record({dict.__repr__(self)})"


def clean(record: Any) -> Record:
    """Return a copy of ``record`` without engine bookkeeping fields."""
    cleaned = Record(record)
    for key in INTERNAL_FIELDS:
        cleaned.pop(key, None)
    return cleaned
