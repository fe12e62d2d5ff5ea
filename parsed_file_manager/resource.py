"""Desired-state side of the engine.

A ResourceSchema describes one kind of managed entry (its properties,
parameters and key attributes). A ResourceSpec is one desired entry of
that kind, usually built from user input or a manifest.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class ResourceSchema:
    """Static attribute schema for a kind of resource.

    Attributes:
        type_name: Resource kind (e.g. "host"); used in create/destroy tokens
        properties: Attributes synchronized to the record
        parameters: Attributes that only describe the resource
        key_attributes: Attributes that identify a record; copied on flush
    """
    type_name: str
    properties: Tuple[str, ...] = ("ensure", "target")
    parameters: Tuple[str, ...] = ("name",)
    key_attributes: Tuple[str, ...] = ("name",)

    @property
    def attributes(self) -> Tuple[str, ...]:
        """Every attribute a handle may get or set."""
        return self.properties + tuple(p for p in self.parameters if p not in self.properties)

    def declares(self, attr: str) -> bool:
        return attr in self.properties or attr in self.parameters


@dataclass
class ResourceSpec:
    """One desired entry.

    Attributes:
        name: Unique name of the resource
        desired: Desired property values ("should" values)
    """
    name: str
    desired: Dict[str, Any] = field(default_factory=dict)

    @property
    def target(self) -> Optional[str]:
        """Target override requested by this spec, if any."""
        return self.desired.get("target")

    def declared_value(self, attr: str) -> Any:
        """Desired value of ``attr``, or None if not declared."""
        if attr == "name":
            return self.desired.get("name", self.name)
        return self.desired.get(attr)

    def __getitem__(self, attr: str) -> Any:
        return self.declared_value(attr)
