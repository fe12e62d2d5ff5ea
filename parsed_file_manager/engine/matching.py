"""Binding on-disk records to desired-state specs.

Records are visited in file order. A record is bound to the spec with its
exact name; otherwise an optional positional matcher may pick a spec for
it. A spec is bound at most once.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, List, Mapping, Optional

from parsed_file_manager.errors import InternalInvariantError
from parsed_file_manager.records import Record
from parsed_file_manager.resource import ResourceSpec

logger = logging.getLogger(__name__)

Matcher = Callable[[Record, Mapping[str, ResourceSpec]], Optional[ResourceSpec]]


@dataclass
class Binding:
    """A spec bound to a record.

    Attributes:
        spec: The desired-state spec
        record: The on-disk record now providing it
        by_name: True if bound by name, False if by the matcher
    """
    spec: ResourceSpec
    record: Record
    by_name: bool = True


def first_match(predicate: Callable[[Record, ResourceSpec], bool]) -> Matcher:
    """Build a matcher returning the first remaining spec accepted by ``predicate``.

    Ties between several acceptable specs go to the first one in
    iteration order of the remaining specs.
    """
    def matcher(record: Record, remaining: Mapping[str, ResourceSpec]) -> Optional[ResourceSpec]:
        for spec in remaining.values():
            if predicate(record, spec):
                return spec
        return None

    return matcher


class MatchEngine:
    """Associates freshly loaded records with specs."""

    def __init__(
        self,
        is_non_data: Callable[[Optional[str]], bool],
        matcher: Optional[Matcher] = None,
    ):
        self._is_non_data = is_non_data
        self.matcher = matcher

    def skip(self, record: Record) -> bool:
        """True for comment/blank records, which are never bound."""
        return self._is_non_data(record.get("record_type"))

    def match(self, records: Iterable[Record], specs: Mapping[str, ResourceSpec]) -> List[Binding]:
        """Bind records to specs.

        Args:
            records: Records in file order
            specs: Desired specs keyed by name

        Returns:
            Bindings in record order

        Raises:
            InternalInvariantError: If the matcher returns a spec that is
                not among the remaining ones
        """
        remaining = dict(specs)
        bindings: List[Binding] = []

        for record in records:
            if self.skip(record):
                continue

            name = record.get("name")
            if name is not None and name in remaining:
                spec = remaining.pop(name)
                bindings.append(Binding(spec=spec, record=record, by_name=True))
                logger.debug(f"Bound {name} to record in {record.get('target')}")
                continue

            if self.matcher is None or not remaining:
                continue

            spec = self.matcher(record, MappingProxyType(remaining))
            if spec is None:
                continue
            if remaining.get(spec.name) is not spec:
                raise InternalInvariantError(
                    f"Matcher returned spec {spec.name!r} which is not awaiting a match"
                )

            del remaining[spec.name]
            record.name = spec.name
            bindings.append(Binding(spec=spec, record=record, by_name=False))
            logger.debug(f"Matched {spec.name} to unnamed record in {record.get('target')}")

        return bindings
