"""In-memory record store.

The store holds one generation at a time: the full list of records loaded
by the last prefetch, plus any records added since. A new prefetch replaces
the generation wholesale; the generation number is what the backup ledger
keys on.
"""

import itertools
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from parsed_file_manager.records import Record


@dataclass
class Generation:
    """One prefetch worth of records.

    Attributes:
        number: Unique, increasing identifier of the generation
        records: Records in target order, then file order
    """
    number: int
    records: List[Record] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)


class RecordStore:
    """Authoritative list of records known across all targets."""

    def __init__(self):
        self._numbers = itertools.count(1)
        self._generation = Generation(number=0)

    @property
    def generation(self) -> Generation:
        return self._generation

    @property
    def records(self) -> List[Record]:
        return self._generation.records

    def replace(self, records: Iterable[Record]) -> Generation:
        """Start a new generation with ``records``."""
        self._generation = Generation(number=next(self._numbers), records=list(records))
        return self._generation

    def append(self, record: Record) -> None:
        self._generation.records.append(record)

    def records_for(self, target: str) -> List[Record]:
        """Records of the current generation that belong to ``target``."""
        return [r for r in self._generation.records if r.get("target") == target]

    def find_by_name(self, name: str) -> Optional[Record]:
        """First record of the current generation named ``name``."""
        for record in self._generation.records:
            if record.get("name") == name:
                return record
        return None

    def clear(self) -> None:
        self._generation = Generation(number=next(self._numbers))
