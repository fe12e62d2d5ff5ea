"""Abstract parser contract.

A parser turns target text into an ordered list of records and back. It
also classifies record types (data vs. comment/blank) and says which
attributes a record type carries.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List

from parsed_file_manager.records import Record

# Lines starting with this prefix are generated and never parsed back.
HEADER_PREFIX = "# HEADER:"


class Parser(ABC):
    """Base class for target formats."""

    @abstractmethod
    def parse(self, text: str) -> List[Record]:
        """Parse target text into records, in file order.

        Raises:
            ParseError: If the text does not follow the format
        """
        pass

    @abstractmethod
    def serialize(self, records: Iterable[Record]) -> str:
        """Render records back into target text."""
        pass

    @abstractmethod
    def is_non_data(self, record_type: str) -> bool:
        """True if records of this type carry no data (comments, blanks)."""
        pass

    @abstractmethod
    def valid_attr(self, record_type: str, attr: str) -> bool:
        """True if records of this type have a field named ``attr``."""
        pass

    @property
    @abstractmethod
    def default_record_type(self) -> str:
        """Record type given to records created from scratch."""
        pass

    def header_text(self, tool: str = "parsed_file_manager") -> str:
        """Header placed at the top of every written target."""
        now = datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S %z")
        return (
            f"{HEADER_PREFIX} This file was autogenerated at {now}\n"
            f"{HEADER_PREFIX} by {tool}.  While it can still be managed manually, it\n"
            f"{HEADER_PREFIX} is definitely not recommended.\n"
        )
