r"""Line-oriented parser built from declared record types.

Every line of a target becomes exactly one record. Record types are tried
in declaration order; the first that accepts a line wins.

    parser = LineParser()
    parser.text_line("comment", match=r"^\s*#")
    parser.text_line("blank", match=r"^\s*$")
    parser.record_line("entry", fields=("minute", "command"), optional=("command",))
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Pattern, Tuple, Union

from parsed_file_manager.errors import ParseError
from parsed_file_manager.parsing.base import HEADER_PREFIX, Parser
from parsed_file_manager.records import ABSENT, Record


@dataclass
class RecordType:
    """How one kind of line is parsed and rendered.

    Attributes:
        name: Record type tag stored in ``record_type``
        fields: Field names, in line order
        text: Text lines are kept verbatim in a ``line`` field
        match: Regex a line must match to be of this type
        separator: Regex separating fields
        joiner: String placed between fields when rendering
        optional: Fields that may be missing
        absent: Placeholder text for a missing optional field
        process: Custom line -> values function (None if not accepted)
        to_line: Custom record -> line function
    """
    name: str
    fields: Tuple[str, ...] = ()
    text: bool = False
    match: Optional[Pattern] = None
    separator: str = r"\s+"
    joiner: str = " "
    optional: Tuple[str, ...] = ()
    absent: str = ""
    process: Optional[Callable[[str], Optional[Dict[str, Any]]]] = None
    to_line: Optional[Callable[[Record], str]] = None


class LineParser(Parser):
    """Parser for formats with one record per line."""

    def __init__(self, line_separator: str = "\n", trailing_separator: bool = True):
        self.line_separator = line_separator
        self.trailing_separator = trailing_separator
        self._record_types: Dict[str, RecordType] = {}

    def text_line(self, name: str, match: Union[str, Pattern]) -> RecordType:
        """Declare a text record type (kept verbatim, carries no data)."""
        return self._add(RecordType(name=name, fields=("line",), text=True, match=re.compile(match)))

    def record_line(
        self,
        name: str,
        fields: Iterable[str],
        match: Optional[Union[str, Pattern]] = None,
        **options: Any,
    ) -> RecordType:
        """Declare a data record type."""
        compiled = re.compile(match) if match is not None else None
        return self._add(RecordType(name=name, fields=tuple(fields), match=compiled, **options))

    def _add(self, record_type: RecordType) -> RecordType:
        if record_type.name in self._record_types:
            raise ValueError(f"Record type '{record_type.name}' is already declared")
        self._record_types[record_type.name] = record_type
        return record_type

    def record_type(self, name: str) -> RecordType:
        try:
            return self._record_types[name]
        except KeyError:
            raise ValueError(f"Unknown record type: {name}") from None

    @property
    def record_types(self) -> List[RecordType]:
        return list(self._record_types.values())

    @property
    def default_record_type(self) -> str:
        for record_type in self._record_types.values():
            if not record_type.text:
                return record_type.name
        raise ValueError("No data record type declared")

    def is_non_data(self, record_type: str) -> bool:
        declared = self._record_types.get(record_type)
        return declared is not None and declared.text

    def valid_attr(self, record_type: str, attr: str) -> bool:
        declared = self._record_types.get(record_type)
        return declared is not None and attr in declared.fields

    # Parsing

    def parse(self, text: str) -> List[Record]:
        lines = text.split(self.line_separator)
        if lines and lines[-1] == "":
            lines.pop()

        records = []
        for number, line in enumerate(lines, start=1):
            if line.startswith(HEADER_PREFIX):
                continue
            record = self.parse_line(line)
            if record is None:
                raise ParseError(f"Could not parse line {line!r}", line=number)
            records.append(record)
        return records

    def parse_line(self, line: str) -> Optional[Record]:
        """Parse one line, or return None if no record type accepts it."""
        for record_type in self._record_types.values():
            if record_type.match is not None and not record_type.match.search(line):
                continue

            if record_type.text:
                return Record(record_type=record_type.name, line=line)

            if record_type.process is not None:
                values = record_type.process(line)
            else:
                values = self._split(record_type, line)
            if values is None:
                continue

            record = Record(values)
            record.record_type = record_type.name
            return record
        return None

    def _split(self, record_type: RecordType, line: str) -> Optional[Dict[str, Any]]:
        fields = record_type.fields
        parts = re.split(record_type.separator, line.strip(), maxsplit=max(len(fields) - 1, 0))
        required = [f for f in fields if f not in record_type.optional]
        if len(parts) < len(required):
            return None

        values = {}
        for index, field_name in enumerate(fields):
            part = parts[index] if index < len(parts) else None
            if part is None or part == record_type.absent:
                values[field_name] = None
            else:
                values[field_name] = part
        return values

    # Rendering

    def serialize(self, records: Iterable[Record]) -> str:
        text = self.line_separator.join(self.to_line(record) for record in records)
        if self.trailing_separator and text:
            text += self.line_separator
        return text

    def to_line(self, record: Record) -> str:
        """Render one record as a line."""
        record_type = self.record_type(record.record_type)
        if record_type.text:
            return record.get("line", "")
        if record_type.to_line is not None:
            return record_type.to_line(record)

        parts = []
        for field_name in record_type.fields:
            value = record.get(field_name)
            if value is None or value is ABSENT:
                if field_name not in record_type.optional:
                    raise ParseError(f"{field_name} is a required field for {record_type.name} records")
                parts.append(record_type.absent)
            else:
                parts.append(str(value))

        # Trailing missing optional fields are left off entirely
        while parts and parts[-1] == record_type.absent:
            parts.pop()
        return record_type.joiner.join(parts)
