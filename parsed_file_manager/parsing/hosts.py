"""Hosts file format.

    127.0.0.1	localhost	localhost.localdomain	# loopback

Each data line holds an address, a canonical name, optional aliases and an
optional trailing comment. Comment and blank lines are kept verbatim.
"""

from typing import Any, Dict, List, Optional

from parsed_file_manager.errors import ParseError
from parsed_file_manager.parsing.lines import LineParser
from parsed_file_manager.records import ABSENT, Record
from parsed_file_manager.resource import ResourceSchema

HOSTS_SCHEMA = ResourceSchema(
    type_name="host",
    properties=("ensure", "ip", "host_aliases", "comment", "target"),
    parameters=("name",),
    key_attributes=("name",),
)


def _present(value: Any) -> bool:
    return value is not None and value is not ABSENT and value != "" and value != []


def _aliases(value: Any) -> List[str]:
    if not _present(value):
        return []
    if isinstance(value, str):
        return value.split()
    return [str(alias) for alias in value]


def process_host(line: str) -> Optional[Dict[str, Any]]:
    """Split a hosts line into fields, or None if it is not an entry."""
    comment = None
    if "#" in line:
        line, comment = line.split("#", 1)
        comment = comment.strip() or None

    parts = line.split()
    if len(parts) < 2:
        return None

    return {
        "ip": parts[0],
        "name": parts[1],
        "host_aliases": parts[2:],
        "comment": comment,
    }


def host_to_line(record: Record) -> str:
    """Render a host record."""
    for field_name in ("ip", "name"):
        if not _present(record.get(field_name)):
            raise ParseError(f"{field_name} is a required attribute for hosts")

    line = f"{record['ip']}\t{record['name']}"
    aliases = _aliases(record.get("host_aliases"))
    if aliases:
        line += "\t" + " ".join(aliases)
    if _present(record.get("comment")):
        line += f"\t# {record['comment']}"
    return line


class HostsParser(LineParser):
    """Parser for /etc/hosts style targets."""

    def __init__(self):
        super().__init__()
        self.text_line("comment", match=r"^\s*#")
        self.text_line("blank", match=r"^\s*$")
        self.record_line(
            "parsed",
            fields=("ip", "name", "host_aliases", "comment"),
            optional=("host_aliases", "comment"),
            process=process_host,
            to_line=host_to_line,
        )
