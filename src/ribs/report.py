"""Human-readable record listings for verbose output."""

from __future__ import annotations

from typing import Iterable, Iterator

from .records import FillRecord, Record

__all__ = ["describe_record", "describe_records", "quote_byte"]

_NAMED_ESCAPES = {
    0x07: "\\a",
    0x08: "\\b",
    0x09: "\\t",
    0x0A: "\\n",
    0x0B: "\\v",
    0x0C: "\\f",
    0x0D: "\\r",
    0x1B: "\\e",
}


def quote_byte(value: int) -> str:
    """Render a single byte as a double-quoted literal, escaping non-printables."""
    if value in _NAMED_ESCAPES:
        return f'"{_NAMED_ESCAPES[value]}"'
    if value in (0x22, 0x5C):
        return f'"\\{chr(value)}"'
    if 0x20 <= value < 0x7F:
        return f'"{chr(value)}"'
    return f'"\\x{value:02X}"'


def describe_record(record: Record, position: int) -> str:
    """Describe ``record`` at 1-based ``position`` on a single line."""
    if isinstance(record, FillRecord):
        return (
            f"Record No.: {position}, Type: RLE,    "
            f"Offset: {record.offset:x}, Repeat: {record.length}, Value: {quote_byte(record.value)}"
        )
    return f"Record No.: {position}, Type: Normal, Offset: {record.offset:x}, Bytes: {record.size}"


def describe_records(records: Iterable[Record]) -> Iterator[str]:
    for position, record in enumerate(records, start=1):
        yield describe_record(record, position)
