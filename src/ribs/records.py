"""Typed edit records decoded from an IPS patch stream."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class RecordKind(str, Enum):
    """Shape of a decoded record."""

    LITERAL = "literal"
    FILL = "fill"


@dataclass(frozen=True, slots=True)
class LiteralRecord:
    """Write ``data`` verbatim starting at ``offset``."""

    offset: int
    data: bytes

    @property
    def kind(self) -> RecordKind:
        return RecordKind.LITERAL

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def end(self) -> int:
        return self.offset + len(self.data)

    def apply_to(self, buffer: bytearray) -> None:
        buffer[self.offset : self.end] = self.data


@dataclass(frozen=True, slots=True)
class FillRecord:
    """Write ``value`` repeated ``length`` times starting at ``offset``.

    A ``length`` of zero is legal in the wire format and leaves the buffer
    untouched.
    """

    offset: int
    length: int
    value: int

    @property
    def kind(self) -> RecordKind:
        return RecordKind.FILL

    @property
    def size(self) -> int:
        return self.length

    @property
    def end(self) -> int:
        return self.offset + self.length

    def apply_to(self, buffer: bytearray) -> None:
        if not self.length:
            return
        buffer[self.offset : self.end] = bytes((self.value,)) * self.length


Record = Union[LiteralRecord, FillRecord]

__all__ = ["FillRecord", "LiteralRecord", "Record", "RecordKind"]
