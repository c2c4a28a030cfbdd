"""Decoder for IPS patch streams.

Wire layout::

    "PATCH"                         5 bytes
    record*                         until only the footer remains
    "EOF"                           3 bytes

    record := offset:u24be size:u16be (size == 0 ? length:u16be value:u8 : data[size])
"""

from __future__ import annotations

from typing import Any, Mapping

from .errors import RibsError
from .records import FillRecord, LiteralRecord, Record

__all__ = ["HEADER", "FOOTER", "MIN_PATCH_SIZE", "PatchFormatError", "decode"]

HEADER = b"PATCH"
FOOTER = b"EOF"
MIN_PATCH_SIZE = 14

_FORMAT_MESSAGES = {
    "size": "Invalid patch size",
    "header": "Missing PATCH header",
    "footer": "Missing EOF footer",
    "truncated": "Truncated patch record",
}


class PatchFormatError(RibsError):
    """Raised when a patch stream is malformed."""

    def __init__(self, reason: str, *, details: Mapping[str, Any] | None = None) -> None:
        message = _FORMAT_MESSAGES.get(reason, reason)
        payload = {"reason": reason, **dict(details or {})}
        super().__init__(message, details=payload)
        self.reason = reason


class _Cursor:
    """Read position over an immutable patch buffer, bounded by the footer."""

    __slots__ = ("_view", "_limit", "position")

    def __init__(self, data: bytes, start: int, limit: int) -> None:
        self._view = memoryview(data)
        self._limit = limit
        self.position = start

    @property
    def remaining(self) -> int:
        return self._limit - self.position

    def take(self, count: int, *, field: str) -> bytes:
        if count > self.remaining:
            raise PatchFormatError(
                "truncated",
                details={
                    "field": field,
                    "position": self.position,
                    "needed": count,
                    "available": self.remaining,
                },
            )
        chunk = self._view[self.position : self.position + count].tobytes()
        self.position += count
        return chunk

    def uint(self, width: int, *, field: str) -> int:
        return int.from_bytes(self.take(width, field=field), "big")


def _validate(patch: bytes) -> None:
    if len(patch) < MIN_PATCH_SIZE:
        raise PatchFormatError("size", details={"size": len(patch), "minimum": MIN_PATCH_SIZE})
    if patch[: len(HEADER)] != HEADER:
        raise PatchFormatError("header")
    if patch[-len(FOOTER) :] != FOOTER:
        raise PatchFormatError("footer")


def decode(patch: bytes | bytearray | memoryview) -> tuple[Record, ...]:
    """Decode ``patch`` into its records, in stream order.

    Raises :class:`PatchFormatError` when the framing is invalid or a record
    runs into the footer. No partial result is returned on failure.
    """
    data = bytes(patch)
    _validate(data)

    cursor = _Cursor(data, len(HEADER), len(data) - len(FOOTER))
    records: list[Record] = []
    while cursor.remaining > 0:
        offset = cursor.uint(3, field="offset")
        size = cursor.uint(2, field="size")
        if size == 0:
            length = cursor.uint(2, field="fill_length")
            value = cursor.take(1, field="fill_value")[0]
            records.append(FillRecord(offset=offset, length=length, value=value))
        else:
            records.append(LiteralRecord(offset=offset, data=cursor.take(size, field="data")))
    return tuple(records)
