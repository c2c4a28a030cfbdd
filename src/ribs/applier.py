"""Replay decoded records onto a base buffer."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable

from .errors import RibsError
from .records import Record

__all__ = ["OverflowPolicy", "RecordOutOfRangeError", "apply_records"]

LOGGER = logging.getLogger(__name__)


class OverflowPolicy(str, Enum):
    """What to do with a record that writes past the end of the buffer."""

    ERROR = "error"
    GROW = "grow"


class RecordOutOfRangeError(RibsError):
    """Raised when a record writes past the end of the base buffer."""

    def __init__(self, position: int, record: Record, buffer_size: int) -> None:
        super().__init__(
            f"Record {position} writes {record.offset:#x}..{record.end:#x} past end of base ({buffer_size:#x} bytes)",
            details={
                "position": position,
                "kind": record.kind.value,
                "offset": record.offset,
                "end": record.end,
                "buffer_size": buffer_size,
            },
        )
        self.position = position
        self.record = record
        self.buffer_size = buffer_size


def apply_records(
    base: bytes | bytearray,
    records: Iterable[Record],
    *,
    overflow: OverflowPolicy = OverflowPolicy.ERROR,
) -> bytes:
    """Return a copy of ``base`` with ``records`` written over it in order.

    Later records win where ranges overlap. ``base`` itself is never modified.
    """
    buffer = bytearray(base)
    for position, record in enumerate(records, start=1):
        if record.size and record.end > len(buffer):
            if overflow is not OverflowPolicy.GROW:
                raise RecordOutOfRangeError(position, record, len(buffer))
            LOGGER.debug("Growing buffer from %d to %d bytes for record %d", len(buffer), record.end, position)
            buffer.extend(bytes(record.end - len(buffer)))
        record.apply_to(buffer)
    return bytes(buffer)
