"""ribs: decode IPS patches and apply them to a base file."""

from .applier import OverflowPolicy, RecordOutOfRangeError, apply_records
from .decoder import PatchFormatError, decode
from .errors import RibsError
from .records import FillRecord, LiteralRecord, Record, RecordKind

__all__ = [
    "FillRecord",
    "LiteralRecord",
    "OverflowPolicy",
    "PatchFormatError",
    "Record",
    "RecordKind",
    "RecordOutOfRangeError",
    "RibsError",
    "apply_records",
    "decode",
]
