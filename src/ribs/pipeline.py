"""End-to-end patch run: read, decode, report, apply and write."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Mapping, Tuple

from .applier import apply_records
from .config import PatchOptions
from .decoder import decode
from .errors import RibsError
from .records import Record
from .report import describe_records

__all__ = ["PatchOutcome", "read_bytes", "run_patch", "write_bytes_atomic"]

LOGGER = logging.getLogger(__name__)
TELEMETRY_LOGGER = logging.getLogger("ribs.telemetry")


@dataclass(slots=True)
class PatchOutcome:
    """Result of a single :func:`run_patch` invocation."""

    records: Tuple[Record, ...]
    output_path: Path | None = None
    output_bytes: int = 0

    @property
    def applied(self) -> bool:
        return self.output_path is not None


def _serialise_event_value(value: Any) -> Any:
    """Convert telemetry payload values into JSON-friendly representations."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, Path):
        return value.as_posix()
    if isinstance(value, (list, tuple, set)):
        return [_serialise_event_value(item) for item in value]
    if isinstance(value, Mapping):
        return {str(key): _serialise_event_value(child) for key, child in value.items()}
    return str(value)


def _emit_event(event: str, **fields: Any) -> None:
    """Log a structured telemetry event as compact JSON."""
    payload = {"event": event, "timestamp": datetime.now(timezone.utc).isoformat()}
    for key, value in fields.items():
        payload[key] = _serialise_event_value(value)
    TELEMETRY_LOGGER.info(json.dumps(payload, separators=(",", ":"), ensure_ascii=True))


def read_bytes(path: Path) -> bytes:
    return Path(path).read_bytes()


def write_bytes_atomic(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` via a temporary sibling and an atomic rename."""
    target = Path(path)
    handle = tempfile.NamedTemporaryFile("wb", dir=target.parent, prefix=f".{target.name}.", delete=False)
    temp_path = Path(handle.name)
    try:
        with handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_path, target)
    finally:
        temp_path.unlink(missing_ok=True)


def run_patch(options: PatchOptions, *, sink: Callable[[str], None] | None = None) -> PatchOutcome:
    """Run one patch invocation described by ``options``.

    Records are described to ``sink`` when ``options.verbose`` is set. The
    output file is only written after every record applied cleanly.
    """
    patch_bytes = read_bytes(options.patch)
    try:
        records = decode(patch_bytes)
    except RibsError as error:
        _emit_event("patch.failed", stage="decode", patch=options.patch, error=str(error), details=error.details)
        raise
    _emit_event("patch.decoded", patch=options.patch, patch_bytes=len(patch_bytes), records=len(records))

    if options.verbose and sink is not None:
        for line in describe_records(records):
            sink(line)

    outcome = PatchOutcome(records=records)
    if options.out is None:
        return outcome

    assert options.base is not None
    base_bytes = read_bytes(options.base)
    try:
        patched = apply_records(base_bytes, records, overflow=options.overflow)
    except RibsError as error:
        _emit_event("patch.failed", stage="apply", base=options.base, error=str(error), details=error.details)
        raise

    write_bytes_atomic(options.out, patched)
    LOGGER.debug("Wrote %d bytes to %s", len(patched), options.out)
    _emit_event(
        "patch.applied",
        base=options.base,
        output=options.out,
        base_bytes=len(base_bytes),
        output_bytes=len(patched),
        overflow=options.overflow,
    )
    outcome.output_path = options.out
    outcome.output_bytes = len(patched)
    return outcome
