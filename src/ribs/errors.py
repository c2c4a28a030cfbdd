"""Exception hierarchy shared by the decoder, applier and pipeline."""

from __future__ import annotations

from typing import Any, Mapping

__all__ = ["RibsError"]


class RibsError(RuntimeError):
    """Raised when a patch cannot be decoded or applied."""

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = dict(details or {})
