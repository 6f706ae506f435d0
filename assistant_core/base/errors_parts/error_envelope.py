"""
Caller-facing error value.

An ``ErrorEnvelope`` is what ``Orchestrator.dispatch`` returns instead of a
``CapabilityResult`` when the request cannot be served. It never carries the
original exception; use the logs for diagnostics.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .error_kind import ErrorKind


@dataclass(frozen=True)
class ErrorEnvelope:
    """Normalized failure returned to callers.

    Attributes:
        kind: Error category.
        message: Human-readable message safe to show to end users.
        retryable: Whether a later identical request may succeed.
        suggested_status: HTTP status the transport should respond with.
    """

    kind: ErrorKind
    message: str
    retryable: bool
    suggested_status: int

    @classmethod
    def of(cls, kind: ErrorKind, message: str) -> "ErrorEnvelope":
        """Build an envelope using the retry policy and status of ``kind``."""
        return cls(kind=kind, message=message, retryable=kind.retryable, suggested_status=kind.suggested_status)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "retryable": self.retryable,
            "suggestedStatus": self.suggested_status,
        }


__all__ = ["ErrorEnvelope"]
