"""
Normalized dispatch error kinds (taxonomy).

Defines the ``ErrorKind`` enumeration returned to callers inside an
``ErrorEnvelope``. Values are lowercase snake_case and are a stable public
contract for the HTTP transport, logging and analytics. Each kind carries its
retry policy and the HTTP status the transport should use.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Enumerated failure categories of a dispatch."""

    INVALID_REQUEST = "invalid_request"
    UNAVAILABLE = "unavailable"
    QUOTA_EXCEEDED = "quota_exceeded"
    TIMEOUT = "timeout"
    NO_PROVIDER_AVAILABLE = "no_provider_available"
    INTERNAL = "internal"

    @property
    def retryable(self) -> bool:
        return self in _RETRYABLE

    @property
    def suggested_status(self) -> int:
        return _STATUS[self]


_RETRYABLE = frozenset({ErrorKind.UNAVAILABLE, ErrorKind.QUOTA_EXCEEDED, ErrorKind.TIMEOUT})

_STATUS = {
    ErrorKind.INVALID_REQUEST: 400,
    ErrorKind.UNAVAILABLE: 503,
    ErrorKind.QUOTA_EXCEEDED: 429,
    ErrorKind.TIMEOUT: 408,
    ErrorKind.NO_PROVIDER_AVAILABLE: 503,
    ErrorKind.INTERNAL: 500,
}


__all__ = ["ErrorKind"]
