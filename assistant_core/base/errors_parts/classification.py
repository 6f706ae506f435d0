"""
Error classification helpers mapping exceptions to ``ErrorEnvelope`` values.

Classification is structural: the provider's ``FailureSignal``, an HTTP status
attribute, or the exception type. Message text is never inspected, so a
provider saying "timeout" in a rejection message cannot change the category.

Precedence:
    1. ``ProviderFailure.signal``
    2. Cancellation / timeout exception types
    3. HTTP status extraction and mapping
    4. ``ConnectionError``
    5. ``internal`` fallback
"""
from __future__ import annotations

import concurrent.futures
from typing import Dict, Optional

from ..cancellation_parts.cancelled_error import CancelledError
from .error_envelope import ErrorEnvelope
from .error_kind import ErrorKind
from .failure_signal import FailureSignal
from .provider_failure import ProviderFailure


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from a provider exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and not isinstance(val, bool) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and not isinstance(sc, bool) and 100 <= sc < 600:
            return sc
    return None


_SIGNAL_MAP: Dict[FailureSignal, ErrorKind] = {
    FailureSignal.UNAVAILABLE: ErrorKind.UNAVAILABLE,
    FailureSignal.TRANSIENT: ErrorKind.UNAVAILABLE,
    FailureSignal.QUOTA_EXCEEDED: ErrorKind.QUOTA_EXCEEDED,
    FailureSignal.TIMEOUT: ErrorKind.TIMEOUT,
    FailureSignal.REJECTED_INPUT: ErrorKind.INVALID_REQUEST,
    FailureSignal.PERMANENT: ErrorKind.INTERNAL,
}

_HTTP_STATUS_MAP: Dict[int, ErrorKind] = {
    400: ErrorKind.INVALID_REQUEST,
    408: ErrorKind.TIMEOUT,
    413: ErrorKind.INVALID_REQUEST,
    422: ErrorKind.INVALID_REQUEST,
    429: ErrorKind.QUOTA_EXCEEDED,
    502: ErrorKind.UNAVAILABLE,
    503: ErrorKind.UNAVAILABLE,
    504: ErrorKind.TIMEOUT,
}

_DEFAULT_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.INVALID_REQUEST: "request rejected by provider",
    ErrorKind.UNAVAILABLE: "provider unavailable",
    ErrorKind.QUOTA_EXCEEDED: "provider quota exceeded",
    ErrorKind.TIMEOUT: "provider timed out",
    ErrorKind.NO_PROVIDER_AVAILABLE: "no provider available",
    ErrorKind.INTERNAL: "internal error",
}


def classify_kind(exc: BaseException) -> ErrorKind:
    """Classify an exception into a normalized :class:`ErrorKind`."""
    if isinstance(exc, ProviderFailure):
        return _SIGNAL_MAP.get(exc.signal, ErrorKind.INTERNAL)
    if isinstance(exc, (TimeoutError, concurrent.futures.TimeoutError, CancelledError)):
        return ErrorKind.TIMEOUT
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if isinstance(exc, ConnectionError):
        return ErrorKind.UNAVAILABLE
    return ErrorKind.INTERNAL


def envelope_for(kind: ErrorKind, message: Optional[str] = None) -> ErrorEnvelope:
    """Build an envelope for ``kind`` using the taxonomy's retry and status values."""
    return ErrorEnvelope.of(kind, message or _DEFAULT_MESSAGES[kind])


def status_for(kind: ErrorKind) -> int:
    """Return the HTTP status the transport uses for ``kind``."""
    return kind.suggested_status


def classify_failure(exc: BaseException) -> ErrorEnvelope:
    """Normalize any provider exception into an :class:`ErrorEnvelope`.

    ``internal`` failures get a generic message; the exception text of an
    unexpected error is kept out of caller-facing output.
    """
    kind = classify_kind(exc)
    if kind is ErrorKind.INTERNAL:
        return envelope_for(kind)
    if isinstance(exc, ProviderFailure) and exc.message:
        return envelope_for(kind, exc.message)
    return envelope_for(kind)


__all__ = [
    "classify_failure",
    "classify_kind",
    "envelope_for",
    "status_for",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
