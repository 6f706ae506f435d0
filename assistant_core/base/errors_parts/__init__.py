"""Errors parts package public surface.

Prefer importing from ``assistant_core.base.errors`` for the stable surface.
"""

from .classification import classify_failure, classify_kind, envelope_for, status_for
from .error_envelope import ErrorEnvelope
from .error_kind import ErrorKind
from .failure_signal import FailureSignal
from .provider_failure import ProviderFailure

__all__ = [
    "ErrorEnvelope",
    "ErrorKind",
    "FailureSignal",
    "ProviderFailure",
    "classify_failure",
    "classify_kind",
    "envelope_for",
    "status_for",
]
