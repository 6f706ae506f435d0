"""Dispatch error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``assistant_core.base.errors_parts`` behind a stable import path.
"""

from .errors_parts.classification import classify_failure, classify_kind, envelope_for, status_for
from .errors_parts.error_envelope import ErrorEnvelope
from .errors_parts.error_kind import ErrorKind
from .errors_parts.failure_signal import FailureSignal
from .errors_parts.provider_failure import ProviderFailure

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
