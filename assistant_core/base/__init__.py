"""
Assistant Base Package

Provider-agnostic contracts and the orchestration core:
- Models: requests, results, descriptors, attempts
- Errors: closed error taxonomy and structural classification
- Registry: the process-wide provider table
- Orchestrator: validation, selection, retry and fallback
"""

from .cancellation import CancellationToken, CancelledError
from .errors import ErrorEnvelope, ErrorKind, FailureSignal, ProviderFailure, classify_failure
from .interfaces import CapabilityProvider, GenerationBackend, SupportsLifecycle
from .models import (
    CONTENT_TYPES,
    CONTENT_TYPES_VERSION,
    CapabilityRequest,
    CapabilityResult,
    ContentType,
    DispatchAttempt,
    Modality,
    ProviderDescriptor,
    RequestKind,
)
from .orchestrator import Orchestrator
from .registry import ProviderRegistry
from .validation import validate

__all__ = [
    "CONTENT_TYPES",
    "CONTENT_TYPES_VERSION",
    "CancellationToken",
    "CancelledError",
    "CapabilityProvider",
    "CapabilityRequest",
    "CapabilityResult",
    "ContentType",
    "DispatchAttempt",
    "ErrorEnvelope",
    "ErrorKind",
    "FailureSignal",
    "GenerationBackend",
    "Modality",
    "Orchestrator",
    "ProviderDescriptor",
    "ProviderFailure",
    "ProviderRegistry",
    "RequestKind",
    "SupportsLifecycle",
    "classify_failure",
    "validate",
]
