"""Request/response data model public surface.

Re-exports the one-class-per-file implementations under
``assistant_core.base.models_parts`` behind a stable import path.
"""

from .models_parts import (
    AttemptOutcome,
    CapabilityPayload,
    CapabilityRequest,
    CapabilityResult,
    CONTENT_TYPES,
    CONTENT_TYPES_VERSION,
    ContentType,
    DispatchAttempt,
    Modality,
    ProviderDescriptor,
    RequestKind,
)

__all__ = [
    "AttemptOutcome",
    "CapabilityPayload",
    "CapabilityRequest",
    "CapabilityResult",
    "CONTENT_TYPES",
    "CONTENT_TYPES_VERSION",
    "ContentType",
    "DispatchAttempt",
    "Modality",
    "ProviderDescriptor",
    "RequestKind",
]
