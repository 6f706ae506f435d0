"""One-class-per-file model parts.

Prefer importing from ``assistant_core.base.models`` for the stable surface.
"""

from .attempt_outcome import AttemptOutcome
from .capability_payload import CapabilityPayload
from .capability_request import CapabilityRequest
from .capability_result import CapabilityResult
from .content_type import CONTENT_TYPES, CONTENT_TYPES_VERSION, ContentType
from .dispatch_attempt import DispatchAttempt
from .modality import Modality
from .provider_descriptor import ProviderDescriptor
from .request_kind import RequestKind

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
