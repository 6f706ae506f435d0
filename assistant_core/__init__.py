"""assistant_core package

Request orchestration core for the learning dashboard's AI assistant.

Purpose:
    Accept question-answering and content-generation requests, route them to
    pluggable capability providers, and normalize provider failures into a
    stable error taxonomy with retry, fallback and deadlines.

Public API (re-exported):
    - Version: ``__version__``
    - Requests/results: :class:`CapabilityRequest`, :class:`CapabilityResult`
    - Errors: :class:`ErrorEnvelope`, :class:`ErrorKind`, :class:`ProviderFailure`
    - Core: :class:`ProviderRegistry`, :class:`Orchestrator`, :class:`PluginManager`
    - Composition: :func:`build_container`

Notes:
    - Third-party providers may register under the
      ``assistant_core.capabilities`` entry-point group.
"""

__version__ = "0.1.0"

from .base import (
    CancellationToken,
    CapabilityRequest,
    CapabilityResult,
    ErrorEnvelope,
    ErrorKind,
    FailureSignal,
    Orchestrator,
    ProviderDescriptor,
    ProviderFailure,
    ProviderRegistry,
    RequestKind,
)
from .di import AssistantContainer, build_container
from .plugins import PluginManager

__all__ = [
    "__version__",
    "AssistantContainer",
    "CancellationToken",
    "CapabilityRequest",
    "CapabilityResult",
    "ErrorEnvelope",
    "ErrorKind",
    "FailureSignal",
    "Orchestrator",
    "PluginManager",
    "ProviderDescriptor",
    "ProviderFailure",
    "ProviderRegistry",
    "RequestKind",
    "build_container",
]
