"""Single-class Protocol modules; prefer ``assistant_core.base.interfaces``."""

from .capability_provider import CapabilityProvider
from .generation_backend import GenerationBackend
from .supports_lifecycle import SupportsLifecycle

__all__ = ["CapabilityProvider", "GenerationBackend", "SupportsLifecycle"]
