"""
Provider-agnostic interfaces (Protocols) for the assistant core.

Re-exports Protocols split into single-class modules under
``assistant_core.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import CapabilityProvider, GenerationBackend, SupportsLifecycle

__all__ = ["CapabilityProvider", "GenerationBackend", "SupportsLifecycle"]
