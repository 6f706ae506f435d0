"""Resolved provider pair (single-class module)."""

from __future__ import annotations

from dataclasses import dataclass

from ..interfaces import CapabilityProvider
from ..models import ProviderDescriptor


@dataclass(frozen=True)
class ResolvedProvider:
    """Descriptor snapshot plus the implementation that serves it."""

    descriptor: ProviderDescriptor
    provider: CapabilityProvider

    @property
    def id(self) -> str:
        return self.descriptor.id


__all__ = ["ResolvedProvider"]
