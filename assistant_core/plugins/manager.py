"""Plugin manager: the administrative surface over the provider registry.

Every method delegates to the ``ProviderRegistry`` it was built with. The
manager holds no state of its own, and registry errors (``NotFoundError``,
``ConflictError``, ``InvalidDescriptorError``, ``ProviderLoadError``)
propagate unchanged.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple

from ..base.interfaces import CapabilityProvider
from ..base.models import ProviderDescriptor
from ..base.registry import ProviderRegistry


class PluginManager:
    """Install, remove, enable, disable, search and configure providers."""

    def __init__(self, registry: ProviderRegistry) -> None:
        self._registry = registry

    def list_providers(self) -> Tuple[ProviderDescriptor, ...]:
        return self._registry.list()

    def get_provider(self, provider_id: str) -> Optional[ProviderDescriptor]:
        return self._registry.get(provider_id)

    def enable_provider(self, provider_id: str) -> ProviderDescriptor:
        return self._registry.set_enabled(provider_id, True)

    def disable_provider(self, provider_id: str) -> ProviderDescriptor:
        return self._registry.set_enabled(provider_id, False)

    def install_provider(
        self,
        descriptor: ProviderDescriptor,
        provider: Optional[CapabilityProvider] = None,
    ) -> ProviderDescriptor:
        """Register a provider; without ``provider`` it is loaded from ``descriptor.entry``."""
        return self._registry.register(descriptor, provider)

    def remove_provider(self, provider_id: str) -> bool:
        """Unregister; returns False when nothing was registered under the id."""
        return self._registry.unregister(provider_id)

    def search_providers(self, query: str) -> Tuple[ProviderDescriptor, ...]:
        return self._registry.search(query)

    def providers_by_category(self, category: str) -> Tuple[ProviderDescriptor, ...]:
        return self._registry.by_category(category)

    def configure_provider(self, provider_id: str, config: Mapping[str, Any]) -> ProviderDescriptor:
        return self._registry.configure(provider_id, config)


__all__ = ["PluginManager"]
