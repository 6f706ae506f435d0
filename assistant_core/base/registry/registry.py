"""Provider registry for capability providers.

The registry is the only shared mutable state of the orchestration core. It
maps provider ids to ``ResolvedProvider`` pairs and answers two questions:
which providers exist (``list``) and which ones can serve a request
(``resolve``).

Concurrency
-----------
Writers (``register``, ``unregister``, ``set_enabled``, ``configure``) are
serialized by one ``RLock`` and publish a brand new table on every change.
Readers grab the current table reference without locking, so ``resolve`` and
``list`` always see one consistent snapshot and never block on a writer.
Descriptors are frozen; ``set_enabled`` swaps in a modified copy.

Lifecycle
---------
``initialize(config)`` runs before a provider is published and aborts the
registration when it raises. ``shutdown``, ``on_enable`` and ``on_disable``
run after the table changed; their failures are logged only. A descriptor's
``dependencies`` must already be registered.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from threading import RLock
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..interfaces import CapabilityProvider
from ..logging import get_logger, log_event
from ..models import CONTENT_TYPES, ProviderDescriptor, RequestKind
from .errors import ConflictError, InvalidDescriptorError, NotFoundError, ProviderLoadError
from .loader import EntryLoader
from .resolved_provider import ResolvedProvider

ProviderLoader = Callable[[ProviderDescriptor], CapabilityProvider]

_ID_RE = re.compile(r"^[A-Za-z0-9_.-]+$")
_SEMVER_RE = re.compile(r"^\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?$")


def validate_descriptor(descriptor: ProviderDescriptor) -> None:
    """Raise ``InvalidDescriptorError`` when ``descriptor`` cannot be registered."""
    if not descriptor.id or not _ID_RE.match(descriptor.id):
        raise InvalidDescriptorError(f"invalid provider id: {descriptor.id!r}")
    if not _SEMVER_RE.match(descriptor.version):
        raise InvalidDescriptorError(f"invalid version for '{descriptor.id}': {descriptor.version!r}")
    if not descriptor.supported_kinds:
        raise InvalidDescriptorError(f"provider '{descriptor.id}' declares no supported kinds")
    unknown = sorted(set(descriptor.supported_content_types) - set(CONTENT_TYPES))
    if unknown:
        raise InvalidDescriptorError(f"provider '{descriptor.id}' declares unknown content types: {unknown}")


class ProviderRegistry:
    """Process-wide table of capability providers.

    Attributes:
        logger: Structured logger for lifecycle events.
    """

    def __init__(self, loader: Optional[ProviderLoader] = None) -> None:
        self._lock = RLock()
        self._table: Dict[str, ResolvedProvider] = {}
        self._loader: ProviderLoader = loader or EntryLoader()
        self.logger = get_logger("assistant.registry")

    # ------------------------------------------------------------------ #
    # Writers
    # ------------------------------------------------------------------ #
    def register(
        self,
        descriptor: ProviderDescriptor,
        provider: Optional[CapabilityProvider] = None,
    ) -> ProviderDescriptor:
        """Register ``descriptor``; load the implementation from ``entry`` when omitted.

        Raises:
            InvalidDescriptorError: Descriptor failed validation or one of its
                ``dependencies`` is not registered.
            ConflictError: The id is already registered.
            ProviderLoadError: The implementation could not be loaded or its
                ``initialize`` hook raised; nothing is registered.
        """
        validate_descriptor(descriptor)
        with self._lock:
            if descriptor.id in self._table:
                raise ConflictError(f"provider '{descriptor.id}' is already registered")
            missing = sorted(dep for dep in descriptor.dependencies if dep not in self._table)
            if missing:
                log_event(
                    self.logger,
                    "registry.dependencies_missing",
                    level=logging.WARNING,
                    provider=descriptor.id,
                    missing=missing,
                )
                raise InvalidDescriptorError(f"provider '{descriptor.id}' requires missing providers: {missing}")
            impl = provider if provider is not None else self._loader(descriptor)
            self._initialize(descriptor, impl)
            table = dict(self._table)
            table[descriptor.id] = ResolvedProvider(descriptor=descriptor, provider=impl)
            self._table = table
        log_event(
            self.logger,
            "registry.register",
            provider=descriptor.id,
            version=descriptor.version,
            enabled=descriptor.enabled,
            priority=descriptor.priority,
        )
        return descriptor

    def unregister(self, provider_id: str) -> bool:
        """Remove ``provider_id``; returns False when it was not registered."""
        with self._lock:
            if provider_id not in self._table:
                return False
            table = dict(self._table)
            removed = table.pop(provider_id)
            self._table = table
        self._run_hook(removed, "shutdown")
        log_event(self.logger, "registry.unregister", provider=provider_id)
        return True

    def set_enabled(self, provider_id: str, enabled: bool) -> ProviderDescriptor:
        """Set the ``enabled`` flag; setting the current value is a no-op.

        A real change runs the provider's ``on_enable`` / ``on_disable`` hook
        after the new state is published.

        Raises:
            NotFoundError: ``provider_id`` is not registered.
        """
        with self._lock:
            current = self._require(provider_id)
            if current.descriptor.enabled == enabled:
                return current.descriptor
            updated = replace(current.descriptor, enabled=enabled)
            self._swap(provider_id, ResolvedProvider(descriptor=updated, provider=current.provider))
        self._run_hook(current, "on_enable" if enabled else "on_disable")
        log_event(self.logger, "registry.set_enabled", provider=provider_id, enabled=enabled)
        return updated

    def configure(self, provider_id: str, config: Mapping[str, Any]) -> ProviderDescriptor:
        """Merge ``config`` into the provider configuration.

        Providers with an ``initialize`` hook are re-initialized with the merged
        configuration; if that fails the previous configuration stays active.

        Raises:
            NotFoundError: ``provider_id`` is not registered.
            ProviderLoadError: Re-initialization failed.
        """
        with self._lock:
            current = self._require(provider_id)
            merged = dict(current.descriptor.config)
            merged.update(config)
            updated = replace(current.descriptor, config=merged)
            self._initialize(updated, current.provider)
            self._swap(provider_id, ResolvedProvider(descriptor=updated, provider=current.provider))
        log_event(self.logger, "registry.configure", provider=provider_id, keys=sorted(config))
        return updated

    # ------------------------------------------------------------------ #
    # Readers (lock-free snapshots)
    # ------------------------------------------------------------------ #
    def resolve(self, kind: RequestKind, content_type: Optional[str] = None) -> Tuple[ResolvedProvider, ...]:
        """Enabled providers able to serve ``kind``/``content_type``.

        Ordered by descending priority, then registration order.
        """
        snapshot = self._table
        candidates = [
            entry
            for entry in snapshot.values()
            if entry.descriptor.enabled and entry.descriptor.supports(kind, content_type)
        ]
        candidates.sort(key=lambda entry: -entry.descriptor.priority)
        return tuple(candidates)

    def list(self) -> Tuple[ProviderDescriptor, ...]:
        return tuple(entry.descriptor for entry in self._table.values())

    def get(self, provider_id: str) -> Optional[ProviderDescriptor]:
        entry = self._table.get(provider_id)
        return entry.descriptor if entry is not None else None

    def is_enabled(self, provider_id: str) -> bool:
        """True when ``provider_id`` is registered and enabled."""
        entry = self._table.get(provider_id)
        return entry is not None and entry.descriptor.enabled

    def search(self, query: str) -> Tuple[ProviderDescriptor, ...]:
        """Case-insensitive match on id, display name, description and author."""
        needle = (query or "").strip().lower()
        if not needle:
            return self.list()
        matches: List[ProviderDescriptor] = []
        for entry in self._table.values():
            d = entry.descriptor
            haystack = (d.id, d.display_name, d.description, d.author)
            if any(needle in field.lower() for field in haystack):
                matches.append(d)
        return tuple(matches)

    def by_category(self, category: str) -> Tuple[ProviderDescriptor, ...]:
        return tuple(entry.descriptor for entry in self._table.values() if entry.descriptor.category == category)

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._table

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _require(self, provider_id: str) -> ResolvedProvider:
        entry = self._table.get(provider_id)
        if entry is None:
            raise NotFoundError(f"provider '{provider_id}' is not registered")
        return entry

    def _swap(self, provider_id: str, entry: ResolvedProvider) -> None:
        table = dict(self._table)
        table[provider_id] = entry
        self._table = table

    def _run_hook(self, entry: ResolvedProvider, hook: str) -> None:
        """Call an optional no-argument hook; failures are logged, not raised."""
        fn = getattr(entry.provider, hook, None)
        if not callable(fn):
            return
        try:
            fn()
        except Exception as exc:  # table already updated
            log_event(
                self.logger,
                f"registry.{hook}_failed",
                level=logging.WARNING,
                provider=entry.id,
                error=str(exc),
                exc_info=exc,
            )

    def _initialize(self, descriptor: ProviderDescriptor, provider: CapabilityProvider) -> None:
        initialize = getattr(provider, "initialize", None)
        if not callable(initialize):
            return
        try:
            initialize(dict(descriptor.config))
        except Exception as exc:
            log_event(
                self.logger,
                "registry.initialize_failed",
                level=logging.ERROR,
                provider=descriptor.id,
                error=str(exc),
            )
            raise ProviderLoadError(f"failed to initialize provider '{descriptor.id}': {exc}") from exc


__all__ = ["ProviderRegistry", "ProviderLoader", "validate_descriptor"]
