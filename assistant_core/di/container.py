"""Composition root for the assistant core.

Goals:
- Build exactly one ``ProviderRegistry`` per container and hand the same
  instance to the ``Orchestrator`` and the ``PluginManager``.
- Translate ``Settings`` into retry, timeout and backend objects.
- Keep module-level state out of the library: the service and the CLI each
  own a container.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional

from ..backends.mock import MockBackend
from ..base.interfaces import GenerationBackend
from ..base.logging import configure_logger, get_logger, log_event
from ..base.metrics import MetricsRegistry
from ..base.models import ProviderDescriptor
from ..base.orchestrator import Orchestrator
from ..base.registry import EntryLoader, ProviderRegistry
from ..base.resilience.retry import RetryConfig
from ..base.timeouts import TimeoutConfig, get_timeout_config
from ..capabilities.builtin import BUILTIN_DESCRIPTORS
from ..config.settings import Settings, load_settings
from ..plugins.manager import PluginManager


def build_backend(settings: Settings) -> GenerationBackend:
    """Return the generation backend selected by ``settings.backend``."""
    if settings.backend == "openai":
        from ..backends.openai_backend import OpenAIBackend

        return OpenAIBackend(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
        )
    return MockBackend()


class AssistantContainer:
    """Owns the shared registry, orchestrator, plugin manager and backend."""

    def __init__(
        self,
        settings: Settings,
        *,
        backend: Optional[GenerationBackend] = None,
        register_builtins: bool = True,
    ) -> None:
        self.settings = settings
        self.logger = get_logger("assistant.di")
        if settings.log_level or settings.log_file:
            configure_logger(level=settings.log_level, file_path=settings.log_file)
        self.backend: GenerationBackend = backend or build_backend(settings)
        self.registry = ProviderRegistry(loader=EntryLoader(self.backend))
        self.metrics = MetricsRegistry()
        self.orchestrator = Orchestrator(
            self.registry,
            retry=RetryConfig(
                max_attempts=settings.retry_max_attempts,
                base_delay=settings.retry_base_delay,
                max_delay=settings.retry_max_delay,
            ),
            timeouts=TimeoutConfig(
                dispatch_timeout_seconds=settings.dispatch_timeout_seconds,
                http_timeout_seconds=get_timeout_config().http_timeout_seconds,
            ),
            metrics=self.metrics,
            max_workers=settings.max_workers,
        )
        self.plugins = PluginManager(self.registry)
        if register_builtins:
            self.register_builtins()

    def register_builtins(self) -> None:
        """Register the built-in capabilities, applying per-provider overrides."""
        for descriptor in BUILTIN_DESCRIPTORS:
            self.registry.register(self._apply_override(descriptor))
        log_event(
            self.logger,
            "container.builtins_registered",
            backend=getattr(self.backend, "name", type(self.backend).__name__),
            providers=[d.id for d in self.registry.list()],
        )

    def _apply_override(self, descriptor: ProviderDescriptor) -> ProviderDescriptor:
        override = self.settings.provider_override(descriptor.id)
        if override is None:
            return descriptor
        changes: Dict[str, Any] = {}
        if override.enabled is not None:
            changes["enabled"] = override.enabled
        if override.priority is not None:
            changes["priority"] = override.priority
        if override.config:
            changes["config"] = {**descriptor.config, **override.config}
        return replace(descriptor, **changes) if changes else descriptor

    def close(self) -> None:
        """Shut down providers and the worker pool."""
        for descriptor in self.registry.list():
            self.registry.unregister(descriptor.id)
        self.orchestrator.close()


def build_container(
    settings: Optional[Settings] = None,
    *,
    backend: Optional[GenerationBackend] = None,
    register_builtins: bool = True,
) -> AssistantContainer:
    """Construct a container; settings default to ``load_settings()``."""
    return AssistantContainer(
        settings or load_settings(),
        backend=backend,
        register_builtins=register_builtins,
    )


__all__ = ["AssistantContainer", "build_backend", "build_container"]
