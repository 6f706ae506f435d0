"""FastAPI transport for the assistant core.

Routes
------
- ``POST /api/ai-assistant/dispatch``: generic ``{kind, payload, options}`` body.
- ``POST /api/ai-assistant/chat``: question answering.
- ``POST /api/ai-assistant/content``: content generation.
- ``/api/plugins``: list, search, install, enable, disable, configure, remove.
  Installs may only name entries under ``Settings.plugin_entry_prefixes``
  or registered capability entry points.
- ``GET /api/health`` and ``GET /api/metrics/summary``.

Dispatch routes answer ``{"success": true, "data": ...}`` or
``{"success": false, "error": ...}`` with the envelope's suggested status.
Plugin and health routes use the ``{"ok": true, ...}`` shape.

The app holds no module-level plugin state: every route reads the
``AssistantContainer`` stored on ``app.state``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import Body, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..base.errors import ErrorEnvelope
from ..base.models import CONTENT_TYPES_VERSION, ProviderDescriptor
from ..base.registry import RegistryError, check_entry_allowed, validate_descriptor
from ..base.validation import parse_request
from ..di import AssistantContainer, build_container
from .app_parts import (
    ChatBody,
    ConfigBody,
    ContentBody,
    PluginInstallBody,
    error_response,
    registry_http_error,
    success_response,
)


def _container(request: Request) -> AssistantContainer:
    return request.app.state.container


def _respond(outcome: Any) -> Any:
    if isinstance(outcome, ErrorEnvelope):
        return error_response(outcome)
    return success_response(outcome)


def create_app(container: Optional[AssistantContainer] = None) -> FastAPI:
    """Build the FastAPI app around ``container`` (built from settings when omitted).

    The container is closed when the application shuts down.
    """
    container = container or build_container()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        container.close()

    app = FastAPI(title="AI Assistant Service", version=__version__, lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(container.settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #
    @app.post("/api/ai-assistant/dispatch")
    def dispatch(request: Request, body: Any = Body(...)):
        parsed = parse_request(body)
        if isinstance(parsed, ErrorEnvelope):
            return error_response(parsed)
        return _respond(_container(request).orchestrator.dispatch(parsed))

    @app.post("/api/ai-assistant/chat")
    def chat(request: Request, body: ChatBody):
        return _respond(_container(request).orchestrator.dispatch(body.to_request()))

    @app.post("/api/ai-assistant/content")
    def content(request: Request, body: ContentBody):
        return _respond(_container(request).orchestrator.dispatch(body.to_request()))

    # ------------------------------------------------------------------ #
    # Plugins
    # ------------------------------------------------------------------ #
    @app.get("/api/plugins")
    def list_plugins(request: Request, category: Optional[str] = None) -> Dict[str, Any]:
        plugins = _container(request).plugins
        items = plugins.providers_by_category(category) if category else plugins.list_providers()
        return {"ok": True, "plugins": [d.to_dict() for d in items]}

    @app.get("/api/plugins/search")
    def search_plugins(request: Request, q: str = "") -> Dict[str, Any]:
        items = _container(request).plugins.search_providers(q)
        return {"ok": True, "plugins": [d.to_dict() for d in items]}

    @app.post("/api/plugins", status_code=201)
    def install_plugin(request: Request, body: PluginInstallBody) -> Dict[str, Any]:
        owner = _container(request)
        try:
            descriptor = ProviderDescriptor.from_mapping(body.model_dump(by_alias=True))
            validate_descriptor(descriptor)
            # Checked before the registry loader imports anything.
            check_entry_allowed(descriptor.entry, owner.settings.plugin_entry_prefixes)
            installed = owner.plugins.install_provider(descriptor)
        except (RegistryError, ValueError) as exc:
            raise registry_http_error(exc) from exc
        return {"ok": True, "plugin": installed.to_dict()}

    @app.post("/api/plugins/{provider_id}/enable")
    def enable_plugin(request: Request, provider_id: str) -> Dict[str, Any]:
        try:
            descriptor = _container(request).plugins.enable_provider(provider_id)
        except RegistryError as exc:
            raise registry_http_error(exc) from exc
        return {"ok": True, "plugin": descriptor.to_dict()}

    @app.post("/api/plugins/{provider_id}/disable")
    def disable_plugin(request: Request, provider_id: str) -> Dict[str, Any]:
        try:
            descriptor = _container(request).plugins.disable_provider(provider_id)
        except RegistryError as exc:
            raise registry_http_error(exc) from exc
        return {"ok": True, "plugin": descriptor.to_dict()}

    @app.put("/api/plugins/{provider_id}/config")
    def configure_plugin(request: Request, provider_id: str, body: ConfigBody) -> Dict[str, Any]:
        try:
            descriptor = _container(request).plugins.configure_provider(provider_id, body.config)
        except RegistryError as exc:
            raise registry_http_error(exc) from exc
        return {"ok": True, "plugin": descriptor.to_dict()}

    @app.delete("/api/plugins/{provider_id}")
    def remove_plugin(request: Request, provider_id: str) -> Dict[str, Any]:
        return {"ok": True, "removed": _container(request).plugins.remove_provider(provider_id)}

    # ------------------------------------------------------------------ #
    # Health / metrics
    # ------------------------------------------------------------------ #
    @app.get("/api/health")
    def health(request: Request) -> Dict[str, Any]:
        registry = _container(request).registry
        return {
            "ok": True,
            "version": __version__,
            "providers": len(registry),
            "enabled": sum(1 for d in registry.list() if d.enabled),
            "contentTypesVersion": CONTENT_TYPES_VERSION,
        }

    @app.get("/api/metrics/summary")
    def metrics_summary(request: Request) -> Dict[str, Any]:
        return {"ok": True, "summary": _container(request).metrics.summary()}

    return app


app = create_app()


def get_app() -> FastAPI:
    """Return the module-level application (uvicorn target and test helper)."""
    return app


__all__ = ["app", "create_app", "get_app"]
