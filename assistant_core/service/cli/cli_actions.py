"""CLI action handlers.

Purpose
-------
Subcommand handlers for ``assistant-cli``. Each handler receives the parsed
``argparse.Namespace`` and an ``AssistantContainer`` and returns a process
exit code; nothing here parses arguments.

Output
------
Human-readable text by default; ``--json`` prints the same payload the HTTP
service would return. Error envelopes go to stderr and yield exit code 1.
Registry errors (unknown id, conflict) yield exit code 2.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, Optional, TextIO

import uvicorn

from ...base.errors import ErrorEnvelope
from ...base.models import CapabilityRequest, CapabilityResult, ProviderDescriptor
from ...base.registry import RegistryError
from ...config.settings import Settings
from ...di import AssistantContainer, build_container

EXIT_OK = 0
EXIT_DISPATCH_FAILED = 1
EXIT_REGISTRY_ERROR = 2


def _options(args: argparse.Namespace, *names: str) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for name in names:
        value = getattr(args, name, None)
        if value is not None:
            out[name] = value
    return out


def _emit(payload: Dict[str, Any], stream: TextIO) -> None:
    stream.write(json.dumps(payload, ensure_ascii=False, indent=2) + "\n")


def _report(outcome: Any, as_json: bool, out: TextIO, err: TextIO) -> int:
    if isinstance(outcome, ErrorEnvelope):
        if as_json:
            _emit({"success": False, "error": outcome.to_dict()}, err)
        else:
            err.write(f"error [{outcome.kind.value}]: {outcome.message}\n")
        return EXIT_DISPATCH_FAILED
    result: CapabilityResult = outcome
    if as_json:
        _emit({"success": True, "data": result.to_dict()}, out)
    else:
        out.write(result.text.rstrip() + "\n")
        out.write(f"-- provider: {result.provider_id}\n")
    return EXIT_OK


def handle_ask(
    args: argparse.Namespace,
    container: AssistantContainer,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    out, err = out or sys.stdout, err or sys.stderr
    options = _options(args, "domain", "context", "response_style")
    if args.references:
        options["include_references"] = "true"
    request = CapabilityRequest.qa(args.question, **options)
    return _report(container.orchestrator.dispatch(request), args.json, out, err)


def handle_generate(
    args: argparse.Namespace,
    container: AssistantContainer,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    out, err = out or sys.stdout, err or sys.stderr
    options = _options(args, "difficulty", "length", "style", "language", "additional_requirements")
    request = CapabilityRequest.content(args.type, args.topic, **options)
    return _report(container.orchestrator.dispatch(request), args.json, out, err)


def _describe(descriptor: ProviderDescriptor) -> str:
    state = "enabled" if descriptor.enabled else "disabled"
    targets = ",".join(sorted(descriptor.supported_content_types)) or "-"
    kinds = ",".join(sorted(k.value for k in descriptor.supported_kinds))
    return f"{descriptor.id:<18} {state:<9} p={descriptor.priority:<3} {kinds:<22} {targets}"


def handle_plugins(
    args: argparse.Namespace,
    container: AssistantContainer,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Run ``plugins list|enable|disable|remove``."""
    out, err = out or sys.stdout, err or sys.stderr
    plugins = container.plugins
    if args.plugin_cmd == "list":
        items = plugins.providers_by_category(args.category) if args.category else plugins.list_providers()
        if args.json:
            _emit({"ok": True, "plugins": [d.to_dict() for d in items]}, out)
        else:
            for item in items:
                out.write(_describe(item) + "\n")
        return EXIT_OK

    descriptor: Optional[ProviderDescriptor] = None
    removed = False
    try:
        if args.plugin_cmd == "enable":
            descriptor = plugins.enable_provider(args.provider_id)
        elif args.plugin_cmd == "disable":
            descriptor = plugins.disable_provider(args.provider_id)
        else:
            removed = plugins.remove_provider(args.provider_id)
    except RegistryError as exc:
        if args.json:
            _emit({"ok": False, "error": {"code": exc.code, "message": str(exc)}}, err)
        else:
            err.write(f"error [{exc.code}]: {exc}\n")
        return EXIT_REGISTRY_ERROR
    if args.json:
        payload = {"ok": True, "removed": removed} if descriptor is None else {"ok": True, "plugin": descriptor.to_dict()}
        _emit(payload, out)
    elif descriptor is None:
        out.write(f"{args.provider_id}: {'removed' if removed else 'not registered'}\n")
    else:
        out.write(_describe(descriptor) + "\n")
    return EXIT_OK


def handle_serve(args: argparse.Namespace, settings: Settings) -> int:
    """Serve the FastAPI app with uvicorn; blocks until interrupted.

    With ``--reload`` uvicorn imports the module-level app itself, so settings
    come from the environment rather than ``--config``.
    """
    if args.reload:
        uvicorn.run("assistant_core.service.app:app", host=args.host, port=args.port, reload=True)
        return EXIT_OK
    # Local import: the app module builds its default container on import
    from ..app import create_app

    uvicorn.run(create_app(build_container(settings)), host=args.host, port=args.port)
    return EXIT_OK


__all__ = [
    "EXIT_DISPATCH_FAILED",
    "EXIT_OK",
    "EXIT_REGISTRY_ERROR",
    "handle_ask",
    "handle_generate",
    "handle_plugins",
    "handle_serve",
]
