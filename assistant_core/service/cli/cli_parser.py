"""CLI parser construction for assistant-cli.

Wires subparsers only; handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ...base.models import CONTENT_TYPES
from ...config.defaults import SERVICE_DEFAULT_HOST, SERVICE_DEFAULT_PORT


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser with ``ask``, ``generate``, ``plugins`` and ``serve``."""
    p = argparse.ArgumentParser(prog="assistant-cli", description="AI assistant orchestration CLI")
    p.add_argument("--config", default=None, help="Path to a YAML or JSON settings file")
    p.add_argument("--backend", choices=["mock", "openai"], default=None)
    sub = p.add_subparsers(dest="cmd", required=True)

    p_ask = sub.add_parser("ask", help="Answer a question")
    p_ask.add_argument("question")
    p_ask.add_argument("--domain", default=None)
    p_ask.add_argument("--context", default=None)
    p_ask.add_argument("--style", dest="response_style", default=None)
    p_ask.add_argument("--references", action="store_true")
    p_ask.add_argument("--json", action="store_true")

    p_gen = sub.add_parser("generate", help="Generate learning content")
    p_gen.add_argument("type", choices=CONTENT_TYPES)
    p_gen.add_argument("topic")
    p_gen.add_argument("--difficulty", default=None)
    p_gen.add_argument("--length", default=None)
    p_gen.add_argument("--style", default=None)
    p_gen.add_argument("--language", default=None)
    p_gen.add_argument("--requirements", dest="additional_requirements", default=None)
    p_gen.add_argument("--json", action="store_true")

    p_plugins = sub.add_parser("plugins", help="Inspect and manage capability providers")
    plugin_sub = p_plugins.add_subparsers(dest="plugin_cmd", required=True)
    p_list = plugin_sub.add_parser("list")
    p_list.add_argument("--category", default=None)
    p_list.add_argument("--json", action="store_true")
    for name in ("enable", "disable", "remove"):
        p_act = plugin_sub.add_parser(name)
        p_act.add_argument("provider_id")
        p_act.add_argument("--json", action="store_true")

    p_serve = sub.add_parser("serve", help="Run the HTTP service with uvicorn")
    p_serve.add_argument("--host", default=SERVICE_DEFAULT_HOST)
    p_serve.add_argument("--port", type=int, default=SERVICE_DEFAULT_PORT)
    p_serve.add_argument("--reload", action="store_true")

    return p


__all__ = ["build_parser"]
