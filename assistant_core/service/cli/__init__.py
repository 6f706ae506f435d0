"""Assistant CLI (package entrypoint).

Wires argument parsing to the handlers in ``cli_actions``. Each invocation
builds its own ``AssistantContainer`` and closes it before returning.

Public API:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import sys
from typing import Optional

from ...config.settings import SettingsError, load_settings
from ...di import build_container
from .cli_actions import handle_ask, handle_generate, handle_plugins, handle_serve
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None) -> int:
	"""CLI entrypoint.

	Parameters
	----------
	argv: Optional[list[str]]
		Argument vector; when ``None`` uses ``sys.argv[1:]``.

	Returns
	-------
	int
		Process exit code (0 success, non-zero on error).
	"""
	args = build_parser().parse_args(list(sys.argv[1:] if argv is None else argv))
	try:
		settings = load_settings({"backend": args.backend}, config_file=args.config)
	except SettingsError as exc:
		sys.stderr.write(f"configuration error: {exc}\n")
		return 2

	if args.cmd == "serve":
		return handle_serve(args, settings)

	container = build_container(settings)
	try:
		if args.cmd == "ask":
			return handle_ask(args, container)
		if args.cmd == "generate":
			return handle_generate(args, container)
		return handle_plugins(args, container)
	finally:
		container.close()


if __name__ == "__main__":  # pragma: no cover
	raise SystemExit(main())
