"""assistant_core.config.defaults
==============================

Central place for small, stable default values used across the package and the
service layer. Everything here can be overridden through environment
variables or the optional config file (see ``assistant_core.config.settings``).

Only plain constants live here: no I/O and no imports from other
``assistant_core`` packages, so any layer may import it.
"""

from __future__ import annotations

# ---- Orchestration ----
# Attempts per provider, first attempt included.
DEFAULT_RETRY_MAX_ATTEMPTS = 2
# Backoff before retry n is base * 2**n seconds, capped at max.
DEFAULT_RETRY_BASE_DELAY = 0.5
DEFAULT_RETRY_MAX_DELAY = 4.0
# Budget for one dispatch, retries and fallbacks included.
DEFAULT_DISPATCH_TIMEOUT_SECONDS = 30.0
# Per-request timeout handed to HTTP model clients.
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
# Worker threads running provider attempts.
DEFAULT_MAX_WORKERS = 8

# ---- Backends ----
# "mock" serves deterministic fixture answers; "openai" calls the OpenAI API.
DEFAULT_BACKEND = "mock"
SUPPORTED_BACKENDS = ("mock", "openai")
OPENAI_DEFAULT_MODEL = "gpt-4o"

# ---- Service / HTTP layer ----
# Comma-separated list of allowed origins for the dev server.
SERVICE_CORS_DEFAULT_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"
SERVICE_DEFAULT_HOST = "127.0.0.1"
SERVICE_DEFAULT_PORT = 8000
# Module prefixes an HTTP plugin install may name in its ``entry``.
PLUGIN_ENTRY_DEFAULT_PREFIXES = ("assistant_core.capabilities",)

# ---- Content generation request defaults ----
CONTENT_DEFAULT_DIFFICULTY = "intermediate"
CONTENT_DEFAULT_LENGTH = "medium"
CONTENT_DEFAULT_STYLE = "formal"
CONTENT_DEFAULT_LANGUAGE = "zh-CN"
