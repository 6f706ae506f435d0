"""Dispatch timeout configuration and deadlines.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values in seconds.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and whenever the relevant variables change. Supported
    environment variables (all optional):
        ASSISTANT_TIMEOUT_DISPATCH_SECONDS
        ASSISTANT_TIMEOUT_HTTP_SECONDS

Deadline
    Monotonic deadline shared by every attempt of one dispatch.

Design Constraints
------------------
1. No hard-coded ad-hoc timeouts outside this module and ``config.defaults``.
2. Avoid per-call env parsing (cache after first read).
"""
from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Optional

from ..config.defaults import DEFAULT_DISPATCH_TIMEOUT_SECONDS, DEFAULT_HTTP_TIMEOUT_SECONDS


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        dispatch_timeout_seconds: Budget for a whole dispatch, retries and
            fallbacks included.
        http_timeout_seconds: Per-request timeout handed to HTTP model
            clients.
    """

    dispatch_timeout_seconds: float = DEFAULT_DISPATCH_TIMEOUT_SECONDS
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse a positive float from env ``name``; fall back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(
        [
            os.getenv("ASSISTANT_TIMEOUT_DISPATCH_SECONDS", ""),
            os.getenv("ASSISTANT_TIMEOUT_HTTP_SECONDS", ""),
        ]
    )
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        dispatch_timeout_seconds=_parse_env_float(
            "ASSISTANT_TIMEOUT_DISPATCH_SECONDS", DEFAULT_DISPATCH_TIMEOUT_SECONDS
        ),
        http_timeout_seconds=_parse_env_float("ASSISTANT_TIMEOUT_HTTP_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS),
    )
    _ENV_GUARD = guard
    return _CACHED


class Deadline:
    """Monotonic deadline; ``Deadline(None)`` never expires."""

    def __init__(self, seconds: Optional[float]) -> None:
        self._seconds = seconds
        self._expires_at = None if seconds is None else time.monotonic() + max(0.0, seconds)

    @property
    def seconds(self) -> Optional[float]:
        return self._seconds

    def remaining(self) -> Optional[float]:
        """Seconds left (never negative), or ``None`` for an unbounded deadline."""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0.0

    def allows(self, delay: float) -> bool:
        """Whether sleeping ``delay`` seconds still leaves budget for an attempt."""
        remaining = self.remaining()
        return remaining is None or delay < remaining

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"Deadline(seconds={self._seconds!r}, remaining={self.remaining()!r})"


__all__ = ["TimeoutConfig", "get_timeout_config", "Deadline"]
