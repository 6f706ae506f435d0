"""Process-local collection of provider counters plus dispatch totals.

Owned by the DI container and shared with the orchestrator; the HTTP
``/api/metrics/summary`` route reads ``summary()``.
"""

from __future__ import annotations

from threading import RLock
from typing import Any, Dict

from .counters import ProviderInvocationCounters


class MetricsRegistry:
    """Lazily creates one ``ProviderInvocationCounters`` per provider id."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._providers: Dict[str, ProviderInvocationCounters] = {}
        self._dispatches = 0
        self._succeeded = 0
        self._failed_by_kind: Dict[str, int] = {}

    def for_provider(self, provider_id: str) -> ProviderInvocationCounters:
        with self._lock:
            counters = self._providers.get(provider_id)
            if counters is None:
                counters = ProviderInvocationCounters(provider_id)
                self._providers[provider_id] = counters
            return counters

    def record_dispatch(self, error_kind: str | None = None) -> None:
        """Record a finished dispatch; ``error_kind`` is ``None`` on success."""
        with self._lock:
            self._dispatches += 1
            if error_kind is None:
                self._succeeded += 1
            else:
                self._failed_by_kind[error_kind] = self._failed_by_kind.get(error_kind, 0) + 1

    def summary(self) -> Dict[str, Any]:
        with self._lock:
            providers = dict(self._providers)
            totals = {
                "dispatches": self._dispatches,
                "succeeded": self._succeeded,
                "failedByKind": dict(self._failed_by_kind),
            }
        return {
            "totals": totals,
            "providers": {pid: counters.as_dict() for pid, counters in sorted(providers.items())},
        }

    def reset(self) -> None:
        with self._lock:
            for counters in self._providers.values():
                counters.snapshot(reset=True)
            self._dispatches = 0
            self._succeeded = 0
            self._failed_by_kind.clear()


__all__ = ["MetricsRegistry"]
