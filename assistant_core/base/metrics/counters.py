"""Thread-safe in-memory counters for provider attempts.

One ``ProviderInvocationCounters`` instance exists per provider id. The
orchestrator calls ``record_start`` before every attempt and exactly one of
``record_success`` / ``record_failure`` when it completes; ``record_retry``
marks a scheduled retry. Timeouts are failures whose kind is ``timeout`` and
are additionally counted in ``timeout``.
"""

from __future__ import annotations

import time
from threading import RLock
from typing import Any, Dict, Optional

from .snapshots import LatencyStatsSnapshot, ProviderCountersSnapshot


class ProviderInvocationCounters:
    """Attempt counters and latency aggregates for a single provider."""

    __slots__ = (
        "_provider",
        "_lock",
        "_attempts",
        "_success",
        "_failure",
        "_retry",
        "_timeout",
        "_in_flight",
        "_failure_by_kind",
        "_latency_count",
        "_latency_total",
        "_latency_min",
        "_latency_max",
    )

    def __init__(self, provider: str):
        self._provider = provider
        self._lock = RLock()
        self._reset()
        self._in_flight = 0

    def _reset(self) -> None:
        self._attempts = 0
        self._success = 0
        self._failure = 0
        self._retry = 0
        self._timeout = 0
        self._failure_by_kind: Dict[str, int] = {}
        self._latency_count = 0
        self._latency_total = 0
        self._latency_min: Optional[int] = None
        self._latency_max: Optional[int] = None

    @staticmethod
    def monotonic_ms() -> int:
        """Current monotonic time in milliseconds."""
        return int(time.monotonic() * 1000)

    @property
    def provider(self) -> str:
        return self._provider

    def record_start(self) -> None:
        with self._lock:
            self._attempts += 1
            self._in_flight += 1

    def record_success(self, latency_ms: int) -> None:
        with self._lock:
            self._success += 1
            self._in_flight = max(0, self._in_flight - 1)
            self._update_latency(latency_ms)

    def record_failure(self, error_kind: str, latency_ms: Optional[int] = None) -> None:
        """Record a failed attempt classified as ``error_kind``."""
        with self._lock:
            self._failure += 1
            self._failure_by_kind[error_kind] = self._failure_by_kind.get(error_kind, 0) + 1
            if error_kind == "timeout":
                self._timeout += 1
            self._in_flight = max(0, self._in_flight - 1)
            if latency_ms is not None:
                self._update_latency(latency_ms)

    def record_retry(self) -> None:
        with self._lock:
            self._retry += 1

    def _update_latency(self, latency_ms: int) -> None:
        if latency_ms < 0:
            return
        if self._latency_min is None or latency_ms < self._latency_min:
            self._latency_min = latency_ms
        if self._latency_max is None or latency_ms > self._latency_max:
            self._latency_max = latency_ms
        self._latency_count += 1
        self._latency_total += latency_ms

    def snapshot(self, reset: bool = False) -> ProviderCountersSnapshot:
        """Return an immutable snapshot; ``reset`` zeroes everything but ``in_flight``."""
        with self._lock:
            latency = LatencyStatsSnapshot(
                count=self._latency_count,
                total_ms=self._latency_total,
                min_ms=self._latency_min,
                max_ms=self._latency_max,
                avg_ms=(self._latency_total / self._latency_count) if self._latency_count else None,
            )
            snap = ProviderCountersSnapshot(
                provider=self._provider,
                attempts=self._attempts,
                success=self._success,
                failure=self._failure,
                retry=self._retry,
                timeout=self._timeout,
                in_flight=self._in_flight,
                failure_by_kind=dict(self._failure_by_kind),
                latency=latency,
            )
            if reset:
                self._reset()
            return snap

    def as_dict(self, reset: bool = False) -> Dict[str, Any]:
        return self.snapshot(reset=reset).to_dict()


__all__ = ["ProviderInvocationCounters", "LatencyStatsSnapshot", "ProviderCountersSnapshot"]
