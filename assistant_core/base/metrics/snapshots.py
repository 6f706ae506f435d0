"""Immutable metric snapshots for serialization and logging."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class LatencyStatsSnapshot:
    """Aggregated latency of completed attempts (milliseconds).

    ``min_ms``/``max_ms``/``avg_ms`` are ``None`` until a sample exists.
    """

    count: int
    total_ms: int
    min_ms: Optional[int]
    max_ms: Optional[int]
    avg_ms: Optional[float]


@dataclass(frozen=True)
class ProviderCountersSnapshot:
    """Point-in-time copy of one provider's invocation counters."""

    provider: str
    attempts: int
    success: int
    failure: int
    retry: int
    timeout: int
    in_flight: int
    failure_by_kind: Dict[str, int]
    latency: LatencyStatsSnapshot

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["LatencyStatsSnapshot", "ProviderCountersSnapshot"]
