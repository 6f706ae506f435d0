"""Dispatch metrics package.

Exports per-provider invocation counters, their snapshots and the
``MetricsRegistry`` that the orchestrator updates on every attempt.
"""

from .counters import LatencyStatsSnapshot, ProviderCountersSnapshot, ProviderInvocationCounters
from .registry import MetricsRegistry

__all__ = [
    "LatencyStatsSnapshot",
    "MetricsRegistry",
    "ProviderCountersSnapshot",
    "ProviderInvocationCounters",
]
