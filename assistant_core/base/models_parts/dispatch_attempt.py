"""Dispatch attempt record (single-class module).

Ephemeral bookkeeping for one provider invocation. Records live only for the
duration of a dispatch; they feed retry decisions, structured logs and the
``attempts`` summary in result metadata.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from .attempt_outcome import AttemptOutcome


@dataclass(frozen=True)
class DispatchAttempt:
    """One attempt against one provider."""

    provider_id: str
    attempt_number: int
    started_at: datetime
    outcome: AttemptOutcome
    error_kind: Optional[str] = None
    latency_ms: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "providerId": self.provider_id,
            "attempt": self.attempt_number,
            "startedAt": self.started_at.isoformat(),
            "outcome": self.outcome.value,
            "latencyMs": self.latency_ms,
        }
        if self.error_kind is not None:
            data["errorKind"] = self.error_kind
        return data


__all__ = ["DispatchAttempt"]
