"""Capability result dataclass (single-class module)."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CapabilityResult:
    """Successful dispatch outcome, produced exactly once per request.

    Attributes:
        text: Generated answer or content.
        provider_id: Id of the provider whose attempt succeeded.
        metadata: Enrichment (title, word count, confidence...) plus attempt
            bookkeeping added by the orchestrator.
        generated_at: Timezone-aware UTC timestamp.
    """

    text: str
    provider_id: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    generated_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase wire representation."""
        return {
            "text": self.text,
            "providerId": self.provider_id,
            "metadata": dict(self.metadata),
            "generatedAt": self.generated_at.isoformat(),
        }


__all__ = ["CapabilityResult"]
