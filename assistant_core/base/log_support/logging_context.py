"""Structured logging context carried by dispatch log events."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Common fields for orchestration log events.

    ``to_dict`` merges ``extra`` into the top level and prunes ``None`` values.
    """

    provider: Optional[str] = None
    request_id: Optional[str] = None
    kind: Optional[str] = None
    content_type: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}

    def for_provider(self, provider: str) -> "LogContext":
        """Return a copy bound to ``provider``."""
        return LogContext(
            provider=provider,
            request_id=self.request_id,
            kind=self.kind,
            content_type=self.content_type,
            extra=dict(self.extra),
        )


__all__ = ["LogContext"]
