"""Request kind enumeration (single-class module).

The set of request kinds is closed: new capabilities are added by registering
providers for an existing kind, never by inventing kinds at runtime.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

_ALIASES = {
    "qa": "qa",
    "smart_qa": "qa",
    "question": "qa",
    "content_generation": "content_generation",
    "contentgeneration": "content_generation",
    "content": "content_generation",
}


class RequestKind(str, Enum):
    """Kinds of requests the orchestrator can dispatch."""

    QA = "qa"
    CONTENT_GENERATION = "content_generation"

    @classmethod
    def parse(cls, value: Any) -> "RequestKind":
        """Parse an enum member, canonical value, or wire alias.

        Accepts ``"qa"``, ``"QA"``, ``"content_generation"``,
        ``"ContentGeneration"`` and ``"content-generation"`` style spellings.

        Raises:
            ValueError: When ``value`` does not name a known kind.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"unsupported request kind: {value!r}")
        key = value.strip().lower().replace("-", "_").replace(" ", "_")
        canonical = _ALIASES.get(key)
        if canonical is None:
            raise ValueError(f"unsupported request kind: {value!r}")
        return cls(canonical)


__all__ = ["RequestKind"]
