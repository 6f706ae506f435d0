"""Request payload dataclass (single-class module)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class CapabilityPayload:
    """Primary text of a request plus its optional content-type tag.

    ``text`` is untyped: inbound JSON may carry a number or
    ``null`` here and it is the validator's job to reject it, not the
    transport's.
    """

    text: Any = None
    content_type: Optional[str] = None


__all__ = ["CapabilityPayload"]
