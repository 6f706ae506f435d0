"""Modality handed to capability providers (single-class module)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .request_kind import RequestKind

if TYPE_CHECKING:
    from .capability_request import CapabilityRequest


@dataclass(frozen=True)
class Modality:
    """What a provider is asked to produce: a request kind plus content type.

    ``content_type`` is only set for content generation; a tag on a
    question-answering request is dropped.
    """

    kind: RequestKind
    content_type: Optional[str] = None

    @classmethod
    def of(cls, request: "CapabilityRequest") -> "Modality":
        if request.kind is RequestKind.CONTENT_GENERATION:
            return cls(kind=request.kind, content_type=request.content_type)
        return cls(kind=request.kind)


__all__ = ["Modality"]
