"""Capability request dataclass (single-class module).

A ``CapabilityRequest`` is the unit the orchestrator dispatches. It is built
either directly (``CapabilityRequest.qa(...)`` / ``CapabilityRequest.content(...)``)
or from an inbound JSON body via :meth:`CapabilityRequest.from_mapping`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional
from uuid import uuid4

from .capability_payload import CapabilityPayload
from .request_kind import RequestKind


def _new_request_id() -> str:
    return uuid4().hex


@dataclass(frozen=True)
class CapabilityRequest:
    """Structured request for question answering or content generation.

    Attributes:
        kind: Closed request kind used for provider resolution.
        payload: Primary text and optional content-type tag.
        options: Free-form string options forwarded to the provider
            (``domain``, ``response_style``, ``difficulty``...).
        request_id: Correlation id used in logs and result metadata.
    """

    kind: RequestKind
    payload: CapabilityPayload
    options: Dict[str, Any] = field(default_factory=dict)
    request_id: str = field(default_factory=_new_request_id)

    @property
    def text(self) -> Any:
        """Primary text field (question or topic)."""
        return self.payload.text

    @property
    def content_type(self) -> Optional[str]:
        return self.payload.content_type

    @classmethod
    def qa(cls, question: Any, **options: str) -> "CapabilityRequest":
        """Build a question-answering request."""
        return cls(kind=RequestKind.QA, payload=CapabilityPayload(text=question), options=dict(options))

    @classmethod
    def content(cls, content_type: Optional[str], topic: Any, **options: str) -> "CapabilityRequest":
        """Build a content generation request for ``content_type``."""
        return cls(
            kind=RequestKind.CONTENT_GENERATION,
            payload=CapabilityPayload(text=topic, content_type=content_type),
            options=dict(options),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CapabilityRequest":
        """Build a request from a JSON-style mapping.

        Expected shape::

            {"kind": "qa", "payload": {"text": "...", "contentType": "quiz"},
             "options": {"domain": "physics"}, "requestId": "optional"}

        ``payload`` may also be a bare string. Both camelCase and snake_case
        keys are accepted for the content type and request id.

        Raises:
            ValueError: When ``kind`` is missing or unknown, or ``options`` is
                not a mapping.
        """
        kind = RequestKind.parse(data.get("kind"))
        raw_payload = data.get("payload")
        if isinstance(raw_payload, Mapping):
            text = raw_payload.get("text")
            content_type = raw_payload.get("contentType", raw_payload.get("content_type"))
        else:
            text = raw_payload
            content_type = data.get("contentType", data.get("content_type"))
        raw_options = data.get("options") or {}
        if not isinstance(raw_options, Mapping):
            raise ValueError("options must be an object")
        request_id = data.get("requestId") or data.get("request_id") or _new_request_id()
        return cls(
            kind=kind,
            payload=CapabilityPayload(text=text, content_type=content_type),
            options=dict(raw_options),
            request_id=str(request_id),
        )


__all__ = ["CapabilityRequest"]
