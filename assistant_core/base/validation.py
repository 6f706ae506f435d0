"""Request validation.

``validate`` is a pure function: it inspects a ``CapabilityRequest`` and
returns ``None`` when the request may be dispatched, or an ``ErrorEnvelope``
of kind ``invalid_request`` describing the first rule that failed. Rules run
in a fixed order:

1. ``payload.text`` is present and a string        -> "field required"
2. ``payload.text`` is not blank                   -> "empty"
3. a content-type tag, when present, is a string   -> "unsupported content type"
4. content generation uses a known content type    -> "unsupported content type"
5. options map strings to strings                  -> "options must map strings to strings"

Question answering accepts any string tag; it is not used for routing.

Validation failures never reach retry logic and never touch a provider.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from .errors import ErrorEnvelope, ErrorKind, envelope_for
from .models import CONTENT_TYPES, CapabilityRequest, RequestKind

FIELD_REQUIRED = "field required"
EMPTY = "empty"
UNSUPPORTED_CONTENT_TYPE = "unsupported content type"
INVALID_OPTIONS = "options must map strings to strings"


def _invalid(message: str) -> ErrorEnvelope:
    return envelope_for(ErrorKind.INVALID_REQUEST, message)


def validate(request: CapabilityRequest) -> Optional[ErrorEnvelope]:
    """Return ``None`` if ``request`` is dispatchable, else the first failure."""
    text = request.payload.text
    if text is None or not isinstance(text, str):
        return _invalid(FIELD_REQUIRED)
    if not text.strip():
        return _invalid(EMPTY)
    content_type = request.payload.content_type
    if content_type is not None and not isinstance(content_type, str):
        return _invalid(UNSUPPORTED_CONTENT_TYPE)
    if request.kind is RequestKind.CONTENT_GENERATION and content_type not in CONTENT_TYPES:
        return _invalid(UNSUPPORTED_CONTENT_TYPE)
    if not all(isinstance(k, str) and isinstance(v, str) for k, v in request.options.items()):
        return _invalid(INVALID_OPTIONS)
    return None


def parse_request(body: Mapping[str, Any]) -> Union[CapabilityRequest, ErrorEnvelope]:
    """Build a request from a JSON body, mapping shape errors to ``invalid_request``.

    The returned request still has to pass :func:`validate`.
    """
    if not isinstance(body, Mapping):
        return _invalid("request body must be an object")
    try:
        return CapabilityRequest.from_mapping(body)
    except ValueError as exc:
        return _invalid(str(exc))


__all__ = [
    "EMPTY",
    "FIELD_REQUIRED",
    "INVALID_OPTIONS",
    "UNSUPPORTED_CONTENT_TYPE",
    "parse_request",
    "validate",
]
