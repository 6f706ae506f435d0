"""Request validation: invalid requests never reach a provider."""

from __future__ import annotations

import pytest

from assistant_core.base.errors import ErrorEnvelope, ErrorKind
from assistant_core.base.models import CapabilityPayload, CapabilityRequest, RequestKind
from assistant_core.base.validation import (
    EMPTY,
    FIELD_REQUIRED,
    INVALID_OPTIONS,
    UNSUPPORTED_CONTENT_TYPE,
    parse_request,
    validate,
)


def _assert_invalid(envelope, message: str) -> None:
    assert isinstance(envelope, ErrorEnvelope)
    assert envelope.kind is ErrorKind.INVALID_REQUEST
    assert envelope.message == message
    assert envelope.retryable is False
    assert envelope.suggested_status == 400


def test_valid_qa_request_passes():
    assert validate(CapabilityRequest.qa("什么是机器学习")) is None


def test_valid_content_request_passes():
    assert validate(CapabilityRequest.content("quiz", "机器学习", difficulty="beginner")) is None


@pytest.mark.parametrize("text", [None, 42, ["a"]])
def test_missing_or_non_string_text_is_field_required(text):
    _assert_invalid(validate(CapabilityRequest.qa(text)), FIELD_REQUIRED)


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_text_is_empty(text):
    _assert_invalid(validate(CapabilityRequest.qa(text)), EMPTY)


@pytest.mark.parametrize("content_type", [None, "poem", "ARTICLE"])
def test_unknown_content_type_rejected(content_type):
    _assert_invalid(validate(CapabilityRequest.content(content_type, "topic")), UNSUPPORTED_CONTENT_TYPE)


def test_qa_ignores_content_type():
    request = CapabilityRequest(
        kind=RequestKind.QA,
        payload=CapabilityPayload(text="question", content_type="not-a-type"),
    )
    assert validate(request) is None


def test_non_string_options_rejected():
    request = CapabilityRequest(
        kind=RequestKind.QA,
        payload=CapabilityPayload(text="question"),
        options={"include_references": True},
    )
    _assert_invalid(validate(request), INVALID_OPTIONS)


def test_rules_run_in_order():
    # empty text wins over the bad content type
    _assert_invalid(validate(CapabilityRequest.content("poem", " ")), EMPTY)


def test_invalid_request_makes_zero_provider_calls(orchestrator, registry, make_provider, make_descriptor):
    provider = make_provider("never")
    registry.register(make_descriptor("qa"), provider)
    outcome = orchestrator.dispatch(CapabilityRequest.qa(""))
    _assert_invalid(outcome, EMPTY)
    assert provider.calls == 0


def test_parse_request_accepts_wire_shape():
    request = parse_request(
        {
            "kind": "content_generation",
            "payload": {"text": "光合作用", "contentType": "summary"},
            "options": {"difficulty": "beginner"},
            "requestId": "req-1",
        }
    )
    assert isinstance(request, CapabilityRequest)
    assert request.kind is RequestKind.CONTENT_GENERATION
    assert request.content_type == "summary"
    assert request.options == {"difficulty": "beginner"}
    assert request.request_id == "req-1"


def test_parse_request_accepts_bare_string_payload():
    request = parse_request({"kind": "QA", "payload": "hello"})
    assert isinstance(request, CapabilityRequest)
    assert request.kind is RequestKind.QA
    assert request.text == "hello"


@pytest.mark.parametrize(
    "body",
    [
        ["not", "an", "object"],
        {"payload": {"text": "x"}},
        {"kind": "translate", "payload": {"text": "x"}},
        {"kind": "qa", "payload": {"text": "x"}, "options": ["a"]},
    ],
)
def test_parse_request_shape_errors_are_invalid_request(body):
    outcome = parse_request(body)
    assert isinstance(outcome, ErrorEnvelope)
    assert outcome.kind is ErrorKind.INVALID_REQUEST


@pytest.mark.parametrize("kind", [RequestKind.QA, RequestKind.CONTENT_GENERATION])
@pytest.mark.parametrize("content_type", [["article"], {"t": "quiz"}, 3])
def test_non_string_content_type_rejected_for_every_kind(kind, content_type):
    request = CapabilityRequest(kind=kind, payload=CapabilityPayload(text="question", content_type=content_type))
    _assert_invalid(validate(request), UNSUPPORTED_CONTENT_TYPE)


def test_list_content_type_on_qa_never_reaches_a_provider(orchestrator, registry, make_provider, make_descriptor):
    provider = make_provider("never")
    registry.register(make_descriptor("qa"), provider)
    request = parse_request({"kind": "qa", "payload": {"text": "hi", "contentType": ["x"]}})
    outcome = orchestrator.dispatch(request)
    _assert_invalid(outcome, UNSUPPORTED_CONTENT_TYPE)
    assert provider.calls == 0
