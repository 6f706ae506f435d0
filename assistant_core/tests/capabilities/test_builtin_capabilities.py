"""Built-in capability providers and their prompts."""

from __future__ import annotations

import pytest

from assistant_core.base.errors import FailureSignal, ProviderFailure
from assistant_core.base.models import CONTENT_TYPES, Modality, RequestKind
from assistant_core.capabilities import BUILTIN_DESCRIPTORS, ContentWriterCapability, SmartQACapability
from assistant_core.capabilities import content_writer, prompts, smart_qa


class RecordingBackend:
    name = "recording"

    def __init__(self, reply: str = "reply") -> None:
        self.reply = reply
        self.calls: list[tuple[str, str]] = []

    def generate(self, system, prompt, *, cancel_token=None):
        self.calls.append((system, prompt))
        return self.reply


QA = Modality(RequestKind.QA)


def test_smart_qa_builds_system_prompt_from_options():
    backend = RecordingBackend()
    qa = SmartQACapability(backend)
    assert qa.invoke("什么是熵", QA, {"response_style": "concise", "domain": "物理", "context": "热力学课"}) == "reply"
    system, prompt = backend.calls[0]
    assert prompt == "什么是熵"
    assert prompts.RESPONSE_STYLE_PROMPTS["concise"] in system
    assert "专业领域: 物理" in system
    assert "上下文信息: 热力学课" in system


def test_smart_qa_uses_configured_default_style():
    backend = RecordingBackend()
    qa = SmartQACapability(backend)
    qa.initialize({"default_style": "step-by-step"})
    qa.invoke("q", QA, {})
    assert prompts.RESPONSE_STYLE_PROMPTS["step-by-step"] in backend.calls[0][0]


def test_smart_qa_rejects_content_requests():
    with pytest.raises(ProviderFailure) as info:
        SmartQACapability(RecordingBackend()).invoke("t", Modality(RequestKind.CONTENT_GENERATION, "quiz"), {})
    assert info.value.signal is FailureSignal.REJECTED_INPUT


def test_unknown_style_falls_back_to_balanced_prompt():
    assert prompts.response_style_prompt("poetic") == prompts.DEFAULT_RESPONSE_STYLE_PROMPT
    assert prompts.response_style_prompt("STEP_BY_STEP") == prompts.RESPONSE_STYLE_PROMPTS["step-by-step"]


def test_content_writer_prompt_and_config_defaults():
    backend = RecordingBackend()
    writer = ContentWriterCapability(backend, provider_id="quiz-generator")
    writer.initialize({"default_difficulty": "advanced", "default_language": "en-US"})
    writer.invoke("光合作用", Modality(RequestKind.CONTENT_GENERATION, "quiz"), {"length": "short"})
    system, user = backend.calls[0]
    assert system == prompts.CONTENT_TYPE_PROMPTS["quiz"]
    assert '请为主题"光合作用"生成quiz内容。' in user
    assert "难度级别：advanced" in user
    assert "内容长度：short" in user
    assert "语言：英文" in user


def test_request_options_win_over_config_defaults():
    backend = RecordingBackend()
    writer = ContentWriterCapability(backend)
    writer.initialize({"default_difficulty": "advanced"})
    writer.invoke("x", Modality(RequestKind.CONTENT_GENERATION, "article"), {"difficulty": "beginner"})
    assert "难度级别：beginner" in backend.calls[0][1]


def test_content_writer_rejects_qa():
    with pytest.raises(ProviderFailure):
        ContentWriterCapability(RecordingBackend()).invoke("q", QA, {})


@pytest.mark.parametrize("factory", [smart_qa.create, content_writer.create])
def test_factories_require_backend(factory):
    with pytest.raises(ValueError):
        factory(BUILTIN_DESCRIPTORS[0], None)


def test_builtins_cover_every_content_type_once():
    served = [ct for d in BUILTIN_DESCRIPTORS for ct in d.supported_content_types]
    assert sorted(served) == sorted(CONTENT_TYPES)
    assert [d.id for d in BUILTIN_DESCRIPTORS] == ["smart-qa", "article-writer", "quiz-generator"]
    assert all(d.entry for d in BUILTIN_DESCRIPTORS)
