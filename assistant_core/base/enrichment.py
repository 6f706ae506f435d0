"""Result metadata enrichment.

Heuristics computed from the request and the generated text and attached to
``CapabilityResult.metadata``. All of them are regex counts or keyword
checks over mixed Chinese/English text: a Chinese character counts as one
word, as does every run of Latin letters.

Metadata keys are camelCase because ``CapabilityResult.to_dict`` forwards the
mapping to the wire unchanged.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, List

from .models import CapabilityRequest, RequestKind

_CJK_RE = re.compile(r"[\u4e00-\u9fa5]")
_LATIN_WORD_RE = re.compile(r"[a-zA-Z]+")
_HEADING_PREFIX_RE = re.compile(r"^#+\s*")
_DIGIT_RE = re.compile(r"\d+")

WORDS_PER_MINUTE = 250
MAX_TOPICS = 5
MAX_SOURCES = 3
DEFAULT_DOMAIN = "通用"
DEFAULT_DIFFICULTY = "intermediate"

_SOURCE_MARKERS = ("参考", "来源", "引用")


def count_words(text: str) -> int:
    return len(_CJK_RE.findall(text)) + len(_LATIN_WORD_RE.findall(text))


def reading_time_minutes(text: str) -> int:
    return math.ceil(count_words(text) / WORDS_PER_MINUTE)


def estimate_tokens(text: str) -> int:
    """Rough token estimate: 1.5 per Chinese character, 1 per Latin word."""
    return math.ceil(len(_CJK_RE.findall(text)) * 1.5 + len(_LATIN_WORD_RE.findall(text)))


def extract_title(content: str, topic: str) -> str:
    """Markdown heading or short first line; falls back to a topic-based title."""
    first_line = content.split("\n", 1)[0].strip()
    if first_line.startswith("#"):
        return _HEADING_PREFIX_RE.sub("", first_line)
    if 0 < len(first_line) < 100:
        return first_line
    return f"关于{topic}的内容"


def extract_topics(content: str) -> List[str]:
    topics: List[str] = []
    for line in content.split("\n"):
        if not line.startswith("#"):
            continue
        topic = _HEADING_PREFIX_RE.sub("", line).strip()
        if topic:
            topics.append(topic)
    return topics[:MAX_TOPICS]


def extract_sources(answer: str) -> List[str]:
    return [line.strip() for line in answer.split("\n") if any(m in line for m in _SOURCE_MARKERS)][:MAX_SOURCES]


def calculate_confidence(answer: str) -> float:
    """0.7 base, raised by length, examples, elaboration and numbers; capped at 0.95."""
    confidence = 0.7
    if len(answer) > 100:
        confidence += 0.1
    if "例如" in answer or "比如" in answer:
        confidence += 0.1
    if "具体来说" in answer or "详细地说" in answer:
        confidence += 0.1
    if _DIGIT_RE.search(answer):
        confidence += 0.05
    return round(min(confidence, 0.95), 2)


def calculate_complexity(question: str) -> int:
    """1-5 scale from question keywords and length."""
    complexity = 1
    if "为什么" in question or "如何" in question:
        complexity += 1
    if "分析" in question or "比较" in question:
        complexity += 1
    if "原理" in question or "机制" in question:
        complexity += 1
    if len(question) > 50:
        complexity += 1
    return min(complexity, 5)


def _is_true(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() in {"true", "1", "yes"}


def qa_metadata(request: CapabilityRequest, answer: str, elapsed_ms: int) -> Dict[str, Any]:
    question = request.text
    meta: Dict[str, Any] = {
        "confidence": calculate_confidence(answer),
        "complexity": calculate_complexity(question),
        "tokensUsed": estimate_tokens(question + answer),
        "domain": request.options.get("domain") or DEFAULT_DOMAIN,
        "responseTimeMs": elapsed_ms,
    }
    if _is_true(request.options.get("include_references")):
        meta["sources"] = extract_sources(answer)
    return meta


def content_metadata(request: CapabilityRequest, content: str) -> Dict[str, Any]:
    return {
        "title": extract_title(content, request.text),
        "wordCount": count_words(content),
        "readingTimeMinutes": reading_time_minutes(content),
        "topics": extract_topics(content),
        "contentType": request.content_type,
        "difficulty": request.options.get("difficulty") or DEFAULT_DIFFICULTY,
    }


def enrich(request: CapabilityRequest, text: str, elapsed_ms: int) -> Dict[str, Any]:
    """Return the kind-specific metadata for a successful result."""
    if request.kind is RequestKind.QA:
        return qa_metadata(request, text, elapsed_ms)
    return content_metadata(request, text)


__all__ = [
    "calculate_complexity",
    "calculate_confidence",
    "content_metadata",
    "count_words",
    "enrich",
    "estimate_tokens",
    "extract_sources",
    "extract_title",
    "extract_topics",
    "qa_metadata",
    "reading_time_minutes",
]
