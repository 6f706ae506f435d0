"""Built-in capability descriptors.

Each descriptor carries an ``entry`` so a removed built-in can be installed
again through the plugin API.
"""

from __future__ import annotations

from typing import Tuple

from ..base.models import ContentType, ProviderDescriptor, RequestKind

SMART_QA = ProviderDescriptor(
    id="smart-qa",
    display_name="智能问答",
    supported_kinds=frozenset({RequestKind.QA}),
    version="1.0.0",
    priority=10,
    description="Answers questions with adjustable response style and domain focus",
    author="assistant-core",
    category="ai-enhancement",
    entry="assistant_core.capabilities.smart_qa:create",
)

ARTICLE_WRITER = ProviderDescriptor(
    id="article-writer",
    display_name="内容生成",
    supported_kinds=frozenset({RequestKind.CONTENT_GENERATION}),
    supported_content_types=frozenset(
        {
            ContentType.ARTICLE.value,
            ContentType.SUMMARY.value,
            ContentType.OUTLINE.value,
            ContentType.EXPLANATION.value,
        }
    ),
    version="1.0.0",
    priority=10,
    description="Writes articles, summaries, outlines and explanations",
    author="assistant-core",
    category="content",
    entry="assistant_core.capabilities.content_writer:create",
)

QUIZ_GENERATOR = ProviderDescriptor(
    id="quiz-generator",
    display_name="学习材料生成",
    supported_kinds=frozenset({RequestKind.CONTENT_GENERATION}),
    supported_content_types=frozenset({ContentType.QUIZ.value, ContentType.FLASHCARDS.value}),
    version="1.0.0",
    priority=10,
    description="Creates quizzes and flashcards for study sessions",
    author="assistant-core",
    category="learning",
    entry="assistant_core.capabilities.content_writer:create",
)

BUILTIN_DESCRIPTORS: Tuple[ProviderDescriptor, ...] = (SMART_QA, ARTICLE_WRITER, QUIZ_GENERATOR)

__all__ = ["ARTICLE_WRITER", "BUILTIN_DESCRIPTORS", "QUIZ_GENERATOR", "SMART_QA"]
