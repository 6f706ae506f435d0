"""Content-type contract for content generation requests.

The enumeration is a versioned wire contract shared with the dashboard.
Adding a member is a breaking change and must bump
``CONTENT_TYPES_VERSION``.
"""
from __future__ import annotations

from enum import Enum
from typing import Tuple


class ContentType(str, Enum):
    """Content types accepted by content generation requests."""

    ARTICLE = "article"
    SUMMARY = "summary"
    QUIZ = "quiz"
    FLASHCARDS = "flashcards"
    OUTLINE = "outline"
    EXPLANATION = "explanation"


CONTENT_TYPES: Tuple[str, ...] = tuple(member.value for member in ContentType)
CONTENT_TYPES_VERSION = "1"


__all__ = ["ContentType", "CONTENT_TYPES", "CONTENT_TYPES_VERSION"]
