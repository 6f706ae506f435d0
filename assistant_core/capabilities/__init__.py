"""Built-in capability providers."""

from .builtin import ARTICLE_WRITER, BUILTIN_DESCRIPTORS, QUIZ_GENERATOR, SMART_QA
from .content_writer import ContentWriterCapability
from .smart_qa import SmartQACapability

__all__ = [
    "ARTICLE_WRITER",
    "BUILTIN_DESCRIPTORS",
    "ContentWriterCapability",
    "QUIZ_GENERATOR",
    "SMART_QA",
    "SmartQACapability",
]
