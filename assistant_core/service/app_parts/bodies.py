"""Pydantic request bodies.

Fields the validator owns (``question``, ``topic``, ``type``) are typed
``Any`` so a missing or malformed value reaches ``validate`` and comes back as
an ``invalid_request`` envelope rather than a FastAPI 422.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ...base.models import CapabilityRequest


def _options(**values: Optional[str]) -> Dict[str, str]:
    return {k: v for k, v in values.items() if v is not None}


class ChatBody(BaseModel):
    """Question-answering request from the dashboard chat panel."""

    model_config = ConfigDict(populate_by_name=True)

    question: Any = None
    context: Optional[str] = None
    domain: Optional[str] = None
    response_style: Optional[str] = Field(default=None, alias="responseStyle")
    include_references: Optional[bool] = Field(default=None, alias="includeReferences")

    def to_request(self) -> CapabilityRequest:
        refs = None if self.include_references is None else str(self.include_references).lower()
        return CapabilityRequest.qa(
            self.question,
            **_options(
                context=self.context,
                domain=self.domain,
                response_style=self.response_style,
                include_references=refs,
            ),
        )


class ContentBody(BaseModel):
    """Content generation request (article, quiz, flashcards...)."""

    model_config = ConfigDict(populate_by_name=True)

    type: Any = None
    topic: Any = None
    difficulty: Optional[str] = None
    length: Optional[str] = None
    style: Optional[str] = None
    language: Optional[str] = None
    additional_requirements: Optional[str] = Field(default=None, alias="additionalRequirements")

    def to_request(self) -> CapabilityRequest:
        return CapabilityRequest.content(
            self.type,
            self.topic,
            **_options(
                difficulty=self.difficulty,
                length=self.length,
                style=self.style,
                language=self.language,
                additional_requirements=self.additional_requirements,
            ),
        )


class PluginInstallBody(BaseModel):
    """Descriptor for a plugin installed over HTTP; ``entry`` is mandatory."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    entry: str
    display_name: str = Field(default="", alias="displayName")
    supported_kinds: List[str] = Field(default_factory=list, alias="supportedKinds")
    supported_content_types: List[str] = Field(default_factory=list, alias="supportedContentTypes")
    enabled: bool = True
    version: str = "1.0.0"
    priority: int = 0
    description: str = ""
    author: str = ""
    category: str = "ai-enhancement"
    config: Dict[str, Any] = Field(default_factory=dict)
    dependencies: List[str] = Field(default_factory=list)


class ConfigBody(BaseModel):
    config: Dict[str, Any]


__all__ = ["ChatBody", "ConfigBody", "ContentBody", "PluginInstallBody"]
