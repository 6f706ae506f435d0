"""Content generation capability.

One class serves every content type; the descriptor decides which types a
given instance is registered for (``article-writer`` vs ``quiz-generator``).
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..base.cancellation import CancellationToken
from ..base.errors import FailureSignal, ProviderFailure
from ..base.interfaces import GenerationBackend
from ..base.models import Modality, ProviderDescriptor, RequestKind
from .prompts import content_system_prompt, content_user_prompt


class ContentWriterCapability:
    """Generates articles, summaries, quizzes... through a generation backend.

    Config keys:
        default_difficulty / default_length / default_style / default_language:
            Fallbacks for request options the caller left out.
    """

    _DEFAULTABLE = ("difficulty", "length", "style", "language")

    def __init__(self, backend: GenerationBackend, *, provider_id: str = "article-writer") -> None:
        self._backend = backend
        self._provider_id = provider_id
        self._config: Dict[str, Any] = {}

    def initialize(self, config: Mapping[str, Any]) -> None:
        self._config = dict(config)

    def invoke(
        self,
        prompt: str,
        modality: Modality,
        options: Mapping[str, str],
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> str:
        if modality.kind is not RequestKind.CONTENT_GENERATION or not modality.content_type:
            raise ProviderFailure(
                FailureSignal.REJECTED_INPUT,
                f"{self._provider_id} only generates content",
                provider=self._provider_id,
            )
        merged = dict(options)
        for key in self._DEFAULTABLE:
            default = self._config.get(f"default_{key}")
            if default and not merged.get(key):
                merged[key] = str(default)
        system = content_system_prompt(modality.content_type)
        user = content_user_prompt(prompt, modality.content_type, merged)
        return self._backend.generate(system, user, cancel_token=cancel_token)


def create(descriptor: ProviderDescriptor, backend: Optional[GenerationBackend]) -> ContentWriterCapability:
    """Entry-point factory."""
    if backend is None:
        raise ValueError(f"{descriptor.id} requires a generation backend")
    return ContentWriterCapability(backend, provider_id=descriptor.id)


__all__ = ["ContentWriterCapability", "create"]
