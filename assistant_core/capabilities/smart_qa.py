"""Smart question answering capability.

Wraps a ``GenerationBackend`` with the QA system prompt (response style,
domain, context). Backend failures propagate unchanged so the orchestrator
can classify them.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..base.cancellation import CancellationToken
from ..base.errors import FailureSignal, ProviderFailure
from ..base.interfaces import GenerationBackend
from ..base.models import Modality, ProviderDescriptor, RequestKind
from .prompts import qa_system_prompt


class SmartQACapability:
    """Answers questions through a generation backend.

    Config keys:
        default_style: Response style used when the request has none.
    """

    def __init__(self, backend: GenerationBackend, *, provider_id: str = "smart-qa") -> None:
        self._backend = backend
        self._provider_id = provider_id
        self._config: Dict[str, Any] = {}

    def initialize(self, config: Mapping[str, Any]) -> None:
        self._config = dict(config)

    def shutdown(self) -> None:
        self._config = {}

    def invoke(
        self,
        prompt: str,
        modality: Modality,
        options: Mapping[str, str],
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> str:
        if modality.kind is not RequestKind.QA:
            raise ProviderFailure(
                FailureSignal.REJECTED_INPUT,
                f"{self._provider_id} only answers questions",
                provider=self._provider_id,
            )
        system = qa_system_prompt(options, default_style=self._config.get("default_style"))
        return self._backend.generate(system, prompt, cancel_token=cancel_token)


def create(descriptor: ProviderDescriptor, backend: Optional[GenerationBackend]) -> SmartQACapability:
    """Entry-point factory."""
    if backend is None:
        raise ValueError(f"{descriptor.id} requires a generation backend")
    return SmartQACapability(backend, provider_id=descriptor.id)


__all__ = ["SmartQACapability", "create"]
