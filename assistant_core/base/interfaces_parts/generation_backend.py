"""GenerationBackend Protocol (single-class module).

Opaque model client used by the built-in capabilities.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ..cancellation import CancellationToken


@runtime_checkable
class GenerationBackend(Protocol):
    """Minimal text generation contract.

    ``system`` is the instruction prompt, ``prompt`` the user content. Failures
    are raised as ``ProviderFailure`` (or SDK exceptions carrying an HTTP
    status) and are never encoded in the returned text.
    """

    @property
    def name(self) -> str:  # pragma: no cover - interface
        ...

    def generate(
        self,
        system: str,
        prompt: str,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> str:  # pragma: no cover - interface
        ...
