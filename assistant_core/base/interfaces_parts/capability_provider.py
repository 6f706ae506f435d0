"""CapabilityProvider Protocol (single-class module).

Defines the contract every capability provider implements.
"""

from __future__ import annotations

from typing import Mapping, Optional, Protocol, runtime_checkable

from ..cancellation import CancellationToken
from ..models import Modality


@runtime_checkable
class CapabilityProvider(Protocol):
    """Leaf unit that turns a prompt into text.

    Implementations raise ``ProviderFailure`` with an explicit signal for
    expected failures (unavailable upstream, quota, rejected input). Any other
    exception is classified structurally and, when nothing matches, treated
    as ``internal``. Long-running implementations should poll
    ``cancel_token`` and stop once it is cancelled.
    """

    def invoke(
        self,
        prompt: str,
        modality: Modality,
        options: Mapping[str, str],
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> str:  # pragma: no cover - interface
        ...
