"""
Structured provider failure exception type.

Capability providers and generation backends raise ``ProviderFailure`` to
report a failure with an explicit signal so the error normalizer never has to
guess from message text.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .failure_signal import FailureSignal


@dataclass
class ProviderFailure(Exception):
    """Represents a provider failure with a structural signal.

    Attributes:
        signal: Failure category declared by the provider.
        message: Human-readable message suitable for logging and callers.
        provider: Provider id where the failure originated, when known.
        status_code: Upstream HTTP status, when the failure came from HTTP.
        raw: Optional original exception for diagnostics.
    """

    signal: FailureSignal
    message: str
    provider: Optional[str] = None
    status_code: Optional[int] = None
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider or '-'} {self.signal.value}: {self.message}"


__all__ = ["ProviderFailure"]
