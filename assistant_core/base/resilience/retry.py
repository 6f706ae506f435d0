from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from ..errors import ErrorKind


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        provider_id: str,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error_kind: ErrorKind | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    """Per-provider retry policy.

    ``max_attempts`` counts every attempt against one provider, the first one
    included. The delay before retry ``n`` (0-based) is
    ``base_delay * 2**n`` capped at ``max_delay``.
    """

    max_attempts: int = 2
    base_delay: float = 0.5
    max_delay: float = 4.0
    attempt_logger: Optional[AttemptLogger] = None

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("retry delays must be >= 0")

    def delay_for(self, retry_index: int) -> float:
        return min(self.base_delay * (2**retry_index), self.max_delay)

    def delays(self) -> Iterable[float]:
        for retry_index in range(self.max_attempts - 1):
            yield self.delay_for(retry_index)


DEFAULT_RETRY_CONFIG = RetryConfig()


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
]
