"""Shared fixtures for the assistant core test suite.

Retry delays are zero in every fixture-built orchestrator and container so
that retry and fallback tests run without sleeping.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Callable, Iterable, Iterator, Optional

import pytest

from assistant_core.backends.mock import MockBackend
from assistant_core.base.cancellation import CancellationToken
from assistant_core.base.models import Modality, ProviderDescriptor, RequestKind
from assistant_core.base.orchestrator import Orchestrator
from assistant_core.base.registry import ProviderRegistry
from assistant_core.base.resilience.retry import RetryConfig
from assistant_core.base.timeouts import TimeoutConfig
from assistant_core.config.settings import Settings
from assistant_core.di import AssistantContainer, build_container


class ScriptedProvider:
    """Capability provider replaying a script of outcomes.

    Each call pops the next outcome: a string is returned, an exception is
    raised, and a callable is called with the attempt's cancellation token.
    When the script is empty ``default`` is returned.
    """

    def __init__(self, *outcomes: Any, default: Any = "scripted answer") -> None:
        self._outcomes = deque(outcomes)
        self._default = default
        self._lock = threading.Lock()
        self.calls = 0
        self.seen: list[tuple[str, Modality, dict]] = []
        self.tokens: list[Optional[CancellationToken]] = []

    def invoke(
        self,
        prompt: str,
        modality: Modality,
        options: dict,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Any:
        with self._lock:
            self.calls += 1
            self.seen.append((prompt, modality, dict(options)))
            self.tokens.append(cancel_token)
            outcome = self._outcomes.popleft() if self._outcomes else self._default
        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome):
            return outcome(cancel_token)
        return outcome


def descriptor(
    provider_id: str,
    kinds: Iterable[RequestKind] = (RequestKind.QA,),
    content_types: Iterable[str] = (),
    **fields: Any,
) -> ProviderDescriptor:
    return ProviderDescriptor(
        id=provider_id,
        supported_kinds=frozenset(kinds),
        supported_content_types=frozenset(content_types),
        **fields,
    )


@pytest.fixture()
def make_provider() -> Callable[..., ScriptedProvider]:
    return ScriptedProvider


@pytest.fixture()
def make_descriptor() -> Callable[..., ProviderDescriptor]:
    return descriptor


@pytest.fixture()
def registry() -> ProviderRegistry:
    return ProviderRegistry()


@pytest.fixture()
def fast_retry() -> RetryConfig:
    return RetryConfig(max_attempts=2, base_delay=0.0, max_delay=0.0)


@pytest.fixture()
def orchestrator(registry: ProviderRegistry, fast_retry: RetryConfig) -> Iterator[Orchestrator]:
    orch = Orchestrator(
        registry,
        retry=fast_retry,
        timeouts=TimeoutConfig(dispatch_timeout_seconds=5.0),
        max_workers=4,
    )
    yield orch
    orch.close()


@pytest.fixture()
def fast_settings() -> Settings:
    return Settings(retry_base_delay=0.0, retry_max_delay=0.0, dispatch_timeout_seconds=5.0)


@pytest.fixture()
def mock_backend() -> MockBackend:
    return MockBackend()


@pytest.fixture()
def container(fast_settings: Settings, mock_backend: MockBackend) -> Iterator[AssistantContainer]:
    """Container with the built-in capabilities on the fixture backend."""
    c = build_container(fast_settings, backend=mock_backend)
    yield c
    c.close()


@pytest.fixture()
def empty_container(fast_settings: Settings, mock_backend: MockBackend) -> Iterator[AssistantContainer]:
    c = build_container(fast_settings, backend=mock_backend, register_builtins=False)
    yield c
    c.close()
