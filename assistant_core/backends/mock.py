"""Deterministic generation backend backed by JSON fixtures.

Purpose
-------
Serve canned answers so the service, CLI and tests run end to end without
network access. Fixtures live in ``assistant_core/backends/fixtures`` and are
loaded through ``importlib.resources``.

Fixture selection (first match wins):
    1. ``responses`` keyed by the exact prompt (also tried lowercased)
    2. ``contains`` entries whose ``match`` string occurs in the prompt
    3. ``default`` template, formatted with the prompt's first line as ``head``

Scripted failures
-----------------
``failures`` is a queue of ``FailureSignal`` values (or exceptions); each call
pops one and raises it before answering. ``delay`` makes every call wait on
the cancellation token so deadline handling can be exercised.
"""

from __future__ import annotations

import json
from collections import deque
from importlib import resources
from threading import Lock
from typing import Any, Deque, Dict, Iterable, Optional, Union

from ..base.cancellation import CancellationToken
from ..base.errors import FailureSignal, ProviderFailure
from ..base.logging import get_logger, log_event

_FIXTURE_PACKAGE = "assistant_core.backends.fixtures"
_FIXTURE_RESOURCE = "responses.json"

ScriptedFailure = Union[FailureSignal, BaseException]


def load_fixture_catalog(resource: str = _FIXTURE_RESOURCE) -> Dict[str, Any]:
    """Load the JSON fixture catalog bundled with the package."""
    data = resources.files(_FIXTURE_PACKAGE).joinpath(resource).read_text(encoding="utf-8")
    return json.loads(data)


class MockBackend:
    """``GenerationBackend`` that answers from fixtures."""

    def __init__(
        self,
        *,
        catalog: Optional[Dict[str, Any]] = None,
        failures: Iterable[ScriptedFailure] = (),
        delay: float = 0.0,
    ) -> None:
        self._catalog = catalog if catalog is not None else load_fixture_catalog()
        self._responses: Dict[str, str] = dict(self._catalog.get("responses", {}))
        self._contains = list(self._catalog.get("contains", []))
        self._default = str(self._catalog.get("default", "{head}"))
        self._failures: Deque[ScriptedFailure] = deque(failures)
        self._delay = delay
        self._lock = Lock()
        self.calls = 0
        self._logger = get_logger("assistant.backends.mock")

    @property
    def name(self) -> str:
        return "mock"

    def script_failures(self, *failures: ScriptedFailure) -> None:
        """Append failures raised by the next calls, in order."""
        with self._lock:
            self._failures.extend(failures)

    def generate(
        self,
        system: str,
        prompt: str,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> str:
        with self._lock:
            self.calls += 1
            failure = self._failures.popleft() if self._failures else None
        if self._delay > 0:
            token = cancel_token or CancellationToken()
            if token.wait(self._delay):
                token.raise_if_cancelled()
        if failure is not None:
            log_event(self._logger, "mock.scripted_failure", failure=getattr(failure, "value", repr(failure)))
            if isinstance(failure, FailureSignal):
                raise ProviderFailure(failure, f"scripted {failure.value} failure", provider=self.name)
            raise failure
        return self._select(prompt)

    def _select(self, prompt: str) -> str:
        key = prompt.strip()
        text = self._responses.get(key) or self._responses.get(key.lower())
        if text:
            return text
        for entry in self._contains:
            if entry.get("match") and entry["match"] in prompt:
                return str(entry.get("text", ""))
        head = key.split("\n", 1)[0][:80]
        return self._default.format(head=head)


__all__ = ["MockBackend", "load_fixture_catalog"]
