"""Request orchestration: validation, provider selection, retry and fallback.

Purpose
-------
``Orchestrator.dispatch`` turns a ``CapabilityRequest`` into exactly one
``CapabilityResult`` or one ``ErrorEnvelope``. It never raises for provider
failures; every failure is normalized by ``classify_failure`` before any
retry decision is made.

Algorithm
---------
1. Validate; invalid requests return immediately, no provider is touched.
2. Resolve candidates from the registry; none -> ``no_provider_available``.
   Only content generation filters on the content type (see ``Modality.of``).
3. Try the first untried candidate up to ``RetryConfig.max_attempts`` times,
   sleeping ``base_delay * 2**n`` (capped) between attempts. Only retryable
   kinds are retried.
4. A success ends the dispatch. A fatal error ends it too, without fallback.
5. A provider that keeps failing with retryable errors is abandoned; the
   registry is resolved again and the next untried candidate is used.
6. When no candidate is left the last envelope is returned.

Registry changes during a dispatch
----------------------------------
Each fallback step takes a fresh ``resolve`` snapshot, and every retry first
checks ``registry.is_enabled``. An attempt that is already running is never
interrupted by a disable.

Timeout and cancellation semantics
----------------------------------
Each dispatch owns a ``Deadline``. Provider calls run on a bounded worker
pool and are awaited for at most the remaining budget; on expiry the
attempt's child ``CancellationToken`` is cancelled and the dispatch returns a
``timeout`` envelope. A retry whose backoff would overshoot the deadline is
skipped. A cancelled caller token ends the dispatch before the next attempt
with ``unavailable`` / "dispatch cancelled" (not retryable).
"""

from __future__ import annotations

import concurrent.futures
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Set, Tuple, Union

from .cancellation import CancellationToken
from .enrichment import enrich
from .errors import ErrorEnvelope, ErrorKind, classify_failure, envelope_for
from .logging import LogContext, get_logger, normalized_log_event
from .metrics import MetricsRegistry, ProviderInvocationCounters
from .models import AttemptOutcome, CapabilityRequest, CapabilityResult, DispatchAttempt, Modality
from .registry import ProviderRegistry, ResolvedProvider
from .resilience.retry import DEFAULT_RETRY_CONFIG, RetryConfig
from .timeouts import Deadline, TimeoutConfig, get_timeout_config
from .validation import validate

DispatchOutcome = Union[CapabilityResult, ErrorEnvelope]

CANCELLED_MESSAGE = "dispatch cancelled"
DEADLINE_MESSAGE = "dispatch deadline exceeded"


def cancelled_envelope() -> ErrorEnvelope:
    return ErrorEnvelope(
        kind=ErrorKind.UNAVAILABLE,
        message=CANCELLED_MESSAGE,
        retryable=False,
        suggested_status=ErrorKind.UNAVAILABLE.suggested_status,
    )


class _StopDispatch(Exception):
    """Internal control flow: end the dispatch with ``envelope``."""

    def __init__(self, envelope: ErrorEnvelope) -> None:
        super().__init__(envelope.message)
        self.envelope = envelope


@dataclass
class _DispatchState:
    request: CapabilityRequest
    modality: Modality
    deadline: Deadline
    token: CancellationToken
    ctx: LogContext
    started_ms: int
    attempts: List[DispatchAttempt] = field(default_factory=list)
    tried: Set[str] = field(default_factory=set)
    last_error: Optional[ErrorEnvelope] = None


class Orchestrator:
    """Dispatches requests to registry providers with retry and fallback.

    The orchestrator owns a bounded ``ThreadPoolExecutor``; call ``close`` (or
    use it as a context manager) to release the worker threads. Without
    ``max_workers`` the pool uses ``ThreadPoolExecutor``'s default size; the
    DI container passes ``Settings.max_workers``.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        *,
        retry: Optional[RetryConfig] = None,
        timeouts: Optional[TimeoutConfig] = None,
        metrics: Optional[MetricsRegistry] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self._registry = registry
        self._retry = retry or DEFAULT_RETRY_CONFIG
        self._timeouts = timeouts or get_timeout_config()
        self.metrics = metrics or MetricsRegistry()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="assistant-dispatch")
        self.logger = get_logger("assistant.orchestrator")

    @property
    def retry_config(self) -> RetryConfig:
        return self._retry

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "Orchestrator":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #
    def dispatch(
        self,
        request: CapabilityRequest,
        *,
        timeout: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> DispatchOutcome:
        """Serve ``request``; returns a result or an error envelope, never raises."""
        ctx = LogContext(
            request_id=request.request_id,
            kind=request.kind.value,
            content_type=request.content_type,
        )
        invalid = validate(request)
        if invalid is not None:
            return self._fail(ctx, invalid, phase="validation")

        modality = Modality.of(request)
        candidates = self._registry.resolve(modality.kind, modality.content_type)
        if not candidates:
            return self._fail(
                ctx,
                envelope_for(ErrorKind.NO_PROVIDER_AVAILABLE, _no_provider_message(modality)),
                phase="resolve",
            )

        state = _DispatchState(
            request=request,
            modality=modality,
            deadline=Deadline(timeout if timeout is not None else self._timeouts.dispatch_timeout_seconds),
            token=cancel_token or CancellationToken(),
            ctx=ctx,
            started_ms=_monotonic_ms(),
        )
        try:
            while candidates:
                candidate = candidates[0]
                state.tried.add(candidate.id)
                result = self._try_provider(candidate, state)
                if result is not None:
                    return result
                candidates = tuple(
                    c for c in self._registry.resolve(modality.kind, modality.content_type) if c.id not in state.tried
                )
        except _StopDispatch as stop:
            return self._fail(ctx, stop.envelope, phase="dispatch", attempts=len(state.attempts))
        last = state.last_error or envelope_for(ErrorKind.NO_PROVIDER_AVAILABLE, _no_provider_message(modality))
        return self._fail(ctx, last, phase="exhausted", attempts=len(state.attempts))

    # ------------------------------------------------------------------ #
    # Provider loop
    # ------------------------------------------------------------------ #
    def _try_provider(self, candidate: ResolvedProvider, state: _DispatchState) -> Optional[CapabilityResult]:
        """Run up to ``max_attempts`` attempts against ``candidate``.

        Returns the result on success, ``None`` when the provider is exhausted
        (fallback continues) and raises ``_StopDispatch`` when the dispatch
        must end (fatal error, cancellation, spent deadline).
        """
        counters = self.metrics.for_provider(candidate.id)
        ctx = state.ctx.for_provider(candidate.id)
        for attempt_number in range(1, self._retry.max_attempts + 1):
            if attempt_number > 1:
                if not self._registry.is_enabled(candidate.id):
                    normalized_log_event(self.logger, "dispatch.retry_skipped", ctx, phase="disabled", attempt=attempt_number)
                    return None
                delay = self._retry.delay_for(attempt_number - 2)
                if not state.deadline.allows(delay):
                    normalized_log_event(self.logger, "dispatch.retry_skipped", ctx, phase="deadline", attempt=attempt_number)
                    return None
                counters.record_retry()
                if state.token.wait(delay):
                    raise _StopDispatch(cancelled_envelope())
            if state.token.cancelled:
                raise _StopDispatch(cancelled_envelope())
            if state.deadline.expired:
                raise _StopDispatch(envelope_for(ErrorKind.TIMEOUT, DEADLINE_MESSAGE))

            text, envelope, deadline_hit = self._attempt(candidate, state, attempt_number, counters, ctx)
            if envelope is None:
                return self._build_result(candidate, state, text)
            state.last_error = envelope
            if state.token.cancelled:
                raise _StopDispatch(cancelled_envelope())
            if deadline_hit:
                raise _StopDispatch(envelope)
            if not envelope.retryable:
                raise _StopDispatch(envelope)
        return None

    def _attempt(
        self,
        candidate: ResolvedProvider,
        state: _DispatchState,
        attempt_number: int,
        counters: ProviderInvocationCounters,
        ctx: LogContext,
    ) -> Tuple[Optional[str], Optional[ErrorEnvelope], bool]:
        """Run one attempt; returns ``(text, envelope, deadline_hit)``."""
        request = state.request
        attempt_token = state.token.child()
        started_at = datetime.now(timezone.utc)
        started_ms = counters.monotonic_ms()
        counters.record_start()
        normalized_log_event(self.logger, "dispatch.attempt", ctx, phase="start", attempt=attempt_number)

        text: Optional[str] = None
        envelope: Optional[ErrorEnvelope] = None
        deadline_hit = False
        future = self._executor.submit(
            candidate.provider.invoke,
            request.text,
            state.modality,
            dict(request.options),
            cancel_token=attempt_token,
        )
        try:
            raw = future.result(timeout=state.deadline.remaining())
        except concurrent.futures.TimeoutError as exc:
            if future.done():
                envelope = classify_failure(exc)
            else:
                attempt_token.cancel(DEADLINE_MESSAGE)
                future.cancel()
                deadline_hit = True
                envelope = envelope_for(ErrorKind.TIMEOUT, DEADLINE_MESSAGE)
        except Exception as exc:
            envelope = classify_failure(exc)
            if envelope.kind is ErrorKind.INTERNAL:
                normalized_log_event(
                    self.logger,
                    "dispatch.provider_error",
                    ctx,
                    phase="failure",
                    attempt=attempt_number,
                    error_code=envelope.kind.value,
                    level=logging.ERROR,
                    exc_info=exc,
                    error=repr(exc),
                )
        else:
            if not isinstance(raw, str):
                envelope = envelope_for(ErrorKind.INTERNAL, "provider returned a non-text result")
            elif not raw.strip():
                envelope = envelope_for(ErrorKind.UNAVAILABLE, "provider returned empty output")
            else:
                text = raw

        latency_ms = counters.monotonic_ms() - started_ms
        if envelope is None:
            counters.record_success(latency_ms)
            outcome = AttemptOutcome.SUCCESS
        else:
            counters.record_failure(envelope.kind.value, latency_ms)
            outcome = AttemptOutcome.RETRYABLE if envelope.retryable else AttemptOutcome.FATAL
        state.attempts.append(
            DispatchAttempt(
                provider_id=candidate.id,
                attempt_number=attempt_number,
                started_at=started_at,
                outcome=outcome,
                error_kind=envelope.kind.value if envelope else None,
                latency_ms=latency_ms,
            )
        )
        normalized_log_event(
            self.logger,
            "dispatch.attempt",
            ctx,
            phase=outcome.value,
            attempt=attempt_number,
            error_code=envelope.kind.value if envelope else None,
            latency_ms=latency_ms,
        )
        if self._retry.attempt_logger is not None:
            has_next = envelope is not None and envelope.retryable and attempt_number < self._retry.max_attempts
            self._retry.attempt_logger(
                provider_id=candidate.id,
                attempt=attempt_number,
                max_attempts=self._retry.max_attempts,
                delay=self._retry.delay_for(attempt_number - 1) if has_next else None,
                error_kind=envelope.kind if envelope else None,
            )
        return text, envelope, deadline_hit

    # ------------------------------------------------------------------ #
    # Outcomes
    # ------------------------------------------------------------------ #
    def _build_result(self, candidate: ResolvedProvider, state: _DispatchState, text: str) -> CapabilityResult:
        elapsed_ms = _monotonic_ms() - state.started_ms
        metadata = enrich(state.request, text, elapsed_ms)
        metadata["requestId"] = state.request.request_id
        metadata["attempts"] = [a.to_dict() for a in state.attempts]
        result = CapabilityResult(text=text, provider_id=candidate.id, metadata=metadata)
        self.metrics.record_dispatch()
        normalized_log_event(
            self.logger,
            "dispatch.complete",
            state.ctx.for_provider(candidate.id),
            phase="success",
            attempt=len(state.attempts),
            elapsed_ms=elapsed_ms,
        )
        return result

    def _fail(self, ctx: LogContext, envelope: ErrorEnvelope, *, phase: str, attempts: int = 0) -> ErrorEnvelope:
        self.metrics.record_dispatch(envelope.kind.value)
        normalized_log_event(
            self.logger,
            "dispatch.failed",
            ctx,
            phase=phase,
            attempt=attempts or None,
            error_code=envelope.kind.value,
            level=logging.WARNING if envelope.kind is not ErrorKind.INVALID_REQUEST else logging.INFO,
            message=envelope.message,
        )
        return envelope


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


def _no_provider_message(modality: Modality) -> str:
    if modality.content_type:
        return f"no provider available for {modality.kind.value}/{modality.content_type}"
    return f"no provider available for {modality.kind.value}"


__all__ = ["CANCELLED_MESSAGE", "DEADLINE_MESSAGE", "DispatchOutcome", "Orchestrator", "cancelled_envelope"]
