"""OpenAI generation backend.

External dependencies
---------------------
``openai`` SDK (``OpenAI().chat.completions.create``).

Timeout and retry semantics
---------------------------
The SDK's own retries are disabled (``max_retries=0``); the orchestrator owns
retry and fallback. The per-request timeout comes from
``TimeoutConfig.http_timeout_seconds``.

Error mapping
-------------
SDK exceptions are mapped by type to ``ProviderFailure`` signals.
``APITimeoutError`` is checked before ``APIConnectionError`` because it is a
subclass. Remaining ``APIStatusError`` instances propagate unchanged and are
classified by their ``status_code``.
"""

from __future__ import annotations

from typing import Optional

import openai

from ..base.cancellation import CancellationToken
from ..base.errors import FailureSignal, ProviderFailure
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.timeouts import get_timeout_config
from ..config.defaults import OPENAI_DEFAULT_MODEL


class OpenAIBackend:
    """``GenerationBackend`` calling the OpenAI chat completions API."""

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        model: str = OPENAI_DEFAULT_MODEL,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[openai.OpenAI] = None,
    ) -> None:
        self._model = model
        self._client = client or openai.OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout or get_timeout_config().http_timeout_seconds,
            max_retries=0,
        )
        self._logger = get_logger("assistant.backends.openai")

    @property
    def name(self) -> str:
        return "openai"

    @property
    def model(self) -> str:
        return self._model

    def generate(
        self,
        system: str,
        prompt: str,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> str:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        ctx = LogContext(provider=self.name, extra={"model": self._model})
        try:
            completion = self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
            )
        except openai.APITimeoutError as exc:
            raise ProviderFailure(FailureSignal.TIMEOUT, "model request timed out", provider=self.name, raw=exc) from exc
        except openai.APIConnectionError as exc:
            raise ProviderFailure(FailureSignal.UNAVAILABLE, "model service unreachable", provider=self.name, raw=exc) from exc
        except openai.RateLimitError as exc:
            raise ProviderFailure(
                FailureSignal.QUOTA_EXCEEDED,
                "model quota exceeded",
                provider=self.name,
                status_code=exc.status_code,
                raw=exc,
            ) from exc
        except (openai.BadRequestError, openai.UnprocessableEntityError) as exc:
            raise ProviderFailure(
                FailureSignal.REJECTED_INPUT,
                "model rejected the request",
                provider=self.name,
                status_code=exc.status_code,
                raw=exc,
            ) from exc
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        choices = completion.choices or []
        text = (choices[0].message.content or "") if choices else ""
        normalized_log_event(self._logger, "openai.complete", ctx, phase="finalize", attempt=None, chars=len(text))
        return text


__all__ = ["OpenAIBackend"]
