"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` used by the orchestrator to stop provider
attempts when a dispatch deadline expires or the caller gives up. Built on a
``threading.Event`` so that backoff sleeps can be interrupted.
"""

from __future__ import annotations

from threading import Event, Lock
from typing import List, Optional

from .cancelled_error import CancelledError


class CancellationToken:
    """A cooperative cancellation token with cascading child tokens.

    Thread-safe. Child tokens inherit cancellation when the parent is
    cancelled; cancelling a child never affects its parent.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._event = Event()
        self._reason: Optional[str] = None
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """True once ``cancel`` has been called on this token or an ancestor."""
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:  # noqa: D401 - short form
        """Reason passed to the first ``cancel`` call."""
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Set the token and propagate to linked children; later calls are ignored."""
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()
            children = list(self._children)
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Attach ``token``; it is cancelled at once when this token already is."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._event.is_set()
            reason = self._reason
        if should_cancel:
            token.cancel(reason)
        return token

    def wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds``; return True early if cancelled."""
        if seconds <= 0:
            return self._event.is_set()
        return self._event.wait(seconds)

    def raise_if_cancelled(self) -> None:
        """Checkpoint for long-running providers."""
        if self._event.is_set():
            raise CancelledError(self._reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """New token cancelled together with this one (one per dispatch attempt)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self.cancelled}, "
            f"reason={self._reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
