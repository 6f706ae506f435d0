"""Cancellation error type.

Defines the public ``CancelledError`` raised by operations that observe a
cancellation request. Kept isolated to satisfy the one-class-per-file layout.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    The error normalizer maps it to ``timeout`` because the orchestrator only
    cancels an attempt token when the dispatch deadline expires.
    """


__all__ = ["CancelledError"]
