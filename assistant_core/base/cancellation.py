"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs via the canonical
``assistant_core.base.cancellation`` import path while the implementations
live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is passed to every provider attempt; the orchestrator
  cancels it when the dispatch deadline expires or the caller cancels.
- ``CancelledError`` is raised by operations that observe a cancellation request.
"""

from .cancellation_parts.cancellation_token import CancellationToken
from .cancellation_parts.cancelled_error import CancelledError

__all__ = ["CancellationToken", "CancelledError"]
