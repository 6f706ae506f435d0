"""Attempt outcome enumeration (single-class module)."""
from __future__ import annotations

from enum import Enum


class AttemptOutcome(str, Enum):
    """Outcome of a single provider attempt."""

    SUCCESS = "success"
    RETRYABLE = "retryable"
    FATAL = "fatal"


__all__ = ["AttemptOutcome"]
