"""Structured failure signals a capability provider may raise."""
from __future__ import annotations

from enum import Enum


class FailureSignal(str, Enum):
    """Provider-declared failure category.

    ``TRANSIENT`` and ``PERMANENT`` are generic fallbacks for providers that
    only know whether a retry can help.
    """

    UNAVAILABLE = "unavailable"
    QUOTA_EXCEEDED = "quota_exceeded"
    TIMEOUT = "timeout"
    REJECTED_INPUT = "rejected_input"
    TRANSIENT = "transient"
    PERMANENT = "permanent"


__all__ = ["FailureSignal"]
