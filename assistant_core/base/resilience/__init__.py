"""Resilience helpers (retry policy and backoff schedule)."""

from .retry import DEFAULT_RETRY_CONFIG, AttemptLogger, RetryConfig

__all__ = ["AttemptLogger", "DEFAULT_RETRY_CONFIG", "RetryConfig"]
