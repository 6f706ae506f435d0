"""Backoff schedule, deadlines and timeout configuration."""

from __future__ import annotations

import time

import pytest

from assistant_core.base import timeouts
from assistant_core.base.resilience.retry import DEFAULT_RETRY_CONFIG, RetryConfig
from assistant_core.base.timeouts import Deadline, get_timeout_config
from assistant_core.config import defaults


def test_backoff_doubles_and_caps():
    config = RetryConfig(max_attempts=6, base_delay=0.5, max_delay=4.0)
    assert list(config.delays()) == [0.5, 1.0, 2.0, 4.0, 4.0]


def test_defaults_match_config_defaults():
    assert DEFAULT_RETRY_CONFIG.max_attempts == defaults.DEFAULT_RETRY_MAX_ATTEMPTS
    assert DEFAULT_RETRY_CONFIG.base_delay == defaults.DEFAULT_RETRY_BASE_DELAY
    assert DEFAULT_RETRY_CONFIG.max_delay == defaults.DEFAULT_RETRY_MAX_DELAY


@pytest.mark.parametrize("kwargs", [{"max_attempts": 0}, {"base_delay": -1}, {"max_delay": -0.5}])
def test_invalid_retry_config(kwargs):
    with pytest.raises(ValueError):
        RetryConfig(**kwargs)


def test_single_attempt_has_no_delays():
    assert list(RetryConfig(max_attempts=1).delays()) == []


def test_unbounded_deadline():
    deadline = Deadline(None)
    assert deadline.remaining() is None
    assert not deadline.expired
    assert deadline.allows(1e9)


def test_deadline_expires():
    deadline = Deadline(0.05)
    assert deadline.allows(0.01)
    assert not deadline.allows(10)
    time.sleep(0.06)
    assert deadline.expired
    assert deadline.remaining() == 0.0


def test_timeout_config_reads_env(monkeypatch):
    monkeypatch.setenv("ASSISTANT_TIMEOUT_DISPATCH_SECONDS", "12.5")
    monkeypatch.setenv("ASSISTANT_TIMEOUT_HTTP_SECONDS", "nonsense")
    config = get_timeout_config()
    assert config.dispatch_timeout_seconds == 12.5
    assert config.http_timeout_seconds == defaults.DEFAULT_HTTP_TIMEOUT_SECONDS
    assert get_timeout_config() is config


def test_timeout_config_refreshes_when_env_changes(monkeypatch):
    monkeypatch.setenv("ASSISTANT_TIMEOUT_DISPATCH_SECONDS", "3")
    assert get_timeout_config().dispatch_timeout_seconds == 3.0
    monkeypatch.delenv("ASSISTANT_TIMEOUT_DISPATCH_SECONDS")
    assert timeouts.get_timeout_config().dispatch_timeout_seconds == defaults.DEFAULT_DISPATCH_TIMEOUT_SECONDS
