"""Runtime settings loader.

External Config File (Optional)
-------------------------------
If ``ASSISTANT_CONFIG_FILE`` points to a file it is parsed as JSON when the
suffix is ``.json`` and as YAML (PyYAML ``safe_load``) otherwise. Example::

    backend: openai
    retry:
      max_attempts: 3
      base_delay: 0.25
      max_delay: 2
    timeouts:
      dispatch_seconds: 20
    openai:
      model: gpt-4o-mini
    cors_origins:
      - http://localhost:3000
    logging:
      level: DEBUG
      file: logs/assistant.log
    plugins:
      entry_prefixes:
        - assistant_core.capabilities
        - my_company.assistant_plugins
    providers:
      - id: quiz-generator
        enabled: false
      - id: smart-qa
        priority: 10
        config:
          default_style: concise

Environment Variables
---------------------
``ASSISTANT_BACKEND``, ``ASSISTANT_RETRY_MAX_ATTEMPTS``,
``ASSISTANT_RETRY_BASE_DELAY``, ``ASSISTANT_RETRY_MAX_DELAY``,
``ASSISTANT_TIMEOUT_DISPATCH_SECONDS``, ``ASSISTANT_MAX_WORKERS``,
``ASSISTANT_CORS_ORIGINS`` and ``ASSISTANT_PLUGIN_ENTRY_PREFIXES`` (comma
separated), ``ASSISTANT_LOG_LEVEL``,
``ASSISTANT_LOG_FILE``, ``OPENAI_API_KEY``, ``OPENAI_MODEL``,
``OPENAI_BASE_URL``.

Failure Modes
-------------
``SettingsError`` is raised when the config file is missing, unparseable,
not a mapping, or when a value has the wrong type.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .defaults import (
    DEFAULT_BACKEND,
    DEFAULT_DISPATCH_TIMEOUT_SECONDS,
    DEFAULT_MAX_WORKERS,
    DEFAULT_RETRY_BASE_DELAY,
    DEFAULT_RETRY_MAX_ATTEMPTS,
    DEFAULT_RETRY_MAX_DELAY,
    OPENAI_DEFAULT_MODEL,
    PLUGIN_ENTRY_DEFAULT_PREFIXES,
    SERVICE_CORS_DEFAULT_ORIGINS,
    SUPPORTED_BACKENDS,
)

CONFIG_FILE_ENV = "ASSISTANT_CONFIG_FILE"


class SettingsError(ValueError):
    """Invalid configuration value or config file."""


@dataclass(frozen=True)
class ProviderOverride:
    """Per-provider adjustments applied to built-in descriptors."""

    id: str
    enabled: Optional[bool] = None
    priority: Optional[int] = None
    config: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProviderOverride":
        provider_id = data.get("id")
        if not isinstance(provider_id, str) or not provider_id:
            raise SettingsError("provider override requires an 'id'")
        config = data.get("config") or {}
        if not isinstance(config, Mapping):
            raise SettingsError(f"provider override '{provider_id}': config must be a mapping")
        enabled = data.get("enabled")
        priority = data.get("priority")
        return cls(
            id=provider_id,
            enabled=None if enabled is None else _as_bool(f"provider override '{provider_id}': enabled", enabled),
            priority=None if priority is None else _as_int("priority", priority),
            config=dict(config),
        )


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings (immutable)."""

    backend: str = DEFAULT_BACKEND
    retry_max_attempts: int = DEFAULT_RETRY_MAX_ATTEMPTS
    retry_base_delay: float = DEFAULT_RETRY_BASE_DELAY
    retry_max_delay: float = DEFAULT_RETRY_MAX_DELAY
    dispatch_timeout_seconds: float = DEFAULT_DISPATCH_TIMEOUT_SECONDS
    max_workers: int = DEFAULT_MAX_WORKERS
    cors_origins: Tuple[str, ...] = tuple(SERVICE_CORS_DEFAULT_ORIGINS.split(","))
    plugin_entry_prefixes: Tuple[str, ...] = PLUGIN_ENTRY_DEFAULT_PREFIXES
    openai_model: str = OPENAI_DEFAULT_MODEL
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    log_level: Optional[str] = None
    log_file: Optional[str] = None
    providers: Tuple[ProviderOverride, ...] = ()

    def provider_override(self, provider_id: str) -> Optional[ProviderOverride]:
        for override in self.providers:
            if override.id == provider_id:
                return override
        return None


def _as_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise SettingsError(f"{name} must be an integer, got {value!r}") from exc


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "1", "yes", "on"}:
        return True
    if isinstance(value, str) and value.strip().lower() in {"false", "0", "no", "off"}:
        return False
    raise SettingsError(f"{name} must be a boolean, got {value!r}")


def _as_float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise SettingsError(f"{name} must be a number, got {value!r}") from exc


def _split_list(name: str, value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(v) for v in value]
    else:
        raise SettingsError(f"{name} must be a list or comma separated string, got {value!r}")
    return tuple(item.strip() for item in items if item.strip())


def _env_values() -> Dict[str, Any]:
    mapping = {
        "ASSISTANT_BACKEND": "backend",
        "ASSISTANT_RETRY_MAX_ATTEMPTS": "retry_max_attempts",
        "ASSISTANT_RETRY_BASE_DELAY": "retry_base_delay",
        "ASSISTANT_RETRY_MAX_DELAY": "retry_max_delay",
        "ASSISTANT_TIMEOUT_DISPATCH_SECONDS": "dispatch_timeout_seconds",
        "ASSISTANT_MAX_WORKERS": "max_workers",
        "ASSISTANT_CORS_ORIGINS": "cors_origins",
        "ASSISTANT_PLUGIN_ENTRY_PREFIXES": "plugin_entry_prefixes",
        "ASSISTANT_LOG_LEVEL": "log_level",
        "ASSISTANT_LOG_FILE": "log_file",
        "OPENAI_API_KEY": "openai_api_key",
        "OPENAI_MODEL": "openai_model",
        "OPENAI_BASE_URL": "openai_base_url",
    }
    out: Dict[str, Any] = {}
    for env_name, key in mapping.items():
        val = os.getenv(env_name)
        if val:
            out[key] = val
    return out


def load_config_file(path: str | os.PathLike[str]) -> Dict[str, Any]:
    """Parse a JSON or YAML config file into a mapping."""
    p = Path(path)
    if not p.is_file():
        raise SettingsError(f"config file not found: {p}")
    text = p.read_text(encoding="utf-8")
    try:
        data = json.loads(text) if p.suffix.lower() == ".json" else yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as exc:
        raise SettingsError(f"cannot parse config file {p}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError(f"config file {p} must contain a mapping at top level")
    return data


def _file_values(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Flatten the nested file layout into ``Settings`` field names."""
    out: Dict[str, Any] = {}
    for key in ("backend", "max_workers", "cors_origins"):
        if key in data:
            out[key] = data[key]
    sections = {
        "retry": {"max_attempts": "retry_max_attempts", "base_delay": "retry_base_delay", "max_delay": "retry_max_delay"},
        "timeouts": {"dispatch_seconds": "dispatch_timeout_seconds"},
        "openai": {"model": "openai_model", "api_key": "openai_api_key", "base_url": "openai_base_url"},
        "logging": {"level": "log_level", "file": "log_file"},
        "plugins": {"entry_prefixes": "plugin_entry_prefixes"},
    }
    for section, fields in sections.items():
        block = data.get(section)
        if block is None:
            continue
        if not isinstance(block, Mapping):
            raise SettingsError(f"'{section}' must be a mapping")
        for src, dest in fields.items():
            if src in block:
                out[dest] = block[src]
    providers = data.get("providers")
    if providers is not None:
        if not isinstance(providers, list):
            raise SettingsError("'providers' must be a list")
        out["providers"] = providers
    return out


def _build(values: Mapping[str, Any]) -> Settings:
    backend = str(values.get("backend", DEFAULT_BACKEND)).strip().lower()
    if backend not in SUPPORTED_BACKENDS:
        raise SettingsError(f"unsupported backend {backend!r}; expected one of {SUPPORTED_BACKENDS}")
    providers = tuple(
        p if isinstance(p, ProviderOverride) else ProviderOverride.from_mapping(p)
        for p in values.get("providers", ())
    )
    kwargs: Dict[str, Any] = {"backend": backend, "providers": providers}
    if "retry_max_attempts" in values:
        kwargs["retry_max_attempts"] = _as_int("retry_max_attempts", values["retry_max_attempts"])
    for key in ("retry_base_delay", "retry_max_delay", "dispatch_timeout_seconds"):
        if key in values:
            kwargs[key] = _as_float(key, values[key])
    if "max_workers" in values:
        kwargs["max_workers"] = _as_int("max_workers", values["max_workers"])
    if "cors_origins" in values:
        kwargs["cors_origins"] = _split_list("cors_origins", values["cors_origins"])
    if "plugin_entry_prefixes" in values:
        kwargs["plugin_entry_prefixes"] = _split_list("plugin_entry_prefixes", values["plugin_entry_prefixes"])
    for key in ("openai_model", "openai_api_key", "openai_base_url", "log_level", "log_file"):
        if values.get(key) is not None:
            kwargs[key] = str(values[key])
    settings = Settings(**kwargs)
    if settings.retry_max_attempts < 1:
        raise SettingsError("retry_max_attempts must be >= 1")
    if settings.max_workers < 1:
        raise SettingsError("max_workers must be >= 1")
    return settings


def load_settings(
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    config_file: Optional[str] = None,
) -> Settings:
    """Return merged settings: defaults <- env <- config file <- ``overrides``.

    ``overrides`` uses ``Settings`` field names. ``config_file`` takes
    precedence over ``ASSISTANT_CONFIG_FILE``.
    """
    values: Dict[str, Any] = {}
    values |= _env_values()
    path = config_file or os.getenv(CONFIG_FILE_ENV)
    if path:
        values |= _file_values(load_config_file(path))
    if overrides:
        values |= {k: v for k, v in overrides.items() if v is not None}
    return _build(values)


__all__ = [
    "CONFIG_FILE_ENV",
    "ProviderOverride",
    "Settings",
    "SettingsError",
    "load_config_file",
    "load_settings",
]
