"""Configuration layer.

Merge order (later wins):
    1. Built-in defaults (``config.defaults``)
    2. Environment variables (``ASSISTANT_*``, ``OPENAI_*``)
    3. Optional JSON/YAML file pointed to by ``ASSISTANT_CONFIG_FILE``
    4. In-code overrides passed to ``load_settings``
"""

from .settings import ProviderOverride, Settings, SettingsError, load_settings

__all__ = ["ProviderOverride", "Settings", "SettingsError", "load_settings"]
