"""Plugin management over the provider registry."""

from .manager import PluginManager

__all__ = ["PluginManager"]
