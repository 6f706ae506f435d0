"""Generation backends (opaque model clients) used by the built-in capabilities."""

from .mock import MockBackend, load_fixture_catalog

__all__ = ["MockBackend", "load_fixture_catalog"]
