"""Provider registry error hierarchy.

Each error carries a stable ``code`` used by the HTTP transport when it
renders registry failures.
"""

from __future__ import annotations


class RegistryError(Exception):
    """Base class for registry failures."""

    code = "registry_error"


class ConflictError(RegistryError):
    """A provider with the same id is already registered."""

    code = "conflict"


class NotFoundError(RegistryError, KeyError):
    """No provider is registered under the requested id."""

    code = "not_found"

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else self.code


class InvalidDescriptorError(RegistryError, ValueError):
    """The descriptor failed validation at registration time."""

    code = "invalid_descriptor"


class ProviderLoadError(RegistryError):
    """The provider implementation could not be loaded or initialized."""

    code = "provider_load"


class EntryNotAllowedError(RegistryError, ValueError):
    """The ``entry`` points outside the modules allowed for remote installs."""

    code = "entry_not_allowed"


__all__ = [
    "RegistryError",
    "ConflictError",
    "NotFoundError",
    "InvalidDescriptorError",
    "ProviderLoadError",
    "EntryNotAllowedError",
]
