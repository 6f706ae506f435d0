"""Provider registry package public surface."""

from .errors import (
    ConflictError,
    EntryNotAllowedError,
    InvalidDescriptorError,
    NotFoundError,
    ProviderLoadError,
    RegistryError,
)
from .loader import ENTRY_POINT_GROUP, EntryLoader, build_provider, check_entry_allowed, load_entry
from .registry import ProviderLoader, ProviderRegistry, validate_descriptor
from .resolved_provider import ResolvedProvider

__all__ = [
    "ConflictError",
    "ENTRY_POINT_GROUP",
    "EntryLoader",
    "EntryNotAllowedError",
    "InvalidDescriptorError",
    "NotFoundError",
    "ProviderLoadError",
    "ProviderLoader",
    "ProviderRegistry",
    "RegistryError",
    "ResolvedProvider",
    "build_provider",
    "check_entry_allowed",
    "load_entry",
    "validate_descriptor",
]
