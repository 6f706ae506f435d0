"""Provider implementation loading.

Purpose
-------
Turn a descriptor's ``entry`` into a ``CapabilityProvider`` instance when a
provider is installed without an explicit implementation.

Entry formats
-------------
- ``"package.module:attr"`` (``attr`` may be dotted) imported with
  ``importlib.import_module``.
- A bare name looked up in the ``assistant_core.capabilities`` entry point
  group, e.g. in a plugin's ``pyproject.toml``::

      [project.entry-points."assistant_core.capabilities"]
      my-writer = "my_pkg.writer:create"

Remote installs (the HTTP plugin API) go through :func:`check_entry_allowed`
first; in-process registration may name any module.

The loaded object is either a provider instance (anything with ``invoke``
that is not a class) or a factory called as ``factory(descriptor, backend)``.
"""

from __future__ import annotations

from importlib import import_module, metadata
from typing import Any, Iterable, Optional

from ..interfaces import CapabilityProvider, GenerationBackend
from ..models import ProviderDescriptor
from .errors import EntryNotAllowedError, ProviderLoadError

ENTRY_POINT_GROUP = "assistant_core.capabilities"


def load_entry(entry: str) -> Any:
    """Import the object referenced by ``entry``.

    Raises:
        ProviderLoadError: When the module, attribute or entry point is missing.
    """
    if ":" in entry:
        module_name, _, attr_path = entry.partition(":")
        try:
            target: Any = import_module(module_name)
        except ImportError as exc:
            raise ProviderLoadError(f"cannot import provider module '{module_name}': {exc}") from exc
        for part in attr_path.split("."):
            try:
                target = getattr(target, part)
            except AttributeError as exc:
                raise ProviderLoadError(f"'{module_name}' has no attribute '{attr_path}'") from exc
        return target
    for ep in metadata.entry_points(group=ENTRY_POINT_GROUP):
        if ep.name == entry:
            try:
                return ep.load()
            except ImportError as exc:
                raise ProviderLoadError(f"cannot load entry point '{entry}': {exc}") from exc
    raise ProviderLoadError(f"no provider entry point named '{entry}' in group '{ENTRY_POINT_GROUP}'")


def check_entry_allowed(entry: Optional[str], prefixes: Iterable[str]) -> None:
    """Reject an ``entry`` outside ``prefixes`` without importing anything.

    ``"module:attr"`` entries must name a module equal to, or nested under, one
    of ``prefixes``. Bare names must be registered in the
    ``assistant_core.capabilities`` entry point group.

    Raises:
        EntryNotAllowedError: The entry is missing or not allowed.
    """
    if not entry:
        raise EntryNotAllowedError("an entry is required")
    if ":" in entry:
        module_name = entry.partition(":")[0]
        if any(module_name == p or module_name.startswith(p + ".") for p in prefixes):
            return
        raise EntryNotAllowedError(f"module '{module_name}' is not in the allowed plugin modules")
    if any(ep.name == entry for ep in metadata.entry_points(group=ENTRY_POINT_GROUP)):
        return
    raise EntryNotAllowedError(f"no provider entry point named '{entry}' in group '{ENTRY_POINT_GROUP}'")


def build_provider(
    target: Any,
    descriptor: ProviderDescriptor,
    backend: Optional[GenerationBackend] = None,
) -> CapabilityProvider:
    """Return a provider instance from a loaded ``target``."""
    if not isinstance(target, type) and hasattr(target, "invoke"):
        provider = target
    elif callable(target):
        try:
            provider = target(descriptor, backend)
        except Exception as exc:
            raise ProviderLoadError(f"factory for '{descriptor.id}' failed: {exc}") from exc
    else:
        raise ProviderLoadError(f"entry for '{descriptor.id}' is neither a provider nor a factory")
    if not callable(getattr(provider, "invoke", None)):
        raise ProviderLoadError(f"object built for '{descriptor.id}' does not implement invoke()")
    return provider


class EntryLoader:
    """Default registry loader: ``entry`` string -> provider instance."""

    def __init__(self, backend: Optional[GenerationBackend] = None) -> None:
        self._backend = backend

    def __call__(self, descriptor: ProviderDescriptor) -> CapabilityProvider:
        if not descriptor.entry:
            raise ProviderLoadError(f"provider '{descriptor.id}' has no implementation and no entry")
        return build_provider(load_entry(descriptor.entry), descriptor, self._backend)


__all__ = ["ENTRY_POINT_GROUP", "EntryLoader", "build_provider", "check_entry_allowed", "load_entry"]
