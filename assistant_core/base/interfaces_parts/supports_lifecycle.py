"""SupportsLifecycle Protocol (single-class module).

Optional hooks the registry calls on register / unregister and when the
``enabled`` flag changes. Each hook is looked up on its own, so a provider may
define any subset of them.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class SupportsLifecycle(Protocol):
    def initialize(self, config: Mapping[str, Any]) -> None:  # pragma: no cover - interface
        """Prepare the provider; raising rolls back the registration."""
        ...

    def shutdown(self) -> None:  # pragma: no cover - interface
        ...

    def on_enable(self) -> None:  # pragma: no cover - interface
        """Called after a disabled provider is enabled; failures are only logged."""
        ...

    def on_disable(self) -> None:  # pragma: no cover - interface
        """Called after an enabled provider is disabled; failures are only logged."""
        ...
