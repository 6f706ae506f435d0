"""Provider descriptor dataclass (single-class module).

Descriptors are owned by the provider registry. They are frozen: the registry
derives a new copy when the ``enabled`` flag or the configuration changes, so
any descriptor a caller holds is a stable snapshot.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional

from .request_kind import RequestKind


_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off"})


def _kinds(values: Iterable[Any]) -> FrozenSet[RequestKind]:
    return frozenset(RequestKind.parse(v) for v in values)


def _ids(values: Any) -> Iterable[str]:
    return (values,) if isinstance(values, str) else values


def parse_flag(name: str, value: Any) -> bool:
    """Accept a bool or a textual flag (``"false"``, ``"0"``, ``"yes"``...).

    Raises:
        ValueError: For any other value.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class ProviderDescriptor:
    """Metadata describing an installed capability provider.

    Attributes:
        id: Unique provider id (``smart-qa``, ``article-writer``...).
        display_name: Human-readable name shown in the dashboard.
        supported_kinds: Request kinds the provider can serve.
        supported_content_types: Content types served for
            ``content_generation`` requests.
        enabled: Whether the provider takes part in resolution.
        version: ``MAJOR.MINOR.PATCH`` version string.
        priority: Higher priorities are resolved first; ties keep
            registration order.
        description: Free-form description.
        author: Maintainer label.
        category: Plugin category (``ai-enhancement``, ``analytics``...).
        entry: Optional ``"module:factory"`` path or entry-point name used to
            load the implementation when none is supplied at registration.
        config: Provider-specific configuration.
        dependencies: Ids of providers that must already be registered
            before this one is accepted.
    """

    id: str
    display_name: str = ""
    supported_kinds: FrozenSet[RequestKind] = frozenset()
    supported_content_types: FrozenSet[str] = frozenset()
    enabled: bool = True
    version: str = "1.0.0"
    priority: int = 0
    description: str = ""
    author: str = ""
    category: str = "ai-enhancement"
    entry: Optional[str] = None
    config: Mapping[str, Any] = field(default_factory=dict)
    dependencies: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "supported_kinds", _kinds(self.supported_kinds))
        object.__setattr__(self, "supported_content_types", frozenset(str(c) for c in self.supported_content_types))
        object.__setattr__(self, "config", MappingProxyType(dict(self.config or {})))
        object.__setattr__(self, "dependencies", frozenset(str(d) for d in self.dependencies))
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)

    def supports(self, kind: RequestKind, content_type: Optional[str] = None) -> bool:
        """Return True when the provider can serve ``kind``/``content_type``."""
        if kind not in self.supported_kinds:
            return False
        return content_type is None or content_type in self.supported_content_types

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase wire representation used by the plugin UI."""
        return {
            "id": self.id,
            "displayName": self.display_name,
            "supportedKinds": sorted(k.value for k in self.supported_kinds),
            "supportedContentTypes": sorted(self.supported_content_types),
            "enabled": self.enabled,
            "version": self.version,
            "priority": self.priority,
            "description": self.description,
            "author": self.author,
            "category": self.category,
            "entry": self.entry,
            "config": dict(self.config),
            "dependencies": sorted(self.dependencies),
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProviderDescriptor":
        """Build a descriptor from camelCase or snake_case keys.

        Raises:
            ValueError: When ``id`` is missing, a kind is unknown or
                ``enabled`` is not a boolean flag.
        """

        def pick(camel: str, snake: str, default: Any = None) -> Any:
            if camel in data:
                return data[camel]
            return data.get(snake, default)

        provider_id = data.get("id")
        if not isinstance(provider_id, str) or not provider_id:
            raise ValueError("descriptor id is required")
        return cls(
            id=provider_id,
            display_name=str(pick("displayName", "display_name", "") or ""),
            supported_kinds=_kinds(pick("supportedKinds", "supported_kinds", ()) or ()),
            supported_content_types=frozenset(pick("supportedContentTypes", "supported_content_types", ()) or ()),
            enabled=parse_flag("enabled", data.get("enabled", True)),
            version=str(data.get("version", "1.0.0")),
            priority=int(data.get("priority", 0)),
            description=str(data.get("description", "")),
            author=str(data.get("author", "")),
            category=str(data.get("category", "ai-enhancement")),
            entry=data.get("entry"),
            config=dict(data.get("config") or {}),
            dependencies=frozenset(_ids(data.get("dependencies") or ())),
        )


__all__ = ["ProviderDescriptor", "parse_flag"]
