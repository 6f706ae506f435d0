"""Plugin manager delegates to the shared registry."""

from __future__ import annotations

import pytest

from assistant_core.base.models import ProviderDescriptor, RequestKind
from assistant_core.base.registry import ConflictError, NotFoundError, ProviderLoadError
from assistant_core.plugins import PluginManager


@pytest.fixture()
def manager(registry):
    return PluginManager(registry)


def test_install_list_remove(manager, registry, make_provider, make_descriptor):
    manager.install_provider(make_descriptor("a"), make_provider())
    assert [d.id for d in manager.list_providers()] == ["a"]
    assert registry.get("a") is manager.get_provider("a")
    assert manager.remove_provider("a") is True
    assert manager.remove_provider("a") is False
    assert manager.get_provider("a") is None


def test_enable_disable(manager, make_provider, make_descriptor):
    manager.install_provider(make_descriptor("a"), make_provider())
    assert manager.disable_provider("a").enabled is False
    assert manager.disable_provider("a").enabled is False
    assert manager.enable_provider("a").enabled is True


def test_registry_errors_propagate(manager, make_provider, make_descriptor):
    manager.install_provider(make_descriptor("a"), make_provider())
    with pytest.raises(ConflictError):
        manager.install_provider(make_descriptor("a"), make_provider())
    with pytest.raises(NotFoundError):
        manager.enable_provider("ghost")
    with pytest.raises(ProviderLoadError):
        manager.install_provider(make_descriptor("b"))


def test_install_from_wire_descriptor(container):
    descriptor = ProviderDescriptor.from_mapping(
        {
            "id": "qa-backup",
            "displayName": "Backup QA",
            "supportedKinds": ["qa"],
            "priority": 1,
            "entry": "assistant_core.capabilities.smart_qa:create",
        }
    )
    container.plugins.install_provider(descriptor)
    ids = [c.id for c in container.registry.resolve(RequestKind.QA)]
    assert ids == ["smart-qa", "qa-backup"]


def test_search_configure_and_category(container):
    plugins = container.plugins
    assert [d.id for d in plugins.search_providers("quiz")] == ["quiz-generator"]
    assert [d.id for d in plugins.providers_by_category("content")] == ["article-writer"]
    updated = plugins.configure_provider("smart-qa", {"default_style": "concise"})
    assert updated.config["default_style"] == "concise"


def test_removed_builtin_can_be_reinstalled(container):
    plugins = container.plugins
    original = plugins.get_provider("quiz-generator")
    assert plugins.remove_provider("quiz-generator")
    plugins.install_provider(original)
    assert plugins.get_provider("quiz-generator").to_dict() == original.to_dict()
