"""FastAPI routes over a fixture-backed container."""

from __future__ import annotations

from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from assistant_core.backends.mock import MockBackend
from assistant_core.base.registry import loader
from assistant_core.di import build_container
from assistant_core.service.app import create_app


@pytest.fixture()
def client(container):
    return TestClient(create_app(container))


def test_chat_success(client):
    resp = client.post("/api/ai-assistant/chat", json={"question": "什么是机器学习", "includeReferences": True})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    data = body["data"]
    assert data["providerId"] == "smart-qa"
    assert "机器学习" in data["text"]
    assert data["metadata"]["sources"]
    assert data["generatedAt"]


def test_chat_missing_question_is_400(client):
    resp = client.post("/api/ai-assistant/chat", json={})
    assert resp.status_code == 400
    assert resp.json() == {
        "success": False,
        "error": {"kind": "invalid_request", "message": "field required", "retryable": False, "suggestedStatus": 400},
    }


def test_content_generation(client):
    resp = client.post(
        "/api/ai-assistant/content",
        json={"type": "quiz", "topic": "机器学习", "difficulty": "beginner", "additionalRequirements": "5道题"},
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["providerId"] == "quiz-generator"
    assert data["metadata"]["title"] == "小测验"
    assert data["metadata"]["difficulty"] == "beginner"


def test_unknown_content_type_is_400(client):
    resp = client.post("/api/ai-assistant/content", json={"type": "poem", "topic": "月亮"})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "unsupported content type"


def test_generic_dispatch(client):
    resp = client.post(
        "/api/ai-assistant/dispatch",
        json={"kind": "content_generation", "payload": {"text": "光合作用", "contentType": "outline"}},
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["providerId"] == "article-writer"


@pytest.mark.parametrize("body", [["x"], {"kind": "translate", "payload": "x"}, {"kind": "qa", "payload": {"text": ""}}])
def test_generic_dispatch_invalid(client, body):
    resp = client.post("/api/ai-assistant/dispatch", json=body)
    assert resp.status_code == 400
    assert resp.json()["error"]["kind"] == "invalid_request"


def test_no_provider_available_is_503(client):
    assert client.post("/api/plugins/smart-qa/disable").status_code == 200
    resp = client.post("/api/ai-assistant/chat", json={"question": "什么是机器学习"})
    assert resp.status_code == 503
    assert resp.json()["error"]["kind"] == "no_provider_available"


def test_backend_failure_falls_back_to_error_envelope(client, mock_backend):
    from assistant_core.base.errors import FailureSignal

    mock_backend.script_failures(FailureSignal.QUOTA_EXCEEDED, FailureSignal.QUOTA_EXCEEDED)
    resp = client.post("/api/ai-assistant/chat", json={"question": "什么是机器学习"})
    assert resp.status_code == 429
    assert resp.json()["error"]["retryable"] is True


def test_plugin_listing_and_search(client):
    plugins = client.get("/api/plugins").json()["plugins"]
    assert [p["id"] for p in plugins] == ["smart-qa", "article-writer", "quiz-generator"]
    assert plugins[0]["supportedKinds"] == ["qa"]
    learning = client.get("/api/plugins", params={"category": "learning"}).json()["plugins"]
    assert [p["id"] for p in learning] == ["quiz-generator"]
    found = client.get("/api/plugins/search", params={"q": "quiz"}).json()["plugins"]
    assert [p["id"] for p in found] == ["quiz-generator"]


def test_plugin_enable_disable_round_trip(client):
    assert client.post("/api/plugins/quiz-generator/disable").json()["plugin"]["enabled"] is False
    assert client.post("/api/plugins/quiz-generator/disable").json()["plugin"]["enabled"] is False
    assert client.post("/api/plugins/quiz-generator/enable").json()["plugin"]["enabled"] is True


def test_unknown_plugin_is_404(client):
    resp = client.post("/api/plugins/ghost/enable")
    assert resp.status_code == 404
    assert resp.json()["detail"]["code"] == "not_found"


def test_install_and_remove_plugin(client):
    descriptor = {
        "id": "qa-backup",
        "displayName": "Backup QA",
        "supportedKinds": ["qa"],
        "entry": "assistant_core.capabilities.smart_qa:create",
    }
    resp = client.post("/api/plugins", json=descriptor)
    assert resp.status_code == 201
    assert resp.json()["plugin"]["displayName"] == "Backup QA"
    assert client.post("/api/plugins", json=descriptor).status_code == 409
    assert client.delete("/api/plugins/qa-backup").json() == {"ok": True, "removed": True}
    assert client.delete("/api/plugins/qa-backup").json() == {"ok": True, "removed": False}


@pytest.mark.parametrize(
    "descriptor, code",
    [
        ({"id": "x", "supportedKinds": ["qa"], "entry": "assistant_core.capabilities.no_such:create"}, "provider_load"),
        ({"id": "x", "supportedKinds": ["qa"], "entry": "no_such_module:create"}, "entry_not_allowed"),
        ({"id": "x", "supportedKinds": ["translate"], "entry": "a:b"}, "invalid_descriptor"),
        ({"id": "bad id", "supportedKinds": ["qa"], "entry": "a:b"}, "invalid_descriptor"),
    ],
)
def test_install_errors_are_400(client, descriptor, code):
    resp = client.post("/api/plugins", json=descriptor)
    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == code


def test_configure_plugin(client):
    resp = client.put("/api/plugins/smart-qa/config", json={"config": {"default_style": "concise"}})
    assert resp.status_code == 200
    assert resp.json()["plugin"]["config"] == {"default_style": "concise"}
    assert client.put("/api/plugins/ghost/config", json={"config": {}}).status_code == 404


def test_health_and_metrics(client):
    health = client.get("/api/health").json()
    assert health["ok"] is True
    assert (health["providers"], health["enabled"], health["contentTypesVersion"]) == (3, 3, "1")
    client.post("/api/ai-assistant/chat", json={"question": "什么是机器学习"})
    summary = client.get("/api/metrics/summary").json()["summary"]
    assert summary["totals"]["succeeded"] == 1
    assert summary["providers"]["smart-qa"]["success"] == 1


def test_dispatch_with_list_content_type_is_400(client):
    resp = client.post("/api/ai-assistant/dispatch", json={"kind": "qa", "payload": {"text": "hi", "contentType": ["x"]}})
    assert resp.status_code == 400
    assert resp.json()["error"] == {
        "kind": "invalid_request",
        "message": "unsupported content type",
        "retryable": False,
        "suggestedStatus": 400,
    }


def test_qa_with_content_type_tag_is_served(client):
    resp = client.post(
        "/api/ai-assistant/dispatch",
        json={"kind": "qa", "payload": {"text": "什么是机器学习", "contentType": "article"}},
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["providerId"] == "smart-qa"


def test_install_outside_allowed_modules_imports_nothing(client, monkeypatch):
    imported = []
    monkeypatch.setattr(loader, "import_module", lambda name: imported.append(name))
    resp = client.post("/api/plugins", json={"id": "evil", "entry": "this:s", "supportedKinds": ["qa"]})
    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "entry_not_allowed"
    assert imported == []
    ids = [p["id"] for p in client.get("/api/plugins").json()["plugins"]]
    assert "evil" not in ids


def test_install_prefixes_come_from_settings(fast_settings):
    settings = replace(fast_settings, plugin_entry_prefixes=("assistant_core.capabilities.smart_qa",))
    container = build_container(settings, backend=MockBackend())
    client = TestClient(create_app(container))
    try:
        allowed = {"id": "qa-2", "supportedKinds": ["qa"], "entry": "assistant_core.capabilities.smart_qa:create"}
        denied = {
            "id": "writer-2",
            "supportedKinds": ["content_generation"],
            "supportedContentTypes": ["article"],
            "entry": "assistant_core.capabilities.content_writer:create",
        }
        assert client.post("/api/plugins", json=allowed).status_code == 201
        resp = client.post("/api/plugins", json=denied)
        assert resp.status_code == 400
        assert resp.json()["detail"]["code"] == "entry_not_allowed"
    finally:
        container.close()


def test_install_with_missing_dependency_is_400(client):
    descriptor = {
        "id": "qa-extra",
        "supportedKinds": ["qa"],
        "entry": "assistant_core.capabilities.smart_qa:create",
        "dependencies": ["ghost"],
    }
    resp = client.post("/api/plugins", json=descriptor)
    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "invalid_descriptor"
    descriptor["dependencies"] = ["smart-qa"]
    resp = client.post("/api/plugins", json=descriptor)
    assert resp.status_code == 201
    assert resp.json()["plugin"]["dependencies"] == ["smart-qa"]
