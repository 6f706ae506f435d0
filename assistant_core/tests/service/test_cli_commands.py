"""assistant-cli subcommands."""

from __future__ import annotations

import json
import logging

import pytest

from assistant_core.base.logging import BASE_LOGGER_NAME, get_logger
from assistant_core.config.settings import CONFIG_FILE_ENV
from assistant_core.service.cli import main
from assistant_core.service.cli.cli_parser import build_parser


@pytest.fixture(autouse=True)
def mock_env(monkeypatch):
    monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
    monkeypatch.setenv("ASSISTANT_BACKEND", "mock")
    monkeypatch.setenv("ASSISTANT_RETRY_BASE_DELAY", "0")
    # keep JSON log lines out of captured stderr
    monkeypatch.setattr(get_logger(BASE_LOGGER_NAME), "handlers", [logging.NullHandler()])


def test_parser_requires_subcommand():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_ask_prints_answer(capsys):
    assert main(["ask", "什么是机器学习"]) == 0
    out = capsys.readouterr().out
    assert "机器学习" in out
    assert "-- provider: smart-qa" in out


def test_ask_json(capsys):
    assert main(["ask", "什么是机器学习", "--references", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["success"] is True
    assert payload["data"]["metadata"]["sources"]


def test_ask_blank_question_fails(capsys):
    assert main(["ask", "  ", "--json"]) == 1
    payload = json.loads(capsys.readouterr().err)
    assert payload["error"]["kind"] == "invalid_request"


def test_generate_flashcards(capsys):
    assert main(["generate", "flashcards", "机器学习", "--difficulty", "beginner"]) == 0
    assert "-- provider: quiz-generator" in capsys.readouterr().out


def test_generate_rejects_unknown_type():
    with pytest.raises(SystemExit):
        main(["generate", "poem", "月亮"])


def test_plugins_list_json(capsys):
    assert main(["plugins", "list", "--json"]) == 0
    ids = [p["id"] for p in json.loads(capsys.readouterr().out)["plugins"]]
    assert ids == ["smart-qa", "article-writer", "quiz-generator"]


def test_plugins_disable_and_unknown(capsys):
    assert main(["plugins", "disable", "quiz-generator"]) == 0
    assert "disabled" in capsys.readouterr().out
    assert main(["plugins", "enable", "ghost"]) == 2
    assert "not_found" in capsys.readouterr().err


def test_plugins_remove(capsys):
    assert main(["plugins", "remove", "smart-qa", "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == {"ok": True, "removed": True}


def test_bad_config_file_exits_2(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text("backend: gemini\n", encoding="utf-8")
    assert main(["--config", str(path), "plugins", "list"]) == 2
    assert "configuration error" in capsys.readouterr().err


def test_serve_builds_app_and_runs_uvicorn(monkeypatch):
    from assistant_core.service.cli import cli_actions

    seen = {}

    def fake_run(app, host, port, **kwargs):
        seen.update(app=app, host=host, port=port)

    monkeypatch.setattr(cli_actions.uvicorn, "run", fake_run)
    assert main(["serve", "--port", "9001"]) == 0
    assert seen["port"] == 9001
    assert seen["app"].state.container.registry.get("smart-qa") is not None
    seen["app"].state.container.close()
