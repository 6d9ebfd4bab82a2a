"""Тесты для CLI (`map_scout/cli.py`) с использованием click.testing.CliRunner.
Проверяют команды `collect`, `config`, `--version`, а также обработку ошибок.
"""
import asyncio
import importlib
import json

import pytest
from click.testing import CliRunner

from map_scout.cli import cli
from map_scout.collector.models import Artifact
from map_scout.logger import init_logging
from map_scout.protocol import SCRIPT_PARSED

# `map_scout/__init__.py` re-exports `cli`, which shadows the submodule attribute.
cli_module = importlib.import_module("map_scout.cli")

ARTIFACTS = (
    Artifact(script_url="http://example.com/app.js", source_map_url="http://example.com/app.js.map", map={"version": 3}),
    Artifact(script_url="http://example.com/bad.js", error_message="Could not resolve map url: http://"),
)


@pytest.fixture(autouse=True)
def patch_collect(monkeypatch):
    """Патчим collect_source_maps: возвращаем готовые артефакты без сети."""
    seen = {}

    async def fake_collect(cfg, messages):
        seen["config"] = cfg
        seen["messages"] = messages
        return ARTIFACTS

    monkeypatch.setattr(cli_module, "collect_source_maps", fake_collect)
    return seen


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    init_logging()


@pytest.fixture()
def events_file(tmp_path):
    path = tmp_path / "devtoolslog.json"
    path.write_text(
        json.dumps([{"method": SCRIPT_PARSED, "params": {"url": "http://example.com/app.js", "sourceMapURL": "app.js.map"}}]),
        encoding="utf-8",
    )
    return path


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "MapScout" in result.output


def test_show_config(tmp_path):
    cfg_file = tmp_path / "config.json"
    cfg_file.write_text(json.dumps({"timeout": 3.0, "user_agent": "Agent/1.0"}), encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--log-level", "ERROR", "--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["user_agent"] == "Agent/1.0"
    assert data["timeout"] == 3.0


def test_collect_stdout(events_file, patch_collect):
    runner = CliRunner()
    result = runner.invoke(cli, ["--log-level", "ERROR", "collect", str(events_file)])
    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert output == [
        {"scriptUrl": "http://example.com/app.js", "sourceMapUrl": "http://example.com/app.js.map", "map": {"version": 3}},
        {"scriptUrl": "http://example.com/bad.js", "sourceMapUrl": None, "errorMessage": "Could not resolve map url: http://"},
    ]
    assert patch_collect["messages"][0]["method"] == SCRIPT_PARSED


def test_collect_json_file(events_file, tmp_path):
    out = tmp_path / "reports" / "maps.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["--log-level", "ERROR", "collect", str(events_file), "--json", str(out)])
    assert result.exit_code == 0
    assert out.exists()
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data[0]["scriptUrl"] == "http://example.com/app.js"
    assert "JSON report" in result.stdout


def test_collect_bad_events_file(tmp_path):
    bad = tmp_path / "log.json"
    bad.write_text("{oops", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["collect", str(bad)])
    assert result.exit_code == 1
    assert "Ошибка чтения лога" in result.output


def test_collect_timeout(monkeypatch, events_file):
    async def slow(cfg, messages):
        await asyncio.sleep(2)
        return ()

    monkeypatch.setattr(cli_module, "collect_source_maps", slow)

    runner = CliRunner()
    result = runner.invoke(cli, ["collect", str(events_file), "--collect-timeout", "0.1"])
    assert result.exit_code != 0
    assert "не завершён" in result.output


def test_bad_config(tmp_path, events_file):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("timeout: 0", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "collect", str(events_file)])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output
