"""CLI commands via click's CliRunner."""

import json

import pytest
from click.testing import CliRunner

from cloudkv import AsyncKVClient
from cloudkv.cli import main as cli_main

from conftest import APP_ID, APP_KEY, USER


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(cli_main, "CONFIG_FILE", path)
    return path


@pytest.fixture
def runner(server, config_file, monkeypatch):
    monkeypatch.setattr(
        cli_main,
        "_get_client",
        lambda: AsyncKVClient(app_id=APP_ID, app_key=APP_KEY, user_name=USER, transport=server.transport),
    )
    return CliRunner()


def test_config_set_show_clear(config_file):
    runner = CliRunner()
    result = runner.invoke(cli_main.main, ["config", "set", "--app-id", "a1", "--app-key", "secretkey",
                                           "--user", "bob", "--base-url", "https://kv.example"])
    assert result.exit_code == 0
    saved = json.loads(config_file.read_text())
    assert saved == {"app_id": "a1", "app_key": "secretkey", "user_name": "bob", "base_url": "https://kv.example"}

    result = runner.invoke(cli_main.main, ["config", "show"])
    assert result.exit_code == 0
    assert "bob" in result.output
    assert "secretkey" not in result.output

    result = runner.invoke(cli_main.main, ["config", "clear"])
    assert result.exit_code == 0
    assert json.loads(config_file.read_text()) == {}


def test_unconfigured_get_exits(config_file):
    result = CliRunner().invoke(cli_main.main, ["get", "k"])
    assert result.exit_code == 1
    assert "Not configured" in result.output


def test_set_then_get_json(runner, server):
    result = runner.invoke(cli_main.main, ["set", "n", "42", "--type", "int"])
    assert result.exit_code == 0, result.output
    assert server.store[(USER, "n")]["int32Value"] == 42

    result = runner.invoke(cli_main.main, ["get", "n", "--type", "int", "--json"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {"key": "n", "value": 42}


def test_set_array_and_bytes(runner, server):
    result = runner.invoke(cli_main.main, ["set", "flags", "true", "no", "--type", "boolean", "--array"])
    assert result.exit_code == 0, result.output
    assert server.store[(USER, "flags")]["booleanValues"] == [True, False]

    result = runner.invoke(cli_main.main, ["set", "blob", "AAEC", "--type", "bytes"])
    assert result.exit_code == 0, result.output
    result = runner.invoke(cli_main.main, ["get", "blob", "--type", "bytes", "--json"])
    assert json.loads(result.output)["value"] == "AAEC"


def test_get_absent_exits_nonzero(runner):
    result = runner.invoke(cli_main.main, ["get", "nothing", "--type", "string"])
    assert result.exit_code == 1
    assert "absent" in result.output


def test_set_rejects_bad_values(runner, server):
    assert runner.invoke(cli_main.main, ["set", "n", "abc", "--type", "int"]).exit_code == 2
    assert runner.invoke(cli_main.main, ["set", "n", "1", "2", "--type", "int"]).exit_code == 2
    assert runner.invoke(cli_main.main, ["set", "b", "AAEC", "--type", "bytes", "--array"]).exit_code == 2
    assert server.store == {}


def test_delete(runner, server):
    runner.invoke(cli_main.main, ["set", "s", "hello"])
    result = runner.invoke(cli_main.main, ["delete", "s"])
    assert result.exit_code == 0
    assert server.store == {}
