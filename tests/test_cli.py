"""Tests for CLI commands."""

import json
import logging
from pathlib import Path

import httpx
import pytest
import respx
from typer.testing import CliRunner

from headit.cli import app
from headit.db.kv_store import SQLiteStore
from headit.modules.rules import Rule, RuleStore

RULES_URL = "http://localhost:9096/rules"

runner = CliRunner()


@pytest.fixture
def data_dir(isolated_home: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Data directory for CLI runs; the headit logger is reset afterwards."""
    path = isolated_home / "data"
    monkeypatch.setenv("HEADIT_DATA_DIR", str(path))
    yield path
    logger = logging.getLogger("headit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def _stored_rules(data_dir: Path) -> list[Rule]:
    store = SQLiteStore(data_dir / "headit.db")
    try:
        return RuleStore(store).load()
    finally:
        store.close()


def _seed(data_dir: Path, rules: list[Rule]) -> None:
    store = SQLiteStore(data_dir / "headit.db")
    try:
        RuleStore(store).save(rules)
    finally:
        store.close()


class TestCLIBasics:
    def test_no_args_shows_help(self, data_dir):
        result = runner.invoke(app, [])
        assert "rules" in result.output
        assert "sync" in result.output

    def test_version(self, data_dir):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert result.output.startswith("headit ")

    def test_log_file_created(self, data_dir):
        runner.invoke(app, ["version"])
        assert (data_dir / "headit.log").exists()


class TestConfigCommand:
    def test_show_defaults(self, data_dir):
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "endpoint=http://localhost:9096" in result.output
        assert "default-enabled=false" in result.output

    def test_set_port(self, data_dir):
        result = runner.invoke(app, ["config", "set", "port", "9097"])
        assert result.exit_code == 0
        assert "9097" in result.output

        result = runner.invoke(app, ["config", "show"])
        assert "effective endpoint: http://localhost:9097" in result.output

    def test_set_default_enabled(self, data_dir):
        result = runner.invoke(app, ["config", "set", "default-enabled", "on"])
        assert result.exit_code == 0
        assert "true" in result.output

    def test_set_rejects_bad_boolean(self, data_dir):
        result = runner.invoke(app, ["config", "set", "default-enabled", "maybe"])
        assert result.exit_code == 1
        assert "Not a boolean" in result.output

    def test_set_unknown_setting(self, data_dir):
        result = runner.invoke(app, ["config", "set", "colour", "blue"])
        assert result.exit_code == 1

    def test_unknown_action(self, data_dir):
        result = runner.invoke(app, ["config", "frob"])
        assert result.exit_code == 1
        assert "Unknown action" in result.output

    def test_init(self, data_dir, isolated_home):
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 0
        assert (isolated_home / ".headit" / "config.yml").exists()


class TestRulesCommands:
    @respx.mock
    def test_add_syncs(self, data_dir):
        route = respx.post(RULES_URL).mock(return_value=httpx.Response(200))

        result = runner.invoke(
            app, ["rules", "add", "X-Test", "1", "--host", "example.com", "--enabled"]
        )

        assert result.exit_code == 0, result.output
        assert "Added rule #0" in result.output
        assert json.loads(route.calls.last.request.content) == [
            {"host": "example.com", "add_headers": {"X-Test": "1"}}
        ]
        assert _stored_rules(data_dir) == [
            Rule(host="example.com", key="X-Test", value="1", enabled=True)
        ]

    def test_add_disabled_by_default_skips_sync(self, data_dir):
        result = runner.invoke(app, ["rules", "add", "X-Test", "1", "--host", "example.com"])
        assert result.exit_code == 0
        assert "disabled" in result.output
        assert "Nothing to sync" in result.output

    def test_add_requires_scope(self, data_dir):
        result = runner.invoke(app, ["rules", "add", "X-Test", "1"])
        assert result.exit_code == 1
        assert "--host" in result.output

    @respx.mock
    def test_add_global(self, data_dir):
        route = respx.post(RULES_URL).mock(return_value=httpx.Response(200))
        result = runner.invoke(app, ["rules", "add", "X-All", "yes", "--global", "--enabled"])
        assert result.exit_code == 0
        assert json.loads(route.calls.last.request.content) == [
            {"host": "", "add_headers": {"X-All": "yes"}}
        ]

    def test_list(self, data_dir):
        _seed(data_dir, [Rule(host="example.com", key="X-Test", value="1", enabled=True)])
        result = runner.invoke(app, ["rules", "list"])
        assert result.exit_code == 0
        assert "X-Test" in result.output
        assert "example.com" in result.output

    def test_list_text_filtered(self, data_dir, sample_rules):
        _seed(data_dir, sample_rules)
        result = runner.invoke(app, ["rules", "list", "--host", "example.com", "--text"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["X-Test: 1", "#X-Off: no"]

    def test_list_empty(self, data_dir):
        result = runner.invoke(app, ["rules", "list"])
        assert "No rules stored" in result.output

    @respx.mock
    def test_remove_sends_forced_clear(self, data_dir):
        _seed(data_dir, [Rule(host="example.com", key="X-Test", value="1", enabled=True)])
        route = respx.post(RULES_URL).mock(return_value=httpx.Response(200))

        result = runner.invoke(app, ["rules", "remove", "0"])

        assert result.exit_code == 0
        assert json.loads(route.calls.last.request.content) == [
            {"host": "example.com", "add_headers": {}}
        ]
        assert _stored_rules(data_dir) == []

    def test_remove_bad_index(self, data_dir):
        result = runner.invoke(app, ["rules", "remove", "5"])
        assert result.exit_code == 1
        assert "No rule at index 5" in result.output

    @respx.mock
    def test_toggle_off(self, data_dir):
        _seed(data_dir, [Rule(host="example.com", key="X-Test", value="1", enabled=True)])
        respx.post(RULES_URL).mock(return_value=httpx.Response(200))

        result = runner.invoke(app, ["rules", "toggle", "0", "--off"])

        assert result.exit_code == 0
        assert "disabled" in result.output
        assert _stored_rules(data_dir)[0].enabled is False

    @respx.mock
    def test_set_value(self, data_dir):
        _seed(data_dir, [Rule(host="example.com", key="X-Test", value="1", enabled=True)])
        route = respx.post(RULES_URL).mock(return_value=httpx.Response(200))

        result = runner.invoke(app, ["rules", "set", "0", "value", "2"])

        assert result.exit_code == 0
        assert route.call_count == 1
        assert _stored_rules(data_dir)[0].value == "2"

    def test_set_bad_field(self, data_dir):
        _seed(data_dir, [Rule(host="example.com", key="X-Test", value="1")])
        result = runner.invoke(app, ["rules", "set", "0", "host", "x"])
        assert result.exit_code == 1

    @respx.mock
    def test_disable_all(self, data_dir, sample_rules):
        _seed(data_dir, sample_rules)
        respx.post(RULES_URL).mock(return_value=httpx.Response(200))

        result = runner.invoke(app, ["rules", "disable-all"])

        assert result.exit_code == 0
        assert "Disabled 3 rule(s)" in result.output
        assert not any(rule.enabled for rule in _stored_rules(data_dir))

    @respx.mock
    def test_import_and_export(self, data_dir, temp_dir):
        respx.post(RULES_URL).mock(return_value=httpx.Response(200))
        rules_file = temp_dir / "rules.txt"
        rules_file.write_text("X-A: 1\n#X-B: 2\n\nbadline\n")

        result = runner.invoke(app, ["rules", "import", str(rules_file), "--host", "h"])
        assert result.exit_code == 0, result.output
        assert "Imported 2 rule(s)" in result.output

        result = runner.invoke(app, ["rules", "export", "--host", "h"])
        assert result.output == "X-A: 1\n#X-B: 2\n"

    def test_import_missing_file(self, data_dir):
        result = runner.invoke(app, ["rules", "import", "nope.txt", "--host", "h"])
        assert result.exit_code == 1
        assert "file not found" in result.output


class TestSyncCommand:
    def test_nothing_to_sync(self, data_dir):
        result = runner.invoke(app, ["sync"])
        assert result.exit_code == 0
        assert "Nothing to sync" in result.output

    @respx.mock
    def test_force_sends_empty_list(self, data_dir):
        route = respx.post(RULES_URL).mock(return_value=httpx.Response(200))
        result = runner.invoke(app, ["sync", "--force"])
        assert result.exit_code == 0
        assert json.loads(route.calls.last.request.content) == []

    @respx.mock
    def test_endpoint_from_environment(self, data_dir, sample_rules, monkeypatch):
        _seed(data_dir, sample_rules)
        monkeypatch.setenv("HEADIT_ENDPOINT", "9300")
        route = respx.post("http://localhost:9300/rules").mock(return_value=httpx.Response(200))

        result = runner.invoke(app, ["sync"])

        assert result.exit_code == 0
        assert route.called

    @respx.mock
    def test_failure_exits_nonzero(self, data_dir, sample_rules):
        _seed(data_dir, sample_rules)
        respx.post(RULES_URL).mock(side_effect=httpx.ConnectError("Connection refused"))

        result = runner.invoke(app, ["sync"])

        assert result.exit_code == 1
        assert "sync failed" in result.output


class TestConsoleCommand:
    def test_requires_scope(self, data_dir, monkeypatch):
        monkeypatch.delenv("HEADIT_CONSOLE_ACTIVE", raising=False)
        result = runner.invoke(app, ["console"])
        assert result.exit_code == 1
        assert "--host" in result.output

    def test_global_opens_unscoped_session(self, data_dir, monkeypatch):
        opened = []

        class FakeConsoleApp:
            def __init__(self, session):
                opened.append(session)

            def run(self):
                pass

        monkeypatch.delenv("HEADIT_CONSOLE_ACTIVE", raising=False)
        monkeypatch.setattr("headit.console.ConsoleApp", FakeConsoleApp)

        result = runner.invoke(app, ["console", "--global"])

        assert result.exit_code == 0
        assert len(opened) == 1
        assert opened[0].host == ""
        assert opened[0].mode.scope.value == "global"
