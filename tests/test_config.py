"""Tests for configuration loading."""

import logging
from pathlib import Path

import yaml

from headit.config import (
    DEFAULT_SYNC_TIMEOUT,
    create_global_config,
    get_config,
    get_data_dir,
    get_db_path,
    get_debounce_interval,
    get_endpoint_override,
    get_log_file,
    get_sync_timeout,
    is_debug_enabled_env,
    load_env_file,
)
from headit.utils.log_setup import LOG_FILE_BACKUPS, LOG_FILE_MAX_BYTES, setup_logging


def _write_yaml(home: Path, data: dict) -> None:
    config_dir = home / ".headit"
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "config.yml").write_text(yaml.safe_dump(data))


class TestEnvLoading:
    def test_load_env_file(self, temp_dir: Path):
        env_path = temp_dir / ".env"
        env_path.write_text('# comment\nHEADIT_ENDPOINT="localhost:9100"\nBROKEN\nHEADIT_DEBUG=1\n')
        assert load_env_file(env_path) == {
            "HEADIT_ENDPOINT": "localhost:9100",
            "HEADIT_DEBUG": "1",
        }

    def test_load_env_file_missing(self, temp_dir: Path):
        assert load_env_file(temp_dir / "missing.env") == {}

    def test_data_dir_default_and_override(self, isolated_home, monkeypatch):
        assert get_data_dir() == isolated_home / ".headit"
        monkeypatch.setenv("HEADIT_DATA_DIR", str(isolated_home / "elsewhere"))
        assert get_data_dir() == isolated_home / "elsewhere"
        assert get_db_path() == isolated_home / "elsewhere" / "headit.db"


class TestConfigPriority:
    def test_default(self, isolated_home):
        assert get_config("HEADIT_ENDPOINT", "fallback") == "fallback"

    def test_yaml_nested_path(self, isolated_home):
        _write_yaml(isolated_home, {"sync": {"endpoint": "http://yaml:1"}})
        assert get_config("HEADIT_ENDPOINT") == "http://yaml:1"

    def test_env_file_beats_yaml(self, isolated_home):
        _write_yaml(isolated_home, {"sync": {"endpoint": "http://yaml:1"}})
        (isolated_home / ".headit" / ".env").write_text("HEADIT_ENDPOINT=http://dotenv:2\n")
        assert get_config("HEADIT_ENDPOINT") == "http://dotenv:2"

    def test_environment_beats_everything(self, isolated_home, monkeypatch):
        _write_yaml(isolated_home, {"sync": {"endpoint": "http://yaml:1"}})
        (isolated_home / ".headit" / ".env").write_text("HEADIT_ENDPOINT=http://dotenv:2\n")
        monkeypatch.setenv("HEADIT_ENDPOINT", "http://env:3")
        assert get_config("HEADIT_ENDPOINT") == "http://env:3"
        assert get_endpoint_override() == "http://env:3"

    def test_non_mapping_yaml_ignored(self, isolated_home):
        config_dir = isolated_home / ".headit"
        config_dir.mkdir()
        (config_dir / "config.yml").write_text("- just\n- a list\n")
        assert get_config("HEADIT_ENDPOINT") is None


class TestGetters:
    def test_defaults(self, isolated_home):
        assert get_debounce_interval() == 0.5
        assert get_sync_timeout() == DEFAULT_SYNC_TIMEOUT
        assert get_endpoint_override() is None
        assert get_log_file() == isolated_home / ".headit" / "headit.log"
        assert is_debug_enabled_env() is False

    def test_debounce_in_milliseconds(self, isolated_home, monkeypatch):
        monkeypatch.setenv("HEADIT_DEBOUNCE_MS", "250")
        assert get_debounce_interval() == 0.25

    def test_invalid_numbers_fall_back(self, isolated_home, monkeypatch):
        monkeypatch.setenv("HEADIT_DEBOUNCE_MS", "soon")
        monkeypatch.setenv("HEADIT_SYNC_TIMEOUT", "-3")
        assert get_debounce_interval() == 0.5
        assert get_sync_timeout() == DEFAULT_SYNC_TIMEOUT

    def test_debug_from_yaml_bool(self, isolated_home):
        _write_yaml(isolated_home, {"log": {"debug": True}})
        assert is_debug_enabled_env() is True

    def test_log_file_from_env(self, isolated_home, monkeypatch):
        monkeypatch.setenv("HEADIT_LOG_FILE", str(isolated_home / "logs" / "h.log"))
        assert get_log_file() == isolated_home / "logs" / "h.log"


class TestGlobalSetup:
    def test_create_global_config(self, isolated_home):
        path = create_global_config()
        assert path == isolated_home / ".headit" / "config.yml"
        data = yaml.safe_load(path.read_text())
        assert data["sync"]["debounce_ms"] == 500
        assert data["sync"]["timeout"] == DEFAULT_SYNC_TIMEOUT
        assert "endpoint" not in data["sync"]
        assert get_debounce_interval() == 0.5

    def test_create_global_config_keeps_existing(self, isolated_home):
        _write_yaml(isolated_home, {"sync": {"debounce_ms": 100}})
        create_global_config()
        assert get_debounce_interval() == 0.1


class TestLogging:
    def test_rotating_file_handler(self, temp_dir: Path):
        log_file = temp_dir / "logs" / "headit.log"
        logger = setup_logging(log_file)
        try:
            file_handlers = [h for h in logger.handlers if hasattr(h, "maxBytes")]
            assert len(file_handlers) == 1
            assert file_handlers[0].maxBytes == LOG_FILE_MAX_BYTES
            assert file_handlers[0].backupCount == LOG_FILE_BACKUPS

            logging.getLogger("headit.modules.sync").info("sync sent")
            file_handlers[0].flush()
            assert "sync sent" in log_file.read_text()
        finally:
            _reset_logger(logger)

    def test_repeat_setup_replaces_handlers(self, temp_dir: Path):
        setup_logging(temp_dir / "a.log")
        logger = setup_logging(temp_dir / "b.log", debug=True)
        try:
            assert len(logger.handlers) == 2
            assert logger.level == logging.DEBUG
        finally:
            _reset_logger(logger)


def _reset_logger(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
