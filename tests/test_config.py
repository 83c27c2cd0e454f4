import io
import json
import logging

import pytest

import selene.config
from selene.config import BUILTIN_DEFAULTS, config_section, load_config, merge_config
from selene.logging_config import setup_logging


def test_load_config_from_env_path(tmp_path, monkeypatch):
    path = tmp_path / "selene.yaml"
    path.write_text("helius:\n  cluster: devnet\nrelay:\n  port: 4040\n", encoding="utf-8")
    monkeypatch.setenv("SELENE_CONFIG", str(path))
    config = load_config()
    assert config_section(config, "helius")["cluster"] == "devnet"
    assert config_section(config, "relay")["port"] == 4040
    assert config_section(config, "helius")["timeout_sec"] == 10
    assert config_section(config, "relay")["host"] == "0.0.0.0"
    assert config_section(config, "logging") == {"level": "INFO"}


def test_default_config_is_shipped(monkeypatch):
    monkeypatch.delenv("SELENE_CONFIG", raising=False)
    config = load_config()
    assert config_section(config, "relay")["port"] == 3030


def test_missing_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_builtin_defaults_when_bundled_file_is_missing(tmp_path, monkeypatch):
    monkeypatch.delenv("SELENE_CONFIG", raising=False)
    monkeypatch.setattr(selene.config, "BUNDLED_CONFIG", tmp_path / "absent.yaml")
    config = load_config()
    assert config == BUILTIN_DEFAULTS
    config["relay"]["port"] = 1
    assert BUILTIN_DEFAULTS["relay"]["port"] == 3030


def test_missing_env_config_raises(tmp_path, monkeypatch):
    monkeypatch.setenv("SELENE_CONFIG", str(tmp_path / "nope.yaml"))
    with pytest.raises(FileNotFoundError):
        load_config()


def test_config_file_must_be_a_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_merge_config_overlays_nested_keys():
    merged = merge_config({"relay": {"host": "0.0.0.0", "port": 3030}}, {"relay": {"port": 4040}, "extra": 1})
    assert merged == {"relay": {"host": "0.0.0.0", "port": 4040}, "extra": 1}


def test_section_must_be_a_mapping():
    with pytest.raises(ValueError):
        config_section({"relay": ["not", "a", "mapping"]}, "relay")


def test_json_logs_at_info():
    stream = io.StringIO()
    setup_logging("INFO", stream=stream)
    try:
        logging.getLogger("selene.test").info("looking up name for account %s", "Trader111")
        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "looking up name for account Trader111"
        assert record["level"] == "info"
        assert record["logger"] == "selene.test"
    finally:
        logging.getLogger().handlers.clear()
