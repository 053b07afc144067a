"""Config file location, defaults and round trip."""

import json

from godist.core import config


def test_defaults_when_missing(isolated_config):
    cfg = config.load_cfg()
    assert cfg == config.DEFAULT_CFG
    assert config.source_url(cfg) == config.DEFAULT_URL
    assert config.timeout(cfg) == config.DEFAULT_TIMEOUT


def test_save_then_load_round_trip(isolated_config):
    config.save_cfg({"source_url": "https://go.dev/dl/", "timeout": 5})
    assert isolated_config.exists()
    assert not isolated_config.with_suffix(".tmp").exists()

    cfg = config.load_cfg()
    assert cfg["schema"] == config.SCHEMA_VERSION
    assert config.source_url(cfg) == "https://go.dev/dl/"
    assert config.timeout(cfg) == 5.0
    assert cfg["chunk_size"] == config.DEFAULT_CHUNK_SIZE


def test_corrupt_file_is_moved_aside(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text("{not json", encoding="utf-8")
    assert config.load_cfg() == config.DEFAULT_CFG
    assert not isolated_config.exists()
    assert isolated_config.with_suffix(".bad.json").exists()


def test_non_object_config_is_ignored(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text(json.dumps([1, 2]), encoding="utf-8")
    assert config.load_cfg() == config.DEFAULT_CFG


def test_bad_timeout_falls_back():
    assert config.timeout({"timeout": "soon"}) == config.DEFAULT_TIMEOUT
    assert config.timeout({"timeout": -1}) == config.DEFAULT_TIMEOUT


def test_config_dir_env_override(tmp_path, monkeypatch):
    monkeypatch.delenv("GODIST_CONFIG", raising=False)
    monkeypatch.setenv("GODIST_DIR", str(tmp_path / "godist"))
    assert config.config_path() == (tmp_path / "godist").resolve() / "config.json"
