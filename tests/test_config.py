import json
from pathlib import Path

import pytest

from sensorcli.config import (
    Config,
    ConfigError,
    default_config,
    default_config_path,
    load_config,
    save_config,
)


def test_default_values():
    cfg = default_config()
    assert cfg.default_bus == 1
    assert cfg.default_timeout == 1000
    assert cfg.log_level == "info"
    assert cfg.output_format == "json"
    assert cfg.mock_mode is True


def test_to_dict_uses_file_keys():
    cfg = Config(default_bus=3)
    assert cfg.to_dict() == {
        "default_bus": 3,
        "default_timeout": 1000,
        "log_level": "info",
        "output_format": "json",
        "mock_mode": True,
    }


def test_load_missing_file_creates_default(tmp_path):
    path = tmp_path / "sub" / "config.json"
    cfg = load_config(path)
    assert cfg == default_config()
    assert path.exists()
    assert json.loads(path.read_text()) == default_config().to_dict()


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "config.json"
    cfg = Config(default_bus=2, default_timeout=250, log_level="debug",
                 output_format="csv", mock_mode=False)
    save_config(cfg, path)
    assert load_config(path) == cfg


def test_saved_file_is_indented(tmp_path):
    path = tmp_path / "config.json"
    save_config(default_config(), path)
    lines = path.read_text().splitlines()
    assert lines[0] == "{"
    assert lines[1].startswith('  "default_bus"')


def test_partial_file_keeps_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"log_level": "warn", "unknown": 5}))
    cfg = load_config(path)
    assert cfg.log_level == "warn"
    assert cfg.default_bus == default_config().default_bus
    assert cfg.mock_mode == default_config().mock_mode


def test_null_values_leave_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"default_bus": None}))
    assert load_config(path).default_bus == default_config().default_bus


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError):
        load_config(path)


@pytest.mark.parametrize(
    "payload",
    [
        {"default_bus": "one"},
        {"default_timeout": 1.5},
        {"mock_mode": 1},
        {"log_level": 3},
        {"default_bus": True},
        [1, 2],
    ],
)
def test_wrong_types_raise(tmp_path, payload):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(payload))
    with pytest.raises(ConfigError):
        load_config(path)


def test_default_path_under_home(monkeypatch, tmp_path):
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    assert default_config_path() == tmp_path / ".sensorcli" / "config.json"


def test_load_without_path_uses_home(monkeypatch, tmp_path):
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    cfg = load_config(None)
    assert cfg == default_config()
    assert (tmp_path / ".sensorcli" / "config.json").exists()


def test_load_empty_string_uses_home(monkeypatch, tmp_path):
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    target = tmp_path / ".sensorcli" / "config.json"
    save_config(Config(default_bus=4), target)
    assert load_config("").default_bus == 4


def test_save_into_file_as_directory_raises(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    with pytest.raises(ConfigError):
        save_config(default_config(), blocker / "config.json")