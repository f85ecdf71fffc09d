"""Loading and saving of the persistent CLI configuration."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Optional, Union

PathLike = Union[str, "os.PathLike[str]"]


class ConfigError(Exception):
    """Raised when the configuration file cannot be read, parsed or written."""


@dataclass
class Config:
    """Global settings stored in the configuration file."""

    default_bus: int = 1
    default_timeout: int = 1000  # milliseconds
    log_level: str = "info"
    output_format: str = "json"
    mock_mode: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Return the settings as a JSON-ready mapping."""
        return asdict(self)


_FIELD_TYPES = {f.name: f.type for f in fields(Config)}


def default_config() -> Config:
    """Return a configuration holding the built-in defaults."""
    return Config()


def default_config_path() -> Path:
    """Return the location of the configuration file in the user's home."""
    return Path.home() / ".sensorcli" / "config.json"


def _check_value(key: str, value: Any) -> None:
    expected = _FIELD_TYPES[key]
    if expected in (int, "int"):
        ok = isinstance(value, int) and not isinstance(value, bool)
    elif expected in (bool, "bool"):
        ok = isinstance(value, bool)
    else:
        ok = isinstance(value, str)
    if not ok:
        raise ConfigError(
            f"failed to parse config file: invalid value for {key!r}: {value!r}"
        )


def _apply(config: Config, data: Any) -> None:
    if not isinstance(data, dict):
        raise ConfigError("failed to parse config file: top level must be an object")
    for key, value in data.items():
        if key not in _FIELD_TYPES or value is None:
            continue
        _check_value(key, value)
        setattr(config, key, value)


def load_config(config_path: Optional[PathLike] = None) -> Config:
    """Load the configuration, creating a default file when none exists."""
    config = default_config()

    if not config_path:
        try:
            path = default_config_path()
        except (RuntimeError, KeyError):
            return config
    else:
        path = Path(config_path)

    if not path.exists():
        try:
            save_config(config, path)
        except ConfigError as exc:
            raise ConfigError(f"failed to create default config file: {exc}") from exc
        return config

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"failed to read config file: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"failed to parse config file: {exc}") from exc

    _apply(config, data)
    return config


def save_config(config: Config, config_path: PathLike) -> None:
    """Write the configuration as indented JSON, creating directories as needed."""
    path = Path(config_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigError(f"failed to create config directory: {exc}") from exc

    text = json.dumps(config.to_dict(), indent=2, ensure_ascii=False)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"failed to write config file: {exc}") from exc