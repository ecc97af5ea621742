"""Configuration management for termdash.

The config file lives at ``$XDG_CONFIG_HOME/termdash/config.json`` unless
``--config`` or ``$TERMDASH_CONFIG`` point elsewhere. Paths ending in
``.yaml`` or ``.yml`` are read with PyYAML's safe loader and written back as
YAML; everything else is JSON.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TERMDASH_CONFIG"

DEFAULT_CONFIG: dict[str, Any] = {
    "applications": [
        {"name": "LazyGit", "command": "lazygit"},
        {"name": "LazyDocker", "command": "lazydocker"},
        {"name": "LazySSH", "command": "lazyssh"},
    ],
}

# Used when the config has no "directories" section; never written back.
DEFAULT_DIRECTORIES: list[dict[str, str]] = [
    {"name": "Home", "path": "~"},
    {"name": "Working Directory", "path": "."},
]


class ConfigError(Exception):
    """The config file could not be read, parsed or written."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


def get_config_dir() -> Path:
    """Get the termdash config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "termdash"


def get_config_path(override: str | os.PathLike | None = None) -> Path:
    """Resolve the config file path from an explicit override, env var or default."""
    if override:
        return Path(override).expanduser()
    env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if env_path:
        return Path(env_path).expanduser()
    return get_config_dir() / "config.json"


def get_log_path() -> Path:
    """Default log file location."""
    return get_config_dir() / "termdash.log"


def _is_yaml_path(path: Path) -> bool:
    return path.suffix.lower() in (".yaml", ".yml")


def _validate_items(path: Path, cfg: dict[str, Any], section: str, required: tuple[str, ...]) -> None:
    items = cfg.get(section)
    if not isinstance(items, list):
        raise ConfigError(path, f"'{section}' must be a list")
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise ConfigError(path, f"{section}[{i}] must be a mapping")
        for key in required:
            value = item.get(key)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(path, f"{section}[{i}] is missing '{key}'")
        description = item.get("description")
        if description is not None and not isinstance(description, str):
            raise ConfigError(path, f"{section}[{i}] 'description' must be a string")


def validate_config(path: Path, data: Any) -> dict[str, Any]:
    """Check the structure of a parsed config and return it.

    Raises:
        ConfigError: If a required section is missing or malformed.
    """
    if not isinstance(data, dict):
        raise ConfigError(path, "top level must be a mapping")
    if "applications" not in data:
        raise ConfigError(path, "missing 'applications'")
    _validate_items(path, data, "applications", ("name", "command"))
    if "directories" in data:
        _validate_items(path, data, "directories", ("name", "path"))
    keybindings = data.get("keybindings")
    if keybindings is not None and not isinstance(keybindings, dict):
        raise ConfigError(path, "'keybindings' must be a mapping")
    for action, names in (keybindings or {}).items():
        if isinstance(names, str):
            continue
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise ConfigError(path, f"keybindings.{action} must be a key name or a list of key names")
    pause = data.get("pause_on_failure")
    if pause is not None and not isinstance(pause, bool):
        raise ConfigError(path, "'pause_on_failure' must be true or false")
    return data


def load_config(path: Path) -> dict[str, Any]:
    """Load and validate the config file.

    Raises:
        ConfigError: If the file is unreadable or malformed.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f) if _is_yaml_path(path) else json.load(f)
    except OSError as e:
        raise ConfigError(path, f"cannot read: {e.strerror or e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigError(path, f"cannot parse: {e}") from e
    return validate_config(path, data)


def save_config(path: Path, cfg: dict[str, Any]) -> None:
    """Write the full config file (never an incremental patch).

    Raises:
        ConfigError: If the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            if _is_yaml_path(path):
                yaml.dump(cfg, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
            else:
                json.dump(cfg, f, indent=2, ensure_ascii=False)
                f.write("\n")
    except OSError as e:
        raise ConfigError(path, f"cannot write: {e.strerror or e}") from e
    logger.debug("Wrote config %s", path)


def ensure_config(path: Path) -> dict[str, Any]:
    """Load the config, creating and persisting the default one when absent."""
    if not path.exists():
        logger.info("No config at %s, creating default", path)
        save_config(path, copy.deepcopy(DEFAULT_CONFIG))
    return load_config(path)


def get_directories(cfg: dict[str, Any]) -> list[dict[str, str]]:
    """Directory bookmarks from the config, or the runtime defaults."""
    if "directories" in cfg:
        return list(cfg["directories"])
    return copy.deepcopy(DEFAULT_DIRECTORIES)


def get_pause_on_failure(cfg: dict[str, Any]) -> bool:
    return bool(cfg.get("pause_on_failure", True))
