"""Pytest fixtures for termdash tests."""

import copy
import json

import pytest

from termdash import config
from termdash.catalog import AppCatalog
from termdash.keys import KeyMap
from termdash.panels import build_panels
from termdash.state import DashboardState

SAMPLE_CONFIG = {
    "applications": [
        {"name": "LazyGit", "command": "lazygit"},
        {"name": "Clock", "command": "tty-clock", "description": "A terminal clock widget"},
        {"name": "LazySSH", "command": "lazyssh"},
    ],
    "directories": [
        {"name": "Category: Widget", "path": "/srv/widget", "description": "Widget sources"},
        {"name": "Dev Projects", "path": "/home/you/projects"},
    ],
}


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the termdash config directory at a temp dir."""
    directory = tmp_path / "termdash"
    directory.mkdir()
    monkeypatch.setattr(config, "get_config_dir", lambda: directory)
    monkeypatch.delenv(config.CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv("TERMDASH_LAUNCH_IN_DIR", raising=False)
    return directory


@pytest.fixture
def config_path(config_dir):
    """A config.json holding SAMPLE_CONFIG."""
    path = config_dir / "config.json"
    path.write_text(json.dumps(SAMPLE_CONFIG, indent=2))
    return path


@pytest.fixture
def make_state(config_path):
    """Factory building a DashboardState from SAMPLE_CONFIG (or a replacement)."""

    def _make(cfg=None, keymap=None):
        if cfg is not None:
            config_path.write_text(json.dumps(cfg, indent=2))
        loaded = config.load_config(config_path)
        catalog = AppCatalog(config_path, loaded)
        return DashboardState.create(build_panels(catalog, keymap or KeyMap()), catalog)

    return _make


@pytest.fixture
def state(make_state):
    return make_state()


@pytest.fixture
def sample_config():
    return copy.deepcopy(SAMPLE_CONFIG)
