"""Owner of the application list and its persistence."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .config import save_config
from .types import Entry

logger = logging.getLogger(__name__)


def entry_from_app(item: dict[str, Any]) -> Entry:
    """Build an Entry from an ``applications`` config item."""
    return Entry(
        name=item["name"].strip(),
        description=item.get("description") or None,
        command=item["command"].strip(),
    )


class AppCatalog:
    """The single writer of the ``applications`` section.

    Appending updates the in-memory config and rewrites the whole file, so a
    reload always sees the same ordered list the dashboard shows.
    """

    def __init__(self, path: Path, cfg: dict[str, Any]):
        self.path = path
        self.cfg = cfg

    @property
    def entries(self) -> list[Entry]:
        return [entry_from_app(item) for item in self.cfg["applications"]]

    def add(self, name: str, command: str) -> Entry:
        """Append an application and persist the full config.

        The in-memory append is kept even when the write fails.

        Raises:
            ConfigError: If the config file cannot be written.
        """
        item = {"name": name.strip(), "command": command.strip()}
        self.cfg["applications"].append(item)
        entry = entry_from_app(item)
        save_config(self.path, self.cfg)
        logger.info("Added application %r (%s)", entry.name, entry.command)
        return entry
