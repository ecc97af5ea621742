"""Panel registry: the fixed, ordered set of dashboard panels."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .catalog import AppCatalog
from .config import get_directories
from .keys import ACTION_DESCRIPTIONS, KeyMap
from .shell import resolve_dir_path
from .types import ActivationMode, Entry, PanelId

# Focus cycles through panels in this order
PANEL_ORDER: list[PanelId] = [
    PanelId.NAVIGATION,
    PanelId.APPLICATIONS,
    PanelId.SHORTCUTS,
]

# Static per-panel activation policy
ACTIVATION_POLICY: dict[PanelId, ActivationMode] = {
    PanelId.NAVIGATION: ActivationMode.PREVIEW,
    PanelId.APPLICATIONS: ActivationMode.LAUNCH,
    PanelId.SHORTCUTS: ActivationMode.PREVIEW,
}

_TITLES: dict[PanelId, tuple[str, str]] = {
    # title, category used to derive preview titles
    PanelId.NAVIGATION: ("Directories", "Directory"),
    PanelId.APPLICATIONS: ("Applications", "Application"),
    PanelId.SHORTCUTS: ("Shortcuts", "Key"),
}


@dataclass
class Panel:
    """A logical section of the UI holding a selectable list."""

    id: PanelId
    title: str
    category: str
    mode: ActivationMode
    entries: list[Entry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)


def make_panel(panel_id: PanelId, entries: list[Entry]) -> Panel:
    title, category = _TITLES[panel_id]
    return Panel(
        id=panel_id,
        title=title,
        category=category,
        mode=ACTIVATION_POLICY[panel_id],
        entries=list(entries),
    )


def directory_entries(cfg: dict[str, Any]) -> list[Entry]:
    return [
        Entry(
            name=item["name"].strip(),
            description=item.get("description") or None,
            path=resolve_dir_path(item["path"].strip()),
        )
        for item in get_directories(cfg)
    ]


def shortcut_entries(keymap: KeyMap) -> list[Entry]:
    entries = []
    for action, description in ACTION_DESCRIPTIONS.items():
        keys = keymap.hint(action)
        if keys:
            entries.append(Entry(name=keys, description=description))
    return entries


def build_panels(catalog: AppCatalog, keymap: KeyMap) -> dict[PanelId, Panel]:
    """Build every panel once at startup, keyed and ordered by PANEL_ORDER."""
    entries = {
        PanelId.NAVIGATION: directory_entries(catalog.cfg),
        PanelId.APPLICATIONS: catalog.entries,
        PanelId.SHORTCUTS: shortcut_entries(keymap),
    }
    return {panel_id: make_panel(panel_id, entries[panel_id]) for panel_id in PANEL_ORDER}
