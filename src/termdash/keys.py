"""Keyboard input helpers for termdash.

Raw keys read with readchar are resolved into logical actions through a
KeyMap. Bindings are configuration: the defaults below can be overridden per
action from the ``keybindings`` section of the config file.
"""

from __future__ import annotations

from typing import Any

import readchar

from .types import Action, UiMode

# Key names accepted in the config file
KEY_NAMES: dict[str, str] = {
    "enter": readchar.key.ENTER,
    "tab": readchar.key.TAB,
    "esc": readchar.key.ESC,
    "up": readchar.key.UP,
    "down": readchar.key.DOWN,
    "backspace": readchar.key.BACKSPACE,
    "space": " ",
    "ctrl+c": readchar.key.CTRL_C,
}

_DISPLAY_NAMES: dict[str, str] = {
    "enter": "Enter",
    "tab": "Tab",
    "esc": "Esc",
    "up": "↑",
    "down": "↓",
    "backspace": "Backspace",
    "space": "Space",
    "ctrl+c": "Ctrl+C",
}

# Browsing-mode bindings, in the order they are listed in the Shortcuts panel
DEFAULT_BINDINGS: dict[Action, list[str]] = {
    Action.ACTIVATE: ["enter", "space"],
    Action.CYCLE: ["tab"],
    Action.UP: ["up", "k"],
    Action.DOWN: ["down", "j"],
    Action.ADD: ["a"],
    Action.OPEN_SHELL: ["o"],
    Action.REFRESH: ["r"],
    Action.CANCEL: ["esc"],
    Action.QUIT: ["q", "ctrl+c"],
}

ACTION_DESCRIPTIONS: dict[Action, str] = {
    Action.ACTIVATE: "Preview the highlighted entry, or launch it from Applications",
    Action.CYCLE: "Move focus to the next panel",
    Action.UP: "Move the cursor up",
    Action.DOWN: "Move the cursor down",
    Action.ADD: "Add a new application (Applications panel)",
    Action.OPEN_SHELL: "Open a shell in the highlighted directory (Navigation panel)",
    Action.REFRESH: "Refresh the dashboard",
    Action.CANCEL: "Clear the preview",
    Action.QUIT: "Quit termdash",
}


def is_enter(key: str) -> bool:
    """Check if key is Enter/Return."""
    return key in (readchar.key.ENTER, "\r", "\n")


def is_escape(key: str) -> bool:
    """Check if key is Escape (handles terminal variations)."""
    return key in (readchar.key.ESC, "\x1b", "\x1b\x1b")


def is_backspace(key: str) -> bool:
    """Check if key is backspace (handles terminal variations)."""
    return key in (readchar.key.BACKSPACE, "\x7f", "\b")


def is_tab(key: str) -> bool:
    return key in (readchar.key.TAB, "\t")


def is_ctrl_c(key: str) -> bool:
    return key in (readchar.key.CTRL_C, "\x03")


def is_printable(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def key_from_name(name: str) -> str:
    """Translate a configured key name ("enter", "ctrl+c", "x") into the raw key."""
    normalized = name.strip()
    lowered = normalized.lower()
    if lowered in KEY_NAMES:
        return KEY_NAMES[lowered]
    if len(normalized) == 1:
        return normalized
    raise ValueError(f"Unknown key name: {name!r}")


def display_key(name: str) -> str:
    """Human label for a configured key name."""
    return _DISPLAY_NAMES.get(name.strip().lower(), name.strip())


class KeyMap:
    """Resolve raw keys into actions for the current UI mode.

    Browsing mode uses the configurable bindings. Editing mode has a fixed
    layout so that every printable key can be typed into the form.
    """

    def __init__(self, bindings: dict[Action, list[str]] | None = None):
        self.bindings: dict[Action, list[str]] = {
            action: list(names) for action, names in DEFAULT_BINDINGS.items()
        }
        if bindings:
            for action, names in bindings.items():
                self.bindings[action] = list(names)

        self._browse: dict[str, Action] = {}
        for action, names in self.bindings.items():
            for name in names:
                self._browse[key_from_name(name)] = action

    @classmethod
    def from_config(cls, raw: dict[str, Any] | None) -> KeyMap:
        """Build a KeyMap from the ``keybindings`` config section.

        Raises:
            ValueError: On an unknown action or key name.
        """
        if not raw:
            return cls()
        bindings: dict[Action, list[str]] = {}
        for action_name, names in raw.items():
            try:
                action = Action(action_name)
            except ValueError:
                raise ValueError(f"Unknown action in keybindings: {action_name!r}") from None
            if action not in DEFAULT_BINDINGS:
                raise ValueError(f"Action cannot be rebound: {action_name!r}")
            if isinstance(names, str):
                names = [names]
            if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
                raise ValueError(f"Key names for {action_name!r} must be a string or a list of strings")
            bindings[action] = list(names)
        return cls(bindings)

    def resolve(self, key: str, mode: UiMode) -> Action | None:
        """Map a raw key to an action, or None when the key is unbound."""
        if mode == UiMode.EDITING_NEW_ENTRY:
            if is_ctrl_c(key):
                return Action.QUIT
            if is_escape(key):
                return Action.CANCEL
            if is_tab(key):
                return Action.CYCLE
            if is_enter(key):
                return Action.ACTIVATE
            if is_backspace(key):
                return Action.ERASE
            if is_printable(key):
                return Action.TYPE
            return None

        action = self._browse.get(key)
        if action is not None:
            return action
        # Terminals disagree on Enter/Escape bytes
        if is_enter(key):
            return self._first_bound(("enter",))
        if is_escape(key):
            return self._first_bound(("esc",))
        if is_ctrl_c(key):
            return self._first_bound(("ctrl+c",))
        return None

    def _first_bound(self, names: tuple[str, ...]) -> Action | None:
        for action, bound in self.bindings.items():
            if any(name.lower() in names for name in bound):
                return action
        return None

    def labels(self, action: Action) -> list[str]:
        """Display labels for the keys bound to an action."""
        return [display_key(name) for name in self.bindings.get(action, [])]

    def hint(self, action: Action) -> str:
        return "/".join(self.labels(action))
