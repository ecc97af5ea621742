"""Tests for key resolution and configurable bindings."""

import pytest
import readchar

from termdash.keys import KeyMap, display_key, key_from_name
from termdash.types import Action, UiMode

BROWSING = UiMode.BROWSING
EDITING = UiMode.EDITING_NEW_ENTRY


class TestKeyNames:
    def test_named_keys(self):
        assert key_from_name("enter") == readchar.key.ENTER
        assert key_from_name("Ctrl+C") == readchar.key.CTRL_C
        assert key_from_name("space") == " "

    def test_single_character(self):
        assert key_from_name("x") == "x"
        assert key_from_name("Q") == "Q"

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown key name"):
            key_from_name("hyper+x")

    def test_display(self):
        assert display_key("up") == "↑"
        assert display_key("ctrl+c") == "Ctrl+C"
        assert display_key("k") == "k"


class TestDefaultBindings:
    @pytest.mark.parametrize(
        "key,action",
        [
            (readchar.key.TAB, Action.CYCLE),
            (readchar.key.UP, Action.UP),
            ("k", Action.UP),
            (readchar.key.DOWN, Action.DOWN),
            ("j", Action.DOWN),
            (readchar.key.ENTER, Action.ACTIVATE),
            ("\n", Action.ACTIVATE),
            (" ", Action.ACTIVATE),
            ("a", Action.ADD),
            ("o", Action.OPEN_SHELL),
            ("r", Action.REFRESH),
            (readchar.key.ESC, Action.CANCEL),
            ("q", Action.QUIT),
            (readchar.key.CTRL_C, Action.QUIT),
        ],
    )
    def test_browsing(self, key, action):
        assert KeyMap().resolve(key, BROWSING) == action

    def test_unbound_key(self):
        assert KeyMap().resolve("z", BROWSING) is None

    def test_hints(self):
        keymap = KeyMap()
        assert keymap.hint(Action.UP) == "↑/k"
        assert keymap.hint(Action.ACTIVATE) == "Enter/Space"
        assert keymap.hint(Action.QUIT) == "q/Ctrl+C"


class TestEditingMode:
    @pytest.mark.parametrize(
        "key,action",
        [
            ("q", Action.TYPE),
            ("a", Action.TYPE),
            (" ", Action.TYPE),
            ("-", Action.TYPE),
            (readchar.key.TAB, Action.CYCLE),
            (readchar.key.ENTER, Action.ACTIVATE),
            (readchar.key.ESC, Action.CANCEL),
            (readchar.key.BACKSPACE, Action.ERASE),
            ("\x7f", Action.ERASE),
            (readchar.key.CTRL_C, Action.QUIT),
            (readchar.key.UP, None),
        ],
    )
    def test_editing(self, key, action):
        assert KeyMap().resolve(key, EDITING) == action

    def test_custom_bindings_do_not_affect_typing(self):
        keymap = KeyMap.from_config({"quit": ["x"]})
        assert keymap.resolve("x", EDITING) == Action.TYPE


class TestFromConfig:
    def test_empty(self):
        assert KeyMap.from_config(None).bindings == KeyMap().bindings

    def test_rebinding_replaces_defaults(self):
        keymap = KeyMap.from_config({"down": ["n"], "quit": "x"})
        assert keymap.resolve("n", BROWSING) == Action.DOWN
        assert keymap.resolve("j", BROWSING) is None
        assert keymap.resolve("x", BROWSING) == Action.QUIT
        assert keymap.resolve("q", BROWSING) is None
        assert keymap.resolve("k", BROWSING) == Action.UP

    def test_unknown_action(self):
        with pytest.raises(ValueError, match="Unknown action"):
            KeyMap.from_config({"teleport": ["t"]})

    def test_form_actions_cannot_be_rebound(self):
        with pytest.raises(ValueError, match="cannot be rebound"):
            KeyMap.from_config({"type": ["t"]})

    def test_unknown_key_name(self):
        with pytest.raises(ValueError, match="Unknown key name"):
            KeyMap.from_config({"quit": ["hyper+q"]})

    @pytest.mark.parametrize("names", [5, None, ["q", 1], {"key": "q"}])
    def test_key_names_must_be_strings(self, names):
        with pytest.raises(ValueError, match="must be a string or a list of strings"):
            KeyMap.from_config({"quit": names})
