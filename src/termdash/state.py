"""Dashboard state: focus/cursor machine, add-entry form and their owner."""

from __future__ import annotations

from dataclasses import dataclass, field

from .catalog import AppCatalog
from .panels import PANEL_ORDER, Panel
from .types import Entry, FormField, LaunchRequest, PanelId, Preview, UiMode

UP = -1
DOWN = 1

NAME_MAX_LENGTH = 64
COMMAND_MAX_LENGTH = 256


class FocusState:
    """Which panel is focused, plus one cursor per panel.

    All transitions are total: moving past either end saturates and moving
    within an empty panel does nothing.
    """

    def __init__(self, panels: dict[PanelId, Panel], order: list[PanelId] | None = None):
        self.panels = panels
        self.order = list(order or PANEL_ORDER)
        self.focused: PanelId = self.order[0]
        self.cursors: dict[PanelId, int] = {panel_id: 0 for panel_id in self.order}

    @property
    def panel(self) -> Panel:
        return self.panels[self.focused]

    def cursor(self, panel_id: PanelId | None = None) -> int:
        return self.cursors[panel_id or self.focused]

    def current_entry(self, panel_id: PanelId | None = None) -> Entry | None:
        panel_id = panel_id or self.focused
        entries = self.panels[panel_id].entries
        if not entries:
            return None
        return entries[self.cursors[panel_id]]

    def cycle_focus(self) -> PanelId:
        index = self.order.index(self.focused)
        self.focused = self.order[(index + 1) % len(self.order)]
        return self.focused

    def move_cursor(self, direction: int) -> int:
        count = len(self.panel.entries)
        if count == 0:
            return 0
        cursor = self.cursors[self.focused] + direction
        self.cursors[self.focused] = max(0, min(cursor, count - 1))
        return self.cursors[self.focused]

    def clamp(self) -> None:
        """Re-establish 0 <= cursor < len(entries) after entries changed."""
        for panel_id in self.order:
            count = len(self.panels[panel_id].entries)
            self.cursors[panel_id] = max(0, min(self.cursors[panel_id], count - 1))


@dataclass
class EntryForm:
    """The add-application form shown while editing a new entry."""

    name: str = ""
    command: str = ""
    focused_field: FormField = FormField.NAME

    def switch_field(self) -> FormField:
        self.focused_field = FormField.COMMAND if self.focused_field == FormField.NAME else FormField.NAME
        return self.focused_field

    def insert(self, text: str) -> None:
        if self.focused_field == FormField.NAME:
            self.name = (self.name + text)[:NAME_MAX_LENGTH]
        else:
            self.command = (self.command + text)[:COMMAND_MAX_LENGTH]

    def erase(self) -> None:
        if self.focused_field == FormField.NAME:
            self.name = self.name[:-1]
        else:
            self.command = self.command[:-1]

    @property
    def complete(self) -> bool:
        return bool(self.name.strip() and self.command.strip())


@dataclass
class DashboardState:
    """Everything the UI loop mutates, owned explicitly and passed down."""

    focus: FocusState
    catalog: AppCatalog
    mode: UiMode = UiMode.BROWSING
    form: EntryForm | None = None
    preview: Preview | None = None
    status: str = ""
    status_is_error: bool = False
    pending_launch: LaunchRequest | None = field(default=None, repr=False)

    @classmethod
    def create(cls, panels: dict[PanelId, Panel], catalog: AppCatalog) -> DashboardState:
        return cls(focus=FocusState(panels), catalog=catalog)

    @property
    def panels(self) -> dict[PanelId, Panel]:
        return self.focus.panels

    def set_status(self, message: str, error: bool = False) -> None:
        self.status = message
        self.status_is_error = error

    def request_launch(self, request: LaunchRequest) -> None:
        self.pending_launch = request

    def take_pending_launch(self) -> LaunchRequest | None:
        """Hand the pending launch to the caller exactly once."""
        request, self.pending_launch = self.pending_launch, None
        return request

    def open_form(self) -> EntryForm:
        self.form = EntryForm()
        self.mode = UiMode.EDITING_NEW_ENTRY
        return self.form

    def close_form(self) -> None:
        self.form = None
        self.mode = UiMode.BROWSING

    def append_application(self, entry: Entry) -> None:
        self.panels[PanelId.APPLICATIONS].entries.append(entry)
        self.focus.clamp()
