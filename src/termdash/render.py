"""Render projection: dashboard state -> fixed-size block of text lines.

``render_frame`` is pure. Anything that changes over time (clock, hostname,
working directory, key hints) comes in through a DashboardContext snapshot, so
identical inputs always produce an identical Frame. Highlight spans use
character offsets into ``Frame.lines`` and name a semantic role that the UI
maps to a style (see ``theme.style_for``).
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass, field
from datetime import datetime

from rich.cells import cell_len, get_character_cell_size, set_cell_size

from .panels import Panel
from .state import DashboardState, EntryForm
from .types import FormField, PanelId, UiMode

MIN_SIDEBAR_WIDTH = 24
MIN_DETAIL_WIDTH = 30
MODAL_WIDTH = 64
MODAL_HEIGHT = 12

DASHBOARD_TITLE = "New Tab • Dashboard"
CURSOR_ICON = "❯"
FOCUS_ICON = "●"

BANNER = [
    r" _                            _           _     ",
    r"| |_ ___ _ __ _ __ ___     __| | __ _ ___| |__  ",
    r"| __/ _ \ '__| '_ ` _ \   / _` |/ _` / __| '_ \ ",
    r"| ||  __/ |  | | | | | | | (_| | (_| \__ \ | | |",
    r" \__\___|_|  |_| |_| |_|  \__,_|\__,_|___/_| |_|",
]


@dataclass(frozen=True)
class DashboardContext:
    """Snapshot of the outside world taken when the dashboard is refreshed."""

    now: datetime
    hostname: str
    cwd: str
    hint: str = ""
    quick_actions: tuple[str, ...] = ()


@dataclass(frozen=True)
class Highlight:
    row: int
    start: int
    end: int
    role: str


@dataclass(frozen=True)
class Frame:
    width: int
    height: int
    lines: tuple[str, ...]
    highlights: tuple[Highlight, ...] = field(default_factory=tuple)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def fit(text: str, width: int) -> str:
    """Pad or crop ``text`` to exactly ``width`` terminal cells."""
    if width <= 0:
        return ""
    return set_cell_size(text, width)


def split_cells(text: str, column: int) -> tuple[str, str]:
    """Split ``text`` at a cell column, padding with spaces.

    A wide character that straddles the column is replaced by spaces on both
    sides, so ``cell_len(left) == column`` always holds.
    """
    width = 0
    for index, char in enumerate(text):
        if width == column:
            return text[:index], text[index:]
        size = get_character_cell_size(char)
        if width + size > column:
            return text[:index] + " " * (column - width), " " * (width + size - column) + text[index + 1 :]
        width += size
    return text + " " * (column - width), ""


def tail_cells(text: str, width: int) -> str:
    """The longest suffix of ``text`` that fits in ``width`` cells."""
    while text and cell_len(text) > width:
        text = text[1:]
    return text


def sidebar_width(width: int) -> int:
    """About a third of the screen, min 24 cols, keeping 30 for the detail pane."""
    sidebar = max(MIN_SIDEBAR_WIDTH, width // 3)
    if sidebar > width - MIN_DETAIL_WIDTH:
        sidebar = max(MIN_SIDEBAR_WIDTH, width - MIN_DETAIL_WIDTH)
    return max(0, min(sidebar, width))


def draw_box(title: str, body: list[str], width: int, height: int) -> list[str]:
    """Draw a rounded box of exactly ``width`` x ``height`` cells."""
    if height <= 0:
        return []
    if width < 2 or height < 2:
        return [fit(title, width)] + [fit("", width)] * (height - 1)

    inner = width - 2
    label = f"─ {title} " if title else ""
    if cell_len(label) > inner:
        label = set_cell_size(label, inner)
    top = "╭" + label + "─" * (inner - cell_len(label)) + "╮"

    rows = [top]
    for i in range(height - 2):
        content = body[i] if i < len(body) else ""
        rows.append("│" + fit(content, inner) + "│")
    rows.append("╰" + "─" * inner + "╯")
    return rows


def section_rule(name: str, width: int) -> str:
    head = f"── {name} "
    return head + "─" * max(0, width - cell_len(head))


def window_offset(count: int, cursor: int, visible: int) -> int:
    """First visible index so that the cursor stays on screen."""
    if visible <= 0 or count <= visible:
        return 0
    return min(max(0, cursor - visible + 1), count - visible)


def _panel_body(panel: Panel, cursor: int, visible: int) -> tuple[list[str], int]:
    if not panel.entries:
        return ["  (empty)"], 0
    offset = window_offset(len(panel.entries), cursor, visible)
    lines = []
    for index in range(offset, min(len(panel.entries), offset + visible)):
        prefix = f"{CURSOR_ICON} " if index == cursor else "  "
        lines.append(prefix + panel.entries[index].name)
    return lines, offset


def _wrap(text: str, width: int) -> list[str]:
    lines: list[str] = []
    for paragraph in text.splitlines() or [""]:
        if not paragraph.strip():
            lines.append("")
            continue
        lines.extend(textwrap.wrap(paragraph, width=max(1, width)) or [""])
    return lines


def _dashboard_body(state: DashboardState, context: DashboardContext, width: int) -> tuple[list[str], set[int]]:
    """Default detail pane; returns lines and the indexes of section rules."""
    now = context.now
    lines = [
        f"Time: {now:%a %b} {now.day}, {now:%Y %H:%M:%S}",
        f"Host: {context.hostname}",
        f"Dir:  {context.cwd}",
        "",
    ]
    rules: set[int] = set()

    def rule(name: str) -> None:
        rules.add(len(lines))
        lines.append(section_rule(name, width))

    rule("Featured")
    lines.append("Pro tip: Bookmark your favorite TUI tools in the config file.")
    lines.append("• Keep sessions fast. • Launch from Applications. • Keys live in Shortcuts.")
    lines.append("")

    rule("Selection")
    app = state.focus.current_entry(PanelId.APPLICATIONS)
    if app is not None:
        lines.append(f"App: {app.name}")
        lines.append(f"Cmd: {app.command}")
    else:
        lines.append("No app selected. Add one to the Applications panel.")
    lines.append("")

    if context.quick_actions:
        rule("Quick Actions")
        lines.append("   ".join(context.quick_actions))
        lines.append("")

    rule("termdash")
    lines.extend(BANNER)
    return lines, rules


def _form_body(form: EntryForm, inner: int) -> tuple[list[str], dict[int, bool]]:
    """Modal lines plus {line index: focused} for the two input rows."""
    field_width = max(1, inner - 4)
    lines = [
        "Enter details below.",
        "Tab switches field. Enter on Command saves. Esc cancels.",
        "",
    ]
    fields: dict[int, bool] = {}
    for label, value, form_field in (
        ("Name", form.name, FormField.NAME),
        ("Command", form.command, FormField.COMMAND),
    ):
        focused = form.focused_field == form_field
        shown = value + ("▏" if focused else "")
        if cell_len(shown) > field_width:
            shown = tail_cells(shown, field_width)
        lines.append(label)
        fields[len(lines)] = focused
        lines.append(f" {CURSOR_ICON if focused else ' '} {shown}")
        lines.append("")
    if form.focused_field == FormField.COMMAND and not form.complete:
        lines.append("Both fields are required.")
    return lines, fields


def render_frame(
    state: DashboardState,
    context: DashboardContext,
    width: int,
    height: int,
) -> Frame:
    """Project the dashboard state onto a ``width`` x ``height`` grid."""
    width = max(0, width)
    height = max(0, height)
    if height == 0:
        return Frame(width=width, height=0, lines=())

    body_height = height - 1
    left_width = sidebar_width(width)
    right_width = width - left_width
    highlights: list[Highlight] = []

    # Sidebar: the panels stacked in focus order
    sidebar: list[str] = []
    order = state.focus.order
    base = body_height // len(order)
    for i, panel_id in enumerate(order):
        panel = state.panels[panel_id]
        box_height = base if i < len(order) - 1 else body_height - base * (len(order) - 1)
        focused = panel_id == state.focus.focused
        cursor = state.focus.cursor(panel_id)
        visible = max(0, box_height - 2)
        body, offset = _panel_body(panel, cursor, visible)
        title = f"{FOCUS_ICON} {panel.title}" if focused else panel.title
        box = draw_box(title, body, left_width, box_height)

        top_row = len(sidebar)
        if focused and box:
            highlights.append(Highlight(top_row, 0, len(box[0]), "title_focused"))
            if box_height >= 2:
                highlights.append(Highlight(top_row + box_height - 1, 0, len(box[-1]), "border_focused"))
        if panel.entries and 0 <= cursor - offset < visible:
            row = top_row + 1 + cursor - offset
            highlights.append(
                Highlight(row, 1, len(box[row - top_row]) - 1, "cursor" if focused else "cursor_dim")
            )
        sidebar.extend(box)

    # Detail pane
    inner = max(0, right_width - 2)
    if state.preview is not None:
        detail_title = state.preview.title
        detail_body = _wrap(state.preview.body, inner)
        rules: set[int] = set()
    else:
        detail_title = DASHBOARD_TITLE
        detail_body, rules = _dashboard_body(state, context, inner)
    detail = draw_box(detail_title, detail_body, right_width, body_height)

    lines: list[str] = []
    for row in range(body_height):
        left = sidebar[row] if row < len(sidebar) else fit("", left_width)
        right = detail[row] if row < len(detail) else fit("", right_width)
        lines.append(fit(left + right, width))
        if right_width >= 2 and row - 1 in rules and row < body_height - 1:
            highlights.append(Highlight(row, len(left) + 1, len(left) + len(right) - 1, "heading"))

    # Add-entry modal
    if state.mode == UiMode.EDITING_NEW_ENTRY and state.form is not None:
        modal_width = min(MODAL_WIDTH, width - 4)
        modal_height = min(MODAL_HEIGHT, body_height - 2)
        if modal_width >= 2 and modal_height >= 2:
            top = (body_height - modal_height) // 2
            left_col = (width - modal_width) // 2
            form_lines, fields = _form_body(state.form, modal_width - 2)
            modal = draw_box("Add Application", form_lines, modal_width, modal_height)
            modal_rows = range(top, top + modal_height)
            highlights = [h for h in highlights if h.row not in modal_rows]
            for r, modal_line in enumerate(modal):
                row = top + r
                before, rest = split_cells(lines[row], left_col)
                _, after = split_cells(rest, cell_len(modal_line))
                lines[row] = fit(before + modal_line + after, width)
                start, end = len(before), len(before) + len(modal_line)
                if r == 0:
                    highlights.append(Highlight(row, start, end, "title_focused"))
                elif r == modal_height - 1:
                    highlights.append(Highlight(row, start, end, "border_focused"))
                elif fields.get(r - 1):
                    highlights.append(Highlight(row, start + 1, end - 1, "field"))

    # Footer: status message, then key hints
    footer = " "
    if state.status:
        role = "error" if state.status_is_error else "status"
        highlights.append(Highlight(body_height, 1, 1 + len(state.status), role))
        footer += state.status + "  │  "
    hint_start = len(footer)
    footer += context.hint
    lines.append(fit(footer, width))
    if context.hint:
        highlights.append(Highlight(body_height, hint_start, len(footer), "muted"))

    return Frame(width=width, height=height, lines=tuple(lines), highlights=tuple(highlights))
