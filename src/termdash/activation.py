"""Selection/activation: turn the highlighted entry into a preview or a launch."""

from __future__ import annotations

from .panels import Panel
from .state import DashboardState
from .types import ActivationMode, ActivationResult, Entry, LaunchRequest, Preview

NAME_SEPARATOR = ":"


def split_display_name(name: str, default_category: str) -> tuple[str, str]:
    """Split "Category: Widget" into ("Category", "Widget").

    Names without a separator use ``default_category``.
    """
    category, sep, short = name.partition(NAME_SEPARATOR)
    if sep and category.strip() and short.strip():
        return category.strip(), short.strip()
    return default_category, name.strip()


def preview_body(entry: Entry) -> str:
    if entry.description:
        return entry.description
    if entry.is_directory:
        return f"Path: {entry.path}"
    if entry.is_command:
        return f"Command: {entry.command}"
    return "No details available."


def preview_for(entry: Entry, panel: Panel) -> Preview:
    category, short = split_display_name(entry.name, panel.category)
    return Preview(title=f"{category} Preview: {short}", body=preview_body(entry))


def activate(state: DashboardState) -> ActivationResult | None:
    """Activate the focused panel's current entry.

    Preview panels replace the detail pane; launch panels record the pending
    launch for the UI loop to hand to the process controller. An empty panel
    (or a launch entry without a command) leaves the state unchanged.
    """
    panel = state.focus.panel
    entry = state.focus.current_entry()
    if entry is None:
        return None

    if panel.mode == ActivationMode.LAUNCH:
        if not entry.is_command:
            return None
        request = LaunchRequest(command=entry.command, title=entry.name)
        state.request_launch(request)
        return request

    preview = preview_for(entry, panel)
    state.preview = preview
    return preview
