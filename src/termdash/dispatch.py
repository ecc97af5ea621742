"""Single event-dispatch function over the closed set of logical actions."""

from __future__ import annotations

import logging

from .activation import activate
from .config import ConfigError
from .shell import shell_request
from .state import DOWN, UP, DashboardState
from .types import Action, FormField, Outcome, PanelId, UiMode

logger = logging.getLogger(__name__)


def dispatch(state: DashboardState, action: Action | None, text: str = "") -> Outcome:
    """Apply one action to the dashboard state.

    Args:
        state: The dashboard state to mutate.
        action: Resolved action, or None for an unbound key (ignored).
        text: The typed character for Action.TYPE.

    Returns:
        Outcome.LAUNCH when a launch is pending, Outcome.QUIT to leave the
        loop, Outcome.CONTINUE otherwise.
    """
    if action is None:
        return Outcome.CONTINUE
    if action == Action.QUIT:
        return Outcome.QUIT

    if state.mode == UiMode.EDITING_NEW_ENTRY:
        _dispatch_form(state, action, text)
        return Outcome.CONTINUE

    if action == Action.CYCLE:
        state.focus.cycle_focus()
    elif action == Action.UP:
        state.focus.move_cursor(UP)
    elif action == Action.DOWN:
        state.focus.move_cursor(DOWN)
    elif action == Action.ACTIVATE:
        activate(state)
    elif action == Action.ADD:
        if state.focus.focused == PanelId.APPLICATIONS:
            state.open_form()
    elif action == Action.REFRESH:
        state.set_status("")
    elif action == Action.OPEN_SHELL:
        _open_shell(state)
    elif action == Action.CANCEL:
        state.preview = None

    if state.pending_launch is not None:
        return Outcome.LAUNCH
    return Outcome.CONTINUE


def _open_shell(state: DashboardState) -> None:
    if state.focus.focused != PanelId.NAVIGATION:
        return
    entry = state.focus.current_entry()
    if entry is None or not entry.is_directory:
        return
    request, message = shell_request(entry.path)
    state.set_status(message)
    if request is not None:
        state.request_launch(request)


def _dispatch_form(state: DashboardState, action: Action, text: str) -> None:
    form = state.form
    if form is None:
        state.close_form()
        return

    if action == Action.CANCEL:
        state.close_form()
    elif action == Action.CYCLE:
        form.switch_field()
    elif action == Action.TYPE:
        form.insert(text)
    elif action == Action.ERASE:
        form.erase()
    elif action == Action.ACTIVATE:
        if form.focused_field == FormField.NAME:
            form.switch_field()
        elif form.complete:
            _save_form(state)


def _save_form(state: DashboardState) -> None:
    form = state.form
    try:
        entry = state.catalog.add(form.name, form.command)
    except ConfigError as e:
        logger.error("Error writing config: %s", e)
        entry = state.catalog.entries[-1]
        state.set_status(f"Added {entry.name} (not saved: {e.reason})", error=True)
    else:
        state.set_status(f"Added {entry.name}")
    state.append_application(entry)
    state.close_form()
