"""Main dashboard loop: a Rich Live screen driven by readchar key presses."""

from __future__ import annotations

import logging
import os
import socket
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from pathlib import Path

import readchar
from rich.console import Console
from rich.live import Live
from rich.text import Text

from . import config
from .catalog import AppCatalog
from .dispatch import dispatch
from .handoff import HandoffController
from .keys import KeyMap
from .panels import build_panels
from .pause import wait_for_continue
from .render import DashboardContext, Frame, render_frame
from .state import DashboardState
from .theme import set_theme, style_for
from .types import Action, ExitKind, LaunchOutcome, LaunchRequest, Outcome, UiMode

logger = logging.getLogger(__name__)

console = Console(highlight=False)

EDITING_HINT = "Tab Switch field  Enter Next/Save  Esc Cancel  Ctrl+C Quit"


def _default_console() -> Console:
    return console


def frame_to_text(frame: Frame) -> Text:
    """Turn a rendered frame into styled Rich Text."""
    text = Text("\n".join(frame.lines), no_wrap=True, overflow="crop")
    starts = []
    offset = 0
    for line in frame.lines:
        starts.append(offset)
        offset += len(line) + 1
    for highlight in frame.highlights:
        if not 0 <= highlight.row < len(frame.lines):
            continue
        style = style_for(highlight.role)
        if not style:
            continue
        line_len = len(frame.lines[highlight.row])
        start = starts[highlight.row] + max(0, highlight.start)
        end = starts[highlight.row] + min(line_len, highlight.end)
        if end > start:
            text.stylize(style, start, end)
    return text


def _launch_status(request: LaunchRequest, outcome: LaunchOutcome) -> str:
    name = request.title or request.command
    if outcome.kind == ExitKind.FAILED:
        reason = outcome.error or f"exit status {outcome.returncode}"
        return f"Launch failed: {name} ({reason})"
    if outcome.kind == ExitKind.SIGNALLED:
        return f"{name} interrupted"
    return f"{name} exited"


class Dashboard:
    """Wires state, key map, renderer and handoff controller into one loop.

    Args:
        state: The dashboard state, owned by this loop.
        keymap: Key resolution for browsing mode.
        controller: Process handoff controller (created if omitted).
        console: Rich console the dashboard draws on.
        pause_on_failure: Keep a failed command's output on screen until a key.
        read_key: Blocking key reader.
        clock: Source of the dashboard's "Time" line.
    """

    def __init__(
        self,
        state: DashboardState,
        keymap: KeyMap,
        *,
        controller: HandoffController | None = None,
        console: Console | None = None,
        pause_on_failure: bool = True,
        read_key: Callable[[], str] = readchar.readkey,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.state = state
        self.keymap = keymap
        self.controller = controller or HandoffController()
        self.console = console or _default_console()
        self.pause_on_failure = pause_on_failure
        self._read_key = read_key
        self._clock = clock
        self._live: Live | None = None
        self.context = self.snapshot()

    # ── context ─────────────────────────────────────────────────────────

    def _browse_hint(self) -> str:
        km = self.keymap
        parts = [
            (f"{km.hint(Action.UP)}/{km.hint(Action.DOWN)}", "Move"),
            (km.hint(Action.ACTIVATE), "Select"),
            (km.hint(Action.CYCLE), "Panels"),
            (km.hint(Action.ADD), "Add"),
            (km.hint(Action.REFRESH), "Refresh"),
            (km.hint(Action.QUIT), "Quit"),
        ]
        return "  ".join(f"{keys} {label}" for keys, label in parts if keys and keys != "/")

    def _quick_actions(self) -> tuple[str, ...]:
        km = self.keymap
        actions = []
        if km.hint(Action.ACTIVATE):
            actions.append(f"[{km.labels(Action.ACTIVATE)[0]}] Launch selection")
        if km.hint(Action.REFRESH):
            actions.append(f"[{km.labels(Action.REFRESH)[0]}] Refresh dashboard")
        return tuple(actions)

    def snapshot(self) -> DashboardContext:
        """Capture clock, host and working directory for the next frames."""
        try:
            cwd = os.getcwd()
        except OSError:
            cwd = "?"
        return DashboardContext(
            now=self._clock(),
            hostname=socket.gethostname(),
            cwd=cwd,
            hint=self._browse_hint(),
            quick_actions=self._quick_actions(),
        )

    # ── rendering ───────────────────────────────────────────────────────

    def frame(self) -> Frame:
        context = self.context
        if self.state.mode == UiMode.EDITING_NEW_ENTRY:
            context = replace(context, hint=EDITING_HINT)
        size = self.console.size
        return render_frame(self.state, context, size.width, size.height)

    def renderable(self) -> Text:
        return frame_to_text(self.frame())

    # ── input ───────────────────────────────────────────────────────────

    def handle_key(self, key: str) -> bool:
        """Dispatch one key press. Returns False when the loop should stop."""
        action = self.keymap.resolve(key, self.state.mode)
        browsing = self.state.mode == UiMode.BROWSING
        outcome = dispatch(self.state, action, key)

        if outcome == Outcome.QUIT:
            return False
        if browsing and action == Action.REFRESH:
            self.context = self.snapshot()
        if outcome == Outcome.LAUNCH:
            self.launch_pending()
        return True

    # ── process handoff ─────────────────────────────────────────────────

    def _suspend(self) -> None:
        if self._live is not None:
            self._live.stop()

    def _resume(self) -> None:
        if self._live is not None:
            self._live.start(refresh=True)

    def _after_child(self, outcome: LaunchOutcome) -> None:
        if outcome.failed and self.pause_on_failure and self._live is not None:
            message = outcome.error or f"Exit status {outcome.returncode}"
            wait_for_continue(message, out=self.console)

    def launch_pending(self) -> LaunchOutcome | None:
        """Consume the pending launch, if any, and run it in the foreground."""
        request = self.state.take_pending_launch()
        if request is None:
            return None
        outcome = self.controller.run(
            request,
            suspend=self._suspend,
            resume=self._resume,
            after=self._after_child,
        )
        self.state.set_status(_launch_status(request, outcome), error=outcome.failed)
        self.context = self.snapshot()
        return outcome

    def run(self) -> None:
        """Show the dashboard and block until the user quits."""
        with Live(
            get_renderable=self.renderable,
            console=self.console,
            auto_refresh=False,
            screen=True,
            transient=True,
        ) as live:
            self._live = live
            live.refresh()
            try:
                while True:
                    try:
                        key = self._read_key()
                    except (KeyboardInterrupt, EOFError):
                        break
                    if not self.handle_key(key):
                        break
                    live.refresh()
            finally:
                self._live = None
                self.controller.terminate()


def build_dashboard(config_path: Path, **kwargs) -> Dashboard:
    """Load (or create) the config and assemble a ready-to-run Dashboard.

    Raises:
        ConfigError: If the config is unreadable or malformed.
    """
    cfg = config.ensure_config(config_path)
    try:
        keymap = KeyMap.from_config(cfg.get("keybindings"))
    except ValueError as e:
        raise config.ConfigError(config_path, str(e)) from e

    catalog = AppCatalog(config_path, cfg)
    state = DashboardState.create(build_panels(catalog, keymap), catalog)
    kwargs.setdefault("pause_on_failure", config.get_pause_on_failure(cfg))
    return Dashboard(state, keymap, **kwargs)


def run_dashboard(config_path: Path) -> None:
    """Entry point for the interactive dashboard."""
    set_theme()
    dashboard = build_dashboard(config_path)
    logger.info("Dashboard started with %s", config_path)
    dashboard.run()
    console.clear()
