"""Hold a failed command's output on screen before the dashboard redraws."""

from __future__ import annotations

from collections.abc import Callable

import readchar
from rich.console import Console
from rich.markup import escape

from .keys import is_ctrl_c, is_enter

console = Console(highlight=False)

CONTINUE_PROMPT = "[dim]Press Enter to return to the dashboard...[/dim]"


def wait_for_continue(
    message: str | None = None,
    out: Console | None = None,
    read_key: Callable[[], str] = readchar.readkey,
    prompt: str = CONTINUE_PROMPT,
) -> None:
    """Print ``message`` (as plain text) and wait for Enter, q, or Ctrl+C."""
    out = out or console
    if message:
        out.print(f"\n[bold red]{escape(message)}[/bold red]")
    out.print(prompt)
    while True:
        try:
            key = read_key()
        except (KeyboardInterrupt, EOFError):
            return
        if is_enter(key) or is_ctrl_c(key) or key in ("q", "Q"):
            return
