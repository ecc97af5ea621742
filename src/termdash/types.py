"""Type definitions for termdash.

Shared enums and dataclasses used across the dashboard: panels, entries,
activation results, UI modes and the handoff controller's states.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# ── panels ────────────────────────────────────────────────────────────────


class PanelId(str, Enum):
    """The closed set of dashboard panels."""

    NAVIGATION = "navigation"
    APPLICATIONS = "applications"
    SHORTCUTS = "shortcuts"

    def __str__(self) -> str:
        return self.value


class ActivationMode(str, Enum):
    """What activating an entry of a panel does."""

    PREVIEW = "preview"
    LAUNCH = "launch"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Entry:
    """One selectable item within a panel."""

    name: str
    description: str | None = None
    command: str | None = None
    path: str | None = None

    @property
    def is_directory(self) -> bool:
        return self.path is not None

    @property
    def is_command(self) -> bool:
        return bool(self.command)


# ── activation results ───────────────────────────────────────────────────


@dataclass(frozen=True)
class Preview:
    """Detail-pane content derived from an activated entry."""

    title: str
    body: str


@dataclass(frozen=True)
class LaunchRequest:
    """A command to run as a child process owning the terminal."""

    command: str
    title: str = ""
    cwd: str | None = None


ActivationResult = Preview | LaunchRequest


# ── UI modes and actions ─────────────────────────────────────────────────


class UiMode(str, Enum):
    """Top-level UI mode."""

    BROWSING = "browsing"
    EDITING_NEW_ENTRY = "editing_new_entry"


class FormField(str, Enum):
    """Focused field of the add-entry form."""

    NAME = "name"
    COMMAND = "command"


class Action(str, Enum):
    """Logical actions the dispatcher understands."""

    QUIT = "quit"
    CYCLE = "cycle"
    UP = "up"
    DOWN = "down"
    ACTIVATE = "activate"
    ADD = "add"
    CANCEL = "cancel"
    REFRESH = "refresh"
    OPEN_SHELL = "open_shell"
    TYPE = "type"
    ERASE = "erase"

    def __str__(self) -> str:
        return self.value


class Outcome(str, Enum):
    """What the UI loop should do after an action was dispatched."""

    CONTINUE = "continue"
    LAUNCH = "launch"
    QUIT = "quit"


# ── process handoff ──────────────────────────────────────────────────────


class HandoffState(str, Enum):
    """Who owns the terminal, and the transitions in between."""

    INTERACTIVE = "interactive"
    SUSPENDING = "suspending"
    CHILD_RUNNING = "child_running"
    RESUMING = "resuming"
    TERMINATED = "terminated"


class ExitKind(str, Enum):
    """Classification of a finished child process."""

    SUCCESS = "success"
    SIGNALLED = "signalled"
    FAILED = "failed"


@dataclass(frozen=True)
class LaunchOutcome:
    """Result of one handoff to a child process."""

    kind: ExitKind
    returncode: int | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.kind == ExitKind.FAILED
