"""Process handoff: give the terminal to a child process and take it back.

The controller runs nested inside the UI loop. It asks the UI to release the
terminal, runs the command through the shell with inherited stdio, forwards
SIGINT/SIGTERM to the child while it runs, then asks the UI to take the
terminal back. Child failures are logged and reported, never raised.
"""

from __future__ import annotations

import logging
import signal
import subprocess
from collections.abc import Callable
from typing import Any

from .types import ExitKind, HandoffState, LaunchOutcome, LaunchRequest

logger = logging.getLogger(__name__)

FORWARDED_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)

# Shells report a child killed by signal N as exit status 128 + N
_SHELL_SIGNAL_OFFSET = 128

Spawner = Callable[..., subprocess.Popen]


def classify_returncode(returncode: int) -> ExitKind:
    """Classify a child's return code.

    Death by a forwarded signal, reported directly (negative code) or by the
    shell (128 + signal), counts as a normal exit.
    """
    if returncode == 0:
        return ExitKind.SUCCESS
    forwarded = {int(sig) for sig in FORWARDED_SIGNALS}
    if returncode < 0 and -returncode in forwarded:
        return ExitKind.SIGNALLED
    if returncode - _SHELL_SIGNAL_OFFSET in forwarded:
        return ExitKind.SIGNALLED
    return ExitKind.FAILED


def _noop() -> None:
    return None


class HandoffController:
    """Owns the Interactive -> ChildRunning -> Interactive transitions.

    Args:
        spawner: Callable with the subprocess.Popen signature.
    """

    def __init__(self, spawner: Spawner | None = None):
        self.state = HandoffState.INTERACTIVE
        self._spawner: Spawner = spawner or subprocess.Popen
        self._child: subprocess.Popen | None = None

    def _transition(self, new_state: HandoffState) -> None:
        logger.debug("Handoff %s -> %s", self.state.value, new_state.value)
        self.state = new_state

    def _forward(self, signum: int, frame: Any) -> None:
        child = self._child
        if child is not None and child.poll() is None:
            logger.debug("Forwarding signal %d to pid %d", signum, child.pid)
            try:
                child.send_signal(signum)
            except ProcessLookupError:
                logger.debug("Child %d already gone", child.pid)

    def _install_forwarding(self) -> dict[signal.Signals, Any]:
        previous = {}
        for sig in FORWARDED_SIGNALS:
            previous[sig] = signal.signal(sig, self._forward)
        return previous

    @staticmethod
    def _restore_handlers(previous: dict[signal.Signals, Any]) -> None:
        for sig, handler in previous.items():
            signal.signal(sig, handler if handler is not None else signal.SIG_DFL)

    def run(
        self,
        request: LaunchRequest,
        suspend: Callable[[], None] = _noop,
        resume: Callable[[], None] = _noop,
        after: Callable[[LaunchOutcome], None] | None = None,
    ) -> LaunchOutcome:
        """Hand the terminal to ``request.command`` until it exits.

        Args:
            request: The launch request to consume.
            suspend: Releases the terminal (stops the live display).
            resume: Reclaims the terminal (restarts the live display).
            after: Called with the outcome before the terminal is reclaimed.

        Returns:
            LaunchOutcome describing how the child finished.
        """
        if self.state != HandoffState.INTERACTIVE:
            raise RuntimeError(f"Cannot launch while {self.state.value}")

        self._transition(HandoffState.SUSPENDING)
        try:
            suspend()
            self._transition(HandoffState.CHILD_RUNNING)
            outcome = self._run_child(request)
            self._log_outcome(request, outcome)
            if after is not None:
                after(outcome)
        finally:
            self._transition(HandoffState.RESUMING)
            resume()
            self._transition(HandoffState.INTERACTIVE)
        return outcome

    @staticmethod
    def _log_outcome(request: LaunchRequest, outcome: LaunchOutcome) -> None:
        if outcome.kind == ExitKind.FAILED:
            if outcome.error:
                logger.error("Error starting command %r: %s", request.command, outcome.error)
            else:
                logger.error(
                    "Error running command %r: exit status %s", request.command, outcome.returncode
                )
        elif outcome.kind == ExitKind.SIGNALLED:
            logger.info("Command %r interrupted (status %s)", request.command, outcome.returncode)
        else:
            logger.info("Command %r finished", request.command)

    def _run_child(self, request: LaunchRequest) -> LaunchOutcome:
        try:
            self._child = self._spawner(request.command, shell=True, cwd=request.cwd)
        except OSError as e:
            return LaunchOutcome(kind=ExitKind.FAILED, error=str(e))

        previous = self._install_forwarding()
        try:
            # wait() is retried after each forwarded signal (PEP 475)
            returncode = self._child.wait()
        finally:
            self._restore_handlers(previous)
            self._child = None

        return LaunchOutcome(kind=classify_returncode(returncode), returncode=returncode)

    def terminate(self) -> None:
        """Mark the controller finished; no further launches are accepted."""
        self._transition(HandoffState.TERMINATED)
