"""Open-a-shell-in-a-directory helper.

Off by default: unless ``TERMDASH_LAUNCH_IN_DIR`` is set to a non-blank value
the helper only reports what it would have launched.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from .types import LaunchRequest

LAUNCH_IN_DIR_ENV_VAR = "TERMDASH_LAUNCH_IN_DIR"


def resolve_dir_path(path: str) -> str:
    """Absolute, user-expanded form of a directory path ("" means root)."""
    if not path:
        return "/"
    try:
        return str(Path(path).expanduser().absolute())
    except (OSError, RuntimeError):
        return path


def launch_enabled(environ: Mapping[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return bool(env.get(LAUNCH_IN_DIR_ENV_VAR, "").strip())


def shell_request(
    directory: str,
    environ: Mapping[str, str] | None = None,
) -> tuple[LaunchRequest | None, str]:
    """Plan opening a shell in ``directory``.

    Returns:
        (request, message). ``request`` is None in dry-run mode or when the
        directory does not exist; ``message`` describes what happened.
    """
    env = os.environ if environ is None else environ
    target = resolve_dir_path(directory)

    if not launch_enabled(env):
        return None, f"Would launch shell in: {target}"

    if not os.path.isdir(target):
        return None, f"Directory does not exist: {target}"

    shell = env.get("SHELL", "").strip() or "bash"
    request = LaunchRequest(command=shell, title=f"Shell: {target}", cwd=target)
    return request, f"Opened shell in: {target}"
