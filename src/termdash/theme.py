"""Named colour palettes and the role -> Rich style lookup used by the UI."""

from __future__ import annotations

import os
from dataclasses import dataclass

THEME_ENV_VAR = "TERMDASH_THEME"


@dataclass(frozen=True)
class TuiTheme:
    """Colours for the dashboard, as Rich colour names."""

    name: str
    accent: str
    heading: str
    status: str
    error: str
    muted: str = "grey50"
    cursor_text: str = "black"


PALETTES: dict[str, TuiTheme] = {
    theme.name: theme
    for theme in (
        TuiTheme(name="default", accent="green", heading="color(31)", status="color(178)", error="color(160)"),
        TuiTheme(name="rust", accent="color(166)", heading="color(137)", status="color(214)", error="color(124)"),
        TuiTheme(name="night", accent="color(105)", heading="color(67)", status="color(180)", error="color(167)"),
        TuiTheme(
            name="mono",
            accent="white",
            heading="white",
            status="white",
            error="white",
            muted="grey62",
        ),
    )
}

_active: TuiTheme = PALETTES["default"]


def set_theme(name: str | None = None) -> TuiTheme:
    """Activate a palette by name; unknown names fall back to "default".

    With no name, ``$TERMDASH_THEME`` decides.
    """
    global _active

    if name is None:
        name = os.environ.get(THEME_ENV_VAR, "")
    _active = PALETTES.get(name.strip().lower(), PALETTES["default"])
    return _active


def get_theme() -> TuiTheme:
    return _active


def style_for(role: str) -> str:
    """Rich style for a highlight role emitted by ``render_frame`` ("" if unknown)."""
    t = _active
    if role == "cursor":
        return f"bold {t.cursor_text} on {t.accent}"
    if role == "cursor_dim":
        return "bold"
    if role in ("title_focused", "field"):
        return f"bold {t.accent}"
    if role == "border_focused":
        return t.accent
    if role == "heading":
        return f"bold {t.heading}"
    if role == "status":
        return t.status
    if role == "error":
        return f"bold {t.error}"
    if role == "muted":
        return t.muted
    return ""
