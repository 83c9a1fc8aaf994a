"""
Igor Wizard UI Styles

Named rich styles and the renderer that turns rich renderables into the
plain string snapshots returned by every view.
"""

import io
from typing import Dict, Optional

from rich.console import Console, RenderableType
from rich.theme import Theme


NVIDIA_GREEN = "#76B900"

# Narrowest width we hand to rich; smaller or negative sizes are clamped
MIN_RENDER_WIDTH = 20

DEFAULT_STYLES: Dict[str, str] = {
    "title": f"bold {NVIDIA_GREEN}",
    "subtitle": "#A0A0A0",
    "version": "dim",
    "logo": f"bold {NVIDIA_GREEN}",
    "text": "default",
    "muted": "dim",
    "highlight": f"bold {NVIDIA_GREEN}",
    "success": "bold green",
    "warning": "yellow",
    "error": "bold red",
    "info": "cyan",
    "button": "white on #333333",
    "button.focused": f"bold black on {NVIDIA_GREEN}",
    "button.disabled": "dim",
    "item": "default",
    "item.selected": f"bold {NVIDIA_GREEN}",
    "item.description": "dim",
    "item.locked": "dim italic",
    "panel.border": "#555555",
    "panel.border.focused": NVIDIA_GREEN,
    "progress.complete": NVIDIA_GREEN,
    "progress.remaining": "#333333",
    "spinner": NVIDIA_GREEN,
    "help.key": NVIDIA_GREEN,
    "help.desc": "dim",
    "help.separator": "#444444",
}


class Styles:
    """Theme plus rendering settings shared by every view."""

    def __init__(self, color: bool = False, overrides: Optional[Dict[str, str]] = None):
        styles = dict(DEFAULT_STYLES)
        if overrides:
            styles.update(overrides)
        self.color = color
        self.theme = Theme(styles)

    def render(self, renderable: RenderableType, width: int) -> str:
        """Render to a string at the given width.

        Trailing newlines are stripped. Without color the result contains
        no escape sequences.
        """
        width = max(int(width), MIN_RENDER_WIDTH)
        console = Console(
            file=io.StringIO(),
            width=width,
            theme=self.theme,
            color_system="truecolor" if self.color else None,
            force_terminal=self.color,
            highlight=False,
            emoji=False,
            markup=False,
            legacy_windows=False,
        )
        console.print(renderable)
        return console.file.getvalue().rstrip("\n")
