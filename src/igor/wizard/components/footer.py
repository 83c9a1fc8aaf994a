"""
Footer

Status line and key help shown at the bottom of every step.
"""

from typing import Optional

from rich.console import Group
from rich.text import Text

from igor.wizard.keys import KeyMap, default_key_map
from igor.wizard.ui import Styles

STATUS_TYPES = ("info", "success", "warning", "error")


class Footer:
    def __init__(
        self,
        key_map: Optional[KeyMap] = None,
        width: int = 0,
        styles: Optional[Styles] = None
    ):
        self.key_map = key_map or default_key_map()
        self.width = width
        self.styles = styles or Styles()
        self.status = ""
        self.status_type = "info"
        self.show_help = True
        self.full_help = False

    def set_status(self, status: str, status_type: str = "info") -> None:
        """Set the status line; unknown types are shown as info."""
        self.status = status
        self.status_type = status_type if status_type in STATUS_TYPES else "info"

    def set_info_status(self, status: str) -> None:
        self.set_status(status, "info")

    def set_success_status(self, status: str) -> None:
        self.set_status(status, "success")

    def set_warning_status(self, status: str) -> None:
        self.set_status(status, "warning")

    def set_error_status(self, status: str) -> None:
        self.set_status(status, "error")

    def clear_status(self) -> None:
        self.status = ""
        self.status_type = "info"

    def set_show_help(self, show: bool) -> None:
        self.show_help = show

    def toggle_full_help(self) -> None:
        self.full_help = not self.full_help

    def is_full_help_shown(self) -> bool:
        return self.full_help

    def set_key_map(self, key_map: KeyMap) -> None:
        self.key_map = key_map

    def set_width(self, width: int) -> None:
        self.width = width

    def _help_line(self, bindings) -> Text:
        text = Text()
        enabled = [b for b in bindings if b.enabled]
        for i, b in enumerate(enabled):
            if i:
                text.append(" • ", style="help.separator")
            text.append(b.help_key, style="help.key")
            text.append(" " + b.help_desc, style="help.desc")
        return text

    def renderable(self) -> Group:
        parts = []
        if self.status:
            parts.append(Text("● " + self.status, style=self.status_type))
        if self.show_help:
            if self.full_help:
                for column in self.key_map.full_help():
                    parts.append(self._help_line(column))
            else:
                parts.append(self._help_line(self.key_map.short_help()))
        return Group(*parts)

    def view(self) -> str:
        return self.styles.render(self.renderable(), self.width)
