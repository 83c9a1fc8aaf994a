"""
Panel

Bordered box with an optional title.
"""

from typing import Optional

from rich.panel import Panel as RichPanel
from rich.text import Text

from igor.wizard.ui import Styles


class Panel:
    """Bordered box with an optional title and plain-text content."""

    def __init__(
        self,
        title: str = "",
        content: str = "",
        width: int = 0,
        height: int = 0,
        styles: Optional[Styles] = None
    ):
        self.title = title
        self.content = content
        self.width = width
        self.height = height
        self.focused = False
        self.styles = styles or Styles()

    def set_title(self, title: str) -> None:
        self.title = title

    def set_content(self, content: str) -> None:
        self.content = content

    def append_content(self, content: str) -> None:
        """Add a line below the existing content."""
        if self.content:
            self.content += "\n" + content
        else:
            self.content = content

    def clear_content(self) -> None:
        self.content = ""

    def has_content(self) -> bool:
        return bool(self.content)

    def has_title(self) -> bool:
        return bool(self.title)

    def set_size(self, width: int, height: int) -> None:
        """Set the outer size; negative values render as empty."""
        self.width = width
        self.height = height

    def set_focused(self, focused: bool) -> None:
        self.focused = focused

    def inner_width(self) -> int:
        """Columns available for content, never negative."""
        # border plus horizontal padding
        return max(0, self.width - 6)

    def inner_height(self) -> int:
        """Rows available for content, less the title when present."""
        height = self.height - 4
        if self.has_title():
            height -= 2
        return max(0, height)

    def renderable(self) -> RichPanel:
        """Rich panel, highlighted while focused."""
        return RichPanel(
            Text(self.content),
            title=Text(self.title, style="title") if self.title else None,
            title_align="left",
            border_style="panel.border.focused" if self.focused else "panel.border",
            width=self.width if self.width >= 8 else None,
            height=self.height if self.height >= 3 else None,
            padding=(0, 2),
        )

    def view(self) -> str:
        return self.styles.render(self.renderable(), self.width)
