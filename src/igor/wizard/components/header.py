"""
Header

Application title bar shown at the top of every step.
"""

from typing import Optional

from rich.align import Align
from rich.console import Group, RenderableType
from rich.rule import Rule
from rich.text import Text

from igor.wizard.ui import Styles


class Header:
    """Title line with subtitle and version above a horizontal rule."""

    def __init__(
        self,
        title: str = "IGOR",
        subtitle: str = "NVIDIA Driver Installer",
        version: str = "",
        width: int = 0,
        styles: Optional[Styles] = None
    ):
        self.title = title
        self.subtitle = subtitle
        self.version = version
        self.width = width
        self.styles = styles or Styles()

    def set_title(self, title: str) -> None:
        self.title = title

    def set_subtitle(self, subtitle: str) -> None:
        self.subtitle = subtitle

    def set_version(self, version: str) -> None:
        self.version = version

    def set_width(self, width: int) -> None:
        self.width = width

    def _line(self) -> Text:
        """Title, subtitle and version on one line."""
        text = Text(self.title, style="title")
        if self.subtitle:
            text.append("  " + self.subtitle, style="subtitle")
        if self.version:
            text.append("  v" + self.version, style="version")
        return text

    def renderable(self, centered: bool = False) -> RenderableType:
        """Header for the current width.

        A non-positive width gives the bare title line with no rule.
        """
        if self.width <= 0:
            return self._line()
        line: RenderableType = Align.center(self._line()) if centered else self._line()
        return Group(line, Rule(style="panel.border"))

    def view(self) -> str:
        return self.styles.render(self.renderable(), self.width)

    def view_centered(self) -> str:
        return self.styles.render(self.renderable(centered=True), self.width)
