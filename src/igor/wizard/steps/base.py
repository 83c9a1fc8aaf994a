"""
Igor Step View Base

Shared layout (header, body, footer) and common message handling for every
wizard step.
"""

from typing import Optional, Tuple

from rich.console import Group, RenderableType
from rich.text import Text

from igor.wizard.components import Footer, Header
from igor.wizard.keys import KeyMap, default_key_map
from igor.wizard.messages import Command, KeyPress, Message, Status
from igor.wizard.ui import Styles


LOADING = "Loading..."


class StepView:
    """One wizard step.

    Subclasses implement handle() and body(); update(), view() and
    resize() are shared.
    """

    title = ""

    def __init__(
        self,
        styles: Optional[Styles] = None,
        key_map: Optional[KeyMap] = None,
        version: str = ""
    ):
        self.styles = styles or Styles()
        self.key_map = key_map or default_key_map()
        self.width = 0
        self.height = 0
        self.ready = False
        self.header = Header(version=version, styles=self.styles)
        self.footer = Footer(self.key_map, styles=self.styles)

    def init(self) -> Optional[Command]:
        return None

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.ready = True
        self.header.set_width(width)
        self.footer.set_width(width)
        self.on_resize()

    def on_resize(self) -> None:
        """Hook for subclasses to lay out their components."""

    def set_key_map(self, key_map: KeyMap) -> None:
        self.key_map = key_map
        self.footer.set_key_map(key_map)

    def update(self, msg: Message) -> Tuple["StepView", Optional[Command]]:
        if isinstance(msg, KeyPress) and self.key_map.help.matches(msg.key):
            self.footer.toggle_full_help()
            return self, None
        if isinstance(msg, Status):
            self.footer.set_status(msg.text, "error" if msg.is_error else "info")
            return self, None
        return self.handle(msg)

    def handle(self, msg: Message) -> Tuple["StepView", Optional[Command]]:
        return self, None

    def body(self) -> RenderableType:
        return Text("")

    def view(self) -> str:
        if not self.ready:
            return LOADING
        parts = [self.header.renderable(), Text("")]
        if self.title:
            parts.append(Text(self.title, style="highlight"))
            parts.append(Text(""))
        parts.extend([self.body(), Text(""), self.footer.renderable()])
        return self.styles.render(Group(*parts), self.width)

    def content_width(self) -> int:
        """Usable width for body components."""
        return max(0, self.width - 4)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(ready={self.ready}, size={self.width}x{self.height})"
