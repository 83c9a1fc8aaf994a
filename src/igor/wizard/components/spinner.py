"""
Spinner

Animated activity indicator. Each spinner has a unique id so several can
run at once; a tag guards against duplicate tick chains.
"""

import itertools
from typing import Optional, Tuple

from rich.text import Text

from igor.wizard.messages import Command, Message, SpinnerTick, tick
from igor.wizard.ui import Styles

DOT_FRAMES = ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷")

_ids = itertools.count(1)


class Spinner:
    """Animated activity indicator driven by tagged tick messages.

    Each spinner has a unique id. The tag changes on every accepted tick, so
    ticks from an older chain or another spinner are ignored.
    """

    def __init__(
        self,
        message: str = "",
        styles: Optional[Styles] = None,
        interval: float = 0.1,
        frames: Tuple[str, ...] = DOT_FRAMES
    ):
        self.id = next(_ids)
        self.message = message
        self.styles = styles or Styles()
        self.interval = interval
        self.frames = frames
        self.frame = 0
        self.visible = True
        self._tag = 0

    def show(self) -> Command:
        """Make visible and return the command that (re)starts animation."""
        self.visible = True
        return self.tick()

    def hide(self) -> None:
        """Stop rendering; pending ticks are dropped when they arrive."""
        self.visible = False

    def set_message(self, message: str) -> None:
        self.message = message

    def tick(self) -> Command:
        """Command that delivers the next tick after the frame interval."""
        spinner_id, tag = self.id, self._tag
        return tick(self.interval, lambda: SpinnerTick(spinner_id, tag))

    @property
    def current_frame(self) -> str:
        return self.frames[self.frame % len(self.frames)]

    def update(self, msg: Message) -> Tuple["Spinner", Optional[Command]]:
        """Advance one frame on a matching tick and schedule the next.

        Returns:
            (self, next tick command or None)
        """
        if not isinstance(msg, SpinnerTick) or msg.spinner_id != self.id:
            return self, None
        if msg.tag != self._tag or not self.visible:
            return self, None
        self.frame = (self.frame + 1) % len(self.frames)
        self._tag += 1
        return self, self.tick()

    def renderable(self) -> Text:
        if not self.visible:
            return Text("")
        text = Text(self.current_frame, style="spinner")
        if self.message:
            text.append(" " + self.message)
        return text

    def view(self) -> str:
        if not self.visible:
            return ""
        return self.styles.render(self.renderable(), len(self.message) + 4)
