"""
Progress Bar

Tracks logical progress (current of total) and eases the rendered fill
toward it over a sequence of frame messages.
"""

import itertools
from typing import Optional, Tuple

from rich.text import Text

from igor.wizard.messages import Command, Message, ProgressFrame, tick
from igor.wizard.ui import Styles

# Fraction of the remaining distance covered per frame
EASING = 0.35
SNAP_DISTANCE = 0.005

_ids = itertools.count(1)


class Progress:
    def __init__(
        self,
        width: int = 40,
        label: str = "",
        styles: Optional[Styles] = None,
        frame_interval: float = 1 / 30
    ):
        self.id = next(_ids)
        self.width = max(1, width)
        self.label = label
        self.styles = styles or Styles()
        self.frame_interval = frame_interval
        self.current = 0
        self.total = 0
        self.shown = 0.0
        self._tag = 0

    def percent(self) -> float:
        """Completion ratio in [0, 1]; 0 whenever total is 0."""
        if self.total <= 0:
            return 0.0
        return min(1.0, max(0.0, self.current / self.total))

    def percent_int(self) -> int:
        return int(round(self.percent() * 100))

    def is_complete(self) -> bool:
        return self.total > 0 and self.current >= self.total

    def set_progress(self, current: int, total: int) -> Command:
        """Set the logical target and return the animation command."""
        self.current = current
        self.total = total
        self._tag += 1
        return self._frame()

    def increment_by(self, n: int) -> Command:
        return self.set_progress(self.current + n, self.total)

    def increment(self) -> Command:
        return self.increment_by(1)

    def reset(self) -> None:
        self.current = 0
        self.total = 0
        self.shown = 0.0
        self._tag += 1

    def set_label(self, label: str) -> None:
        self.label = label

    def set_width(self, width: int) -> None:
        self.width = max(1, width)

    def _frame(self) -> Command:
        progress_id, tag = self.id, self._tag
        return tick(self.frame_interval, lambda: ProgressFrame(progress_id, tag))

    def update(self, msg: Message) -> Tuple["Progress", Optional[Command]]:
        if not isinstance(msg, ProgressFrame) or msg.progress_id != self.id:
            return self, None
        if msg.tag != self._tag:
            return self, None
        target = self.percent()
        self.shown += (target - self.shown) * EASING
        if abs(target - self.shown) < SNAP_DISTANCE:
            self.shown = target
            return self, None
        return self, self._frame()

    def bar(self) -> Text:
        filled = int(round(self.shown * self.width))
        filled = min(self.width, max(0, filled))
        text = Text("█" * filled, style="progress.complete")
        text.append("░" * (self.width - filled), style="progress.remaining")
        return text

    def renderable(self, with_percent: bool = True) -> Text:
        text = Text()
        if self.label:
            text.append(self.label + "\n")
        text.append_text(self.bar())
        if with_percent:
            text.append(" %3.0f%%" % (self.percent() * 100))
        return text

    def view(self) -> str:
        return self.styles.render(self.renderable(with_percent=False), self.width + 2)

    def view_with_percent(self) -> str:
        return self.styles.render(self.renderable(), self.width + 8)
