"""
Buttons

Single buttons and a focus-managed horizontal group.
"""

from typing import List, Optional

from rich.text import Text

from igor.wizard.ui import Styles


class Button:
    """A single labelled button with focus and disabled state."""

    def __init__(self, label: str, focused: bool = False, disabled: bool = False):
        self.label = label
        self.focused = focused
        self.disabled = disabled

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False

    def toggle(self) -> None:
        """Flip focus."""
        self.focused = not self.focused

    def enable(self) -> None:
        self.disabled = False

    def disable(self) -> None:
        self.disabled = True

    def set_label(self, label: str) -> None:
        self.label = label

    def renderable(self) -> Text:
        """Label with a cursor when focused, styled by state."""
        if self.disabled:
            style = "button.disabled"
        elif self.focused:
            style = "button.focused"
        else:
            style = "button"
        marker = ">" if self.focused and not self.disabled else " "
        return Text(f"{marker} {self.label} ", style=style)


class ButtonGroup:
    """Ordered buttons with exactly one focused (when non-empty).

    Navigation wraps; on empty or single-button groups it does nothing.
    """

    def __init__(self, labels: List[str], styles: Optional[Styles] = None):
        self.styles = styles or Styles()
        self.buttons: List[Button] = [Button(label) for label in labels]
        self.focused_index = 0
        if self.buttons:
            self.buttons[0].focus()

    def __len__(self) -> int:
        return len(self.buttons)

    def _move(self, delta: int) -> None:
        """Shift focus by delta, wrapping; no-op for 0 or 1 buttons."""
        if len(self.buttons) <= 1:
            return
        self.buttons[self.focused_index].blur()
        self.focused_index = (self.focused_index + delta) % len(self.buttons)
        self.buttons[self.focused_index].focus()

    def next(self) -> None:
        """Focus the next button, wrapping to the first."""
        self._move(1)

    def previous(self) -> None:
        """Focus the previous button, wrapping to the last."""
        self._move(-1)

    def focus(self, index: int) -> None:
        """Focus button at index; out-of-range values are ignored."""
        if not 0 <= index < len(self.buttons):
            return
        self.buttons[self.focused_index].blur()
        self.focused_index = index
        self.buttons[index].focus()

    def focused_label(self) -> str:
        """Label of the focused button, or "" for an empty group."""
        if not self.buttons:
            return ""
        return self.buttons[self.focused_index].label

    def button(self, index: int) -> Optional[Button]:
        """Button at index, or None when out of range."""
        if 0 <= index < len(self.buttons):
            return self.buttons[index]
        return None

    def set_labels(self, labels: List[str]) -> None:
        """Replace the buttons, keeping focus (clamped) where possible."""
        if not labels:
            self.buttons = []
            self.focused_index = 0
            return
        index = min(self.focused_index, len(labels) - 1)
        self.buttons = [Button(label) for label in labels]
        self.focused_index = index
        self.buttons[index].focus()

    def disable_all(self) -> None:
        for b in self.buttons:
            b.disable()

    def enable_all(self) -> None:
        for b in self.buttons:
            b.enable()

    def renderable(self, vertical: bool = False) -> Text:
        """Buttons joined on one line, or one per line when vertical."""
        separator = "\n" if vertical else "  "
        return Text(separator).join(b.renderable() for b in self.buttons)

    def view(self) -> str:
        return self.styles.render(self.renderable(), 80)

    def view_vertical(self) -> str:
        return self.styles.render(self.renderable(vertical=True), 80)
