"""
Item List

Scrollable, optionally filterable list with a single selection cursor.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from rich.console import Group
from rich.text import Text

from igor.wizard.keys import KeyMap, default_key_map
from igor.wizard.messages import Command, KeyPress, Message
from igor.wizard.ui import Styles


@dataclass
class ListItem:
    title: str
    description: str = ""
    value: Any = None
    locked: bool = False
    checked: Optional[bool] = None  # None renders without a checkbox

    def filter_value(self) -> str:
        return self.title


class ItemList:
    """Ordered items with a cursor.

    The cursor always sits on a visible item; it is only undefined when
    no item is visible.
    """

    def __init__(
        self,
        items: Optional[List[ListItem]] = None,
        title: str = "",
        width: int = 0,
        height: int = 0,
        key_map: Optional[KeyMap] = None,
        styles: Optional[Styles] = None
    ):
        self._items: List[ListItem] = list(items or [])
        self.title = title
        self.width = width
        self.height = height
        self.key_map = key_map or default_key_map()
        self.styles = styles or Styles()
        self.focused = True
        self.filtering_enabled = True
        self.filter_text = ""
        self.show_title = True
        self.show_status_bar = True
        self.show_help = False
        self._index = 0
        self._offset = 0

    # Items

    def items(self) -> List[ListItem]:
        return list(self._items)

    def visible_items(self) -> List[ListItem]:
        if not self.filtering_enabled or not self.filter_text:
            return list(self._items)
        needle = self.filter_text.lower()
        return [i for i in self._items if needle in i.filter_value().lower()]

    def set_items(self, items: List[ListItem]) -> None:
        self._items = list(items)
        self._clamp()

    def set_item(self, index: int, item: ListItem) -> None:
        if 0 <= index < len(self._items):
            self._items[index] = item

    def __len__(self) -> int:
        return len(self.visible_items())

    def is_empty(self) -> bool:
        return len(self) == 0

    # Selection

    def selected_index(self) -> int:
        """Cursor position among visible items, or -1 when there are none."""
        return -1 if self.is_empty() else self._index

    def selected_item(self) -> Optional[ListItem]:
        visible = self.visible_items()
        if not visible:
            return None
        return visible[self._index]

    def select(self, index: int) -> None:
        self._index = index
        self._clamp()

    def cursor_up(self, n: int = 1) -> None:
        self.select(self._index - n)

    def cursor_down(self, n: int = 1) -> None:
        self.select(self._index + n)

    def _clamp(self) -> None:
        count = len(self.visible_items())
        if count == 0:
            self._index = 0
            self._offset = 0
            return
        self._index = min(max(self._index, 0), count - 1)
        rows = self._rows()
        if self._index < self._offset:
            self._offset = self._index
        elif self._index >= self._offset + rows:
            self._offset = self._index - rows + 1
        self._offset = min(max(self._offset, 0), max(0, count - rows))

    # Layout and options

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._clamp()

    def set_title(self, title: str) -> None:
        self.title = title

    def enable_filtering(self) -> None:
        self.filtering_enabled = True

    def disable_filtering(self) -> None:
        self.filtering_enabled = False
        self.filter_text = ""
        self._clamp()

    def set_filter(self, text: str) -> None:
        if not self.filtering_enabled:
            return
        self.filter_text = text
        self._clamp()

    def set_show_status_bar(self, show: bool) -> None:
        self.show_status_bar = show

    def set_show_help(self, show: bool) -> None:
        self.show_help = show

    def _item_lines(self) -> int:
        return 2 if any(i.description for i in self._items) else 1

    def _chrome_lines(self) -> int:
        lines = 0
        if self.show_title and self.title:
            lines += 2
        if self.show_status_bar:
            lines += 2
        if self.show_help:
            lines += 2
        return lines

    def _rows(self) -> int:
        """Number of items that fit in the current height (all when unsized)."""
        if self.height <= 0:
            return max(1, len(self._items))
        return max(1, (self.height - self._chrome_lines()) // self._item_lines())

    # Messages

    def update(self, msg: Message) -> Tuple["ItemList", Optional[Command]]:
        if not isinstance(msg, KeyPress):
            return self, None
        key = msg.key
        km = self.key_map
        if km.up.matches(key):
            self.cursor_up()
        elif km.down.matches(key):
            self.cursor_down()
        elif km.page_up.matches(key):
            self.cursor_up(self._rows())
        elif km.page_down.matches(key):
            self.cursor_down(self._rows())
        elif km.home.matches(key):
            self.select(0)
        elif km.end.matches(key):
            self.select(len(self) - 1)
        return self, None

    # Rendering

    def renderable(self) -> Group:
        parts = []
        if self.show_title and self.title:
            parts.append(Text(self.title, style="title" if self.focused else "subtitle"))
            parts.append(Text(""))

        visible = self.visible_items()
        if not visible:
            parts.append(Text("No items.", style="muted"))
        rows = self._rows()
        for pos in range(self._offset, min(len(visible), self._offset + rows)):
            item = visible[pos]
            selected = pos == self._index
            cursor = "> " if selected and self.focused else "  "
            line = Text(cursor)
            if item.checked is not None:
                line.append("[x] " if item.checked else "[ ] ")
            style = "item.selected" if selected and self.focused else "item"
            if item.locked:
                style = "item.locked"
            line.append(item.title, style=style)
            if item.locked:
                line.append(" (required)", style="muted")
            parts.append(line)
            if item.description:
                parts.append(Text("    " + item.description, style="item.description"))

        if self.show_status_bar:
            parts.append(Text(""))
            status = f"{len(visible)} item" + ("" if len(visible) == 1 else "s")
            if self.filter_text:
                status += f" matching \"{self.filter_text}\""
            parts.append(Text(status, style="muted"))
        if self.show_help:
            parts.append(Text(""))
            parts.append(Text(
                f"{self.key_map.up.help} • {self.key_map.down.help}", style="help.desc"
            ))
        return Group(*parts)

    def view(self) -> str:
        return self.styles.render(self.renderable(), self.width)
