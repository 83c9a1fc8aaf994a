"""
Igor Key Bindings

Declarative table of named input bindings. Each binding can be enabled or
disabled independently; a disabled binding never matches.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Tuple


@dataclass
class Binding:
    """One logical action and the physical keys that trigger it."""
    keys: Tuple[str, ...]
    help_key: str = ""
    help_desc: str = ""
    enabled: bool = True

    def matches(self, key: str) -> bool:
        return self.enabled and key in self.keys

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    @property
    def help(self) -> str:
        """Rendered help entry, e.g. "↑/k up"."""
        return f"{self.help_key} {self.help_desc}".strip()


NAVIGATION = ("up", "down", "left", "right", "tab", "page_up", "page_down", "home", "end")
ACTIONS = ("enter", "back", "space")


@dataclass
class KeyMap:
    """All bindings used by the wizard."""
    up: Binding = field(default_factory=lambda: Binding(("up", "k"), "↑/k", "up"))
    down: Binding = field(default_factory=lambda: Binding(("down", "j"), "↓/j", "down"))
    left: Binding = field(default_factory=lambda: Binding(("left", "h"), "←/h", "left"))
    right: Binding = field(default_factory=lambda: Binding(("right", "l"), "→/l", "right"))
    enter: Binding = field(default_factory=lambda: Binding(("enter",), "enter", "select"))
    back: Binding = field(default_factory=lambda: Binding(("esc", "backspace"), "esc", "back"))
    tab: Binding = field(default_factory=lambda: Binding(("tab",), "tab", "next section"))
    space: Binding = field(default_factory=lambda: Binding((" ", "space"), "space", "toggle"))
    page_up: Binding = field(default_factory=lambda: Binding(("pgup",), "pgup", "page up"))
    page_down: Binding = field(default_factory=lambda: Binding(("pgdown",), "pgdn", "page down"))
    home: Binding = field(default_factory=lambda: Binding(("home",), "home", "go to start"))
    end: Binding = field(default_factory=lambda: Binding(("end",), "end", "go to end"))
    help: Binding = field(default_factory=lambda: Binding(("?",), "?", "toggle help"))
    quit: Binding = field(default_factory=lambda: Binding(("q", "ctrl+c"), "q", "quit"))

    def bindings(self) -> Dict[str, Binding]:
        return {
            "up": self.up, "down": self.down, "left": self.left, "right": self.right,
            "enter": self.enter, "back": self.back, "tab": self.tab, "space": self.space,
            "page_up": self.page_up, "page_down": self.page_down,
            "home": self.home, "end": self.end, "help": self.help, "quit": self.quit,
        }

    def short_help(self) -> List[Binding]:
        return [self.up, self.down, self.enter, self.back, self.quit, self.help]

    def full_help(self) -> List[List[Binding]]:
        return [
            [self.up, self.down, self.left, self.right],
            [self.enter, self.space, self.tab, self.back],
            [self.page_up, self.page_down, self.home, self.end],
            [self.help, self.quit],
        ]

    def navigation_keys(self) -> List[Binding]:
        return [getattr(self, name) for name in NAVIGATION]

    def action_keys(self) -> List[Binding]:
        return [getattr(self, name) for name in ACTIONS]

    def set_enabled(self, name: str, enabled: bool) -> None:
        """Enable or disable a binding by name; unknown names are ignored."""
        binding = self.bindings().get(name)
        if binding is not None:
            binding.set_enabled(enabled)

    def disable_navigation(self) -> None:
        for b in self.navigation_keys():
            b.set_enabled(False)

    def enable_navigation(self) -> None:
        for b in self.navigation_keys():
            b.set_enabled(True)

    def disable_actions(self) -> None:
        for b in self.action_keys():
            b.set_enabled(False)

    def enable_actions(self) -> None:
        for b in self.action_keys():
            b.set_enabled(True)

    def disable_all(self) -> None:
        """Disable everything except quit."""
        for name, b in self.bindings().items():
            if name != "quit":
                b.set_enabled(False)

    def enable_all(self) -> None:
        for b in self.bindings().values():
            b.set_enabled(True)

    def copy(self) -> "KeyMap":
        """Independent copy; toggling bindings on it leaves self untouched."""
        return KeyMap(**{name: replace(b) for name, b in self.bindings().items()})


def default_key_map() -> KeyMap:
    return KeyMap()
