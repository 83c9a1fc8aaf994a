"""
Igor Wizard View States

The closed set of wizard steps. Exactly one is current at any time.
"""

from enum import Enum
from typing import Optional


class ViewState(Enum):
    WELCOME = "welcome"
    DETECTING = "detecting"
    SYSTEM_INFO = "system_info"
    DRIVER_SELECTION = "driver_selection"
    CONFIRMATION = "confirmation"
    INSTALLING = "installing"
    COMPLETE = "complete"
    ERROR = "error"

    @property
    def label(self) -> str:
        return _LABELS[self]

    def __str__(self) -> str:
        return self.label

    @classmethod
    def parse(cls, name: str) -> Optional["ViewState"]:
        """Look up a state by value, member name or label, ignoring case."""
        key = str(name).strip().lower().replace("-", "_")
        for state in cls:
            if key in (state.value, state.name.lower(), state.label.lower()):
                return state
        return None


_LABELS = {
    ViewState.WELCOME: "Welcome",
    ViewState.DETECTING: "Detecting",
    ViewState.SYSTEM_INFO: "SystemInfo",
    ViewState.DRIVER_SELECTION: "DriverSelection",
    ViewState.CONFIRMATION: "Confirmation",
    ViewState.INSTALLING: "Installing",
    ViewState.COMPLETE: "Complete",
    ViewState.ERROR: "Error",
}
