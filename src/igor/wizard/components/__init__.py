"""
Igor Wizard Components

Interactive primitives composed by the step views.
"""

from igor.wizard.components.button import Button, ButtonGroup
from igor.wizard.components.footer import Footer
from igor.wizard.components.header import Header
from igor.wizard.components.item_list import ItemList, ListItem
from igor.wizard.components.panel import Panel
from igor.wizard.components.progress import Progress
from igor.wizard.components.spinner import Spinner

__all__ = [
    "Button", "ButtonGroup", "Footer", "Header", "ItemList", "ListItem",
    "Panel", "Progress", "Spinner",
]
