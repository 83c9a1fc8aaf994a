"""
Driver Selection Step

Choose a driver branch and the components to install with it. Tab moves
focus between the driver list, the component list and the buttons.
"""

from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from rich.console import Group, RenderableType
from rich.text import Text

from igor.wizard.components import ButtonGroup, ItemList, ListItem
from igor.wizard.messages import (
    Command, KeyPress, Message, NavigateToConfirmation, navigate, send,
    set_status,
)
from igor.wizard.schema import (
    DEFAULT_COMPONENTS, DEFAULT_DRIVERS, ComponentOption, DriverOption, GPUInfo,
)
from igor.wizard.states import ViewState
from igor.wizard.steps.base import StepView

DRIVERS, COMPONENTS, BUTTONS = 0, 1, 2
SECTIONS = 3

CONTINUE, BACK = 0, 1


class SelectionView(StepView):
    title = "Select Driver"

    def __init__(
        self,
        *args,
        gpu_info: Optional[GPUInfo] = None,
        drivers: Optional[List[DriverOption]] = None,
        components: Optional[List[ComponentOption]] = None,
        **kwargs
    ):
        super().__init__(*args, **kwargs)
        self.gpu_info = gpu_info
        self.focus = DRIVERS

        drivers = list(drivers) if drivers else list(DEFAULT_DRIVERS)
        self.driver_list = ItemList(
            [ListItem(d.title, d.description, d) for d in drivers],
            title="Driver version",
            key_map=self.key_map,
            styles=self.styles,
        )
        recommended = next((i for i, d in enumerate(drivers) if d.recommended), 0)
        self.driver_list.select(recommended)

        self._components = list(components) if components else list(DEFAULT_COMPONENTS)
        self._checked: Dict[str, bool] = {
            c.id: c.selected or c.required for c in self._components
        }
        self.component_list = ItemList(
            title="Components",
            key_map=self.key_map,
            styles=self.styles,
        )
        self._refresh_components()

        for lst in (self.driver_list, self.component_list):
            lst.disable_filtering()
            lst.set_show_status_bar(False)

        self.buttons = ButtonGroup(["Continue", "Back"], styles=self.styles)
        self._apply_focus()
        self.footer.set_info_status("tab: next section • space: toggle component")

    def set_gpu_info(self, gpu_info: Optional[GPUInfo]) -> None:
        self.gpu_info = gpu_info

    def on_resize(self) -> None:
        # driver list gets the larger share of the height
        usable = max(0, self.height - 12)
        self.driver_list.set_size(self.content_width(), usable // 2 + 2)
        self.component_list.set_size(self.content_width(), usable - usable // 2 + 2)

    def _refresh_components(self) -> None:
        self.component_list.set_items([
            ListItem(c.name, c.description, c, locked=c.required, checked=self._checked[c.id])
            for c in self._components
        ])

    def _apply_focus(self) -> None:
        self.driver_list.focused = self.focus == DRIVERS
        self.component_list.focused = self.focus == COMPONENTS
        if self.focus == BUTTONS:
            self.buttons.enable_all()
        else:
            self.buttons.disable_all()

    def set_key_map(self, key_map) -> None:
        super().set_key_map(key_map)
        self.driver_list.key_map = key_map
        self.component_list.key_map = key_map

    # Selection

    def selected_driver(self) -> Optional[DriverOption]:
        item = self.driver_list.selected_item()
        return item.value if item else None

    def selected_components(self) -> Tuple[ComponentOption, ...]:
        return tuple(
            replace(c, selected=True) for c in self._components if self._checked[c.id]
        )

    def toggle_component(self, index: int) -> Optional[Command]:
        """Flip a component's checkbox.

        Required components stay checked; trying to clear one returns a
        status command explaining why.
        """
        if not 0 <= index < len(self._components):
            return None
        component = self._components[index]
        if component.required:
            return set_status(f"{component.name} is required")
        self._checked[component.id] = not self._checked[component.id]
        self._refresh_components()
        return None

    def _confirm(self) -> Command:
        return send(NavigateToConfirmation(
            self.gpu_info, self.selected_driver(), self.selected_components()
        ))

    # Messages

    def handle(self, msg: Message) -> Tuple[StepView, Optional[Command]]:
        if not isinstance(msg, KeyPress):
            return self, None
        key = msg.key
        km = self.key_map

        if km.tab.matches(key):
            self.focus = (self.focus + 1) % SECTIONS
            self._apply_focus()
            return self, None
        if key == "shift+tab":
            self.focus = (self.focus - 1) % SECTIONS
            self._apply_focus()
            return self, None

        if self.focus == DRIVERS:
            if km.enter.matches(key):
                self.focus = COMPONENTS
                self._apply_focus()
                return self, None
            self.driver_list.update(msg)
            return self, None

        if self.focus == COMPONENTS:
            if km.space.matches(key):
                return self, self.toggle_component(self.component_list.selected_index())
            if km.enter.matches(key):
                self.focus = BUTTONS
                self._apply_focus()
                return self, None
            self.component_list.update(msg)
            return self, None

        if km.left.matches(key) or km.up.matches(key):
            self.buttons.previous()
        elif km.right.matches(key) or km.down.matches(key):
            self.buttons.next()
        elif km.enter.matches(key) or km.space.matches(key):
            if self.buttons.focused_index == CONTINUE:
                return self, self._confirm()
            return self, navigate(ViewState.WELCOME)
        return self, None

    def body(self) -> RenderableType:
        gpu = self.gpu_info.primary_gpu if self.gpu_info else None
        target = Text("Installing for: ", style="muted")
        target.append(gpu.name if gpu else "unknown GPU")
        return Group(
            target,
            Text(""),
            self.driver_list.renderable(),
            Text(""),
            self.component_list.renderable(),
            Text(""),
            self.buttons.renderable(),
        )
