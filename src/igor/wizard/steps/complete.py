"""
Complete Step

Success summary with next steps and the option to reboot.
"""

from typing import List, Optional, Tuple

from rich.console import Group, RenderableType
from rich.text import Text

from igor.wizard.components import ButtonGroup
from igor.wizard.messages import (
    Command, ExitRequested, KeyPress, Message, RebootRequested, send,
)
from igor.wizard.schema import ComponentOption, DriverOption, GPUInfo
from igor.wizard.steps.base import StepView

REBOOT, EXIT = 0, 1


class CompleteView(StepView):
    title = "Installation Complete"

    def __init__(
        self,
        *args,
        gpu_info: Optional[GPUInfo] = None,
        driver: Optional[DriverOption] = None,
        components: Tuple[ComponentOption, ...] = (),
        **kwargs
    ):
        super().__init__(*args, **kwargs)
        self.buttons = ButtonGroup(["Reboot Now", "Exit"], styles=self.styles)
        self.set_result(gpu_info, driver, components)

    def set_result(
        self,
        gpu_info: Optional[GPUInfo],
        driver: Optional[DriverOption],
        components: Tuple[ComponentOption, ...]
    ) -> None:
        self.gpu_info = gpu_info
        self.driver = driver
        self.components = tuple(components or ())
        self.needs_reboot = bool(gpu_info and gpu_info.nouveau_loaded)
        if self.needs_reboot:
            self.footer.set_warning_status("A reboot is required to load the new driver")
        else:
            self.footer.set_success_status("Driver installed")

    def next_steps(self) -> List[str]:
        ids = {c.id for c in self.components}
        steps = []
        if self.needs_reboot:
            steps.append("Reboot your system to load the new driver")
        steps.append("Run 'nvidia-smi' to verify the driver is working")
        if "cuda" in ids:
            steps.append("Run 'nvcc --version' to check the CUDA toolkit")
        if "settings" in ids:
            steps.append("Launch 'nvidia-settings' to configure displays")
        return steps

    def handle(self, msg: Message) -> Tuple[StepView, Optional[Command]]:
        if not isinstance(msg, KeyPress):
            return self, None
        key = msg.key
        km = self.key_map
        if km.left.matches(key):
            self.buttons.previous()
        elif km.right.matches(key) or km.tab.matches(key):
            self.buttons.next()
        elif km.enter.matches(key) or km.space.matches(key):
            if self.buttons.focused_index == REBOOT:
                return self, send(RebootRequested())
            return self, send(ExitRequested())
        return self, None

    def body(self) -> RenderableType:
        summary = Text("✓ NVIDIA driver installed successfully", style="success")
        if self.driver is not None:
            summary.append(f"\n\n  Driver:     {self.driver.title}")
        if self.components:
            summary.append("\n  Components: " + ", ".join(c.name for c in self.components))

        steps = Text("Next steps", style="highlight")
        for i, step in enumerate(self.next_steps(), start=1):
            steps.append(f"\n  {i}. {step}", style="text")

        parts: list = [summary, Text(""), steps, Text("")]
        if self.needs_reboot:
            parts.append(Text("⚠ Reboot required before the driver can be used", style="warning"))
            parts.append(Text(""))
        parts.append(self.buttons.renderable())
        return Group(*parts)
