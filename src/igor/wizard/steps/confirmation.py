"""
Confirmation Step

Summarizes the chosen driver and components and lists anything that needs
attention before installing.
"""

from typing import List, Optional, Tuple

from rich.console import Group, RenderableType
from rich.text import Text

from igor.wizard.components import ButtonGroup, Panel
from igor.wizard.messages import (
    Command, KeyPress, Message, NavigateBackToSelection, StartInstallation, send,
)
from igor.wizard.schema import ComponentOption, DriverOption, GPUInfo
from igor.wizard.steps.base import StepView

INSTALL, GO_BACK = 0, 1


def installation_warnings(gpu_info: Optional[GPUInfo]) -> List[str]:
    """Conditions the user should know about before installing."""
    if gpu_info is None:
        return []
    warnings = []
    if gpu_info.nouveau_loaded:
        warnings.append("Nouveau driver is loaded and will be blacklisted (reboot required)")
    if gpu_info.kernel.secure_boot:
        warnings.append("Secure Boot is enabled; the kernel module must be signed")
    if not gpu_info.kernel.headers_installed:
        warnings.append("Kernel headers are missing and will be installed")
    if gpu_info.driver.installed and gpu_info.driver.driver_type == "nvidia":
        version = gpu_info.driver.version or "unknown version"
        warnings.append(f"Existing NVIDIA driver ({version}) will be replaced")
    return warnings


class ConfirmationView(StepView):
    title = "Confirm Installation"

    def __init__(
        self,
        *args,
        gpu_info: Optional[GPUInfo] = None,
        driver: Optional[DriverOption] = None,
        components: Tuple[ComponentOption, ...] = (),
        **kwargs
    ):
        super().__init__(*args, **kwargs)
        self.buttons = ButtonGroup(["Install", "Go Back"], styles=self.styles)
        self.summary = Panel("Summary", styles=self.styles)
        self.set_selection(gpu_info, driver, components)

    def set_selection(
        self,
        gpu_info: Optional[GPUInfo],
        driver: Optional[DriverOption],
        components: Tuple[ComponentOption, ...]
    ) -> None:
        self.gpu_info = gpu_info
        self.driver = driver
        self.components = tuple(components or ())
        self.warnings = installation_warnings(gpu_info)

        self.summary.clear_content()
        gpu = gpu_info.primary_gpu if gpu_info else None
        self.summary.append_content(f"GPU:        {gpu.name if gpu else 'unknown'}")
        self.summary.append_content(f"Driver:     {driver.title if driver else 'none selected'}")
        names = ", ".join(c.name for c in self.components) or "none"
        self.summary.append_content(f"Components: {names}")

        if self.warnings:
            self.footer.set_warning_status(f"{len(self.warnings)} item(s) need attention")
        else:
            self.footer.set_info_status("Ready to install")

    def on_resize(self) -> None:
        self.summary.set_size(self.content_width(), 0)

    def _install(self) -> Command:
        return send(StartInstallation(self.gpu_info, self.driver, self.components))

    def handle(self, msg: Message) -> Tuple[StepView, Optional[Command]]:
        if not isinstance(msg, KeyPress):
            return self, None
        key = msg.key
        km = self.key_map
        if key == "y":
            return self, self._install()
        if key == "n":
            return self, send(NavigateBackToSelection())
        if km.left.matches(key):
            self.buttons.previous()
        elif km.right.matches(key) or km.tab.matches(key):
            self.buttons.next()
        elif km.enter.matches(key) or km.space.matches(key):
            if self.buttons.focused_index == INSTALL:
                return self, self._install()
            return self, send(NavigateBackToSelection())
        return self, None

    def body(self) -> RenderableType:
        parts: list = [self.summary.renderable()]
        if self.warnings:
            warnings = Text("Warnings", style="warning")
            for w in self.warnings:
                warnings.append(f"\n  ⚠ {w}", style="warning")
            parts.extend([Text(""), warnings])
        parts.extend([
            Text(""),
            Text("Proceed with installation? (y/n)", style="muted"),
            self.buttons.renderable(),
        ])
        return Group(*parts)
