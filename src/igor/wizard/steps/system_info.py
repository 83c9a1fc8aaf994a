"""
System Info Step

Detailed breakdown of what detection found.
"""

from typing import Optional, Tuple

from rich.console import Group, RenderableType
from rich.text import Text

from igor.wizard.components import Panel
from igor.wizard.messages import Command, KeyPress, Message, NavigateToDriverSelection, send
from igor.wizard.schema import GPUInfo
from igor.wizard.steps.base import StepView


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


class SystemInfoView(StepView):
    title = "System Information"

    def __init__(self, *args, gpu_info: Optional[GPUInfo] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.gpu_info = gpu_info
        self.panels = [
            Panel("Graphics", styles=self.styles),
            Panel("Driver", styles=self.styles),
            Panel("System", styles=self.styles),
            Panel("Validation", styles=self.styles),
        ]
        self._fill()

    def set_gpu_info(self, gpu_info: Optional[GPUInfo]) -> None:
        self.gpu_info = gpu_info
        self._fill()

    def on_resize(self) -> None:
        for panel in self.panels:
            panel.set_size(self.content_width(), 0)

    def _fill(self) -> None:
        graphics, driver, system, validation = self.panels
        for panel in self.panels:
            panel.clear_content()

        info = self.gpu_info
        if info is None:
            graphics.set_content("No detection data")
            return

        if not info.gpus:
            graphics.set_content("No NVIDIA GPU found")
        for gpu in info.gpus:
            graphics.append_content(gpu.name)
            if gpu.architecture:
                graphics.append_content(f"  Architecture: {gpu.architecture}")
            if gpu.device_id:
                graphics.append_content(f"  Device ID:    {gpu.device_id}")
            if gpu.pci_address:
                graphics.append_content(f"  PCI address:  {gpu.pci_address}")

        d = info.driver
        if d.installed:
            driver.append_content(f"Installed:    {d.driver_type or 'unknown'} {d.version}".rstrip())
            if d.cuda_version:
                driver.append_content(f"CUDA:         {d.cuda_version}")
        else:
            driver.append_content("Installed:    none")
        driver.append_content(f"Nouveau:      {'loaded' if info.nouveau_loaded else 'not loaded'}")

        k = info.kernel
        if info.distribution:
            system.append_content(f"Distribution: {info.distribution}")
        system.append_content(f"Kernel:       {k.version or 'unknown'}")
        system.append_content(f"Headers:      {_yes_no(k.headers_installed)}")
        system.append_content(f"Secure Boot:  {_yes_no(k.secure_boot)}")

        if not info.has_nvidia_gpu:
            validation.append_content("✗ No NVIDIA GPU detected")
        for error in info.errors:
            validation.append_content(f"✗ {error}")
        for warning in info.warnings:
            validation.append_content(f"⚠ {warning}")
        if info.is_valid and not info.warnings:
            validation.set_content("✓ System meets all requirements")

    def handle(self, msg: Message) -> Tuple[StepView, Optional[Command]]:
        if isinstance(msg, KeyPress) and (
            self.key_map.enter.matches(msg.key) or self.key_map.space.matches(msg.key)
        ):
            return self, send(NavigateToDriverSelection(self.gpu_info))
        return self, None

    def body(self) -> RenderableType:
        parts = [p.renderable() for p in self.panels if p.has_content()]
        parts.append(Text("Press enter to continue to driver selection", style="muted"))
        return Group(*parts)
