"""
Detection Step

Shows hardware detection progress reported by the detection collaborator
and a summary once it finishes.
"""

from enum import Enum
from typing import Any, Optional, Tuple

from rich.console import Group, RenderableType
from rich.text import Text

from igor.wizard.components import Spinner
from igor.wizard.exceptions import DetectionError
from igor.wizard.messages import (
    Command, DetectionComplete, DetectionFailed, DetectionStep, KeyPress,
    Message, NavigateToDriverSelection, NavigateToError, NavigateToSystemInfo,
    SpinnerTick, send,
)
from igor.wizard.schema import GPUInfo
from igor.wizard.steps.base import StepView

DETECTION_STEPS = [
    "Scanning PCI devices...",
    "Identifying NVIDIA GPUs...",
    "Checking installed drivers...",
    "Detecting kernel version...",
    "Checking Nouveau status...",
    "Validating system requirements...",
]

FAILED_STEP = "Hardware detection"


class DetectionState(Enum):
    DETECTING = "detecting"
    COMPLETE = "complete"
    ERROR = "error"


class DetectionView(StepView):
    title = "Detecting System"

    def __init__(self, *args, frame_interval: float = 0.1, **kwargs):
        super().__init__(*args, **kwargs)
        self.spinner = Spinner(DETECTION_STEPS[0], styles=self.styles, interval=frame_interval)
        self.state = DetectionState.DETECTING
        self.current_step = 0
        self.gpu_info: Optional[GPUInfo] = None
        self.error: Any = None

    def start(self) -> Command:
        """Reset to the first step and start the spinner."""
        self.state = DetectionState.DETECTING
        self.current_step = 0
        self.gpu_info = None
        self.error = None
        self.spinner.set_message(DETECTION_STEPS[0])
        self.footer.set_info_status("Detecting hardware...")
        return self.spinner.show()

    def init(self) -> Optional[Command]:
        return self.start()

    def _fail(self, err: Any) -> None:
        self.state = DetectionState.ERROR
        self.error = err
        self.spinner.hide()
        self.footer.set_error_status("Detection failed, press enter for details")

    def handle(self, msg: Message) -> Tuple[StepView, Optional[Command]]:
        if isinstance(msg, SpinnerTick):
            _, cmd = self.spinner.update(msg)
            return self, cmd

        if isinstance(msg, DetectionStep):
            if self.state is DetectionState.DETECTING:
                self.current_step = min(max(msg.step, 0), len(DETECTION_STEPS) - 1)
                self.spinner.set_message(DETECTION_STEPS[self.current_step])
            return self, None

        if isinstance(msg, DetectionComplete):
            if msg.success:
                self.state = DetectionState.COMPLETE
                self.gpu_info = msg.gpu_info
                self.current_step = len(DETECTION_STEPS)
                self.spinner.hide()
                self.footer.set_success_status("Detection complete")
            else:
                self._fail(msg.error if msg.error is not None else DetectionError(
                    "Hardware detection did not complete", component="GPU"))
            return self, None

        if isinstance(msg, DetectionFailed):
            self._fail(msg.err)
            return self, None

        if isinstance(msg, KeyPress):
            return self, self._on_key(msg.key)

        return self, None

    def _on_key(self, key: str) -> Optional[Command]:
        if self.state is DetectionState.COMPLETE:
            if self.key_map.enter.matches(key):
                return send(NavigateToDriverSelection(self.gpu_info))
            if key == "i":
                return send(NavigateToSystemInfo(self.gpu_info))
        elif self.state is DetectionState.ERROR and self.key_map.enter.matches(key):
            return send(NavigateToError(self.error, FAILED_STEP))
        return None

    def _steps(self) -> Text:
        text = Text()
        for i, label in enumerate(DETECTION_STEPS):
            if i:
                text.append("\n")
            if i < self.current_step:
                text.append("  ✓ ", style="success")
                text.append(label, style="muted")
            elif i == self.current_step and self.state is DetectionState.DETECTING:
                text.append(f"  {self.spinner.current_frame} ", style="spinner")
                text.append(label)
            elif i == self.current_step and self.state is DetectionState.ERROR:
                text.append("  ✗ ", style="error")
                text.append(label)
            else:
                text.append("  ○ ", style="muted")
                text.append(label, style="muted")
        return text

    def _summary(self) -> RenderableType:
        if self.state is DetectionState.ERROR:
            err = "Unknown error" if self.error is None else str(self.error)
            return Group(
                Text("✗ Detection failed", style="error"),
                Text(err),
                Text(""),
                Text("Press enter to see troubleshooting options", style="muted"),
            )
        if self.state is DetectionState.DETECTING:
            return Text("")

        info = self.gpu_info
        text = Text()
        if info is None or not info.gpus:
            text.append("⚠ No NVIDIA GPU detected", style="warning")
        else:
            count = len(info.gpus)
            text.append(f"✓ Found {count} NVIDIA GPU{'s' if count != 1 else ''}", style="success")
            for gpu in info.gpus:
                text.append(f"\n    {gpu.name}")
                if gpu.architecture:
                    text.append(f" ({gpu.architecture})", style="muted")
        if info is not None:
            for warning in info.warnings:
                text.append(f"\n⚠ {warning}", style="warning")
            for error in info.errors:
                text.append(f"\n✗ {error}", style="error")
        text.append("\n\nPress enter to choose a driver, i for system details", style="muted")
        return text

    def body(self) -> RenderableType:
        return Group(self._steps(), Text(""), self._summary())
