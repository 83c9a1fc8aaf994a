"""
Installing Step

Tracks installation steps reported by the installer collaborator: a spinner
for the running step, an overall progress bar, per-step status and a short
tail of the installer log.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

from rich.console import Group, RenderableType
from rich.text import Text

from igor.wizard.components import Panel, Progress, Spinner
from igor.wizard.messages import (
    Command, InstallationCancelled, InstallationComplete, InstallationLog,
    InstallationStepCompleted, InstallationStepFailed, InstallationStepStarted,
    KeyPress, Message, NavigateToComplete, NavigateToError, ProgressFrame,
    ProgressUpdate, SpinnerTick, batch, send,
)
from igor.wizard.schema import ComponentOption, DriverOption, GPUInfo
from igor.wizard.steps.base import StepView


class StepStatus(Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETE = "complete"
    FAILED = "failed"
    SKIPPED = "skipped"


STATUS_ICONS = {
    StepStatus.PENDING: ("○", "muted"),
    StepStatus.COMPLETE: ("✓", "success"),
    StepStatus.FAILED: ("✗", "error"),
    StepStatus.SKIPPED: ("⊘", "muted"),
}


@dataclass
class InstallStep:
    id: str
    description: str
    status: StepStatus = StepStatus.PENDING
    started_at: Optional[float] = None
    duration: Optional[float] = None


class Phase(Enum):
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"
    CANCELLED = "cancelled"


def build_steps(components: Tuple[ComponentOption, ...]) -> List[InstallStep]:
    steps = [
        InstallStep("prepare", "Preparing system"),
        InstallStep("blacklist", "Blacklisting Nouveau driver"),
        InstallStep("update", "Updating package lists"),
    ]
    for c in components:
        steps.append(InstallStep(f"install_{c.id}", f"Installing {c.name}"))
    steps.append(InstallStep("configure", "Configuring driver"))
    steps.append(InstallStep("verify", "Verifying installation"))
    return steps


class InstallingView(StepView):
    title = "Installing"

    def __init__(
        self,
        *args,
        frame_interval: float = 0.1,
        max_log_lines: int = 10,
        **kwargs
    ):
        super().__init__(*args, **kwargs)
        self.spinner = Spinner(styles=self.styles, interval=frame_interval)
        self.progress = Progress(styles=self.styles)
        self.log_panel = Panel("Log", styles=self.styles)
        self.max_log_lines = max_log_lines
        self.gpu_info: Optional[GPUInfo] = None
        self.driver: Optional[DriverOption] = None
        self.components: Tuple[ComponentOption, ...] = ()
        self.steps: List[InstallStep] = []
        self.logs: List[str] = []
        self.current = -1
        self.phase = Phase.RUNNING
        self.error: Any = None
        self._clock = time.monotonic

    def start(
        self,
        gpu_info: Optional[GPUInfo],
        driver: Optional[DriverOption],
        components: Tuple[ComponentOption, ...]
    ) -> Command:
        """Rebuild the step list and start the animations."""
        self.gpu_info = gpu_info
        self.driver = driver
        self.components = tuple(components or ())
        self.steps = build_steps(self.components)
        self.logs = []
        self.current = -1
        self.phase = Phase.RUNNING
        self.error = None
        self.progress.reset()
        self.spinner.set_message("Starting installation...")
        self.footer.set_info_status("Installing, press x to cancel")
        return batch(self.spinner.show(), self.progress.set_progress(0, len(self.steps)))

    def on_resize(self) -> None:
        self.progress.set_width(max(10, min(60, self.content_width() - 8)))
        self.log_panel.set_size(self.content_width(), 0)

    def _valid(self, index: int) -> bool:
        return 0 <= index < len(self.steps)

    def _completed_count(self) -> int:
        return sum(1 for s in self.steps if s.status in (StepStatus.COMPLETE, StepStatus.SKIPPED))

    def _finish_timer(self, step: InstallStep) -> None:
        if step.started_at is not None:
            step.duration = self._clock() - step.started_at

    @property
    def failed_step(self) -> str:
        if self._valid(self.current):
            return self.steps[self.current].description
        return ""

    def handle(self, msg: Message) -> Tuple[StepView, Optional[Command]]:
        if isinstance(msg, SpinnerTick):
            _, cmd = self.spinner.update(msg)
            return self, cmd
        if isinstance(msg, ProgressFrame):
            _, cmd = self.progress.update(msg)
            return self, cmd

        if isinstance(msg, InstallationStepStarted):
            if self._valid(msg.index) and self.phase is Phase.RUNNING:
                step = self.steps[msg.index]
                step.status = StepStatus.RUNNING
                step.started_at = self._clock()
                self.current = msg.index
                self.spinner.set_message(step.description)
            return self, None

        if isinstance(msg, InstallationStepCompleted):
            if not self._valid(msg.index):
                return self, None
            step = self.steps[msg.index]
            step.status = StepStatus.COMPLETE
            self._finish_timer(step)
            return self, self.progress.set_progress(self._completed_count(), len(self.steps))

        if isinstance(msg, InstallationStepFailed):
            if self._valid(msg.index):
                step = self.steps[msg.index]
                step.status = StepStatus.FAILED
                self._finish_timer(step)
                self.current = msg.index
            self._fail(msg.err)
            return self, None

        if isinstance(msg, InstallationLog):
            self.logs.append(msg.text)
            self.logs = self.logs[-self.max_log_lines:]
            return self, None

        if isinstance(msg, ProgressUpdate):
            if msg.text:
                self.progress.set_label(msg.text)
            return self, self.progress.set_progress(msg.current, msg.total)

        if isinstance(msg, InstallationComplete):
            if msg.success:
                self.phase = Phase.DONE
                self.spinner.hide()
                self.footer.set_success_status("Installation finished, press enter to continue")
                return self, self.progress.set_progress(len(self.steps), len(self.steps))
            self._fail(msg.text or None)
            return self, None

        if isinstance(msg, InstallationCancelled):
            if self.phase is Phase.RUNNING:
                self.phase = Phase.CANCELLED
                self.error = "Installation cancelled"
                self.spinner.hide()
                for step in self.steps:
                    if step.status in (StepStatus.PENDING, StepStatus.RUNNING):
                        step.status = StepStatus.SKIPPED
                self.footer.set_warning_status("Installation cancelled, press enter to continue")
            return self, None

        if isinstance(msg, KeyPress):
            return self, self._on_key(msg.key)

        return self, None

    def _fail(self, err: Any) -> None:
        self.phase = Phase.FAILED
        self.error = err
        self.spinner.hide()
        self.footer.set_error_status("Installation failed, press enter for details")

    def _on_key(self, key: str) -> Optional[Command]:
        if self.phase is Phase.RUNNING:
            if key == "x":
                return send(InstallationCancelled())
            return None
        if not self.key_map.enter.matches(key):
            return None
        if self.phase is Phase.DONE:
            return send(NavigateToComplete(self.gpu_info, self.driver, self.components))
        return send(NavigateToError(self.error, self.failed_step))

    def _step_lines(self) -> Text:
        text = Text()
        for i, step in enumerate(self.steps):
            if i:
                text.append("\n")
            if step.status is StepStatus.RUNNING:
                icon, style = self.spinner.current_frame, "spinner"
            else:
                icon, style = STATUS_ICONS[step.status]
            text.append(f"  {icon} ", style=style)
            text.append(step.description, style="muted" if step.status is StepStatus.PENDING else "text")
            if step.duration is not None:
                text.append(f" ({step.duration:.1f}s)", style="muted")
        return text

    def body(self) -> RenderableType:
        parts: list = []
        if self.phase is Phase.RUNNING:
            parts.append(self.spinner.renderable())
        elif self.phase is Phase.DONE:
            parts.append(Text("✓ Installation finished", style="success"))
        elif self.phase is Phase.CANCELLED:
            parts.append(Text("⊘ Installation cancelled", style="warning"))
        else:
            err = "Unknown error" if self.error is None else str(self.error)
            parts.append(Text(f"✗ {err}", style="error"))
        parts.extend([Text(""), self.progress.renderable(), Text(""), self._step_lines()])
        if self.logs:
            self.log_panel.set_content("\n".join(self.logs))
            parts.extend([Text(""), self.log_panel.renderable()])
        return Group(*parts)
