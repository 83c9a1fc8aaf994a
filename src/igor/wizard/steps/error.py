"""
Error Step

Shows what failed, the error as reported, and troubleshooting tips for the
failed step. Always offers Retry and Exit.
"""

from typing import Any, List, Optional, Tuple

from rich.console import Group, RenderableType
from rich.text import Text

from igor.wizard.components import ButtonGroup, Panel
from igor.wizard.exceptions import DetectionError, IgorError, InstallationError
from igor.wizard.messages import (
    Command, ErrorExitRequested, KeyPress, Message, RetryRequested, send,
)
from igor.wizard.steps.base import StepView

UNKNOWN_ERROR = "Unknown error"

RETRY, EXIT = 0, 1

# Matched in order against the lowercased failed step label
TROUBLESHOOTING = [
    (("blacklist", "nouveau"), [
        "Check /etc/modprobe.d/ for conflicting blacklist files",
        "Run 'sudo update-initramfs -u' and reboot",
    ]),
    (("update", "package"), [
        "Check your network connection",
        "Run 'sudo apt update' manually to see repository errors",
    ]),
    (("configur",), [
        "Check /etc/X11/xorg.conf for stale configuration",
        "Run 'sudo nvidia-xconfig' to regenerate the configuration",
    ]),
    (("verif",), [
        "Reboot and run 'nvidia-smi' again",
        "Check 'dmesg | grep -i nvidia' for module load errors",
        "If Secure Boot is enabled, enroll the module signing key",
    ]),
    (("detect", "hardware"), [
        "Confirm the GPU is visible with 'lspci | grep -i nvidia'",
        "Run the wizard with sudo so PCI and module data is readable",
    ]),
    (("install",), [
        "Make sure kernel headers for the running kernel are installed",
        "Check free disk space with 'df -h'",
        "Remove conflicting packages with 'sudo apt purge nvidia-*'",
    ]),
]

DEFAULT_TIPS = [
    "Re-run the wizard with IGOR_DEBUG=1 for detailed logs",
    "Check the system log with 'journalctl -xe'",
]


def troubleshooting_tips(failed_step: str) -> List[str]:
    label = (failed_step or "").lower()
    for keywords, tips in TROUBLESHOOTING:
        if any(k in label for k in keywords):
            return list(tips)
    return list(DEFAULT_TIPS)


def error_text(err: Any) -> str:
    """Error as shown to the user; None becomes "Unknown error"."""
    if err is None:
        return UNKNOWN_ERROR
    if isinstance(err, IgorError):
        return err.message
    text = str(err)
    return text if text else type(err).__name__


def error_title(failed_step: str, err: Any = None) -> str:
    """Heading for the error step, named after what failed."""
    label = (failed_step or "").lower()
    if isinstance(err, DetectionError) or "detect" in label or "hardware" in label:
        return "Detection Failed"
    if label or isinstance(err, InstallationError):
        return "Installation Failed"
    return "Something Went Wrong"


class ErrorView(StepView):
    title = "Something Went Wrong"

    def __init__(self, *args, err: Any = None, failed_step: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        self.buttons = ButtonGroup(["Retry", "Exit"], styles=self.styles)
        self.details = Panel("Error details", styles=self.styles)
        self.set_error(err, failed_step)

    def set_error(self, err: Any, failed_step: str = "") -> None:
        self.err = err
        self.failed_step = failed_step or ""
        self.title = error_title(self.failed_step, err)
        self.details.set_content(error_text(err))
        if isinstance(err, IgorError) and err.details:
            self.details.append_content(f"Details: {err.details}")
        self.buttons.focus(RETRY)
        self.footer.set_error_status("Press enter to retry or choose Exit")

    def tips(self) -> List[str]:
        tips = troubleshooting_tips(self.failed_step)
        if isinstance(self.err, IgorError) and self.err.remediation:
            tips.insert(0, self.err.remediation)
        return tips

    def on_resize(self) -> None:
        self.details.set_size(self.content_width(), 0)

    def handle(self, msg: Message) -> Tuple[StepView, Optional[Command]]:
        if not isinstance(msg, KeyPress):
            return self, None
        key = msg.key
        km = self.key_map
        if key == "r":
            return self, send(RetryRequested())
        if km.left.matches(key):
            self.buttons.previous()
        elif km.right.matches(key) or km.tab.matches(key):
            self.buttons.next()
        elif km.enter.matches(key) or km.space.matches(key):
            if self.buttons.focused_index == RETRY:
                return self, send(RetryRequested())
            return self, send(ErrorExitRequested())
        return self, None

    def body(self) -> RenderableType:
        heading = Text("✗ ", style="error")
        if self.failed_step:
            heading.append(f"Failed during: {self.failed_step}", style="error")
        else:
            heading.append("An error occurred", style="error")

        tips = Text("Troubleshooting", style="highlight")
        for tip in self.tips():
            tips.append(f"\n  • {tip}", style="text")

        return Group(
            heading,
            Text(""),
            self.details.renderable(),
            Text(""),
            tips,
            Text(""),
            self.buttons.renderable(),
        )
