"""
Welcome Step

Introduces the installer and offers to start hardware detection.
"""

from typing import Optional, Tuple

from rich.console import Group, RenderableType
from rich.text import Text

from igor.wizard.components import ButtonGroup
from igor.wizard.messages import Command, KeyPress, Message, StartDetection, quit_command, send
from igor.wizard.steps.base import StepView

LOGO = r"""
 ___ ____  ___  ____
|_ _/ ___|/ _ \|  _ \
 | | |  _| | | | |_) |
 | | |_| | |_| |  _ <
|___\____|\___/|_| \_\
""".strip("\n")

FEATURES = [
    "Detect NVIDIA GPUs and the current driver",
    "Pick a driver branch and optional components (CUDA, cuDNN)",
    "Blacklist Nouveau and configure the new driver",
    "Verify the installation with nvidia-smi",
]

START, EXIT = 0, 1


class WelcomeView(StepView):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.buttons = ButtonGroup(["Start Installation", "Exit"], styles=self.styles)
        self.footer.set_info_status("Press enter to begin")

    def handle(self, msg: Message) -> Tuple[StepView, Optional[Command]]:
        if not isinstance(msg, KeyPress):
            return self, None
        km = self.key_map
        key = msg.key
        if km.left.matches(key) or key == "shift+tab":
            self.buttons.previous()
        elif km.right.matches(key) or km.tab.matches(key):
            self.buttons.next()
        elif km.enter.matches(key) or km.space.matches(key):
            if self.buttons.focused_index == START:
                return self, send(StartDetection())
            return self, quit_command()
        return self, None

    def body(self) -> RenderableType:
        features = Text()
        for i, feature in enumerate(FEATURES):
            if i:
                features.append("\n")
            features.append("  • ", style="highlight")
            features.append(feature)
        return Group(
            Text(LOGO, style="logo"),
            Text(""),
            Text("Welcome to the NVIDIA driver installation wizard.", style="text"),
            Text("This wizard will:", style="muted"),
            features,
            Text(""),
            self.buttons.renderable(),
        )
