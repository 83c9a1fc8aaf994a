"""
Igor Wizard Messages

Typed events consumed by the wizard state machine, and helpers for building
commands. A command is a zero-argument callable returning one message or None.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple

from igor.wizard.schema import ComponentOption, DriverOption, GPUInfo


class Message:
    """Base class for every wizard message."""


Command = Callable[[], Optional[Message]]


# Core messages

@dataclass(frozen=True)
class Quit(Message):
    pass


@dataclass(frozen=True)
class ErrorMsg(Message):
    err: Any = None


@dataclass(frozen=True)
class Navigate(Message):
    view: Any = None


@dataclass(frozen=True)
class WindowReady(Message):
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class WindowSize(Message):
    """Terminal resize event from the runtime."""
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class Tick(Message):
    timestamp: float = 0.0


@dataclass(frozen=True)
class Status(Message):
    text: str = ""
    is_error: bool = False


@dataclass(frozen=True)
class ProgressUpdate(Message):
    current: int = 0
    total: int = 0
    text: str = ""


@dataclass(frozen=True)
class DetectionComplete(Message):
    success: bool = True
    gpu_info: Optional[GPUInfo] = None
    error: Any = None


@dataclass(frozen=True)
class InstallationComplete(Message):
    success: bool = True
    text: str = ""


@dataclass(frozen=True)
class KeyPress(Message):
    """A key resolved to its logical name ("up", "enter", "ctrl+c", "q")."""
    key: str = ""


# Wizard transitions

@dataclass(frozen=True)
class StartDetection(Message):
    pass


@dataclass(frozen=True)
class NavigateToSystemInfo(Message):
    gpu_info: Optional[GPUInfo] = None


@dataclass(frozen=True)
class NavigateToDriverSelection(Message):
    gpu_info: Optional[GPUInfo] = None


@dataclass(frozen=True)
class NavigateToConfirmation(Message):
    gpu_info: Optional[GPUInfo] = None
    driver: Optional[DriverOption] = None
    components: Tuple[ComponentOption, ...] = ()


@dataclass(frozen=True)
class StartInstallation(Message):
    gpu_info: Optional[GPUInfo] = None
    driver: Optional[DriverOption] = None
    components: Tuple[ComponentOption, ...] = ()


@dataclass(frozen=True)
class NavigateToComplete(Message):
    gpu_info: Optional[GPUInfo] = None
    driver: Optional[DriverOption] = None
    components: Tuple[ComponentOption, ...] = ()


@dataclass(frozen=True)
class NavigateToError(Message):
    err: Any = None
    failed_step: str = ""


@dataclass(frozen=True)
class RetryRequested(Message):
    pass


@dataclass(frozen=True)
class ErrorExitRequested(Message):
    pass


@dataclass(frozen=True)
class RebootRequested(Message):
    pass


@dataclass(frozen=True)
class ExitRequested(Message):
    pass


@dataclass(frozen=True)
class NavigateBackToSelection(Message):
    pass


# Progress reported by detection and installation collaborators

@dataclass(frozen=True)
class DetectionStep(Message):
    step: int = 0


@dataclass(frozen=True)
class DetectionFailed(Message):
    err: Any = None


@dataclass(frozen=True)
class InstallationStepStarted(Message):
    index: int = 0


@dataclass(frozen=True)
class InstallationStepCompleted(Message):
    index: int = 0


@dataclass(frozen=True)
class InstallationStepFailed(Message):
    index: int = 0
    err: Any = None


@dataclass(frozen=True)
class InstallationLog(Message):
    text: str = ""


@dataclass(frozen=True)
class InstallationCancelled(Message):
    pass


# Widget-internal animation

@dataclass(frozen=True)
class SpinnerTick(Message):
    spinner_id: int = 0
    tag: int = 0


@dataclass(frozen=True)
class ProgressFrame(Message):
    progress_id: int = 0
    tag: int = 0


# Runtime-directed

@dataclass(frozen=True)
class EnterAltScreen(Message):
    pass


@dataclass(frozen=True)
class RequestWindowSize(Message):
    pass


@dataclass(frozen=True)
class Batch(Message):
    commands: Tuple[Command, ...] = field(default_factory=tuple)


class TickCommand:
    """A command the runtime delays by `interval` seconds before invoking.

    Calling it directly skips the delay.
    """

    def __init__(self, interval: float, fn: Callable[[], Optional[Message]]):
        self.interval = interval
        self.fn = fn

    def __call__(self) -> Optional[Message]:
        return self.fn()

    def __repr__(self) -> str:
        return f"TickCommand(interval={self.interval!r})"


def tick(interval: float, fn: Callable[[], Optional[Message]]) -> TickCommand:
    return TickCommand(interval, fn)


def batch(*commands: Optional[Command]) -> Optional[Command]:
    """Combine commands into one, dropping Nones.

    Returns None when nothing remains and the command itself when only
    one does.
    """
    valid = tuple(c for c in commands if c is not None)
    if not valid:
        return None
    if len(valid) == 1:
        return valid[0]
    return lambda: Batch(valid)


def send(msg: Message) -> Command:
    """Command that yields msg as-is."""
    return lambda: msg


def quit_command() -> Command:
    return send(Quit())


def navigate(view: Any) -> Command:
    return send(Navigate(view))


def report_error(err: Any) -> Command:
    return send(ErrorMsg(err))


def set_status(text: str, is_error: bool = False) -> Command:
    return send(Status(text, is_error))
