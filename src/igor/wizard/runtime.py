"""
Igor Wizard Runtime

Event loops that drive a WizardOrchestrator.

Program runs commands on a thread pool and feeds their messages back through
a single queue, so update() and view() only ever run on the loop's thread.
HeadlessDriver does the same synchronously for scripted sessions and tests.
"""

import queue
import threading
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, List, Optional, TextIO

from rich.console import Console
from rich.live import Live
from rich.text import Text

from igor.wizard.cancellation import CancellationSource, CancellationToken
from igor.wizard.logging_config import get_logger
from igor.wizard.messages import (
    Batch, Command, EnterAltScreen, ErrorMsg, KeyPress, Message, Quit,
    RequestWindowSize, TickCommand, WindowSize,
)

logger = get_logger(__name__)

# Upper bound on messages processed per HeadlessDriver.send()
MAX_STEPS = 1000

_STOP = object()


def run_command(cmd: Command) -> Optional[Message]:
    """Invoke a command, turning an exception into an ErrorMsg."""
    try:
        return cmd()
    except Exception as e:
        logger.exception("Command %r failed", cmd)
        return ErrorMsg(e)


class Program:
    """Threaded event loop rendering frames to a rich console."""

    def __init__(
        self,
        model: Any,
        console: Optional[Console] = None,
        parent: Optional[CancellationToken] = None,
        alt_screen: bool = True,
        max_workers: int = 4
    ):
        self.model = model
        self.console = console or Console()
        self.alt_screen = alt_screen
        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="igor-cmd")
        self._cancel = CancellationSource(parent)
        self._live: Optional[Live] = None
        self._screen = False

    @property
    def token(self) -> CancellationToken:
        return self._cancel.token

    def send(self, msg: Message) -> None:
        """Post a message from any thread."""
        self._queue.put(msg)

    def stop(self) -> None:
        """Stop the loop without a Quit message."""
        self._queue.put(_STOP)

    def execute(self, cmd: Optional[Command]) -> None:
        if cmd is None or self._cancel.cancelled:
            return
        self._executor.submit(self._run, cmd)

    def _run(self, cmd: Command) -> None:
        if isinstance(cmd, TickCommand) and self._cancel.token.wait(cmd.interval):
            return
        msg = run_command(cmd)
        if msg is not None and not self._cancel.cancelled:
            self._queue.put(msg)

    def _render(self) -> None:
        if self._live is None:
            # started on first frame so an EnterAltScreen request can apply
            self._live = Live(console=self.console, screen=self._screen,
                              auto_refresh=False, transient=False)
            self._live.start()
        self._live.update(Text.from_ansi(self.model.view()), refresh=True)

    def _handle_runtime(self, msg: Any) -> bool:
        """Handle messages addressed to the runtime; True if consumed."""
        if isinstance(msg, Batch):
            for cmd in msg.commands:
                self.execute(cmd)
            return True
        if isinstance(msg, EnterAltScreen):
            self._screen = self.alt_screen and self._live is None
            return True
        if isinstance(msg, RequestWindowSize):
            width, height = self.console.size
            self.send(WindowSize(width, height))
            return True
        return False

    def run(self) -> Any:
        """Process messages until Quit; returns the final model."""
        try:
            # init messages are queued in order ahead of any command result
            for cmd in self.model.init():
                if isinstance(cmd, TickCommand):
                    self.execute(cmd)
                    continue
                msg = run_command(cmd)
                if msg is not None:
                    self.send(msg)
            while True:
                msg = self._queue.get()
                if msg is _STOP:
                    break
                if self._handle_runtime(msg):
                    continue
                self.model, cmd = self.model.update(msg)
                self._render()
                if isinstance(msg, Quit):
                    break
                self.execute(cmd)
        finally:
            self._cancel.cancel()
            if self._live is not None:
                self._live.stop()
                if self._screen:
                    self.console.print(Text.from_ansi(self.model.view().rstrip("\n")))
            self._executor.shutdown(wait=False, cancel_futures=True)
            logger.debug("Program stopped")
        return self.model

    def read_keys(self, stream: TextIO, quit_on_eof: bool = True) -> threading.Thread:
        """Feed key names from a line-oriented stream on a daemon thread.

        Each line is one key name; an empty line is enter.
        """
        def reader() -> None:
            for line in stream:
                if self._cancel.cancelled:
                    return
                key = line.rstrip("\r\n")
                self.send(KeyPress(key or "enter"))
            if quit_on_eof and not self._cancel.cancelled:
                self.send(Quit())

        thread = threading.Thread(target=reader, name="igor-keys", daemon=True)
        thread.start()
        return thread

    def post_all(
        self,
        events: Iterable[Any],
        delay_of: Callable[[Any], float],
        message_of: Callable[[Any], Message]
    ) -> threading.Thread:
        """Post scripted events on a daemon thread, waiting each event's delay."""
        def poster() -> None:
            for event in events:
                if self._cancel.token.wait(delay_of(event)):
                    return
                self.send(message_of(event))

        thread = threading.Thread(target=poster, name="igor-script", daemon=True)
        thread.start()
        return thread


class HeadlessDriver:
    """Synchronous driver with no terminal.

    Immediate commands are resolved breadth-first; delayed (tick) commands
    are dropped so animations never loop.
    """

    def __init__(
        self,
        model: Any,
        width: int = 80,
        height: int = 24,
        record_frames: bool = False,
        max_steps: int = MAX_STEPS
    ):
        self.model = model
        self.width = width
        self.height = height
        self.record_frames = record_frames
        self.max_steps = max_steps
        self.frames: List[str] = []
        self.processed: List[Message] = []

    def start(self) -> Any:
        """Run the model's init commands; answers the size probe."""
        return self._drain(self.model.init())

    def send(self, *messages: Message) -> Any:
        for msg in messages:
            self._process(deque([msg]))
        return self.model

    def _drain(self, commands: Iterable[Optional[Command]]) -> Any:
        pending: "deque[Any]" = deque()
        for cmd in commands:
            self._resolve(cmd, pending)
        self._process(pending)
        return self.model

    def _resolve(self, cmd: Optional[Command], pending: "deque[Any]") -> None:
        if cmd is None or isinstance(cmd, TickCommand):
            return
        msg = run_command(cmd)
        if msg is not None:
            pending.append(msg)

    def _process(self, pending: "deque[Any]") -> None:
        steps = 0
        while pending and steps < self.max_steps:
            msg = pending.popleft()
            steps += 1
            if isinstance(msg, Batch):
                for cmd in msg.commands:
                    self._resolve(cmd, pending)
                continue
            if isinstance(msg, EnterAltScreen):
                continue
            if isinstance(msg, RequestWindowSize):
                pending.append(WindowSize(self.width, self.height))
                continue
            self.model, cmd = self.model.update(msg)
            self.processed.append(msg)
            if self.record_frames:
                self.frames.append(self.model.view())
            if isinstance(msg, Quit):
                pending.clear()
                return
            self._resolve(cmd, pending)
        if pending:
            logger.warning("Dropped %d messages after %d steps", len(pending), steps)

    def view(self) -> str:
        return self.model.view()
