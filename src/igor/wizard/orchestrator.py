"""
Igor Wizard Orchestrator

Top-level state machine for the installation wizard. Owns the current step,
terminal size, readiness and quitting flags, the last error, the cancellation
signal and the registry of step views. Messages it does not handle itself
are delegated to the active step.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from igor.wizard.cancellation import CancellationSource, CancellationToken
from igor.wizard.config import WizardConfig
from igor.wizard.keys import KeyMap, default_key_map
from igor.wizard.logging_config import get_logger
from igor.wizard.messages import (
    Command, EnterAltScreen, ErrorExitRequested, ErrorMsg, ExitRequested,
    KeyPress, Message, Navigate, NavigateBackToSelection, NavigateToComplete,
    NavigateToConfirmation, NavigateToDriverSelection, NavigateToError,
    NavigateToSystemInfo, Quit, RebootRequested, RequestWindowSize,
    RetryRequested, StartDetection, StartInstallation, WindowReady, WindowSize,
    quit_command, report_error, send,
)
from igor.wizard.schema import ComponentOption, DriverOption, GPUInfo
from igor.wizard.states import ViewState
from igor.wizard.steps import (
    CompleteView, ConfirmationView, DetectionView, ErrorView, InstallingView,
    SelectionView, StepView, SystemInfoView, WelcomeView,
)
from igor.wizard.ui import Styles

logger = get_logger(__name__)

GOODBYE = "Goodbye!\n"
INITIALIZING = "Initializing..."

UpdateResult = Tuple["WizardOrchestrator", Optional[Command]]


class WizardOrchestrator:
    """Application model for the wizard.

    update() is total: every message, known or not, yields a valid next
    state and at most one command. It never raises.
    """

    def __init__(
        self,
        version: str = "dev",
        parent: Optional[CancellationToken] = None,
        styles: Optional[Styles] = None,
        key_map: Optional[KeyMap] = None,
        config: Optional[WizardConfig] = None
    ):
        """Initialize the orchestrator.

        Args:
            version: Version string shown in the header
            parent: Cancellation token this wizard's signal derives from
            styles: Rendering styles (default: plain, no color)
            key_map: Key bindings (default: standard bindings)
            config: Runtime settings (default: built-in defaults)
        """
        self.config = config or WizardConfig()
        self._version = version
        self.styles = styles or Styles()
        self._key_map = key_map or default_key_map()
        self._cancel = CancellationSource(parent)

        self.current_view = ViewState.WELCOME
        self.width = 0
        self.height = 0
        self.ready = False
        self.quitting = False
        self.error: Any = None
        self.failed_step = ""

        self.gpu_info: Optional[GPUInfo] = None
        self.driver: Optional[DriverOption] = None
        self.components: Tuple[ComponentOption, ...] = ()

        self._views: Dict[ViewState, StepView] = {}
        self._factories: Dict[ViewState, Callable[[], StepView]] = {
            ViewState.WELCOME: lambda: WelcomeView(**self._view_args()),
            ViewState.DETECTING: lambda: DetectionView(
                frame_interval=self.config.frame_interval, **self._view_args()),
            ViewState.SYSTEM_INFO: lambda: SystemInfoView(
                gpu_info=self.gpu_info, **self._view_args()),
            ViewState.DRIVER_SELECTION: lambda: SelectionView(
                gpu_info=self.gpu_info,
                drivers=self.config.driver_options(),
                components=self.config.component_options(),
                **self._view_args()),
            ViewState.CONFIRMATION: lambda: ConfirmationView(
                gpu_info=self.gpu_info, driver=self.driver,
                components=self.components, **self._view_args()),
            ViewState.INSTALLING: lambda: InstallingView(
                frame_interval=self.config.frame_interval,
                max_log_lines=self.config.max_log_lines, **self._view_args()),
            ViewState.COMPLETE: lambda: CompleteView(
                gpu_info=self.gpu_info, driver=self.driver,
                components=self.components, **self._view_args()),
            ViewState.ERROR: lambda: ErrorView(
                err=self.error, failed_step=self.failed_step, **self._view_args()),
        }

        self._handlers: Dict[Type[Message], Callable[[Any], Optional[Command]]] = {
            KeyPress: self._on_key,
            WindowReady: self._on_resize,
            WindowSize: self._on_resize,
            Quit: self._on_quit,
            ErrorMsg: self._on_error,
            Navigate: self._on_navigate,
            StartDetection: self._on_start_detection,
            NavigateToSystemInfo: self._on_system_info,
            NavigateToDriverSelection: self._on_driver_selection,
            NavigateToConfirmation: self._on_confirmation,
            NavigateBackToSelection: self._on_back_to_selection,
            StartInstallation: self._on_start_installation,
            NavigateToComplete: self._on_complete,
            NavigateToError: self._on_navigate_to_error,
            RetryRequested: self._on_retry,
            ErrorExitRequested: self._on_exit_request,
            RebootRequested: self._on_exit_request,
            ExitRequested: self._on_exit_request,
        }

        self._ensure(ViewState.WELCOME)

    # Public API

    def init(self) -> List[Command]:
        """Commands to run at startup: presentation setup and a size probe."""
        commands = [send(EnterAltScreen()), send(RequestWindowSize())]
        cmd = self._views[ViewState.WELCOME].init()
        if cmd is not None:
            commands.append(cmd)
        return commands

    def update(self, msg: Any) -> UpdateResult:
        """Apply one message.

        Messages in the transition table are handled here; everything else
        goes to the active step.

        Args:
            msg: Any message, including unknown objects

        Returns:
            (self, command or None)
        """
        handler = self._handlers.get(type(msg))
        if handler is None:
            return self._delegate(msg)
        return self, handler(msg)

    def view(self) -> str:
        """Render the current frame as a string."""
        if self.quitting:
            return GOODBYE
        if not self.ready:
            return INITIALIZING
        return self.active_step.view()

    @property
    def context(self) -> CancellationToken:
        """Read-only cancellation token for long-running collaborators."""
        return self._cancel.token

    @property
    def cancelled(self) -> bool:
        """True once shutdown() or a parent has fired the signal."""
        return self._cancel.cancelled

    def shutdown(self) -> None:
        """Request cancellation of everything derived from this wizard."""
        if self._cancel.cancel():
            logger.debug("Wizard shutdown requested")

    @property
    def version(self) -> str:
        """Version string shown in every header."""
        return self._version

    @property
    def key_map(self) -> KeyMap:
        """Bindings used for top-level keys (quit, back)."""
        return self._key_map

    @key_map.setter
    def key_map(self, key_map: KeyMap) -> None:
        """Replace the bindings and give every built view its own copy."""
        self._key_map = key_map
        for view in self._views.values():
            view.set_key_map(key_map.copy())

    @property
    def active_step(self) -> StepView:
        """View for the current state, built on first access."""
        return self._ensure(self.current_view)

    def step(self, state: ViewState) -> Optional[StepView]:
        """The instantiated view for a state, or None if never visited."""
        return self._views.get(state)

    def is_instantiated(self, state: ViewState) -> bool:
        """True if the view for state has been built."""
        return state in self._views

    def set_error(self, err: Any, failed_step: str = "") -> None:
        """Record an error and hand it to the error view.

        Args:
            err: Error value; None renders as "Unknown error"
            failed_step: Label of the step that failed, if known
        """
        self.error = err
        self.failed_step = failed_step
        view = self._ensure(ViewState.ERROR)
        view.set_error(err, failed_step)

    def clear_error(self) -> None:
        """Forget the last error and failed step."""
        self.error = None
        self.failed_step = ""

    def navigate_to(self, state: ViewState) -> None:
        """Make state current, building its view if needed."""
        self._ensure(state)
        if state is not self.current_view:
            logger.debug("Transition %s -> %s", self.current_view, state)
        self.current_view = state

    # Internals

    def _view_args(self) -> Dict[str, Any]:
        """Constructor arguments shared by every step view."""
        return {
            "styles": self.styles,
            "key_map": self._key_map.copy(),
            "version": self._version,
        }

    def _ensure(self, state: ViewState) -> StepView:
        """Return the view for state, creating and sizing it on first use."""
        view = self._views.get(state)
        if view is None:
            view = self._factories[state]()
            if self.ready:
                view.resize(self.width, self.height)
            self._views[state] = view
            logger.debug("Instantiated %s view", state)
        return view

    def _delegate(self, msg: Any) -> UpdateResult:
        """Forward a message to the active step.

        A step that raises is logged and reported as an ErrorMsg command.
        """
        view = self.active_step
        try:
            _, cmd = view.update(msg)
        except Exception as e:
            logger.exception("%s view failed handling %s", self.current_view, type(msg).__name__)
            return self, report_error(e)
        return self, cmd

    # Transitions

    def _on_key(self, msg: KeyPress) -> Optional[Command]:
        """Quit and back keys; other keys go to the active step."""
        if self._key_map.quit.matches(msg.key):
            return quit_command()
        if self._key_map.back.matches(msg.key):
            if self.current_view is ViewState.WELCOME:
                return quit_command()
            self.navigate_to(ViewState.WELCOME)
            self.clear_error()
            return None
        _, cmd = self._delegate(msg)
        return cmd

    def _on_resize(self, msg: Any) -> None:
        """Store the new size, mark ready and resize every built view."""
        self.width = msg.width
        self.height = msg.height
        self.ready = True
        for view in self._views.values():
            view.resize(msg.width, msg.height)

    def _on_quit(self, msg: Quit) -> None:
        """Enter the quitting state and cancel dependents."""
        self.quitting = True
        self.shutdown()

    def _on_error(self, msg: ErrorMsg) -> None:
        """Show the error step for an error raised anywhere."""
        self.set_error(msg.err, "")
        self.navigate_to(ViewState.ERROR)

    def _on_navigate(self, msg: Navigate) -> None:
        """Jump to a named view; unknown names are ignored."""
        state = msg.view if isinstance(msg.view, ViewState) else ViewState.parse(msg.view or "")
        if state is None:
            logger.debug("Ignoring navigation to unknown view %r", msg.view)
            return
        self.navigate_to(state)

    def _on_start_detection(self, msg: StartDetection) -> Command:
        """Show the detection step and start its spinner."""
        view = self._ensure(ViewState.DETECTING)
        self.navigate_to(ViewState.DETECTING)
        return view.start()

    def _on_system_info(self, msg: NavigateToSystemInfo) -> None:
        """Show detection results in detail."""
        self.gpu_info = msg.gpu_info
        view = self._ensure(ViewState.SYSTEM_INFO)
        view.set_gpu_info(msg.gpu_info)
        self.navigate_to(ViewState.SYSTEM_INFO)

    def _on_driver_selection(self, msg: NavigateToDriverSelection) -> None:
        """Show driver selection for the detected system."""
        self.gpu_info = msg.gpu_info
        view = self._ensure(ViewState.DRIVER_SELECTION)
        view.set_gpu_info(msg.gpu_info)
        self.navigate_to(ViewState.DRIVER_SELECTION)

    def _store_selection(self, msg: Any) -> None:
        """Keep the GPU, driver and components carried by a transition."""
        self.gpu_info = msg.gpu_info
        self.driver = msg.driver
        self.components = tuple(msg.components or ())

    def _on_confirmation(self, msg: NavigateToConfirmation) -> None:
        """Summarize the selection before installing."""
        self._store_selection(msg)
        view = self._ensure(ViewState.CONFIRMATION)
        view.set_selection(self.gpu_info, self.driver, self.components)
        self.navigate_to(ViewState.CONFIRMATION)

    def _on_back_to_selection(self, msg: NavigateBackToSelection) -> None:
        """Return to selection with its cursor and checkboxes intact."""
        self.navigate_to(ViewState.DRIVER_SELECTION)

    def _on_start_installation(self, msg: StartInstallation) -> Command:
        """Show the installing step and start its animations."""
        self._store_selection(msg)
        view = self._ensure(ViewState.INSTALLING)
        self.navigate_to(ViewState.INSTALLING)
        return view.start(self.gpu_info, self.driver, self.components)

    def _on_complete(self, msg: NavigateToComplete) -> None:
        """Show the completion summary and next steps."""
        self._store_selection(msg)
        view = self._ensure(ViewState.COMPLETE)
        view.set_result(self.gpu_info, self.driver, self.components)
        self.navigate_to(ViewState.COMPLETE)

    def _on_navigate_to_error(self, msg: NavigateToError) -> None:
        """Show the error step with the step that failed."""
        self.set_error(msg.err, msg.failed_step)
        self.navigate_to(ViewState.ERROR)

    def _on_retry(self, msg: RetryRequested) -> None:
        """Clear the error and start over from the welcome step."""
        self.clear_error()
        self.navigate_to(ViewState.WELCOME)

    def _on_exit_request(self, msg: Message) -> Command:
        """Exit, reboot or error-exit: quit the program."""
        self.quitting = True
        self.shutdown()
        return quit_command()
