"""
Igor Session Scripts

Loads YAML session scripts: a terminal size plus a list of events that are
turned into wizard messages. Used by `igor replay` and `igor run --script`.

Example:

    width: 100
    height: 30
    gpu_info:
      gpus: [{name: NVIDIA GeForce RTX 4070, architecture: Ada Lovelace}]
      nouveau_loaded: true
    events:
      - start_detection
      - detection_step: 2
      - detection_complete: {success: true}
      - key: enter
      - wait: 0.5
      - navigate_to_confirmation: {driver: "550", components: [driver, cuda]}
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import yaml

from igor.wizard import messages as m
from igor.wizard.exceptions import ScriptError, ValidationError
from igor.wizard.logging_config import get_logger
from igor.wizard.schema import (
    DEFAULT_COMPONENTS, DEFAULT_DRIVERS, ComponentOption, DriverOption, GPUInfo,
)
from igor.wizard.states import ViewState

logger = get_logger(__name__)


@dataclass
class ScriptEvent:
    message: m.Message
    delay: float = 0.0


@dataclass
class Script:
    width: int = 80
    height: int = 24
    events: List[ScriptEvent] = field(default_factory=list)

    def messages(self) -> List[m.Message]:
        return [e.message for e in self.events]


class _Context:
    """Defaults and catalogs used while building messages."""

    def __init__(
        self,
        gpu_info: Optional[GPUInfo],
        drivers: List[DriverOption],
        components: List[ComponentOption]
    ):
        self.gpu_info = gpu_info
        self.drivers = drivers
        self.components = components

    def gpu(self, fields: Dict[str, Any]) -> Optional[GPUInfo]:
        if "gpu_info" in fields:
            value = fields["gpu_info"]
            return GPUInfo.from_dict(value) if value is not None else None
        return self.gpu_info

    def driver(self, value: Any) -> Optional[DriverOption]:
        if value is None:
            return None
        if isinstance(value, dict):
            return DriverOption(**value)
        for option in self.drivers:
            if option.version == str(value):
                return option
        raise ValidationError(
            f"unknown driver version {value!r}",
            field="driver",
            expected_format=" or ".join(o.version for o in self.drivers) or "a driver mapping",
        )

    def component_list(self, values: Any) -> Tuple[ComponentOption, ...]:
        by_id = {c.id: c for c in self.components}
        result = []
        for value in values or []:
            if isinstance(value, dict):
                result.append(ComponentOption(**value))
            elif str(value) in by_id:
                result.append(by_id[str(value)])
            else:
                raise ValidationError(
                    f"unknown component {value!r}",
                    field="components",
                    expected_format=", ".join(by_id) or "component mappings",
                )
        return tuple(result)

    def selection(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "gpu_info": self.gpu(fields),
            "driver": self.driver(fields.get("driver")),
            "components": self.component_list(fields.get("components")),
        }


def _fields(value: Any, scalar_key: Optional[str] = None) -> Dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return value
    if scalar_key is None:
        raise ValueError(f"expected a mapping, got {value!r}")
    return {scalar_key: value}


def _view(value: Any) -> ViewState:
    state = ViewState.parse(str(value))
    if state is None:
        raise ValidationError(
            f"unknown view {value!r}",
            field="view",
            expected_format=", ".join(s.value for s in ViewState),
        )
    return state


Builder = Callable[[Any, _Context], m.Message]

BUILDERS: Dict[str, Builder] = {
    "quit": lambda v, c: m.Quit(),
    "key": lambda v, c: m.KeyPress(str(_fields(v, "key")["key"])),
    "resize": lambda v, c: m.WindowSize(**_fields(v)),
    "window_ready": lambda v, c: m.WindowReady(**_fields(v)),
    "navigate": lambda v, c: m.Navigate(_view(_fields(v, "view")["view"])),
    "error": lambda v, c: m.ErrorMsg(_fields(v, "err").get("err")),
    "status": lambda v, c: m.Status(**_fields(v, "text")),
    "progress": lambda v, c: m.ProgressUpdate(**_fields(v)),
    "start_detection": lambda v, c: m.StartDetection(),
    "detection_step": lambda v, c: m.DetectionStep(int(_fields(v, "step")["step"])),
    "detection_complete": lambda v, c: m.DetectionComplete(
        success=bool(_fields(v, "success").get("success", True)),
        gpu_info=c.gpu(_fields(v, "success")),
        error=_fields(v, "success").get("error"),
    ),
    "detection_failed": lambda v, c: m.DetectionFailed(_fields(v, "err").get("err")),
    "navigate_to_system_info": lambda v, c: m.NavigateToSystemInfo(c.gpu(_fields(v))),
    "navigate_to_driver_selection": lambda v, c: m.NavigateToDriverSelection(c.gpu(_fields(v))),
    "navigate_to_confirmation": lambda v, c: m.NavigateToConfirmation(**c.selection(_fields(v))),
    "navigate_back_to_selection": lambda v, c: m.NavigateBackToSelection(),
    "start_installation": lambda v, c: m.StartInstallation(**c.selection(_fields(v))),
    "installation_step_started": lambda v, c: m.InstallationStepStarted(
        int(_fields(v, "index")["index"])),
    "installation_step_completed": lambda v, c: m.InstallationStepCompleted(
        int(_fields(v, "index")["index"])),
    "installation_step_failed": lambda v, c: m.InstallationStepFailed(
        int(_fields(v, "index")["index"]), _fields(v, "index").get("err")),
    "installation_log": lambda v, c: m.InstallationLog(str(_fields(v, "text")["text"])),
    "installation_complete": lambda v, c: m.InstallationComplete(**_fields(v, "success")),
    "installation_cancelled": lambda v, c: m.InstallationCancelled(),
    "navigate_to_complete": lambda v, c: m.NavigateToComplete(**c.selection(_fields(v))),
    "navigate_to_error": lambda v, c: m.NavigateToError(
        _fields(v, "err").get("err"), str(_fields(v, "err").get("failed_step", ""))),
    "retry": lambda v, c: m.RetryRequested(),
    "error_exit": lambda v, c: m.ErrorExitRequested(),
    "reboot": lambda v, c: m.RebootRequested(),
    "exit": lambda v, c: m.ExitRequested(),
}


def parse_script(
    data: Any,
    path: Optional[str] = None,
    drivers: Optional[List[DriverOption]] = None,
    components: Optional[List[ComponentOption]] = None
) -> Script:
    """Build a Script from already-parsed YAML data.

    Raises:
        ScriptError: On unknown events or malformed fields
    """
    if not isinstance(data, dict):
        raise ScriptError("Session script must be a mapping with an 'events' list", path=path)
    events = data.get("events")
    if not isinstance(events, list):
        raise ScriptError("Session script needs an 'events' list", path=path)

    try:
        gpu_info = GPUInfo.from_dict(data["gpu_info"]) if data.get("gpu_info") else None
    except TypeError as e:
        raise ScriptError("Invalid gpu_info", path=path, details=str(e)) from e

    ctx = _Context(gpu_info, drivers or list(DEFAULT_DRIVERS), components or list(DEFAULT_COMPONENTS))
    try:
        script = Script(width=int(data.get("width", 80)), height=int(data.get("height", 24)))
    except (TypeError, ValueError) as e:
        raise ScriptError("Script width and height must be integers", path=path,
                          details=str(e)) from e

    delay = 0.0
    for index, entry in enumerate(events):
        if isinstance(entry, str):
            name, value = entry, None
        elif isinstance(entry, dict) and len(entry) == 1:
            name, value = next(iter(entry.items()))
        else:
            raise ScriptError(
                f"Event must be a name or a single-key mapping, got {entry!r}",
                path=path, index=index,
            )

        if name == "wait":
            try:
                delay += float(value or 0)
            except (TypeError, ValueError) as e:
                raise ScriptError(
                    f"wait needs a number of seconds, got {value!r}",
                    path=path, index=index, details=str(e),
                ) from e
            continue

        builder = BUILDERS.get(name)
        if builder is None:
            raise ScriptError(
                f"Unknown event '{name}'",
                path=path, index=index,
                details=f"Known events: {', '.join(sorted(BUILDERS))}, wait",
            )
        try:
            message = builder(value, ctx)
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise ScriptError(
                f"Invalid fields for event '{name}'",
                path=path, index=index, details=str(e),
            ) from e
        script.events.append(ScriptEvent(message, delay))
        delay = 0.0

    logger.debug("Parsed %d script events", len(script.events))
    return script


def load_script(
    path: Path,
    drivers: Optional[List[DriverOption]] = None,
    components: Optional[List[ComponentOption]] = None
) -> Script:
    """Read and parse a YAML session script."""
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text())
    except OSError as e:
        raise ScriptError(f"Cannot read session script {path}", details=str(e)) from e
    except yaml.YAMLError as e:
        raise ScriptError(f"Session script {path} is not valid YAML", path=str(path),
                          details=str(e)) from e
    return parse_script(data, path=str(path), drivers=drivers, components=components)
