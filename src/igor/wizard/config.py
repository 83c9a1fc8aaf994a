"""
Igor Wizard Configuration

Settings loaded from an optional YAML file with environment overrides.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from igor.wizard.exceptions import ConfigError
from igor.wizard.logging_config import get_logger
from igor.wizard.schema import (
    DEFAULT_COMPONENTS, DEFAULT_DRIVERS, ComponentOption, DriverOption
)

logger = get_logger(__name__)

TRUTHY = ("1", "true", "yes")


@dataclass
class WizardConfig:
    """Runtime settings for the wizard."""
    color: bool = True
    alt_screen: bool = True
    frame_interval: float = 0.1
    max_log_lines: int = 10
    drivers: List[Dict[str, Any]] = field(default_factory=list)
    components: List[Dict[str, Any]] = field(default_factory=list)

    def driver_options(self) -> List[DriverOption]:
        if not self.drivers:
            return list(DEFAULT_DRIVERS)
        return [DriverOption(**d) for d in self.drivers]

    def component_options(self) -> List[ComponentOption]:
        if not self.components:
            return list(DEFAULT_COMPONENTS)
        return [ComponentOption(**c) for c in self.components]

    def validate(self) -> None:
        """Raise ConfigError for out-of-range or malformed values."""
        if self.frame_interval <= 0:
            raise ConfigError(
                f"frame_interval must be positive, got {self.frame_interval}",
                config_key="frame_interval",
            )
        if self.max_log_lines < 1:
            raise ConfigError(
                f"max_log_lines must be at least 1, got {self.max_log_lines}",
                config_key="max_log_lines",
            )
        for key, entries, option in (
            ("drivers", self.drivers, DriverOption),
            ("components", self.components, ComponentOption),
        ):
            for entry in entries:
                try:
                    option(**entry)
                except TypeError as e:
                    raise ConfigError(
                        f"Invalid entry in {key}: {entry!r}",
                        config_key=key,
                        details=str(e),
                    ) from e


def _coerce_float(value: Any, key: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be a number, got {value!r}", config_key=key) from e


def _coerce_int(value: Any, key: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be an integer, got {value!r}", config_key=key) from e


def load_config(
    path: Optional[Path] = None,
    environ: Optional[Dict[str, str]] = None
) -> WizardConfig:
    """Load configuration.

    Args:
        path: YAML file to read (falls back to $IGOR_CONFIG, then defaults)
        environ: Environment mapping (default: os.environ)

    Returns:
        Validated WizardConfig

    Raises:
        ConfigError: If the file is unreadable or holds invalid values
    """
    env = os.environ if environ is None else environ
    if path is None and env.get("IGOR_CONFIG"):
        path = Path(env["IGOR_CONFIG"])

    data: Dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        try:
            data = yaml.safe_load(path.read_text()) or {}
        except OSError as e:
            raise ConfigError(
                f"Cannot read config file {path}",
                remediation="Check that the file exists and is readable",
                details=str(e),
            ) from e
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Config file {path} is not valid YAML",
                details=str(e),
            ) from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        logger.debug("Loaded config from %s", path)

    known = {"color", "alt_screen", "frame_interval", "max_log_lines", "drivers", "components"}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(
            f"Unknown config keys: {', '.join(sorted(unknown))}",
            remediation=f"Allowed keys: {', '.join(sorted(known))}",
        )

    config = WizardConfig(
        color=bool(data.get("color", True)),
        alt_screen=bool(data.get("alt_screen", True)),
        frame_interval=_coerce_float(data.get("frame_interval", 0.1), "frame_interval"),
        max_log_lines=_coerce_int(data.get("max_log_lines", 10), "max_log_lines"),
        drivers=list(data.get("drivers") or []),
        components=list(data.get("components") or []),
    )

    if env.get("IGOR_NO_COLOR", "").lower() in TRUTHY or "NO_COLOR" in env:
        config.color = False
    if env.get("IGOR_FRAME_INTERVAL"):
        config.frame_interval = _coerce_float(env["IGOR_FRAME_INTERVAL"], "IGOR_FRAME_INTERVAL")

    config.validate()
    return config
