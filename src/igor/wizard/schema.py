"""
Igor Wizard Data Schema

Data carried between wizard steps: detected GPU/system information and the
driver and component options offered for installation.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class GPUDevice:
    """A detected NVIDIA GPU."""
    name: str
    architecture: str = ""
    device_id: str = ""
    pci_address: str = ""


@dataclass(frozen=True)
class DriverInfo:
    """Currently installed driver, if any."""
    installed: bool = False
    driver_type: str = ""  # "nvidia" or "nouveau"
    version: str = ""
    cuda_version: str = ""


@dataclass(frozen=True)
class KernelInfo:
    """Kernel and boot environment."""
    version: str = ""
    headers_installed: bool = True
    secure_boot: bool = False


@dataclass(frozen=True)
class GPUInfo:
    """Aggregated system detection result."""
    gpus: List[GPUDevice] = field(default_factory=list)
    driver: DriverInfo = field(default_factory=DriverInfo)
    kernel: KernelInfo = field(default_factory=KernelInfo)
    nouveau_loaded: bool = False
    distribution: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def has_nvidia_gpu(self) -> bool:
        return len(self.gpus) > 0

    @property
    def primary_gpu(self) -> Optional[GPUDevice]:
        return self.gpus[0] if self.gpus else None

    @property
    def is_valid(self) -> bool:
        """True when detection found a GPU and no blocking errors."""
        return self.has_nvidia_gpu and not self.errors

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GPUInfo":
        """Build from a plain mapping (scripts, config files)."""
        data = dict(data or {})
        gpus = [
            g if isinstance(g, GPUDevice) else GPUDevice(**g)
            for g in data.pop("gpus", []) or []
        ]
        driver = data.pop("driver", None) or {}
        kernel = data.pop("kernel", None) or {}
        return cls(
            gpus=gpus,
            driver=driver if isinstance(driver, DriverInfo) else DriverInfo(**driver),
            kernel=kernel if isinstance(kernel, KernelInfo) else KernelInfo(**kernel),
            nouveau_loaded=bool(data.pop("nouveau_loaded", False)),
            distribution=str(data.pop("distribution", "")),
            errors=list(data.pop("errors", []) or []),
            warnings=list(data.pop("warnings", []) or []),
        )


@dataclass(frozen=True)
class DriverOption:
    """An installable driver branch."""
    version: str
    branch: str
    description: str = ""
    recommended: bool = False

    @property
    def title(self) -> str:
        suffix = " (Recommended)" if self.recommended else ""
        return f"NVIDIA {self.version} - {self.branch}{suffix}"


@dataclass(frozen=True)
class ComponentOption:
    """An optional (or required) package installed alongside the driver."""
    id: str
    name: str
    description: str = ""
    required: bool = False
    selected: bool = False


DEFAULT_DRIVERS = [
    DriverOption("550", "Latest", "Newest features and GPU support", recommended=True),
    DriverOption("545", "Production", "Stable production branch"),
    DriverOption("535", "LTS", "Long-term support branch"),
    DriverOption("470", "Legacy", "For older Kepler GPUs"),
]

DEFAULT_COMPONENTS = [
    ComponentOption("driver", "NVIDIA Driver", "Core kernel module and libraries",
                    required=True, selected=True),
    ComponentOption("cuda", "CUDA Toolkit", "Compiler and libraries for GPU computing"),
    ComponentOption("cudnn", "cuDNN", "Deep neural network primitives"),
    ComponentOption("settings", "nvidia-settings", "Graphical configuration tool",
                    selected=True),
]


def sample_gpu_info() -> GPUInfo:
    """Representative detection result used by previews and demos."""
    return GPUInfo(
        gpus=[GPUDevice("NVIDIA GeForce RTX 4070", "Ada Lovelace", "10de:2786",
                        "0000:01:00.0")],
        driver=DriverInfo(installed=True, driver_type="nouveau"),
        kernel=KernelInfo(version="6.8.0-45-generic", headers_installed=True,
                          secure_boot=False),
        nouveau_loaded=True,
        distribution="Ubuntu 24.04",
    )
