"""Value objects shared by the resolver, prober and coordinator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from ll_common.errors import LLError
from ll_core.coordinator_state import LaunchState

OLLAMA_PROTOCOL = "ollama"
OPENAI_PROTOCOL = "openai"

_OLLAMA_ENV_PREFIX = "OLLAMA_"
_OPENAI_ENV_PREFIX = "OPENAI_"


class BackendKind(str, Enum):
    """Supported LLM backends; the value doubles as the CLI identifier."""

    LOCAL_PROCESS = "ollama"
    REMOTE_OPENAI_COMPATIBLE = "lmstudio"
    CONTAINERIZED_OLLAMA = "ollama-container"
    CONTAINERIZED_OPENAI_COMPATIBLE = "localai"

    @property
    def protocol(self) -> str:
        if self in (BackendKind.LOCAL_PROCESS, BackendKind.CONTAINERIZED_OLLAMA):
            return OLLAMA_PROTOCOL
        return OPENAI_PROTOCOL

    @property
    def containerized(self) -> bool:
        return self in (
            BackendKind.CONTAINERIZED_OLLAMA,
            BackendKind.CONTAINERIZED_OPENAI_COMPATIBLE,
        )

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]


_KIND_LABELS = {
    BackendKind.LOCAL_PROCESS: "Ollama (local host)",
    BackendKind.REMOTE_OPENAI_COMPATIBLE: "LM Studio (remote)",
    BackendKind.CONTAINERIZED_OLLAMA: "Ollama container",
    BackendKind.CONTAINERIZED_OPENAI_COMPATIBLE: "LocalAI container",
}


@dataclass(frozen=True)
class BackendConfig:
    """Read-only settings for one backend kind.

    For containerized kinds ``host`` is the sibling container's name, which
    is also its DNS name on the shared network, and ``port`` is the port
    mapped on the host.
    """

    host: Optional[str] = None
    port: Optional[int] = None
    container_port: Optional[int] = None
    api_key: Optional[str] = None
    image: Optional[str] = None
    memory_limit: Optional[str] = None
    shm_size: Optional[str] = None
    threads: Optional[int] = None
    model: Optional[str] = None
    device: Optional[str] = None
    extra_flags: Tuple[str, ...] = ()
    extra_args: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ResolvedEndpoint:
    """Network parameters needed to reach a backend.

    ``probe_url`` is host-visible (probed by this process) while
    ``ui_base_url`` and ``connectivity_url`` are what the UI container sees.
    ``container_url`` is None unless the backend runs in a container.
    """

    kind: BackendKind
    probe_url: str
    ui_base_url: str
    connectivity_url: str
    container_url: Optional[str] = None
    env: Mapping[str, str] = field(default_factory=dict)
    extra_flags: Tuple[str, ...] = ()

    @property
    def ollama_env(self) -> Dict[str, str]:
        return {k: v for k, v in self.env.items() if k.startswith(_OLLAMA_ENV_PREFIX)}

    @property
    def openai_env(self) -> Dict[str, str]:
        return {k: v for k, v in self.env.items() if k.startswith(_OPENAI_ENV_PREFIX)}


@dataclass(frozen=True)
class PortMapping:
    """Host port published to a container port."""

    host_port: int
    container_port: int

    def as_flag(self) -> str:
        return f"{self.host_port}:{self.container_port}"


@dataclass(frozen=True)
class VolumeMount:
    """Bind mount from a host path into a container."""

    source: str
    target: str

    def as_flag(self) -> str:
        return f"{self.source}:{self.target}"


@dataclass(frozen=True)
class ContainerSpec:
    """Everything the runtime needs to start a detached container."""

    name: str
    image: str
    network: Optional[str] = None
    ports: Tuple[PortMapping, ...] = ()
    env: Mapping[str, str] = field(default_factory=dict)
    volumes: Tuple[VolumeMount, ...] = ()
    extra_flags: Tuple[str, ...] = ()
    command: Tuple[str, ...] = ()


class ProbeStatus(str, Enum):
    """Outcome of a readiness check."""

    READY = "ready"
    TIMED_OUT = "timed_out"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class ProbeResult:
    """Result of polling a probe target."""

    status: ProbeStatus
    attempts: int
    target: str = ""

    @property
    def ready(self) -> bool:
        return self.status == ProbeStatus.READY


class StepOutcome(str, Enum):
    """Outcome of a coordinator step that is not a probe."""

    OK = "ok"
    SKIPPED = "skipped"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass
class RunReport:
    """Aggregated outcome of a single launch."""

    kind: BackendKind
    endpoint: Optional[ResolvedEndpoint] = None
    state: LaunchState = LaunchState.INIT
    reached: LaunchState = LaunchState.INIT
    backend_setup: StepOutcome = StepOutcome.SKIPPED
    backend_probe: Optional[ProbeResult] = None
    ui_launch: StepOutcome = StepOutcome.SKIPPED
    connectivity_probe: Optional[ProbeResult] = None
    warnings: List[LLError] = field(default_factory=list)
    failure: Optional[LLError] = None
    started_containers: List[str] = field(default_factory=list)
    access_urls: Dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.failure is None and self.state == LaunchState.DONE

    @property
    def degraded(self) -> bool:
        return bool(self.warnings)

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1


@dataclass(frozen=True)
class LaunchRequest:
    """Input required to launch the UI against one backend."""

    backend: BackendConfig
    network: str
    ui_name: str
    ui_image: str
    ui_port: int
    base_dir: Path


@dataclass
class LaunchPolicy:
    """Timeouts and continue/abort decisions for a launch.

    ``confirm`` is asked whether to continue after a soft failure; when it is
    None the launch always continues (non-interactive mode).
    """

    max_attempts: int = 30
    interval: float = 1.0
    connect_timeout: float = 1.0
    remote_attempts: int = 1
    remote_connect_timeout: float = 3.0
    connectivity_attempts: int = 1
    connectivity_timeout: float = 5.0
    pull_timeout: float = 900.0
    attempt_local_start: bool = True
    abort_on_backend_failure: bool = True
    local_service_name: str = "ollama"
    confirm: Optional[Callable[[str], bool]] = None
