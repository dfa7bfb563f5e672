"""Public API surface for ll_core."""

from ll_core.container_specs import (
    backend_container_spec,
    localai_models_dir,
    ollama_models_dir,
    ui_container_spec,
    ui_data_dir,
)
from ll_core.coordinator import LaunchCoordinator
from ll_core.coordinator_state import LaunchState, LaunchStateMachine
from ll_core.interfaces import (
    ContainerRuntime,
    HttpProbe,
    LaunchObserver,
    NullObserver,
    ServiceController,
)
from ll_core.interrupts import TerminationGuard
from ll_core.models.types import (
    BackendConfig,
    BackendKind,
    ContainerSpec,
    LaunchPolicy,
    LaunchRequest,
    PortMapping,
    ProbeResult,
    ProbeStatus,
    ResolvedEndpoint,
    RunReport,
    StepOutcome,
    VolumeMount,
)
from ll_core.prober import (
    ContainerProbeTarget,
    HttpProbeTarget,
    check_once,
    wait_until_ready,
)
from ll_core.resolver import resolve
from ll_core.teardown import Teardown, TeardownReport

__all__ = [
    "BackendConfig",
    "BackendKind",
    "ContainerProbeTarget",
    "ContainerRuntime",
    "ContainerSpec",
    "HttpProbe",
    "HttpProbeTarget",
    "LaunchCoordinator",
    "LaunchObserver",
    "LaunchPolicy",
    "LaunchRequest",
    "LaunchState",
    "LaunchStateMachine",
    "NullObserver",
    "PortMapping",
    "ProbeResult",
    "ProbeStatus",
    "ResolvedEndpoint",
    "RunReport",
    "ServiceController",
    "StepOutcome",
    "Teardown",
    "TeardownReport",
    "TerminationGuard",
    "VolumeMount",
    "backend_container_spec",
    "check_once",
    "localai_models_dir",
    "ollama_models_dir",
    "resolve",
    "ui_container_spec",
    "ui_data_dir",
    "wait_until_ready",
]
