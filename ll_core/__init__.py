"""Launch core: backend resolution, readiness probing and launch coordination."""

from ll_core.api import (  # noqa: F401
    BackendConfig,
    BackendKind,
    LaunchCoordinator,
    LaunchPolicy,
    LaunchRequest,
    ProbeStatus,
    RunReport,
    Teardown,
    resolve,
    wait_until_ready,
)

__all__ = [
    "BackendConfig",
    "BackendKind",
    "LaunchCoordinator",
    "LaunchPolicy",
    "LaunchRequest",
    "ProbeStatus",
    "RunReport",
    "Teardown",
    "resolve",
    "wait_until_ready",
]
