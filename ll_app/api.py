"""Stable application-layer API surface."""

from ll_app.services.config_repository import CONFIG_PATH_ENV, ConfigRepository
from ll_app.services.config_service import (
    ConfigService,
    DirectorySetup,
    memory_defaults,
    thread_defaults,
)
from ll_app.services.launch_service import LaunchService, build_request, models_url
from ll_app.services.launcher_config import (
    DEFAULT_BASE_DIR,
    DEFAULT_CONFIG_NAME,
    LauncherConfig,
)
from ll_app.services.network_service import (
    AttachedContainer,
    NetworkReport,
    NetworkService,
    PingCheck,
)
from ll_app.services.stop_service import StopService, StopSummary, StopTarget

__all__ = [
    "AttachedContainer",
    "CONFIG_PATH_ENV",
    "ConfigRepository",
    "ConfigService",
    "DEFAULT_BASE_DIR",
    "DEFAULT_CONFIG_NAME",
    "DirectorySetup",
    "LaunchService",
    "LauncherConfig",
    "NetworkReport",
    "NetworkService",
    "PingCheck",
    "StopService",
    "StopSummary",
    "StopTarget",
    "build_request",
    "memory_defaults",
    "models_url",
    "thread_defaults",
]
