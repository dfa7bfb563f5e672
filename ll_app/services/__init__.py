"""Application-facing services for the CLI."""

from ll_app.services.config_repository import ConfigRepository
from ll_app.services.config_service import ConfigService, DirectorySetup
from ll_app.services.launch_service import LaunchService, build_request
from ll_app.services.launcher_config import LauncherConfig
from ll_app.services.network_service import NetworkReport, NetworkService
from ll_app.services.stop_service import StopService, StopSummary, StopTarget

__all__ = [
    "ConfigRepository",
    "ConfigService",
    "DirectorySetup",
    "LaunchService",
    "LauncherConfig",
    "NetworkReport",
    "NetworkService",
    "StopService",
    "StopSummary",
    "StopTarget",
    "build_request",
]
