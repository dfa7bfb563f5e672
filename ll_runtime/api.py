"""Public runtime API surface."""

from ll_runtime.docker import DOCKER_GROUP_HINT, DockerRuntime
from ll_runtime.http_probe import http_probe, list_models
from ll_runtime.service_manager import InitSystem, ServiceManager, detect_init_system

__all__ = [
    "DOCKER_GROUP_HINT",
    "DockerRuntime",
    "InitSystem",
    "ServiceManager",
    "detect_init_system",
    "http_probe",
    "list_models",
]
