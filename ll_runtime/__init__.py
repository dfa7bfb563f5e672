"""Host-side collaborators: container engine, HTTP probe and service manager."""

from ll_runtime.api import (  # noqa: F401
    DockerRuntime,
    ServiceManager,
    http_probe,
    list_models,
)

__all__ = ["DockerRuntime", "ServiceManager", "http_probe", "list_models"]
