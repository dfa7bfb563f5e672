"""Collaborator protocols consumed by the launch core."""

from __future__ import annotations

from typing import Callable, Protocol, Sequence

from ll_core.models.types import ContainerSpec

HttpProbe = Callable[[str, float], bool]
"""Return True when ``url`` accepted a connection within ``timeout`` seconds."""

Sleep = Callable[[float], None]


class ContainerRuntime(Protocol):
    """Container engine operations the coordinator, prober and teardown need."""

    def check_available(self) -> None: ...

    def network_exists(self, name: str) -> bool: ...

    def create_network(self, name: str) -> None: ...

    def image_exists(self, image: str) -> bool: ...

    def pull_image(self, image: str, timeout: float | None = None) -> bool: ...

    def container_exists(self, name: str) -> bool: ...

    def remove_container(self, name: str) -> None: ...

    def run_container(self, spec: ContainerSpec) -> None: ...

    def exec_in_container(
        self, name: str, command: Sequence[str], timeout: float | None = None
    ) -> int: ...

    def stop_container(self, name: str, timeout: float | None = None) -> bool: ...

    def is_running(self, name: str) -> bool: ...


class ServiceController(Protocol):
    """Start a host service such as the local Ollama daemon."""

    def is_installed(self, name: str) -> bool: ...

    def start(self, name: str) -> bool: ...


class LaunchObserver(Protocol):
    """Receives operator-facing progress messages (a UI presenter fits)."""

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...


class NullObserver:
    """Observer that drops every message."""

    def info(self, message: str) -> None:
        _ = message

    def warning(self, message: str) -> None:
        _ = message

    def error(self, message: str) -> None:
        _ = message

    def success(self, message: str) -> None:
        _ = message
