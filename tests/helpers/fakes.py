"""Hand-written fakes for the container runtime, HTTP probe and services."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Set

from ll_common.api import LaunchFailure
from ll_core.api import ContainerSpec


@dataclass
class FakeRuntime:
    """In-memory container engine recording every call in ``calls``."""

    networks: Set[str] = field(default_factory=set)
    images: Set[str] = field(default_factory=set)
    containers: Set[str] = field(default_factory=set)
    running: Set[str] = field(default_factory=set)
    pull_ok: bool = True
    run_failures: Set[str] = field(default_factory=set)
    exec_results: Dict[str, int] = field(default_factory=dict)
    stubborn: Set[str] = field(default_factory=set)
    network_info: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    ips: Dict[str, str] = field(default_factory=dict)
    calls: List[tuple] = field(default_factory=list)
    started_specs: List[ContainerSpec] = field(default_factory=list)

    def check_available(self) -> None:
        self.calls.append(("check_available",))

    def network_exists(self, name: str) -> bool:
        return name in self.networks

    def create_network(self, name: str) -> None:
        self.calls.append(("create_network", name))
        self.networks.add(name)

    def image_exists(self, image: str) -> bool:
        return image in self.images

    def pull_image(self, image: str, timeout: float | None = None) -> bool:
        self.calls.append(("pull_image", image))
        if self.pull_ok:
            self.images.add(image)
        return self.pull_ok

    def container_exists(self, name: str) -> bool:
        return name in self.containers

    def remove_container(self, name: str) -> None:
        self.calls.append(("remove_container", name))
        self.containers.discard(name)
        self.running.discard(name)

    def run_container(self, spec: ContainerSpec) -> None:
        self.calls.append(("run_container", spec.name))
        if spec.name in self.run_failures:
            raise LaunchFailure(
                f"Failed to start container {spec.name}", hint=f"docker logs {spec.name}"
            )
        self.started_specs.append(spec)
        self.containers.add(spec.name)
        self.running.add(spec.name)

    def exec_in_container(
        self, name: str, command: Sequence[str], timeout: float | None = None
    ) -> int:
        self.calls.append(("exec", name, tuple(command)))
        return self.exec_results.get(name, 0)

    def stop_container(self, name: str, timeout: float | None = None) -> bool:
        self.calls.append(("stop_container", name))
        if name not in self.stubborn:
            self.running.discard(name)
        return True

    def is_running(self, name: str) -> bool:
        return name in self.running

    def inspect_network(self, name: str) -> Optional[Dict[str, Any]]:
        return self.network_info.get(name)

    def network_containers(self, name: str) -> List[str]:
        containers = (self.network_info.get(name) or {}).get("Containers") or {}
        return sorted(entry["Name"] for entry in containers.values())

    def container_ip(self, name: str) -> Optional[str]:
        return self.ips.get(name)

    def spec(self, name: str) -> Optional[ContainerSpec]:
        for spec in self.started_specs:
            if spec.name == name:
                return spec
        return None


class ScriptedProbe:
    """HTTP probe answering from a per-URL script; the last answer repeats."""

    def __init__(self, answers: Optional[Dict[str, List[bool]]] = None, default: bool = False):
        self.answers = {url: list(seq) for url, seq in (answers or {}).items()}
        self.default = default
        self.calls: List[str] = []

    def __call__(self, url: str, timeout: float) -> bool:
        self.calls.append(url)
        seq = self.answers.get(url)
        if not seq:
            return self.default
        if len(seq) > 1:
            return seq.pop(0)
        return seq[0]

    def count(self, url: str) -> int:
        return self.calls.count(url)


@dataclass
class FakeServices:
    installed: bool = True
    start_ok: bool = True
    started: List[str] = field(default_factory=list)
    active: bool = False
    process_running: bool = False
    stopped: List[str] = field(default_factory=list)

    def is_installed(self, name: str) -> bool:
        return self.installed

    def start(self, name: str) -> bool:
        self.started.append(name)
        return self.start_ok

    def stop(self, name: str) -> bool:
        self.stopped.append(name)
        return True

    def is_active(self, name: str) -> bool:
        return self.active

    def is_process_running(self, name: str) -> bool:
        return self.process_running


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
