"""Docker network diagnostics: details, attached containers and pairwise ping."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations
from typing import Any, Dict, List, Optional

from ll_runtime.api import DockerRuntime


@dataclass
class AttachedContainer:
    name: str
    ip: Optional[str]
    running: bool


@dataclass
class PingCheck:
    source: str
    target: str
    ok: bool
    skipped: bool = False


@dataclass
class NetworkReport:
    network: str
    exists: bool
    driver: Optional[str] = None
    subnet: Optional[str] = None
    containers: List[AttachedContainer] = field(default_factory=list)
    pings: List[PingCheck] = field(default_factory=list)

    @property
    def failures(self) -> int:
        return sum(1 for p in self.pings if not p.ok and not p.skipped)


def _subnet(info: Dict[str, Any]) -> Optional[str]:
    configs = (info.get("IPAM") or {}).get("Config") or []
    for entry in configs:
        if entry.get("Subnet"):
            return entry["Subnet"]
    return None


class NetworkService:
    """Collect a connectivity report for the shared network."""

    def __init__(self, runtime: DockerRuntime, *, ping_timeout: float = 2.0) -> None:
        self.runtime = runtime
        self.ping_timeout = ping_timeout

    def _ping(self, source: str, target: str) -> bool:
        seconds = str(max(1, int(self.ping_timeout)))
        rc = self.runtime.exec_in_container(
            source,
            ["timeout", seconds, "ping", "-c", "1", target],
            timeout=self.ping_timeout + 1,
        )
        return rc == 0

    def diagnose(self, network: str) -> NetworkReport:
        info = self.runtime.inspect_network(network)
        if info is None:
            return NetworkReport(network=network, exists=False)
        report = NetworkReport(
            network=network,
            exists=True,
            driver=info.get("Driver"),
            subnet=_subnet(info),
        )
        for name in self.runtime.network_containers(network):
            report.containers.append(
                AttachedContainer(
                    name=name,
                    ip=self.runtime.container_ip(name),
                    running=self.runtime.is_running(name),
                )
            )
        for first, second in combinations(report.containers, 2):
            if not (first.running and second.running):
                report.pings.append(PingCheck(first.name, second.name, ok=False, skipped=True))
                continue
            report.pings.append(
                PingCheck(first.name, second.name, ok=self._ping(first.name, second.name))
            )
        return report
