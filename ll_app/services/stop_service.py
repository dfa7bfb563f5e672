"""Detect and stop the containers and local services a launch may have started."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ll_app.services.launcher_config import LauncherConfig
from ll_core.api import (
    ContainerRuntime,
    HttpProbe,
    LaunchObserver,
    NullObserver,
    Teardown,
)
from ll_runtime.api import ServiceManager

logger = logging.getLogger(__name__)

LOCAL_OLLAMA_LABEL = "Local Ollama"
_LOCAL_OLLAMA_SERVICE = "ollama"
_LOCAL_PROBE_TIMEOUT = 2.0


@dataclass(frozen=True)
class StopTarget:
    label: str
    name: str
    container: bool = True


@dataclass
class StopSummary:
    """Outcome of a stop request; ``stopped/total`` is reported to the user."""

    targets: List[StopTarget] = field(default_factory=list)
    stopped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.targets)


class StopService:
    """Stop the UI, backend containers and a locally running Ollama."""

    def __init__(
        self,
        runtime: ContainerRuntime,
        services: ServiceManager,
        probe: HttpProbe,
        *,
        observer: Optional[LaunchObserver] = None,
        sleep: Callable[[float], None] = time.sleep,
        settle_seconds: float = 2.0,
    ) -> None:
        self._runtime = runtime
        self._services = services
        self._probe = probe
        self._observer: LaunchObserver = observer or NullObserver()
        self._sleep = sleep
        self._settle = settle_seconds

    @staticmethod
    def _candidates(cfg: LauncherConfig) -> List[StopTarget]:
        # Start order; teardown stops newest first so the UI goes down first.
        return [
            StopTarget("Ollama container", cfg.ollama_container_name),
            StopTarget("LocalAI", cfg.localai_name),
            StopTarget("Open WebUI", cfg.open_webui_name),
        ]

    def _local_api_url(self, cfg: LauncherConfig) -> str:
        return f"http://localhost:{cfg.ollama_port}/api/version"

    def local_ollama_running(self, cfg: LauncherConfig) -> bool:
        """True only when the Ollama API answers and no Ollama container serves it."""
        if self._runtime.is_running(cfg.ollama_container_name):
            logger.debug("Ollama container is running; API answers come from it")
            return False
        if not self._probe(self._local_api_url(cfg), _LOCAL_PROBE_TIMEOUT):
            return False
        return self._services.is_active(_LOCAL_OLLAMA_SERVICE) or self._services.is_process_running(
            _LOCAL_OLLAMA_SERVICE
        )

    def detect(self, cfg: LauncherConfig) -> List[StopTarget]:
        targets = [t for t in self._candidates(cfg) if self._runtime.is_running(t.name)]
        if self.local_ollama_running(cfg):
            targets.append(StopTarget(LOCAL_OLLAMA_LABEL, _LOCAL_OLLAMA_SERVICE, container=False))
        return targets

    def stop(self, cfg: LauncherConfig) -> StopSummary:
        summary = StopSummary(targets=self.detect(cfg))
        if not summary.targets:
            self._observer.info("No services started by the launcher are currently running.")
            return summary
        labels = ", ".join(t.label for t in summary.targets)
        self._observer.info(f"Active services detected: {labels}")

        containers = [t.name for t in summary.targets if t.container]
        if containers:
            report = Teardown(self._runtime, observer=self._observer, sleep=self._sleep).stop_all(
                containers
            )
            summary.stopped.extend(report.stopped)
            summary.failed.extend(report.still_running)

        if any(not t.container for t in summary.targets):
            if self._stop_local_ollama(cfg):
                summary.stopped.append(_LOCAL_OLLAMA_SERVICE)
            else:
                summary.failed.append(_LOCAL_OLLAMA_SERVICE)
        return summary

    def _stop_local_ollama(self, cfg: LauncherConfig) -> bool:
        self._observer.info("Stopping local Ollama...")
        self._services.stop(_LOCAL_OLLAMA_SERVICE)
        self._sleep(self._settle)
        if self._probe(self._local_api_url(cfg), _LOCAL_PROBE_TIMEOUT):
            self._observer.warning("Failed to stop local Ollama: API is still responding")
            return False
        self._observer.success("Local Ollama stopped")
        return True
