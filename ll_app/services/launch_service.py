"""Launch service: wire config, runtime and core coordinator for one run."""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Callable, List, Optional

from ll_app.services.launcher_config import LauncherConfig
from ll_core.api import (
    BackendKind,
    ContainerRuntime,
    HttpProbe,
    LaunchCoordinator,
    LaunchObserver,
    LaunchPolicy,
    LaunchRequest,
    NullObserver,
    ResolvedEndpoint,
    RunReport,
    ServiceController,
    Teardown,
    TerminationGuard,
)
from ll_common.api import launch_log_context
from ll_runtime.api import DockerRuntime, ServiceManager, http_probe, list_models

logger = logging.getLogger(__name__)

RuntimeFactory = Callable[[LauncherConfig], ContainerRuntime]
ServiceFactory = Callable[[LauncherConfig], ServiceController]


def default_runtime_factory(cfg: LauncherConfig) -> ContainerRuntime:
    return DockerRuntime(use_privilege_escalation=cfg.use_sudo)


def default_service_factory(cfg: LauncherConfig) -> ServiceController:
    return ServiceManager(cfg.base_dir)


def build_request(cfg: LauncherConfig, kind: BackendKind) -> LaunchRequest:
    """Project the flat config onto a core launch request."""
    return LaunchRequest(
        backend=cfg.backend_config(kind),
        network=cfg.docker_network,
        ui_name=cfg.open_webui_name,
        ui_image=cfg.open_webui_image,
        ui_port=cfg.open_webui_port,
        base_dir=cfg.base_dir,
    )


def models_url(endpoint: ResolvedEndpoint) -> str:
    """Host-visible URL listing the backend's models."""
    if endpoint.kind.protocol == "ollama":
        return endpoint.probe_url.replace("/api/version", "/api/tags")
    return endpoint.probe_url


class LaunchService:
    """Run the launch coordinator with teardown on termination signals."""

    def __init__(
        self,
        *,
        runtime_factory: RuntimeFactory = default_runtime_factory,
        service_factory: ServiceFactory = default_service_factory,
        probe: HttpProbe = http_probe,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._runtime_factory = runtime_factory
        self._service_factory = service_factory
        self._probe = probe
        self._sleep = sleep

    def launch(
        self,
        kind: BackendKind,
        cfg: LauncherConfig,
        *,
        observer: Optional[LaunchObserver] = None,
        confirm: Optional[Callable[[str], bool]] = None,
        policy: Optional[LaunchPolicy] = None,
    ) -> RunReport:
        """Launch the UI against ``kind``.

        Pre-flight errors (configuration, container engine) propagate. A
        termination signal stops every container started so far, newest
        first, and the run ends with ``LaunchInterrupted`` as its failure.
        """
        kind = BackendKind(kind)
        observer = observer or NullObserver()
        runtime = self._runtime_factory(cfg)
        policy = policy or LaunchPolicy()
        if confirm is not None:
            policy = replace(policy, confirm=confirm)
        coordinator = LaunchCoordinator(
            runtime,
            self._probe,
            services=self._service_factory(cfg),
            policy=policy,
            observer=observer,
            sleep=self._sleep,
        )
        teardown = Teardown(runtime, observer=observer, sleep=self._sleep)

        def _cleanup() -> None:
            started = coordinator.started_containers
            if not started:
                return
            observer.warning("Termination requested; stopping started containers...")
            teardown.stop_all(started)

        with launch_log_context(backend=kind.value, network=cfg.docker_network):
            logger.info("Launching %s", kind.value)
            with TerminationGuard(_cleanup):
                return coordinator.run(kind, build_request(cfg, kind))

    def available_models(self, report: RunReport) -> List[str]:
        if report.endpoint is None or not report.succeeded:
            return []
        return list_models(models_url(report.endpoint))
