"""Launch coordinator: drive the backend/UI lifecycle and build the run report."""

from __future__ import annotations

import logging
import time
from typing import List, Optional
from urllib.parse import urlsplit

from ll_common.errors import (
    ImageUnavailable,
    LaunchFailure,
    LLError,
    ProbeTimeout,
    error_to_payload,
)
from ll_core.container_specs import backend_container_spec, ui_container_spec
from ll_core.coordinator_state import LaunchState, LaunchStateMachine
from ll_core.interfaces import (
    ContainerRuntime,
    HttpProbe,
    LaunchObserver,
    NullObserver,
    ServiceController,
    Sleep,
)
from ll_core.models.types import (
    BackendKind,
    ContainerSpec,
    LaunchPolicy,
    LaunchRequest,
    ProbeResult,
    ResolvedEndpoint,
    RunReport,
    StepOutcome,
)
from ll_core.prober import (
    ContainerProbeTarget,
    HttpProbeTarget,
    check_once,
    wait_until_ready,
)
from ll_core.resolver import resolve

logger = logging.getLogger(__name__)

OLLAMA_INSTALL_HINT = "Install Ollama from https://ollama.ai/"


def _origin(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


class LaunchCoordinator:
    """Sequence network, backend and UI setup for one backend kind.

    Pre-flight errors (configuration, runtime availability) propagate out of
    :meth:`run` before anything is created. Later errors are folded into the
    returned :class:`RunReport`, either as warnings or as the fatal failure.
    """

    def __init__(
        self,
        runtime: ContainerRuntime,
        http_probe: HttpProbe,
        *,
        services: Optional[ServiceController] = None,
        policy: Optional[LaunchPolicy] = None,
        observer: Optional[LaunchObserver] = None,
        sleep: Sleep = time.sleep,
    ) -> None:
        self._runtime = runtime
        self._http_probe = http_probe
        self._services = services
        self._policy = policy or LaunchPolicy()
        self._observer: LaunchObserver = observer or NullObserver()
        self._sleep = sleep
        self._started: List[str] = []

    @property
    def started_containers(self) -> List[str]:
        """Containers started by this coordinator, in start order."""
        return list(self._started)

    def run(self, kind: BackendKind, request: LaunchRequest) -> RunReport:
        kind = BackendKind(kind)
        endpoint = resolve(kind, request.backend)
        backend_spec: Optional[ContainerSpec] = None
        if kind.containerized:
            backend_spec = backend_container_spec(
                kind, request.backend, request.network, request.base_dir
            )
        self._runtime.check_available()

        report = RunReport(kind=kind, endpoint=endpoint)
        machine = LaunchStateMachine()
        machine.register_callback(lambda state, _reason: setattr(report, "state", state))
        machine.register_callback(
            lambda state, reason: logger.debug("Launch state -> %s (%s)", state.value, reason)
        )

        try:
            self._ensure_network(request.network)
            machine.transition(LaunchState.NETWORK_READY)

            pre_probe = self._configure_backend(kind, endpoint, backend_spec, report)
            machine.transition(LaunchState.BACKEND_CONFIGURED)

            self._verify_backend(kind, endpoint, pre_probe, report)
            machine.transition(LaunchState.BACKEND_VERIFIED)

            self._launch_ui(request, endpoint, report)
            machine.transition(LaunchState.UI_LAUNCHED)

            self._verify_connectivity(request, endpoint, report)
            machine.transition(LaunchState.CONNECTIVITY_VERIFIED)

            report.access_urls = self._access_urls(kind, request, endpoint)
            machine.transition(LaunchState.DONE)
        except LLError as exc:
            report.failure = exc
            logger.info("Launch of %s failed: %s", kind.value, error_to_payload(exc))
            machine.transition(LaunchState.FAILED, reason=str(exc))
        finally:
            report.reached = machine.last_completed
            report.started_containers = list(self._started)
        return report

    # -- transitions -----------------------------------------------------

    def _ensure_network(self, network: str) -> None:
        if self._runtime.network_exists(network):
            self._observer.info(f"Docker network '{network}' already exists")
            return
        self._observer.info(f"Creating Docker network '{network}'...")
        self._runtime.create_network(network)
        self._observer.success(f"Docker network '{network}' created")

    def _configure_backend(
        self,
        kind: BackendKind,
        endpoint: ResolvedEndpoint,
        spec: Optional[ContainerSpec],
        report: RunReport,
    ) -> Optional[ProbeResult]:
        if kind == BackendKind.LOCAL_PROCESS:
            return self._configure_local_process(endpoint, report)
        if spec is None:
            self._observer.info(f"Using {kind.label} at {_origin(endpoint.probe_url)}")
            report.backend_setup = StepOutcome.SKIPPED
            return None
        self._configure_backend_container(kind, spec, report)
        return None

    def _configure_local_process(
        self, endpoint: ResolvedEndpoint, report: RunReport
    ) -> Optional[ProbeResult]:
        policy = self._policy
        target = HttpProbeTarget(endpoint.probe_url, self._http_probe)
        initial = check_once(target, connect_timeout=policy.connect_timeout)
        if initial.ready:
            self._observer.success("Connection to Ollama on host verified")
            report.backend_setup = StepOutcome.OK
            return initial

        self._observer.warning("Cannot connect to Ollama on the local host.")
        if not policy.attempt_local_start or self._services is None:
            report.backend_setup = StepOutcome.DEGRADED
            return initial

        service = policy.local_service_name
        if not self._services.is_installed(service):
            report.warnings.append(
                LaunchFailure(
                    "Ollama does not appear to be installed on the system",
                    context={"service": service},
                    hint=OLLAMA_INSTALL_HINT,
                )
            )
            self._observer.warning("Ollama does not appear to be installed on the system.")
            report.backend_setup = StepOutcome.DEGRADED
            return initial

        self._observer.info("Attempting to start Ollama service...")
        if self._services.start(service):
            self._observer.info("Ollama service started")
        else:
            self._observer.warning("Ollama service could not be started")
        result = wait_until_ready(
            target,
            policy.max_attempts,
            policy.interval,
            connect_timeout=policy.connect_timeout,
            sleep=self._sleep,
        )
        report.backend_setup = StepOutcome.OK if result.ready else StepOutcome.DEGRADED
        return result

    def _configure_backend_container(
        self, kind: BackendKind, spec: ContainerSpec, report: RunReport
    ) -> None:
        self._observer.info(f"Configuring {kind.label}...")
        degraded = self._ensure_image(spec.image, kind.label, report)
        self._replace_container(spec.name)
        try:
            self._start_container(spec)
        except LaunchFailure as exc:
            if self._policy.abort_on_backend_failure:
                raise
            report.warnings.append(exc)
            self._observer.warning(str(exc))
            report.backend_setup = StepOutcome.FAILED
            return
        report.backend_setup = StepOutcome.DEGRADED if degraded else StepOutcome.OK

    def _verify_backend(
        self,
        kind: BackendKind,
        endpoint: ResolvedEndpoint,
        pre_probe: Optional[ProbeResult],
        report: RunReport,
    ) -> None:
        policy = self._policy
        result = pre_probe
        if result is None:
            attempts = policy.max_attempts
            connect_timeout = policy.connect_timeout
            if kind == BackendKind.REMOTE_OPENAI_COMPATIBLE:
                attempts = policy.remote_attempts
                connect_timeout = policy.remote_connect_timeout
            self._observer.info(f"Waiting for {kind.label} at {endpoint.probe_url}...")
            result = wait_until_ready(
                HttpProbeTarget(endpoint.probe_url, self._http_probe),
                attempts,
                policy.interval,
                connect_timeout=connect_timeout,
                sleep=self._sleep,
            )
        report.backend_probe = result
        if result.ready:
            self._observer.success(f"{kind.label} is ready after {result.attempts} attempt(s)")
            return

        warning = ProbeTimeout(
            f"{kind.label} is not responding at {endpoint.probe_url}",
            context={"attempts": result.attempts, "status": result.status.value},
            hint="Make sure the backend is running and accessible.",
        )
        report.warnings.append(warning)
        self._observer.warning(str(warning))
        if report.backend_setup == StepOutcome.OK:
            report.backend_setup = StepOutcome.DEGRADED
        if policy.confirm is not None and not policy.confirm("Continue anyway?"):
            raise LaunchFailure(
                f"Launch aborted: {kind.label} is not reachable",
                context={"probe_url": endpoint.probe_url},
                hint=warning.hint,
            )

    def _launch_ui(
        self, request: LaunchRequest, endpoint: ResolvedEndpoint, report: RunReport
    ) -> None:
        self._observer.info("Preparing Open WebUI...")
        self._ensure_image(request.ui_image, "Open WebUI", report)
        self._replace_container(request.ui_name)
        spec = ui_container_spec(
            name=request.ui_name,
            image=request.ui_image,
            port=request.ui_port,
            endpoint=endpoint,
            network=request.network,
            base_dir=request.base_dir,
        )
        try:
            self._start_container(spec)
        except LaunchFailure:
            report.ui_launch = StepOutcome.FAILED
            raise
        report.ui_launch = StepOutcome.OK

    def _verify_connectivity(
        self, request: LaunchRequest, endpoint: ResolvedEndpoint, report: RunReport
    ) -> None:
        policy = self._policy
        self._observer.info("Verifying connectivity between Open WebUI and the backend...")
        result = wait_until_ready(
            ContainerProbeTarget(request.ui_name, endpoint.connectivity_url, self._runtime),
            policy.connectivity_attempts,
            policy.interval,
            connect_timeout=policy.connectivity_timeout,
            sleep=self._sleep,
        )
        report.connectivity_probe = result
        if result.ready:
            self._observer.success(f"Open WebUI can connect to the {endpoint.kind.value} backend")
            return
        warning = ProbeTimeout(
            f"Open WebUI cannot connect to the {endpoint.kind.value} backend",
            context={"url": endpoint.connectivity_url, "status": result.status.value},
            hint="llm-launcher network",
        )
        report.warnings.append(warning)
        self._observer.warning(str(warning))

    # -- helpers ---------------------------------------------------------

    def _ensure_image(self, image: str, label: str, report: RunReport) -> bool:
        """Pull ``image``; return True when a cached copy had to be used."""
        cached = self._runtime.image_exists(image)
        self._observer.info(f"Checking updates for {label} ({image})...")
        if self._runtime.pull_image(image, timeout=self._policy.pull_timeout):
            self._observer.success(f"{label} image updated/downloaded successfully")
            return False
        if cached:
            warning = ImageUnavailable(
                f"Failed to download {label} image; using the local version",
                context={"image": image},
                hint=f"docker pull {image}",
            )
            report.warnings.append(warning)
            self._observer.warning(str(warning))
            return True
        raise ImageUnavailable(
            f"The {label} image is not available either online or locally",
            context={"image": image},
            hint=f"docker pull {image}",
        )

    def _replace_container(self, name: str) -> None:
        if self._runtime.container_exists(name):
            self._observer.info(f"Removing existing '{name}' container...")
            self._runtime.remove_container(name)

    def _start_container(self, spec: ContainerSpec) -> None:
        self._observer.info(f"Starting container {spec.name}...")
        self._runtime.run_container(spec)
        self._started.append(spec.name)
        self._observer.success(f"Container '{spec.name}' started successfully")

    @staticmethod
    def _access_urls(
        kind: BackendKind, request: LaunchRequest, endpoint: ResolvedEndpoint
    ) -> dict[str, str]:
        urls = {"Open WebUI": f"http://localhost:{request.ui_port}"}
        urls[kind.label] = _origin(endpoint.probe_url)
        return urls
