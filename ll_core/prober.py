"""Readiness prober: bounded polling of network or in-container targets."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Protocol

from ll_common.errors import ProbeTargetError
from ll_core.interfaces import ContainerRuntime, HttpProbe, Sleep
from ll_core.models.types import ProbeResult, ProbeStatus

logger = logging.getLogger(__name__)

DEFAULT_CONNECT_TIMEOUT = 1.0


class ProbeTarget(Protocol):
    """Something that can be asked, once, whether it is listening."""

    def validate(self) -> None: ...

    def describe(self) -> str: ...

    def is_reachable(self) -> bool:
        """Return False when no amount of polling can succeed."""
        ...

    def attempt(self, connect_timeout: float) -> bool: ...


@dataclass(frozen=True)
class HttpProbeTarget:
    """Probe a URL directly from this process."""

    url: str
    probe: HttpProbe

    def validate(self) -> None:
        if not self.url or not self.url.strip():
            raise ProbeTargetError("Probe URL must not be empty")

    def describe(self) -> str:
        return self.url

    def is_reachable(self) -> bool:
        return True

    def attempt(self, connect_timeout: float) -> bool:
        return self.probe(self.url, connect_timeout)


@dataclass(frozen=True)
class ContainerProbeTarget:
    """Probe a URL from inside a running container via ``exec``."""

    container: str
    url: str
    runtime: ContainerRuntime

    def validate(self) -> None:
        if not self.container or not self.container.strip():
            raise ProbeTargetError("Probe container name must not be empty")
        if not self.url or not self.url.strip():
            raise ProbeTargetError(
                "Probe URL must not be empty",
                context={"container": self.container},
            )

    def describe(self) -> str:
        return f"{self.container} -> {self.url}"

    def is_reachable(self) -> bool:
        return self.runtime.is_running(self.container)

    def attempt(self, connect_timeout: float) -> bool:
        command = [
            "curl",
            "-s",
            "-o",
            "/dev/null",
            "--connect-timeout",
            f"{connect_timeout:g}",
            self.url,
        ]
        # curl exits 0 for any HTTP status, which is what "listening" means here.
        rc = self.runtime.exec_in_container(
            self.container, command, timeout=connect_timeout + 5
        )
        return rc == 0


def _validate_budget(max_attempts: int, interval: float) -> None:
    if max_attempts < 1:
        raise ProbeTargetError(f"max_attempts must be >= 1, got {max_attempts}")
    if interval < 0:
        raise ProbeTargetError(f"interval must be >= 0, got {interval}")


def wait_until_ready(
    target: ProbeTarget,
    max_attempts: int,
    interval: float,
    *,
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    sleep: Sleep = time.sleep,
) -> ProbeResult:
    """Poll ``target`` until it answers or ``max_attempts`` are used up.

    Connection failures simply consume an attempt. Only a malformed target
    raises (ProbeTargetError).
    """
    target.validate()
    _validate_budget(max_attempts, interval)
    description = target.describe()

    for attempt in range(1, max_attempts + 1):
        if not target.is_reachable():
            logger.debug("Probe target %s is not running", description)
            return ProbeResult(ProbeStatus.UNREACHABLE, attempt, description)
        if target.attempt(connect_timeout):
            logger.debug("Probe %s ready after %d attempt(s)", description, attempt)
            return ProbeResult(ProbeStatus.READY, attempt, description)
        if attempt < max_attempts:
            sleep(interval)

    logger.debug("Probe %s timed out after %d attempt(s)", description, max_attempts)
    return ProbeResult(ProbeStatus.TIMED_OUT, max_attempts, description)


def check_once(
    target: ProbeTarget, *, connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
) -> ProbeResult:
    """Single probe; failure maps to UNREACHABLE."""
    target.validate()
    description = target.describe()
    if target.is_reachable() and target.attempt(connect_timeout):
        return ProbeResult(ProbeStatus.READY, 1, description)
    return ProbeResult(ProbeStatus.UNREACHABLE, 1, description)
