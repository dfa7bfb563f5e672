"""Reverse-order container teardown with stop verification."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ll_core.interfaces import ContainerRuntime, LaunchObserver, NullObserver, Sleep

logger = logging.getLogger(__name__)


@dataclass
class TeardownReport:
    """Which containers confirmed stopping and which did not."""

    stopped: List[str] = field(default_factory=list)
    still_running: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.stopped) + len(self.still_running)

    @property
    def all_stopped(self) -> bool:
        return not self.still_running


class Teardown:
    """Stop containers newest-first and confirm each one actually stopped."""

    def __init__(
        self,
        runtime: ContainerRuntime,
        *,
        grace_seconds: float = 3.0,
        poll_interval: float = 1.0,
        stop_timeout: float | None = None,
        observer: Optional[LaunchObserver] = None,
        sleep: Sleep = time.sleep,
    ) -> None:
        self._runtime = runtime
        self._grace = grace_seconds
        self._poll_interval = poll_interval
        self._stop_timeout = stop_timeout
        self._observer: LaunchObserver = observer or NullObserver()
        self._sleep = sleep

    def stop_all(self, names: Sequence[str]) -> TeardownReport:
        """Stop ``names`` in reverse order of the input list."""
        report = TeardownReport()
        for name in reversed(list(names)):
            if self.stop_one(name):
                report.stopped.append(name)
            else:
                report.still_running.append(name)
        return report

    def stop_one(self, name: str) -> bool:
        self._observer.info(f"Stopping container {name}...")
        if not self._runtime.stop_container(name, timeout=self._stop_timeout):
            logger.debug("Stop request for %s was rejected by the engine", name)
        if self._confirm_stopped(name):
            self._observer.success(f"{name} container stopped")
            return True
        self._observer.warning(f"{name} container still appears to be running")
        return False

    def _confirm_stopped(self, name: str) -> bool:
        # One check right after the stop, then one per interval until the grace period ends.
        polls = int(self._grace / self._poll_interval) + 1 if self._poll_interval > 0 else 1
        for poll in range(polls):
            if not self._runtime.is_running(name):
                return True
            if poll < polls - 1:
                self._sleep(self._poll_interval)
        return False
