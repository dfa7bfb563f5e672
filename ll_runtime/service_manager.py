"""Start and stop host services such as the local Ollama daemon."""

from __future__ import annotations

import logging
import shutil
import subprocess
from enum import Enum
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

# `systemctl status` exit codes meaning "unit exists" (active, inactive, failed).
_SYSTEMD_KNOWN_UNIT_CODES = (0, 3, 4)


class InitSystem(str, Enum):
    SYSTEMD = "systemd"
    SYSVINIT = "sysvinit"
    NONE = "none"


def detect_init_system() -> InitSystem:
    if shutil.which("systemctl"):
        return InitSystem.SYSTEMD
    if shutil.which("service"):
        return InitSystem.SYSVINIT
    return InitSystem.NONE


def _run(cmd: List[str]) -> subprocess.CompletedProcess[str]:
    logger.debug("Running %s", " ".join(cmd))
    return subprocess.run(cmd, capture_output=True, text=True, check=False)


class ServiceManager:
    """Manage a named host service through systemd, sysvinit or a manual fallback.

    The manual fallback launches ``<name> serve`` in the background with its
    output appended to ``<base_dir>/logs/<name>.log``.
    """

    def __init__(
        self,
        base_dir: Path,
        *,
        init_system: Optional[InitSystem] = None,
        use_sudo: bool = True,
    ) -> None:
        self.base_dir = Path(base_dir)
        self.init_system = init_system or detect_init_system()
        self.use_sudo = use_sudo

    def _privileged(self, *args: str) -> List[str]:
        return ["sudo", *args] if self.use_sudo else list(args)

    def _systemd_unit(self, name: str) -> Optional[str]:
        for unit in (name, f"{name}.service"):
            if _run(["systemctl", "status", unit]).returncode in _SYSTEMD_KNOWN_UNIT_CODES:
                return unit
        return None

    def _sysvinit_has(self, name: str) -> bool:
        result = _run(["service", "--status-all"])
        return name in (result.stdout or "") + (result.stderr or "")

    def is_installed(self, name: str) -> bool:
        """True when the service is registered or its binary is on PATH."""
        if self.init_system == InitSystem.SYSTEMD and self._systemd_unit(name):
            return True
        if self.init_system == InitSystem.SYSVINIT and self._sysvinit_has(name):
            return True
        return shutil.which(name) is not None

    def start(self, name: str) -> bool:
        if self.init_system == InitSystem.SYSTEMD:
            unit = self._systemd_unit(name)
            if unit:
                return _run(self._privileged("systemctl", "start", unit)).returncode == 0
        elif self.init_system == InitSystem.SYSVINIT and self._sysvinit_has(name):
            return _run(self._privileged("service", name, "start")).returncode == 0
        return self._start_manually(name)

    def stop(self, name: str) -> bool:
        if self.init_system == InitSystem.SYSTEMD and self.is_active(name):
            return _run(self._privileged("systemctl", "stop", name)).returncode == 0
        if self.init_system == InitSystem.SYSVINIT and self.is_active(name):
            return _run(self._privileged("service", name, "stop")).returncode == 0
        if not self.is_process_running(name):
            return False
        return _run(["pkill", "-TERM", "-f", f"{name} serve"]).returncode == 0

    def is_active(self, name: str) -> bool:
        if self.init_system == InitSystem.SYSTEMD:
            return _run(["systemctl", "is-active", "--quiet", name]).returncode == 0
        if self.init_system == InitSystem.SYSVINIT:
            result = _run(["service", name, "status"])
            return "running" in (result.stdout or "")
        return False

    def is_process_running(self, name: str) -> bool:
        if _run(["pgrep", "-x", name]).returncode == 0:
            return True
        return _run(["pgrep", "-f", f"{name} serve"]).returncode == 0

    def log_path(self, name: str) -> Path:
        return self.base_dir / "logs" / f"{name}.log"

    def _start_manually(self, name: str) -> bool:
        binary = shutil.which(name)
        if not binary:
            logger.debug("%s binary not found; cannot start it manually", name)
            return False
        log_path = self.log_path(name)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Starting %s serve in the background (log: %s)", name, log_path)
        with log_path.open("ab") as log_file:
            subprocess.Popen(
                [binary, "serve"],
                stdout=log_file,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
                start_new_session=True,
            )
        return True
