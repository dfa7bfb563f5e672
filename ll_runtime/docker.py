"""Docker engine access through the CLI."""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from typing import Any, Dict, List, Optional, Sequence

from ll_common.errors import LaunchFailure, RuntimeUnavailable
from ll_core.models.types import ContainerSpec

logger = logging.getLogger(__name__)

DOCKER_GROUP_HINT = "sudo usermod -aG docker $USER && newgrp docker"


class DockerRuntime:
    """Run container engine commands, optionally prefixed with ``sudo``."""

    def __init__(self, engine: str = "docker", use_privilege_escalation: bool = False):
        self.engine = engine
        self.use_privilege_escalation = use_privilege_escalation

    def _cmd(self, *args: str) -> List[str]:
        prefix = ["sudo", "-n"] if self.use_privilege_escalation else []
        return [*prefix, self.engine, *args]

    def _run(
        self, *args: str, timeout: float | None = None
    ) -> subprocess.CompletedProcess[str]:
        cmd = self._cmd(*args)
        logger.debug("Running %s", " ".join(cmd))
        try:
            return subprocess.run(
                cmd, capture_output=True, text=True, check=False, timeout=timeout
            )
        except OSError as exc:
            raise RuntimeUnavailable(
                f"Cannot execute {cmd[0]}: {exc.strerror or exc}",
                context={"command": cmd[0], "engine": self.engine},
                cause=exc,
                hint=self._missing_binary_hint(cmd[0]),
            )

    def _missing_binary_hint(self, binary: str) -> str:
        if binary == "sudo":
            return f"Install sudo, or drop --sudo after running: {DOCKER_GROUP_HINT}"
        return "Install Docker: https://docs.docker.com/engine/install/"

    def _quiet_ok(self, *args: str, timeout: float | None = None) -> bool:
        try:
            return self._run(*args, timeout=timeout).returncode == 0
        except subprocess.TimeoutExpired:
            logger.debug("%s %s timed out", self.engine, args[0] if args else "")
            return False

    # -- availability ----------------------------------------------------

    def check_available(self) -> None:
        """Raise RuntimeUnavailable unless ``<engine> info`` succeeds."""
        if not shutil.which(self.engine):
            raise RuntimeUnavailable(
                f"{self.engine} not found in PATH",
                context={"engine": self.engine},
                hint=self._missing_binary_hint(self.engine),
            )
        if self.use_privilege_escalation and not shutil.which("sudo"):
            raise RuntimeUnavailable(
                "sudo was requested but is not installed",
                context={"engine": self.engine, "sudo": True},
                hint=self._missing_binary_hint("sudo"),
            )
        if self._quiet_ok("info"):
            return
        if not self.use_privilege_escalation and self.sudo_would_work():
            raise RuntimeUnavailable(
                f"Cannot run {self.engine} commands as the current user",
                context={"engine": self.engine},
                hint=f"{DOCKER_GROUP_HINT} (or rerun with --sudo)",
            )
        raise RuntimeUnavailable(
            f"Cannot run {self.engine} commands; check your installation",
            context={"engine": self.engine, "sudo": self.use_privilege_escalation},
            hint=f"systemctl status {self.engine}",
        )

    def sudo_would_work(self) -> bool:
        """Return True when non-interactive sudo can reach the engine."""
        if not shutil.which("sudo"):
            return False
        try:
            result = subprocess.run(
                ["sudo", "-n", self.engine, "info"],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError:
            return False
        return result.returncode == 0

    # -- networks --------------------------------------------------------

    def network_exists(self, name: str) -> bool:
        return self._quiet_ok("network", "inspect", name)

    def create_network(self, name: str) -> None:
        result = self._run("network", "create", name)
        if result.returncode != 0:
            raise LaunchFailure(
                f"Failed to create network {name}: {result.stderr.strip()}",
                context={"network": name},
            )

    def inspect_network(self, name: str) -> Optional[Dict[str, Any]]:
        """Return the engine's description of ``name``, or None if absent."""
        result = self._run("network", "inspect", name)
        if result.returncode != 0:
            return None
        try:
            payload = json.loads(result.stdout or "[]")
        except json.JSONDecodeError:
            logger.debug("Unparseable network inspect output for %s", name)
            return None
        return payload[0] if payload else None

    def network_containers(self, name: str) -> List[str]:
        info = self.inspect_network(name) or {}
        containers = info.get("Containers") or {}
        return sorted(entry.get("Name", "") for entry in containers.values() if entry.get("Name"))

    # -- images ----------------------------------------------------------

    def image_exists(self, image: str) -> bool:
        return self._quiet_ok("image", "inspect", image)

    def pull_image(self, image: str, timeout: float | None = None) -> bool:
        try:
            result = self._run("pull", image, timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.warning("Pull of %s timed out after %ss", image, timeout)
            return False
        if result.returncode != 0:
            logger.debug("Pull of %s failed: %s", image, result.stderr.strip())
            return False
        return True

    # -- containers ------------------------------------------------------

    def container_exists(self, name: str) -> bool:
        return self._quiet_ok("container", "inspect", name)

    def remove_container(self, name: str) -> None:
        result = self._run("rm", "-f", name)
        if result.returncode != 0:
            raise LaunchFailure(
                f"Failed to remove container {name}: {result.stderr.strip()}",
                context={"container": name},
            )

    @staticmethod
    def run_args(spec: ContainerSpec) -> List[str]:
        """Build the ``run`` argument list for ``spec``."""
        args = ["run", "-d", "--name", spec.name]
        if spec.network:
            args += ["--network", spec.network]
        for port in spec.ports:
            args += ["-p", port.as_flag()]
        for key, value in spec.env.items():
            args += ["-e", f"{key}={value}"]
        for volume in spec.volumes:
            args += ["-v", volume.as_flag()]
        args += list(spec.extra_flags)
        args.append(spec.image)
        args += list(spec.command)
        return args

    def run_container(self, spec: ContainerSpec) -> None:
        logger.info("Starting container %s from %s", spec.name, spec.image)
        result = self._run(*self.run_args(spec))
        if result.returncode != 0:
            stderr = (result.stderr or result.stdout or "").strip()
            raise LaunchFailure(
                f"Failed to start container {spec.name}: {stderr}",
                context={"container": spec.name, "image": spec.image},
                hint=f"{self.engine} logs {spec.name}",
            )

    def exec_in_container(
        self, name: str, command: Sequence[str], timeout: float | None = None
    ) -> int:
        try:
            return self._run("exec", name, *command, timeout=timeout).returncode
        except subprocess.TimeoutExpired:
            logger.debug("exec in %s timed out", name)
            return 124

    def stop_container(self, name: str, timeout: float | None = None) -> bool:
        args = ["stop"]
        if timeout is not None:
            args += ["-t", str(int(timeout))]
        return self._quiet_ok(*args, name)

    def is_running(self, name: str) -> bool:
        try:
            result = self._run("inspect", "-f", "{{.State.Running}}", name)
        except RuntimeUnavailable:
            return False
        return result.returncode == 0 and result.stdout.strip().lower() == "true"

    def container_ip(self, name: str) -> Optional[str]:
        result = self._run(
            "inspect", "-f", "{{range .NetworkSettings.Networks}}{{.IPAddress}}{{end}}", name
        )
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None
