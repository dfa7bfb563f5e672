"""DockerRuntime command construction with subprocess patched out."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from ll_common.api import LaunchFailure, RuntimeUnavailable
from ll_core.api import ContainerSpec, PortMapping, VolumeMount
from ll_runtime.api import DOCKER_GROUP_HINT, DockerRuntime

pytestmark = pytest.mark.unit_runtime


class _Recorder:
    def __init__(self, results=None, default=0, stdout=""):
        self.results = results or {}
        self.default = default
        self.stdout = stdout
        self.commands = []

    def __call__(self, cmd, **kwargs):
        self.commands.append(cmd)
        key = " ".join(cmd)
        for prefix, rc in self.results.items():
            if key.startswith(prefix):
                return subprocess.CompletedProcess(cmd, rc, stdout=self.stdout, stderr="boom")
        return subprocess.CompletedProcess(cmd, self.default, stdout=self.stdout, stderr="")


@pytest.fixture
def recorder(monkeypatch):
    rec = _Recorder()
    monkeypatch.setattr(subprocess, "run", rec)
    monkeypatch.setattr("shutil.which", lambda name: f"/usr/bin/{name}")
    return rec


def test_run_args_follow_spec_order():
    spec = ContainerSpec(
        name="open-webui",
        image="ghcr.io/open-webui/open-webui:main",
        network="ollama-network",
        ports=(PortMapping(3000, 8080),),
        env={"WEBUI_AUTH": "false"},
        volumes=(VolumeMount(str(Path("/data")), "/app/backend/data"),),
        extra_flags=("--add-host=host.docker.internal:host-gateway",),
        command=("serve",),
    )

    assert DockerRuntime.run_args(spec) == [
        "run", "-d", "--name", "open-webui",
        "--network", "ollama-network",
        "-p", "3000:8080",
        "-e", "WEBUI_AUTH=false",
        "-v", "/data:/app/backend/data",
        "--add-host=host.docker.internal:host-gateway",
        "ghcr.io/open-webui/open-webui:main",
        "serve",
    ]


def test_sudo_prefixes_every_command(recorder):
    DockerRuntime(use_privilege_escalation=True).network_exists("net")

    assert recorder.commands[0] == ["sudo", "-n", "docker", "network", "inspect", "net"]


def test_check_available_missing_binary(monkeypatch):
    monkeypatch.setattr("shutil.which", lambda name: None)

    with pytest.raises(RuntimeUnavailable) as info:
        DockerRuntime().check_available()
    assert "docs.docker.com" in info.value.hint


def test_check_available_suggests_docker_group_when_sudo_works(recorder, monkeypatch):
    recorder.results = {"docker info": 1}
    monkeypatch.setattr(DockerRuntime, "sudo_would_work", lambda self: True)

    with pytest.raises(RuntimeUnavailable) as info:
        DockerRuntime().check_available()
    assert info.value.hint.startswith(DOCKER_GROUP_HINT)
    assert "--sudo" in info.value.hint


def test_run_container_failure_raises_with_logs_hint(recorder):
    recorder.results = {"docker run": 125}

    with pytest.raises(LaunchFailure) as info:
        DockerRuntime().run_container(ContainerSpec(name="localai", image="img"))
    assert info.value.hint == "docker logs localai"


def test_pull_timeout_returns_false(monkeypatch):
    def _timeout(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs.get("timeout"))

    monkeypatch.setattr(subprocess, "run", _timeout)

    assert DockerRuntime().pull_image("img", timeout=1) is False


def test_exec_timeout_maps_to_124(monkeypatch):
    def _timeout(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs.get("timeout"))

    monkeypatch.setattr(subprocess, "run", _timeout)

    assert DockerRuntime().exec_in_container("open-webui", ["true"], timeout=1) == 124


def test_stop_passes_integer_timeout(recorder):
    assert DockerRuntime().stop_container("open-webui", timeout=2.5)
    assert recorder.commands[0] == ["docker", "stop", "-t", "2", "open-webui"]


def test_is_running_parses_inspect_output(recorder):
    recorder.stdout = "true\n"
    assert DockerRuntime().is_running("open-webui")

    recorder.stdout = "false\n"
    assert not DockerRuntime().is_running("open-webui")


def test_network_containers_sorted_from_inspect(recorder):
    recorder.stdout = (
        '[{"Driver": "bridge", "Containers": {'
        '"a": {"Name": "open-webui"}, "b": {"Name": "localai-container"}}}]'
    )

    assert DockerRuntime().network_containers("ollama-network") == [
        "localai-container",
        "open-webui",
    ]


def test_inspect_missing_network_returns_none(recorder):
    recorder.results = {"docker network inspect": 1}

    assert DockerRuntime().inspect_network("missing") is None


def test_sudo_would_work_runs_non_interactive_sudo():
    completed = subprocess.CompletedProcess([], 0, stdout="", stderr="")
    with patch("shutil.which", return_value="/usr/bin/sudo"), patch(
        "subprocess.run", return_value=completed
    ) as run:
        assert DockerRuntime().sudo_would_work()

    run.assert_called_once_with(
        ["sudo", "-n", "docker", "info"], capture_output=True, text=True, check=False
    )


def test_check_available_with_sudo_requested_but_not_installed(monkeypatch):
    monkeypatch.setattr("shutil.which", lambda name: None if name == "sudo" else f"/usr/bin/{name}")

    with pytest.raises(RuntimeUnavailable) as info:
        DockerRuntime(use_privilege_escalation=True).check_available()
    assert "sudo" in str(info.value)
    assert DOCKER_GROUP_HINT in info.value.hint


def test_missing_executable_maps_to_runtime_unavailable(monkeypatch):
    def _missing(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(subprocess, "run", _missing)

    with pytest.raises(RuntimeUnavailable) as info:
        DockerRuntime(use_privilege_escalation=True).network_exists("ollama-network")
    assert info.value.context["command"] == "sudo"
    assert isinstance(info.value.__cause__, FileNotFoundError)
