"""LaunchService wiring with fake runtime, probe and services."""

import os
import signal

import pytest

from ll_app.api import LaunchService, LauncherConfig, build_request, models_url
from ll_app.services import launch_service as launch_module
from ll_common.api import LaunchInterrupted
from ll_core.api import BackendKind, LaunchPolicy, LaunchState, resolve
from tests.helpers.fakes import FakeRuntime, FakeServices, RecordingSleep, ScriptedProbe

pytestmark = pytest.mark.unit_app


class _SignalOnUiStart(FakeRuntime):
    def run_container(self, spec):
        if spec.name == "open-webui":
            os.kill(os.getpid(), signal.SIGTERM)
        super().run_container(spec)


def _service(runtime, probe=None, services=None):
    return LaunchService(
        runtime_factory=lambda cfg: runtime,
        service_factory=lambda cfg: services or FakeServices(),
        probe=probe or ScriptedProbe(default=True),
        sleep=RecordingSleep(),
    )


def test_build_request_maps_flat_config(tmp_path):
    cfg = LauncherConfig(base_dir=tmp_path, open_webui_port=3100)

    request = build_request(cfg, BackendKind.CONTAINERIZED_OLLAMA)

    assert request.ui_port == 3100
    assert request.network == "ollama-network"
    assert request.backend.host == "ollama-container"
    assert request.base_dir == tmp_path


def test_models_url_per_protocol():
    ollama = resolve(BackendKind.LOCAL_PROCESS, LauncherConfig().backend_config("ollama"))
    remote = resolve(BackendKind.REMOTE_OPENAI_COMPATIBLE, LauncherConfig().backend_config("lmstudio"))

    assert models_url(ollama) == "http://localhost:11434/api/tags"
    assert models_url(remote) == "http://192.168.1.100:1234/v1/models"


def test_launch_runs_to_done(tmp_path):
    runtime = FakeRuntime()
    cfg = LauncherConfig(base_dir=tmp_path)

    report = _service(runtime).launch(
        BackendKind.CONTAINERIZED_OPENAI_COMPATIBLE, cfg, policy=LaunchPolicy(interval=0.0)
    )

    assert report.state == LaunchState.DONE
    assert report.started_containers == ["localai-container", "open-webui"]
    ui = runtime.spec("open-webui")
    assert ui.env["OPENAI_API_BASE_URL"] == "http://localai-container:8080/v1"


def test_confirm_is_forwarded_to_policy(tmp_path):
    prompts = []

    def confirm(prompt):
        prompts.append(prompt)
        return True

    _service(FakeRuntime(), probe=ScriptedProbe(default=False)).launch(
        "lmstudio",
        LauncherConfig(base_dir=tmp_path),
        confirm=confirm,
        policy=LaunchPolicy(interval=0.0),
    )

    assert prompts == ["Continue anyway?"]


def test_caller_policy_is_not_mutated(tmp_path):
    policy = LaunchPolicy(interval=0.0)

    _service(FakeRuntime(), probe=ScriptedProbe(default=False)).launch(
        "lmstudio",
        LauncherConfig(base_dir=tmp_path),
        confirm=lambda prompt: True,
        policy=policy,
    )

    assert policy.confirm is None


def test_termination_stops_started_containers(tmp_path):
    runtime = _SignalOnUiStart()

    report = _service(runtime).launch(
        BackendKind.CONTAINERIZED_OLLAMA,
        LauncherConfig(base_dir=tmp_path),
        policy=LaunchPolicy(interval=0.0),
    )

    assert isinstance(report.failure, LaunchInterrupted)
    assert report.state == LaunchState.FAILED
    assert ("stop_container", "ollama-container") in runtime.calls
    assert signal.getsignal(signal.SIGTERM) is not None


def test_models_listed_only_after_success(tmp_path, monkeypatch):
    monkeypatch.setattr(launch_module, "list_models", lambda url: ["llama3:8b"])
    service = _service(FakeRuntime())
    cfg = LauncherConfig(base_dir=tmp_path)

    ok = service.launch("ollama", cfg, policy=LaunchPolicy(interval=0.0))
    failed = _service(FakeRuntime(run_failures={"open-webui"})).launch(
        "ollama", cfg, policy=LaunchPolicy(interval=0.0)
    )

    assert service.available_models(ok) == ["llama3:8b"]
    assert service.available_models(failed) == []
