import pytest

from ll_app.api import LauncherConfig, StopService
from tests.helpers.fakes import FakeRuntime, FakeServices, RecordingSleep, ScriptedProbe

pytestmark = pytest.mark.unit_app

LOCAL_API = "http://localhost:11434/api/version"


def _stop_service(runtime, services=None, probe=None):
    return StopService(
        runtime,
        services or FakeServices(),
        probe or ScriptedProbe(default=False),
        sleep=RecordingSleep(),
    )


def test_nothing_running_reports_zero():
    summary = _stop_service(FakeRuntime()).stop(LauncherConfig())

    assert summary.total == 0
    assert summary.stopped == []


def test_running_containers_are_stopped_ui_first():
    runtime = FakeRuntime(running={"open-webui", "localai-container"})

    summary = _stop_service(runtime).stop(LauncherConfig())

    stopped = [c[1] for c in runtime.calls if c[0] == "stop_container"]
    assert stopped == ["open-webui", "localai-container"]
    assert summary.total == 2
    assert sorted(summary.stopped) == ["localai-container", "open-webui"]


def test_stubborn_container_is_reported_failed():
    runtime = FakeRuntime(running={"open-webui"}, stubborn={"open-webui"})

    summary = _stop_service(runtime).stop(LauncherConfig())

    assert summary.failed == ["open-webui"]


def test_local_ollama_ignored_when_container_serves_port():
    runtime = FakeRuntime(running={"ollama-container"})
    services = FakeServices(active=True)
    probe = ScriptedProbe(default=True)

    targets = _stop_service(runtime, services, probe).detect(LauncherConfig())

    assert [t.name for t in targets] == ["ollama-container"]
    assert probe.calls == []


def test_local_ollama_stopped_and_verified():
    services = FakeServices(process_running=True)
    probe = ScriptedProbe({LOCAL_API: [True, False]})

    summary = _stop_service(FakeRuntime(), services, probe).stop(LauncherConfig())

    assert services.stopped == ["ollama"]
    assert summary.stopped == ["ollama"]
    assert summary.total == 1


def test_local_ollama_still_answering_counts_as_failure():
    services = FakeServices(active=True)
    probe = ScriptedProbe({LOCAL_API: [True]})

    summary = _stop_service(FakeRuntime(), services, probe).stop(LauncherConfig())

    assert summary.failed == ["ollama"]
