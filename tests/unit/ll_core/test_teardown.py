import pytest

from ll_core.api import Teardown
from tests.helpers.fakes import FakeRuntime, RecordingSleep

pytestmark = pytest.mark.unit_core


def test_stops_in_reverse_start_order():
    names = ["ollama-container", "localai-container", "open-webui"]
    runtime = FakeRuntime(running=set(names))

    report = Teardown(runtime, sleep=RecordingSleep()).stop_all(names)

    stopped = [c[1] for c in runtime.calls if c[0] == "stop_container"]
    assert stopped == list(reversed(names))
    assert report.all_stopped
    assert report.total == 3


def test_container_still_running_after_grace_is_reported():
    runtime = FakeRuntime(running={"open-webui"}, stubborn={"open-webui"})
    sleep = RecordingSleep()

    report = Teardown(runtime, grace_seconds=3.0, poll_interval=1.0, sleep=sleep).stop_all(
        ["open-webui"]
    )

    assert report.still_running == ["open-webui"]
    assert not report.all_stopped
    assert sleep.calls == [1.0, 1.0, 1.0]


def test_stopped_container_is_confirmed_without_waiting():
    runtime = FakeRuntime(running={"open-webui"})
    sleep = RecordingSleep()

    report = Teardown(runtime, grace_seconds=3.0, poll_interval=1.0, sleep=sleep).stop_all(
        ["open-webui"]
    )

    assert report.stopped == ["open-webui"]
    assert sleep.calls == []
