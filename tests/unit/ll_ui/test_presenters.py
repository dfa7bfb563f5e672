import pytest

from ll_app.api import AttachedContainer, NetworkReport, PingCheck
from ll_common.api import ImageUnavailable, LaunchFailure
from ll_core.api import (
    BackendKind,
    LaunchState,
    ProbeResult,
    ProbeStatus,
    RunReport,
    StepOutcome,
)
from ll_ui.presenters.network import build_network_tables, render_network_report
from ll_ui.presenters.report import build_report_table, render_run_report
from ll_ui.tui.system.headless import HeadlessUI

pytestmark = pytest.mark.unit_ui


def _done_report(**overrides):
    report = RunReport(
        kind=BackendKind.LOCAL_PROCESS,
        state=LaunchState.DONE,
        backend_setup=StepOutcome.OK,
        backend_probe=ProbeResult(ProbeStatus.READY, 1),
        ui_launch=StepOutcome.OK,
        connectivity_probe=ProbeResult(ProbeStatus.READY, 1),
        started_containers=["open-webui"],
        access_urls={"Open WebUI": "http://localhost:3000"},
    )
    for key, value in overrides.items():
        setattr(report, key, value)
    return report


def test_report_table_has_one_row_per_component():
    table = build_report_table(_done_report())

    assert table.title == "Launch report (done)"
    assert [row[0] for row in table.rows] == [
        "Backend setup",
        "Backend probe",
        "Open WebUI",
        "Connectivity",
    ]


def test_clean_run_reports_ready():
    ui = HeadlessUI()

    assert render_run_report(ui, _done_report(), ["llama3:8b"])
    assert ui.messages("success") == ["Open WebUI is ready."]
    assert "Available models: llama3:8b" in ui.messages("info")
    assert ui.table("Access URLs").rows == [["Open WebUI", "http://localhost:3000"]]


def test_warnings_table_lists_hints_and_degrades():
    ui = HeadlessUI()
    warning = ImageUnavailable("Failed to download Open WebUI image", hint="docker pull img")

    assert render_run_report(ui, _done_report(warnings=[warning]))
    assert ui.table("Warnings").row_for("Failed to download Open WebUI image") == [
        "Failed to download Open WebUI image",
        "docker pull img",
    ]
    assert "Open WebUI is running with degraded components." in ui.messages("warning")


def test_failure_prints_suggested_fix():
    ui = HeadlessUI()
    failure = LaunchFailure("Failed to start container open-webui", hint="docker logs open-webui")

    report = _done_report(
        failure=failure, state=LaunchState.FAILED, reached=LaunchState.BACKEND_VERIFIED
    )

    ok = render_run_report(ui, report)

    assert not ok
    assert ui.table("Launch report (failed after backend_verified)") is not None
    assert ui.messages("error") == ["Failed to start container open-webui"]
    assert "Suggested fix: docker logs open-webui" in ui.messages("info")
    assert ui.table("Access URLs") is None


def test_network_tables_mark_skipped_pairs():
    report = NetworkReport(
        network="ollama-network",
        exists=True,
        driver="bridge",
        containers=[
            AttachedContainer("open-webui", "172.20.0.3", True),
            AttachedContainer("ollama-container", None, False),
        ],
        pings=[PingCheck("open-webui", "ollama-container", ok=False, skipped=True)],
    )

    tables = build_network_tables(report)

    assert [t.title for t in tables] == ["Network ollama-network", "Containers", "Connectivity"]
    ui = HeadlessUI()
    assert render_network_report(ui, report)


def test_network_ping_failure_is_reported():
    report = NetworkReport(
        network="ollama-network",
        exists=True,
        pings=[PingCheck("a", "b", ok=False)],
    )
    ui = HeadlessUI()

    assert not render_network_report(ui, report)
    assert "Found 1 connectivity issue(s)." in ui.messages("warning")
