"""Presenter for launch run reports."""

from __future__ import annotations

from typing import List, Optional

from ll_core.api import ProbeResult, RunReport, StepOutcome
from ll_ui.tui.core import theme
from ll_ui.tui.core.protocols import UI
from ll_ui.tui.system.models import TableModel


def _probe_cell(result: Optional[ProbeResult]) -> str:
    if result is None:
        return theme.status_text(StepOutcome.SKIPPED)
    return theme.status_text(result.status)


def _probe_detail(result: Optional[ProbeResult]) -> str:
    if result is None:
        return ""
    return f"{result.attempts} attempt(s)"


def build_report_table(report: RunReport) -> TableModel:
    """Transform a RunReport into a component/status table."""
    endpoint = report.endpoint
    rows = [
        [
            "Backend setup",
            theme.status_text(report.backend_setup),
            report.kind.label,
        ],
        [
            "Backend probe",
            _probe_cell(report.backend_probe),
            _probe_detail(report.backend_probe),
        ],
        [
            "Open WebUI",
            theme.status_text(report.ui_launch),
            ", ".join(report.started_containers),
        ],
        [
            "Connectivity",
            _probe_cell(report.connectivity_probe),
            endpoint.connectivity_url if endpoint else "",
        ],
    ]
    title = f"Launch report ({report.state.value})"
    if report.failure is not None:
        title = f"Launch report (failed after {report.reached.value})"
    return TableModel(
        title=title,
        columns=["Component", "Status", "Details"],
        rows=rows,
    )


def build_access_table(report: RunReport) -> TableModel:
    return TableModel(
        title="Access URLs",
        columns=["Service", "URL"],
        rows=[[name, url] for name, url in report.access_urls.items()],
    )


def build_warnings_table(report: RunReport) -> TableModel:
    return TableModel(
        title="Warnings",
        columns=["Issue", "Try"],
        rows=[[str(w), w.hint or ""] for w in report.warnings],
    )


def render_run_report(ui: UI, report: RunReport, models: Optional[List[str]] = None) -> bool:
    """
    Render a run report to the provided UI.

    Returns True when the launch reached its final state.
    """
    ui.tables.show(build_report_table(report))

    if report.warnings:
        ui.tables.show(build_warnings_table(report))

    if report.failure is not None:
        ui.present.failure(report.failure)
        return False

    if report.access_urls:
        ui.tables.show(build_access_table(report))
    if models:
        ui.present.info(f"Available models: {', '.join(models)}")

    degraded = report.degraded or report.backend_setup in (
        StepOutcome.DEGRADED,
        StepOutcome.FAILED,
    )
    if degraded:
        ui.present.warning("Open WebUI is running with degraded components.")
    else:
        ui.present.success("Open WebUI is ready.")
    return True
