"""Presenter for network diagnostics."""

from __future__ import annotations

from typing import List

from ll_app.api import NetworkReport
from ll_core.api import StepOutcome
from ll_ui.tui.core import theme
from ll_ui.tui.core.protocols import UI
from ll_ui.tui.system.models import TableModel


def build_network_tables(report: NetworkReport) -> List[TableModel]:
    tables = [
        TableModel(
            title=f"Network {report.network}",
            columns=["Property", "Value"],
            rows=[
                ["Driver", report.driver or "-"],
                ["Subnet", report.subnet or "-"],
            ],
        )
    ]
    if report.containers:
        tables.append(
            TableModel(
                title="Containers",
                columns=["Container", "IP", "State"],
                rows=[
                    [
                        c.name,
                        c.ip or "-",
                        theme.status_text("running" if c.running else "stopped"),
                    ]
                    for c in report.containers
                ],
            )
        )
    if report.pings:
        rows = []
        for ping in report.pings:
            if ping.skipped:
                status = theme.status_text(StepOutcome.SKIPPED)
            else:
                status = theme.status_text(StepOutcome.OK if ping.ok else StepOutcome.FAILED)
            rows.append([f"{ping.source} -> {ping.target}", status])
        tables.append(TableModel(title="Connectivity", columns=["Pair", "Ping"], rows=rows))
    return tables


def render_network_report(ui: UI, report: NetworkReport) -> bool:
    """
    Render a network report. Returns False when the network is missing or a
    ping between running containers failed.
    """
    if not report.exists:
        ui.present.error(f"Docker network '{report.network}' does not exist")
        ui.present.info("Launch a backend first to create the network.")
        return False
    for table in build_network_tables(report):
        ui.tables.show(table)
    if not report.containers:
        ui.present.info(f"No containers found in network {report.network}")
    if report.failures:
        ui.present.warning(f"Found {report.failures} connectivity issue(s).")
        return False
    ui.present.success("Network diagnostics completed.")
    return True
