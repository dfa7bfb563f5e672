"""Stable UI API surface."""

from __future__ import annotations

from ll_ui.cli import app, ctx_store, main
from ll_ui.presenters.network import build_network_tables, render_network_report
from ll_ui.presenters.report import build_report_table, render_run_report
from ll_ui.tui.system.headless import HeadlessUI
from ll_ui.tui.system.models import TableModel
from ll_ui.wiring.dependencies import UIContext

__all__ = [
    "app",
    "main",
    "ctx_store",
    "HeadlessUI",
    "TableModel",
    "UIContext",
    "build_network_tables",
    "build_report_table",
    "render_network_report",
    "render_run_report",
]
