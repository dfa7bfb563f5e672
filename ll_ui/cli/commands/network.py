from __future__ import annotations

import typer

from ll_common.api import LLError
from ll_ui.cli.commands.helpers import fail
from ll_ui.presenters.network import render_network_report
from ll_ui.wiring.dependencies import UIContext


def register_network_command(app: typer.Typer, ctx: UIContext) -> None:
    """Attach the network diagnostics command to the root app."""

    @app.command("network")
    def network() -> None:
        """Check the Docker network and container-to-container connectivity."""
        try:
            cfg = ctx.load_config()
        except LLError as exc:
            fail(ctx, exc)
        ctx.ui.present.info("Checking Docker network status...")
        report = ctx.network_service(cfg).diagnose(cfg.docker_network)
        if not render_network_report(ctx.ui, report):
            raise typer.Exit(1)
