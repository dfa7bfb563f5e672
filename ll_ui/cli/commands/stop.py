from __future__ import annotations

import typer

from ll_common.api import LLError
from ll_ui.cli.commands.helpers import fail
from ll_ui.wiring.dependencies import UIContext


def register_stop_command(app: typer.Typer, ctx: UIContext) -> None:
    """Attach the stop command to the root app."""

    @app.command("stop")
    def stop() -> None:
        """Stop the containers and local services the launcher starts."""
        try:
            cfg = ctx.load_config()
        except LLError as exc:
            fail(ctx, exc)
        ctx.ui.present.info("Detecting active services...")
        summary = ctx.stop_service(cfg).stop(cfg)
        if not summary.total:
            return
        message = f"Stopped {len(summary.stopped)} services out of {summary.total}"
        if summary.failed:
            ctx.ui.present.warning(f"{message}; still running: {', '.join(summary.failed)}")
            raise typer.Exit(1)
        ctx.ui.present.success(message)
