from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ll_common.api import LLError
from ll_ui.cli.commands.helpers import fail
from ll_ui.wiring.dependencies import UIContext


def register_dirs_command(app: typer.Typer, ctx: UIContext) -> None:
    """Attach the directory setup command to the root app."""

    @app.command("dirs")
    def dirs(
        base_dir: Optional[Path] = typer.Option(
            None,
            "--base-dir",
            help="Root directory; defaults to base_dir from the config.",
        ),
    ) -> None:
        """Create the models/data/logs directory tree."""
        if base_dir is None:
            try:
                base_dir = ctx.load_config().base_dir
            except LLError as exc:
                fail(ctx, exc)
        ctx.ui.present.info("Checking and creating necessary directories...")
        result = ctx.config_service.setup_directories(base_dir)
        for created in result.created:
            ctx.ui.present.info(f"Created new directory: {created}")
        if not result.created:
            ctx.ui.present.success("All required directories were already present.")
        else:
            ctx.ui.present.success(
                f"Directory structure updated. Created {len(result.created)} new directories."
            )
