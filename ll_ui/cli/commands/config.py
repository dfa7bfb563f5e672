from __future__ import annotations

import typer

from ll_common.api import LLError
from ll_ui.cli.commands.helpers import fail
from ll_ui.tui.system.models import TableModel
from ll_ui.wiring.dependencies import UIContext


def create_config_app(ctx: UIContext) -> typer.Typer:
    """Build the config Typer app, wired to the given context."""
    app = typer.Typer(help="Manage the launcher configuration file.", no_args_is_help=True)

    @app.command("init")
    def config_init(
        force: bool = typer.Option(
            False,
            "--force",
            "-f",
            help="Back up and replace an existing config without asking.",
        ),
    ) -> None:
        """Create the config file with settings detected from this host."""
        target = ctx.config_service.resolve_config_path(ctx.config_path)
        overwrite = True
        if target.exists() and not force:
            overwrite = ctx.ui.form.confirm(
                "Configuration file exists. Backup and create a new one?", default=False
            )
        try:
            cfg, target, backup = ctx.config_service.init_config(
                ctx.config_path, overwrite=overwrite
            )
        except LLError as exc:
            fail(ctx, exc)
        if not overwrite:
            ctx.ui.present.info(f"Keeping existing configuration file: {target}")
            return
        if backup is not None:
            ctx.ui.present.success(f"Existing configuration backed up to: {backup}")
        ctx.ui.present.success(
            f"Config written to {target} "
            f"(memory={cfg.memory_limit}, shm={cfg.shm_size}, threads={cfg.threads})"
        )

    @app.command("edit")
    def config_edit() -> None:
        """Open the config file in $EDITOR (or nano/vim/vi)."""
        try:
            target = ctx.config_service.open_editor(ctx.config_path)
        except LLError as exc:
            fail(ctx, exc)
        ctx.ui.present.success(f"Configuration saved: {target}")

    @app.command("show")
    def config_show() -> None:
        """Print the effective configuration."""
        try:
            cfg = ctx.load_config()
        except LLError as exc:
            fail(ctx, exc)
        rows = [[key, "" if value is None else str(value)] for key, value in cfg.model_dump().items()]
        ctx.ui.tables.show(TableModel(title="Configuration", columns=["Key", "Value"], rows=rows))

    @app.command("path")
    def config_path() -> None:
        """Print the config file location in use."""
        target = ctx.config_service.resolve_config_path(ctx.config_path)
        state = "exists" if target.exists() else "missing"
        ctx.ui.present.info(f"{target} ({state})")

    return app
