from __future__ import annotations

import os
from typing import Callable, Optional

import typer

from ll_common.api import LLError
from ll_core.api import BackendKind
from ll_ui.cli.commands.helpers import fail
from ll_ui.flows.backend_menu import choose_backend
from ll_ui.presenters.report import render_run_report
from ll_ui.wiring.dependencies import UIContext


def register_launch_command(app: typer.Typer, ctx: UIContext) -> None:
    """Attach the launch command to the root app."""

    @app.command("launch")
    def launch(
        backend: Optional[BackendKind] = typer.Option(
            None,
            "--backend",
            "-b",
            case_sensitive=False,
            help="Backend to launch; prompts with a menu when omitted.",
        ),
        non_interactive: bool = typer.Option(
            False,
            "--non-interactive",
            help="Never prompt; continue past soft failures (requires --backend).",
        ),
        sudo: bool = typer.Option(
            False,
            "--sudo",
            help="Prefix container engine commands with sudo.",
        ),
    ) -> None:
        """Launch Open WebUI wired to the chosen LLM backend."""
        if hasattr(os, "geteuid") and os.geteuid() == 0:
            ctx.ui.present.warning(
                "Running as root is not recommended; files will be owned by root."
            )

        if backend is None:
            if non_interactive:
                ctx.ui.present.error("--backend is required with --non-interactive.")
                raise typer.Exit(1)
            try:
                backend = choose_backend(ctx.ui, require_tty=not ctx.headless)
            except ValueError as exc:
                ctx.ui.present.error(str(exc))
                raise typer.Exit(1)

        try:
            cfg = ctx.load_config()
        except LLError as exc:
            fail(ctx, exc)
        if sudo:
            cfg = cfg.model_copy(update={"use_sudo": True})

        confirm: Optional[Callable[[str], bool]] = None
        if not non_interactive:
            confirm = lambda prompt: ctx.ui.form.confirm(prompt, default=False)  # noqa: E731

        ctx.ui.present.rule(f"Open WebUI with {backend.label}")
        try:
            report = ctx.launch_service.launch(
                backend, cfg, observer=ctx.ui.present, confirm=confirm
            )
        except LLError as exc:
            fail(ctx, exc)

        models = ctx.launch_service.available_models(report)
        if not render_run_report(ctx.ui, report, models):
            raise typer.Exit(report.exit_code)
