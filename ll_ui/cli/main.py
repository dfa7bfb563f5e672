"""
Command-line interface for llm-launcher.

Launches Open WebUI against a local Ollama, a remote LM Studio, or an Ollama
or LocalAI container on a shared Docker network.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ll_ui.cli.commands.config import create_config_app
from ll_ui.cli.commands.dirs import register_dirs_command
from ll_ui.cli.commands.launch import register_launch_command
from ll_ui.cli.commands.network import register_network_command
from ll_ui.cli.commands.stop import register_stop_command
from ll_common.api import configure_logging
from ll_ui.wiring.dependencies import UIContext

# Initialize global context (lazy)
ctx_store = UIContext()

config_app = create_config_app(ctx_store)

app = typer.Typer(
    help="Launch Open WebUI with an LLM backend (Ollama, LM Studio, LocalAI).",
    no_args_is_help=True,
)


@app.callback(invoke_without_command=True)
def entry(
    ctx: typer.Context,
    headless: bool = typer.Option(
        False,
        "--headless",
        help="Force headless output (useful in CI).",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        envvar="LL_CONFIG_PATH",
        help="Config file to use (default: ~/llm/llm-launcher.json).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        envvar="LL_LOG_FILE",
        help="Also write diagnostics to this file.",
    ),
) -> None:
    """Set up diagnostics and remember the global flags for subcommands."""
    configure_logging(
        debug=debug,
        verbose=verbose,
        log_file=str(log_file) if log_file else None,
        force=True,
    )
    ctx_store.headless = headless
    ctx_store.config_path = config

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


register_launch_command(app, ctx_store)
register_stop_command(app, ctx_store)
register_network_command(app, ctx_store)
register_dirs_command(app, ctx_store)
app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
