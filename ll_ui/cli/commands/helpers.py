from __future__ import annotations

from typing import NoReturn

import typer

from ll_common.api import LLError
from ll_ui.wiring.dependencies import UIContext


def fail(ctx: UIContext, exc: LLError, exit_code: int = 1) -> NoReturn:
    """Print a typed error with its remedial hint and exit."""
    ctx.ui.present.failure(exc)
    raise typer.Exit(exit_code)
