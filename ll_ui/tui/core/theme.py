"""Colours and message templates for launcher output."""

from __future__ import annotations

from enum import Enum
from typing import Union

from ll_core.api import LaunchState, ProbeStatus, StepOutcome

RICH_ACCENT = "blue"
RICH_ACCENT_BOLD = f"bold {RICH_ACCENT}"
RICH_BORDER_STYLE = RICH_ACCENT
RULE_STYLE = "cyan"

# Keyed on enum values; container states come from network diagnostics.
RICH_STATUS_COLORS: dict[str, str] = {
    ProbeStatus.READY.value: "green",
    ProbeStatus.TIMED_OUT.value: "yellow",
    ProbeStatus.UNREACHABLE.value: "red",
    StepOutcome.OK.value: "green",
    StepOutcome.DEGRADED.value: "yellow",
    StepOutcome.SKIPPED.value: "dim",
    StepOutcome.FAILED.value: "red",
    LaunchState.DONE.value: "green",
    "running": "green",
    "stopped": "yellow",
}

PRESENTER_TEMPLATES: dict[str, str] = {
    "info": "[blue]ℹ[/blue] {message}",
    "warning": "[yellow]⚠ {message}[/yellow]",
    "error": "[red]✖ {message}[/red]",
    "success": "[green]✔ {message}[/green]",
}

Status = Union[str, Enum]


def status_text(status: Status) -> str:
    """Wrap a status value in its colour markup; unknown values pass through."""
    value = status.value if isinstance(status, Enum) else status
    color = RICH_STATUS_COLORS.get(value)
    if not color:
        return value
    return f"[{color}]{value}[/{color}]"


def presenter_message(level: str, message: str) -> str:
    template = PRESENTER_TEMPLATES.get(level, "{message}")
    return template.format(message=message)
