"""Interactive backend selection."""

from __future__ import annotations

import sys

from ll_core.api import BackendKind
from ll_ui.tui.core.protocols import UI
from ll_ui.tui.system.models import TableModel

_DESCRIPTIONS = {
    BackendKind.LOCAL_PROCESS: "Ollama already installed on this host",
    BackendKind.REMOTE_OPENAI_COMPATIBLE: "LM Studio server reachable over the network",
    BackendKind.CONTAINERIZED_OLLAMA: "Ollama with Intel GPU acceleration in a container",
    BackendKind.CONTAINERIZED_OPENAI_COMPATIBLE: "LocalAI with Intel acceleration in a container",
}


def backend_menu_table() -> TableModel:
    rows = [
        [str(idx), kind.value, _DESCRIPTIONS[kind]]
        for idx, kind in enumerate(BackendKind, start=1)
    ]
    return TableModel(title="Select a backend", columns=["#", "Backend", "Description"], rows=rows)


def choose_backend(ui: UI, *, require_tty: bool = True) -> BackendKind:
    """Ask the operator to pick a backend by number or name."""
    if require_tty and not sys.stdin.isatty():
        raise ValueError("Interactive selection requires a TTY; pass --backend.")
    kinds = list(BackendKind)
    ui.tables.show(backend_menu_table())
    choices = [str(idx) for idx in range(1, len(kinds) + 1)] + [k.value for k in kinds]
    answer = ui.form.ask("Backend", default="1", choices=choices).strip()
    if answer.isdigit():
        return kinds[int(answer) - 1]
    return BackendKind(answer)
