"""Structural types the CLI renders through (Rich or headless)."""

from __future__ import annotations

from typing import Protocol

from ll_common.api import LLError
from ll_ui.tui.system.models import TableModel


class TablePresenter(Protocol):
    def show(self, table: TableModel) -> None: ...


class PresenterSink(Protocol):
    """Where a presenter writes leveled lines and section rules."""

    def emit(self, level: str, message: str) -> None: ...

    def emit_rule(self, title: str) -> None: ...


class Presenter(Protocol):
    """Operator-facing messages; also satisfies ``ll_core`` LaunchObserver."""

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def rule(self, title: str) -> None: ...

    def failure(self, exc: LLError) -> None: ...


class Form(Protocol):
    def ask(
        self,
        prompt: str,
        default: str | None = None,
        choices: list[str] | None = None,
    ) -> str: ...

    def confirm(self, prompt: str, default: bool = True) -> bool: ...


class UI(Protocol):
    tables: TablePresenter
    present: Presenter
    form: Form
