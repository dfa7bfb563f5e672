"""Rich-backed UI used by the interactive CLI."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.rule import Rule

from ll_ui.tui.core import theme
from ll_ui.tui.system.components.presenter_base import PresenterBase
from ll_ui.tui.system.components.table_layout import build_rich_table
from ll_ui.tui.system.models import TableModel


class _ConsoleSink:
    def __init__(self, console: Console) -> None:
        self._console = console

    def emit(self, level: str, message: str) -> None:
        self._console.print(theme.presenter_message(level, message))

    def emit_rule(self, title: str) -> None:
        self._console.print(Rule(title, style=theme.RULE_STYLE))


class RichPresenter(PresenterBase):
    def __init__(self, console: Console) -> None:
        super().__init__(_ConsoleSink(console))


class RichTablePresenter:
    def __init__(self, console: Console) -> None:
        self._console = console

    def show(self, table: TableModel) -> None:
        self._console.print(build_rich_table(table, console=self._console))


class RichForm:
    def __init__(self, console: Console) -> None:
        self._console = console

    def ask(
        self,
        prompt: str,
        default: str | None = None,
        choices: list[str] | None = None,
    ) -> str:
        kwargs: dict[str, Any] = {}
        if default is not None:
            kwargs["default"] = default
        if choices:
            kwargs["choices"] = choices
            kwargs["show_choices"] = len(choices) <= 8
        return Prompt.ask(prompt, console=self._console, **kwargs)

    def confirm(self, prompt: str, default: bool = True) -> bool:
        return Confirm.ask(prompt, console=self._console, default=default)


class TUI:
    """Console UI: tables, leveled messages and prompts on one Rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self.tables = RichTablePresenter(self.console)
        self.present = RichPresenter(self.console)
        self.form = RichForm(self.console)
