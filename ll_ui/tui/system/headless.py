"""Recording UI for CI runs and tests; prompts answer from preset values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ll_ui.tui.system.components.presenter_base import PresenterBase
from ll_ui.tui.system.models import TableModel


@dataclass
class HeadlessUI:
    recorded_tables: list[TableModel] = field(default_factory=list)
    recorded_messages: list[str] = field(default_factory=list)
    recorded_prompts: list[str] = field(default_factory=list)

    # Automated answers
    next_form_response: str = "1"
    next_confirm_response: bool = True

    def __post_init__(self) -> None:
        self.tables = _RecordingTables(self)
        self.present = PresenterBase(_RecordingSink(self))
        self.form = _ScriptedForm(self)

    def messages(self, level: str) -> list[str]:
        """Messages recorded at ``level``, without the level prefix."""
        prefix = f"{level.upper()}: "
        return [m[len(prefix):] for m in self.recorded_messages if m.startswith(prefix)]

    def table(self, title: str) -> Optional[TableModel]:
        for model in self.recorded_tables:
            if model.title == title:
                return model
        return None


class _RecordingTables:
    def __init__(self, ui: HeadlessUI) -> None:
        self._ui = ui

    def show(self, table: TableModel) -> None:
        self._ui.recorded_tables.append(table)


class _RecordingSink:
    def __init__(self, ui: HeadlessUI) -> None:
        self._ui = ui

    def emit(self, level: str, message: str) -> None:
        self._ui.recorded_messages.append(f"{level.upper()}: {message}")

    def emit_rule(self, title: str) -> None:
        self._ui.recorded_messages.append(f"RULE: {title}")


class _ScriptedForm:
    def __init__(self, ui: HeadlessUI) -> None:
        self._ui = ui

    def ask(
        self,
        prompt: str,
        default: str | None = None,
        choices: list[str] | None = None,
    ) -> str:
        self._ui.recorded_prompts.append(prompt)
        return self._ui.next_form_response

    def confirm(self, prompt: str, default: bool = True) -> bool:
        self._ui.recorded_prompts.append(prompt)
        return self._ui.next_confirm_response
