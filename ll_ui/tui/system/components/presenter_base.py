from __future__ import annotations

from ll_common.api import LLError
from ll_ui.tui.core.protocols import PresenterSink


class PresenterBase:
    """Level methods over a sink, plus typed-error rendering with hints."""

    def __init__(self, sink: PresenterSink) -> None:
        self._sink = sink

    def info(self, message: str) -> None:
        self._sink.emit("info", message)

    def warning(self, message: str) -> None:
        self._sink.emit("warning", message)

    def error(self, message: str) -> None:
        self._sink.emit("error", message)

    def success(self, message: str) -> None:
        self._sink.emit("success", message)

    def rule(self, title: str) -> None:
        self._sink.emit_rule(title)

    def failure(self, exc: LLError) -> None:
        """Fatal error followed by its suggested fix, when it has one."""
        self.error(str(exc))
        if exc.hint:
            self.info(f"Suggested fix: {exc.hint}")
