"""Rich and headless renderers behind a shared UI protocol."""

from ll_ui.tui.core.protocols import UI, Form, Presenter, TablePresenter
from ll_ui.tui.system.facade import TUI
from ll_ui.tui.system.headless import HeadlessUI

__all__ = [
    "UI",
    "TUI",
    "HeadlessUI",
    "TablePresenter",
    "Presenter",
    "Form",
]
