from __future__ import annotations

from typing import List, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ll_ui.tui.core import theme
from ll_ui.tui.system.models import TableModel

_MIN_TABLE_WIDTH = 40
_FALLBACK_CONSOLE_WIDTH = 100


def _fit_row(row: Sequence[object], width: int) -> List[str]:
    cells = [str(cell) for cell in row[:width]]
    return cells + [""] * (width - len(cells))


def build_rich_table(model: TableModel, *, console: Console) -> Table:
    """
    Render a TableModel with the launcher theme, capped at the console width.

    Cells may carry status markup. Short rows are padded and the key column
    never wraps.
    """
    title = Text.from_markup(model.title, style=theme.RICH_ACCENT_BOLD)
    title.no_wrap = True
    title.overflow = "ellipsis"

    table = Table(
        title=title,
        box=box.ROUNDED,
        show_lines=True,
        border_style=theme.RICH_BORDER_STYLE,
        header_style=theme.RICH_ACCENT_BOLD,
    )
    for position, column in enumerate(model.columns):
        table.add_column(column, no_wrap=position == 0, overflow="fold")
    for row in model.rows:
        table.add_row(*_fit_row(row, len(model.columns)))

    available = console.size.width or _FALLBACK_CONSOLE_WIDTH
    limit = max(_MIN_TABLE_WIDTH, available - 2)
    if model.columns and console.measure(table).maximum > limit:
        table.width = limit
    return table
