from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TableModel:
    """Renderer-neutral table; cells may carry Rich markup."""

    title: str
    columns: list[str]
    rows: list[list[str]] = field(default_factory=list)

    def row_for(self, key: str) -> Optional[list[str]]:
        """Return the first row whose leading cell equals ``key``."""
        for row in self.rows:
            if row and row[0] == key:
                return row
        return None
