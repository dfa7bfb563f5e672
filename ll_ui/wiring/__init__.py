"""UI wiring helpers for CLI setup."""

from ll_ui.wiring.dependencies import UIContext

__all__ = ["UIContext"]
