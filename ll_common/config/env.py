"""Environment overrides (``LL_*`` variables)."""

from __future__ import annotations

import os
from typing import Mapping, Optional

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def parse_bool_env(value: Optional[str]) -> Optional[bool]:
    """Map an env string to a bool; None stays None (variable unset)."""
    if value is None:
        return None
    return value.strip().lower() in _TRUTHY


def read_bool_env(name: str, environ: Optional[Mapping[str, str]] = None) -> Optional[bool]:
    """Read ``name`` from ``environ`` (default ``os.environ``) as a bool override."""
    source = os.environ if environ is None else environ
    return parse_bool_env(source.get(name))
