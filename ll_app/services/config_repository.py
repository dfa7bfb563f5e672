"""File-system repository for the launcher configuration file."""

from __future__ import annotations

import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ll_app.services.launcher_config import (
    DEFAULT_BASE_DIR,
    DEFAULT_CONFIG_NAME,
    LauncherConfig,
)
from ll_common.errors import ConfigurationError

CONFIG_PATH_ENV = "LL_CONFIG_PATH"


class ConfigRepository:
    """Resolve, read and write the config file in the local filesystem."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self.base_dir = base_dir or DEFAULT_BASE_DIR
        self.default_target = self.base_dir / DEFAULT_CONFIG_NAME

    def resolve_config_path(self, config_path: Optional[Path]) -> Path:
        """Explicit path, then ``LL_CONFIG_PATH``, then the default location."""
        if config_path is not None:
            return Path(config_path).expanduser()
        env_path = os.environ.get(CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path).expanduser()
        return self.default_target

    def ensure_parent(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)

    def read(self, path: Path) -> LauncherConfig:
        try:
            return LauncherConfig.load(path)
        except FileNotFoundError as exc:
            raise ConfigurationError(
                f"Config file not found: {path}",
                context={"path": str(path)},
                cause=exc,
                hint="llm-launcher config init",
            ) from exc
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid config file {path}: {exc.error_count()} error(s)",
                context={"path": str(path), "errors": exc.errors(include_url=False)},
                cause=exc,
                hint="llm-launcher config edit",
            ) from exc

    def write(self, cfg: LauncherConfig, path: Path) -> None:
        self.ensure_parent(path)
        cfg.save(path)

    def backup(self, path: Path) -> Optional[Path]:
        """Copy ``path`` to a timestamped sibling; return it, or None if absent."""
        if not path.exists():
            return None
        stamp = datetime.now().strftime("%Y%m%d%H%M%S")
        target = path.with_name(f"{path.name}.bak.{stamp}")
        shutil.copy2(path, target)
        return target
