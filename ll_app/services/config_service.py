"""Configuration resolution, defaults and editing helpers for the CLI."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

import psutil

from ll_app.services.config_repository import ConfigRepository
from ll_app.services.launcher_config import LauncherConfig
from ll_common.config import read_bool_env
from ll_common.errors import ConfigurationError

logger = logging.getLogger(__name__)

_GIB = 1024**3
_FALLBACK_EDITORS = ("nano", "vim", "vi")
USE_SUDO_ENV = "LL_USE_SUDO"


def memory_defaults(total_gib: int) -> Tuple[str, str]:
    """Return (memory_limit, shm_size) sized to the host's memory."""
    total_gib = max(1, total_gib)
    if total_gib < 4:
        return f"{total_gib}G", "1g"
    if total_gib < 8:
        return f"{total_gib}G", f"{total_gib // 2}g"
    limit = min(total_gib * 80 // 100, 64)
    shm = 16 if total_gib > 32 else total_gib // 2
    return f"{limit}G", f"{shm}g"


def thread_defaults(cores: int) -> int:
    """Leave headroom for the host on machines with more cores."""
    cores = max(1, cores)
    if cores <= 2:
        return cores
    if cores <= 6:
        return cores - 1
    return cores - 2


@dataclass
class DirectorySetup:
    """Result of :meth:`ConfigService.setup_directories`."""

    created: List[Path] = field(default_factory=list)
    existing: List[Path] = field(default_factory=list)


class ConfigService:
    """Resolve, load, create and edit the launcher config."""

    def __init__(self, repository: Optional[ConfigRepository] = None) -> None:
        self.repository = repository or ConfigRepository()

    def resolve_config_path(self, config_path: Optional[Path]) -> Path:
        return self.repository.resolve_config_path(config_path)

    def create_default_config(self) -> LauncherConfig:
        """Create a config with resource limits derived from this host."""
        total_gib = int(psutil.virtual_memory().total // _GIB)
        cores = psutil.cpu_count(logical=True) or 1
        memory_limit, shm_size = memory_defaults(total_gib)
        threads = thread_defaults(cores)
        logger.debug(
            "Host has %s GiB and %s cores; memory=%s shm=%s threads=%s",
            total_gib,
            cores,
            memory_limit,
            shm_size,
            threads,
        )
        return LauncherConfig(
            memory_limit=memory_limit,
            shm_size=shm_size,
            threads=threads,
            base_dir=self.repository.base_dir,
        )

    def load(self, config_path: Optional[Path]) -> Tuple[LauncherConfig, Optional[Path]]:
        """Return (config, resolved_path); defaults when no file exists yet.

        ``LL_USE_SUDO`` overrides ``use_sudo`` from the file.
        """
        resolved = self.resolve_config_path(config_path)
        if resolved.exists():
            cfg = self.repository.read(resolved)
            source: Optional[Path] = resolved
        else:
            logger.info("No config at %s; using detected defaults", resolved)
            cfg = self.create_default_config()
            source = None
        env_sudo = read_bool_env(USE_SUDO_ENV)
        if env_sudo is not None:
            cfg = cfg.model_copy(update={"use_sudo": env_sudo})
        return cfg, source

    def init_config(
        self, config_path: Optional[Path], *, overwrite: bool = True
    ) -> Tuple[LauncherConfig, Path, Optional[Path]]:
        """Write a default config; return (config, target, backup_path).

        An existing file is backed up first. With ``overwrite=False`` it is
        kept and loaded instead.
        """
        target = self.resolve_config_path(config_path)
        if target.exists() and not overwrite:
            return self.repository.read(target), target, None
        backup = self.repository.backup(target)
        cfg = self.create_default_config()
        self.repository.write(cfg, target)
        return cfg, target, backup

    def find_editor(self) -> Optional[str]:
        editor = os.environ.get("EDITOR")
        if editor:
            return editor
        for candidate in _FALLBACK_EDITORS:
            if shutil.which(candidate):
                return candidate
        return None

    def open_editor(self, config_path: Optional[Path]) -> Path:
        """Open the config file in an editor, creating it first if missing."""
        target = self.resolve_config_path(config_path)
        if not target.exists():
            self.init_config(target)
        editor = self.find_editor()
        if not editor:
            raise ConfigurationError(
                f"No text editor found; open the file manually: {target}",
                context={"path": str(target)},
                hint="Install nano or vim, or set $EDITOR",
            )
        try:
            subprocess.run([*editor.split(), str(target)], check=False)
        except OSError as exc:
            raise ConfigurationError(
                f"Failed to launch editor '{editor}'",
                context={"editor": editor},
                cause=exc,
            ) from exc
        return target

    @staticmethod
    def required_directories(base_dir: Path) -> List[Path]:
        return [
            base_dir,
            base_dir / "models",
            base_dir / "models" / "ollama",
            base_dir / "models" / "localai",
            base_dir / "data",
            base_dir / "data" / "open-webui",
            base_dir / "logs",
        ]

    def setup_directories(self, base_dir: Path) -> DirectorySetup:
        """Create the models/data/logs tree under ``base_dir``."""
        result = DirectorySetup()
        for directory in self.required_directories(Path(base_dir).expanduser()):
            if directory.is_dir():
                result.existing.append(directory)
                continue
            directory.mkdir(parents=True, exist_ok=True)
            result.created.append(directory)
        return result
