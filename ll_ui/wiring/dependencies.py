from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from ll_app.api import (
    ConfigService,
    LaunchService,
    LauncherConfig,
    NetworkService,
    StopService,
)
from ll_runtime.api import DockerRuntime, ServiceManager, http_probe
from ll_ui.tui.core.protocols import UI
from ll_ui.tui.system.facade import TUI


def _default_stop_service(cfg: LauncherConfig, ui: UI) -> StopService:
    return StopService(
        DockerRuntime(use_privilege_escalation=cfg.use_sudo),
        ServiceManager(cfg.base_dir),
        http_probe,
        observer=ui.present,
    )


def _default_network_service(cfg: LauncherConfig) -> NetworkService:
    return NetworkService(
        DockerRuntime(use_privilege_escalation=cfg.use_sudo),
        ping_timeout=cfg.network_diagnostic_timeout,
    )


@dataclass
class UIContext:
    """Container for UI services and state, initialized lazily.

    Stop and network services depend on the loaded config, so they are
    built per command through replaceable factories.
    """
    headless: bool = False
    config_path: Optional[Path] = None
    stop_service_factory: Callable[[LauncherConfig, UI], StopService] = _default_stop_service
    network_service_factory: Callable[[LauncherConfig], NetworkService] = _default_network_service

    # Lazily initialized services
    _ui: Optional[UI] = None
    _config_service: Optional[ConfigService] = None
    _launch_service: Optional[LaunchService] = None

    @property
    def ui(self) -> UI:
        if self._ui is None:
            if self.headless:
                from ll_ui.tui.system.headless import HeadlessUI
                self._ui = HeadlessUI()
            else:
                self._ui = TUI()
        return self._ui

    @ui.setter
    def ui(self, value: UI):
        self._ui = value

    @property
    def config_service(self) -> ConfigService:
        if self._config_service is None:
            self._config_service = ConfigService()
        return self._config_service

    @config_service.setter
    def config_service(self, value: ConfigService):
        self._config_service = value

    @property
    def launch_service(self) -> LaunchService:
        if self._launch_service is None:
            self._launch_service = LaunchService()
        return self._launch_service

    @launch_service.setter
    def launch_service(self, value: LaunchService):
        self._launch_service = value

    def load_config(self) -> LauncherConfig:
        cfg, source = self.config_service.load(self.config_path)
        if source is None:
            self.ui.present.warning(
                "No config file found; using detected defaults "
                "(run `llm-launcher config init`)."
            )
        return cfg

    def stop_service(self, cfg: LauncherConfig) -> StopService:
        return self.stop_service_factory(cfg, self.ui)

    def network_service(self, cfg: LauncherConfig) -> NetworkService:
        return self.network_service_factory(cfg)


__all__ = ["UIContext"]
