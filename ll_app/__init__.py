"""Application layer between the CLI and the launch core/runtime."""

from ll_common import configure_logging as _configure_logging

_configure_logging()

from ll_app.api import ConfigService, LaunchService, LauncherConfig  # noqa: E402

__all__ = ["ConfigService", "LaunchService", "LauncherConfig"]
