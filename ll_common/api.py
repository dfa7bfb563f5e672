"""Public API surface for ll_common."""

from ll_common.config.env import parse_bool_env, read_bool_env
from ll_common.errors import (
    ConfigurationError,
    ImageUnavailable,
    LaunchFailure,
    LaunchInterrupted,
    LLError,
    ProbeTargetError,
    ProbeTimeout,
    RuntimeUnavailable,
    error_to_payload,
)
from ll_common.logging import LogSettings, configure_logging, launch_log_context, resolve_settings

__all__ = [
    "configure_logging",
    "launch_log_context",
    "LogSettings",
    "resolve_settings",
    "ConfigurationError",
    "ImageUnavailable",
    "LaunchFailure",
    "LaunchInterrupted",
    "LLError",
    "ProbeTargetError",
    "ProbeTimeout",
    "RuntimeUnavailable",
    "error_to_payload",
    "parse_bool_env",
    "read_bool_env",
]
