"""Diagnostic logging for llm-launcher (structlog over stdlib handlers).

Operator-facing status goes through the UI presenter. The log carries
diagnostics only, so the default level is WARNING; ``--verbose`` raises it to
INFO and ``--debug`` to DEBUG. ``LL_LOG_LEVEL``, ``LL_LOG_JSON`` and
``LL_LOG_FILE`` override the defaults when the caller passes nothing.
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

import structlog

from ll_common.config.env import read_bool_env

LEVEL_ENV = "LL_LOG_LEVEL"
JSON_ENV = "LL_LOG_JSON"
FILE_ENV = "LL_LOG_FILE"


@dataclass(frozen=True)
class LogSettings:
    level: int
    json: bool
    log_file: Optional[str]


def _level_from(value: str | int | None, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, int):
        return value
    if value.strip().isdigit():
        return int(value)
    resolved = logging.getLevelName(value.strip().upper())
    return resolved if isinstance(resolved, int) else default


def resolve_settings(
    *,
    level: str | int | None = None,
    debug: bool = False,
    verbose: bool = False,
    log_file: str | None = None,
    json: bool | None = None,
) -> LogSettings:
    """Combine CLI flags with ``LL_LOG_*`` overrides; explicit arguments win."""
    if debug:
        resolved_level = logging.DEBUG
    else:
        default = logging.INFO if verbose else logging.WARNING
        resolved_level = _level_from(level if level is not None else os.environ.get(LEVEL_ENV), default)
    env_json = read_bool_env(JSON_ENV)
    return LogSettings(
        level=resolved_level,
        json=bool(json if json is not None else env_json),
        log_file=log_file if log_file is not None else os.environ.get(FILE_ENV),
    )


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def _formatter(json: bool) -> logging.Formatter:
    renderer: structlog.types.Processor
    if json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=_pre_chain())


def _handlers(settings: LogSettings) -> list[logging.Handler]:
    formatter = _formatter(settings.json)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure_logging(
    *,
    level: str | int | None = None,
    debug: bool = False,
    verbose: bool = False,
    log_file: str | None = None,
    json: bool | None = None,
    force: bool = False,
) -> LogSettings:
    """Install the shared formatter on the root logger and configure structlog.

    Without ``force`` an already configured root logger keeps its handlers.
    """
    settings = resolve_settings(
        level=level, debug=debug, verbose=verbose, log_file=log_file, json=json
    )
    root = logging.getLogger()
    if force or not root.handlers:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in _handlers(settings):
            root.addHandler(handler)
        root.setLevel(settings.level)

    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return settings


@contextmanager
def launch_log_context(**values: str) -> Iterator[None]:
    """Bind ``values`` (backend, network) to every log record in the block."""
    tokens = structlog.contextvars.bind_contextvars(**values)
    try:
        yield
    finally:
        structlog.contextvars.reset_contextvars(**tokens)
