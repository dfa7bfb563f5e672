"""Shared error taxonomy for llm-launcher."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping


def _plain(value: Any) -> Any:
    """Reduce a context value to str, number, bool, None, list or dict."""
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, Enum):
        return _plain(value.value)
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (set, frozenset)):
        return sorted(str(item) for item in value)
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Copy ``context`` with keys as strings and values made JSON-friendly."""
    return {str(key): _plain(value) for key, value in context.items()}


class LLError(Exception):
    """Base error type for typed failure handling.

    ``hint`` is an optional remedial command or action shown to the operator
    next to the error message.
    """

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        self.hint = hint
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return type(self).__name__


class ConfigurationError(LLError):
    """Missing or invalid configuration for the chosen backend."""


class RuntimeUnavailable(LLError):
    """The container engine is not reachable or usable."""


class ImageUnavailable(LLError):
    """An image could not be pulled (and possibly is not cached either)."""


class ProbeTimeout(LLError):
    """A readiness probe exhausted its attempts."""


class LaunchFailure(LLError):
    """A container or service failed to start."""


class ProbeTargetError(LLError):
    """A probe target (URL, container name or polling budget) is malformed."""


class LaunchInterrupted(LLError):
    """The launch was interrupted by a termination signal."""


def error_to_payload(error: LLError) -> dict[str, Any]:
    """Flatten an LLError for structured log lines."""
    payload: dict[str, Any] = {"type": error.error_type, "message": str(error)}
    if error.context:
        payload["context"] = error.context
    if error.hint:
        payload["hint"] = error.hint
    return payload
