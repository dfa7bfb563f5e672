"""Shared helpers for llm-launcher."""

from ll_common.api import LLError, configure_logging

__all__ = ["configure_logging", "LLError"]
