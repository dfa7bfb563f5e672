"""Configuration helpers for ll_common."""

from .env import parse_bool_env, read_bool_env

__all__ = ["parse_bool_env", "read_bool_env"]
