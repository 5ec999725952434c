"""
Configuration utilities for the OmniFocus MCP server.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_FILE_NAME = ".omnifocus-mcp.env"


def load_env_vars() -> None:
    """
    Load environment variables from .env files in the following order:
    1. .omnifocus-mcp.env in the current directory
    2. .omnifocus-mcp.env in the user's home directory

    Variables already present in the environment are never overridden.
    """
    local_env = Path.cwd() / ENV_FILE_NAME
    if local_env.exists():
        load_dotenv(local_env)

    home_env = Path.home() / ENV_FILE_NAME
    if home_env.exists():
        load_dotenv(home_env)


def get_config(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get configuration value from environment variables."""
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def get_int_config(key: str, default: Optional[int] = None) -> Optional[int]:
    raw = get_config(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc


def get_float_config(key: str, default: Optional[float] = None) -> Optional[float]:
    raw = get_config(key)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc
    return value if value > 0 else default
