"""Shared logger initialization for the MCP server.

Usage:
    from omnifocus_mcp.utils.logger import get_logger
    log = get_logger(__name__)
    log.info("message")

Everything goes to stderr: stdout belongs to the stdio MCP transport.
"""
from __future__ import annotations

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from .config import get_config

_FORMAT = "%(message)s"  # rich handler already adds time & level


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = get_config("OMNIFOCUS_MCP_LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Union[int, str, None] = None, force: bool = False) -> None:
    """Idempotently configure root logger with a stderr rich handler."""
    root = logging.getLogger()
    existing = [h for h in root.handlers if isinstance(h, RichHandler)]
    if existing and not force:
        # Assume already configured
        return
    for handler in existing:
        root.removeHandler(handler)

    resolved = _resolve_level(level)
    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
    )
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.setLevel(resolved)
    root.addHandler(handler)


def get_logger(name: str = __name__, level: Optional[int] = None) -> logging.Logger:
    """Return a module-level logger (configuring root on first call)."""
    configure_logging()
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
