"""Response formatting and the error boundary shared by every tool."""
from __future__ import annotations

import functools
import json
from typing import Any, Callable, Iterable, TypeVar

from mcp.server.fastmcp.exceptions import ToolError

from ..omnifocus_api.jxa_client import OmniFocusError
from ..utils.logger import get_logger

log = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., str])


def to_json(payload: Any) -> str:
    """Pretty-print *payload*; model objects are flattened via ``to_dict``."""
    return json.dumps(payload, indent=2, ensure_ascii=False, default=_encode)


def _encode(obj: Any) -> Any:
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def format_listing(key: str, items: Iterable[Any], empty_message: str, **extra: Any) -> str:
    """``{"count": n, <extra>, key: [...]}`` or *empty_message* when empty."""
    items = list(items)
    if not items:
        return empty_message
    payload = {"count": len(items)}
    payload.update(extra)
    payload[key] = [item.to_dict() for item in items]
    return to_json(payload)


def format_record(headline: str, record: Any) -> str:
    return f"{headline}:\n{to_json(record)}"


def tool_boundary(action: str) -> Callable[[F], F]:
    """Report any failure inside a tool as an MCP tool error.

    The message reads ``Error <action>: <reason>`` and the server process is
    never taken down by a handler exception.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> str:
            log.info("Tool %s invoked", func.__name__)
            try:
                return func(*args, **kwargs)
            except ToolError:
                raise
            except (OmniFocusError, ValueError) as exc:
                log.warning("Tool %s failed: %s", func.__name__, exc)
                raise ToolError(f"Error {action}: {exc}") from exc
            except Exception as exc:
                log.exception("Unexpected error in tool %s", func.__name__)
                raise ToolError(f"Error {action}: {exc}") from exc

        return wrapper  # type: ignore[return-value]

    return decorator
