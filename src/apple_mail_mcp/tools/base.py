"""Argument marshalling and call tracing shared by the MCP tools."""

import json
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from apple_mail_mcp.jxa.assets import load_script

T = TypeVar("T")


def tool_script(name: str) -> str:
    """Load one of the tool scripts bundled with this package."""
    return load_script("apple_mail_mcp.tools", name)


def flag(value: bool) -> str:
    """Encode a boolean the way the scripts parse it."""
    return "true" if value else "false"


def encode_list(values: list[str] | None, *, empty: str = "[]") -> str:
    """JSON-encode a list argument; ``empty`` is used for None or []."""
    if not values:
        return empty
    return json.dumps(list(values))


def require_mailbox_path(mailbox_path: list[str]) -> str:
    """Validate and JSON-encode a mailbox path such as ``["Inbox", "GitHub"]``."""
    if not mailbox_path:
        raise ValueError("mailbox_path is required and must be a non-empty array")
    return json.dumps(list(mailbox_path))


async def traced(logger: logging.Logger, tool: str, params: dict[str, Any], call: Awaitable[T]) -> T:
    """Await a tool call, logging its parameters and outcome at DEBUG."""
    logger.debug("MCP tool call: %s\nParams: %s", tool, json.dumps(params, indent=2, default=str))
    try:
        result = await call
    except Exception as e:
        logger.debug("MCP tool error: %s\nError: %s", tool, e)
        raise
    logger.debug("MCP tool result: %s\nResult: %s", tool, json.dumps(result, indent=2, default=str))
    return result
