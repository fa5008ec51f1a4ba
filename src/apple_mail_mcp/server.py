"""MCP server wiring for apple-mail-mcp."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from apple_mail_mcp.config import Settings
from apple_mail_mcp.jxa.executor import JXAExecutor
from apple_mail_mcp.tools import register_all

SERVER_NAME = "apple-mail"

INSTRUCTIONS = (
    "Tools for Apple Mail on this Mac. Replies and new messages are saved as "
    "drafts or outgoing messages and are never sent automatically. Use the "
    "mailboxPath values returned by list_mailboxes or get_selected_messages "
    "when a tool asks for mailbox_path."
)


def create_server(settings: Settings, executor: JXAExecutor) -> FastMCP:
    """
    Create an MCP server with every tool registered.

    Args:
        settings: Transport settings (host/port are used for HTTP).
        executor: Executor shared by all tool calls.

    Returns:
        A configured FastMCP instance, not yet running.
    """
    server = FastMCP(
        SERVER_NAME,
        instructions=INSTRUCTIONS,
        host=settings.host,
        port=settings.port,
        # Each request is independent, so HTTP needs no session state
        stateless_http=True,
        log_level="DEBUG" if settings.debug else "WARNING",
    )
    register_all(server, executor)
    return server


def run_server(server: FastMCP, settings: Settings) -> None:
    """Serve over stdio or streamable HTTP until interrupted."""
    if settings.transport == "stdio":
        server.run(transport="stdio")
    elif settings.transport == "http":
        server.run(transport="streamable-http")
    else:
        raise ValueError(f"unsupported transport: {settings.transport}")
