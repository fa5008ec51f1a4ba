"""MCP tools backed by Mail.app JXA scripts."""

from mcp.server.fastmcp import FastMCP

from apple_mail_mcp.jxa.executor import JXAExecutor
from apple_mail_mcp.tools import accounts, compose, mailboxes, messages
from apple_mail_mcp.tools.accounts import list_accounts
from apple_mail_mcp.tools.compose import (
    create_outgoing_message,
    delete_draft,
    delete_outgoing_message,
    replace_outgoing_message,
    reply_to_message,
)
from apple_mail_mcp.tools.mailboxes import find_unread_mailboxes, list_mailboxes
from apple_mail_mcp.tools.messages import (
    find_messages,
    get_message_content,
    get_selected_messages,
    list_drafts,
)

__all__ = [
    "register_all",
    "list_accounts",
    "list_mailboxes",
    "find_unread_mailboxes",
    "get_message_content",
    "get_selected_messages",
    "find_messages",
    "list_drafts",
    "reply_to_message",
    "create_outgoing_message",
    "replace_outgoing_message",
    "delete_outgoing_message",
    "delete_draft",
]


def register_all(server: FastMCP, executor: JXAExecutor) -> None:
    """Register every tool with the MCP server."""
    for module in (accounts, mailboxes, messages, compose):
        module.register(server, executor)
