"""Mailbox browsing for a Mail.app account."""

from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from apple_mail_mcp.jxa.executor import JXAExecutor
from apple_mail_mcp.tools.base import tool_script, traced

_READ_ONLY = ToolAnnotations(
    readOnlyHint=True,
    idempotentHint=True,
    destructiveHint=False,
    openWorldHint=True,
)


def _require_account(account: str) -> str:
    if not account:
        raise ValueError("account name is required")
    return account


async def list_mailboxes(executor: JXAExecutor, account: str) -> dict[str, Any]:
    """
    List every mailbox of an account, nested mailboxes included.

    Each entry carries a ``mailboxPath`` such as ``["Inbox", "GitHub"]`` that
    the message tools accept.
    """
    return await executor.execute(tool_script("list_mailboxes.js"), _require_account(account))


async def find_unread_mailboxes(executor: JXAExecutor, account: str) -> dict[str, Any]:
    """List the mailboxes of an account that contain unread messages."""
    return await executor.execute(
        tool_script("find_unread_mailboxes.js"), _require_account(account)
    )


def register(server: FastMCP, executor: JXAExecutor) -> None:
    """Register the mailbox tools."""

    @server.tool(
        name="list_mailboxes",
        description="Lists all mailboxes (folders) for a specific account in Apple Mail.",
        annotations=_READ_ONLY.model_copy(update={"title": "List Mailboxes"}),
    )
    async def list_mailboxes_tool(
        account: Annotated[str, Field(description="Name of the email account")],
    ) -> dict[str, Any]:
        return await traced(
            executor.logger,
            "list_mailboxes",
            {"account": account},
            list_mailboxes(executor, account),
        )

    @server.tool(
        name="find_unread_mailboxes",
        description="Finds all mailboxes in a given account that have unread messages.",
        annotations=_READ_ONLY.model_copy(update={"title": "Find Mailboxes with Unread Messages"}),
    )
    async def find_unread_mailboxes_tool(
        account: Annotated[str, Field(description="The name of the email account to search in")],
    ) -> dict[str, Any]:
        return await traced(
            executor.logger,
            "find_unread_mailboxes",
            {"account": account},
            find_unread_mailboxes(executor, account),
        )
