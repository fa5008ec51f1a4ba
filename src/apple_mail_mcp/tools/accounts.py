"""Mail.app account listing."""

from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from apple_mail_mcp.jxa.executor import JXAExecutor
from apple_mail_mcp.tools.base import flag, tool_script, traced


async def list_accounts(executor: JXAExecutor, enabled_only: bool = False) -> dict[str, Any]:
    """
    List the email accounts configured in Mail.app.

    Args:
        executor: Executor running the script.
        enabled_only: Skip accounts that are disabled in Mail.app.

    Returns:
        ``{"accounts": [{name, enabled, emailAddresses, mailboxCount}], "count": n}``
    """
    return await executor.execute(tool_script("list_accounts.js"), flag(enabled_only))


def register(server: FastMCP, executor: JXAExecutor) -> None:
    """Register the account tools."""

    @server.tool(
        name="list_accounts",
        description=(
            "Lists all email accounts configured in Apple Mail with their email "
            "addresses, enabled state and mailbox count."
        ),
        annotations=ToolAnnotations(
            title="List Accounts",
            readOnlyHint=True,
            idempotentHint=True,
            destructiveHint=False,
            openWorldHint=True,
        ),
    )
    async def list_accounts_tool(
        enabled_only: Annotated[
            bool, Field(description="Only list accounts that are enabled. Default is false.")
        ] = False,
    ) -> dict[str, Any]:
        return await traced(
            executor.logger,
            "list_accounts",
            {"enabled_only": enabled_only},
            list_accounts(executor, enabled_only),
        )
