"""Reading, searching and listing messages in Mail.app."""

from datetime import datetime
from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from apple_mail_mcp.jxa.executor import JXAExecutor
from apple_mail_mcp.tools.base import flag, require_mailbox_path, tool_script, traced

MAX_SELECTED_LIMIT = 100
MAX_FIND_LIMIT = 1000
DEFAULT_FIND_LIMIT = 50


async def get_message_content(
    executor: JXAExecutor,
    account: str,
    mailbox_path: list[str],
    message_id: int,
) -> dict[str, Any]:
    """
    Retrieve one message, body included.

    Args:
        executor: Executor running the script.
        account: Account name.
        mailbox_path: Path to the mailbox, e.g. ``["Inbox", "GitHub"]``.
        message_id: Mail.app message id.

    Returns:
        Headers, recipients, dates, flags, ``content`` and attachment summaries.
    """
    if not account:
        raise ValueError("account name is required")
    path_json = require_mailbox_path(mailbox_path)
    if message_id < 1:
        raise ValueError("message_id must be a positive integer")

    return await executor.execute(
        tool_script("get_message_content.js"), account, path_json, str(message_id)
    )


async def get_selected_messages(
    executor: JXAExecutor,
    limit: int = 10,
    start_at: int = 0,
) -> dict[str, Any]:
    """
    Summarize the messages selected in the frontmost Mail viewer.

    Returns:
        ``{"selectedMessagesCount": n, "messages": [...]}``; each message
        includes the ``mailboxPath`` needed by ``reply_to_message``.
    """
    if not 1 <= limit <= MAX_SELECTED_LIMIT:
        raise ValueError(f"limit must be between 1 and {MAX_SELECTED_LIMIT}")
    if start_at < 0:
        raise ValueError("start_at must be 0 or greater")

    return await executor.execute(
        tool_script("get_selected_messages.js"), str(limit), str(start_at)
    )


async def find_messages(
    executor: JXAExecutor,
    account: str,
    mailbox_path: list[str],
    subject: str | None = None,
    sender: str | None = None,
    read_status: bool | None = None,
    flagged_only: bool = False,
    date_after: str | None = None,
    date_before: str | None = None,
    limit: int = DEFAULT_FIND_LIMIT,
) -> dict[str, Any]:
    """
    Search one mailbox, matching every filter that is given.

    Args:
        executor: Executor running the script.
        account: Account name.
        mailbox_path: Path to the mailbox, e.g. ``["Inbox"]``.
        subject: Case-insensitive substring of the subject.
        sender: Case-insensitive substring of the sender.
        read_status: Only read (True) or unread (False) messages.
        flagged_only: Only flagged messages.
        date_after: ISO 8601 date; messages received after it.
        date_before: ISO 8601 date; messages received before it.
        limit: Maximum number of messages returned (1-1000).

    Returns:
        ``{messages, count, totalMatches, limit, hasMore, filtersApplied}``
    """
    if not account:
        raise ValueError("account name is required")
    path_json = require_mailbox_path(mailbox_path)
    if not 1 <= limit <= MAX_FIND_LIMIT:
        raise ValueError(f"limit must be between 1 and {MAX_FIND_LIMIT}")

    return await executor.execute(
        tool_script("find_messages.js"),
        account,
        path_json,
        subject or "",
        sender or "",
        "" if read_status is None else flag(read_status),
        flag(flagged_only),
        _iso_date(date_after, "date_after"),
        _iso_date(date_before, "date_before"),
        str(limit),
    )


async def list_drafts(
    executor: JXAExecutor, account: str, limit: int = DEFAULT_FIND_LIMIT
) -> dict[str, Any]:
    """
    List the drafts of an account in the order Mail.app keeps them.

    Returns:
        ``{drafts, count, totalDrafts, limit, hasMore}``; ``draftId`` values
        are accepted by ``delete_draft``.
    """
    if not account:
        raise ValueError("account name is required")
    if not 1 <= limit <= MAX_FIND_LIMIT:
        raise ValueError(f"limit must be between 1 and {MAX_FIND_LIMIT}")

    return await executor.execute(tool_script("list_drafts.js"), account, str(limit))


def _iso_date(value: str | None, name: str) -> str:
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value).isoformat()
    except ValueError:
        raise ValueError(f"{name} must be an ISO 8601 date, got {value!r}") from None


def register(server: FastMCP, executor: JXAExecutor) -> None:
    """Register the message reading tools."""

    @server.tool(
        name="get_message_content",
        description=(
            "Retrieves the full content (body) of a specific message by its ID "
            "from a specific account and mailbox."
        ),
        annotations=ToolAnnotations(
            title="Get Message Content",
            readOnlyHint=True,
            idempotentHint=True,
            destructiveHint=False,
            openWorldHint=True,
        ),
    )
    async def get_message_content_tool(
        account: Annotated[str, Field(description="Name of the email account")],
        mailbox_path: Annotated[
            list[str],
            Field(
                description=(
                    "Path to the mailbox as an array, e.g. ['Inbox'] or ['Inbox', 'GitHub']. "
                    "Use the mailboxPath field from list_mailboxes or get_selected_messages."
                )
            ),
        ],
        message_id: Annotated[int, Field(description="The unique ID of the message to retrieve")],
    ) -> dict[str, Any]:
        return await traced(
            executor.logger,
            "get_message_content",
            {"account": account, "mailbox_path": mailbox_path, "message_id": message_id},
            get_message_content(executor, account, mailbox_path, message_id),
        )

    @server.tool(
        name="get_selected_messages",
        description=(
            "Gets the currently selected message(s) in Mail.app. Returns details about "
            "the selected messages in the frontmost Mail viewer window."
        ),
        annotations=ToolAnnotations(
            title="Get Selected Messages",
            readOnlyHint=True,
            # Selection can change between calls
            idempotentHint=False,
            destructiveHint=False,
            openWorldHint=True,
        ),
    )
    async def get_selected_messages_tool(
        limit: Annotated[
            int, Field(description="Maximum number of messages to return (1-100). Default is 10.")
        ] = 10,
        start_at: Annotated[
            int, Field(description="Index of the first selected message to return. Default is 0.")
        ] = 0,
    ) -> dict[str, Any]:
        return await traced(
            executor.logger,
            "get_selected_messages",
            {"limit": limit, "start_at": start_at},
            get_selected_messages(executor, limit, start_at),
        )

    @server.tool(
        name="find_messages",
        description=(
            "Searches a mailbox for messages matching all given filters (subject, sender, "
            "read status, flagged, received date range). Returns summaries with a content "
            "preview; use get_message_content for the full body."
        ),
        annotations=ToolAnnotations(
            title="Find Messages",
            readOnlyHint=True,
            idempotentHint=True,
            destructiveHint=False,
            openWorldHint=True,
        ),
    )
    async def find_messages_tool(
        account: Annotated[str, Field(description="Name of the email account")],
        mailbox_path: Annotated[
            list[str],
            Field(description="Path to the mailbox as an array, e.g. ['Inbox'] or ['Inbox', 'GitHub']"),
        ],
        subject: Annotated[
            str | None, Field(description="Only messages whose subject contains this text")
        ] = None,
        sender: Annotated[
            str | None, Field(description="Only messages whose sender contains this text")
        ] = None,
        read_status: Annotated[
            bool | None,
            Field(description="true for read messages only, false for unread messages only"),
        ] = None,
        flagged_only: Annotated[
            bool, Field(description="Only flagged messages. Default is false.")
        ] = False,
        date_after: Annotated[
            str | None,
            Field(description="Only messages received after this ISO 8601 date, e.g. 2024-05-01"),
        ] = None,
        date_before: Annotated[
            str | None,
            Field(description="Only messages received before this ISO 8601 date"),
        ] = None,
        limit: Annotated[
            int, Field(description="Maximum number of messages to return (1-1000). Default is 50.")
        ] = DEFAULT_FIND_LIMIT,
    ) -> dict[str, Any]:
        return await traced(
            executor.logger,
            "find_messages",
            {
                "account": account,
                "mailbox_path": mailbox_path,
                "subject": subject,
                "sender": sender,
                "read_status": read_status,
                "flagged_only": flagged_only,
                "date_after": date_after,
                "date_before": date_before,
                "limit": limit,
            },
            find_messages(
                executor,
                account,
                mailbox_path,
                subject,
                sender,
                read_status,
                flagged_only,
                date_after,
                date_before,
                limit,
            ),
        )

    @server.tool(
        name="list_drafts",
        description=(
            "Lists the draft messages of an account with recipients and a content preview. "
            "Use the draftId with delete_draft."
        ),
        annotations=ToolAnnotations(
            title="List Drafts",
            readOnlyHint=True,
            idempotentHint=True,
            destructiveHint=False,
            openWorldHint=True,
        ),
    )
    async def list_drafts_tool(
        account: Annotated[str, Field(description="Name of the email account")],
        limit: Annotated[
            int, Field(description="Maximum number of drafts to return (1-1000). Default is 50.")
        ] = DEFAULT_FIND_LIMIT,
    ) -> dict[str, Any]:
        return await traced(
            executor.logger,
            "list_drafts",
            {"account": account, "limit": limit},
            list_drafts(executor, account, limit),
        )
