"""Replying to, composing and cleaning up messages in Mail.app.

Nothing here sends mail: replies are saved as drafts and new messages are
saved as outgoing messages for the user to review, edit or delete.
"""

import json
from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from apple_mail_mcp.jxa.executor import JXAExecutor
from apple_mail_mcp.tools.base import (
    encode_list,
    flag,
    require_mailbox_path,
    tool_script,
    traced,
)

_COMPOSE = ToolAnnotations(
    readOnlyHint=False,
    idempotentHint=False,
    destructiveHint=False,
    openWorldHint=True,
)

_DELETE = ToolAnnotations(
    readOnlyHint=False,
    idempotentHint=True,
    destructiveHint=True,
    openWorldHint=True,
)


async def reply_to_message(
    executor: JXAExecutor,
    account: str,
    mailbox_path: list[str],
    message_id: int,
    reply_content: str,
    opening_window: bool = False,
    reply_to_all: bool = False,
) -> dict[str, Any]:
    """
    Create a reply draft for a message.

    Args:
        executor: Executor running the script.
        account: Account name.
        mailbox_path: Path to the mailbox holding the message.
        message_id: Mail.app message id.
        reply_content: Text placed above the quoted original.
        opening_window: Show the reply window.
        reply_to_all: Reply to all recipients instead of the sender only.

    Returns:
        ``{draftId, subject, toRecipients, message}``
    """
    if not account:
        raise ValueError("account name is required")
    path_json = require_mailbox_path(mailbox_path)
    if message_id < 1:
        raise ValueError("message_id must be a positive integer")
    if not reply_content:
        raise ValueError("reply_content is required")

    return await executor.execute(
        tool_script("reply_to_message.js"),
        account,
        path_json,
        str(message_id),
        reply_content,
        flag(opening_window),
        flag(reply_to_all),
    )


async def create_outgoing_message(
    executor: JXAExecutor,
    subject: str,
    content: str,
    to_recipients: list[str],
    cc_recipients: list[str] | None = None,
    bcc_recipients: list[str] | None = None,
    sender: str | None = None,
    opening_window: bool = False,
) -> dict[str, Any]:
    """
    Create and save a new outgoing message without sending it.

    Empty CC/BCC lists are passed as empty strings, which the script reads
    as "no recipients".
    """
    subject = subject.strip()
    if not subject:
        raise ValueError("subject is required and cannot be empty or whitespace-only")
    if not content:
        raise ValueError("content is required")

    return await executor.execute(
        tool_script("create_outgoing_message.js"),
        subject,
        content,
        encode_list(to_recipients),
        encode_list(cc_recipients, empty=""),
        encode_list(bcc_recipients, empty=""),
        sender or "",
        flag(opening_window),
    )


async def replace_outgoing_message(
    executor: JXAExecutor,
    outgoing_id: int,
    subject: str | None = None,
    content: str | None = None,
    to_recipients: list[str] | None = None,
    cc_recipients: list[str] | None = None,
    bcc_recipients: list[str] | None = None,
    sender: str | None = None,
    opening_window: bool = False,
) -> dict[str, Any]:
    """
    Replace an outgoing message with an edited copy.

    Mail.app cannot edit outgoing messages in place, so the old message is
    deleted and a new one is created. Fields left as None keep their current
    value; an empty recipient list removes those recipients.

    Returns:
        ``{outgoingId, oldOutgoingId, subject, sender, toRecipients, ...}``
        with a ``warning`` when not every recipient could be added.
    """
    _require_id(outgoing_id, "outgoing_id")

    return await executor.execute(
        tool_script("replace_outgoing_message.js"),
        str(outgoing_id),
        (subject or "").strip(),
        content or "",
        _encode_replacement(to_recipients),
        _encode_replacement(cc_recipients),
        _encode_replacement(bcc_recipients),
        sender or "",
        flag(opening_window),
    )


async def delete_outgoing_message(executor: JXAExecutor, outgoing_id: int) -> dict[str, Any]:
    """Delete an unsent outgoing message, closing its window if open."""
    _require_id(outgoing_id, "outgoing_id")
    return await executor.execute(tool_script("delete_outgoing_message.js"), str(outgoing_id))


async def delete_draft(executor: JXAExecutor, draft_id: int) -> dict[str, Any]:
    """Delete a draft, e.g. one created by ``reply_to_message``."""
    _require_id(draft_id, "draft_id")
    return await executor.execute(tool_script("delete_draft.js"), str(draft_id))


def _require_id(value: int, name: str) -> None:
    if value < 1:
        raise ValueError(f"{name} must be a positive integer")


def _encode_replacement(values: list[str] | None) -> str:
    # "" keeps the current recipients, "[]" clears them
    if values is None:
        return ""
    return json.dumps(list(values))


def register(server: FastMCP, executor: JXAExecutor) -> None:
    """Register the compose tools."""

    @server.tool(
        name="reply_to_message",
        description=(
            "Creates a reply to a specific message and saves it as a draft. Mail.app "
            "automatically includes the quoted original message. The reply is not sent; "
            "it remains in drafts for review. Do not use this on messages in the Drafts "
            "mailbox. Use the mailboxPath field from get_selected_messages or list_mailboxes."
        ),
        annotations=_COMPOSE.model_copy(update={"title": "Reply to Message (Draft)"}),
    )
    async def reply_to_message_tool(
        account: Annotated[str, Field(description="Name of the email account")],
        mailbox_path: Annotated[
            list[str],
            Field(description="Path to the mailbox as an array, e.g. ['Inbox'] or ['Inbox', 'GitHub']"),
        ],
        message_id: Annotated[int, Field(description="The unique ID of the message to reply to")],
        reply_content: Annotated[str, Field(description="The body of the reply message")],
        opening_window: Annotated[
            bool, Field(description="Whether to show the reply window. Default is false.")
        ] = False,
        reply_to_all: Annotated[
            bool,
            Field(description="Whether to reply to all recipients. Default is false (sender only)."),
        ] = False,
    ) -> dict[str, Any]:
        return await traced(
            executor.logger,
            "reply_to_message",
            {
                "account": account,
                "mailbox_path": mailbox_path,
                "message_id": message_id,
                "opening_window": opening_window,
                "reply_to_all": reply_to_all,
            },
            reply_to_message(
                executor,
                account,
                mailbox_path,
                message_id,
                reply_content,
                opening_window,
                reply_to_all,
            ),
        )

    @server.tool(
        name="create_outgoing_message",
        description=(
            "Creates a new outgoing email message and returns its ID. The message is "
            "saved but not sent. It only exists while Mail.app is running. Use "
            "replace_outgoing_message to modify it or delete_outgoing_message to discard it."
        ),
        annotations=_COMPOSE.model_copy(update={"title": "Create Outgoing Message"}),
    )
    async def create_outgoing_message_tool(
        subject: Annotated[str, Field(description="Subject line of the email")],
        content: Annotated[str, Field(description="Body text of the email")],
        to_recipients: Annotated[
            list[str], Field(description="List of To recipient email addresses")
        ],
        cc_recipients: Annotated[
            list[str] | None, Field(description="List of CC recipient email addresses")
        ] = None,
        bcc_recipients: Annotated[
            list[str] | None, Field(description="List of BCC recipient email addresses")
        ] = None,
        sender: Annotated[
            str | None,
            Field(description="Sender email address (uses the default account if omitted)"),
        ] = None,
        opening_window: Annotated[
            bool, Field(description="Whether to show the compose window. Default is false.")
        ] = False,
    ) -> dict[str, Any]:
        return await traced(
            executor.logger,
            "create_outgoing_message",
            {
                "subject": subject,
                "to_recipients": to_recipients,
                "cc_recipients": cc_recipients,
                "bcc_recipients": bcc_recipients,
                "sender": sender,
                "opening_window": opening_window,
            },
            create_outgoing_message(
                executor,
                subject,
                content,
                to_recipients,
                cc_recipients,
                bcc_recipients,
                sender,
                opening_window,
            ),
        )

    @server.tool(
        name="replace_outgoing_message",
        description=(
            "Replaces an outgoing message created by create_outgoing_message with an edited "
            "copy and returns the new outgoing ID; the old ID stops working. Omitted fields "
            "keep their current value, an empty recipient list removes those recipients. "
            "The message is saved but not sent."
        ),
        annotations=_COMPOSE.model_copy(
            update={"title": "Replace Outgoing Message", "destructiveHint": True}
        ),
    )
    async def replace_outgoing_message_tool(
        outgoing_id: Annotated[
            int, Field(description="The outgoingId returned by create_outgoing_message")
        ],
        subject: Annotated[str | None, Field(description="New subject line")] = None,
        content: Annotated[str | None, Field(description="New body text")] = None,
        to_recipients: Annotated[
            list[str] | None, Field(description="New list of To recipient email addresses")
        ] = None,
        cc_recipients: Annotated[
            list[str] | None, Field(description="New list of CC recipient email addresses")
        ] = None,
        bcc_recipients: Annotated[
            list[str] | None, Field(description="New list of BCC recipient email addresses")
        ] = None,
        sender: Annotated[str | None, Field(description="New sender email address")] = None,
        opening_window: Annotated[
            bool, Field(description="Whether to show the compose window. Default is false.")
        ] = False,
    ) -> dict[str, Any]:
        return await traced(
            executor.logger,
            "replace_outgoing_message",
            {
                "outgoing_id": outgoing_id,
                "subject": subject,
                "to_recipients": to_recipients,
                "cc_recipients": cc_recipients,
                "bcc_recipients": bcc_recipients,
                "sender": sender,
                "opening_window": opening_window,
            },
            replace_outgoing_message(
                executor,
                outgoing_id,
                subject,
                content,
                to_recipients,
                cc_recipients,
                bcc_recipients,
                sender,
                opening_window,
            ),
        )

    @server.tool(
        name="delete_outgoing_message",
        description="Deletes an unsent outgoing message by its outgoing ID and closes its window.",
        annotations=_DELETE.model_copy(update={"title": "Delete Outgoing Message"}),
    )
    async def delete_outgoing_message_tool(
        outgoing_id: Annotated[
            int, Field(description="The outgoingId returned by create_outgoing_message")
        ],
    ) -> dict[str, Any]:
        return await traced(
            executor.logger,
            "delete_outgoing_message",
            {"outgoing_id": outgoing_id},
            delete_outgoing_message(executor, outgoing_id),
        )

    @server.tool(
        name="delete_draft",
        description=(
            "Deletes a draft message by its draft ID, as returned by reply_to_message "
            "or list_drafts."
        ),
        annotations=_DELETE.model_copy(update={"title": "Delete Draft"}),
    )
    async def delete_draft_tool(
        draft_id: Annotated[int, Field(description="The draftId of the draft to delete")],
    ) -> dict[str, Any]:
        return await traced(
            executor.logger,
            "delete_draft",
            {"draft_id": draft_id},
            delete_draft(executor, draft_id),
        )
