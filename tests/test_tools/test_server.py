"""Tests for MCP server wiring."""

import asyncio
from unittest.mock import patch

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from apple_mail_mcp.config import Settings
from apple_mail_mcp.server import SERVER_NAME, create_server, run_server

EXPECTED_TOOLS = {
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
}


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


class TestCreateServer:
    """Tests for create_server()."""

    def test_registers_all_tools(self, settings, mock_executor) -> None:
        server = create_server(settings, mock_executor)

        tools = asyncio.run(server.list_tools())

        assert server.name == SERVER_NAME
        assert {tool.name for tool in tools} == EXPECTED_TOOLS

    def test_annotations(self, settings, mock_executor) -> None:
        server = create_server(settings, mock_executor)
        tools = {tool.name: tool for tool in asyncio.run(server.list_tools())}

        assert tools["list_mailboxes"].annotations.readOnlyHint is True
        assert tools["list_mailboxes"].annotations.title == "List Mailboxes"
        assert tools["get_selected_messages"].annotations.idempotentHint is False
        assert tools["reply_to_message"].annotations.readOnlyHint is False
        assert tools["reply_to_message"].annotations.destructiveHint is False
        assert tools["find_messages"].annotations.readOnlyHint is True
        assert tools["replace_outgoing_message"].annotations.destructiveHint is True
        assert tools["delete_draft"].annotations.destructiveHint is True
        assert tools["delete_outgoing_message"].annotations.title == "Delete Outgoing Message"

    def test_input_schema(self, settings, mock_executor) -> None:
        server = create_server(settings, mock_executor)
        tools = {tool.name: tool for tool in asyncio.run(server.list_tools())}

        schema = tools["reply_to_message"].inputSchema
        assert set(schema["required"]) == {
            "account",
            "mailbox_path",
            "message_id",
            "reply_content",
        }
        assert schema["properties"]["mailbox_path"]["type"] == "array"

    def test_call_tool_runs_script(self, settings, mock_executor) -> None:
        mock_executor.execute.return_value = {"mailboxes": [], "count": 0}
        server = create_server(settings, mock_executor)

        asyncio.run(server.call_tool("list_mailboxes", {"account": "Work"}))

        assert mock_executor.execute.call_args[0][1:] == ("Work",)
        mock_executor.logger.debug.assert_called()

    def test_call_find_messages(self, settings, mock_executor) -> None:
        server = create_server(settings, mock_executor)

        asyncio.run(
            server.call_tool(
                "find_messages",
                {"account": "Work", "mailbox_path": ["Inbox"], "subject": "Invoice", "limit": 5},
            )
        )

        args = mock_executor.execute.call_args[0][1:]
        assert args[:3] == ("Work", '["Inbox"]', "Invoice")
        assert args[-1] == "5"

    def test_call_tool_surfaces_errors(self, settings, mock_executor) -> None:
        server = create_server(settings, mock_executor)

        with pytest.raises(ToolError, match="subject"):
            asyncio.run(
                server.call_tool(
                    "create_outgoing_message",
                    {"subject": " ", "content": "x", "to_recipients": []},
                )
            )

        mock_executor.execute.assert_not_called()


class TestRunServer:
    """Tests for run_server()."""

    def test_stdio(self, settings, mock_executor) -> None:
        server = create_server(settings, mock_executor)
        with patch.object(server, "run") as mock_run:
            run_server(server, settings)

        mock_run.assert_called_once_with(transport="stdio")

    def test_http(self, mock_executor) -> None:
        settings = Settings(_env_file=None, transport="http", port=9000)
        server = create_server(settings, mock_executor)
        with patch.object(server, "run") as mock_run:
            run_server(server, settings)

        mock_run.assert_called_once_with(transport="streamable-http")
        assert server.settings.port == 9000
