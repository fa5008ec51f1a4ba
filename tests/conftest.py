"""Pytest fixtures for apple-mail-mcp tests."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from apple_mail_mcp.jxa.executor import JXAExecutor


class FakeProcess:
    """Stand-in for asyncio.subprocess.Process."""

    def __init__(self, output: bytes = b"", returncode: int = 0, hang: bool = False) -> None:
        self.output = output
        self.final_returncode = returncode
        self.hang = hang
        self.returncode: int | None = None
        self.killed = False

    async def communicate(self) -> tuple[bytes, None]:
        if self.hang:
            await asyncio.Event().wait()
        self.returncode = self.final_returncode
        return self.output, None

    def kill(self) -> None:
        self.killed = True
        self.returncode = -9

    async def wait(self) -> int | None:
        return self.returncode


def envelope(**fields) -> bytes:
    """Encode a response envelope the way osascript prints it."""
    return json.dumps(fields).encode("utf-8") + b"\n"


@pytest.fixture
def spawn():
    """Patch subprocess creation; set ``spawn.return_value`` to a FakeProcess."""
    with patch(
        "apple_mail_mcp.jxa.executor.asyncio.create_subprocess_exec",
        new_callable=AsyncMock,
    ) as mock_spawn:
        mock_spawn.return_value = FakeProcess(envelope(success=True, data={}))
        yield mock_spawn


@pytest.fixture
def mock_executor() -> MagicMock:
    """Executor whose execute() is an AsyncMock returning an empty mapping."""
    executor = MagicMock(spec=JXAExecutor)
    executor.execute = AsyncMock(return_value={})
    executor.logger = MagicMock()
    return executor


@pytest.fixture(name="envelope")
def envelope_fixture():
    """Envelope encoder, for tests that build osascript output."""
    return envelope


@pytest.fixture
def fake_process():
    """FakeProcess factory."""
    return FakeProcess
