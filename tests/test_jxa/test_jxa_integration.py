"""Integration tests running real osascript (macOS only, Mail.app not needed)."""

import asyncio
import shutil
import sys

import pytest

from apple_mail_mcp.jxa.errors import (
    ContractViolationError,
    EmptyOutputError,
    MailNotRunningError,
    OutputParseError,
    ScriptError,
    ScriptTimeoutError,
    SubprocessFailedError,
)
from apple_mail_mcp.jxa.executor import JXAExecutor

pytestmark = pytest.mark.skipif(
    sys.platform != "darwin" or shutil.which("osascript") is None,
    reason="requires macOS osascript",
)


def execute(script: str, *args: str, timeout: float | None = 30.0):
    return asyncio.run(JXAExecutor().execute(script, *args, timeout=timeout))


class TestRealOsascript:
    """The response contract against the real interpreter."""

    def test_wrapped_format(self) -> None:
        script = """
function run(argv) {
    return JSON.stringify({success: true, data: {accounts: ["account1", "account2"], count: 2}});
}
"""
        result = execute(script)

        assert result == {"accounts": ["account1", "account2"], "count": 2}

    def test_with_arguments(self) -> None:
        script = """
function run(argv) {
    return JSON.stringify({
        success: true,
        data: {arg1: argv[0] || '', arg2: parseInt(argv[1]) || 0, argCount: argv.length}
    });
}
"""
        assert execute(script, "test", "42") == {"arg1": "test", "arg2": 42, "argCount": 2}

    def test_argument_with_quotes(self) -> None:
        script = "function run(argv) { return JSON.stringify({success: true, data: argv[0]}); }"
        value = "it's \"quoted\" `and` $(not) expanded"

        assert execute(script, value) == value

    def test_missing_data_field(self) -> None:
        script = "function run(argv) { return JSON.stringify({success: true, count: 2}); }"

        with pytest.raises(ContractViolationError, match="missing 'data' field"):
            execute(script)

    def test_script_error(self) -> None:
        script = (
            "function run(argv) { return JSON.stringify({success: false, "
            "error: 'Something went wrong', logs: 'step 1'}); }"
        )

        with pytest.raises(ScriptError, match="Something went wrong") as exc_info:
            execute(script)

        assert "step 1" in str(exc_info.value)

    def test_error_code(self) -> None:
        script = (
            "function run(argv) { return JSON.stringify({success: false, "
            "error: 'Mail.app is not running', errorCode: 'MAIL_APP_NOT_RUNNING'}); }"
        )

        with pytest.raises(MailNotRunningError):
            execute(script)

    def test_invalid_json(self) -> None:
        with pytest.raises(OutputParseError):
            execute('function run(argv) { return "not valid json"; }')

    def test_empty_output(self) -> None:
        with pytest.raises(EmptyOutputError):
            execute("function run(argv) { return ''; }")

    def test_syntax_error(self) -> None:
        with pytest.raises(SubprocessFailedError):
            execute("function run(argv) { return JSON.stringify({ ")

    def test_timeout(self) -> None:
        script = """
function run(argv) {
    const start = Date.now();
    while (Date.now() - start < 5000) {}
    return JSON.stringify({success: true, data: {}});
}
"""
        with pytest.raises(ScriptTimeoutError):
            execute(script, timeout=0.5)
