"""JXA script execution for Mail.app automation.

Every script is run as ``osascript -l JavaScript -e <script> <args...>`` and
must print exactly one JSON response envelope::

    {"success": true, "data": ..., "logs": "..."}
    {"success": false, "error": "...", "errorCode": "...", "logs": "..."}

``JXAExecutor.execute`` returns ``data`` and raises a ``JXAError`` subclass
for anything else, so callers can tell a broken interpreter, a script that
ignores the envelope and a script-reported failure apart.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any

from apple_mail_mcp.jxa.errors import (
    ContractViolationError,
    EmptyOutputError,
    ErrorCode,
    OutputParseError,
    ScriptTimeoutError,
    SubprocessFailedError,
    script_error_class,
)
from apple_mail_mcp.logging import discard_logger

UNKNOWN_ERROR = "unknown error (script returned success=false with no error message)"

# osascript ends its error line with the Apple event error number, e.g. "(-1743)"
_APPLE_EVENT_ERROR = re.compile(r"\((-\d+)\)\s*$")
_APPLE_EVENT_CODES = {
    "-600": ErrorCode.MAIL_NOT_RUNNING.value,
    "-1743": ErrorCode.NO_PERMISSIONS.value,
}


def _apple_event_error_code(output: str) -> str | None:
    match = _APPLE_EVENT_ERROR.search(output)
    if match is None:
        return None
    return _APPLE_EVENT_CODES.get(match.group(1))


def _failure_code(output: str, returncode: int) -> str | None:
    code = _apple_event_error_code(output)
    # macOS kills osascript outright when automation is blocked
    if code is None and returncode < 0:
        code = ErrorCode.NO_PERMISSIONS.value
    return code


async def _kill(process: asyncio.subprocess.Process) -> None:
    """Kill a still-running child and reap it."""
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
    await process.wait()


class JXAExecutor:
    """Runs JXA scripts through osascript and enforces the response envelope."""

    def __init__(
        self,
        osascript: str = "osascript",
        timeout: float | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Args:
            osascript: Interpreter binary name or path.
            timeout: Default upper bound in seconds for each call; None for no bound.
            logger: Receives script logs at DEBUG level; discarded when omitted.
        """
        self.osascript = osascript
        self.timeout = timeout
        self.logger = logger if logger is not None else discard_logger()

    async def execute(self, script: str, *args: str, timeout: float | None = None) -> Any:
        """
        Execute a JXA script and return its ``data`` payload.

        Args:
            script: JXA source defining ``run(argv)``.
            *args: Positional arguments, passed verbatim as ``argv``.
            timeout: Bound for this call. None (the default) uses the
                executor's timeout, so a single call cannot lift a bound the
                executor was created with.

        Returns:
            The ``data`` value of a successful envelope, unchanged.

        Raises:
            SubprocessFailedError: osascript could not run or exited non-zero.
            ScriptTimeoutError: The call exceeded its timeout.
            EmptyOutputError: osascript exited cleanly without output.
            OutputParseError: The output is not valid JSON.
            ContractViolationError: The JSON is not a valid envelope.
            ScriptError: The script reported ``success: false``.
        """
        if timeout is None:
            timeout = self.timeout

        output = await self._run(script, args, timeout)

        if not output:
            raise EmptyOutputError(
                f"osascript returned empty output (expected JSON)\nArguments: {list(args)}",
                args,
            )

        try:
            result = json.loads(output)
        except json.JSONDecodeError as e:
            raise OutputParseError(
                f"failed to parse osascript JSON output: {e}\n"
                f"Raw output: {output}\nArguments: {list(args)}",
                args,
                output=output,
            ) from e

        success = result.get("success") if isinstance(result, dict) else None
        if not isinstance(success, bool):
            raise ContractViolationError(
                "script output missing 'success' field or invalid type\n"
                f"Output: {output}\nArguments: {list(args)}",
                args,
                output=output,
            )

        logs = result.get("logs")
        if not isinstance(logs, str):
            logs = ""

        if not success:
            message = result.get("error")
            if not isinstance(message, str) or not message:
                message = UNKNOWN_ERROR

            error_code = result.get("errorCode")
            if not isinstance(error_code, str) or not error_code:
                error_code = None

            detail = f"JXA script error: {message}"
            if logs:
                detail += f"\nLogs:\n{logs}"
            raise script_error_class(error_code)(
                f"{detail}\nArguments: {list(args)}",
                args,
                output=output,
                error_code=error_code,
            )

        if "data" not in result:
            raise ContractViolationError(
                f"script output missing 'data' field\nOutput: {output}\nArguments: {list(args)}",
                args,
                output=output,
            )

        if logs:
            self.logger.debug("JXA script logs:\n%s", logs)

        return result["data"]

    async def _run(self, script: str, args: tuple[str, ...], timeout: float | None) -> str:
        """Run osascript to completion and return its combined, stripped output."""
        command = [self.osascript, "-l", "JavaScript", "-e", script, *args]

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            raise SubprocessFailedError(
                f"osascript execution failed: {e}\nArguments: {list(args)}",
                args,
            ) from e

        try:
            stdout, _ = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError as e:
            await _kill(process)
            raise ScriptTimeoutError(timeout, args) from e
        except asyncio.CancelledError:
            await _kill(process)
            raise

        output = stdout.decode("utf-8", errors="replace").strip()

        if process.returncode != 0:
            message = f"osascript execution failed: exit status {process.returncode}"
            if output:
                message += f"\nOutput: {output}"
            raise SubprocessFailedError(
                f"{message}\nArguments: {list(args)}",
                args,
                output=output or None,
                error_code=_failure_code(output, process.returncode),
                returncode=process.returncode,
            )

        return output


async def execute(
    script: str,
    *args: str,
    timeout: float | None = None,
    logger: logging.Logger | None = None,
) -> Any:
    """Execute a JXA script with a throwaway default executor."""
    return await JXAExecutor(timeout=timeout, logger=logger).execute(script, *args)
