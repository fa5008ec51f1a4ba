"""Mail.app connectivity check run once before the server starts.

Common failures:
- MAIL_APP_NOT_RUNNING: start Mail.app before running the server
- MAIL_APP_NO_PERMISSIONS or a killed osascript: macOS is blocking
  automation; grant access in System Settings > Privacy & Security > Automation
"""

from __future__ import annotations

from typing import Any

from apple_mail_mcp.jxa.assets import load_script
from apple_mail_mcp.jxa.errors import (
    ErrorCode,
    JXAError,
    MailUnavailableError,
    StartupCheckError,
    StartupResultError,
)
from apple_mail_mcp.jxa.executor import JXAExecutor

STARTUP_TIMEOUT = 10.0
STARTUP_CHECK_SCRIPT = "startup_check.js"

TROUBLESHOOTING_URL = "https://github.com/dastrobu/apple-mail-mcp#troubleshooting"


async def startup_check(
    executor: JXAExecutor | None = None,
    timeout: float = STARTUP_TIMEOUT,
) -> dict[str, Any]:
    """
    Verify that Mail.app is running and accessible via JXA.

    Args:
        executor: Executor to run the check with (default: a fresh one).
        timeout: Upper bound in seconds. A deadline the caller already
            applies still holds; whichever expires first wins.

    Returns:
        The Mail.app properties reported by the check script
        (``running``, ``accountCount``, ``version``, ``properties``).

    Raises:
        StartupCheckError: The script could not be run or reported failure.
        StartupResultError: The script returned something other than a mapping.
        MailUnavailableError: The script did not report Mail.app as running.
    """
    executor = executor or JXAExecutor()
    script = load_script("apple_mail_mcp.jxa", STARTUP_CHECK_SCRIPT)

    try:
        result = await executor.execute(script, timeout=timeout)
    except JXAError as e:
        raise StartupCheckError(
            f"Mail.app connectivity check failed: {e}",
            e.script_args,
            output=e.output,
            error_code=e.error_code,
        ) from e

    if not isinstance(result, dict):
        raise StartupResultError(
            f"startup check returned unexpected data type: {type(result).__name__}"
        )

    if result.get("running") is not True:
        raise MailUnavailableError("Mail.app is not properly accessible")

    return result


def troubleshooting_hint(error: JXAError) -> str:
    """Describe what the operator should do about a failed startup check."""
    if error.error_code == ErrorCode.MAIL_NOT_RUNNING:
        return "Mail.app is not running. Please start Mail.app and try again."

    if error.error_code == ErrorCode.NO_PERMISSIONS:
        return (
            "Automation access to Mail.app was denied. Grant permission in "
            "System Settings > Privacy & Security > Automation."
        )

    return (
        "This usually means either:\n"
        "1. Mail.app is not running - Please start Mail.app\n"
        "2. Missing automation permissions - Grant permission in "
        "System Settings > Privacy & Security > Automation\n\n"
        f"For detailed troubleshooting, see: {TROUBLESHOOTING_URL}"
    )
