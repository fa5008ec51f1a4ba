"""JXA execution infrastructure for Mail.app automation."""

from apple_mail_mcp.jxa.assets import load_script
from apple_mail_mcp.jxa.errors import (
    AutomationPermissionError,
    ContractViolationError,
    EmptyOutputError,
    ErrorCode,
    JXAError,
    MailNotRunningError,
    MailUnavailableError,
    OutputParseError,
    ScriptError,
    ScriptTimeoutError,
    StartupCheckError,
    StartupResultError,
    SubprocessFailedError,
)
from apple_mail_mcp.jxa.executor import JXAExecutor, execute
from apple_mail_mcp.jxa.startup import startup_check, troubleshooting_hint

__all__ = [
    "JXAExecutor",
    "execute",
    "load_script",
    "startup_check",
    "troubleshooting_hint",
    "ErrorCode",
    "JXAError",
    "SubprocessFailedError",
    "ScriptTimeoutError",
    "EmptyOutputError",
    "OutputParseError",
    "ContractViolationError",
    "ScriptError",
    "MailNotRunningError",
    "AutomationPermissionError",
    "StartupCheckError",
    "StartupResultError",
    "MailUnavailableError",
]
