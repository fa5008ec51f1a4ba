"""JXA error classes for Mail.app automation."""

from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable failure kinds reported in the ``errorCode`` envelope field."""

    MAIL_NOT_RUNNING = "MAIL_APP_NOT_RUNNING"
    NO_PERMISSIONS = "MAIL_APP_NO_PERMISSIONS"
    NOT_FOUND = "NOT_FOUND"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"


class JXAError(Exception):
    """Base class for every failure raised by the JXA executor."""

    def __init__(
        self,
        message: str,
        script_args: tuple[str, ...] | list[str] = (),
        *,
        output: str | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.script_args = list(script_args)
        self.output = output
        self.error_code = error_code


class SubprocessFailedError(JXAError):
    """Raised when osascript could not be spawned or exited non-zero."""

    def __init__(
        self,
        message: str,
        script_args: tuple[str, ...] | list[str] = (),
        *,
        output: str | None = None,
        error_code: str | None = None,
        returncode: int | None = None,
    ) -> None:
        super().__init__(message, script_args, output=output, error_code=error_code)
        self.returncode = returncode


class ScriptTimeoutError(SubprocessFailedError):
    """Raised when osascript did not finish within its time budget."""

    def __init__(self, timeout: float, script_args: tuple[str, ...] | list[str] = ()) -> None:
        super().__init__(f"osascript timed out after {timeout:g}s", script_args)
        self.timeout = timeout


class EmptyOutputError(JXAError):
    """Raised when osascript exited cleanly but printed nothing."""


class OutputParseError(JXAError):
    """Raised when osascript output is not valid JSON."""


class ContractViolationError(JXAError):
    """Raised when the JSON output does not follow the response envelope."""


class ScriptError(JXAError):
    """Raised when a script reports ``success: false``."""


class MailNotRunningError(ScriptError):
    """Raised when Mail.app is not running."""


class AutomationPermissionError(ScriptError):
    """Raised when macOS denies automation access to Mail.app."""


class StartupCheckError(JXAError):
    """Raised when the Mail.app connectivity check fails."""


class StartupResultError(StartupCheckError):
    """Raised when the connectivity check returns something other than a mapping."""


class MailUnavailableError(StartupCheckError):
    """Raised when the connectivity check ran but Mail.app did not report itself running."""


_SCRIPT_ERRORS: dict[str, type[ScriptError]] = {
    ErrorCode.MAIL_NOT_RUNNING.value: MailNotRunningError,
    ErrorCode.NO_PERMISSIONS.value: AutomationPermissionError,
}


def script_error_class(error_code: str | None) -> type[ScriptError]:
    """Map an ``errorCode`` value to the exception class raised for it."""
    if error_code is None:
        return ScriptError
    return _SCRIPT_ERRORS.get(error_code, ScriptError)
