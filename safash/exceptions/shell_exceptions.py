"""
Shell Exceptions

Exceptions raised while parsing, resolving and executing command lines.
The executor raises these internally and folds them into an
ExecutionOutcome before returning to the shell loop.

Version: 1.0.0
"""

from typing import Optional, Any


class ShellException(Exception):
    """
    Base exception for all shell errors.

    Attributes:
        message: Human-readable error description
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or 1000
        self.context = context or {}

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({context_str})"
        return base

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code})"
        )


class InfrastructuralError(ShellException):
    """
    An I/O failure outside the program's own control.

    Raised when a program cannot be spawned or waited on, or when a
    builtin hits an operating system error (e.g. ``cd`` into a missing
    directory). The underlying OSError is kept in ``cause``.

    Example:
        >>> raise InfrastructuralError("Failed to spawn ls", cause=err)
    """

    def __init__(
        self,
        message: str,
        cause: Optional[OSError] = None,
        program: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        context = context or {}
        if program is not None:
            context["program"] = program
        super().__init__(message, error_code=1001, context=context)
        self.cause = cause
        self.program = program

    def __str__(self) -> str:
        if self.cause is not None:
            return f"Failed with an IO error: {self.cause}"
        return f"Failed with an IO error: {self.message}"


class NonZeroExit(ShellException):
    """
    An external program ran and exited with a non-zero status.

    This is data, not an internal error: the shell loop folds it into
    the prompt's last-status indicator without reporting it.
    """

    def __init__(self, status: int, program: Optional[str] = None) -> None:
        super().__init__(
            f"Exited with status {status}",
            error_code=1002,
            context={"program": program} if program else None
        )
        self.status = status
        self.program = program

    def __str__(self) -> str:
        return self.message


class BuiltinFailure(ShellException):
    """A builtin reported misuse, such as a missing argument."""

    def __init__(self, builtin: str, message: str = "Builtin error") -> None:
        super().__init__(message, error_code=1003, context={"builtin": builtin})
        self.builtin = builtin

    def __str__(self) -> str:
        return f"{self.builtin}: {self.message}"


class ConfigurationError(ShellException):
    """Raised when the configuration file cannot be loaded or validated."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(
            message,
            error_code=1004,
            context={"path": path} if path else None
        )
        self.path = path
