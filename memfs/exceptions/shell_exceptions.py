"""
Shell Exceptions

Exceptions raised while tokenizing a command line and dispatching it to
a built-in command.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class ShellException(Exception):
    """
    Base exception for command-line errors.

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
        self.error_code = error_code or 5000
        self.context = context or {}

    def __str__(self) -> str:
        return f"[Error {self.error_code}] {self.message}"


class ParseError(ShellException):
    """
    The command line could not be tokenized.

    Example:
        >>> raise ParseError("unclosed quote", position=12)
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if position is not None:
            ctx["position"] = position
        super().__init__(message, error_code=5001, context=ctx)
        self.position = position


class CommandNotFoundError(ShellException):
    """The first word of the line is not a known command."""

    def __init__(self, command: str) -> None:
        super().__init__(f"{command}: command not found", error_code=5002)
        self.command = command


class TooManyArgumentsError(ShellException):
    """A command received more operands than it accepts."""

    def __init__(self, command: str) -> None:
        super().__init__(f"{command}: too many arguments", error_code=5003)
        self.command = command


class InvalidOptionError(ShellException):
    """A command received a flag it does not understand."""

    def __init__(self, command: str, option: str) -> None:
        super().__init__(
            f"{command}: invalid option -- '{option}'",
            error_code=5004,
            context={"option": option}
        )
        self.command = command
        self.option = option
