"""
Filesystem Exceptions

Exceptions raised by the tree store, the path resolver and the
filesystem operations. Every one of them is recoverable: the shell
reports the message and keeps the session going.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class FileSystemException(Exception):
    """
    Base exception for all filesystem-related errors.

    Attributes:
        message: Human-readable error description
        path: Path the operation was working on (if applicable)
        reason: Short Unix-style explanation ("No such file or directory")
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error
    """

    reason = "Filesystem error"

    def __init__(
        self,
        message: Optional[str] = None,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        message = message or (f"{self.reason}: {path}" if path else self.reason)
        super().__init__(message)
        self.message = message
        self.path = path
        self.error_code = error_code or 4000
        self.context = context or {}
        if path:
            self.context["path"] = path

    def __str__(self) -> str:
        return f"[Error {self.error_code}] {self.message}"


class FilesystemNotInitializedError(FileSystemException):
    """An operation was attempted before the filesystem was initialized."""

    reason = "Filesystem not initialized"

    def __init__(self, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(error_code=4001, context=context)


class PathResolutionError(FileSystemException):
    """
    Error resolving path.

    Base for the errors the resolver raises while walking a path.

    Attributes:
        component: The path segment at which resolution stopped
    """

    def __init__(
        self,
        path: str,
        component: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if component:
            ctx["component"] = component
        super().__init__(path=path, error_code=error_code or 4010, context=ctx)
        self.component = component


class NotFoundError(PathResolutionError):
    """
    The path does not name an existing node.

    Example:
        >>> raise NotFoundError("/home/user/missing", component="missing")
    """

    reason = "No such file or directory"

    def __init__(
        self,
        path: str,
        component: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(path, component=component, error_code=4011, context=context)


class NotADirectoryError(PathResolutionError):
    """
    A directory was required but a file was found.

    Raised both while descending through a path and by verbs such as
    ``cd`` and ``rmdir`` that only accept directories.
    """

    reason = "Not a directory"

    def __init__(
        self,
        path: str,
        component: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(path, component=component, error_code=4012, context=context)


class NoPreviousDirectoryError(PathResolutionError):
    """``-`` was used but there is no previous directory to return to."""

    reason = "No previous directory"

    def __init__(self, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__("-", error_code=4013, context=context)


class IsADirectoryError(FileSystemException):
    """
    A file was required but a directory was found.

    Example:
        >>> raise IsADirectoryError("/home/user")
    """

    reason = "Is a directory"

    def __init__(
        self,
        path: str,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(path=path, error_code=error_code or 4020, context=context)


class OmittingDirectoryError(IsADirectoryError):
    """A directory was given to ``cp`` without the recursive flag."""

    reason = "-r not specified; omitting directory"

    def __init__(self, path: str, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(path, error_code=4021, context=context)


class AlreadyExistsError(FileSystemException):
    """
    The target name is already taken in the destination directory.

    Example:
        >>> raise AlreadyExistsError("/home/user/documents")
    """

    reason = "File exists"

    def __init__(self, path: str, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(path=path, error_code=4030, context=context)


class DirectoryNotEmptyError(FileSystemException):
    """
    Directory is not empty.

    Raised when removing a directory that still has children without
    asking for a recursive removal.
    """

    reason = "Directory not empty"

    def __init__(self, path: str, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(path=path, error_code=4040, context=context)


class CannotRemoveRootError(FileSystemException):
    """The root directory cannot be removed, moved or replaced."""

    reason = "Cannot remove root directory"

    def __init__(self, path: str = "/", context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(path=path, error_code=4050, context=context)


class InvalidDestinationError(FileSystemException):
    """
    The destination of a copy or move lies inside the source itself.

    Covers moving or copying a directory into one of its own descendants
    and moving or copying a node onto itself.
    """

    reason = "Cannot copy or move a node into itself"

    def __init__(
        self,
        path: str,
        destination: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if destination:
            ctx["destination"] = destination
        super().__init__(path=path, error_code=4060, context=ctx)
        self.destination = destination


class MissingOperandError(FileSystemException):
    """A command was invoked without a required path argument."""

    reason = "missing operand"

    def __init__(self, command: str, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            message=f"{command}: missing operand",
            error_code=4070,
            context=context
        )
        self.command = command
