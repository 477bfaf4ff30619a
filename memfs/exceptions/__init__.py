"""
memfs Exception Hierarchy

Three independent families, each with its own base class and error-code
range:

Architecture:
    ConfigException (1000)
    ├── ConfigLoadError
    └── ConfigValidationError
    FileSystemException (4000)
    ├── FilesystemNotInitializedError
    ├── PathResolutionError
    │   ├── NotFoundError
    │   ├── NotADirectoryError
    │   └── NoPreviousDirectoryError
    ├── IsADirectoryError
    │   └── OmittingDirectoryError
    ├── AlreadyExistsError
    ├── DirectoryNotEmptyError
    ├── CannotRemoveRootError
    ├── InvalidDestinationError
    └── MissingOperandError
    ShellException (5000)
    ├── ParseError
    ├── CommandNotFoundError
    ├── TooManyArgumentsError
    └── InvalidOptionError

Note that ``NotADirectoryError`` and ``IsADirectoryError`` shadow the
builtins of the same name when imported from here.
"""

from .config_exceptions import (
    ConfigException,
    ConfigLoadError,
    ConfigValidationError,
)

from .fs_exceptions import (
    FileSystemException,
    FilesystemNotInitializedError,
    PathResolutionError,
    NotFoundError,
    NotADirectoryError,
    NoPreviousDirectoryError,
    IsADirectoryError,
    OmittingDirectoryError,
    AlreadyExistsError,
    DirectoryNotEmptyError,
    CannotRemoveRootError,
    InvalidDestinationError,
    MissingOperandError,
)

from .shell_exceptions import (
    ShellException,
    ParseError,
    CommandNotFoundError,
    TooManyArgumentsError,
    InvalidOptionError,
)

__all__ = [
    # Config exceptions
    "ConfigException",
    "ConfigLoadError",
    "ConfigValidationError",
    # Filesystem exceptions
    "FileSystemException",
    "FilesystemNotInitializedError",
    "PathResolutionError",
    "NotFoundError",
    "NotADirectoryError",
    "NoPreviousDirectoryError",
    "IsADirectoryError",
    "OmittingDirectoryError",
    "AlreadyExistsError",
    "DirectoryNotEmptyError",
    "CannotRemoveRootError",
    "InvalidDestinationError",
    "MissingOperandError",
    # Shell exceptions
    "ShellException",
    "ParseError",
    "CommandNotFoundError",
    "TooManyArgumentsError",
    "InvalidOptionError",
]
