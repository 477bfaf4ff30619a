"""
Configuration Exceptions

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class ConfigException(Exception):
    """
    Base exception for configuration errors.

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


class ConfigLoadError(ConfigException):
    """The configuration file is missing, unreadable or not valid JSON."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(
            message,
            error_code=1001,
            context={"path": path} if path else None
        )
        self.path = path


class ConfigValidationError(ConfigException):
    """A configuration key is unknown or its value has the wrong type."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(
            message,
            error_code=1002,
            context={"key": key} if key else None
        )
        self.key = key
