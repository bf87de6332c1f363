"""Error codes and exception handling for handy-cli utilities.

Parse failures are click's own ``UsageError`` family and are never wrapped:
they travel to the caller with their identity intact. Everything this package
raises on its own behalf is a ``HandyCliError`` carrying an ``ErrorCode``.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Package-wide error code enumeration.

    Categories:
        Reconstruction: INVALID_CONTEXT
        Documentation update: README_NOT_FOUND, PATH_ESCAPE
        Configuration: CONFIG_INVALID
    """

    INVALID_CONTEXT = "INVALID_CONTEXT"
    README_NOT_FOUND = "README_NOT_FOUND"
    PATH_ESCAPE = "PATH_ESCAPE"
    CONFIG_INVALID = "CONFIG_INVALID"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class HandyCliError(Exception):
    """Base exception for handy-cli errors.

    Wraps an ErrorCode with a human-readable message and optional structured
    details.

    Attributes:
        code: The ErrorCode enum value for this error.
        message: Human-readable error description.
        details: Optional dictionary of additional structured context.

    Example:
        >>> error = HandyCliError(
        ...     code=ErrorCode.README_NOT_FOUND,
        ...     message="README not found: README.md",
        ...     details={"path": "README.md"}
        ... )
        >>> error.code
        <ErrorCode.README_NOT_FOUND: 'README_NOT_FOUND'>
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)

    def __repr__(self) -> str:
        """Return a developer-friendly representation of the error."""
        return f"HandyCliError(code={self.code.value!r}, message={self.message!r}, details={self.details!r})"
