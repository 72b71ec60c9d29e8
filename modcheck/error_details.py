"""Error message formatting for user-friendly exception handling."""

from pydantic import ValidationError

from modcheck.errors import InvalidPathError, NotFoundError


def _format_validation_error(error: ValidationError) -> str:
    """Format pydantic validation errors, usually raised by bad settings."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )
    return f"Invalid configuration: {details}"


ERROR_TYPES = {
    NotFoundError: lambda e: f"Not found: {e!s}",
    InvalidPathError: lambda e: str(e),
    ValidationError: _format_validation_error,
    FileNotFoundError: lambda e: f"Checklist file not found: {e.filename or e!s}",
    IsADirectoryError: lambda e: f"Expected a file but got a directory: {e.filename}",
    PermissionError: lambda e: f"Permission denied: {e!s}\nCheck file permissions.",
    UnicodeDecodeError: lambda e: f"Checklist file is not valid UTF-8: {e!s}",
    OSError: lambda e: f"System error: {e!s}",
    ValueError: lambda e: str(e),
}


def get_error_human_message(error: Exception) -> str:
    """
    Get user-friendly error message based on exception type.

    Args:
        error: The exception to format

    Returns:
        Formatted error message suitable for end users
    """
    for error_type, handler in ERROR_TYPES.items():
        if isinstance(error, error_type):
            return handler(error)
    return str(error)
