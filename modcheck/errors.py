"""Exceptions raised by the checklist model"""

__all__ = [
    "ChecklistError",
    "InvalidPathError",
    "NotFoundError",
]


class ChecklistError(Exception):
    """Base class for checklist errors"""


class NotFoundError(ChecklistError, LookupError):
    """Raised when an item path or section index does not resolve"""

    def __init__(self, path, message: str | None = None):
        self.path = path
        super().__init__(message or f"No checklist item at path {path!r}")


class InvalidPathError(ChecklistError, ValueError):
    """Raised when a textual item path cannot be parsed"""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(
            f"Invalid item path '{raw}'. Expected dot-separated numbers, e.g. 0.2.1"
        )
