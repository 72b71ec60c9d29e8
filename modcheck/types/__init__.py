"""Core data structures for checklist tracking

This package provides:
- Checklist document, section and item models
- Item paths and progress counts
"""

from .checklist import (
    ChecklistDocument,
    Item,
    ItemLayout,
    ItemPath,
    Progress,
    Section,
    format_path,
    parse_path,
)

__all__ = [
    "ChecklistDocument",
    "Item",
    "ItemLayout",
    "ItemPath",
    "Progress",
    "Section",
    "format_path",
    "parse_path",
]
