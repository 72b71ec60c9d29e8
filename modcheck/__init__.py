"""Track progress through Markdown modernization checklists"""

from modcheck.errors import ChecklistError, InvalidPathError, NotFoundError
from modcheck.parser import parse_checklist
from modcheck.store import ChecklistStore
from modcheck.types import ChecklistDocument, Item, Progress, Section

__all__ = [
    "ChecklistDocument",
    "ChecklistError",
    "ChecklistStore",
    "InvalidPathError",
    "Item",
    "NotFoundError",
    "Progress",
    "Section",
    "parse_checklist",
]
