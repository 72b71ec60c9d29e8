"""Checklist document model: sections, items and item paths"""

from collections.abc import Iterator
from typing import NamedTuple

from pydantic import BaseModel, Field

from modcheck.errors import InvalidPathError

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

ItemPath = tuple[int, ...]

CHECKED_MARKS = ("x", "X")


class Progress(NamedTuple):
    """Checked and total item counts"""

    checked: int
    total: int

    @property
    def remaining(self) -> int:
        return self.total - self.checked

    @property
    def percent(self) -> float:
        if self.total == 0:
            return 0.0
        return 100.0 * self.checked / self.total

    def __str__(self) -> str:
        return f"{self.checked}/{self.total} ({self.percent:.0f}%)"


class ItemLayout(BaseModel):
    """Source formatting of a list-item line, kept for byte-exact rendering"""

    indent: str = Field(default="", description="Leading whitespace")
    bullet: str = Field(default="-", description="List marker, e.g. '-', '*', '3.'")
    spacing: str = Field(default=" ", description="Whitespace after the bullet")
    mark: str | None = Field(
        default=None,
        description="Character inside the checkbox, None when the line has no checkbox",
    )
    box_spacing: str = Field(default=" ", description="Whitespace after the checkbox")
    line_ending: str = Field(default="\n", description="'\\n', '\\r\\n' or ''")

    def indent_width(self, tab_size: int = 4) -> int:
        return len(self.indent.expandtabs(tab_size))


class Item(BaseModel):
    """Single checklist entry with optional nested sub-items"""

    text: str = Field(description="Checklist label")
    checked: bool = Field(default=False, description="Completion state")
    children: list["Item"] = Field(default_factory=list)
    notes: list[str] = Field(
        default_factory=list,
        description="Raw prose lines following the item line, line endings included",
    )
    layout: ItemLayout = Field(default_factory=ItemLayout)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> Iterator["Item"]:
        """Yield this item and every descendant in document order"""
        yield self
        for child in self.children:
            yield from child.walk()

    def checkbox(self) -> str | None:
        """Character to render inside the checkbox, None for no checkbox"""
        mark = self.layout.mark
        if self.checked:
            return mark if mark in CHECKED_MARKS else "x"
        if mark is None:
            return None
        return " "

    def render_line(self) -> str:
        layout = self.layout
        box = self.checkbox()
        prefix = f"{layout.indent}{layout.bullet}{layout.spacing}"
        if box is not None:
            prefix += f"[{box}]{layout.box_spacing}"
        return f"{prefix}{self.text}{layout.line_ending}"

    def render(self) -> str:
        parts = [self.render_line(), *self.notes]
        parts.extend(child.render() for child in self.children)
        return "".join(parts)


class Section(BaseModel):
    """Named grouping of items introduced by a heading line"""

    title: str = Field(default="", description="Heading text, empty for the implicit section")
    level: int = Field(default=0, description="Heading level 1-6, 0 for the implicit section")
    heading: str | None = Field(
        default=None,
        description="Raw heading line without its line ending, None when implicit",
    )
    line_ending: str = Field(default="\n")
    notes: list[str] = Field(default_factory=list)
    items: list[Item] = Field(default_factory=list)

    @property
    def is_implicit(self) -> bool:
        return self.heading is None

    def walk(self) -> Iterator[Item]:
        for item in self.items:
            yield from item.walk()

    def render(self) -> str:
        parts = []
        if self.heading is not None:
            parts.append(f"{self.heading}{self.line_ending}")
        parts.extend(self.notes)
        parts.extend(item.render() for item in self.items)
        return "".join(parts)


class ChecklistDocument(BaseModel):
    """All sections and items loaded from one checklist text"""

    preamble: list[str] = Field(
        default_factory=list,
        description="Lines before the first section or item",
    )
    sections: list[Section] = Field(default_factory=list)

    def walk(self) -> Iterator[Item]:
        for section in self.sections:
            yield from section.walk()

    def render(self) -> str:
        return "".join(self.preamble) + "".join(
            section.render() for section in self.sections
        )


def format_path(path: ItemPath) -> str:
    """Render an item path as dotted text, e.g. (0, 2, 1) -> '0.2.1'"""
    return ".".join(str(part) for part in path)


def parse_path(raw: str | ItemPath) -> ItemPath:
    """Parse dotted text into an item path; tuples and lists pass through

    Raises:
        InvalidPathError: If the text is not dot-separated integers
    """
    if isinstance(raw, (tuple, list)):
        parts = list(raw)
        text = format_path(raw)
    else:
        parts = raw.strip().split(".")
        text = raw

    try:
        return tuple(int(part) for part in parts)
    except (TypeError, ValueError) as e:
        raise InvalidPathError(text) from e
