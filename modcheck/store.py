"""Checklist store: load, query, mutate and serialize a checklist document"""

import json
from collections.abc import Iterator
from pathlib import Path

from modcheck.config import get_settings
from modcheck.errors import NotFoundError
from modcheck.parser import ChecklistParser
from modcheck.types import (
    ChecklistDocument,
    Item,
    ItemPath,
    Progress,
    Section,
    format_path,
    parse_path,
)
from modcheck.utils.logging import get_logger

logger = get_logger(__name__)

__all__ = ["ChecklistStore"]


class ChecklistStore:
    """Holds one checklist document and exposes read/write access to item state

    The store assumes exclusive access: callers sharing a store between threads
    must serialize calls to the mutating methods and to serialize().
    """

    def __init__(self, tab_size: int | None = None):
        """Create an empty store

        Args:
            tab_size: Tab width used to measure indentation. Defaults to the
                MODCHECK_TAB_SIZE setting.
        """
        settings = get_settings().checklist
        self.tab_size = tab_size if tab_size is not None else settings.tab_size
        self.document = ChecklistDocument()
        self.path: Path | None = None

    # ============================================================================
    # Loading and Serialization
    # ============================================================================

    def load(self, text: str) -> ChecklistDocument:
        """Parse text and replace the current document

        Args:
            text: Markdown checklist text

        Returns:
            The newly loaded document
        """
        self.document = ChecklistParser(tab_size=self.tab_size).parse(text)
        return self.document

    def serialize(self) -> str:
        """Render the document back to Markdown, checked state included"""
        return self.document.render()

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export"""
        return self.document.model_dump()

    def to_json(self, indent: int = 2) -> str:
        """Serialize the document model to a JSON string"""
        return json.dumps(self.to_dict(), indent=indent)

    # ============================================================================
    # File I/O Methods
    # ============================================================================

    @classmethod
    def load_file(cls, filepath: str | Path, tab_size: int | None = None) -> "ChecklistStore":
        """Load a checklist from a Markdown file

        Args:
            filepath: Path to the checklist file
            tab_size: Optional tab width override

        Returns:
            Loaded ChecklistStore instance

        Raises:
            FileNotFoundError: If file doesn't exist
            OSError: If file cannot be read
        """
        filepath = Path(filepath)

        # newline="" keeps CRLF endings intact for byte-exact saves
        with open(filepath, encoding="utf-8", newline="") as f:
            content = f.read()

        store = cls(tab_size=tab_size)
        store.load(content)
        store.path = filepath

        progress = store.count_progress()
        logger.info(
            "Loaded checklist",
            path=str(filepath),
            sections=len(store.document.sections),
            checked=progress.checked,
            total=progress.total,
        )
        return store

    def save(self, filepath: str | Path | None = None) -> Path:
        """Write the serialized checklist to a file

        Args:
            filepath: Destination; defaults to the file the store was loaded from

        Returns:
            The path written to

        Raises:
            ValueError: If no path is given and the store was not loaded from a file
            OSError: If file cannot be written
        """
        if filepath is None:
            if self.path is None:
                raise ValueError("No file path given and checklist was not loaded from a file")
            filepath = self.path
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "w", encoding="utf-8", newline="") as f:
            f.write(self.serialize())

        logger.info("Saved checklist", path=str(filepath))
        return filepath

    # ============================================================================
    # Lookup
    # ============================================================================

    def get_section(self, section_index: int) -> Section:
        """Return the section at a zero-based index

        Raises:
            NotFoundError: If the index is out of range
        """
        sections = self.document.sections
        if not 0 <= section_index < len(sections):
            logger.warning("Section not found", section=section_index)
            raise NotFoundError(
                section_index,
                f"No section at index {section_index} ({len(sections)} sections)",
            )
        return sections[section_index]

    def get_item(self, path: str | ItemPath) -> Item:
        """Resolve an item path such as (0, 2, 1) or '0.2.1'

        Raises:
            InvalidPathError: If a textual path cannot be parsed
            NotFoundError: If the path does not resolve to an item
        """
        path = parse_path(path)
        if len(path) < 2:
            raise NotFoundError(path, f"Path {format_path(path)!r} does not name an item")

        try:
            section = self.get_section(path[0])
        except NotFoundError as e:
            raise NotFoundError(path) from e

        children = section.items
        item = None
        for ordinal in path[1:]:
            if not 0 <= ordinal < len(children):
                logger.warning("Item not found", path=format_path(path))
                raise NotFoundError(path, f"No checklist item at path {format_path(path)!r}")
            item = children[ordinal]
            children = item.children
        return item

    def iter_items(self, section_index: int | None = None) -> Iterator[tuple[ItemPath, Item]]:
        """Yield (path, item) pairs in document order"""
        if section_index is None:
            indexed = enumerate(self.document.sections)
        else:
            indexed = [(section_index, self.get_section(section_index))]

        for index, section in indexed:
            yield from self._walk_paths((index,), section.items)

    def _walk_paths(self, prefix: ItemPath, items: list[Item]) -> Iterator[tuple[ItemPath, Item]]:
        for ordinal, item in enumerate(items):
            path = (*prefix, ordinal)
            yield path, item
            yield from self._walk_paths(path, item.children)

    def find_items(self, query: str) -> list[tuple[ItemPath, Item]]:
        """Find items whose label contains the query, ignoring case"""
        needle = query.casefold()
        return [
            (path, item)
            for path, item in self.iter_items()
            if needle in item.text.casefold()
        ]

    # ============================================================================
    # Mutation
    # ============================================================================

    def set_checked(self, path: str | ItemPath, value: bool) -> Item:
        """Set the checked flag of one item

        Parent and child items are left alone. An item without a checkbox
        gains one.

        Raises:
            NotFoundError: If the path does not resolve; nothing is modified
        """
        item = self.get_item(path)
        item.checked = bool(value)
        if item.layout.mark is None:
            item.layout.mark = "x" if value else " "
        logger.debug("Set item state", path=format_path(parse_path(path)), checked=item.checked)
        return item

    def set_section_checked(self, section_index: int, value: bool) -> int:
        """Set every item of one section, nested items included

        Returns:
            Number of items updated
        """
        paths = [path for path, _ in self.iter_items(section_index)]
        for path in paths:
            self.set_checked(path, value)
        return len(paths)

    def reset(self) -> int:
        """Uncheck every checked item

        Returns:
            Number of items that were unchecked
        """
        paths = [path for path, item in self.iter_items() if item.checked]
        for path in paths:
            self.set_checked(path, False)
        logger.debug("Reset checklist", unchecked=len(paths))
        return len(paths)

    # ============================================================================
    # Query Methods
    # ============================================================================

    def count_progress(
        self,
        section_index: int | None = None,
        leaves_only: bool | None = None,
    ) -> Progress:
        """Count checked and total items

        Args:
            section_index: Limit the count to one section; whole document if None
            leaves_only: Count only items without children. Defaults to the
                MODCHECK_LEAVES_ONLY setting.

        Raises:
            NotFoundError: If section_index is out of range
        """
        if leaves_only is None:
            leaves_only = get_settings().checklist.leaves_only

        if section_index is None:
            items = self.document.walk()
        else:
            items = self.get_section(section_index).walk()

        checked = total = 0
        for item in items:
            if leaves_only and not item.is_leaf:
                continue
            total += 1
            if item.checked:
                checked += 1
        return Progress(checked=checked, total=total)

    def is_complete(self) -> bool:
        """Check if every item is checked"""
        progress = self.count_progress()
        return progress.total > 0 and progress.checked == progress.total

    # ============================================================================
    # String representation
    # ============================================================================

    def __len__(self) -> int:
        """Return number of items, nested items included"""
        return sum(1 for _ in self.document.walk())

    def __repr__(self) -> str:
        progress = self.count_progress()
        return (
            f"ChecklistStore(path={str(self.path) if self.path else None!r}, "
            f"sections={len(self.document.sections)}, "
            f"checked={progress.checked}, total={progress.total})"
        )

    def __str__(self) -> str:
        return self.serialize()
