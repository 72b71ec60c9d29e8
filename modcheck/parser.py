"""
Checklist Parser

Parses Markdown checklist text into sections and items. The grammar is
permissive: any line that is not a heading or a list item is kept verbatim
as notes on whatever came before it, so parsing never fails.
"""

import re

from modcheck.types import ChecklistDocument, Item, ItemLayout, Section
from modcheck.utils.logging import get_logger

logger = get_logger(__name__)

__all__ = ["ChecklistParser", "parse_checklist", "split_lines"]

DEFAULT_TAB_SIZE = 4

_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")

_HEADING_RE = re.compile(r"^ {0,3}(?P<hashes>#{1,6})(?=[ \t]|$)(?P<rest>.*)$")
_CLOSING_HASHES_RE = re.compile(r"(?:^|[ \t]+)#+[ \t]*$")

_ITEM_RE = re.compile(
    r"^(?P<indent>[ \t]*)"
    r"(?P<bullet>[-*+]|\d{1,9}[.)])"
    r"(?P<spacing>[ \t]+)"
    r"(?:\[(?P<mark>[ xX])\](?P<box_spacing>[ \t]+|$))?"
    r"(?P<text>.*)$"
)

_THEMATIC_BREAK_RE = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")

_FENCE_RE = re.compile(r"^[ \t]*(?P<fence>`{3,}|~{3,})")


def split_lines(text: str) -> list[tuple[str, str]]:
    """Split text into (body, line_ending) pairs without losing any character"""
    lines = []
    for line in _LINE_RE.findall(text):
        if line.endswith("\r\n"):
            lines.append((line[:-2], "\r\n"))
        elif line.endswith("\n"):
            lines.append((line[:-1], "\n"))
        else:
            lines.append((line, ""))
    return lines


class ChecklistParser:
    """Line-oriented parser for Markdown checklists"""

    def __init__(self, tab_size: int = DEFAULT_TAB_SIZE):
        self.tab_size = tab_size
        self._reset()

    def _reset(self) -> None:
        self.document = ChecklistDocument()
        self._section: Section | None = None
        self._open_items: list[tuple[int, Item]] = []
        self._notes: list[str] = self.document.preamble
        self._fence: str | None = None

    def parse(self, text: str) -> ChecklistDocument:
        """Parse checklist text into a new document

        Args:
            text: Markdown source

        Returns:
            The parsed document. Unrecognized lines are attached as notes.
        """
        self._reset()
        for body, line_ending in split_lines(text):
            self._feed(body, line_ending)

        document = self.document
        logger.debug(
            "Parsed checklist",
            sections=len(document.sections),
            items=sum(1 for _ in document.walk()),
        )
        return document

    def _feed(self, body: str, line_ending: str) -> None:
        if self._in_fence(body):
            self._notes.append(body + line_ending)
            return

        heading = _HEADING_RE.match(body)
        if heading:
            self._start_section(body, line_ending, heading)
            return

        if _THEMATIC_BREAK_RE.match(body):
            self._notes.append(body + line_ending)
            return

        item = _ITEM_RE.match(body)
        if item:
            self._add_item(item, line_ending)
            return

        self._notes.append(body + line_ending)

    def _in_fence(self, body: str) -> bool:
        """Track fenced code blocks; True while the line belongs to one"""
        match = _FENCE_RE.match(body)
        if self._fence is None:
            if match:
                self._fence = match.group("fence")
                return True
            return False

        if match:
            fence = match.group("fence")
            closes = (
                fence[0] == self._fence[0]
                and len(fence) >= len(self._fence)
                and not body.strip()[len(fence) :].strip()
            )
            if closes:
                self._fence = None
        return True

    def _start_section(self, body: str, line_ending: str, match: re.Match) -> None:
        title = _CLOSING_HASHES_RE.sub("", match.group("rest").strip()).strip()
        section = Section(
            title=title,
            level=len(match.group("hashes")),
            heading=body,
            line_ending=line_ending,
        )
        self.document.sections.append(section)
        self._section = section
        self._open_items = []
        self._notes = section.notes

    def _add_item(self, match: re.Match, line_ending: str) -> None:
        if self._section is None:
            logger.debug("List item before first heading, using implicit section")
            self._section = Section()
            self.document.sections.append(self._section)

        mark = match.group("mark")
        item = Item(
            text=match.group("text"),
            checked=mark is not None and mark != " ",
            layout=ItemLayout(
                indent=match.group("indent"),
                bullet=match.group("bullet"),
                spacing=match.group("spacing"),
                mark=mark,
                box_spacing=match.group("box_spacing") if mark is not None else " ",
                line_ending=line_ending,
            ),
        )

        width = item.layout.indent_width(self.tab_size)
        while self._open_items and self._open_items[-1][0] >= width:
            self._open_items.pop()

        if self._open_items:
            self._open_items[-1][1].children.append(item)
        else:
            self._section.items.append(item)

        self._open_items.append((width, item))
        self._notes = item.notes


def parse_checklist(text: str, tab_size: int = DEFAULT_TAB_SIZE) -> ChecklistDocument:
    """Parse Markdown checklist text, see ChecklistParser"""
    return ChecklistParser(tab_size=tab_size).parse(text)
