"""Indentation-aware grouping of hierarchical numbered outlines.

Responsibilities:
- Find consecutive top-level numbered items (`1.`, `2.`, ...), allowing a
  restart at `1.` as the beginning of a new outline.
- Absorb lettered, roman-numeral and bulleted sub-items plus wrapped
  continuation lines into their parent item.
- Attach a short heading line that immediately precedes an outline's first item.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .metadata import is_metadata_segment, is_structural_marker
from .patterns import (
    BULLET_ITEM_RE,
    LETTERED_ITEM_RE,
    ROMAN_ITEM_RE,
    TERMINAL_PUNCTUATION_RE,
    TOP_LEVEL_ITEM_RE,
)

_HEADING_MAX_CHARS = 80
_TAB_WIDTH = 4


@dataclass(slots=True)
class OutlineItem:
    """One top-level outline point with its absorbed sub-points.

    Attributes:
        number: Number of the top-level marker.
        lines: Rendered lines; the first is the item body without its marker.
        heading: Optional heading line prefixed onto the item.
    """

    number: int
    lines: list[str] = field(default_factory=list)
    heading: str | None = None

    @property
    def body(self) -> str:
        """Return the item text without its heading."""

        return "\n".join(self.lines).strip()

    def render(self) -> str:
        """Return the item text with its heading, if any, on the first line."""

        if self.heading:
            return f"{self.heading}\n{self.body}"
        return self.body

    def absorb(self, line: str) -> None:
        """Append a sub-item line, or join a wrapped continuation onto the last line."""

        stripped = line.strip()
        if is_sub_item(line) or not self.lines:
            self.lines.append(stripped)
            return
        self.lines[-1] = f"{self.lines[-1]} {stripped}"


def indent_width(prefix: str) -> int:
    """Return the display width of leading indentation."""

    return len(prefix.expandtabs(_TAB_WIDTH))


def is_sub_item(line: str) -> bool:
    """Return whether a line opens a lettered, roman-numeral or bulleted sub-item."""

    return bool(
        LETTERED_ITEM_RE.match(line)
        or ROMAN_ITEM_RE.match(line)
        or BULLET_ITEM_RE.match(line)
    )


def is_outline_heading(line: str) -> bool:
    """Return whether a standalone line can serve as an outline heading."""

    stripped = line.strip()
    if not stripped or len(stripped) > _HEADING_MAX_CHARS:
        return False
    if TOP_LEVEL_ITEM_RE.match(stripped) or is_sub_item(stripped):
        return False
    if TERMINAL_PUNCTUATION_RE.search(stripped):
        return False
    return not is_metadata_segment(stripped)


def group_outline(text: str) -> list[OutlineItem]:
    """Group line-preserving text into top-level outline items.

    A numbered line counts as a new top-level item when it is not indented
    deeper than the current outline's first item and its number either follows
    the previous one or restarts at 1. Other numbered lines are treated as
    continuation text. After a blank line, text at top-level indentation that
    does not open a sub-item closes the current item; such loose lines are not
    part of any item but may head the next outline.
    """

    items: list[OutlineItem] = []
    current: OutlineItem | None = None
    top_indent: int | None = None
    last_number = 0
    blank_seen = False
    loose_line: str | None = None

    for line in text.split("\n"):
        if not line.strip():
            blank_seen = True
            continue

        match = TOP_LEVEL_ITEM_RE.match(line)
        if match is not None:
            indent = indent_width(match.group("indent"))
            number = int(match.group("number"))
            in_sequence = number in (1, last_number + 1)
            if current is None:
                is_top_level = top_indent is None or in_sequence
            else:
                is_top_level = top_indent is not None and indent <= top_indent and in_sequence
            if is_top_level:
                opens_outline = top_indent is None or number == 1
                heading = None
                if (
                    opens_outline
                    and current is None
                    and loose_line is not None
                    and is_outline_heading(loose_line)
                ):
                    heading = loose_line.strip()
                if current is not None:
                    items.append(current)
                if opens_outline or current is None:
                    top_indent = indent
                current = OutlineItem(
                    number=number,
                    lines=[match.group("body").strip()],
                    heading=heading,
                )
                last_number = number
                loose_line = None
                blank_seen = False
                continue

        line_indent = indent_width(line[: len(line) - len(line.lstrip())])
        closes_item = (
            current is not None
            and blank_seen
            and top_indent is not None
            and line_indent <= top_indent
            and not is_sub_item(line)
        )
        if current is not None and not closes_item:
            if not is_structural_marker(line):
                current.absorb(line)
        else:
            if current is not None:
                items.append(current)
                current = None
            loose_line = line
        blank_seen = False

    if current is not None:
        items.append(current)
    return items
