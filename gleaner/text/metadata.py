"""Metadata and title filtering shared by segmentation strategies.

Responsibilities:
- Classify short structural lines (chapter headers, page markers, titles) as
  non-content metadata.
- Recognize "benefits of"-style section headings.
- Drop probable leading metadata segments from marker- and rule-delimited splits.
"""

from __future__ import annotations

from .patterns import (
    BENEFITS_HEADING_RE,
    CAPITALIZED_WORDS_RE,
    LEADING_METADATA_CUES,
    PAGE_SECTION_MARKER_RE,
    SENTENCE_PUNCTUATION_RE,
    STRUCTURAL_TITLES,
)

_SHORT_TITLE_MAX_CHARS = 40
_LEADING_SEGMENT_MIN_CHARS = 100


def is_metadata_segment(segment: str) -> bool:
    """Return whether a segment is a structural title rather than content.

    A segment is metadata when it is a short capitalized-words-only line without
    sentence punctuation, a `Page|Chapter|Section|Part <number>` marker, or one
    of the closed set of structural titles such as `Introduction`.
    """

    stripped = segment.strip()
    if not stripped:
        return True
    if (
        len(stripped) < _SHORT_TITLE_MAX_CHARS
        and CAPITALIZED_WORDS_RE.fullmatch(stripped)
        and not SENTENCE_PUNCTUATION_RE.search(stripped)
    ):
        return True
    return is_structural_marker(stripped)


def is_structural_marker(segment: str) -> bool:
    """Return whether a segment is a page/chapter marker or a structural title."""

    stripped = segment.strip()
    if PAGE_SECTION_MARKER_RE.fullmatch(stripped):
        return True
    return stripped.lower() in STRUCTURAL_TITLES


def is_section_heading(segment: str) -> bool:
    """Return whether a segment is a single "benefits of"-style heading line."""

    stripped = segment.strip()
    if not stripped or "\n" in stripped:
        return False
    return BENEFITS_HEADING_RE.fullmatch(stripped) is not None


def strip_edge_metadata_lines(
    segment: str, leading: bool = True, trailing: bool = False
) -> str:
    """Remove metadata lines from the requested ends of a multi-line segment."""

    lines = segment.strip().split("\n")
    while leading and len(lines) > 1 and is_metadata_segment(lines[0]):
        lines.pop(0)
    while trailing and len(lines) > 1 and is_metadata_segment(lines[-1]):
        lines.pop()
    return "\n".join(lines).strip()


def looks_like_leading_metadata(segment: str) -> bool:
    """Return whether the first split segment is probably a title/author preamble."""

    if any(cue in segment for cue in LEADING_METADATA_CUES):
        return True
    return len(segment) < _LEADING_SEGMENT_MIN_CHARS


def drop_leading_metadata(segments: list[str]) -> list[str]:
    """Drop the first split segment when it looks like title/author metadata."""

    if segments and looks_like_leading_metadata(segments[0]):
        return segments[1:]
    return list(segments)
