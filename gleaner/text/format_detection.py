"""Diagnostic document-format detection.

Responsibilities:
- Run an ordered battery of independent layout tests over document text.
- Return the label of the first matching test for display to the user.

The label is informational only and never selects a segmentation strategy, so
a document may be labeled with one format while a different strategy performs
the split.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .normalizer import TextNormalizer
from .patterns import (
    BENEFITS_HEADING_RE,
    BULLET_LINE_RE,
    HIGHLIGHT_COUNT_HEADER_RE,
    KINDLE_LOCATION_MARKER_RE,
    KINDLE_PAGE_MARKER_RE,
    NUMBERED_SECTION_LINE_RE,
)

GENERAL_TEXT_LABEL = "General Text Format"

_MIN_REPEATED_HEADINGS = 2
_MIN_NUMBERED_SECTIONS = 2


@dataclass(frozen=True, slots=True)
class FormatCheck:
    """One detection test and the label it produces on a match."""

    name: str
    label_for: Callable[[str], str | None]


def _benefits_sections(text: str) -> str | None:
    if len(BENEFITS_HEADING_RE.findall(text)) >= _MIN_REPEATED_HEADINGS:
        return "Structured Document with Benefits Sections"
    return None


def _numbered_sections(text: str) -> str | None:
    if len(NUMBERED_SECTION_LINE_RE.findall(text)) >= _MIN_NUMBERED_SECTIONS:
        return "Structured Document with Numbered Sections"
    return None


def _kindle_page_notes(text: str) -> str | None:
    if KINDLE_PAGE_MARKER_RE.search(text):
        return "Kindle Notes (Page Format)"
    return None


def _kindle_location_notes(text: str) -> str | None:
    if KINDLE_LOCATION_MARKER_RE.search(text):
        return "Kindle Notes (Location Format)"
    return None


def _highlight_count_header(text: str) -> str | None:
    match = HIGHLIGHT_COUNT_HEADER_RE.search(text)
    if match is None:
        return None
    return f"{match.group('count')} Highlights Document"


def _bullet_points(text: str) -> str | None:
    if BULLET_LINE_RE.search(text):
        return "Bullet Point Format"
    return None


DEFAULT_CHECKS: tuple[FormatCheck, ...] = (
    FormatCheck("benefits_sections", _benefits_sections),
    FormatCheck("numbered_sections", _numbered_sections),
    FormatCheck("kindle_page", _kindle_page_notes),
    FormatCheck("kindle_location", _kindle_location_notes),
    FormatCheck("highlight_count", _highlight_count_header),
    FormatCheck("bullet_points", _bullet_points),
)


class FormatDetector:
    """Infer a human-readable layout label for document text."""

    def __init__(
        self,
        checks: tuple[FormatCheck, ...] = DEFAULT_CHECKS,
        normalizer: TextNormalizer | None = None,
    ) -> None:
        """Initialize with an ordered check battery."""

        self.checks = checks
        self._normalizer = normalizer or TextNormalizer()

    def detect(self, text: str) -> str | None:
        """Return the first matching format label.

        Returns `None` for empty or whitespace-only text and the general text
        label when no specific layout test matches.
        """

        normalized = self._normalizer.collapse_horizontal(text)
        if not normalized.strip():
            return None
        for check in self.checks:
            label = check.label_for(normalized)
            if label is not None:
                return label
        return GENERAL_TEXT_LABEL


def detect_format(text: str) -> str | None:
    """Return the diagnostic format label for document text."""

    return FormatDetector().detect(text)
