"""Text normalization stage.

Responsibilities:
- Convert line endings to a canonical form before segmentation.
- Provide the whitespace-collapsed views individual strategies read from.

Strategies choose their own view: marker and paragraph splitting read
`collapse_horizontal`, rule and outline splitting read `normalize` (outline
grouping needs indentation), and the sentence fallback reads `collapse_all`.
"""

from __future__ import annotations

import re
from typing import Iterable

from ..models.datatypes import PageText

PAGE_SEPARATOR = "\n\n"

_LINE_ENDING_RE = re.compile(r"\r\n?")
_HORIZONTAL_RUN_RE = re.compile(r"[ \t\f\v\u00a0]+")
_LINE_TAIL_RE = re.compile(r"[ \t]+\n")
_WHITESPACE_RUN_RE = re.compile(r"\s+")


class TextNormalizer:
    """Normalize extracted text into canonical internal representations."""

    def normalize(self, text: str) -> str:
        """Return text with CRLF and bare CR converted to LF."""

        if not text:
            return ""
        return _LINE_ENDING_RE.sub("\n", text)

    def collapse_horizontal(self, text: str) -> str:
        """Collapse horizontal whitespace runs while keeping line breaks."""

        collapsed = _HORIZONTAL_RUN_RE.sub(" ", self.normalize(text))
        return _LINE_TAIL_RE.sub("\n", collapsed)

    def collapse_all(self, text: str) -> str:
        """Collapse every whitespace run, line breaks included, to one space."""

        return _WHITESPACE_RUN_RE.sub(" ", self.normalize(text)).strip()

    def join_pages(self, pages: Iterable[PageText]) -> str:
        """Concatenate page texts in page order separated by a blank line."""

        ordered = sorted(pages, key=lambda page: page.page_number)
        return PAGE_SEPARATOR.join(page.text for page in ordered)
