"""Compiled pattern constants shared by format detection and segmentation.

All patterns are built once at import time and never mutated.
"""

from __future__ import annotations

import re

# "5 benefits of meditation", "Health Benefits of Tea:", "2. Seven benefits of sleep"
BENEFITS_HEADING_RE = re.compile(
    r"^[ \t]*(?:\d+[.)][ \t]+)?(?:\d+|[A-Za-z]+)[ \t]+benefits[ \t]+of[ \t]+[^\n.!?]{1,60}$",
    re.IGNORECASE | re.MULTILINE,
)

KINDLE_PAGE_MARKER_RE = re.compile(
    r"Highlight\s*\(\s*\w+\s*\)\s*\|\s*Page\s+\d+",
    re.IGNORECASE,
)
KINDLE_LOCATION_MARKER_RE = re.compile(
    r"Highlight\s*\(\s*\w+\s*\)\s*\|\s*Location\s+\d+",
    re.IGNORECASE,
)
KINDLE_ANY_MARKER_RE = re.compile(
    r"Highlight\s*\(\s*\w+\s*\)(?:\s*\|\s*(?:Page|Location)\s+\d+)?",
    re.IGNORECASE,
)
HIGHLIGHT_COUNT_HEADER_RE = re.compile(
    r"(?P<count>\d+)\s+Highlights?\s*\|\s*\w+\s*\(\s*\d+\s*\)",
    re.IGNORECASE,
)

HORIZONTAL_RULE_RE = re.compile(r"^[ \t]*([-_=–—])\1{2,}[ \t]*$", re.MULTILINE)

NUMBERED_SECTION_LINE_RE = re.compile(r"^\d+\.[ \t]+\S", re.MULTILINE)
BULLET_LINE_RE = re.compile(r"^[ \t]*(?:[•*\-]|\d+\.)[ \t]+\S", re.MULTILINE)

TOP_LEVEL_ITEM_RE = re.compile(r"^(?P<indent>[ \t]*)(?P<number>\d+)\.[ \t]+(?P<body>\S.*)$")
LETTERED_ITEM_RE = re.compile(r"^[ \t]*[A-Za-z][.)][ \t]+\S")
ROMAN_ITEM_RE = re.compile(r"^[ \t]*(?:[ivxlcdm]+|[IVXLCDM]+)[.)][ \t]+\S")
BULLET_ITEM_RE = re.compile(r"^[ \t]*[•◦▪‣·●○*\-–][ \t]+\S")
LIST_CONTINUATION_RE = re.compile(r"^(?:\d+[.)]|[•◦▪·●*\-–])[ \t]+\S")

PARAGRAPH_BREAK_RE = re.compile(r"\n[ \t]*\n")

SENTENCE_BOUNDARY_RE = re.compile(r"(?<=[.!?])\s+(?=[A-Z])")
TERMINAL_PUNCTUATION_RE = re.compile(r"[.!?][\"')\]”’]*$")
EMBEDDED_SENTENCE_RE = re.compile(r"[A-Z][^.!?]*[.!?]")
COMPLETE_SENTENCE_RE = re.compile(r"^[\"'“(]?[A-Z][^\n]*[.!?][\"')”’]*$")

CAPITALIZED_WORDS_RE = re.compile(r"^[A-Z0-9][\w'’&:-]*(?:\s+(?:[A-Z0-9][\w'’&:-]*|&))*$")
SENTENCE_PUNCTUATION_RE = re.compile(r"[.!?,;]")
PAGE_SECTION_MARKER_RE = re.compile(
    r"^(?:page|chapter|section|part)\s+(?:\d+|[ivxlcdm]+)\b(?:\s+of\s+\d+)?"
    r"(?:\s*[:.\-–—]\s*[^\n.!?]{0,60})?$",
    re.IGNORECASE,
)

STRUCTURAL_TITLES = frozenset(
    {
        "introduction",
        "conclusion",
        "preface",
        "foreword",
        "acknowledgements",
        "references",
        "bibliography",
        "index",
        "glossary",
        "appendix",
    }
)

LEADING_METADATA_CUES = ("Kindle", "by ")
