"""Unit tests for text normalization and diagnostic format detection."""

from __future__ import annotations

from gleaner.models.datatypes import PageText
from gleaner.text.format_detection import GENERAL_TEXT_LABEL, FormatDetector, detect_format
from gleaner.text.normalizer import TextNormalizer


def test_normalizer_converts_line_endings_and_handles_empty_input() -> None:
    normalizer = TextNormalizer()

    assert normalizer.normalize("") == ""
    assert normalizer.normalize("one\r\ntwo\rthree\n") == "one\ntwo\nthree\n"


def test_normalizer_collapses_horizontal_whitespace_but_keeps_lines() -> None:
    normalizer = TextNormalizer()

    collapsed = normalizer.collapse_horizontal("alpha \t  beta   \r\n\tgamma  delta")

    assert collapsed == "alpha beta\n gamma delta"


def test_normalizer_collapse_all_joins_lines() -> None:
    normalizer = TextNormalizer()

    assert normalizer.collapse_all("  first line\n\nsecond   line \n") == "first line second line"


def test_normalizer_joins_pages_in_page_order_with_blank_line() -> None:
    normalizer = TextNormalizer()
    pages = [PageText(page_number=2, text="Second page"), PageText(page_number=1, text="First")]

    assert normalizer.join_pages(pages) == "First\n\nSecond page"


def test_detect_format_returns_none_for_empty_text() -> None:
    assert detect_format("") is None
    assert detect_format(" \n\t ") is None


def test_detect_format_labels_kindle_page_export(kindle_page_text: str) -> None:
    assert detect_format(kindle_page_text) == "Kindle Notes (Page Format)"


def test_detect_format_labels_kindle_location_export(kindle_location_text: str) -> None:
    assert detect_format(kindle_location_text) == "Kindle Notes (Location Format)"


def test_detect_format_labels_highlight_count_header() -> None:
    text = "My Notebook\n73 Highlights | Yellow (73)\n\nSome passage text follows here."

    assert detect_format(text) == "73 Highlights Document"


def test_detect_format_prefers_benefits_sections_over_bullets(benefits_text: str) -> None:
    assert detect_format(benefits_text) == "Structured Document with Benefits Sections"


def test_detect_format_requires_two_numbered_lines_for_numbered_sections() -> None:
    assert (
        detect_format("1. First point\n2. Second point")
        == "Structured Document with Numbered Sections"
    )
    assert detect_format("1. Only one numbered line\nand prose") == "Bullet Point Format"


def test_detect_format_labels_bullets_and_general_text() -> None:
    assert detect_format("• first item\n• second item") == "Bullet Point Format"
    assert detect_format("- dash item") == "Bullet Point Format"
    assert detect_format("Just a sentence of prose.") == GENERAL_TEXT_LABEL


def test_numbered_sections_outrank_kindle_markers() -> None:
    text = "1. Intro\n2. Body\nHighlight (Pink) | Page 3\nSome quote text."

    assert FormatDetector().detect(text) == "Structured Document with Numbered Sections"
