"""Unit tests for strategy priority, first-success semantics and chain properties."""

from __future__ import annotations

import pytest

from gleaner.models.datatypes import SegmentationResult
from gleaner.text.format_detection import detect_format
from gleaner.text.strategies import StrategyChain, extract_highlights


class _FixedStrategy:
    def __init__(self, name: str, segments: list[str]) -> None:
        self.name = name
        self._segments = segments
        self.calls = 0

    def split(self, text: str) -> list[str]:
        self.calls += 1
        return list(self._segments)


def test_extract_highlights_groups_outline_scenario() -> None:
    highlights = extract_highlights("1. Point one\n   a. Sub-point\n2. Point two")

    assert len(highlights) == 2
    assert "Point one" in highlights[0]
    assert "Sub-point" in highlights[0]
    assert highlights[1] == "Point two"


def test_extract_highlights_splits_kindle_page_scenario(kindle_page_text: str) -> None:
    assert extract_highlights(kindle_page_text) == ["Quote A.", "Quote B."]
    assert detect_format(kindle_page_text) == "Kindle Notes (Page Format)"


def test_extract_highlights_returns_three_paragraphs(paragraphs_text: str) -> None:
    assert len(extract_highlights(paragraphs_text)) == 3


def test_empty_input_yields_no_highlights_and_no_format() -> None:
    assert extract_highlights("") == []
    assert detect_format("") is None
    assert StrategyChain().run("  \n ") == SegmentationResult(strategy=None)


def test_section_headers_win_over_outline_and_bullets(benefits_text: str) -> None:
    result = StrategyChain().run(benefits_text)

    assert result.strategy == "section_headers"
    assert len(result.segments) == 2
    assert result.segments[0].startswith("5 Benefits of Meditation")


def test_chain_reports_winning_strategy_for_each_layout(
    kindle_location_text: str, paragraphs_text: str, long_prose_text: str
) -> None:
    chain = StrategyChain()

    assert chain.run(kindle_location_text).strategy == "kindle_markers"
    assert chain.run("Notes\n---\nA rule-separated passage of decent size.\n").strategy == (
        "horizontal_rules"
    )
    assert chain.run("1. First point\n2. Second point").strategy == "hierarchical_outline"
    assert chain.run(paragraphs_text).strategy == "paragraphs"
    assert chain.run(long_prose_text).strategy == "sentence_chunks"


def test_chain_stops_at_first_strategy_with_output() -> None:
    empty = _FixedStrategy("empty", [])
    winner = _FixedStrategy("winner", ["first passage"])
    never = _FixedStrategy("never", ["other passage"])

    result = StrategyChain(strategies=[empty, winner, never]).run("some document text")

    assert result == SegmentationResult(strategy="winner", segments=("first passage",))
    assert (empty.calls, winner.calls, never.calls) == (1, 1, 0)


def test_chain_returns_no_strategy_when_every_strategy_declines() -> None:
    result = StrategyChain(strategies=[_FixedStrategy("empty", [])]).run("text")

    assert result.strategy is None
    assert result.segments == ()


def test_format_label_does_not_select_strategy() -> None:
    text = "- first bullet point that is quite long\n\n- second bullet point that is also long"

    assert detect_format(text) == "Bullet Point Format"
    assert StrategyChain().run(text).strategy == "paragraphs"


@pytest.mark.parametrize(
    "fixture_name",
    ["kindle_page_text", "kindle_location_text", "benefits_text", "paragraphs_text", "long_prose_text"],
)
def test_extraction_is_idempotent(request: pytest.FixtureRequest, fixture_name: str) -> None:
    text = request.getfixturevalue(fixture_name)

    assert extract_highlights(text) == extract_highlights(text)


def test_chapter_header_never_survives_as_a_highlight() -> None:
    text = (
        "Chapter 3\n"
        "\n"
        "The river flowed quietly past the sleeping village at dawn.\n"
        "\n"
        "Nobody in the village noticed the stranger arriving that morning."
    )

    highlights = extract_highlights(text)

    assert "Chapter 3" not in highlights
    assert highlights == [
        "The river flowed quietly past the sleeping village at dawn.",
        "Nobody in the village noticed the stranger arriving that morning.",
    ]


def test_non_empty_prose_always_yields_a_highlight() -> None:
    text = "a b c d e f g h i j k l m n o p q r s t u v w x y z " * 12

    highlights = extract_highlights(text)

    assert highlights
    assert all(highlight.strip() for highlight in highlights)


def test_paragraph_and_sentence_outputs_respect_minimum_length(
    paragraphs_text: str, long_prose_text: str
) -> None:
    for text in (paragraphs_text, long_prose_text):
        assert all(len(highlight) > 15 for highlight in extract_highlights(text))
