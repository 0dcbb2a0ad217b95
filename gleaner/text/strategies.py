"""Ordered segmentation strategies for highlight extraction.

Responsibilities:
- Split document text into highlight passages with competing layout heuristics.
- Run the strategies in fixed priority order, stopping at the first one that
  produces at least one passage.

Strategies never raise for unsuitable input: an inapplicable strategy returns
an empty list and the chain moves on. Outputs are never merged across
strategies.
"""

from __future__ import annotations

import re
from typing import Protocol, Sequence

from ..models.datatypes import SegmentationResult
from .metadata import (
    drop_leading_metadata,
    is_metadata_segment,
    is_section_heading,
    is_structural_marker,
    strip_edge_metadata_lines,
)
from .normalizer import TextNormalizer
from .outline import group_outline
from .patterns import (
    BENEFITS_HEADING_RE,
    COMPLETE_SENTENCE_RE,
    EMBEDDED_SENTENCE_RE,
    HIGHLIGHT_COUNT_HEADER_RE,
    HORIZONTAL_RULE_RE,
    KINDLE_ANY_MARKER_RE,
    KINDLE_LOCATION_MARKER_RE,
    KINDLE_PAGE_MARKER_RE,
    LIST_CONTINUATION_RE,
    PARAGRAPH_BREAK_RE,
    SENTENCE_BOUNDARY_RE,
    TERMINAL_PUNCTUATION_RE,
)

SECTION_MIN_CHARS = 20
MARKER_MIN_CHARS = 15
RULE_MIN_CHARS = 20
PARAGRAPH_MIN_CHARS = 15
SENTENCE_CHUNK_MIN_CHARS = 15
SENTENCES_PER_CHUNK = 3
LONE_PARAGRAPH_MAX_DOCUMENT_CHARS = 200


class SegmentationStrategy(Protocol):
    """Protocol for one text segmentation heuristic."""

    name: str

    def split(self, text: str) -> list[str]:
        """Return ordered trimmed passages, or an empty list when not applicable."""


class SectionHeaderStrategy:
    """Split listicle documents on repeated "benefits of" headings.

    Each heading travels with its trailing body so numbered sub-points are not
    sliced into fragments by a later strategy.
    """

    name = "section_headers"

    def __init__(self, normalizer: TextNormalizer) -> None:
        self._normalizer = normalizer

    def split(self, text: str) -> list[str]:
        """Return one passage per heading span, plus a substantial preamble."""

        collapsed = self._normalizer.collapse_horizontal(text)
        matches = list(BENEFITS_HEADING_RE.finditer(collapsed))
        if len(matches) < 2:
            return []

        segments: list[str] = []
        preamble = strip_edge_metadata_lines(collapsed[: matches[0].start()])
        if len(preamble) > SECTION_MIN_CHARS and not is_metadata_segment(preamble):
            segments.append(preamble)

        for index, match in enumerate(matches):
            end = matches[index + 1].start() if index + 1 < len(matches) else len(collapsed)
            span = strip_edge_metadata_lines(
                collapsed[match.start() : end], leading=False, trailing=True
            )
            if is_metadata_segment(span):
                continue
            if len(span) > SECTION_MIN_CHARS:
                segments.append(span)
        return segments


class MarkerDelimitedStrategy:
    """Split e-reader exports on their per-highlight markers.

    The marker variant is chosen in detection order: page markers, then
    location markers, then an aggregate `<N> Highlights | <color> (<N>)` header
    (in which case any highlight marker delimits passages and the segment
    holding the header is always dropped).
    """

    name = "kindle_markers"

    def __init__(self, normalizer: TextNormalizer) -> None:
        self._normalizer = normalizer

    def split(self, text: str) -> list[str]:
        """Return the passages between e-reader highlight markers."""

        collapsed = self._normalizer.collapse_horizontal(text)
        if KINDLE_PAGE_MARKER_RE.search(collapsed):
            segments = drop_leading_metadata(KINDLE_PAGE_MARKER_RE.split(collapsed))
        elif KINDLE_LOCATION_MARKER_RE.search(collapsed):
            segments = drop_leading_metadata(KINDLE_LOCATION_MARKER_RE.split(collapsed))
        elif HIGHLIGHT_COUNT_HEADER_RE.search(collapsed):
            segments = KINDLE_ANY_MARKER_RE.split(collapsed)[1:]
        else:
            return []

        passages: list[str] = []
        for segment in segments:
            trimmed = segment.strip()
            if len(trimmed) > MARKER_MIN_CHARS or _is_short_complete_sentence(trimmed):
                passages.append(trimmed)
        return passages


class HorizontalRuleStrategy:
    """Split documents whose passages are separated by `---`-style rule lines."""

    name = "horizontal_rules"

    def __init__(self, normalizer: TextNormalizer) -> None:
        self._normalizer = normalizer

    def split(self, text: str) -> list[str]:
        """Return the passages between rule lines, dropping a leading title block."""

        normalized = self._normalizer.normalize(text)
        if not HORIZONTAL_RULE_RE.search(normalized):
            return []

        pieces = _split_on_matches(HORIZONTAL_RULE_RE, normalized)
        passages: list[str] = []
        for segment in drop_leading_metadata(pieces):
            trimmed = segment.strip()
            if len(trimmed) > RULE_MIN_CHARS:
                passages.append(trimmed)
        return passages


class HierarchicalOutlineStrategy:
    """Group numbered outlines so each point travels with its sub-points."""

    name = "hierarchical_outline"

    def __init__(self, normalizer: TextNormalizer) -> None:
        self._normalizer = normalizer

    def split(self, text: str) -> list[str]:
        """Return rendered outline items, or nothing when fewer than two are found."""

        items = group_outline(self._normalizer.normalize(text))
        if len(items) < 2:
            return []

        passages: list[str] = []
        for item in items:
            if is_structural_marker(item.body):
                continue
            rendered = item.render()
            if rendered:
                passages.append(rendered)
        return passages


class ParagraphStrategy:
    """Split on blank-line paragraphs, merging held headings with list continuations."""

    name = "paragraphs"

    def __init__(self, normalizer: TextNormalizer) -> None:
        self._normalizer = normalizer

    def split(self, text: str) -> list[str]:
        """Return blank-line separated paragraphs with metadata lines removed."""

        collapsed = self._normalizer.collapse_horizontal(text)
        passages: list[str] = []
        held_heading: str | None = None

        for raw_paragraph in PARAGRAPH_BREAK_RE.split(collapsed):
            paragraph = strip_edge_metadata_lines(raw_paragraph)
            if not paragraph:
                continue
            if is_section_heading(paragraph):
                held_heading = paragraph
                continue
            if held_heading is not None and LIST_CONTINUATION_RE.match(paragraph):
                passages.append(f"{held_heading}\n{paragraph}")
                held_heading = None
                continue
            held_heading = None
            if is_metadata_segment(paragraph):
                continue
            if len(paragraph) > PARAGRAPH_MIN_CHARS:
                passages.append(paragraph)

        if len(passages) <= 1 and len(collapsed.strip()) > LONE_PARAGRAPH_MAX_DOCUMENT_CHARS:
            return []
        return passages


class SentenceChunkStrategy:
    """Terminal fallback grouping repaired sentences into fixed-size chunks."""

    name = "sentence_chunks"

    def __init__(self, normalizer: TextNormalizer) -> None:
        self._normalizer = normalizer

    def split(self, text: str) -> list[str]:
        """Return chunks of consecutive sentences, falling back to the whole text."""

        collapsed = self._normalizer.collapse_all(text)
        if not collapsed:
            return []

        sentences = self._repair_fragments(
            [piece for piece in SENTENCE_BOUNDARY_RE.split(collapsed) if piece]
        )
        passages: list[str] = []
        for start in range(0, len(sentences), SENTENCES_PER_CHUNK):
            chunk = " ".join(sentences[start : start + SENTENCES_PER_CHUNK]).strip()
            if len(chunk) <= SENTENCE_CHUNK_MIN_CHARS:
                continue
            passages.append(self._trim_to_sentence_start(chunk))

        if not passages and len(collapsed) > SENTENCE_CHUNK_MIN_CHARS:
            return [collapsed]
        return passages

    def _repair_fragments(self, pieces: list[str]) -> list[str]:
        """Append lowercase-initial fragments to the open accumulator."""

        sentences: list[str] = []
        accumulator = ""
        for piece in pieces:
            if piece[:1].islower() and not TERMINAL_PUNCTUATION_RE.search(accumulator):
                accumulator = f"{accumulator} {piece}"
                continue
            if accumulator.strip():
                sentences.append(accumulator.strip())
            accumulator = piece
        if accumulator.strip():
            sentences.append(accumulator.strip())
        return sentences

    def _trim_to_sentence_start(self, chunk: str) -> str:
        """Trim a chunk that starts mid-sentence to its first complete sentence."""

        if chunk[:1].isupper():
            return chunk
        match = EMBEDDED_SENTENCE_RE.search(chunk)
        if match is not None:
            sentence = match.group(0).strip()
            if len(sentence) > SENTENCE_CHUNK_MIN_CHARS:
                return sentence
        return chunk


def _is_short_complete_sentence(segment: str) -> bool:
    """Return whether a segment reads as exactly one complete sentence."""

    if not segment or "\n" in segment:
        return False
    return COMPLETE_SENTENCE_RE.fullmatch(segment) is not None


def _split_on_matches(pattern: re.Pattern[str], text: str) -> list[str]:
    """Split on whole pattern matches without emitting captured groups."""

    pieces: list[str] = []
    position = 0
    for match in pattern.finditer(text):
        pieces.append(text[position : match.start()])
        position = match.end()
    pieces.append(text[position:])
    return pieces


class StrategyChain:
    """Run segmentation strategies in priority order with first-success semantics."""

    def __init__(
        self,
        strategies: Sequence[SegmentationStrategy] | None = None,
        normalizer: TextNormalizer | None = None,
    ) -> None:
        """Initialize with custom strategies or the default priority order."""

        self._normalizer = normalizer or TextNormalizer()
        self.strategies: list[SegmentationStrategy] = list(strategies) if strategies else [
            SectionHeaderStrategy(self._normalizer),
            MarkerDelimitedStrategy(self._normalizer),
            HorizontalRuleStrategy(self._normalizer),
            HierarchicalOutlineStrategy(self._normalizer),
            ParagraphStrategy(self._normalizer),
            SentenceChunkStrategy(self._normalizer),
        ]

    def run(self, text: str) -> SegmentationResult:
        """Return the winning strategy name and its passages.

        Empty or whitespace-only input yields a result with no strategy and
        no segments.
        """

        normalized = self._normalizer.normalize(text)
        if not normalized.strip():
            return SegmentationResult(strategy=None)

        for strategy in self.strategies:
            segments = strategy.split(normalized)
            if segments:
                return SegmentationResult(strategy=strategy.name, segments=tuple(segments))
        return SegmentationResult(strategy=None)

    def extract(self, text: str) -> list[str]:
        """Return the ordered passages of the winning strategy."""

        return list(self.run(text).segments)


def extract_highlights(text: str) -> list[str]:
    """Segment document text into ordered highlight passages."""

    return StrategyChain().extract(text)
