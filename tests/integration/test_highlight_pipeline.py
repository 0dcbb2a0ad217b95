"""Integration tests for the end-to-end highlight pipeline."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from gleaner import HighlightPipeline
from gleaner.errors import EmptyDocumentError, NoHighlightsError, PipelineStageError
from gleaner.io.highlight_store import HighlightStore
from gleaner.models.datatypes import Attribution, PageText
from gleaner.telemetry.logger import RunLogger


class _StaticExtractor:
    def __init__(self, pages: list[PageText]) -> None:
        self._pages = pages

    def extract_pages(self, path: Path) -> list[PageText]:
        return list(self._pages)


class _BrokenExtractor:
    def extract_pages(self, path: Path) -> list[PageText]:
        raise RuntimeError("xref table is damaged")


def test_extract_builds_selected_candidates_from_text_file(
    tmp_path: Path, kindle_location_text: str
) -> None:
    path = tmp_path / "export.txt"
    path.write_text(kindle_location_text, encoding="utf-8")

    result = HighlightPipeline().extract(path)

    assert result.source_path == path
    assert result.page_count == 1
    assert result.format_label == "Kindle Notes (Location Format)"
    assert result.strategy == "kindle_markers"
    assert result.candidates.texts() == [
        "The first quote is long enough to keep.",
        "Second quote also stays in the list.",
    ]
    assert all(candidate.selected for candidate in result.candidates)


def test_extract_joins_pages_in_order_before_segmenting() -> None:
    pages = [
        PageText(page_number=2, text="Simplicity is the ultimate sophistication in design."),
        PageText(page_number=1, text="The best way to predict the future is to create it."),
    ]

    result = HighlightPipeline(extractor=_StaticExtractor(pages)).extract(Path("book.pdf"))

    assert result.page_count == 2
    assert result.strategy == "paragraphs"
    assert result.candidates.texts() == [
        "The best way to predict the future is to create it.",
        "Simplicity is the ultimate sophistication in design.",
    ]


def test_empty_document_is_reported_at_extract_stage() -> None:
    pipeline = HighlightPipeline(extractor=_StaticExtractor([PageText(page_number=1, text="  ")]))

    with pytest.raises(EmptyDocumentError) as exc_info:
        pipeline.extract(Path("scan.pdf"))

    assert exc_info.value.stage == "extract"
    assert "scanned image" in exc_info.value.detail


def test_unsegmentable_text_is_reported_at_segment_stage() -> None:
    with pytest.raises(NoHighlightsError) as exc_info:
        HighlightPipeline().analyze_text("Hi.", source_label="tiny.txt")

    assert exc_info.value.stage == "segment"
    assert "tiny.txt" in exc_info.value.detail


def test_extractor_failures_are_wrapped_as_stage_errors() -> None:
    pipeline = HighlightPipeline(extractor=_BrokenExtractor())

    with pytest.raises(PipelineStageError, match="xref table is damaged") as exc_info:
        pipeline.extract(Path("broken.pdf"))

    assert exc_info.value.stage == "extract"


def test_detect_returns_label_only(tmp_path: Path, benefits_text: str) -> None:
    path = tmp_path / "listicle.md"
    path.write_text(benefits_text, encoding="utf-8")

    assert HighlightPipeline().detect(path) == "Structured Document with Benefits Sections"


def test_confirm_persists_only_selected_candidates(tmp_path: Path, paragraphs_text: str) -> None:
    pipeline = HighlightPipeline()
    result = pipeline.analyze_text(paragraphs_text)
    result.candidates.toggle(1)
    result.candidates.update_text(2, "Well done is better than well said.")
    store = HighlightStore(tmp_path / "highlights.json")

    saved = pipeline.confirm(
        result.candidates, Attribution(author="Benjamin Franklin", source="Almanac"), store
    )

    assert [highlight.text for highlight in saved] == [
        "The best way to predict the future is to create it.",
        "Well done is better than well said.",
    ]
    assert store.load_all() == saved
    assert {highlight.category for highlight in saved} == {"Book"}


def test_confirm_rejects_empty_selection(tmp_path: Path, paragraphs_text: str) -> None:
    pipeline = HighlightPipeline()
    result = pipeline.analyze_text(paragraphs_text)
    result.candidates.deselect(range(len(result.candidates)))

    with pytest.raises(PipelineStageError, match="No highlights selected") as exc_info:
        pipeline.confirm(
            result.candidates,
            Attribution(author="A", source="S"),
            HighlightStore(tmp_path / "highlights.json"),
        )

    assert exc_info.value.stage == "confirm"
    assert not (tmp_path / "highlights.json").exists()


def test_run_logger_records_stage_events(paragraphs_text: str) -> None:
    sink = io.StringIO()
    pipeline = HighlightPipeline(run_logger=RunLogger(sink=sink))

    pipeline.analyze_text(paragraphs_text)
    with pytest.raises(NoHighlightsError):
        pipeline.analyze_text("Hi.")

    output = sink.getvalue()
    assert "[phase] level=INFO stage=detect event=start" in output
    assert "[phase] level=INFO stage=candidates event=complete count=3 strategy=paragraphs" in output
    assert "[phase] level=ERROR stage=segment event=failure error_type=NoHighlightsError" in output
