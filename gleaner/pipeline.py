"""Highlight extraction orchestration for Gleaner.

Responsibilities:
- Define the stage order for turning one uploaded document into candidates.
- Map empty-document, no-highlight and extraction failures to stage errors.
- Hand confirmed candidates to the persistence collaborator one at a time.

Key types:
- `HighlightPipeline`: orchestration facade.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from .errors import EmptyDocumentError, NoHighlightsError, PipelineStageError
from .io.document_text_extractor import DocumentTextExtractor
from .io.highlight_store import HighlightStore
from .models.datatypes import (
    Attribution,
    ExtractionResult,
    Highlight,
    PageText,
    SegmentationResult,
)
from .telemetry.logger import RunLogger
from .text.candidates import CandidateBuilder, CandidateList
from .text.format_detection import FormatDetector
from .text.normalizer import TextNormalizer
from .text.strategies import StrategyChain

_StageResult = TypeVar("_StageResult")


class HighlightPipeline:
    """Run extraction, detection, segmentation and confirmation stages."""

    def __init__(
        self,
        extractor: DocumentTextExtractor | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        """Initialize stage collaborators and optional runtime logging."""

        self._extractor = extractor or DocumentTextExtractor()
        self._run_logger = run_logger
        self._normalizer = TextNormalizer()
        self._detector = FormatDetector(normalizer=self._normalizer)
        self._chain = StrategyChain(normalizer=self._normalizer)
        self._builder = CandidateBuilder()

    def extract(self, input_path: Path) -> ExtractionResult:
        """Extract, detect and segment one document into review candidates."""

        pages = self._run_stage("extract", lambda: self._extract_pages(input_path))
        text = self._normalizer.join_pages(pages)
        return self._analyze(
            text,
            source_label=str(input_path),
            source_path=input_path,
            page_count=len(pages),
        )

    def detect(self, input_path: Path) -> str | None:
        """Extract one document and return only its diagnostic format label."""

        pages = self._run_stage("extract", lambda: self._extract_pages(input_path))
        text = self._normalizer.join_pages(pages)
        return self._run_stage("detect", lambda: self._detector.detect(text))

    def analyze_text(self, text: str, source_label: str = "<text>") -> ExtractionResult:
        """Detect and segment already-extracted document text."""

        return self._analyze(text, source_label=source_label, source_path=None, page_count=1)

    def confirm(
        self,
        candidates: CandidateList,
        attribution: Attribution,
        store: HighlightStore,
    ) -> list[Highlight]:
        """Persist every selected candidate with the batch attribution."""

        selected = candidates.selected()
        if not selected:
            raise PipelineStageError(
                stage="confirm",
                detail="No highlights selected to save.",
                hint="Keep at least one candidate selected before saving.",
            )
        return self._run_stage(
            "confirm",
            lambda: [store.add(candidate.text, attribution) for candidate in selected],
        )

    def _analyze(
        self,
        text: str,
        source_label: str,
        source_path: Path | None,
        page_count: int,
    ) -> ExtractionResult:
        normalized = self._normalizer.normalize(text)
        if not normalized.strip():
            exc = EmptyDocumentError(source_label)
            self._on_stage_failure("extract", exc)
            raise exc

        format_label = self._run_stage("detect", lambda: self._detector.detect(normalized))
        segmentation = self._run_stage("segment", lambda: self._segment(normalized, source_label))
        candidates = self._builder.build(segmentation.segments)
        if self._run_logger is not None:
            self._run_logger.log_stage_complete(
                "candidates",
                strategy=segmentation.strategy,
                count=len(candidates),
            )
        return ExtractionResult(
            source_path=source_path,
            page_count=page_count,
            format_label=format_label,
            strategy=segmentation.strategy,
            candidates=candidates,
        )

    def _extract_pages(self, input_path: Path) -> list[PageText]:
        """Extract ordered page texts from the input document."""

        try:
            return self._extractor.extract_pages(input_path)
        except PipelineStageError:
            raise
        except Exception as exc:
            raise PipelineStageError(
                stage="extract",
                detail=f"Failed to extract text from `{input_path}`: {exc}",
                hint=(
                    "The file might be corrupted or password-protected; verify it opens "
                    "in a document viewer."
                ),
            ) from exc

    def _segment(self, text: str, source_label: str) -> SegmentationResult:
        result = self._chain.run(text)
        if not result.segments:
            raise NoHighlightsError(source_label)
        return result

    def _on_stage_start(self, stage_name: str) -> None:
        if self._run_logger is not None:
            self._run_logger.log_stage_start(stage_name)

    def _on_stage_complete(self, stage_name: str) -> None:
        if self._run_logger is not None:
            self._run_logger.log_stage_complete(stage_name)

    def _on_stage_failure(self, stage_name: str, exc: Exception) -> None:
        """Emit stage-failure event with sanitized exception metadata."""

        if self._run_logger is not None:
            self._run_logger.log_stage_failure(stage_name, type(exc).__name__)

    def _run_stage(
        self,
        stage_name: str,
        action: Callable[[], _StageResult],
    ) -> _StageResult:
        """Run one named stage and emit start/complete/failure telemetry events."""

        self._on_stage_start(stage_name)
        try:
            result = action()
        except Exception as exc:
            self._on_stage_failure(stage_name, exc)
            raise
        self._on_stage_complete(stage_name)
        return result
