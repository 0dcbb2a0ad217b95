"""Domain exceptions for pipeline and CLI diagnostics."""

from __future__ import annotations


class PipelineStageError(RuntimeError):
    """Raised when a specific pipeline stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped pipeline error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class EmptyDocumentError(PipelineStageError):
    """Raised when extraction produced no usable text."""

    def __init__(self, source: str) -> None:
        super().__init__(
            stage="extract",
            detail=f"No text found in `{source}`; the document may be a scanned image.",
            hint="Only text-based documents are supported; OCR is not performed.",
        )


class NoHighlightsError(PipelineStageError):
    """Raised when text exists but no strategy identified any highlight."""

    def __init__(self, source: str) -> None:
        super().__init__(
            stage="segment",
            detail=f"Could not identify individual highlights in `{source}`.",
            hint="The document may be too short to split into highlights.",
        )
