"""Input/output collaborators for Gleaner.

This package contains document page-text extraction and highlight storage
used around the segmentation core.
"""

from .document_text_extractor import DocumentExtractionError, DocumentTextExtractor
from .highlight_store import HighlightStore

__all__ = ["DocumentExtractionError", "DocumentTextExtractor", "HighlightStore"]
