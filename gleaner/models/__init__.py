"""Shared typed data models for Gleaner.

This package contains dataclasses used across modules to avoid cross-module
coupling and circular imports.
"""

from .datatypes import (
    DEFAULT_CATEGORY,
    Attribution,
    ExtractionResult,
    Highlight,
    HighlightCandidate,
    PageText,
    SegmentationResult,
)

__all__ = [
    "DEFAULT_CATEGORY",
    "Attribution",
    "ExtractionResult",
    "Highlight",
    "HighlightCandidate",
    "PageText",
    "SegmentationResult",
]
