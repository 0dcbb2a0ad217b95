"""Top-level package for Gleaner.

This package turns text extracted from uploaded documents (e-reader exports,
outlines, prose, bulleted lists) into reviewable highlight candidates. The
segmentation entry points are `extract_highlights` and `detect_format`; the
end-to-end orchestration entry point is `HighlightPipeline`.
"""

from .pipeline import HighlightPipeline
from .text.format_detection import detect_format
from .text.strategies import extract_highlights

__all__ = ["HighlightPipeline", "detect_format", "extract_highlights", "__version__"]

__version__ = "0.1.0"
