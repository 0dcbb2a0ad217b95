"""Text normalization, format detection, and highlight segmentation.

This package turns raw extracted document text into ordered highlight
candidates through an ordered chain of layout heuristics.
"""

from .candidates import CandidateBuilder, CandidateList
from .format_detection import FormatDetector, detect_format
from .normalizer import TextNormalizer
from .strategies import (
    HierarchicalOutlineStrategy,
    HorizontalRuleStrategy,
    MarkerDelimitedStrategy,
    ParagraphStrategy,
    SectionHeaderStrategy,
    SentenceChunkStrategy,
    StrategyChain,
    extract_highlights,
)

__all__ = [
    "CandidateBuilder",
    "CandidateList",
    "FormatDetector",
    "TextNormalizer",
    "StrategyChain",
    "SectionHeaderStrategy",
    "MarkerDelimitedStrategy",
    "HorizontalRuleStrategy",
    "HierarchicalOutlineStrategy",
    "ParagraphStrategy",
    "SentenceChunkStrategy",
    "detect_format",
    "extract_highlights",
]
