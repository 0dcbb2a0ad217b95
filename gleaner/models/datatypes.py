"""Core datatypes shared across Gleaner modules.

Responsibilities:
- Represent records exchanged between extraction, segmentation, review and storage.
- Keep the segmentation core independent from extraction-library objects.

Key types:
- `PageText`, `HighlightCandidate`, `Attribution`, `Highlight`,
  `SegmentationResult`, and `ExtractionResult`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..text.candidates import CandidateList


DEFAULT_CATEGORY = "Book"


@dataclass(frozen=True, slots=True)
class PageText:
    """Plain text extracted from one document page.

    Attributes:
        page_number: 1-based page number in document order.
        text: Extracted page text.
    """

    page_number: int
    text: str


@dataclass(slots=True)
class HighlightCandidate:
    """A provisionally extracted passage pending user confirmation.

    Identity is positional inside its owning `CandidateList`.
    """

    text: str
    selected: bool = True


@dataclass(frozen=True, slots=True)
class Attribution:
    """Author/source/category entered once for a batch of confirmed candidates.

    Attributes:
        author: Author of the source work.
        source: Book, article or other source title.
        category: Free-form category label applied to every highlight in the batch.
    """

    author: str
    source: str
    category: str = DEFAULT_CATEGORY


@dataclass(frozen=True, slots=True)
class Highlight:
    """A persisted highlight.

    Attributes:
        id: Identifier minted by the store.
        text: Highlight passage.
        author: Author of the source work.
        source: Book, article or other source title.
        category: Free-form category label.
        date_added: UTC ISO-8601 timestamp minted by the store.
        favorite: Whether the user marked the highlight as favorite.
    """

    id: str
    text: str
    author: str
    source: str
    category: str
    date_added: str
    favorite: bool = False


@dataclass(frozen=True, slots=True)
class SegmentationResult:
    """Output of one strategy-chain run.

    Attributes:
        strategy: Name of the winning strategy, or `None` when nothing matched.
        segments: Ordered trimmed passages produced by the winning strategy.
    """

    strategy: str | None
    segments: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Result of analyzing one uploaded document."""

    source_path: Path | None
    page_count: int
    format_label: str | None
    strategy: str | None
    candidates: CandidateList
