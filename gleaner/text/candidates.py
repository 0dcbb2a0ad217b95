"""Highlight candidate construction and review mutations.

Responsibilities:
- Wrap winning strategy passages 1:1 into selectable candidates.
- Expose the index-addressed toggle/edit operations used during review.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from ..models.datatypes import HighlightCandidate


class CandidateList:
    """Ordered, mutable candidates whose identity is their list position."""

    def __init__(self, candidates: Iterable[HighlightCandidate] = ()) -> None:
        self._items = list(candidates)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[HighlightCandidate]:
        return iter(self._items)

    def __getitem__(self, index: int) -> HighlightCandidate:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CandidateList):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"CandidateList({self._items!r})"

    def toggle(self, index: int) -> HighlightCandidate:
        """Flip the `selected` flag of the candidate at `index`."""

        candidate = self._items[index]
        candidate.selected = not candidate.selected
        return candidate

    def update_text(self, index: int, text: str) -> HighlightCandidate:
        """Replace the text of the candidate at `index` in place."""

        candidate = self._items[index]
        candidate.text = text
        return candidate

    def deselect(self, indices: Iterable[int]) -> None:
        """Clear the `selected` flag for every 0-based index given."""

        for index in indices:
            self._items[index].selected = False

    def selected(self) -> list[HighlightCandidate]:
        """Return selected candidates in list order."""

        return [candidate for candidate in self._items if candidate.selected]

    def texts(self) -> list[str]:
        """Return candidate texts in list order."""

        return [candidate.text for candidate in self._items]


class CandidateBuilder:
    """Build review candidates from segmentation output."""

    def build(self, segments: Iterable[str]) -> CandidateList:
        """Wrap each passage as a selected candidate, preserving order.

        No deduplication or re-validation is performed; the producing strategy
        already enforced its own thresholds.
        """

        return CandidateList(HighlightCandidate(text=segment) for segment in segments)
