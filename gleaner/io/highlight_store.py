"""Filesystem-backed highlight persistence.

Responsibilities:
- Mint identity and timestamps for confirmed highlight candidates.
- Persist highlights as one deterministic JSON document.
"""

from __future__ import annotations

from dataclasses import asdict, replace
from datetime import datetime, timezone
import json
from pathlib import Path
from typing import Any, Callable
import uuid

from ..models.datatypes import Attribution, Highlight


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class HighlightStore:
    """JSON file store for confirmed highlights."""

    def __init__(
        self,
        path: Path,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], str] | None = None,
    ) -> None:
        """Initialize the store with its JSON file path."""

        self.path = path
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._clock = clock or _utc_timestamp

    def add(self, text: str, attribution: Attribution) -> Highlight:
        """Persist one highlight and return it with minted id and timestamp."""

        highlight = Highlight(
            id=self._id_factory(),
            text=text,
            author=attribution.author,
            source=attribution.source,
            category=attribution.category,
            date_added=self._clock(),
        )
        highlights = self.load_all()
        highlights.append(highlight)
        self._save(highlights)
        return highlight

    def toggle_favorite(self, highlight_id: str) -> Highlight:
        """Flip the `favorite` flag of one stored highlight and persist the change."""

        highlights = self.load_all()
        for position, highlight in enumerate(highlights):
            if highlight.id == highlight_id:
                updated = replace(highlight, favorite=not highlight.favorite)
                highlights[position] = updated
                self._save(highlights)
                return updated
        raise ValueError(f"Highlight `{highlight_id}` not found in store `{self.path}`.")

    def load_all(self) -> list[Highlight]:
        """Load all stored highlights in insertion order."""

        if not self.path.exists():
            return []
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Highlight store `{self.path}` is not valid JSON: {exc}") from exc

        rows = payload.get("highlights") if isinstance(payload, dict) else None
        if not isinstance(rows, list):
            raise ValueError(f"Highlight store `{self.path}` must contain a `highlights` list.")
        return [self._highlight_from_row(row) for row in rows]

    def _save(self, highlights: list[Highlight]) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"highlights": [asdict(highlight) for highlight in highlights]}
        self.path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True),
            encoding="utf-8",
        )
        return self.path

    def _highlight_from_row(self, row: Any) -> Highlight:
        if not isinstance(row, dict):
            raise ValueError(f"Highlight store `{self.path}` contains a non-object row.")
        try:
            return Highlight(
                id=str(row["id"]),
                text=str(row["text"]),
                author=str(row["author"]),
                source=str(row["source"]),
                category=str(row["category"]),
                date_added=str(row["date_added"]),
                favorite=bool(row.get("favorite", False)),
            )
        except KeyError as exc:
            raise ValueError(
                f"Highlight store `{self.path}` row is missing field {exc}."
            ) from exc
