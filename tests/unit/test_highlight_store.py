"""Unit tests for JSON highlight persistence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from gleaner.io.highlight_store import HighlightStore
from gleaner.models.datatypes import Attribution, Highlight


def _fixed_store(path: Path) -> HighlightStore:
    ids = iter(["id-1", "id-2", "id-3"])
    return HighlightStore(path, id_factory=lambda: next(ids), clock=lambda: "2024-01-01T00:00:00+00:00")


def test_add_mints_identity_and_persists_in_order(tmp_path: Path) -> None:
    store = _fixed_store(tmp_path / "nested" / "highlights.json")
    attribution = Attribution(author="Seneca", source="Letters")

    first = store.add("Luck is what happens when preparation meets opportunity.", attribution)
    store.add("We suffer more in imagination than in reality.", attribution)

    assert first == Highlight(
        id="id-1",
        text="Luck is what happens when preparation meets opportunity.",
        author="Seneca",
        source="Letters",
        category="Book",
        date_added="2024-01-01T00:00:00+00:00",
    )
    stored = store.load_all()
    assert [highlight.id for highlight in stored] == ["id-1", "id-2"]
    assert not any(highlight.favorite for highlight in stored)


def test_toggle_favorite_flips_and_persists_flag(tmp_path: Path) -> None:
    path = tmp_path / "highlights.json"
    store = _fixed_store(path)
    attribution = Attribution(author="Seneca", source="Letters")
    store.add("Luck is what happens when preparation meets opportunity.", attribution)
    store.add("We suffer more in imagination than in reality.", attribution)

    marked = store.toggle_favorite("id-2")

    assert marked.favorite is True
    assert [highlight.favorite for highlight in HighlightStore(path).load_all()] == [False, True]
    assert store.toggle_favorite("id-2").favorite is False
    assert not any(highlight.favorite for highlight in store.load_all())


def test_toggle_favorite_rejects_unknown_id(tmp_path: Path) -> None:
    store = _fixed_store(tmp_path / "highlights.json")
    store.add("A stored highlight.", Attribution(author="A", source="S"))

    with pytest.raises(ValueError, match="Highlight `missing` not found"):
        store.toggle_favorite("missing")


def test_store_writes_deterministic_unicode_json(tmp_path: Path) -> None:
    path = tmp_path / "highlights.json"
    _fixed_store(path).add("Café culture “matters”.", Attribution(author="A", source="S"))

    raw = path.read_text(encoding="utf-8")

    assert "Café culture “matters”." in raw
    assert list(json.loads(raw)["highlights"][0]) == sorted(json.loads(raw)["highlights"][0])


def test_load_all_returns_empty_list_for_missing_file(tmp_path: Path) -> None:
    assert HighlightStore(tmp_path / "missing.json").load_all() == []


def test_default_id_factory_and_clock(tmp_path: Path) -> None:
    highlight = HighlightStore(tmp_path / "h.json").add(
        "A default-minted highlight.", Attribution(author="A", source="S")
    )

    assert len(highlight.id) == 36
    assert highlight.date_added.endswith("+00:00")


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("{not json", "not valid JSON"),
        ('{"rows": []}', "must contain a `highlights` list"),
        ('{"highlights": [1]}', "non-object row"),
        ('{"highlights": [{"id": "x"}]}', "missing field"),
    ],
)
def test_load_all_rejects_malformed_store(tmp_path: Path, content: str, message: str) -> None:
    path = tmp_path / "highlights.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError, match=message):
        HighlightStore(path).load_all()
