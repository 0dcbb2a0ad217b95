"""Shared parsing helpers for runtime values and candidate selections."""

from __future__ import annotations

from typing import Iterable


_TRUE_BOOLEAN_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_BOOLEAN_TOKENS = frozenset({"0", "false", "no", "off"})
_SELECTION_SYNTAX_HINT = "Use syntax like `1`, `1,3`, `2-4`, or `1,3-5`."


def normalize_optional_string(value: object) -> str | None:
    """Normalize an optional value to a stripped non-empty string.

    Args:
        value: Arbitrary input value.

    Returns:
        Stripped string value, or `None` when the value is empty after trimming.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def parse_permissive_boolean(value: object) -> bool | None:
    """Parse a permissive boolean token and return `None` for invalid values."""

    if isinstance(value, bool):
        return value

    normalized = normalize_optional_string(value)
    if normalized is None:
        return None

    token = normalized.lower()
    if token in _TRUE_BOOLEAN_TOKENS:
        return True
    if token in _FALSE_BOOLEAN_TOKENS:
        return False
    return None


def parse_candidate_selection(selection: str | None, candidate_count: int) -> list[int]:
    """Parse a 1-based candidate selection expression into sorted unique indices.

    Args:
        selection: Expression such as `2`, `1,3`, `2-4`. `None` or blank selects nothing.
        candidate_count: Number of candidates available for selection.

    Returns:
        Sorted 1-based candidate indices.

    Raises:
        ValueError: If the expression is malformed or out of bounds.
    """

    if selection is None or not selection.strip():
        return []
    if candidate_count <= 0:
        raise ValueError("No candidates are available for selection.")

    tokens = [part.strip() for part in selection.split(",")]
    if any(not token for token in tokens):
        raise ValueError(
            f"Malformed candidate selection: empty item in list. {_SELECTION_SYNTAX_HINT}"
        )

    selected: set[int] = set()
    for token in tokens:
        for index in _expand_token(token, candidate_count):
            if index in selected:
                raise ValueError(
                    f"Overlapping candidate selection contains duplicate index `{index}`."
                )
            selected.add(index)
    return sorted(selected)


def format_candidate_selection(indices: Iterable[int]) -> str:
    """Format candidate indices into normalized compact range syntax."""

    ordered = sorted(set(int(index) for index in indices))
    if not ordered:
        return ""

    parts: list[str] = []
    start = ordered[0]
    end = ordered[0]
    for index in ordered[1:]:
        if index == end + 1:
            end = index
            continue
        parts.append(str(start) if start == end else f"{start}-{end}")
        start = index
        end = index
    parts.append(str(start) if start == end else f"{start}-{end}")
    return ",".join(parts)


def _expand_token(token: str, candidate_count: int) -> list[int]:
    """Expand one token (`N` or `N-M`) to concrete candidate indices."""

    if "-" not in token:
        index = _parse_positive_index(token)
        _validate_bounds(index, candidate_count)
        return [index]

    start_text, _, end_text = token.partition("-")
    if not start_text.strip() or not end_text.strip() or "-" in end_text:
        raise ValueError(
            f"Malformed candidate range `{token}`. Use closed range syntax like `2-4`."
        )

    start = _parse_positive_index(start_text.strip())
    end = _parse_positive_index(end_text.strip())
    if start > end:
        raise ValueError(
            f"Malformed candidate range `{token}`: range start must be less than or equal to end."
        )
    for index in (start, end):
        _validate_bounds(index, candidate_count)
    return list(range(start, end + 1))


def _parse_positive_index(token: str) -> int:
    """Parse one 1-based positive index token."""

    try:
        value = int(token, 10)
    except ValueError as exc:
        raise ValueError(f"Invalid candidate index `{token}`. Indices must be integers.") from exc
    if value < 1:
        raise ValueError(
            f"Invalid candidate index `{token}`. Indices must be positive and 1-based."
        )
    return value


def _validate_bounds(index: int, candidate_count: int) -> None:
    """Validate one candidate index against the available range."""

    if index > candidate_count:
        raise ValueError(
            f"Candidate index `{index}` is out of available bounds `1-{candidate_count}`."
        )
