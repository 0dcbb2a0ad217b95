"""Shared pytest fixtures for the full Gleaner test suite."""

from __future__ import annotations

import pytest


@pytest.fixture
def kindle_page_text() -> str:
    """Provide a minimal e-reader export using page markers."""

    return "Highlight (Yellow) | Page 10\nQuote A.\n\nHighlight (Yellow) | Page 12\nQuote B."


@pytest.fixture
def kindle_location_text() -> str:
    """Provide an e-reader export with a title/author preamble and location markers."""

    return (
        "Your Kindle Notes For:\n"
        "Meditations\n"
        "by Marcus Aurelius\n"
        "\n"
        "Highlight (Yellow) | Location 120\n"
        "The first quote is long enough to keep.\n"
        "\n"
        "Highlight (Blue) | Location 240\n"
        "Second quote also stays in the list."
    )


@pytest.fixture
def benefits_text() -> str:
    """Provide a listicle with repeated "benefits of" headings and numbered sub-points."""

    return (
        "5 Benefits of Meditation\n"
        "1. Reduces stress and anxiety.\n"
        "2. Improves focus.\n"
        "\n"
        "3 Benefits of Journaling\n"
        "- Clarifies your thinking.\n"
        "- Tracks your growth over time."
    )


@pytest.fixture
def paragraphs_text() -> str:
    """Provide three plain prose paragraphs."""

    return (
        "The best way to predict the future is to create it.\n"
        "\n"
        "Simplicity is the ultimate sophistication in design.\n"
        "\n"
        "Well done is better than well said, every single time."
    )


@pytest.fixture
def long_prose_text() -> str:
    """Provide one long paragraph of seven sentences."""

    return " ".join(
        [
            "Habits compound over time like interest.",
            "Small daily choices shape who we become.",
            "Most people overestimate a single day.",
            "They underestimate a decade of effort.",
            "Systems matter more than goals.",
            "Goals set direction while systems make progress.",
            "Identity drives lasting behavior change.",
        ]
    )
