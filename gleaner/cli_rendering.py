"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
detected formats, review candidates, and stored highlights.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import PipelineStageError
from .models.datatypes import ExtractionResult, Highlight


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, PipelineStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_format_label(label: str | None) -> None:
    """Print the diagnostic format label."""

    typer.echo(f"Detected format: {label or 'unknown'}")


def echo_extraction_summary(result: ExtractionResult) -> None:
    """Print format, winning strategy, and candidate count."""

    echo_format_label(result.format_label)
    typer.echo(f"Segmentation strategy: {result.strategy or 'none'}")
    typer.echo(
        f"Found {len(result.candidates)} potential highlights "
        f"across {result.page_count} page(s)."
    )


def echo_candidates(result: ExtractionResult) -> None:
    """Print numbered candidates with their selection state."""

    for index, candidate in enumerate(result.candidates, start=1):
        marker = "x" if candidate.selected else " "
        typer.echo(f"[{marker}] {index}. {candidate.text}")
        typer.echo("")


def echo_highlights(highlights: list[Highlight]) -> None:
    """Print stored highlights with their attribution."""

    if not highlights:
        typer.echo("No highlights stored yet.")
        return
    for highlight in highlights:
        typer.echo(f"{highlight.text}")
        typer.echo(
            f"  - {highlight.author}, {highlight.source} "
            f"[{highlight.category}] {highlight.date_added}"
        )
        typer.echo(f"  id: {highlight.id}{' (favorite)' if highlight.favorite else ''}")


def echo_favorite_state(highlight: Highlight) -> None:
    """Print the favorite state of one highlight after a toggle."""

    state = "Marked as favorite" if highlight.favorite else "Removed from favorites"
    typer.echo(f"{state}: {highlight.id}")
