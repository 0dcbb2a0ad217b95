"""Command-line interface for Gleaner.

Responsibilities:
- Expose user-facing commands for highlight extraction, review and storage.
- Convert CLI arguments into `GleanerConfig` and run the pipeline.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import (
    echo_candidates,
    echo_extraction_summary,
    echo_favorite_state,
    echo_format_label,
    echo_highlights,
    exit_with_command_error,
)
from .config import DEFAULT_STORE_PATH, ConfigLoader, GleanerConfig
from .errors import PipelineStageError
from .io.highlight_store import HighlightStore
from .models.datatypes import ExtractionResult, Highlight
from .parsing import format_candidate_selection, parse_candidate_selection
from .pipeline import HighlightPipeline
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="gleaner",
    no_args_is_help=True,
    help="Gleaner CLI.",
)


def _load_yaml_config(config_path: Path | None) -> GleanerConfig | None:
    """Load a YAML config file when requested and map failures to stage errors."""

    if config_path is None:
        return None

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc


def _resolve_config(
    config_file: Path | None,
    input_path: Path | None,
    store: Path | None,
    author: str | None,
    source: str | None,
    category: str | None,
    save: bool | None,
) -> GleanerConfig:
    """Resolve effective config from YAML defaults and explicit CLI overrides."""

    loaded = _load_yaml_config(config_file)
    if loaded is None:
        if input_path is None:
            raise PipelineStageError(
                stage="config",
                detail="Input document path is required when `--config` is not provided.",
                hint="Pass `<input.pdf>` or use `--config <path.yaml>` with `input_path`.",
            )
        loaded = GleanerConfig(input_path=input_path)

    config = GleanerConfig(
        input_path=input_path if input_path is not None else loaded.input_path,
        store_path=store if store is not None else loaded.store_path,
        author=author if author is not None else loaded.author,
        source=source if source is not None else loaded.source,
        category=category if category is not None else loaded.category,
        save=save if save is not None else loaded.save,
    )
    try:
        config.validate()
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=str(exc),
            hint="Pass `--author` and `--source` (or set them in the config file) to save.",
        ) from exc
    return config


def _candidates_payload(result: ExtractionResult) -> str:
    """Serialize reviewed candidates with their format label and strategy."""

    payload = {
        "format": result.format_label,
        "strategy": result.strategy,
        "candidates": [
            {"text": candidate.text, "selected": candidate.selected}
            for candidate in result.candidates
        ],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


@app.command("extract")
def extract_command(
    input_path: Annotated[
        Path | None,
        typer.Argument(
            help="Path to source PDF or text file. Required unless provided by `--config`.",
        ),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file with command defaults."),
    ] = None,
    exclude: Annotated[
        str | None,
        typer.Option(
            "--exclude",
            help="1-based candidates to deselect: `5`, `1,3,7`, `2-4`, or mixed `1,3-5`.",
        ),
    ] = None,
    save: Annotated[
        bool | None,
        typer.Option("--save/--no-save", help="Persist selected candidates to the store."),
    ] = None,
    store: Annotated[
        Path | None,
        typer.Option("--store", help="Highlight store JSON path."),
    ] = None,
    author: Annotated[str | None, typer.Option("--author", help="Author name.")] = None,
    source: Annotated[
        str | None, typer.Option("--source", help="Book title, article, etc.")
    ] = None,
    category: Annotated[str | None, typer.Option("--category", help="Category.")] = None,
    json_out: Annotated[
        Path | None,
        typer.Option("--json-out", help="Write reviewed candidates as JSON to this path."),
    ] = None,
) -> None:
    """Extract highlight candidates from a document, review and optionally save them."""

    try:
        config = _resolve_config(
            config_file=config_file,
            input_path=input_path,
            store=store,
            author=author,
            source=source,
            category=category,
            save=save,
        )
        pipeline = HighlightPipeline(run_logger=RunLogger())
        result = pipeline.extract(config.input_path)
        try:
            excluded = parse_candidate_selection(exclude, len(result.candidates))
        except ValueError as exc:
            raise PipelineStageError(
                stage="review",
                detail=str(exc),
                hint=f"Candidates are numbered 1-{len(result.candidates)}.",
            ) from exc
        result.candidates.deselect(index - 1 for index in excluded)

        saved: list[Highlight] = []
        if config.save:
            saved = pipeline.confirm(
                result.candidates,
                config.attribution(),
                HighlightStore(config.store_path),
            )
    except Exception as exc:
        exit_with_command_error("extract", exc)

    echo_extraction_summary(result)
    if excluded:
        typer.echo(f"Deselected: {format_candidate_selection(excluded)}")
    echo_candidates(result)
    if json_out is not None:
        json_out.parent.mkdir(parents=True, exist_ok=True)
        json_out.write_text(_candidates_payload(result), encoding="utf-8")
        typer.echo(f"Candidates JSON: {json_out}")
    if config.save:
        typer.echo(f"Saved {len(saved)} highlights to {config.store_path}")


@app.command("detect")
def detect_command(
    input_path: Annotated[Path, typer.Argument(help="Path to source PDF or text file.")],
) -> None:
    """Print the diagnostic format label for a document."""

    try:
        label = HighlightPipeline().detect(input_path)
    except Exception as exc:
        exit_with_command_error("detect", exc)

    echo_format_label(label)


@app.command("list")
def list_command(
    store: Annotated[
        Path,
        typer.Option("--store", help="Highlight store JSON path."),
    ] = DEFAULT_STORE_PATH,
) -> None:
    """List highlights saved in the store."""

    try:
        highlights = HighlightStore(store).load_all()
    except Exception as exc:
        exit_with_command_error("list", exc)

    echo_highlights(highlights)


@app.command("favorite")
def favorite_command(
    highlight_id: Annotated[str, typer.Argument(help="Id of a stored highlight.")],
    store: Annotated[
        Path,
        typer.Option("--store", help="Highlight store JSON path."),
    ] = DEFAULT_STORE_PATH,
) -> None:
    """Toggle the favorite flag of one stored highlight."""

    try:
        highlight = HighlightStore(store).toggle_favorite(highlight_id)
    except Exception as exc:
        exit_with_command_error("favorite", exc)

    echo_favorite_state(highlight)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
