"""
DeepDive CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Run the signal engine.
  5. Report result to stdout.

Install and run::

    pip install -e .
    deepdive --help
    deepdive validate-config
    deepdive show-lexicon
    deepdive analyze results.json --query "acme corp"
    deepdive analyze results.json --json --output out/acme.json
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional

import typer

app = typer.Typer(
    name="deepdive",
    help="DeepDive: keyword signal analysis for web search results.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from deepdive.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from deepdive.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_lexicon_or_exit(lexicon_path: Optional[str], config):
    """Resolve the lexicon from --lexicon, then config, then the built-in default."""
    from pydantic import ValidationError

    from deepdive.signals.lexicon import resolve_lexicon

    try:
        return resolve_lexicon(lexicon_path or config.analysis.lexicon_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValueError, ValidationError) as exc:
        typer.echo(f"[ERROR] Invalid lexicon: {exc}", err=True)
        raise typer.Exit(code=1)


def _read_raw_records(input_file: str) -> list[dict[str, Any]]:
    """Read raw records from a JSON file (or stdin when ``input_file`` is ``-``).

    Accepts either a JSON array of ``{title, url, description}`` objects or a
    provider payload of the form ``{"web": {"results": [...]}}``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the content is not one of the accepted shapes.
    """
    if input_file == "-":
        text = sys.stdin.read()
        source = "<stdin>"
    else:
        path = Path(input_file)
        if not path.is_file():
            raise FileNotFoundError(f"Input file not found: {path}")
        text = path.read_text(encoding="utf-8")
        source = str(path)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{source} is not valid JSON: {exc}") from exc

    if isinstance(data, dict):
        web = data.get("web")
        if not isinstance(web, dict):
            raise ValueError(
                f'{source}: a JSON object must be a {{"web": {{"results": [...]}}}} payload.'
            )
        data = web.get("results", [])

    if not isinstance(data, list):
        raise ValueError(
            f"{source} must contain a JSON array of results or a "
            '{"web": {"results": [...]}} payload.'
        )
    if not all(isinstance(rec, dict) for rec in data):
        raise ValueError(f"{source}: every result must be a JSON object.")
    return data


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("analyze")
def analyze(
    input_file: str = typer.Argument(
        ...,
        help="JSON file of search results ('-' reads stdin).",
    ),
    query: Optional[str] = typer.Option(
        None,
        "--query",
        "-q",
        help="Query label for the report (defaults to the input file name).",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        min=1,
        max=100,
        help="Analyse only the first N results (1-100). Defaults to config.",
    ),
    lexicon_path: Optional[str] = typer.Option(
        None,
        "--lexicon",
        help="Path to a JSON lexicon file. Overrides config.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the JSON response envelope instead of the ASCII report.",
    ),
    show_signals: bool = typer.Option(
        False,
        "--signals",
        help="List matched terms under each result in the ASCII report.",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write the JSON response envelope to this path.",
    ),
    csv_path: Optional[str] = typer.Option(
        None,
        "--csv",
        help="Also write ranked results as a flat CSV file.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Score, rank and summarise a batch of search results.

    \b
    Input shapes:
      [{"title": ..., "url": ..., "description": ...}, ...]
      {"web": {"results": [...]}}     (raw provider payload)
    """
    from pydantic import ValidationError

    from deepdive.pipeline import build_response
    from deepdive.reporting.export import (
        response_to_json,
        write_response_json,
        write_results_csv,
    )
    from deepdive.reporting.formatters import format_report_summary, format_results_table

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    count = limit or config.search.default_count
    if count > config.search.max_count:
        typer.echo(
            f"[ERROR] --limit must be between 1 and {config.search.max_count}.", err=True
        )
        raise typer.Exit(code=1)

    lexicon = _load_lexicon_or_exit(lexicon_path, config)

    try:
        records = _read_raw_records(input_file)
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    label = query or (Path(input_file).stem if input_file != "-" else "stdin")

    try:
        response = build_response(
            label,
            records[:count],
            lexicon=lexicon,
            top_n=config.analysis.top_signals,
            max_workers=config.analysis.max_workers,
        )
    except ValidationError as exc:
        typer.echo(f"[ERROR] Malformed result record: {exc}", err=True)
        raise typer.Exit(code=1)

    if output:
        write_response_json(response, Path(output))
    if csv_path:
        write_results_csv(response.results or [], Path(csv_path))

    if as_json:
        typer.echo(response_to_json(response))
        return

    typer.echo(format_report_summary(response.report, query=label))
    typer.echo(format_results_table(response.results or [], show_signals=show_signals))
    if output:
        typer.echo(f"\n  JSON written to: {output}")
    if csv_path:
        typer.echo(f"  CSV written to:  {csv_path}")


@app.command("show-lexicon")
def show_lexicon(
    lexicon_path: Optional[str] = typer.Option(
        None,
        "--lexicon",
        help="Path to a JSON lexicon file. Overrides config.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Print the active lexicon grouped by polarity and tier."""
    from deepdive.reporting.formatters import format_lexicon

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    lexicon = _load_lexicon_or_exit(lexicon_path, config)
    typer.echo(format_lexicon(lexicon))


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config (or the lexicon it points to) fails validation.
    """
    config = _load_config_or_exit(config_path)
    lexicon = _load_lexicon_or_exit(None, config)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Lexicon:          {lexicon.version} ({len(lexicon)} terms)")
    typer.echo(f"  Lexicon path:     {config.analysis.lexicon_path or '(built-in)'}")
    typer.echo(f"  Top signals:      {config.analysis.top_signals}")
    typer.echo(f"  Max workers:      {config.analysis.max_workers}")
    typer.echo(f"  Default count:    {config.search.default_count}")
    typer.echo(f"  Max count:        {config.search.max_count}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


if __name__ == "__main__":
    app()
