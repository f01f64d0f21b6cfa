"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components

======================== ESPAÑOL ========================
Archivo: `src/rulescope/cli.py`.
Interfaz de línea de comandos: `build`, `search`, `facets`.

Componentes detectados:
  - app
  - build
  - search
  - facets

======================== ENGLISH ========================
File: `src/rulescope/cli.py`.
Command line interface: `build`, `search`, `facets`.

Detected components:
  - app
  - build
  - search
  - facets
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from rulescope.config import load_config
from rulescope.core.facets import active_fields
from rulescope.core.query import QuerySession
from rulescope.errors import ArtifactLoadError, RulesRootNotFoundError
from rulescope.logging import setup_logging
from rulescope.pipeline import run_pipeline
from rulescope.storage import load_artifacts

app = typer.Typer(help="Rulescope detection rules explorer")


@app.callback()
def main() -> None:
    """Interfaz de línea de comandos de Rulescope.

    English: Rulescope command line interface.
    """


@app.command()
def build(
    rules_dir: Optional[Path] = typer.Option(None, "--rules-dir", help="Root of the YAML rules tree."),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", help="Where rules.json and index.json go."),
) -> None:
    """Convierte las reglas YAML en los artefactos JSON.

    English: Convert YAML rules into the JSON artifacts.
    """
    settings = load_config(RULES_DIR=rules_dir, OUTPUT_DIR=output_dir)
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR, settings.LOG_FORMAT)
    try:
        result = run_pipeline(settings.RULES_DIR, settings.OUTPUT_DIR)
    except RulesRootNotFoundError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"Rules: {result.rules_path} ({result.index.total_rules} rules)")
    typer.echo(f"Index: {result.index_path}")
    if result.failures:
        typer.echo(f"Skipped {len(result.failures)} malformed files")
    for name, size in active_fields(result.index):
        typer.echo(f"  {name}: {size} unique values")


def _parse_filters(raw_filters: List[str], session: QuerySession) -> None:
    for item in raw_filters:
        field_name, sep, value = item.partition("=")
        if not sep or not value:
            raise typer.BadParameter(f"expected field=value, got {item!r}", param_hint="--filter")
        try:
            if not session.is_active(field_name, value):
                session.toggle_filter(field_name, value)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--filter") from exc


def _open_session(data_dir: Optional[Path]) -> QuerySession:
    settings = load_config(OUTPUT_DIR=data_dir)
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR, settings.LOG_FORMAT)
    try:
        catalog, index = load_artifacts(settings.OUTPUT_DIR)
    except ArtifactLoadError as exc:
        typer.echo(f"Error loading rules: {exc}", err=True)
        typer.echo("Run `rulescope build` first, then retry.", err=True)
        raise typer.Exit(code=1) from exc
    return QuerySession(catalog, index)


@app.command()
def search(
    term: str = typer.Argument("", help="Case-insensitive text matched against name, description and id."),
    filters: Optional[List[str]] = typer.Option(None, "--filter", "-f", help="field=value, repeatable."),
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", help="Directory holding the artifacts."),
) -> None:
    """Busca y filtra reglas del catálogo.

    English: Search and filter catalog rules.
    """
    session = _open_session(data_dir)
    session.set_search_term(term)
    _parse_filters(filters or [], session)

    for rule in session.results:
        label = f"{rule.id}  {rule.name}" if rule.name else rule.id
        typer.echo(label)
    typer.echo(session.summary())


@app.command()
def facets(
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", help="Directory holding the artifacts."),
) -> None:
    """Muestra el índice de facetas. / Show the facet index."""
    session = _open_session(data_dir)
    typer.echo(f"total_rules: {session.index.total_rules}")
    for name, entries in session.index.filters.items():
        typer.echo(f"{name}:")
        for entry in entries:
            typer.echo(f"  {entry.value} ({entry.count})")


if __name__ == "__main__":
    app()
