"""
Inspection commands for a single token export.

- resolve: print resolved values (table or JSON), or a single token
- collections: list collections with their modes and default mode
- find: search variable names
- check: report resolution failures, exit 1 if any
"""

from __future__ import annotations

import json
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from tokenloom.core.document_loader import load_document_file
from tokenloom.core.errors import TokenloomError
from tokenloom.core.formatting import ColorFormat
from tokenloom.core.resolution import ResolvedTokenSet, resolve_graph

from .utils import echo_diagnostics, load_graphs, parse_mode_options

console = Console()


class ListingFormat(StrEnum):
    TABLE = "table"
    JSON = "json"


DocumentArg = Annotated[Path, typer.Argument(help="Token export (.json, .yaml)")]
RefsOption = Annotated[
    list[Path] | None,
    typer.Option("--ref", "-r", help="Extra export for cross-document aliases (repeatable)"),
]
ModesOption = Annotated[
    list[str] | None,
    typer.Option("--mode", "-m", help="Mode request as COLLECTION=MODE (repeatable)"),
]


def _resolve(
    document: Path, refs: list[Path] | None, modes: list[str] | None, color: ColorFormat
) -> ResolvedTokenSet:
    requested = parse_mode_options(modes)
    try:
        graph, references = load_graphs(document, refs)
    except TokenloomError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    return resolve_graph(graph, requested, references, color_format=color)


def resolve_command(
    document: DocumentArg,
    refs: RefsOption = None,
    modes: ModesOption = None,
    name: Annotated[str | None, typer.Option("--name", "-n", help="Print a single token")] = None,
    output: Annotated[
        ListingFormat, typer.Option("--format", "-f", help="Output format")
    ] = ListingFormat.TABLE,
    color: Annotated[ColorFormat, typer.Option("--color", help="Color format")] = ColorFormat.HEX,
) -> None:
    """Resolve an export and print the token values."""
    tokens = _resolve(document, refs, modes, color)

    if name is not None:
        token = tokens.get(name)
        if token is None:
            failures = [d for d in tokens.diagnostics if d.token_name == name]
            if failures:
                echo_diagnostics(failures)
            else:
                typer.echo(f"Error: token '{name}' not found", err=True)
            raise typer.Exit(code=1)
        if output == ListingFormat.JSON:
            typer.echo(json.dumps({token.name: token.value}, indent=2))
        else:
            typer.echo(str(token.value))
        return

    if output == ListingFormat.JSON:
        typer.echo(json.dumps(tokens.as_mapping(), indent=2, ensure_ascii=False))
    else:
        table = Table(title=f"{document.name} ({tokens.summary})")
        table.add_column("Name", style="cyan")
        table.add_column("Collection")
        table.add_column("Mode")
        table.add_column("Value", style="green")
        for token in tokens:
            table.add_row(token.name, token.collection, token.mode, str(token.value))
        console.print(table)

    if tokens.diagnostics:
        echo_diagnostics(tokens.diagnostics)


def collections_command(document: DocumentArg) -> None:
    """List collections, their modes, and the default mode."""
    try:
        graph = load_document_file(document)
    except TokenloomError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    table = Table(title=f"Collections in {document.name}")
    table.add_column("Collection", style="cyan")
    table.add_column("Modes")
    table.add_column("Default", style="green")
    for info in graph.collections_info():
        table.add_row(info.name, ", ".join(info.modes), info.default_mode)
    console.print(table)


def find_command(
    document: DocumentArg,
    pattern: Annotated[str, typer.Argument(help="Substring to look for in variable names")],
) -> None:
    """Find variables whose name contains PATTERN."""
    try:
        graph = load_document_file(document)
    except TokenloomError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    matches = graph.find_variables(pattern)
    if not matches:
        typer.echo(f"No variables match '{pattern}'")
        return

    table = Table(title=f"{len(matches)} matches")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Collection")
    for match in matches:
        table.add_row(match.name, match.type.value, match.collection_name)
    console.print(table)


def check_command(
    document: DocumentArg,
    refs: RefsOption = None,
    modes: ModesOption = None,
) -> None:
    """Resolve every token and report failures; exit 1 if any."""
    tokens = _resolve(document, refs, modes, ColorFormat.HEX)
    summary = tokens.summary

    if tokens.diagnostics:
        echo_diagnostics(tokens.diagnostics)
        typer.echo(f"✗ {summary}")
        raise typer.Exit(code=1)

    typer.echo(f"✓ {summary}")
