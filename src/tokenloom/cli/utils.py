"""
Shared helpers for the tokenloom CLI.
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

import typer

from tokenloom._version import get_version
from tokenloom.core.document_loader import load_document_file
from tokenloom.core.errors import Diagnostic
from tokenloom.core.store import TokenGraph

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"tokenloom {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route library logging to stderr; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def parse_mode_options(values: list[str] | None) -> dict[str, str]:
    """Turn repeated ``COLLECTION=MODE`` options into a mode request.

    Raises:
        typer.BadParameter: If an option has no ``=`` or an empty side.
    """
    requested: dict[str, str] = {}
    for raw in values or []:
        collection, sep, mode = raw.partition("=")
        if not sep or not collection.strip() or not mode.strip():
            raise typer.BadParameter(
                f"expected COLLECTION=MODE, got '{raw}'", param_hint="--mode"
            )
        requested[collection.strip()] = mode.strip()
    return requested


def load_graphs(document: Path, refs: list[Path] | None) -> tuple[TokenGraph, list[TokenGraph]]:
    """Load the primary document and its cross-document references."""
    graph = load_document_file(document)
    references = [load_document_file(path) for path in refs or []]
    return graph, references


def echo_diagnostics(diagnostics: list[Diagnostic]) -> None:
    """Print diagnostics to stderr, one per line."""
    for diagnostic in diagnostics:
        typer.echo(f"  ✗ [{diagnostic.document}] {diagnostic.format()}", err=True)
