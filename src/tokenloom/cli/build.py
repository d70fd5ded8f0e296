"""
Manifest-driven build command.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from tokenloom.core.build import run_builds
from tokenloom.core.errors import TokenloomError
from tokenloom.core.manifest import MANIFEST_FILE, load_manifest

from .utils import echo_diagnostics


def build_command(
    manifest: Annotated[
        Path, typer.Option("--manifest", help="Path to tokenloom.toml")
    ] = Path(MANIFEST_FILE),
    only: Annotated[
        list[str] | None, typer.Option("--only", help="Run only this build (repeatable)")
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Resolve and render without writing files")
    ] = False,
    strict: Annotated[
        bool, typer.Option("--strict", help="Exit 1 when any token fails to resolve")
    ] = False,
) -> None:
    """Run the builds declared in the project manifest."""
    try:
        project = load_manifest(manifest)
        report = run_builds(project, only, dry_run=dry_run)
    except TokenloomError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    for output in report.outputs:
        if dry_run:
            typer.echo(f"• {output.name}: {output.token_count} tokens (dry run)")
            continue
        for path in output.paths:
            try:
                shown = path.relative_to(project.root)
            except ValueError:
                shown = path
            typer.echo(f"✓ {output.name}: {shown}")

    if report.diagnostics:
        echo_diagnostics(report.diagnostics)

    typer.echo(f"{len(report.outputs)} builds: {report.summary}")
    if strict and not report.ok:
        raise typer.Exit(code=1)
