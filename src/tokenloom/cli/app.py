"""
tokenloom command line entry point.
"""

from __future__ import annotations

from typing import Annotated

import typer

from .build import build_command
from .inspection import check_command, collections_command, find_command, resolve_command
from .utils import configure_logging, version_callback

app = typer.Typer(
    help="""tokenloom: design-token resolution engine

Resolves design-tool variable exports (collections, modes, aliases) into
CSS custom properties, runtime maps, type declarations and DTCG trees.
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and environment information",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """tokenloom CLI main callback for global options."""
    configure_logging(verbose)


app.command(name="build")(build_command)
app.command(name="resolve")(resolve_command)
app.command(name="collections")(collections_command)
app.command(name="find")(find_command)
app.command(name="check")(check_command)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
