"""
tokenloom CLI package.

- app.py: Typer application, global options, command registration
- build.py: manifest-driven builds
- inspection.py: resolve, collections, find, check
- utils.py: shared helpers (version, logging, option parsing)
"""

from tokenloom.cli.app import app, main
from tokenloom.cli.utils import version_callback

__all__ = ["app", "main", "version_callback"]
