"""
tokenloom - design-token resolution engine.

Resolves design-tool variable exports (collections, modes, aliases) into
platform artifacts: CSS custom properties, runtime maps, type declarations,
and DTCG token trees.
"""

from __future__ import annotations

from ._version import get_version
from .core.document_loader import load_document, load_document_file
from .core.errors import (
    Diagnostic,
    EmitError,
    ManifestError,
    ResolutionErrorKind,
    StructuralError,
    TokenloomError,
)
from .core.formatting import ColorFormat
from .core.modes import resolve_modes
from .core.resolution import ResolvedToken, ResolvedTokenSet, resolve_graph
from .core.resolver import AliasResolver, Resolved, Unresolved
from .core.store import TokenGraph

__version__ = get_version()

__all__ = [
    "__version__",
    "AliasResolver",
    "ColorFormat",
    "Diagnostic",
    "EmitError",
    "ManifestError",
    "Resolved",
    "ResolutionErrorKind",
    "ResolvedToken",
    "ResolvedTokenSet",
    "StructuralError",
    "TokenGraph",
    "TokenloomError",
    "Unresolved",
    "load_document",
    "load_document_file",
    "resolve_graph",
    "resolve_modes",
]
