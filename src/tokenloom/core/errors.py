"""
Error types for tokenloom document loading, configuration, and resolution.

Fatal problems (a corrupt export, a broken manifest) are raised as exceptions.
Per-token resolution failures are never raised; they are recorded as
``Diagnostic`` records so a single bad alias cannot abort a resolution pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path


class TokenloomError(Exception):
    """Base exception for all tokenloom errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class StructuralError(TokenloomError):
    """
    Raised when a token export is malformed.

    Examples:
    - Missing ``collections`` list
    - Variable referencing a non-existent collection
    - Default mode that is not one of the collection's modes
    - Literal value that does not match the variable's resolved type
    """

    pass


class ManifestError(TokenloomError):
    """
    Raised when a tokenloom.toml manifest cannot be loaded.

    Examples:
    - Missing or unreadable manifest file
    - Invalid TOML
    - Unknown build format, naming strategy, or color format
    """

    pass


class EmitError(TokenloomError):
    """Raised when an emitter is asked for an unsupported output."""

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside a token export.

    Attributes:
        file: Path (or label) of the source document
        path: Location inside the document, e.g. ``collections[0].variables[3]``
    """

    file: Path | str
    path: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "tokens.json at collections[0]"
        """
        if self.path:
            return f"{self.file} at {self.path}"
        return str(self.file)


def make_structural_error(
    message: str,
    file: Path | str | None = None,
    path: str | None = None,
) -> StructuralError:
    """
    Helper to create a StructuralError with optional context.

    Args:
        message: Error description
        file: Optional source document path or label
        path: Optional location inside the document

    Returns:
        StructuralError with context if a file was provided
    """
    if file:
        return StructuralError(message, ErrorContext(file=file, path=path))
    return StructuralError(message)


# =============================================================================
# Per-token diagnostics
# =============================================================================


class ResolutionErrorKind(StrEnum):
    """Why a single token could not be resolved."""

    MISSING_VARIABLE = "missing_variable"
    MISSING_COLLECTION = "missing_collection"
    MISSING_VALUE_FOR_MODE = "missing_value_for_mode"
    ALIAS_CYCLE = "alias_cycle"
    UNRESOLVED_CROSS_REFERENCE = "unresolved_cross_reference"


@dataclass(frozen=True)
class Diagnostic:
    """
    A recorded per-token resolution failure.

    Attributes:
        token_name: Name of the variable the pass was resolving
        kind: Failure category
        message: Human-readable explanation
        document: Name of the document the token came from
        collection: Name of the token's collection, when known
        chain: Variable ids visited before the failure (full loop for cycles)
    """

    token_name: str
    kind: ResolutionErrorKind
    message: str
    document: str = ""
    collection: str | None = None
    chain: tuple[str, ...] = field(default_factory=tuple)

    def format(self) -> str:
        """Render the diagnostic as a single log line."""
        line = f"{self.token_name}: {self.kind.value}: {self.message}"
        if self.kind == ResolutionErrorKind.ALIAS_CYCLE and self.chain:
            line += f" ({' -> '.join(self.chain)})"
        return line
