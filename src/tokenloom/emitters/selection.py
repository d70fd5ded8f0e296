"""
Token selection for emitters.

Builds choose which tokens land in an artifact by origin document,
collection, and name. ``TokenSelector`` covers the declarative cases; any
callable taking a ``ResolvedToken`` works wherever a selector is accepted.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from tokenloom.core.errors import Diagnostic
from tokenloom.core.resolution import ResolvedToken


@dataclass(frozen=True)
class TokenSelector:
    """
    Declarative token filter. Empty criteria match everything.

    Attributes:
        documents: Origin document names to keep
        collections: Collection names to keep
        include: Name prefixes to keep
        exclude: Name prefixes to drop
        exclude_contains: Substrings of name, document, or collection to drop
    """

    documents: Sequence[str] = field(default_factory=tuple)
    collections: Sequence[str] = field(default_factory=tuple)
    include: Sequence[str] = field(default_factory=tuple)
    exclude: Sequence[str] = field(default_factory=tuple)
    exclude_contains: Sequence[str] = field(default_factory=tuple)

    def __call__(self, token: ResolvedToken) -> bool:
        return self.matches(token)

    def matches(self, token: ResolvedToken) -> bool:
        return self.accepts(token.name, token.document, token.collection)

    def covers(self, diagnostic: Diagnostic) -> bool:
        """Whether the failed token would have been selected had it resolved."""
        return self.accepts(diagnostic.token_name, diagnostic.document, diagnostic.collection or "")

    def accepts(self, name: str, document: str, collection: str) -> bool:
        if self.documents and document not in self.documents:
            return False
        if self.collections and collection not in self.collections:
            return False
        if self.include and not name.startswith(tuple(self.include)):
            return False
        if self.exclude and name.startswith(tuple(self.exclude)):
            return False
        for needle in self.exclude_contains:
            if needle in name or needle in document or needle in collection:
                return False
        return True
