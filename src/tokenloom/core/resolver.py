"""
Alias resolution.

Dereferences variable values through same-document and cross-document
aliases until a literal is reached. The walk is iterative and carries the
chain of visited variables, so cycles terminate with a full report instead of
recursing forever. Failures come back as ``Unresolved`` values; nothing in
here raises for a bad token.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from .errors import ResolutionErrorKind
from .formatting import DEFAULT_UNITLESS_KEYWORDS, to_literal
from .ir import TokenLiteral, Variable, VariableAlias
from .modes import ModeSelection, resolve_modes
from .store import TokenGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenRef:
    """A variable identified by the document it lives in."""

    document: str
    variable_id: str
    name: str

    def label(self) -> str:
        return f"{self.document}:{self.variable_id}"


@dataclass(frozen=True)
class Resolved:
    """Successful resolution.

    Attributes:
        literal: Terminal literal value.
        variable: The variable that holds the literal.
        chain: Every variable walked, starting with the requested one.
        reference: First alias hop, when the requested variable is an alias.
        format_hint: Names along the chain that drive unit and weight handling.
    """

    literal: TokenLiteral
    variable: Variable
    chain: tuple[TokenRef, ...]
    reference: TokenRef | None = None
    format_hint: str = ""

    ok = True


@dataclass(frozen=True)
class Unresolved:
    """Failed resolution with the reason and the chain walked so far."""

    kind: ResolutionErrorKind
    message: str
    chain: tuple[TokenRef, ...] = field(default_factory=tuple)

    ok = False


Resolution = Resolved | Unresolved


class AliasResolver:
    """
    Resolve variables of one graph under a mode request.

    Cross-document aliases are looked up by key in ``graph`` and then in
    ``references`` (in order). Each graph gets its own mode selection computed
    from the same requested mode names, so a collection missing from the
    request falls back to its own default.
    """

    def __init__(
        self,
        graph: TokenGraph,
        requested: Mapping[str, str] | None = None,
        references: Sequence[TokenGraph] = (),
        unitless_keywords: Iterable[str] = DEFAULT_UNITLESS_KEYWORDS,
    ):
        self.graph = graph
        self.requested = dict(requested or {})
        self.references = tuple(ref for ref in references if ref is not graph)
        self.unitless_keywords = tuple(unitless_keywords)
        # Built eagerly so concurrent resolve() calls only read.
        self._selections: dict[int, ModeSelection] = {
            id(g): resolve_modes(g, self.requested) for g in (graph, *self.references)
        }

    def selection_for(self, graph: TokenGraph) -> ModeSelection:
        """Mode selection used for ``graph``."""
        return self._selections[id(graph)]

    def _find_key(self, key: str) -> tuple[TokenGraph, Variable] | None:
        for candidate in (self.graph, *self.references):
            variable = candidate.lookup_by_key(key)
            if variable is not None:
                return candidate, variable
        return None

    def resolve_name(self, name: str) -> Resolution:
        """Resolve the first variable called ``name`` in this graph."""
        variable = self.graph.lookup_by_name(name)
        if variable is None:
            return Unresolved(
                ResolutionErrorKind.MISSING_VARIABLE,
                f"Variable with name '{name}' not found in {self.graph.name}",
            )
        return self.resolve(variable.id)

    def resolve(self, variable_id: str) -> Resolution:
        """Resolve one variable id of ``self.graph`` to a literal.

        Args:
            variable_id: Document-local variable id.

        Returns:
            ``Resolved`` with the literal, or ``Unresolved`` with the reason.
        """
        graph = self.graph
        current_id = variable_id
        chain: list[TokenRef] = []
        visited: set[tuple[int, str]] = set()
        origin: Variable | None = None

        while True:
            variable = graph.lookup_by_id(current_id)
            if variable is None:
                return Unresolved(
                    ResolutionErrorKind.MISSING_VARIABLE,
                    f"Variable {current_id} not found in {graph.name}",
                    tuple(chain),
                )

            ref = TokenRef(graph.name, variable.id, variable.name)
            if (id(graph), variable.id) in visited:
                chain.append(ref)
                return Unresolved(
                    ResolutionErrorKind.ALIAS_CYCLE,
                    f"Alias cycle through {variable.name}",
                    tuple(chain),
                )
            visited.add((id(graph), variable.id))
            chain.append(ref)
            if origin is None:
                origin = variable

            collection = graph.collection_of(variable)
            if collection is None:
                return Unresolved(
                    ResolutionErrorKind.MISSING_COLLECTION,
                    f"Collection {variable.variable_collection_id} not found for {variable.name}",
                    tuple(chain),
                )

            mode_id = self.selection_for(graph).mode_id_for(collection)
            value = variable.values_by_mode.get(mode_id) if mode_id is not None else None
            if value is None:
                return Unresolved(
                    ResolutionErrorKind.MISSING_VALUE_FOR_MODE,
                    f"No value for {variable.name} in mode {mode_id} of collection {collection.name}",
                    tuple(chain),
                )

            if not isinstance(value, VariableAlias):
                hint = origin.name if origin is variable else f"{origin.name} {variable.name}"
                literal = to_literal(value, variable.resolved_type, hint, self.unitless_keywords)
                return Resolved(
                    literal=literal,
                    variable=variable,
                    chain=tuple(chain),
                    reference=chain[1] if len(chain) > 1 else None,
                    format_hint=hint,
                )

            if value.is_cross_document:
                key = value.key or ""
                found = self._find_key(key)
                if found is None:
                    return Unresolved(
                        ResolutionErrorKind.UNRESOLVED_CROSS_REFERENCE,
                        f"Cross-document reference key '{key}' not found",
                        tuple(chain),
                    )
                logger.debug(f"{chain[-1].name}: following key '{key}' into {found[0].name}")
                graph, target = found
                current_id = target.id
            else:
                current_id = value.id
