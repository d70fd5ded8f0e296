"""
Resolution pass: resolve and format every variable of a graph.

A pass never raises for a bad token. Each failure becomes a ``Diagnostic``
and the token is left out of the result; everything else still resolves.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from .errors import Diagnostic
from .formatting import DEFAULT_UNITLESS_KEYWORDS, ColorFormat, format_literal
from .ir import TokenLiteral, Variable, VariableType
from .resolver import AliasResolver, Resolution, Resolved, TokenRef
from .store import TokenGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedToken:
    """A token with its final value under one mode selection."""

    name: str
    document: str
    collection: str
    mode: str
    type: VariableType
    literal: TokenLiteral
    value: str | int | float
    variable_id: str
    key: str
    description: str | None = None
    reference: TokenRef | None = None
    format_hint: str = ""

    @property
    def path(self) -> list[str]:
        """Hierarchical name segments."""
        return [segment for segment in self.name.split("/") if segment]

    @property
    def ref(self) -> tuple[str, str]:
        """Identity of this token for reference lookups."""
        return (self.document, self.variable_id)

    def formatted(self, color_format: ColorFormat = ColorFormat.HEX) -> str | int | float:
        """Re-render the literal for another color format."""
        return format_literal(self.literal, self.format_hint or self.name, color_format)


@dataclass(frozen=True)
class ResolutionSummary:
    """Aggregate outcome of a pass."""

    resolved: int
    failed: int

    @property
    def total(self) -> int:
        return self.resolved + self.failed

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def __str__(self) -> str:
        return f"{self.resolved} resolved, {self.failed} failed"


TokenPredicate = Callable[[ResolvedToken], bool]


@dataclass
class ResolvedTokenSet:
    """Resolved tokens in document order, plus diagnostics for the failures."""

    tokens: list[ResolvedToken] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    _by_ref: dict[tuple[str, str], ResolvedToken] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __iter__(self) -> Iterator[ResolvedToken]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    @property
    def summary(self) -> ResolutionSummary:
        return ResolutionSummary(resolved=len(self.tokens), failed=len(self.diagnostics))

    def get(self, name: str, document: str | None = None) -> ResolvedToken | None:
        """First token called ``name`` (optionally within ``document``)."""
        for token in self.tokens:
            if token.name == name and (document is None or token.document == document):
                return token
        return None

    def find_reference(self, ref: TokenRef) -> ResolvedToken | None:
        """The resolved token a reference points at, if it resolved."""
        if len(self._by_ref) != len(self.tokens):
            self._by_ref = {}
            for token in self.tokens:
                self._by_ref.setdefault(token.ref, token)
        return self._by_ref.get((ref.document, ref.variable_id))

    def as_mapping(self, color_format: ColorFormat | None = None) -> dict[str, str | int | float]:
        """Token name -> formatted value. First token wins on name collisions."""
        mapping: dict[str, str | int | float] = {}
        for token in self.tokens:
            if token.name in mapping:
                continue
            mapping[token.name] = token.formatted(color_format) if color_format else token.value
        return mapping

    def select(self, predicate: TokenPredicate | None) -> list[ResolvedToken]:
        """Tokens matching ``predicate`` (all tokens when None)."""
        if predicate is None:
            return list(self.tokens)
        return [token for token in self.tokens if predicate(token)]

    def merge(self, other: ResolvedTokenSet) -> ResolvedTokenSet:
        """New set holding this set's entries followed by ``other``'s."""
        return ResolvedTokenSet(
            tokens=[*self.tokens, *other.tokens],
            diagnostics=[*self.diagnostics, *other.diagnostics],
        )


def _to_token(
    graph: TokenGraph,
    resolver: AliasResolver,
    variable: Variable,
    resolution: Resolved,
    color_format: ColorFormat,
) -> ResolvedToken:
    collection = graph.collection_of(variable)
    collection_name = collection.name if collection else ""
    mode = resolver.selection_for(graph).mode_name(collection_name) if collection else None
    return ResolvedToken(
        name=variable.name,
        document=graph.name,
        collection=collection_name,
        mode=mode or "",
        type=variable.resolved_type,
        literal=resolution.literal,
        value=format_literal(resolution.literal, resolution.format_hint, color_format),
        variable_id=variable.id,
        key=variable.key,
        description=variable.description,
        reference=resolution.reference,
        format_hint=resolution.format_hint,
    )


def _to_diagnostic(graph: TokenGraph, variable: Variable, resolution: Resolution) -> Diagnostic:
    assert not isinstance(resolution, Resolved)
    collection = graph.collection_of(variable)
    return Diagnostic(
        token_name=variable.name,
        kind=resolution.kind,
        message=resolution.message,
        document=graph.name,
        collection=collection.name if collection else None,
        chain=tuple(ref.label() for ref in resolution.chain),
    )


def resolve_graph(
    graph: TokenGraph,
    requested: Mapping[str, str] | None = None,
    references: Sequence[TokenGraph] = (),
    *,
    color_format: ColorFormat = ColorFormat.HEX,
    unitless_keywords: Iterable[str] = DEFAULT_UNITLESS_KEYWORDS,
    max_workers: int = 1,
) -> ResolvedTokenSet:
    """Resolve every variable in ``graph``.

    Args:
        graph: Graph whose variables are resolved.
        requested: Collection name -> mode name (partial).
        references: Other graphs that cross-document aliases may point into.
        color_format: Color representation for ``ResolvedToken.value``.
        unitless_keywords: Name fragments marking FLOAT tokens unitless.
        max_workers: Resolve in a thread pool when greater than 1.

    Returns:
        ResolvedTokenSet in document order, with diagnostics for failures.
    """
    resolver = AliasResolver(graph, requested, references, unitless_keywords)
    variables = list(graph.variables())

    if max_workers > 1 and len(variables) > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(variables))) as executor:
            # map() keeps input order
            resolutions = list(executor.map(lambda v: resolver.resolve(v.id), variables))
    else:
        resolutions = [resolver.resolve(variable.id) for variable in variables]

    result = ResolvedTokenSet()
    for variable, resolution in zip(variables, resolutions, strict=True):
        if isinstance(resolution, Resolved):
            result.tokens.append(_to_token(graph, resolver, variable, resolution, color_format))
        else:
            diagnostic = _to_diagnostic(graph, variable, resolution)
            logger.warning(diagnostic.format())
            result.diagnostics.append(diagnostic)

    logger.info(f"Resolved {graph.name}: {result.summary}")
    return result
