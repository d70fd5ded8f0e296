"""
Token graph: an indexed, read-only view of one parsed export.

Each loaded document yields its own ``TokenGraph``. Indices are built once in
the constructor; nothing mutates the graph afterwards. Cross-document
resolution passes additional graphs explicitly instead of sharing registries.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .ir import Collection, TokenDocument, Variable, VariableType


@dataclass(frozen=True)
class CollectionInfo:
    """Discovery summary of a collection."""

    id: str
    name: str
    modes: tuple[str, ...]
    default_mode: str


@dataclass(frozen=True)
class VariableMatch:
    """Discovery summary of a variable matched by name pattern."""

    id: str
    name: str
    type: VariableType
    collection_name: str


class TokenGraph:
    """
    Indexed collections and variables of a single export.

    Lookups are O(1) by id, by key, and by name. Name lookup returns the first
    variable with that name in document order; the same name in two
    collections is not disambiguated.
    """

    def __init__(self, document: TokenDocument, name: str = "tokens"):
        self.name = name
        self.document = document

        self._collections: dict[str, Collection] = {}
        self._collections_by_name: dict[str, Collection] = {}
        self._variables: dict[str, Variable] = {}
        self._by_key: dict[str, Variable] = {}
        self._by_name: dict[str, Variable] = {}
        self._owner: dict[str, str] = {}

        for collection in document.collections:
            self._collections[collection.id] = collection
            self._collections_by_name.setdefault(collection.name, collection)
            for variable in collection.variables:
                self._variables[variable.id] = variable
                self._by_key.setdefault(variable.key, variable)
                self._by_name.setdefault(variable.name, variable)
                self._owner[variable.id] = collection.id

    def __repr__(self) -> str:
        return (
            f"TokenGraph(name={self.name!r}, collections={len(self._collections)}, "
            f"variables={len(self._variables)})"
        )

    def __len__(self) -> int:
        return len(self._variables)

    def __contains__(self, variable_id: object) -> bool:
        return variable_id in self._variables

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def lookup_by_id(self, variable_id: str) -> Variable | None:
        return self._variables.get(variable_id)

    def lookup_by_key(self, key: str) -> Variable | None:
        return self._by_key.get(key)

    def lookup_by_name(self, name: str) -> Variable | None:
        return self._by_name.get(name)

    def collection_of(self, variable: Variable) -> Collection | None:
        """Return the collection that owns ``variable``."""
        collection_id = self._owner.get(variable.id, variable.variable_collection_id)
        if collection_id is None:
            return None
        return self.collection_by_id(collection_id)

    def collection_by_id(self, collection_id: str) -> Collection | None:
        return self._collections.get(collection_id)

    def collection_by_name(self, name: str) -> Collection | None:
        return self._collections_by_name.get(name)

    # -------------------------------------------------------------------------
    # Iteration
    # -------------------------------------------------------------------------

    @property
    def collections(self) -> list[Collection]:
        return list(self._collections.values())

    def variables(self) -> Iterator[Variable]:
        """Iterate variables in document order."""
        return iter(self._variables.values())

    # -------------------------------------------------------------------------
    # Discovery
    # -------------------------------------------------------------------------

    def collections_info(self, names: Iterable[str] | None = None) -> list[CollectionInfo]:
        """List available modes and the default mode name per collection.

        Args:
            names: Optional collection names to restrict the listing to.

        Returns:
            One entry per matching collection, in document order.
        """
        wanted = set(names) if names is not None else None
        infos: list[CollectionInfo] = []
        for collection in self._collections.values():
            if wanted is not None and collection.name not in wanted:
                continue
            infos.append(
                CollectionInfo(
                    id=collection.id,
                    name=collection.name,
                    modes=tuple(mode.name for mode in collection.modes),
                    default_mode=collection.default_mode.name,
                )
            )
        return infos

    def find_variables(self, pattern: str) -> list[VariableMatch]:
        """Find variables whose name contains ``pattern``."""
        matches: list[VariableMatch] = []
        for variable in self._variables.values():
            if pattern not in variable.name:
                continue
            collection = self.collection_of(variable)
            matches.append(
                VariableMatch(
                    id=variable.id,
                    name=variable.name,
                    type=variable.resolved_type,
                    collection_name=collection.name if collection else "",
                )
            )
        return matches
