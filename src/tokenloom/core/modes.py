"""
Mode selection: mapping requested mode names to concrete mode ids.

The selector is permissive. Callers may request a superset of axes (for
example the same request for several documents), so unknown collection names
are ignored and unknown mode names fall back to the collection default.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping

from .ir import Collection
from .store import TokenGraph

logger = logging.getLogger(__name__)


class ModeSelection(Mapping[str, str]):
    """Chosen mode id per collection name, for exactly one graph."""

    def __init__(self, graph: TokenGraph, mode_ids: dict[str, str], by_collection_id: dict[str, str]):
        self._graph = graph
        self._mode_ids = mode_ids
        self._by_collection_id = by_collection_id

    def __getitem__(self, collection_name: str) -> str:
        return self._mode_ids[collection_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._mode_ids)

    def __len__(self) -> int:
        return len(self._mode_ids)

    def __repr__(self) -> str:
        return f"ModeSelection({self._graph.name!r}, {self._mode_ids!r})"

    def mode_id_for(self, collection: Collection) -> str | None:
        """Chosen mode id for a specific collection object."""
        return self._by_collection_id.get(collection.id)

    def mode_name(self, collection_name: str) -> str | None:
        """Display name of the mode chosen for ``collection_name``."""
        collection = self._graph.collection_by_name(collection_name)
        mode_id = self._mode_ids.get(collection_name)
        if collection is None or mode_id is None:
            return None
        mode = collection.mode_by_id(mode_id)
        return mode.name if mode else None


def _choose_mode_id(collection: Collection, wanted: str | None) -> str:
    if wanted is None:
        return collection.default_mode_id
    mode = collection.mode_by_name(wanted)
    if mode is None:
        logger.debug(
            f"Mode '{wanted}' not in collection '{collection.name}', "
            f"using default '{collection.default_mode.name}'"
        )
        return collection.default_mode_id
    return mode.mode_id


def resolve_modes(graph: TokenGraph, requested: Mapping[str, str] | None = None) -> ModeSelection:
    """Resolve requested mode names to mode ids for every collection in ``graph``.

    Args:
        graph: Token graph whose collections are being selected.
        requested: Collection name -> mode name. Partial; may name
            collections the graph does not have.

    Returns:
        ModeSelection with one entry per collection in the graph.
    """
    requested = requested or {}
    mode_ids: dict[str, str] = {}
    by_collection_id: dict[str, str] = {}

    for collection in graph.collections:
        mode_id = _choose_mode_id(collection, requested.get(collection.name))
        by_collection_id[collection.id] = mode_id
        # Duplicate collection names: the first one is the public entry.
        mode_ids.setdefault(collection.name, mode_id)

    return ModeSelection(graph, mode_ids, by_collection_id)
