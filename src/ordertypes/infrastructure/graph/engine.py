"""HierarchyGraph — lazy-built NetworkX tree of order types.

Edges point parent -> child. Rebuilt per invocation; the registry is
small enough that a full rebuild is cheap.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import networkx as nx

if TYPE_CHECKING:
    from ordertypes.infrastructure.repositories.order_types import OrderTypeRepository

type _Graph = nx.DiGraph


class HierarchyGraph:
    """Lazy-loading parent/child graph backed by the order type table."""

    def __init__(self, repository: OrderTypeRepository) -> None:
        self._repository = repository
        self._graph: _Graph | None = None

    @property
    def graph(self) -> _Graph:
        """Return the graph, building from the DB on first access."""
        if self._graph is None:
            self._graph = self._build()
        return self._graph

    def invalidate(self) -> None:
        """Clear the cached graph, forcing rebuild on next access."""
        self._graph = None

    def _build(self) -> _Graph:
        g: _Graph = nx.DiGraph()
        for uuid, parent_uuid in self._repository.parent_links():
            g.add_node(uuid)
            if parent_uuid is not None:
                g.add_edge(parent_uuid, uuid)
        return g

    def descendants(self, uuid: str) -> set[str]:
        """Return uuids of every node below *uuid* (not including it)."""
        if uuid not in self.graph:
            return set()
        return set(nx.descendants(self.graph, uuid))

    def depth(self, uuid: str) -> int:
        """Number of ancestors above *uuid*; roots have depth 0."""
        if uuid not in self.graph:
            return 0
        return len(nx.ancestors(self.graph, uuid))
