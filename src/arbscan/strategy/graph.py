"""
Currency pair graph.

Uses a NetworkX undirected graph as the backing store. The graph is
built once at startup and only read afterwards.
"""

import logging

import networkx as nx

from arbscan.core.exceptions import (
    DuplicateEdge,
    DuplicateVertex,
    StructuralError,
    UnknownVertex,
)
from arbscan.core.types import PairList


logger = logging.getLogger(__name__)


class PairGraph:
    """
    Undirected graph of currencies.

    - Nodes are currency codes (eth, usd, btc, ...)
    - Edges are tradable pairs, in either direction

    Vertex and adjacency order follow insertion order, which fixes the
    order in which cycles are discovered.
    """

    def __init__(self) -> None:
        """Initialize an empty graph."""
        self._graph: nx.Graph = nx.Graph()

    @classmethod
    def from_pairs(cls, pairs: PairList) -> "PairGraph":
        """
        Build a graph from a seed edge list.

        Currencies shared by several pairs are added once; a repeated
        pair is still a DuplicateEdge.

        Args:
            pairs: Sequence of [currency, currency] entries.

        Returns:
            Populated graph.

        Raises:
            StructuralError: On a malformed entry or duplicate edge.
        """
        graph = cls()

        for i, pair in enumerate(pairs):
            if isinstance(pair, str) or len(pair) != 2:
                raise StructuralError(f"Pair #{i} must have exactly two currencies: {pair!r}")

            a, b = pair
            if a not in graph:
                graph.add_vertex(a)
            if b not in graph:
                graph.add_vertex(b)
            graph.add_edge(a, b)

        logger.info(
            f"Built graph with {len(graph)} currencies, {graph.edge_count} pairs"
        )

        return graph

    def add_vertex(self, key: str) -> None:
        """
        Insert a currency.

        Raises:
            DuplicateVertex: If the key is already present.
        """
        if key in self._graph:
            raise DuplicateVertex(key)

        self._graph.add_node(key)

    def add_edge(self, a: str, b: str) -> None:
        """
        Link two existing currencies.

        Raises:
            UnknownVertex: If either endpoint is missing.
            DuplicateEdge: If the pair is already linked in either direction.
        """
        if a not in self._graph or b not in self._graph:
            raise UnknownVertex(a, b)

        # nx.Graph edges are unordered, so this covers (b, a) too
        if self._graph.has_edge(a, b):
            raise DuplicateEdge(a, b)

        self._graph.add_edge(a, b)

    def vertices(self) -> list[str]:
        """Get all currencies in insertion order."""
        return list(self._graph.nodes)

    def neighbors(self, key: str) -> list[str]:
        """Get adjacent currencies in insertion order."""
        return list(self._graph.adj[key])

    @property
    def edge_count(self) -> int:
        """Get number of pairs."""
        return int(self._graph.number_of_edges())

    def describe(self) -> str:
        """Adjacency listing, one currency per line."""
        return "\n".join(
            f"{key} : {' '.join(self.neighbors(key))}" for key in self._graph.nodes
        )

    def __contains__(self, key: object) -> bool:
        return key in self._graph

    def __len__(self) -> int:
        return int(self._graph.number_of_nodes())
