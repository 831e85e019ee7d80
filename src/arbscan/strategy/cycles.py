"""
Fixed-length cycle enumeration.

Depth-first search from every currency, recording each closed walk
whose length matches the requested cycle length.
"""

import logging

from arbscan.config.constants import MIN_CYCLE_LENGTH
from arbscan.core.types import CycleKey, cycle_id
from arbscan.strategy.graph import PairGraph


logger = logging.getLogger(__name__)


class ActivePath:
    """
    Vertices on the current, not yet backtracked, DFS branch.

    Ordered list plus a position map for O(1) membership and
    distance lookups. Callers push before recursing and pop after
    returning.
    """

    __slots__ = ("_stack", "_positions")

    def __init__(self) -> None:
        self._stack: list[str] = []
        self._positions: dict[str, int] = {}

    def push(self, key: str) -> None:
        self._positions[key] = len(self._stack)
        self._stack.append(key)

    def pop(self) -> str:
        key = self._stack.pop()
        del self._positions[key]
        return key

    def index(self, key: str) -> int:
        return self._positions[key]

    @property
    def predecessor(self) -> str | None:
        """Vertex visited immediately before the current one."""
        return self._stack[-2] if len(self._stack) > 1 else None

    def slice_from(self, key: str) -> CycleKey:
        """Path from `key` to the current vertex, inclusive."""
        return tuple(self._stack[self._positions[key]:])

    def __contains__(self, key: object) -> bool:
        return key in self._positions

    def __len__(self) -> int:
        return len(self._stack)


def enumerate_cycles(graph: PairGraph, length: int) -> dict[CycleKey, str]:
    """
    Find all simple cycles of a given length.

    Every start vertex and traversal order that closes a loop registers
    its own rotation; rotations of the same loop are not collapsed.

    Args:
        graph: Currency graph to search.
        length: Number of vertices (legs) per cycle.

    Returns:
        Mapping of cycle key -> closing vertex, in discovery order.

    Raises:
        ValueError: If length is below the minimum cycle length.
    """
    if length < MIN_CYCLE_LENGTH:
        raise ValueError(f"Cycle length must be at least {MIN_CYCLE_LENGTH}, got {length}")

    cycles: dict[CycleKey, str] = {}

    for start in graph.vertices():
        _explore(graph, start, ActivePath(), length, cycles)

    logger.info(f"Found {len(cycles)} cycles of length {length}")

    return cycles


def _explore(
    graph: PairGraph,
    vertex: str,
    path: ActivePath,
    length: int,
    cycles: dict[CycleKey, str],
) -> None:
    """Recursive DFS step; leaves `path` as it found it."""
    path.push(vertex)
    predecessor = path.predecessor

    for neighbor in graph.neighbors(vertex):
        if neighbor in path:
            if neighbor != predecessor and len(path) - path.index(neighbor) == length:
                cycle = path.slice_from(neighbor)
                cycles[cycle] = neighbor
                logger.debug(f"Cycle {cycle_id(cycle)}")
        else:
            _explore(graph, neighbor, path, length, cycles)

    path.pop()
