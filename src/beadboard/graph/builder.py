"""Dependency graph built from work item blocking relations.

Edge direction is blocker -> blocked: ``A -> B`` means A blocks B.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

import networkx as nx

from beadboard.models import WorkItem

logger = logging.getLogger(__name__)


class DependencyCycleError(ValueError):
    """Raised when a blocking cycle is found in input that must be acyclic."""

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__("Dependency cycle: " + " -> ".join(cycle))


class DependencyGraph:
    """Blocker -> blocked graph over item ids, backed by :class:`networkx.DiGraph`.

    Nodes and adjacency keep insertion order. Self-loops and repeated edges
    are refused.
    """

    def __init__(self) -> None:
        self._digraph = nx.DiGraph()

    @property
    def digraph(self) -> nx.DiGraph:
        """The underlying networkx graph (treat as read-only)."""
        return self._digraph

    def add_node(self, node: str) -> None:
        self._digraph.add_node(node)

    def add_edge(self, source: str, target: str) -> bool:
        """Add ``source -> target``. Returns False for self-loops and duplicates."""
        if source == target or self._digraph.has_edge(source, target):
            return False
        self._digraph.add_edge(source, target)
        return True

    def has_node(self, node: str) -> bool:
        return self._digraph.has_node(node)

    def has_edge(self, source: str, target: str) -> bool:
        return self._digraph.has_edge(source, target)

    @property
    def nodes(self) -> list[str]:
        return list(self._digraph.nodes)

    def __len__(self) -> int:
        return self._digraph.number_of_nodes()

    def __contains__(self, node: object) -> bool:
        return node in self._digraph

    @property
    def edge_count(self) -> int:
        return self._digraph.number_of_edges()

    def edges(self) -> Iterator[tuple[str, str]]:
        yield from self._digraph.edges()

    def successors(self, node: str) -> list[str]:
        return list(self._digraph.successors(node))

    def predecessors(self, node: str) -> list[str]:
        return list(self._digraph.predecessors(node))

    def out_degree(self, node: str) -> int:
        return self._digraph.out_degree(node)

    def in_degree(self, node: str) -> int:
        return self._digraph.in_degree(node)

    def reachable_from(self, node: str) -> set[str]:
        """Distinct nodes reachable from *node* via outgoing edges (never *node*)."""
        return nx.descendants(self._digraph, node)

    def find_cycle(self) -> list[str] | None:
        """Return the first blocking cycle found (``[a, b, ..., a]``), or None."""
        try:
            edges = nx.find_cycle(self._digraph)
        except nx.NetworkXNoCycle:
            return None
        return [edge[0] for edge in edges] + [edges[0][0]]


def assert_acyclic(graph: DependencyGraph) -> None:
    """Raise DependencyCycleError if *graph* contains a blocking cycle."""
    cycle = graph.find_cycle()
    if cycle is not None:
        raise DependencyCycleError(cycle)


def build_dependency_graph(items: Iterable[WorkItem]) -> DependencyGraph:
    """Build the blocker -> blocked graph for *items*.

    References to ids outside the item set are dropped, as are self-loops
    and repeated edges.
    """
    items = list(items)
    graph = DependencyGraph()
    for item in items:
        graph.add_node(item.id)

    dropped = 0
    for item in items:
        for blocker_id in item.blocked_by:
            if graph.has_node(blocker_id):
                graph.add_edge(blocker_id, item.id)
            else:
                dropped += 1
        for blocked_id in item.blocking:
            if graph.has_node(blocked_id):
                graph.add_edge(item.id, blocked_id)
            else:
                dropped += 1

    if dropped:
        logger.debug("Dropped %d dependency reference(s) to unknown items.", dropped)
    return graph
