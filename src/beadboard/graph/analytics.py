"""Graph analytics providers: PageRank and betweenness centrality.

The metrics engine only talks to the :class:`GraphAnalyticsProvider`
protocol; :class:`NetworkXAnalytics` is the default implementation.
"""

from __future__ import annotations

import logging
from typing import Protocol

import networkx as nx

from beadboard.config import get_settings
from beadboard.graph.builder import DependencyGraph

logger = logging.getLogger(__name__)


class GraphAnalyticsProvider(Protocol):
    """Centrality primitives used by the metrics engine."""

    def pagerank(self, graph: DependencyGraph) -> dict[str, float]:
        """Damped recursive importance per node; all zeros on an edgeless graph."""
        ...

    def betweenness(self, graph: DependencyGraph) -> dict[str, float]:
        """Normalized betweenness per node; all zeros on an edgeless graph."""
        ...


class NetworkXAnalytics:
    """PageRank and betweenness computed by networkx.

    PageRank spreads dangling-node mass uniformly and stops once the L1
    change drops below ``tolerance * N``. Betweenness is normalized by
    ``(n-1)(n-2)`` for directed graphs.
    """

    def __init__(
        self,
        damping: float | None = None,
        max_iterations: int | None = None,
        tolerance: float | None = None,
    ) -> None:
        settings = get_settings()
        self.damping = settings.pagerank_damping if damping is None else damping
        self.max_iterations = (
            settings.pagerank_max_iterations if max_iterations is None else max_iterations
        )
        self.tolerance = settings.pagerank_tolerance if tolerance is None else tolerance

    def pagerank(self, graph: DependencyGraph) -> dict[str, float]:
        nodes = graph.nodes
        if graph.edge_count == 0:
            return dict.fromkeys(nodes, 0.0)

        try:
            ranks = nx.pagerank(
                graph.digraph,
                alpha=self.damping,
                max_iter=self.max_iterations,
                tol=self.tolerance,
            )
        except nx.PowerIterationFailedConvergence:
            logger.warning(
                "PageRank did not converge within %d iterations; scoring it as zero.",
                self.max_iterations,
            )
            return dict.fromkeys(nodes, 0.0)
        return {node: float(ranks[node]) for node in nodes}

    def betweenness(self, graph: DependencyGraph) -> dict[str, float]:
        nodes = graph.nodes
        if graph.edge_count == 0 or len(nodes) <= 2:
            return dict.fromkeys(nodes, 0.0)
        scores = nx.betweenness_centrality(graph.digraph, normalized=True)
        return {node: float(scores[node]) for node in nodes}
