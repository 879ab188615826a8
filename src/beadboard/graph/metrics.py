"""Graph metrics for task prioritization.

- PageRank: recursive importance (items depended on by important items)
- Betweenness: bottlenecks sitting on many dependency paths
- Unblock count: items transitively freed when this one is resolved
- Critical path: high/urgent items that block other work
- Impact score: 0-100 blend of the above, used for ranking
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from beadboard.graph.analytics import GraphAnalyticsProvider, NetworkXAnalytics
from beadboard.graph.builder import DependencyGraph, build_dependency_graph
from beadboard.graph.fingerprint import structural_fingerprint
from beadboard.graph.ranking import sort_tasks_by_impact
from beadboard.graph.scheduler import ImmediateScheduler, RecomputeScheduler
from beadboard.models import WorkItem
from beadboard.utils.constants import (
    BETWEENNESS_WEIGHT,
    METRIC_CAP,
    OUT_DEGREE_SCALE,
    OUT_DEGREE_WEIGHT,
    PAGERANK_WEIGHT,
    UNBLOCK_SCALE,
    UNBLOCK_WEIGHT,
    priority_weight,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskMetrics:
    """Metrics computed for a single item."""

    page_rank: float
    betweenness: float
    in_degree: int  # items blocking this one
    out_degree: int  # items this one blocks
    degree: int
    unblock_count: int
    depth: int  # 0 = no blockers
    is_critical_path: bool
    critical_score: float
    impact_score: float


@dataclass(frozen=True)
class GraphMetrics:
    """Complete analysis of one item snapshot."""

    task_metrics: dict[str, TaskMetrics] = field(default_factory=dict)
    ranked_tasks: list[str] = field(default_factory=list)
    total_tasks: int = 0
    critical_path_count: int = 0
    ready_tasks: list[str] = field(default_factory=list)
    blocked_tasks: list[str] = field(default_factory=list)
    cycles: list[list[str]] = field(default_factory=list)

    @classmethod
    def empty(cls) -> GraphMetrics:
        return cls()


def impact_score(
    page_rank: float, betweenness: float, out_degree: int, unblock_count: int
) -> float:
    """Blend raw metrics into a 0-100 impact score."""
    return (
        PAGERANK_WEIGHT * page_rank * 100
        + BETWEENNESS_WEIGHT * betweenness * 100
        + OUT_DEGREE_WEIGHT * min(out_degree * OUT_DEGREE_SCALE, METRIC_CAP)
        + UNBLOCK_WEIGHT * min(unblock_count * UNBLOCK_SCALE, METRIC_CAP)
    )


def critical_score(weight: int, out_degree: int, unblock_count: int) -> float:
    return weight * (1 + out_degree) * (1 + unblock_count * 0.5)


def _chain_depths(graph: DependencyGraph) -> tuple[dict[str, int], list[list[str]]]:
    """Longest chain of blockers above each node, plus any cycles met.

    Iterative post-order over predecessors. An edge that closes a cycle adds
    nothing to the depth.
    """
    depth: dict[str, int] = {}
    cycles: list[list[str]] = []

    for root in graph.nodes:
        if root in depth:
            continue
        stack = [(root, iter(graph.predecessors(root)))]
        on_path = {root}
        while stack:
            node, parents = stack[-1]
            parent = next(parents, None)
            if parent is None:
                stack.pop()
                on_path.discard(node)
                depth[node] = max(
                    (depth[p] + 1 for p in graph.predecessors(node) if p in depth),
                    default=0,
                )
                continue
            if parent in depth:
                continue
            if parent in on_path:
                path = [n for n, _ in stack]
                cycle = list(reversed(path[path.index(parent):] + [parent]))
                logger.warning("Dependency cycle detected: %s", " -> ".join(cycle))
                cycles.append(cycle)
                continue
            on_path.add(parent)
            stack.append((parent, iter(graph.predecessors(parent))))

    return depth, cycles


def compute_graph_metrics(
    items: Iterable[WorkItem],
    provider: GraphAnalyticsProvider | None = None,
) -> GraphMetrics:
    """Compute all graph metrics for a set of items."""
    unique: dict[str, WorkItem] = {}
    for item in items:
        unique.setdefault(item.id, item)
    tasks = list(unique.values())
    if not tasks:
        return GraphMetrics.empty()

    provider = provider or NetworkXAnalytics()
    graph = build_dependency_graph(tasks)
    page_ranks = provider.pagerank(graph)
    betweenness = provider.betweenness(graph)
    depths, cycles = _chain_depths(graph)

    task_metrics: dict[str, TaskMetrics] = {}
    ready: list[str] = []
    blocked: list[str] = []

    for task in tasks:
        node = task.id
        in_deg = graph.in_degree(node)
        out_deg = graph.out_degree(node)
        unblock_count = len(graph.reachable_from(node))
        weight = priority_weight(task.priority)
        pr = page_ranks.get(node, 0.0)
        bc = betweenness.get(node, 0.0)

        task_metrics[node] = TaskMetrics(
            page_rank=pr,
            betweenness=bc,
            in_degree=in_deg,
            out_degree=out_deg,
            degree=in_deg + out_deg,
            unblock_count=unblock_count,
            depth=depths.get(node, 0),
            is_critical_path=weight >= 3 and out_deg > 0,
            critical_score=critical_score(weight, out_deg, unblock_count),
            impact_score=impact_score(pr, bc, out_deg, unblock_count),
        )
        (ready if in_deg == 0 else blocked).append(node)

    partial = GraphMetrics(task_metrics=task_metrics)
    ranked = [task.id for task in sort_tasks_by_impact(tasks, partial)]

    return GraphMetrics(
        task_metrics=task_metrics,
        ranked_tasks=ranked,
        total_tasks=len(tasks),
        critical_path_count=sum(1 for m in task_metrics.values() if m.is_critical_path),
        ready_tasks=ready,
        blocked_tasks=blocked,
        cycles=cycles,
    )


def get_task_metrics(metrics: GraphMetrics | None, task_id: str) -> TaskMetrics | None:
    """Metrics for one item, or None if not computed."""
    if metrics is None:
        return None
    return metrics.task_metrics.get(task_id)


class MetricsEngine:
    """Caches graph metrics behind the structural fingerprint of the items.

    ``compute()`` recomputes only when ids, priorities or blocking relations
    changed. ``request_update()`` hands the recomputation to the owned
    scheduler, which may run it now or after a debounce delay.
    """

    def __init__(
        self,
        provider: GraphAnalyticsProvider | None = None,
        scheduler: RecomputeScheduler | None = None,
    ) -> None:
        self._provider = provider or NetworkXAnalytics()
        self._scheduler = scheduler or ImmediateScheduler()
        self._fingerprint: str | None = None
        self._metrics: GraphMetrics | None = None
        self.compute_count = 0

    @property
    def metrics(self) -> GraphMetrics:
        """Latest metrics; empty until the first computation."""
        return self._metrics if self._metrics is not None else GraphMetrics.empty()

    @property
    def fingerprint(self) -> str | None:
        return self._fingerprint

    @property
    def scheduler(self) -> RecomputeScheduler:
        return self._scheduler

    def compute(self, items: Iterable[WorkItem]) -> GraphMetrics:
        snapshot = list(items)
        fingerprint = structural_fingerprint(snapshot)
        if self._metrics is not None and fingerprint == self._fingerprint:
            logger.debug("Dependency structure unchanged; reusing metrics.")
            return self._metrics

        self._metrics = compute_graph_metrics(snapshot, self._provider)
        self._fingerprint = fingerprint
        self.compute_count += 1
        logger.debug(
            "Computed graph metrics for %d item(s), %d on critical path.",
            self._metrics.total_tasks, self._metrics.critical_path_count,
        )
        return self._metrics

    def request_update(self, items: Iterable[WorkItem]) -> None:
        snapshot = list(items)
        self._scheduler.schedule(lambda: self.compute(snapshot))

    def invalidate(self) -> None:
        """Forget cached metrics so the next compute() always runs."""
        self._fingerprint = None
        self._metrics = None
