"""Dependency-graph analytics for task prioritization."""

from beadboard.graph.analytics import GraphAnalyticsProvider, NetworkXAnalytics
from beadboard.graph.builder import (
    DependencyCycleError,
    DependencyGraph,
    assert_acyclic,
    build_dependency_graph,
)
from beadboard.graph.fingerprint import structural_fingerprint
from beadboard.graph.metrics import (
    GraphMetrics,
    MetricsEngine,
    TaskMetrics,
    compute_graph_metrics,
    get_task_metrics,
)
from beadboard.graph.ranking import (
    format_unblock_badge,
    get_impact_level,
    sort_tasks_by_impact,
    summarize_metrics,
)
from beadboard.graph.scheduler import (
    DebouncedScheduler,
    ImmediateScheduler,
    RecomputeScheduler,
)

__all__ = [
    "DebouncedScheduler",
    "DependencyCycleError",
    "DependencyGraph",
    "GraphAnalyticsProvider",
    "GraphMetrics",
    "ImmediateScheduler",
    "MetricsEngine",
    "NetworkXAnalytics",
    "RecomputeScheduler",
    "TaskMetrics",
    "assert_acyclic",
    "build_dependency_graph",
    "compute_graph_metrics",
    "format_unblock_badge",
    "get_impact_level",
    "get_task_metrics",
    "sort_tasks_by_impact",
    "structural_fingerprint",
    "summarize_metrics",
]
