"""Impact ranking and small display helpers for the Ready column."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any, TypeVar

from beadboard.models import WorkItem
from beadboard.utils.constants import IMPACT_THRESHOLDS, ImpactLevel
from beadboard.utils.formatters import format_score, get_priority_name

if TYPE_CHECKING:
    from beadboard.graph.metrics import GraphMetrics

ItemT = TypeVar("ItemT", bound=WorkItem)


def sort_tasks_by_impact(
    items: Sequence[ItemT], metrics: GraphMetrics | None
) -> Sequence[ItemT]:
    """Stable sort: impact desc, then unblock count desc, critical path first.

    Items without metrics sink to the end. Without metrics the input is
    returned unchanged.
    """
    if metrics is None:
        return items

    def _key(item: ItemT) -> tuple[int, float, int, int]:
        m = metrics.task_metrics.get(item.id)
        if m is None:
            return (1, 0.0, 0, 0)
        return (0, -m.impact_score, -m.unblock_count, 0 if m.is_critical_path else 1)

    return sorted(items, key=_key)


def format_unblock_badge(unblock_count: int) -> str | None:
    """Badge text for a card, or None when nothing is unblocked."""
    if unblock_count == 0:
        return None
    if unblock_count == 1:
        return "Unblocks 1 task"
    return f"Unblocks {unblock_count} tasks"


def get_impact_level(impact_score: float) -> ImpactLevel:
    """Bucket an impact score: critical >= 50, high >= 25, medium >= 10."""
    for threshold, level in IMPACT_THRESHOLDS:
        if impact_score >= threshold:
            return level
    return ImpactLevel.LOW


def summarize_metrics(
    metrics: GraphMetrics, items: Iterable[WorkItem] = ()
) -> dict[str, Any]:
    """JSON-serializable summary, ranked by impact."""
    by_id = {item.id: item for item in items}
    ranked = []
    for task_id in metrics.ranked_tasks:
        m = metrics.task_metrics[task_id]
        entry: dict[str, Any] = {
            "id": task_id,
            "impactScore": format_score(m.impact_score),
            "impactLevel": get_impact_level(m.impact_score).value,
            "unblockCount": m.unblock_count,
            "unblockBadge": format_unblock_badge(m.unblock_count),
            "isCriticalPath": m.is_critical_path,
            "depth": m.depth,
        }
        item = by_id.get(task_id)
        if item is not None:
            entry["title"] = item.title
            entry["priority"] = get_priority_name(item.priority)
        ranked.append(entry)

    out: dict[str, Any] = {
        "totalTasks": metrics.total_tasks,
        "criticalPathCount": metrics.critical_path_count,
        "readyCount": len(metrics.ready_tasks),
        "blockedCount": len(metrics.blocked_tasks),
        "ranked": ranked,
    }
    if metrics.cycles:
        out["cycles"] = metrics.cycles
    return out
