"""Structural fingerprint of an item set.

Only ids, priorities and blocking relations take part, so edits to titles,
labels or assignees never trigger a metrics recomputation.
"""

from collections.abc import Iterable

from beadboard.models import WorkItem


def item_fingerprint(item: WorkItem) -> str:
    blocked_by = ",".join(sorted(item.blocked_by))
    blocking = ",".join(sorted(item.blocking))
    priority = "" if item.priority is None else item.priority
    return f"{item.id}:{priority}:{blocked_by}:{blocking}"


def structural_fingerprint(items: Iterable[WorkItem]) -> str:
    """Deterministic key, independent of item and relation order."""
    return "|".join(sorted(item_fingerprint(item) for item in items))
