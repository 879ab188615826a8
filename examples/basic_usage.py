"""Basic usage example for beadboard."""

import asyncio
import json
import sys

from beadboard.bql import BQL_COLUMN_PRESETS, compile_query, filter_items, validate_query
from beadboard.graph import (
    DebouncedScheduler,
    MetricsEngine,
    sort_tasks_by_impact,
    summarize_metrics,
)
from beadboard.models import WorkItem

SAMPLE_ISSUES = [
    {"id": "bd-1", "title": "Design schema", "priority": 1, "status": "open",
     "type": "feature", "blocks": ["bd-2", "bd-3"]},
    {"id": "bd-2", "title": "Write migrations", "priority": 2, "status": "open",
     "type": "feature", "blocks": ["bd-4"], "assignee": "dana"},
    {"id": "bd-3", "title": "Fix login redirect", "priority": "high",
     "status": "in_progress", "type": "bug", "labels": ["auth"]},
    {"id": "bd-4", "title": "Ship release", "priority": 3, "status": "open",
     "type": "task"},
]


def load_items() -> list[WorkItem]:
    """Items from ``bd list --json`` on stdin, or the built-in sample."""
    data = SAMPLE_ISSUES if sys.stdin.isatty() else json.load(sys.stdin)
    return [WorkItem.model_validate(issue) for issue in data]


async def main() -> None:
    """Demonstrate queries and dependency metrics."""
    items = load_items()

    print("\n=== Filtering ===")
    for query in ["status:open AND priority:1-2", "labels:auth OR type:bug", "(status:open"]:
        check = validate_query(query)
        if not check.valid:
            print(f"{query!r}: invalid ({check.error})")
            continue
        matched = filter_items(items, compile_query(query))
        print(f"{query!r}: {[item.id for item in matched]}")

    print("\n=== Column Presets ===")
    for preset in BQL_COLUMN_PRESETS.values():
        matched = filter_items(items, compile_query(preset.query))
        print(f"{preset.name}: {len(matched)} item(s)")

    print("\n=== Dependency Metrics ===")
    engine = MetricsEngine(scheduler=DebouncedScheduler(delay_secs=0.05))
    engine.request_update(items)
    engine.request_update(items)  # coalesced with the first
    await asyncio.sleep(0.1)
    print(f"Recomputations: {engine.compute_count}")

    for item in sort_tasks_by_impact(items, engine.metrics):
        m = engine.metrics.task_metrics[item.id]
        print(f"{item.id}: impact {m.impact_score:.1f}, unblocks {m.unblock_count}")

    print("\n=== Summary ===")
    print(json.dumps(summarize_metrics(engine.metrics, items), indent=2))


if __name__ == "__main__":
    asyncio.run(main())
