"""Named BQL queries offered as quick filters and dynamic column presets."""

from __future__ import annotations

from dataclasses import dataclass

from beadboard.bql.query import BQLFilter, compile_query


@dataclass(frozen=True)
class ColumnPreset:
    name: str
    query: str
    description: str
    color: str


BQL_COLUMN_PRESETS: dict[str, ColumnPreset] = {
    "high-priority": ColumnPreset(
        name="High Priority",
        query="priority:1-2",
        description="Critical and high priority tasks",
        color="border-t-red-500",
    ),
    "ready": ColumnPreset(
        name="Ready",
        query="status:ready OR (status:open AND NOT blocked:true)",
        description="Tasks ready to be worked on",
        color="border-t-cyan-500",
    ),
    "blocked": ColumnPreset(
        name="Blocked",
        query="blocked:true",
        description="Tasks blocked by dependencies",
        color="border-t-orange-500",
    ),
    "in-progress": ColumnPreset(
        name="In Progress",
        query="status:in_progress OR status:in-progress",
        description="Tasks currently being worked on",
        color="border-t-yellow-500",
    ),
    "bugs": ColumnPreset(
        name="Bugs",
        query="type:bug AND NOT status:closed",
        description="Open bug reports",
        color="border-t-red-500",
    ),
    "features": ColumnPreset(
        name="Features",
        query="type:feature AND NOT status:closed",
        description="Feature requests",
        color="border-t-purple-500",
    ),
    "my-tasks": ColumnPreset(
        name="My Tasks",
        query="assignee:@me",
        description="Tasks assigned to you",
        color="border-t-blue-500",
    ),
    "with-pr": ColumnPreset(
        name="Has PR",
        query="pr:>0",
        description="Tasks with pull requests",
        color="border-t-green-500",
    ),
    "done": ColumnPreset(
        name="Done",
        query="status:closed OR status:done",
        description="Completed tasks",
        color="border-t-green-500",
    ),
}


def get_preset_filter(key: str) -> BQLFilter:
    """Compile the preset registered under *key*. Raises KeyError if unknown."""
    return compile_query(BQL_COLUMN_PRESETS[key].query)
