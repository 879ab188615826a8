"""Constants and enums shared by the query language and the graph engine."""

from enum import Enum, IntEnum
from typing import Any


class PriorityLevel(IntEnum):
    """Normalized priority scale (1 = most urgent)."""

    URGENT = 1
    HIGH = 2
    MEDIUM = 3
    LOW = 4


class ImpactLevel(str, Enum):
    """Impact buckets used for card badges."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Named priorities accepted from the board store and the beads tracker.
PRIORITY_ALIASES: dict[str, int] = {
    "critical": PriorityLevel.URGENT,
    "urgent": PriorityLevel.URGENT,
    "high": PriorityLevel.HIGH,
    "medium": PriorityLevel.MEDIUM,
    "low": PriorityLevel.LOW,
}

DEFAULT_PRIORITY = PriorityLevel.MEDIUM

# Weight used by critical path scoring for unrecognized priorities.
DEFAULT_PRIORITY_WEIGHT = 2

# Impact score blend (weights sum to 1.0).
PAGERANK_WEIGHT = 0.30
BETWEENNESS_WEIGHT = 0.20
OUT_DEGREE_WEIGHT = 0.25
UNBLOCK_WEIGHT = 0.25

# Per-metric scaling before the blend; each contribution is capped at 100.
OUT_DEGREE_SCALE = 10  # 10 direct dependents saturate
UNBLOCK_SCALE = 5  # 20 downstream items saturate
METRIC_CAP = 100.0

# Impact level thresholds (inclusive lower bounds).
IMPACT_THRESHOLDS: tuple[tuple[float, ImpactLevel], ...] = (
    (50, ImpactLevel.CRITICAL),
    (25, ImpactLevel.HIGH),
    (10, ImpactLevel.MEDIUM),
)


def _parse_level(value: Any) -> int | None:
    """Return a recognized 1-4 level for *value*, or None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value if PriorityLevel.URGENT <= value <= PriorityLevel.LOW else None
    if isinstance(value, float):
        return _parse_level(int(value)) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip().lower()
        if text.isdigit():
            return _parse_level(int(text))
        return PRIORITY_ALIASES.get(text)
    return None


def normalize_priority(value: Any) -> int:
    """Normalize a numeric or named priority to 1 (urgent) .. 4 (low).

    Unrecognized values fall back to medium (3).
    """
    level = _parse_level(value)
    return int(DEFAULT_PRIORITY if level is None else level)


def priority_weight(value: Any) -> int:
    """Critical path weight: urgent=4, high=3, medium=2, low=1."""
    level = _parse_level(value)
    if level is None:
        return DEFAULT_PRIORITY_WEIGHT
    return 5 - int(level)
