"""Utility functions for formatting metrics and item fields."""

from typing import Any

from beadboard.utils.constants import PriorityLevel, normalize_priority


def get_priority_name(priority: Any) -> str:
    """Get human-readable name for a numeric or named priority."""
    if priority is None:
        return "Unknown"
    return PriorityLevel(normalize_priority(priority)).name.title()


def format_score(score: float) -> float:
    """Round a score for display (one decimal place)."""
    return round(score, 1)
