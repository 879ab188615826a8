"""Pytest configuration and fixtures."""

from typing import Any

import pytest

from beadboard.models import WorkItem


def make_item(id: str, **fields: Any) -> WorkItem:
    """Build a WorkItem from camelCase board JSON."""
    data: dict[str, Any] = {"id": id, "title": fields.pop("title", f"Task {id}")}
    data.update(fields)
    return WorkItem.model_validate(data)


@pytest.fixture
def board_items() -> list[WorkItem]:
    """Five items with priorities [1, 2, 3, 4, 1] and mixed status."""
    return [
        make_item("t1", priority=1, status="closed"),
        make_item("t2", priority=2, status="open"),
        make_item("t3", priority=3, status="open"),
        make_item("t4", priority=4, status="in_progress"),
        make_item("t5", priority=1, status="open"),
    ]


@pytest.fixture
def chain_items() -> list[WorkItem]:
    """A blocks B and C, B blocks D; A is urgent."""
    return [
        make_item("A", priority="urgent", blocking=["B", "C"]),
        make_item("B", priority="medium", blocking=["D"]),
        make_item("C", priority="low"),
        make_item("D", priority="low"),
    ]
