"""Tests for the BQL query facade and column presets."""

from typing import Any

import pytest

from beadboard.bql import (
    BQL_COLUMN_PRESETS,
    column_items,
    compile_query,
    filter_items,
    get_preset_filter,
    matches_filter,
    validate_query,
)
from beadboard.models import WorkItem


def _item(id: str, **fields: Any) -> WorkItem:
    data: dict[str, Any] = {"id": id, "title": f"Task {id}"}
    data.update(fields)
    return WorkItem.model_validate(data)


def _ids(items: Any) -> list[str]:
    return [item.id for item in items]


# ---------------------------------------------------------------------------
# compile_query
# ---------------------------------------------------------------------------


class TestCompileQuery:
    def test_valid_query(self) -> None:
        filt = compile_query("status:open")
        assert filt.is_valid
        assert filt.ast is not None
        assert filt.error is None
        assert not filt.matches_all

    def test_query_is_trimmed(self) -> None:
        assert compile_query("  status:open  ").query == "status:open"

    def test_empty_query_matches_all(self) -> None:
        filt = compile_query("   ")
        assert filt.is_valid
        assert filt.ast is None
        assert filt.query == ""
        assert filt.matches_all

    def test_invalid_query(self) -> None:
        filt = compile_query("(status:open")
        assert not filt.is_valid
        assert filt.ast is None
        assert filt.error == "Expected closing parenthesis"
        assert filt.matches_all


# ---------------------------------------------------------------------------
# filter_items / matches_filter
# ---------------------------------------------------------------------------


class TestFilterItems:
    def test_status_and_priority_range(self, board_items: list[WorkItem]) -> None:
        filt = compile_query("status:open AND priority:1-2")
        assert _ids(filter_items(board_items, filt)) == ["t2", "t5"]

    def test_preserves_input_order(self, board_items: list[WorkItem]) -> None:
        filt = compile_query("priority:1 OR priority:4")
        assert _ids(filter_items(board_items, filt)) == ["t1", "t4", "t5"]

    def test_invalid_filter_returns_same_list(self, board_items: list[WorkItem]) -> None:
        filt = compile_query("status:open AND")
        assert filter_items(board_items, filt) is board_items

    def test_empty_filter_returns_same_list(self, board_items: list[WorkItem]) -> None:
        assert filter_items(board_items, compile_query("")) is board_items

    def test_no_matches(self, board_items: list[WorkItem]) -> None:
        assert filter_items(board_items, compile_query("type:epic")) == []

    def test_filter_is_reusable(self, board_items: list[WorkItem]) -> None:
        filt = compile_query("status:open")
        first = filter_items(board_items, filt)
        second = filter_items(board_items[:2], filt)
        assert _ids(first) == ["t2", "t3", "t5"]
        assert _ids(second) == ["t2"]

    def test_matches_filter(self) -> None:
        filt = compile_query("labels:bug")
        assert matches_filter(_item("a", labels=["bug"]), filt)
        assert not matches_filter(_item("b"), filt)

    def test_matches_filter_fails_open(self) -> None:
        assert matches_filter(_item("a"), compile_query("(("))


# ---------------------------------------------------------------------------
# validate_query
# ---------------------------------------------------------------------------


class TestValidateQuery:
    def test_valid(self) -> None:
        result = validate_query("status:open OR blocked:true")
        assert result.valid
        assert result.error is None

    def test_empty_is_valid(self) -> None:
        assert validate_query("").valid

    def test_invalid_reports_message(self) -> None:
        result = validate_query("(a")
        assert not result.valid
        assert result.error == "Expected closing parenthesis"


# ---------------------------------------------------------------------------
# Column views
# ---------------------------------------------------------------------------


class TestColumnItems:
    @pytest.fixture
    def items(self) -> list[WorkItem]:
        return [
            _item("a", columnId="todo", order=2, priority=1),
            _item("b", columnId="todo", order=1, priority=3),
            _item("c", columnId="done", order=0, priority=1),
            _item("d", columnId="todo", order=0, priority=4),
        ]

    def test_static_column_sorted_by_order(self, items: list[WorkItem]) -> None:
        assert _ids(column_items(items, "todo")) == ["d", "b", "a"]

    def test_dynamic_column_uses_query(self, items: list[WorkItem]) -> None:
        result = column_items(items, "todo", query="priority:1", dynamic=True)
        assert _ids(result) == ["c", "a"]

    def test_query_ignored_when_not_dynamic(self, items: list[WorkItem]) -> None:
        result = column_items(items, "done", query="priority:1")
        assert _ids(result) == ["c"]

    def test_invalid_dynamic_query_falls_back(self, items: list[WorkItem]) -> None:
        result = column_items(items, "done", query="priority:1 AND", dynamic=True)
        assert _ids(result) == ["c"]

    def test_blank_dynamic_query_falls_back(self, items: list[WorkItem]) -> None:
        result = column_items(items, "todo", query="  ", dynamic=True)
        assert _ids(result) == ["d", "b", "a"]


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------


class TestPresets:
    def test_every_preset_compiles(self) -> None:
        for key in BQL_COLUMN_PRESETS:
            filt = get_preset_filter(key)
            assert filt.is_valid, key
            assert filt.ast is not None, key

    def test_high_priority(self) -> None:
        assert BQL_COLUMN_PRESETS["high-priority"].query == "priority:1-2"

    def test_ready_preset(self) -> None:
        filt = get_preset_filter("ready")
        assert matches_filter(_item("a", status="open"), filt)
        assert not matches_filter(_item("b", status="open", blockedBy=["a"]), filt)

    def test_my_tasks_preset(self) -> None:
        filt = get_preset_filter("my-tasks")
        assert matches_filter(_item("a", assignee="bob"), filt)
        assert not matches_filter(_item("b"), filt)

    def test_with_pr_preset(self) -> None:
        filt = get_preset_filter("with-pr")
        assert matches_filter(_item("a", git={"prNumber": 7}), filt)
        assert not matches_filter(_item("b"), filt)

    def test_unknown_preset(self) -> None:
        with pytest.raises(KeyError):
            get_preset_filter("nope")
