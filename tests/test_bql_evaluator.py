"""Tests for BQL field resolution and evaluation."""

from typing import Any

import pytest

from beadboard.bql import evaluate, parse, resolve_field
from beadboard.models import WorkItem


def _item(**fields: Any) -> WorkItem:
    data: dict[str, Any] = {"id": "t1", "title": "Fix auth bug"}
    data.update(fields)
    return WorkItem.model_validate(data)


def _matches(query: str, item: WorkItem) -> bool:
    result = parse(query)
    assert result.success, result.error
    return evaluate(result.ast, item)


# ---------------------------------------------------------------------------
# Field resolution
# ---------------------------------------------------------------------------


class TestResolveField:
    def test_text_joins_title_and_description(self) -> None:
        item = _item(description="Login fails")
        assert resolve_field(item, "_text") == "Fix auth bug Login fails"

    def test_explicit_status_wins(self) -> None:
        item = _item(status="closed", blockedBy=["t0"])
        assert resolve_field(item, "status") == "closed"

    def test_running_agent_means_in_progress(self) -> None:
        item = _item(agent={"type": "claude", "status": "running"})
        assert resolve_field(item, "status") == "in_progress"

    def test_blockers_mean_blocked(self) -> None:
        assert resolve_field(_item(blockedBy=["t0"]), "status") == "blocked"

    def test_default_status_open(self) -> None:
        assert resolve_field(_item(), "status") == "open"

    @pytest.mark.parametrize(
        "priority, expected",
        [(1, 1), (4, 4), ("high", 2), ("Critical", 1), ("urgent", 1), ("2", 2), (None, 3), ("whenever", 3)],
    )
    def test_priority_normalized(self, priority: Any, expected: int) -> None:
        assert resolve_field(_item(priority=priority), "priority") == expected

    def test_blocked_flag(self) -> None:
        assert resolve_field(_item(blockedBy=["t0"]), "blocked") == "true"
        assert resolve_field(_item(), "blocked") == "false"

    def test_ready_prefers_explicit_flag(self) -> None:
        assert resolve_field(_item(isReady=False), "ready") == "false"
        assert resolve_field(_item(), "ready") == "true"
        assert resolve_field(_item(blockedBy=["t0"]), "ready") == "false"

    def test_agent_type(self) -> None:
        assert resolve_field(_item(agent={"type": "codex"}), "agent") == "codex"
        assert resolve_field(_item(), "agent") is None

    def test_branch_prefers_git(self) -> None:
        item = _item(branch="old", git={"branch": "feat/auth"})
        assert resolve_field(item, "branch") == "feat/auth"
        assert resolve_field(_item(branch="old"), "branch") == "old"

    def test_pr_prefers_git(self) -> None:
        item = _item(pr=3, git={"prNumber": 42})
        assert resolve_field(item, "pr") == 42
        assert resolve_field(_item(pr=3), "pr") == 3

    def test_default_branch_uses_model_field(self) -> None:
        assert resolve_field(_item(estimate="2h"), "estimate") == "2h"

    def test_default_branch_uses_alias(self) -> None:
        assert resolve_field(_item(columnId="review"), "columnid") == "review"

    def test_default_branch_uses_extra_keys(self) -> None:
        assert resolve_field(_item(Milestone="m1"), "milestone") == "m1"

    def test_unknown_field_is_none(self) -> None:
        assert resolve_field(_item(), "nonexistent") is None


# ---------------------------------------------------------------------------
# Comparisons
# ---------------------------------------------------------------------------


class TestEquality:
    def test_case_insensitive(self) -> None:
        assert _matches("status:OPEN", _item(status="open"))

    def test_substring_match(self) -> None:
        assert _matches("auth", _item())
        assert _matches("title:bug", _item())

    def test_no_match(self) -> None:
        assert not _matches("status:closed", _item(status="open"))

    def test_labels_match_any_element_exactly(self) -> None:
        item = _item(labels=["bug", "ui"])
        assert _matches("labels:bug", item)
        assert _matches("labels:UI", item)
        assert not _matches("labels:bu", item)

    def test_labels_negation(self) -> None:
        assert not _matches("labels:!bug", _item(labels=["bug"]))
        assert _matches("labels:!bug", _item(labels=["ui"]))
        assert _matches("labels:!bug", _item())

    def test_assignee_me_matches_any_assignee(self) -> None:
        assert _matches("assignee:@me", _item(assignee="alice"))
        assert not _matches("assignee:@me", _item())
        assert not _matches("assignee:@me", _item(assignee=""))

    def test_named_priority(self) -> None:
        assert _matches("priority:1", _item(priority="critical"))

    def test_not_equal(self) -> None:
        assert _matches("status:!closed", _item(status="open"))
        assert not _matches("status:!open", _item(status="open"))

    def test_unknown_field(self) -> None:
        assert not _matches("nonexistent:x", _item())
        assert _matches("nonexistent:!x", _item())


class TestNumericComparisons:
    def test_greater_than(self) -> None:
        assert _matches("pr:>0", _item(pr=12))
        assert not _matches("pr:>0", _item())

    def test_less_or_equal(self) -> None:
        assert _matches("priority:<=2", _item(priority="high"))
        assert not _matches("priority:<=2", _item(priority="low"))

    def test_non_numeric_never_matches(self) -> None:
        assert not _matches("title:>3", _item())
        assert not _matches("title:<3", _item())

    @pytest.mark.parametrize(
        "query", ["priority:<inf", "priority:>-inf", "priority:>=nan", "pr:<1_0", "pr:>1e1"]
    )
    def test_float_spellings_are_not_numbers(self, query: str) -> None:
        assert not _matches(query, _item(priority=1, pr=3))
        assert not _matches(query, _item(priority=4, pr=50))

    def test_signed_and_decimal_values(self) -> None:
        assert _matches("priority:>-1", _item(priority=1))
        assert _matches("priority:<2.5", _item(priority="high"))
        assert not _matches("priority:<2.5", _item(priority=3))

    def test_non_numeric_field_value_in_range(self) -> None:
        assert not _matches("estimate:1-50", _item(estimate="3_0"))

    def test_range_inclusive(self) -> None:
        assert _matches("priority:1-2", _item(priority=1))
        assert _matches("priority:1-2", _item(priority=2))
        assert not _matches("priority:1-2", _item(priority=3))

    def test_contains(self) -> None:
        assert _matches("title:*AUTH*", _item())
        assert not _matches("title:*login*", _item())


# ---------------------------------------------------------------------------
# Boolean structure
# ---------------------------------------------------------------------------


class TestBooleanStructure:
    def test_and(self) -> None:
        item = _item(status="open", priority=1)
        assert _matches("status:open AND priority:1", item)
        assert not _matches("status:open AND priority:2", item)

    def test_or(self) -> None:
        item = _item(status="open")
        assert _matches("status:closed OR status:open", item)
        assert not _matches("status:closed OR status:done", item)

    def test_not(self) -> None:
        assert _matches("NOT blocked:true", _item())
        assert not _matches("NOT blocked:true", _item(blockedBy=["t0"]))

    def test_grouped(self) -> None:
        query = "status:ready OR (status:open AND NOT blocked:true)"
        assert _matches(query, _item(status="open"))
        assert not _matches(query, _item(status="open", blockedBy=["t0"]))
        assert _matches(query, _item(status="ready", blockedBy=["t0"]))
