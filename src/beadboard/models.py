"""Pydantic models for work items shared by BQL and the graph engine.

Items arrive either from the kanban board store (camelCase task JSON) or from
the beads issue tracker (``bd list --json``). Both shapes validate into the
same frozen :class:`WorkItem`.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class AgentInfo(BaseModel):
    """Coding agent attached to a task."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    type: str | None = None
    status: str | None = None
    session_id: str | None = Field(None, alias="sessionId")


class GitInfo(BaseModel):
    """Git integration details for a task."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    branch: str | None = None
    base_branch: str | None = Field(None, alias="baseBranch")
    pr_number: int | None = Field(None, alias="prNumber")
    pr_status: str | None = Field(None, alias="prStatus")
    pr_url: str | None = Field(None, alias="prUrl")


class WorkItem(BaseModel):
    """A task or issue as seen by the query language and the metrics engine.

    Unknown keys are kept (``extra="allow"``) so BQL can look them up through
    its default field branch.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    id: str
    title: str = ""
    description: str | None = None
    status: str | None = None
    type: str | None = None
    priority: int | str | None = None
    labels: tuple[str, ...] = ()
    blocked_by: tuple[str, ...] = Field((), alias="blockedBy")
    blocking: tuple[str, ...] = Field(
        (), validation_alias=AliasChoices("blocking", "blocks")
    )
    assignee: str | None = None
    is_ready: bool | None = Field(None, alias="isReady")
    critical_path: bool | None = Field(None, alias="criticalPath")
    agent: AgentInfo | None = None
    git: GitInfo | None = None
    branch: str | None = None
    pr: int | None = None
    estimate: str | None = None
    column_id: str | None = Field(None, alias="columnId")
    order: int = 0

    @field_validator("labels", "blocked_by", "blocking", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return () if value is None else value

    @property
    def is_blocked(self) -> bool:
        """True if any blocker is listed."""
        return bool(self.blocked_by)
