"""Structured outcome of one pipeline call."""

# switch off type warnings because of default_factory=list
# pyright: reportUnknownVariableType=false

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mortgage_actions.domain.action_pipeline.summaries import ChangeSummary
    from mortgage_actions.domain.action_pipeline.validation import ActionIssue
    from mortgage_actions.domain.model import Action


@dataclass(frozen=True, slots=True)
class AppliedAction:
    """An action whose mutation call succeeded, with placeholders resolved."""

    action: Action
    resolved: Action
    created_id: str | None = None
    summary: ChangeSummary | None = None


@dataclass(frozen=True, slots=True)
class FailedAction:
    action: Action
    error: str


@dataclass(frozen=True, slots=True)
class MergedAction:
    """A create+fill pair collapsed into one update of an existing record."""

    dropped_add: Action
    consumed_update: Action
    merged_update: Action
    existing_record_id: str


@dataclass(slots=True)
class ExecutionReport:
    """Everything the caller needs to know about a batch.

    The executor appends to ``applied`` and ``failed`` as it goes, so a report
    shared through the pipeline context reflects partial progress if the call
    is cancelled.
    """

    applied: list[AppliedAction] = field(default_factory=list)
    failed: list[FailedAction] = field(default_factory=list)
    issues: list[ActionIssue] = field(default_factory=list)
    merged: list[MergedAction] = field(default_factory=list)
    unresolved_addresses: list[Action] = field(default_factory=list)
    id_map: dict[str, str] = field(default_factory=dict)

    @property
    def rejected(self) -> list[ActionIssue]:
        return [issue for issue in self.issues if issue.errors]

    @property
    def warned(self) -> list[ActionIssue]:
        return [issue for issue in self.issues if not issue.errors and issue.warnings]

    @property
    def summaries(self) -> list[ChangeSummary]:
        return [item.summary for item in self.applied if item.summary is not None]
