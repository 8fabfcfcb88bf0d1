"""Action validation phase."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from mortgage_actions.domain.action_pipeline.orchestrator import PipelinePhase
from mortgage_actions.domain.model import is_placeholder

from .rules import RULE_SETS, RuleFindings

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mortgage_actions.domain.action_pipeline.context import ActionBatch, PipelineContext
    from mortgage_actions.domain.model import Action, ApplicationStateView

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True, slots=True)
class ActionIssue:
    """A rejected or warned action together with its messages."""

    action: Action
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


@dataclass(slots=True)
class ValidationResult:
    accepted: list[Action] = field(default_factory=list[Action])
    rejected: list[ActionIssue] = field(default_factory=list[ActionIssue])
    warned: list[ActionIssue] = field(default_factory=list[ActionIssue])
    issues: list[ActionIssue] = field(default_factory=list[ActionIssue])


def validate_action(action: Action, state: ApplicationStateView) -> ValidationOutcome:
    """Apply the kind's rule set plus the shared client-existence check.

    Kinds without a rule set are valid. Never raises.
    """

    findings = RuleFindings()
    rule_set = RULE_SETS.get(action.kind)
    if rule_set is not None:
        rule_set(action.params, findings)

    client_id = action.client_id
    if client_id and not is_placeholder(client_id) and not state.has_client(client_id):
        findings.warnings.append(f"Client ID {client_id} does not exist in current state")

    return ValidationOutcome(errors=tuple(findings.errors), warnings=tuple(findings.warnings))


def validate_actions(actions: Iterable[Action], state: ApplicationStateView) -> ValidationResult:
    """Partition ``actions`` into accepted and rejected, keeping batch order."""

    result = ValidationResult()
    for action in actions:
        outcome = validate_action(action, state)
        issue = ActionIssue(action=action, errors=outcome.errors, warnings=outcome.warnings)
        if outcome.valid:
            result.accepted.append(action)
            if outcome.warnings:
                result.warned.append(issue)
                result.issues.append(issue)
                log.warning(f"Warnings for action {action.name}: {list(outcome.warnings)}")
        else:
            result.rejected.append(issue)
            result.issues.append(issue)
            log.error(f"Invalid action {action.name}: {list(outcome.errors)}")
    return result


class ValidationPhase(PipelinePhase):
    """Drop actions with errors; keep warned actions."""

    name: str = "validation"

    async def run(self, batch: ActionBatch, *, context: PipelineContext) -> None:
        result = validate_actions(batch.actions, context.state)
        batch.replace_all(result.accepted)
        context.report.issues.extend(result.issues)
