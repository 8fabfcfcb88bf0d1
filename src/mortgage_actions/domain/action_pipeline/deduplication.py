"""Duplicate merge phase.

The model tends to emit ``add*`` immediately followed by ``update*`` on the new
record's placeholder. When the update's key fields match a record the client
already has, the pair collapses into one update of that existing record.
Matching is table driven: one :class:`MatchRule` per record kind.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from logging import getLogger
from typing import TYPE_CHECKING, Any

from mortgage_actions.domain.action_pipeline.orchestrator import PipelinePhase
from mortgage_actions.domain.action_pipeline.report import MergedAction
from mortgage_actions.domain.model import ActionKind, RecordKind, is_placeholder

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from mortgage_actions.domain.action_pipeline.context import ActionBatch, PipelineContext
    from mortgage_actions.domain.model import (
        Action,
        ActiveIncomeFields,
        ApplicationStateView,
        AssetFields,
        EmploymentFields,
        Record,
    )

log = getLogger(__name__)

type MatchKey = tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class MatchRule:
    """How to recognise an existing record from an update's fields.

    ``extract`` returns ``None`` when the update lacks the fields needed for a
    key; ``matches`` compares a key against a stored record's fields within the
    configured amount tolerance.
    """

    add_kind: ActionKind
    update_kind: ActionKind
    record_kind: RecordKind
    label: str
    extract: Callable[[Any], MatchKey | None]
    matches: Callable[[MatchKey, Any, float], bool]


def _within(stored: float | None, wanted: float, tolerance: float) -> bool:
    return stored is not None and abs(stored - wanted) < tolerance


def _employment_key(updates: EmploymentFields) -> MatchKey | None:
    if not updates.employer_name:
        return None
    return (updates.employer_name.lower(),)


def _employment_matches(key: MatchKey, stored: EmploymentFields, _tolerance: float) -> bool:
    return (stored.employer_name or "").lower() == key[0]


def _asset_key(updates: AssetFields) -> MatchKey | None:
    if updates.amount is None or not updates.category:
        return None
    return (updates.category, updates.amount)


def _asset_matches(key: MatchKey, stored: AssetFields, tolerance: float) -> bool:
    category, amount = key
    return stored.category == category and _within(stored.amount, amount, tolerance)


def _income_key(updates: ActiveIncomeFields) -> MatchKey | None:
    if not updates.company_name or updates.monthly_amount is None:
        return None
    return (updates.company_name.lower(), updates.monthly_amount)


def _income_matches(key: MatchKey, stored: ActiveIncomeFields, tolerance: float) -> bool:
    company, amount = key
    return (stored.company_name or "").lower() == company and _within(
        stored.monthly_amount, amount, tolerance
    )


MATCH_RULES: tuple[MatchRule, ...] = (
    MatchRule(
        add_kind=ActionKind.ADD_EMPLOYMENT_RECORD,
        update_kind=ActionKind.UPDATE_EMPLOYMENT_RECORD,
        record_kind=RecordKind.EMPLOYMENT,
        label="emp",
        extract=_employment_key,
        matches=_employment_matches,
    ),
    MatchRule(
        add_kind=ActionKind.ADD_ASSET,
        update_kind=ActionKind.UPDATE_ASSET,
        record_kind=RecordKind.ASSET,
        label="asset",
        extract=_asset_key,
        matches=_asset_matches,
    ),
    MatchRule(
        add_kind=ActionKind.ADD_ACTIVE_INCOME,
        update_kind=ActionKind.UPDATE_ACTIVE_INCOME,
        record_kind=RecordKind.ACTIVE_INCOME,
        label="income",
        extract=_income_key,
        matches=_income_matches,
    ),
)


@dataclass(slots=True)
class DuplicateMerger:
    """Collapse create+fill pairs that duplicate existing records.

    One instance serves one pipeline call: ``merged`` and ``aliases`` describe
    what the last :meth:`merge` did, and the processed-key set prevents merging
    the same (client, key) combination twice within the batch.
    """

    state: ApplicationStateView
    tolerance: float = 1.0
    rules: Sequence[MatchRule] = MATCH_RULES
    merged: list[MergedAction] = field(default_factory=list[MergedAction])
    aliases: dict[str, str] = field(default_factory=dict[str, str])
    _processed: set[str] = field(default_factory=set[str], init=False, repr=False)

    def merge(self, actions: Sequence[Action]) -> list[Action]:
        rules_by_add = {rule.add_kind: rule for rule in self.rules}
        output: list[Action] = []
        consumed: set[int] = set()

        for index, action in enumerate(actions):
            if index in consumed:
                continue
            rule = rules_by_add.get(action.kind)
            if rule is None:
                output.append(action)
                continue
            merged = self._merge_pair(index, action, actions, rule, consumed)
            if merged is None:
                output.append(action)
                continue
            update_index, record = merged
            update = actions[update_index]
            rewritten = self._rewrite_update(update, action, record.id)
            consumed.add(update_index)
            output.append(rewritten)
            self.merged.append(
                MergedAction(
                    dropped_add=action,
                    consumed_update=update,
                    merged_update=rewritten,
                    existing_record_id=record.id,
                )
            )
            if action.placeholder is not None:
                self.aliases[action.placeholder] = record.id
            log.info(
                f"Merged {action.name} {action.placeholder} into existing {rule.record_kind} "
                f"record {record.id} for client {action.client_id}"
            )

        return output

    def _merge_pair(
        self,
        index: int,
        action: Action,
        actions: Sequence[Action],
        rule: MatchRule,
        consumed: set[int],
    ) -> tuple[int, Record[Any]] | None:
        client_id = action.client_id
        placeholder = action.placeholder
        if not client_id or placeholder is None:
            return None

        update_index = self._find_update(index, placeholder, actions, rule, consumed)
        if update_index is None:
            return None

        updates = getattr(actions[update_index].params, "updates", None)
        try:
            key = rule.extract(updates)
            if key is None:
                return None
            existing = next(
                (
                    record
                    for record in self.state.records_for(client_id, rule.record_kind)
                    if rule.matches(key, record.data, self.tolerance)
                ),
                None,
            )
        except (AttributeError, TypeError, ValueError) as exc:
            log.warning(f"Could not check {action.name} {placeholder} for duplicates: {exc}")
            return None
        if existing is None:
            return None

        processed_key = "-".join((rule.label, client_id, *(str(part) for part in key)))
        if processed_key in self._processed:
            return None
        self._processed.add(processed_key)
        return update_index, existing

    @staticmethod
    def _find_update(
        index: int,
        placeholder: str,
        actions: Sequence[Action],
        rule: MatchRule,
        consumed: set[int],
    ) -> int | None:
        for candidate_index in range(index + 1, len(actions)):
            if candidate_index in consumed:
                continue
            candidate = actions[candidate_index]
            if candidate.kind is not rule.update_kind:
                continue
            record_id = getattr(candidate.params, "record_id", None)
            if is_placeholder(record_id) and record_id == placeholder:
                return candidate_index
        return None

    @staticmethod
    def _rewrite_update(update: Action, add: Action, record_id: str) -> Action:
        params = replace(
            update.params,  # type: ignore[type-var]
            client_id=add.client_id,
            record_id=record_id,
        )
        return replace(update, params=params, return_id=None)


def merge_duplicate_actions(
    actions: Sequence[Action],
    state: ApplicationStateView,
    *,
    tolerance: float = 1.0,
) -> list[Action]:
    """Return ``actions`` with duplicate create+fill pairs merged."""

    return DuplicateMerger(state, tolerance=tolerance).merge(actions)


class DeduplicationPhase(PipelinePhase):
    """Merge duplicates once addresses are resolved."""

    name: str = "deduplication"

    async def run(self, batch: ActionBatch, *, context: PipelineContext) -> None:
        merger = DuplicateMerger(context.state, tolerance=context.config.amount_tolerance)
        batch.replace_all(merger.merge(batch.actions))
        context.report.merged.extend(merger.merged)
        context.aliases.update(merger.aliases)
