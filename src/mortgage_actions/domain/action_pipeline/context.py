"""Shared context structures for the action pipeline (batch + per-call state)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mortgage_actions.domain.action_pipeline.id_map import DynamicIdMap
from mortgage_actions.domain.action_pipeline.report import ExecutionReport
from mortgage_actions.domain.model import ApplicationStateView

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mortgage_actions.domain.action_pipeline.address_resolution import AddressResolver
    from mortgage_actions.domain.model import Action
    from mortgage_actions.domain.ports import MutationInterface


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Tunables of one pipeline call."""

    amount_tolerance: float = 1.0
    resolve_concurrency: int = 1
    resolve_timeout_seconds: float | None = 10.0


@dataclass(slots=True)
class PipelineContext:
    """Mutable per-call context shared across pipeline phases.

    Nothing in here outlives the call; two concurrent calls must use two
    contexts.
    """

    state: ApplicationStateView = field(default_factory=ApplicationStateView)
    mutations: MutationInterface | None = None
    resolver: AddressResolver | None = None
    config: PipelineConfig = field(default_factory=PipelineConfig)
    aliases: dict[str, str] = field(default_factory=dict[str, str])
    id_map: DynamicIdMap = field(default_factory=DynamicIdMap)
    report: ExecutionReport = field(default_factory=ExecutionReport)


@dataclass(slots=True)
class ActionBatch:
    """Ordered actions of one call, rewritten in place by each phase."""

    actions: list[Action] = field(default_factory=list[Action])

    @classmethod
    def of(cls, actions: Iterable[Action]) -> ActionBatch:
        return cls(actions=list(actions))

    def replace_all(self, actions: Iterable[Action]) -> None:
        self.actions[:] = list(actions)

    def __len__(self) -> int:
        return len(self.actions)
