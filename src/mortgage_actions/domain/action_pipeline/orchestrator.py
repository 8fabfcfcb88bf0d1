"""Phase-based orchestrator for the action pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from mortgage_actions.domain.action_pipeline.context import ActionBatch, PipelineContext

if TYPE_CHECKING:
    from collections.abc import Sequence


class PipelinePhase(Protocol):
    """Contract implemented by each pipeline phase."""

    name: str

    async def run(self, batch: ActionBatch, *, context: PipelineContext) -> None: ...


@dataclass(slots=True)
class ActionPipeline:
    """Compose and execute the ordered pipeline phases."""

    phases: Sequence[PipelinePhase] = field(default_factory=tuple)

    def with_phase(self, phase: PipelinePhase) -> ActionPipeline:
        """Return a new pipeline appending ``phase`` at the end."""

        return ActionPipeline(phases=(*self.phases, phase))

    @property
    def phase_names(self) -> tuple[str, ...]:
        return tuple(phase.name for phase in self.phases)

    async def run(
        self, batch: ActionBatch, *, context: PipelineContext | None = None
    ) -> ActionBatch:
        """Execute the configured phases in-order against ``batch``."""

        active_context = context or PipelineContext()
        for phase in self.phases:
            await phase.run(batch, context=active_context)
        return batch


__all__ = ["ActionBatch", "ActionPipeline", "PipelineContext", "PipelinePhase"]
