from __future__ import annotations

import asyncio
from dataclasses import dataclass

from mortgage_actions.domain.action_pipeline import (
    ActionBatch,
    ActionPipeline,
    PipelineContext,
    PipelinePhase,
    canonical_phases,
)


@dataclass(slots=True)
class _RecordingPhase(PipelinePhase):
    name: str
    calls: list[str]

    async def run(self, batch: ActionBatch, *, context: PipelineContext) -> None:
        _ = (batch, context)
        self.calls.append(self.name)


def test_pipeline_runs_phases_in_order() -> None:
    calls: list[str] = []
    first = _RecordingPhase(name="first", calls=calls)
    second = _RecordingPhase(name="second", calls=calls)
    pipeline = ActionPipeline(phases=(first,)).with_phase(second)

    asyncio.run(pipeline.run(ActionBatch(), context=PipelineContext()))

    assert calls == ["first", "second"]
    assert pipeline.phase_names == ("first", "second")


def test_canonical_order_resolves_before_merging_and_validates_before_executing() -> None:
    pipeline = ActionPipeline(phases=canonical_phases())

    assert pipeline.phase_names == (
        "address_resolution",
        "deduplication",
        "validation",
        "execution",
    )
