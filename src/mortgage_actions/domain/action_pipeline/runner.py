"""Entry points for running the action pipeline."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from .address_resolution import AddressResolutionPhase
from .context import ActionBatch, PipelineConfig, PipelineContext
from .deduplication import DeduplicationPhase
from .execution import ExecutionPhase
from .orchestrator import ActionPipeline
from .validation import ValidationPhase

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mortgage_actions.domain.model import Action, ApplicationStateView
    from mortgage_actions.domain.ports import MutationInterface

    from .address_resolution import AddressResolver
    from .orchestrator import PipelinePhase
    from .report import ExecutionReport

log = getLogger(__name__)


def canonical_phases() -> tuple[PipelinePhase, ...]:
    """Resolve, then merge, then validate, then execute."""

    return (AddressResolutionPhase(), DeduplicationPhase(), ValidationPhase(), ExecutionPhase())


async def run_pipeline_async(  # noqa: PLR0913
    actions: Iterable[Action],
    state: ApplicationStateView,
    mutations: MutationInterface,
    *,
    resolver: AddressResolver | None = None,
    config: PipelineConfig | None = None,
    context: PipelineContext | None = None,
) -> ExecutionReport:
    """Run the canonical pipeline over ``actions`` and return its report.

    Pass ``context`` to observe the report while the call is in flight; its
    ``state``, ``mutations``, ``resolver`` and ``config`` are overwritten with
    the arguments of this call.
    """

    active_context = context or PipelineContext()
    active_context.state = state
    active_context.mutations = mutations
    active_context.resolver = resolver
    active_context.config = config or active_context.config

    batch = ActionBatch.of(actions)
    log.info(f"Running action pipeline over {len(batch)} action(s)")
    await ActionPipeline(phases=canonical_phases()).run(batch, context=active_context)

    report = active_context.report
    log.info(
        f"Pipeline finished: {len(report.applied)} applied, {len(report.failed)} failed, "
        f"{len(report.rejected)} rejected, {len(report.merged)} merged"
    )
    return report


def run_pipeline(  # noqa: PLR0913
    actions: Iterable[Action],
    state: ApplicationStateView,
    mutations: MutationInterface,
    *,
    resolver: AddressResolver | None = None,
    config: PipelineConfig | None = None,
    context: PipelineContext | None = None,
) -> ExecutionReport:
    """Synchronous wrapper around :func:`run_pipeline_async`."""

    return asyncio.run(
        run_pipeline_async(
            actions,
            state,
            mutations,
            resolver=resolver,
            config=config,
            context=context,
        )
    )
