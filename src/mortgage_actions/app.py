"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Any

from mortgage_actions.adapters.llm import dump_report, parse_actions, parse_state
from mortgage_actions.adapters.memory_store import InMemoryApplicationStore
from mortgage_actions.adapters.places import GooglePlacesClient
from mortgage_actions.config import (
    MissingConfigurationError,
    get_pipeline_config,
    get_places_config,
)
from mortgage_actions.domain.action_pipeline import AddressResolver, run_pipeline_async

if TYPE_CHECKING:
    from mortgage_actions.domain.action_pipeline import ExecutionReport, PipelineConfig
    from mortgage_actions.domain.model import Action, ApplicationStateView
    from mortgage_actions.domain.ports import MutationInterface, PlaceLookup


log = getLogger(__name__)


def build_address_resolver(
    config: PipelineConfig | None = None,
    *,
    lookup: PlaceLookup | None = None,
) -> AddressResolver:
    """Build a resolver over Google Places; resolves nothing when no API key is set."""

    effective_config = config or get_pipeline_config()
    if lookup is None:
        try:
            lookup = GooglePlacesClient(config=get_places_config())
        except MissingConfigurationError as exc:
            log.warning(f"Address resolution disabled: {exc}")
    return AddressResolver(lookup, timeout_seconds=effective_config.resolve_timeout_seconds)


def apply_actions(
    actions: list[Action],
    state: ApplicationStateView,
    *,
    mutations: MutationInterface | None = None,
    resolve: bool = True,
    config: PipelineConfig | None = None,
) -> ExecutionReport:
    """Run ``actions`` against ``mutations`` (an in-memory copy of ``state`` by default)."""

    effective_config = config or get_pipeline_config()
    effective_mutations = mutations or InMemoryApplicationStore(state)
    resolver = build_address_resolver(effective_config) if resolve else None
    log.info(
        f"Applying {len(actions)} action(s): clients={len(state.clients)}, "
        f"resolve={resolve}, concurrency={effective_config.resolve_concurrency}"
    )
    return asyncio.run(
        _run_with_resolver(actions, state, effective_mutations, resolver, effective_config)
    )


async def _run_with_resolver(
    actions: list[Action],
    state: ApplicationStateView,
    mutations: MutationInterface,
    resolver: AddressResolver | None,
    config: PipelineConfig,
) -> ExecutionReport:
    try:
        return await run_pipeline_async(
            actions, state, mutations, resolver=resolver, config=config
        )
    finally:
        if resolver is not None:
            await resolver.aclose()


def process_actions(
    actions_payload: object,
    state_payload: object,
    *,
    resolve: bool = True,
) -> dict[str, Any]:
    """Parse both JSON documents, run the pipeline and return the JSON report."""

    actions = parse_actions(actions_payload)
    state = parse_state(state_payload)
    report = apply_actions(actions, state, resolve=resolve)
    return dump_report(report)
