"""Execution phase: apply accepted actions through the mutation interface.

Actions run strictly in batch order. Placeholders are swapped for real
identifiers right before each call, so an action can only see records created
by actions that precede it.
"""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING, Any

from mortgage_actions.domain.action_pipeline.id_map import DynamicIdMap
from mortgage_actions.domain.action_pipeline.orchestrator import PipelinePhase
from mortgage_actions.domain.action_pipeline.report import (
    AppliedAction,
    ExecutionReport,
    FailedAction,
)
from mortgage_actions.domain.action_pipeline.summaries import summarize
from mortgage_actions.domain.errors import PipelineInvariantError, PlaceholderRebindError
from mortgage_actions.domain.model import (
    ActionKind,
    AddClientParams,
    RecordKind,
    SetSharedOwnersParams,
    UnrecognizedParams,
    UpdateActiveIncomeParams,
    UpdateAssetParams,
    UpdateEmploymentRecordParams,
    UpdateRealEstateRecordParams,
    display_name,
    is_placeholder,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from mortgage_actions.domain.action_pipeline.context import ActionBatch, PipelineContext
    from mortgage_actions.domain.action_pipeline.summaries import ChangeSummary
    from mortgage_actions.domain.model import (
        Action,
        ActionParams,
        AddFormerAddressParams,
        AddRecordParams,
        UpdateAddressDataParams,
        UpdateClientParams,
    )
    from mortgage_actions.domain.ports import MutationInterface

log = getLogger(__name__)


class UnresolvedPlaceholderError(LookupError):
    """A placeholder is neither bound in this batch nor covered by a fallback record."""

    def __init__(self, placeholder: str) -> None:
        self.placeholder = placeholder
        super().__init__(f"Unresolved placeholder {placeholder}")


type Handler = Callable[[MutationInterface, Any], Awaitable[str | None]]


async def _add_client(mutations: MutationInterface, params: AddClientParams) -> str:
    return await mutations.add_client(params.fields)


async def _update_client(mutations: MutationInterface, params: UpdateClientParams) -> None:
    await mutations.update_client(_require(params.client_id), params.updates)


def _add_record(
    call: Callable[[MutationInterface], Callable[[str], Awaitable[str]]],
) -> Handler:
    async def handler(mutations: MutationInterface, params: AddRecordParams) -> str:
        return await call(mutations)(_require(params.client_id))

    return handler


async def _update_employment(
    mutations: MutationInterface, params: UpdateEmploymentRecordParams
) -> None:
    await mutations.update_employment_record(
        _require(params.client_id), _require(params.record_id), params.updates
    )


async def _update_income(mutations: MutationInterface, params: UpdateActiveIncomeParams) -> None:
    await mutations.update_active_income(
        _require(params.client_id), _require(params.record_id), params.updates
    )


async def _update_real_estate(
    mutations: MutationInterface, params: UpdateRealEstateRecordParams
) -> None:
    await mutations.update_real_estate_record(
        _require(params.client_id), _require(params.record_id), params.updates
    )


async def _update_asset(mutations: MutationInterface, params: UpdateAssetParams) -> None:
    await mutations.update_asset(
        _require(params.client_id), _require(params.record_id), params.updates
    )


async def _set_shared_owners(mutations: MutationInterface, params: SetSharedOwnersParams) -> None:
    await mutations.set_shared_owners(
        _require(params.client_id), _require(params.asset_id), params.shared_client_ids
    )


async def _update_address(mutations: MutationInterface, params: UpdateAddressDataParams) -> None:
    await mutations.update_address_data(_require(params.client_id), params.data)


async def _add_former_address(
    mutations: MutationInterface, params: AddFormerAddressParams
) -> str:
    return await mutations.add_former_address(_require(params.client_id), params.address)


HANDLERS: dict[ActionKind, Handler] = {
    ActionKind.ADD_CLIENT: _add_client,
    ActionKind.UPDATE_CLIENT: _update_client,
    ActionKind.ADD_EMPLOYMENT_RECORD: _add_record(lambda m: m.add_employment_record),
    ActionKind.UPDATE_EMPLOYMENT_RECORD: _update_employment,
    ActionKind.ADD_ACTIVE_INCOME: _add_record(lambda m: m.add_active_income),
    ActionKind.UPDATE_ACTIVE_INCOME: _update_income,
    ActionKind.ADD_REAL_ESTATE_RECORD: _add_record(lambda m: m.add_real_estate_record),
    ActionKind.UPDATE_REAL_ESTATE_RECORD: _update_real_estate,
    ActionKind.ADD_ASSET: _add_record(lambda m: m.add_asset),
    ActionKind.UPDATE_ASSET: _update_asset,
    ActionKind.SET_SHARED_OWNERS: _set_shared_owners,
    ActionKind.UPDATE_ADDRESS_DATA: _update_address,
    ActionKind.ADD_FORMER_ADDRESS: _add_former_address,
}


def _require(value: str | None) -> str:
    if not value:
        raise ValueError("Missing required identifier")
    return value


class ActionExecutor:
    """Apply actions in order, binding and resolving placeholders as it goes.

    ``id_map`` may be pre-seeded (for example with merge aliases). Results are
    appended to ``report`` as each action finishes.
    """

    def __init__(
        self,
        mutations: MutationInterface,
        *,
        id_map: DynamicIdMap | None = None,
        report: ExecutionReport | None = None,
    ) -> None:
        self._mutations = mutations
        self.id_map = id_map if id_map is not None else DynamicIdMap()
        self.report = report if report is not None else ExecutionReport()

    async def execute(self, actions: Iterable[Action]) -> ExecutionReport:
        self.report.id_map.update(self.id_map.as_dict())
        for action in actions:
            await self._execute_one(action)
        return self.report

    async def _execute_one(self, action: Action) -> None:
        handler = HANDLERS.get(action.kind)
        if handler is None or isinstance(action.params, UnrecognizedParams):
            log.warning(f"Skipping unsupported action {action.name!r}")
            self.report.failed.append(
                FailedAction(action=action, error=f"Unsupported action: {action.name}")
            )
            return

        placeholder = action.placeholder if action.creates_record else None
        if placeholder is not None and self.id_map.has(placeholder):
            raise PlaceholderRebindError(
                placeholder, existing_id=self.id_map.get(placeholder) or ""
            )

        try:
            params = await self._resolve_params(action.params)
        except UnresolvedPlaceholderError as exc:
            log.error(f"Cannot apply {action.name}: {exc}")  # noqa: TRY400
            self.report.failed.append(FailedAction(action=action, error=str(exc)))
            return
        except PipelineInvariantError:
            raise
        except Exception as exc:
            log.exception(f"Could not resolve identifiers for {action.name}")
            self.report.failed.append(FailedAction(action=action, error=str(exc) or repr(exc)))
            return

        try:
            created_id = await handler(self._mutations, params)
        except PipelineInvariantError:
            raise
        except Exception as exc:
            log.exception(f"Mutation {action.name} failed")
            self.report.failed.append(FailedAction(action=action, error=str(exc) or repr(exc)))
            return

        if placeholder is not None and created_id:
            self.id_map.bind(placeholder, created_id)
            self.report.id_map[placeholder] = created_id

        resolved = replace(action, params=params)
        summary = await self._summarize(params, created_id)
        self.report.applied.append(
            AppliedAction(
                action=action,
                resolved=resolved,
                created_id=created_id if action.creates_record else None,
                summary=summary,
            )
        )

    async def _resolve_params(self, params: ActionParams) -> ActionParams:  # noqa: C901
        if isinstance(params, UnrecognizedParams):
            return params
        changes: dict[str, Any] = {}
        client_id = getattr(params, "client_id", None)
        if client_id is not None:
            client_id = self._resolve_client(client_id)
            changes["client_id"] = client_id

        match params:
            case (
                UpdateEmploymentRecordParams()
                | UpdateActiveIncomeParams()
                | UpdateRealEstateRecordParams()
                | UpdateAssetParams()
            ):
                if params.record_id is not None:
                    changes["record_id"] = await self._resolve_record(
                        params.record_id, client_id, params.record_kind
                    )
                if isinstance(params, UpdateActiveIncomeParams):
                    employment_id = params.updates.employment_record_id
                    if employment_id is not None:
                        resolved = await self._resolve_record(
                            employment_id, client_id, RecordKind.EMPLOYMENT
                        )
                        changes["updates"] = replace(
                            params.updates, employment_record_id=resolved
                        )
            case SetSharedOwnersParams():
                if params.asset_id is not None:
                    changes["asset_id"] = await self._resolve_record(
                        params.asset_id, client_id, RecordKind.ASSET
                    )
                changes["shared_client_ids"] = tuple(
                    self._resolve_client(shared) for shared in params.shared_client_ids
                )
            case _:
                pass

        if not changes:
            return params
        return replace(params, **changes)  # type: ignore[arg-type]

    def _resolve_client(self, client_id: str) -> str:
        if not is_placeholder(client_id):
            return client_id
        bound = self.id_map.get(client_id)
        if bound is None:
            raise UnresolvedPlaceholderError(client_id)
        return bound

    async def _resolve_record(
        self, record_id: str, client_id: str | None, kind: RecordKind
    ) -> str:
        if not is_placeholder(record_id):
            return record_id
        bound = self.id_map.get(record_id)
        if bound is not None:
            return bound
        if not client_id:
            raise UnresolvedPlaceholderError(record_id)

        records = await self._mutations.list_records(client_id, kind)
        if not records:
            raise UnresolvedPlaceholderError(record_id)
        fallback = records[-1].id
        log.info(
            f"Placeholder {record_id} not bound; falling back to latest {kind} record "
            f"{fallback} of client {client_id}"
        )
        return fallback

    async def _summarize(
        self, params: ActionParams, created_id: str | None
    ) -> ChangeSummary | None:
        try:
            if isinstance(params, AddClientParams):
                name = display_name(params.fields.first_name, params.fields.last_name)
            else:
                name = await self._client_name(getattr(params, "client_id", None))
            return summarize(params, client_name=name)
        except Exception:  # noqa: BLE001
            log.warning(f"Could not build change summary for {params.kind} ({created_id})")
            return None

    async def _client_name(self, client_id: str | None) -> str:
        if not client_id:
            return display_name(None, None)
        client = await self._mutations.get_client(client_id)
        if client is None:
            return display_name(None, None)
        return client.display_name


class ExecutionPhase(PipelinePhase):
    """Apply the final accepted actions."""

    name: str = "execution"

    async def run(self, batch: ActionBatch, *, context: PipelineContext) -> None:
        if context.mutations is None:
            raise PipelineInvariantError("Execution requires a mutation interface")
        for placeholder, record_id in context.aliases.items():
            if not context.id_map.has(placeholder):
                context.id_map.bind(placeholder, record_id)
        executor = ActionExecutor(
            context.mutations, id_map=context.id_map, report=context.report
        )
        await executor.execute(batch.actions)
