"""Translate wire payloads into domain actions and state, and reports back to JSON."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import fields, is_dataclass
from datetime import datetime
from enum import Enum
from logging import getLogger
from typing import TYPE_CHECKING, Any, cast

from pydantic import BaseModel, ValidationError

from mortgage_actions.domain.action_pipeline.summaries import camel_case
from mortgage_actions.domain.errors import MalformedActionError
from mortgage_actions.domain.model import (
    Action,
    ActionKind,
    ActiveIncomeFields,
    AddActiveIncomeParams,
    AddAssetParams,
    AddClientParams,
    AddEmploymentRecordParams,
    AddFormerAddressParams,
    AddRealEstateRecordParams,
    Address,
    AddressHistory,
    ApplicationStateView,
    AssetFields,
    ClientFields,
    ClientRecord,
    EmploymentFields,
    FormerAddress,
    PresentAddress,
    RealEstateFields,
    Record,
    SetSharedOwnersParams,
    UnrecognizedParams,
    UpdateActiveIncomeParams,
    UpdateAddressDataParams,
    UpdateAssetParams,
    UpdateClientParams,
    UpdateEmploymentRecordParams,
    UpdateRealEstateRecordParams,
)

from .schema import (
    ActionPayload,
    AddFormerAddressPayload,
    AddRecordPayload,
    AddressPayload,
    ApplicationStatePayload,
    ClientFieldsPayload,
    FormerAddressPayload,
    PresentAddressPayload,
    SetSharedOwnersPayload,
    UpdateActiveIncomePayload,
    UpdateAddressDataPayload,
    UpdateAssetPayload,
    UpdateClientPayload,
    UpdateEmploymentPayload,
    UpdateRealEstatePayload,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from mortgage_actions.domain.action_pipeline import ExecutionReport
    from mortgage_actions.domain.action_pipeline.summaries import ChangeSummary
    from mortgage_actions.domain.model import ActionParams

log = getLogger(__name__)


# Payload -> domain


def _to_fields[TFields](cls: type[TFields], payload: BaseModel) -> TFields:
    values: dict[str, Any] = {}
    for item in fields(cls):  # type: ignore[arg-type]
        value = getattr(payload, item.name)
        if isinstance(value, AddressPayload):
            value = to_address(value)
        values[item.name] = value
    return cls(**values)


def to_address(payload: AddressPayload | None) -> Address | None:
    if payload is None:
        return None
    return _to_fields(Address, payload)


def _to_present(payload: PresentAddressPayload | None) -> PresentAddress | None:
    if payload is None:
        return None
    return PresentAddress(
        addr=to_address(payload.addr), from_date=payload.from_date, to_date=payload.to_date
    )


def _to_former(payload: FormerAddressPayload) -> FormerAddress:
    return FormerAddress(
        addr=to_address(payload.addr),
        id=payload.id,
        from_date=payload.from_date,
        to_date=payload.to_date,
    )


def _add_client(params: Mapping[str, Any]) -> ActionParams:
    raw = params.get("updates", params)
    payload = ClientFieldsPayload.model_validate(raw)
    return AddClientParams(fields=_to_fields(ClientFields, payload))


def _update_client(params: Mapping[str, Any]) -> ActionParams:
    payload = UpdateClientPayload.model_validate(params)
    return UpdateClientParams(
        client_id=payload.id or payload.client_id,
        updates=_to_fields(ClientFields, payload.updates),
    )


def _add_record(cls: Callable[..., ActionParams]) -> Callable[[Mapping[str, Any]], ActionParams]:
    def build(params: Mapping[str, Any]) -> ActionParams:
        return cls(client_id=AddRecordPayload.model_validate(params).client_id)

    return build


def _update_employment(params: Mapping[str, Any]) -> ActionParams:
    payload = UpdateEmploymentPayload.model_validate(params)
    return UpdateEmploymentRecordParams(
        client_id=payload.client_id,
        record_id=payload.record_id,
        updates=_to_fields(EmploymentFields, payload.updates),
    )


def _update_income(params: Mapping[str, Any]) -> ActionParams:
    payload = UpdateActiveIncomePayload.model_validate(params)
    return UpdateActiveIncomeParams(
        client_id=payload.client_id,
        record_id=payload.record_id,
        updates=_to_fields(ActiveIncomeFields, payload.updates),
    )


def _update_real_estate(params: Mapping[str, Any]) -> ActionParams:
    payload = UpdateRealEstatePayload.model_validate(params)
    return UpdateRealEstateRecordParams(
        client_id=payload.client_id,
        record_id=payload.record_id,
        updates=_to_fields(RealEstateFields, payload.updates),
    )


def _update_asset(params: Mapping[str, Any]) -> ActionParams:
    payload = UpdateAssetPayload.model_validate(params)
    return UpdateAssetParams(
        client_id=payload.client_id,
        record_id=payload.record_id,
        updates=_to_fields(AssetFields, payload.updates),
    )


def _set_shared_owners(params: Mapping[str, Any]) -> ActionParams:
    payload = SetSharedOwnersPayload.model_validate(params)
    return SetSharedOwnersParams(
        client_id=payload.client_id,
        asset_id=payload.asset_id,
        shared_client_ids=tuple(payload.shared_client_ids),
    )


def _update_address(params: Mapping[str, Any]) -> ActionParams:
    payload = UpdateAddressDataPayload.model_validate(params)
    return UpdateAddressDataParams(
        client_id=payload.client_id,
        data=_to_present(payload.data) or PresentAddress(),
    )


def _add_former_address(params: Mapping[str, Any]) -> ActionParams:
    payload = AddFormerAddressPayload.model_validate(params)
    return AddFormerAddressParams(client_id=payload.client_id, address=_to_former(payload.address))


PARAMS_BUILDERS: dict[ActionKind, Callable[[Mapping[str, Any]], ActionParams]] = {
    ActionKind.ADD_CLIENT: _add_client,
    ActionKind.UPDATE_CLIENT: _update_client,
    ActionKind.ADD_EMPLOYMENT_RECORD: _add_record(AddEmploymentRecordParams),
    ActionKind.UPDATE_EMPLOYMENT_RECORD: _update_employment,
    ActionKind.ADD_ACTIVE_INCOME: _add_record(AddActiveIncomeParams),
    ActionKind.UPDATE_ACTIVE_INCOME: _update_income,
    ActionKind.ADD_REAL_ESTATE_RECORD: _add_record(AddRealEstateRecordParams),
    ActionKind.UPDATE_REAL_ESTATE_RECORD: _update_real_estate,
    ActionKind.ADD_ASSET: _add_record(AddAssetParams),
    ActionKind.UPDATE_ASSET: _update_asset,
    ActionKind.SET_SHARED_OWNERS: _set_shared_owners,
    ActionKind.UPDATE_ADDRESS_DATA: _update_address,
    ActionKind.ADD_FORMER_ADDRESS: _add_former_address,
}


def parse_action(payload: object, *, index: int | None = None) -> Action:
    """Translate one ``{"action", "params", "returnId"}`` object."""

    try:
        envelope = ActionPayload.model_validate(payload)
        builder = PARAMS_BUILDERS.get(_kind_for(envelope.action))
        if builder is None:
            log.warning(f"Unrecognized action {envelope.action!r}")
            params: ActionParams = UnrecognizedParams(
                name=envelope.action, raw=dict(envelope.params)
            )
        else:
            params = builder(envelope.params)
    except ValidationError as exc:
        raise MalformedActionError(str(exc), index=index) from exc
    return Action(params=params, return_id=envelope.return_id)


def parse_actions(payload: object) -> list[Action]:
    """Translate a batch; accepts a bare list or an ``{"actions": [...]}`` object."""

    if isinstance(payload, Mapping) and "actions" in payload:
        payload = cast(Mapping[str, object], payload)["actions"]
    if not isinstance(payload, Sequence) or isinstance(payload, str | bytes):
        raise MalformedActionError("Expected a list of actions")
    return [parse_action(item, index=index) for index, item in enumerate(payload)]


def _kind_for(name: str) -> ActionKind | None:
    try:
        kind = ActionKind(name)
    except ValueError:
        return None
    return None if kind is ActionKind.UNRECOGNIZED else kind


def parse_state(payload: object) -> ApplicationStateView:
    """Translate the application state JSON into an immutable snapshot."""

    state = ApplicationStatePayload.model_validate(payload)
    return ApplicationStateView(
        clients={
            client_id: ClientRecord(
                id=client.id or client_id, fields=_to_fields(ClientFields, client)
            )
            for client_id, client in state.clients.items()
        },
        employment={
            client_id: tuple(
                Record(id=record.id, data=_to_fields(EmploymentFields, record))
                for record in records
            )
            for client_id, records in state.employment_data.items()
        },
        active_income={
            client_id: tuple(
                Record(id=record.id, data=_to_fields(ActiveIncomeFields, record))
                for record in records
            )
            for client_id, records in state.income_data.active.items()
        },
        real_estate={
            client_id: tuple(
                Record(id=record.id, data=_to_fields(RealEstateFields, record))
                for record in records
            )
            for client_id, records in state.real_estate_data.items()
        },
        assets={
            client_id: tuple(
                Record(id=record.id, data=_to_fields(AssetFields, record)) for record in records
            )
            for client_id, records in state.assets_data.items()
        },
        addresses={
            client_id: AddressHistory(
                present=_to_present(history.present),
                former=tuple(
                    Record(id=former.id, data=_to_former(former))
                    for former in history.former
                    if former.id
                ),
            )
            for client_id, history in state.address_data.items()
        },
    )


# Domain -> JSON


def to_wire(value: object) -> Any:
    """Render dataclasses, enums and containers as camelCase JSON values, dropping ``None``."""

    if is_dataclass(value) and not isinstance(value, type):
        return {
            camel_case(item.name): to_wire(getattr(value, item.name))
            for item in fields(value)
            if getattr(value, item.name) is not None
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Mapping):
        mapping_value = cast(Mapping[str, object], value)
        return {key: to_wire(item) for key, item in mapping_value.items()}
    if isinstance(value, list | tuple):
        return [to_wire(item) for item in cast(Sequence[object], value)]
    return value


def dump_action(action: Action) -> dict[str, Any]:
    params = action.params
    if isinstance(params, UnrecognizedParams):
        wire_params: dict[str, Any] = dict(params.raw)
    elif isinstance(params, AddClientParams):
        wire_params = to_wire(params.fields)
    elif isinstance(params, UpdateClientParams):
        wire_params = to_wire(params)
        if "clientId" in wire_params:
            wire_params["id"] = wire_params.pop("clientId")
    else:
        wire_params = to_wire(params)

    payload: dict[str, Any] = {"action": action.name, "params": wire_params}
    if action.return_id is not None:
        payload["returnId"] = action.return_id
    return payload


def dump_summary(summary: ChangeSummary) -> dict[str, Any]:
    return to_wire(summary)


def dump_report(report: ExecutionReport) -> dict[str, Any]:
    return {
        "applied": [
            {
                "action": dump_action(item.resolved),
                **({"createdId": item.created_id} if item.created_id else {}),
                **({"summary": dump_summary(item.summary)} if item.summary else {}),
            }
            for item in report.applied
        ],
        "failed": [
            {"action": dump_action(item.action), "error": item.error} for item in report.failed
        ],
        "rejected": [
            {
                "action": dump_action(issue.action),
                "errors": list(issue.errors),
                "warnings": list(issue.warnings),
            }
            for issue in report.rejected
        ],
        "warned": [
            {"action": dump_action(issue.action), "warnings": list(issue.warnings)}
            for issue in report.warned
        ],
        "merged": [
            {
                "droppedAdd": dump_action(item.dropped_add),
                "consumedUpdate": dump_action(item.consumed_update),
                "mergedUpdate": dump_action(item.merged_update),
                "existingRecordId": item.existing_record_id,
            }
            for item in report.merged
        ],
        "unresolvedAddresses": [dump_action(action) for action in report.unresolved_addresses],
        "idMap": dict(report.id_map),
    }
