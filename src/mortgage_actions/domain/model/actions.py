"""Typed action model.

An :class:`Action` wraps exactly one params object; the params class decides the
action kind. ``ActionParams`` is the closed union of all params shapes.
"""

# switch off type warnings because of default_factory=tuple
# pyright: reportUnknownVariableType=false

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from .address import FormerAddress, PresentAddress
from .enums import ActionKind, RecordKind
from .fields import (
    ActiveIncomeFields,
    AssetFields,
    ClientFields,
    EmploymentFields,
    RealEstateFields,
)
from .placeholders import placeholder_for

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True, kw_only=True)
class AddClientParams:
    kind: ClassVar[ActionKind] = ActionKind.ADD_CLIENT

    fields: ClientFields = field(default_factory=ClientFields)


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateClientParams:
    kind: ClassVar[ActionKind] = ActionKind.UPDATE_CLIENT

    client_id: str | None = None
    updates: ClientFields = field(default_factory=ClientFields)


@dataclass(frozen=True, slots=True, kw_only=True)
class AddRecordParams:
    """Creates an empty record of ``record_kind`` for one client."""

    kind: ClassVar[ActionKind]
    record_kind: ClassVar[RecordKind]

    client_id: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AddEmploymentRecordParams(AddRecordParams):
    kind = ActionKind.ADD_EMPLOYMENT_RECORD
    record_kind = RecordKind.EMPLOYMENT


@dataclass(frozen=True, slots=True, kw_only=True)
class AddActiveIncomeParams(AddRecordParams):
    kind = ActionKind.ADD_ACTIVE_INCOME
    record_kind = RecordKind.ACTIVE_INCOME


@dataclass(frozen=True, slots=True, kw_only=True)
class AddRealEstateRecordParams(AddRecordParams):
    kind = ActionKind.ADD_REAL_ESTATE_RECORD
    record_kind = RecordKind.REAL_ESTATE


@dataclass(frozen=True, slots=True, kw_only=True)
class AddAssetParams(AddRecordParams):
    kind = ActionKind.ADD_ASSET
    record_kind = RecordKind.ASSET


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateEmploymentRecordParams:
    kind: ClassVar[ActionKind] = ActionKind.UPDATE_EMPLOYMENT_RECORD
    record_kind: ClassVar[RecordKind] = RecordKind.EMPLOYMENT

    client_id: str | None = None
    record_id: str | None = None
    updates: EmploymentFields = field(default_factory=EmploymentFields)


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateActiveIncomeParams:
    kind: ClassVar[ActionKind] = ActionKind.UPDATE_ACTIVE_INCOME
    record_kind: ClassVar[RecordKind] = RecordKind.ACTIVE_INCOME

    client_id: str | None = None
    record_id: str | None = None
    updates: ActiveIncomeFields = field(default_factory=ActiveIncomeFields)


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateRealEstateRecordParams:
    kind: ClassVar[ActionKind] = ActionKind.UPDATE_REAL_ESTATE_RECORD
    record_kind: ClassVar[RecordKind] = RecordKind.REAL_ESTATE

    client_id: str | None = None
    record_id: str | None = None
    updates: RealEstateFields = field(default_factory=RealEstateFields)


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateAssetParams:
    kind: ClassVar[ActionKind] = ActionKind.UPDATE_ASSET
    record_kind: ClassVar[RecordKind] = RecordKind.ASSET

    client_id: str | None = None
    record_id: str | None = None
    updates: AssetFields = field(default_factory=AssetFields)


@dataclass(frozen=True, slots=True, kw_only=True)
class SetSharedOwnersParams:
    kind: ClassVar[ActionKind] = ActionKind.SET_SHARED_OWNERS

    client_id: str | None = None
    asset_id: str | None = None
    shared_client_ids: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateAddressDataParams:
    kind: ClassVar[ActionKind] = ActionKind.UPDATE_ADDRESS_DATA

    client_id: str | None = None
    data: PresentAddress = field(default_factory=PresentAddress)


@dataclass(frozen=True, slots=True, kw_only=True)
class AddFormerAddressParams:
    kind: ClassVar[ActionKind] = ActionKind.ADD_FORMER_ADDRESS
    record_kind: ClassVar[RecordKind] = RecordKind.FORMER_ADDRESS

    client_id: str | None = None
    address: FormerAddress = field(default_factory=FormerAddress)


@dataclass(frozen=True, slots=True, kw_only=True)
class UnrecognizedParams:
    """Params of an action name outside :class:`ActionKind`, kept verbatim."""

    kind: ClassVar[ActionKind] = ActionKind.UNRECOGNIZED

    name: str
    raw: Mapping[str, object] = field(default_factory=dict)

    @property
    def client_id(self) -> str | None:
        value = self.raw.get("clientId")
        return value if isinstance(value, str) else None


type UpdateRecordParams = (
    UpdateEmploymentRecordParams
    | UpdateActiveIncomeParams
    | UpdateRealEstateRecordParams
    | UpdateAssetParams
)

type ActionParams = (
    AddClientParams
    | UpdateClientParams
    | AddEmploymentRecordParams
    | AddActiveIncomeParams
    | AddRealEstateRecordParams
    | AddAssetParams
    | UpdateEmploymentRecordParams
    | UpdateActiveIncomeParams
    | UpdateRealEstateRecordParams
    | UpdateAssetParams
    | SetSharedOwnersParams
    | UpdateAddressDataParams
    | AddFormerAddressParams
    | UnrecognizedParams
)

CREATING_KINDS: frozenset[ActionKind] = frozenset(
    {
        ActionKind.ADD_CLIENT,
        ActionKind.ADD_EMPLOYMENT_RECORD,
        ActionKind.ADD_ACTIVE_INCOME,
        ActionKind.ADD_REAL_ESTATE_RECORD,
        ActionKind.ADD_ASSET,
        ActionKind.ADD_FORMER_ADDRESS,
    }
)


@dataclass(frozen=True, slots=True)
class Action:
    """One proposed mutation."""

    params: ActionParams
    return_id: str | None = None

    @property
    def kind(self) -> ActionKind:
        return self.params.kind

    @property
    def name(self) -> str:
        """Wire name of the action, including unrecognized names."""

        if isinstance(self.params, UnrecognizedParams):
            return self.params.name
        return self.kind.value

    @property
    def client_id(self) -> str | None:
        return getattr(self.params, "client_id", None)

    @property
    def placeholder(self) -> str | None:
        """Placeholder this action's new record is bound to, if any."""

        if not self.return_id:
            return None
        return placeholder_for(self.return_id)

    @property
    def creates_record(self) -> bool:
        return self.kind in CREATING_KINDS
