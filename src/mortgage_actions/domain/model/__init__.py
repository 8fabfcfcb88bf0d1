"""Public domain model surface."""

from __future__ import annotations

from mortgage_actions.domain.model.actions import (
    CREATING_KINDS,
    Action,
    ActionParams,
    AddActiveIncomeParams,
    AddAssetParams,
    AddClientParams,
    AddEmploymentRecordParams,
    AddFormerAddressParams,
    AddRealEstateRecordParams,
    AddRecordParams,
    SetSharedOwnersParams,
    UnrecognizedParams,
    UpdateActiveIncomeParams,
    UpdateAddressDataParams,
    UpdateAssetParams,
    UpdateClientParams,
    UpdateEmploymentRecordParams,
    UpdateRealEstateRecordParams,
    UpdateRecordParams,
)
from mortgage_actions.domain.model.address import Address, FormerAddress, PresentAddress
from mortgage_actions.domain.model.enums import ActionKind, ChangeType, RecordKind
from mortgage_actions.domain.model.fields import (
    ActiveIncomeFields,
    AssetFields,
    ClientFields,
    EmploymentFields,
    RealEstateFields,
    RecordFields,
    overlay,
    provided_fields,
)
from mortgage_actions.domain.model.placeholders import (
    PLACEHOLDER_PREFIX,
    is_placeholder,
    placeholder_for,
)
from mortgage_actions.domain.model.records import (
    AddressHistory,
    ClientRecord,
    ClientSummary,
    Record,
    display_name,
)
from mortgage_actions.domain.model.state import ApplicationStateView

__all__ = [  # noqa: RUF022
    # actions
    "Action",
    "ActionParams",
    "CREATING_KINDS",
    "AddClientParams",
    "UpdateClientParams",
    "AddRecordParams",
    "AddEmploymentRecordParams",
    "AddActiveIncomeParams",
    "AddRealEstateRecordParams",
    "AddAssetParams",
    "UpdateRecordParams",
    "UpdateEmploymentRecordParams",
    "UpdateActiveIncomeParams",
    "UpdateRealEstateRecordParams",
    "UpdateAssetParams",
    "SetSharedOwnersParams",
    "UpdateAddressDataParams",
    "AddFormerAddressParams",
    "UnrecognizedParams",
    # addresses
    "Address",
    "PresentAddress",
    "FormerAddress",
    # enums
    "ActionKind",
    "RecordKind",
    "ChangeType",
    # fields
    "ClientFields",
    "EmploymentFields",
    "ActiveIncomeFields",
    "RealEstateFields",
    "AssetFields",
    "RecordFields",
    "provided_fields",
    "overlay",
    # placeholders
    "PLACEHOLDER_PREFIX",
    "is_placeholder",
    "placeholder_for",
    # records & state
    "ClientRecord",
    "ClientSummary",
    "Record",
    "AddressHistory",
    "display_name",
    "ApplicationStateView",
]
