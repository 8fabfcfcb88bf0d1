"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ActionKind(StrEnum):
    """Closed set of mutations the model may propose.

    Values are the wire names the model emits in the ``action`` field.
    """

    ADD_CLIENT = "addClient"
    UPDATE_CLIENT = "updateClientData"

    ADD_EMPLOYMENT_RECORD = "addEmploymentRecord"
    UPDATE_EMPLOYMENT_RECORD = "updateEmploymentRecord"

    ADD_ACTIVE_INCOME = "addActiveIncome"
    UPDATE_ACTIVE_INCOME = "updateActiveIncome"

    ADD_REAL_ESTATE_RECORD = "addRealEstateRecord"
    UPDATE_REAL_ESTATE_RECORD = "updateRealEstateRecord"

    ADD_ASSET = "addAsset"
    UPDATE_ASSET = "updateAsset"
    SET_SHARED_OWNERS = "setSharedOwners"

    UPDATE_ADDRESS_DATA = "updateAddressData"
    ADD_FORMER_ADDRESS = "addFormerAddress"

    # Anything the model emits that is not listed above
    UNRECOGNIZED = "unrecognized"


class RecordKind(StrEnum):
    """Per-client record collections held by the application store."""

    EMPLOYMENT = "employment"
    ACTIVE_INCOME = "active_income"
    REAL_ESTATE = "real_estate"
    ASSET = "asset"
    FORMER_ADDRESS = "former_address"


class ChangeType(StrEnum):
    """Coarse category attached to human-readable change summaries."""

    CLIENT = "client"
    EMPLOYMENT = "employment"
    ADDRESS = "address"
    INCOME = "income"
    ASSET = "asset"
    REAL_ESTATE = "realEstate"
