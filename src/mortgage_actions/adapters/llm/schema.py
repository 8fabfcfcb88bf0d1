"""Pydantic models for the model's action JSON and the application state JSON.

Both sides speak camelCase; attributes are snake_case and match the domain
field sets one to one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar, cast

from pydantic import BaseModel, ConfigDict, Field, model_validator

log = logging.getLogger(__name__)


class WireModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    @model_validator(mode="before")
    @classmethod
    def _empty_to_none(cls, value: object) -> object:
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            return {key: None if item == "" else item for key, item in mapping_value.items()}
        return value

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = {f"{type(self).__name__}.{key}" for key in extras}
        new_keys.difference_update(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.warning("Unmodeled keys in payload: %s", ", ".join(sorted(new_keys)))


# Field sets


class AddressPayload(WireModel):
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    region: str | None = None
    postal_code: str | None = Field(default=None, alias="postalCode")
    country: str | None = None
    formatted_address: str | None = Field(default=None, alias="formattedAddress")
    lat: float | None = None
    lng: float | None = None


class ClientFieldsPayload(WireModel):
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    email: str | None = None
    phone: str | None = None
    ssn: str | None = None
    dob: str | None = None
    citizenship: str | None = None
    marital_status: str | None = Field(default=None, alias="maritalStatus")
    has_military_service: bool | None = Field(default=None, alias="hasMilitaryService")


class EmploymentFieldsPayload(WireModel):
    employer_name: str | None = Field(default=None, alias="employerName")
    phone_number: str | None = Field(default=None, alias="phoneNumber")
    job_title: str | None = Field(default=None, alias="jobTitle")
    income_type: str | None = Field(default=None, alias="incomeType")
    self_employed: bool | None = Field(default=None, alias="selfEmployed")
    currently_employed: bool | None = Field(default=None, alias="currentlyEmployed")
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    gross_monthly_income: float | None = Field(default=None, alias="grossMonthlyIncome")
    employer_address: AddressPayload | None = Field(default=None, alias="employerAddress")


class ActiveIncomeFieldsPayload(WireModel):
    employment_record_id: str | None = Field(default=None, alias="employmentRecordId")
    company_name: str | None = Field(default=None, alias="companyName")
    position: str | None = None
    monthly_amount: float | None = Field(default=None, alias="monthlyAmount")
    bonus: float | None = None
    commissions: float | None = None
    overtime: float | None = None
    notes: str | None = None


class RealEstateFieldsPayload(WireModel):
    property_type: str | None = Field(default=None, alias="propertyType")
    property_status: str | None = Field(default=None, alias="propertyStatus")
    occupancy_type: str | None = Field(default=None, alias="occupancyType")
    property_value: float | None = Field(default=None, alias="propertyValue")
    monthly_taxes: float | None = Field(default=None, alias="monthlyTaxes")
    monthly_insurance: float | None = Field(default=None, alias="monthlyInsurance")
    current_residence: bool | None = Field(default=None, alias="currentResidence")


class AssetFieldsPayload(WireModel):
    category: str | None = None
    type: str | None = None
    amount: float | None = None
    institution_name: str | None = Field(default=None, alias="institutionName")
    account_number: str | None = Field(default=None, alias="accountNumber")
    source: str | None = None


class PresentAddressPayload(WireModel):
    addr: AddressPayload | None = None
    from_date: str | None = Field(default=None, alias="fromDate")
    to_date: str | None = Field(default=None, alias="toDate")


class FormerAddressPayload(PresentAddressPayload):
    id: str | None = None


# Action params


class ActionPayload(WireModel):
    action: str
    params: dict[str, Any] = Field(default_factory=dict[str, Any])
    return_id: str | None = Field(default=None, alias="returnId")


class UpdateClientPayload(WireModel):
    id: str | None = None
    client_id: str | None = Field(default=None, alias="clientId")
    updates: ClientFieldsPayload = Field(default_factory=ClientFieldsPayload)


class AddRecordPayload(WireModel):
    client_id: str | None = Field(default=None, alias="clientId")


class UpdateEmploymentPayload(AddRecordPayload):
    record_id: str | None = Field(default=None, alias="recordId")
    updates: EmploymentFieldsPayload = Field(default_factory=EmploymentFieldsPayload)


class UpdateActiveIncomePayload(AddRecordPayload):
    record_id: str | None = Field(default=None, alias="recordId")
    updates: ActiveIncomeFieldsPayload = Field(default_factory=ActiveIncomeFieldsPayload)


class UpdateRealEstatePayload(AddRecordPayload):
    record_id: str | None = Field(default=None, alias="recordId")
    updates: RealEstateFieldsPayload = Field(default_factory=RealEstateFieldsPayload)


class UpdateAssetPayload(AddRecordPayload):
    record_id: str | None = Field(default=None, alias="recordId")
    updates: AssetFieldsPayload = Field(default_factory=AssetFieldsPayload)


class SetSharedOwnersPayload(AddRecordPayload):
    asset_id: str | None = Field(default=None, alias="assetId")
    shared_client_ids: list[str] = Field(default_factory=list[str], alias="sharedClientIds")


class UpdateAddressDataPayload(AddRecordPayload):
    data: PresentAddressPayload = Field(default_factory=PresentAddressPayload)


class AddFormerAddressPayload(AddRecordPayload):
    address: FormerAddressPayload = Field(default_factory=FormerAddressPayload)


# Application state (the surrounding app sends more than the pipeline needs)

STATE_MODEL_CONFIG = ConfigDict(extra="ignore", populate_by_name=True)


class ClientStatePayload(ClientFieldsPayload):
    model_config = STATE_MODEL_CONFIG

    id: str | None = None


class EmploymentRecordPayload(EmploymentFieldsPayload):
    model_config = STATE_MODEL_CONFIG

    id: str


class ActiveIncomeRecordPayload(ActiveIncomeFieldsPayload):
    model_config = STATE_MODEL_CONFIG

    id: str


class RealEstateRecordPayload(RealEstateFieldsPayload):
    model_config = STATE_MODEL_CONFIG

    id: str


class AssetRecordPayload(AssetFieldsPayload):
    model_config = STATE_MODEL_CONFIG

    id: str


class AddressRecordPayload(FormerAddressPayload):
    model_config = STATE_MODEL_CONFIG


class IncomeDataPayload(WireModel):
    model_config = STATE_MODEL_CONFIG

    active: dict[str, list[ActiveIncomeRecordPayload]] = Field(
        default_factory=dict[str, list[ActiveIncomeRecordPayload]]
    )


class ClientAddressPayload(WireModel):
    model_config = STATE_MODEL_CONFIG

    present: AddressRecordPayload | None = None
    former: list[AddressRecordPayload] = Field(default_factory=list[AddressRecordPayload])


class ApplicationStatePayload(WireModel):
    model_config = STATE_MODEL_CONFIG

    clients: dict[str, ClientStatePayload] = Field(default_factory=dict[str, ClientStatePayload])
    employment_data: dict[str, list[EmploymentRecordPayload]] = Field(
        default_factory=dict[str, list[EmploymentRecordPayload]], alias="employmentData"
    )
    income_data: IncomeDataPayload = Field(default_factory=IncomeDataPayload, alias="incomeData")
    real_estate_data: dict[str, list[RealEstateRecordPayload]] = Field(
        default_factory=dict[str, list[RealEstateRecordPayload]], alias="realEstateData"
    )
    assets_data: dict[str, list[AssetRecordPayload]] = Field(
        default_factory=dict[str, list[AssetRecordPayload]], alias="assetsData"
    )
    address_data: dict[str, ClientAddressPayload] = Field(
        default_factory=dict[str, ClientAddressPayload], alias="addressData"
    )
