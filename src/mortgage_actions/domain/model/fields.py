"""Per-record field sets carried by actions and stored records.

Every field is optional: ``None`` means "not provided" so the same class
describes both a partial update and a stored record.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .address import Address


@dataclass(frozen=True, slots=True)
class ClientFields:
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    ssn: str | None = None
    dob: str | None = None
    citizenship: str | None = None
    marital_status: str | None = None
    has_military_service: bool | None = None


@dataclass(frozen=True, slots=True)
class EmploymentFields:
    employer_name: str | None = None
    phone_number: str | None = None
    job_title: str | None = None
    income_type: str | None = None
    self_employed: bool | None = None
    currently_employed: bool | None = None
    start_date: str | None = None
    end_date: str | None = None
    gross_monthly_income: float | None = None
    employer_address: Address | None = None


@dataclass(frozen=True, slots=True)
class ActiveIncomeFields:
    employment_record_id: str | None = None
    company_name: str | None = None
    position: str | None = None
    monthly_amount: float | None = None
    bonus: float | None = None
    commissions: float | None = None
    overtime: float | None = None
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class RealEstateFields:
    property_type: str | None = None
    property_status: str | None = None
    occupancy_type: str | None = None
    property_value: float | None = None
    monthly_taxes: float | None = None
    monthly_insurance: float | None = None
    current_residence: bool | None = None


@dataclass(frozen=True, slots=True)
class AssetFields:
    category: str | None = None
    type: str | None = None
    amount: float | None = None
    institution_name: str | None = None
    account_number: str | None = None
    source: str | None = None


type RecordFields = EmploymentFields | ActiveIncomeFields | RealEstateFields | AssetFields


def provided_fields(values: object) -> dict[str, Any]:
    """Return the fields of a field-set dataclass that carry a value."""

    return {
        item.name: getattr(values, item.name)
        for item in fields(values)  # type: ignore[arg-type]
        if getattr(values, item.name) is not None
    }


def overlay[TFields](base: TFields, updates: TFields) -> TFields:
    """Return ``base`` with every provided field of ``updates`` applied."""

    return replace(base, **provided_fields(updates))  # type: ignore[type-var]
