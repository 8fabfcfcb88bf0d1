"""Per-kind rule sets.

Each rule set receives the action params and appends messages to the
``errors`` / ``warnings`` lists of a :class:`RuleFindings`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mortgage_actions.domain.model import (
    ActionKind,
    AddClientParams,
    AddFormerAddressParams,
    UpdateActiveIncomeParams,
    UpdateAddressDataParams,
    UpdateAssetParams,
    UpdateClientParams,
    UpdateEmploymentRecordParams,
    UpdateRealEstateRecordParams,
)

from .predicates import (
    is_blank,
    is_non_negative,
    is_ordered_range,
    is_valid_date,
    is_valid_email,
    is_valid_phone,
    is_valid_ssn,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from mortgage_actions.domain.model import ActionParams


@dataclass(slots=True)
class RuleFindings:
    errors: list[str] = field(default_factory=list[str])
    warnings: list[str] = field(default_factory=list[str])


type RuleSet = Callable[[ActionParams, RuleFindings], None]


def check_client(params: ActionParams, findings: RuleFindings) -> None:
    if isinstance(params, AddClientParams):
        values = params.fields
    elif isinstance(params, UpdateClientParams):
        values = params.updates
    else:
        return

    if not is_valid_phone(values.phone):
        findings.errors.append(f"Invalid phone number format: {values.phone}")
    if not is_valid_email(values.email):
        findings.errors.append(f"Invalid email format: {values.email}")
    if not is_valid_ssn(values.ssn):
        findings.errors.append(f"Invalid SSN format: {values.ssn}")
    if not is_valid_date(values.dob):
        findings.errors.append(f"Invalid date of birth format: {values.dob}")

    if isinstance(params, AddClientParams) and not values.first_name and not values.last_name:
        findings.warnings.append("Client should have at least firstName or lastName")


def check_employment(params: ActionParams, findings: RuleFindings) -> None:
    if not isinstance(params, UpdateEmploymentRecordParams):
        return
    updates = params.updates

    if not is_valid_date(updates.start_date):
        findings.errors.append(f"Invalid start date format: {updates.start_date}")
    if not is_valid_date(updates.end_date):
        findings.errors.append(f"Invalid end date format: {updates.end_date}")
    if not is_ordered_range(updates.start_date, updates.end_date):
        findings.errors.append("End date cannot be before start date")
    if not is_valid_phone(updates.phone_number):
        findings.errors.append(f"Invalid employer phone number format: {updates.phone_number}")
    if not is_non_negative(updates.gross_monthly_income):
        findings.errors.append("Gross monthly income cannot be negative")


def check_active_income(params: ActionParams, findings: RuleFindings) -> None:
    if not isinstance(params, UpdateActiveIncomeParams):
        return
    updates = params.updates

    for label, amount in (
        ("Monthly amount", updates.monthly_amount),
        ("Bonus", updates.bonus),
        ("Commissions", updates.commissions),
        ("Overtime", updates.overtime),
    ):
        if not is_non_negative(amount):
            findings.errors.append(f"{label} cannot be negative")


def check_asset(params: ActionParams, findings: RuleFindings) -> None:
    if isinstance(params, UpdateAssetParams) and not is_non_negative(params.updates.amount):
        findings.errors.append("Asset amount cannot be negative")


def check_real_estate(params: ActionParams, findings: RuleFindings) -> None:
    if not isinstance(params, UpdateRealEstateRecordParams):
        return
    updates = params.updates

    for label, amount in (
        ("Property value", updates.property_value),
        ("Monthly taxes", updates.monthly_taxes),
        ("Monthly insurance", updates.monthly_insurance),
    ):
        if not is_non_negative(amount):
            findings.errors.append(f"{label} cannot be negative")


def check_address(params: ActionParams, findings: RuleFindings) -> None:
    if isinstance(params, UpdateAddressDataParams):
        addr = params.data.addr
        if addr is not None and is_blank(addr.address1):
            findings.errors.append("Address1 cannot be empty")
        return

    if not isinstance(params, AddFormerAddressParams):
        return
    address = params.address
    if not is_valid_date(address.from_date):
        findings.errors.append(f"Invalid from date format: {address.from_date}")
    if not is_valid_date(address.to_date):
        findings.errors.append(f"Invalid to date format: {address.to_date}")
    if not is_ordered_range(address.from_date, address.to_date):
        findings.errors.append("To date cannot be before from date")
    if address.addr is not None and is_blank(address.addr.address1):
        findings.errors.append("Address1 cannot be empty")


RULE_SETS: dict[ActionKind, RuleSet] = {
    ActionKind.ADD_CLIENT: check_client,
    ActionKind.UPDATE_CLIENT: check_client,
    ActionKind.UPDATE_EMPLOYMENT_RECORD: check_employment,
    ActionKind.UPDATE_ACTIVE_INCOME: check_active_income,
    ActionKind.UPDATE_ASSET: check_asset,
    ActionKind.UPDATE_REAL_ESTATE_RECORD: check_real_estate,
    ActionKind.UPDATE_ADDRESS_DATA: check_address,
    ActionKind.ADD_FORMER_ADDRESS: check_address,
}
