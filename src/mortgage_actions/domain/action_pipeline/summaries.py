"""Human-readable one-line descriptions of applied mutations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from mortgage_actions.domain.model import (
    ActionKind,
    AddFormerAddressParams,
    ChangeType,
    UpdateAddressDataParams,
    provided_fields,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mortgage_actions.domain.model import ActionParams


@dataclass(frozen=True, slots=True)
class ChangeSummary:
    description: str
    type: ChangeType
    field: str
    client_name: str | None = None
    updates: Mapping[str, Any] = field(default_factory=dict[str, Any])
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True, slots=True)
class _Template:
    description: str
    type: ChangeType
    field: str
    updates_attr: str | None = None


_TEMPLATES: dict[ActionKind, _Template] = {
    ActionKind.ADD_CLIENT: _Template("Added new client", ChangeType.CLIENT, "client", "fields"),
    ActionKind.UPDATE_CLIENT: _Template("Updated {name}", ChangeType.CLIENT, "client", "updates"),
    ActionKind.ADD_EMPLOYMENT_RECORD: _Template(
        "Added employment record for {name}", ChangeType.EMPLOYMENT, "employment"
    ),
    ActionKind.UPDATE_EMPLOYMENT_RECORD: _Template(
        "Updated employment for {name}", ChangeType.EMPLOYMENT, "employment", "updates"
    ),
    ActionKind.ADD_ACTIVE_INCOME: _Template(
        "Added income record for {name}", ChangeType.INCOME, "income"
    ),
    ActionKind.UPDATE_ACTIVE_INCOME: _Template(
        "Updated income for {name}", ChangeType.INCOME, "income", "updates"
    ),
    ActionKind.ADD_REAL_ESTATE_RECORD: _Template(
        "Added new real estate property", ChangeType.REAL_ESTATE, "real-estate"
    ),
    ActionKind.UPDATE_REAL_ESTATE_RECORD: _Template(
        "Updated property: {fields}", ChangeType.REAL_ESTATE, "{fields}", "updates"
    ),
    ActionKind.ADD_ASSET: _Template("Added asset for {name}", ChangeType.ASSET, "assets"),
    ActionKind.UPDATE_ASSET: _Template(
        "Updated asset for {name}", ChangeType.ASSET, "assets", "updates"
    ),
    ActionKind.SET_SHARED_OWNERS: _Template(
        "Marked asset as joint/shared ownership", ChangeType.ASSET, "assets"
    ),
    ActionKind.UPDATE_ADDRESS_DATA: _Template(
        "Updated address for {name}", ChangeType.ADDRESS, "address"
    ),
    ActionKind.ADD_FORMER_ADDRESS: _Template(
        "Added former address for {name}", ChangeType.ADDRESS, "address"
    ),
}


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def camel_case_fields(values: object) -> dict[str, Any]:
    """Return the provided fields of a field set keyed by their wire names."""

    return {camel_case(key): value for key, value in provided_fields(values).items()}


def summarize(params: ActionParams, *, client_name: str) -> ChangeSummary:
    """Build the summary for an applied action from its resolved ``params``.

    Raises ``KeyError`` for kinds without a template (unrecognized actions).
    """

    template = _TEMPLATES[params.kind]
    updates: dict[str, Any] = {}
    if template.updates_attr is not None:
        updates = camel_case_fields(getattr(params, template.updates_attr))
    elif isinstance(params, UpdateAddressDataParams | AddFormerAddressParams):
        updates = {"address": _address_line(params)}
    field_names = ", ".join(updates)
    return ChangeSummary(
        description=template.description.format(name=client_name, fields=field_names),
        type=template.type,
        field=template.field.format(fields=field_names),
        client_name=client_name,
        updates=updates,
    )


def _address_line(params: UpdateAddressDataParams | AddFormerAddressParams) -> str:
    addr = params.data.addr if isinstance(params, UpdateAddressDataParams) else params.address.addr
    return addr.display_line() if addr is not None else ""
